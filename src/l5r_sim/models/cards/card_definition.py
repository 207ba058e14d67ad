"""Declarative card definitions consumed by the rules engine."""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, Optional, Tuple

from ..constants import CardCapability, CardType, DeckSide

# Capabilities each printed type has unless a definition lists its own
DEFAULT_CAPABILITIES: Dict[CardType, FrozenSet[CardCapability]] = {
    CardType.CHARACTER: frozenset({CardCapability.TRIGGERABLE, CardCapability.HAS_GLORY}),
    CardType.ATTACHMENT: frozenset({CardCapability.TRIGGERABLE, CardCapability.ATTACHABLE}),
    CardType.EVENT: frozenset({CardCapability.TRIGGERABLE}),
    CardType.HOLDING: frozenset({CardCapability.TRIGGERABLE, CardCapability.PROVINCE_STRENGTH}),
    CardType.PROVINCE: frozenset({CardCapability.TRIGGERABLE}),
    CardType.STRONGHOLD: frozenset({CardCapability.TRIGGERABLE}),
    CardType.ROLE: frozenset(),
}

DEFAULT_SIDES: Dict[CardType, Optional[DeckSide]] = {
    CardType.CHARACTER: DeckSide.DYNASTY,
    CardType.HOLDING: DeckSide.DYNASTY,
    CardType.ATTACHMENT: DeckSide.CONFLICT,
    CardType.EVENT: DeckSide.CONFLICT,
}


@dataclass(frozen=True)
class MenuItem:
    """A manual-mode command offered on a card."""
    command: str
    text: str

    def to_dict(self) -> Dict[str, str]:
        return {'command': self.command, 'text': self.text}


DEFAULT_MENUS: Dict[CardType, Tuple[MenuItem, ...]] = {
    CardType.CHARACTER: (
        MenuItem('bow', 'Bow/Ready'),
        MenuItem('addfate', 'Add 1 fate'),
        MenuItem('remfate', 'Remove 1 fate'),
        MenuItem('move', 'Move into/out of conflict'),
        MenuItem('control', 'Give control'),
    ),
    CardType.ATTACHMENT: (
        MenuItem('bow', 'Bow/Ready'),
        MenuItem('control', 'Give control'),
    ),
    CardType.HOLDING: (),
    CardType.PROVINCE: (
        MenuItem('break', 'Break/unbreak this province'),
    ),
    CardType.STRONGHOLD: (
        MenuItem('bow', 'Bow/Ready'),
    ),
    CardType.EVENT: (),
    CardType.ROLE: (),
}


@dataclass
class CardDefinition:
    """Printed data of a card plus the setup routine that declares its abilities.

    ``can_attach`` is an extra legality check ``(attachment, target, context)``
    applied on top of the default attachment rules.
    """

    # Core Identity
    id: str
    name: str
    type: CardType
    clan: str = "neutral"
    traits: Tuple[str, ...] = ()
    side: Optional[DeckSide] = None
    unicity: bool = False

    # Game Properties
    cost: int = 0
    glory: int = 0
    military: Optional[int] = None
    political: Optional[int] = None
    fate: int = 0                # Stronghold fate collected each dynasty phase
    strength_bonus: int = 0      # Holding bonus to its province
    province_strength: int = 0

    # Behaviour
    menu: Optional[Tuple[MenuItem, ...]] = None
    capabilities: Optional[FrozenSet[CardCapability]] = None
    setup: Optional[Callable[[Any], None]] = field(default=None, compare=False)
    can_attach: Optional[Callable[[Any, Any, Any], bool]] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Validate card data and fill type defaults."""
        if not self.id:
            raise ValueError("Card id cannot be empty")
        if not self.name:
            raise ValueError("Card name cannot be empty")
        if self.cost < 0:
            raise ValueError(f"Card cost cannot be negative: {self.cost}")
        self.traits = tuple(trait.lower() for trait in self.traits)
        self.clan = self.clan.lower()
        if self.side is None:
            self.side = DEFAULT_SIDES.get(self.type)
        if self.menu is None:
            self.menu = DEFAULT_MENUS[self.type]
        if self.capabilities is None:
            self.capabilities = DEFAULT_CAPABILITIES[self.type]

    def has_capability(self, capability: CardCapability) -> bool:
        return capability in self.capabilities

    def __str__(self) -> str:
        return self.name
