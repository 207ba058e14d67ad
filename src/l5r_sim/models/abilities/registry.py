"""Per-card ability registry and its zone bookkeeping."""

from typing import Callable, FrozenSet, Optional, Tuple

from ..constants import CardType, DECK_LOCATIONS, DeckSide, Location
from .ability_builder import AbilityBuilder
from .card_ability import CardAction
from .descriptors import ActionSpec, PersistentEffectSpec, PlayActionSpec, TriggeredAbilitySpec
from .persistent_effect import PersistentEffect
from .play_action import DynastyCardAction, PlayAction
from .triggered_ability import TriggeredAbility
from ...errors import CardConfigurationError
from ...utils.logging_config import get_game_logger

logger = get_game_logger(__name__)


class AbilityRegistry:
    """The abilities of one card, fixed after construction.

    The sequences never change. What changes with the card's zone is which
    triggered abilities hold event-bus handles and which persistent effects
    hold engine refs; the ``sync_*`` methods recompute the desired set for the
    current zone and apply only the difference.
    """

    def __init__(self, card, actions: Tuple[CardAction, ...] = (),
                 reactions: Tuple[TriggeredAbility, ...] = (),
                 persistent_effects: Tuple[PersistentEffect, ...] = (),
                 play_actions: Tuple[PlayAction, ...] = ()):
        self.card = card
        self.actions = tuple(actions)
        self.reactions = tuple(reactions)
        self.persistent_effects = tuple(persistent_effects)
        self.play_actions = tuple(play_actions)

    @classmethod
    def from_setup(cls, card, setup: Optional[Callable[[AbilityBuilder], None]]) -> "AbilityRegistry":
        """Run a card's setup routine and build the runtime abilities it declared.

        Raises:
            CardConfigurationError: If a declaration is invalid for this card.
        """
        builder = AbilityBuilder()
        if setup is not None:
            setup(builder)

        actions, reactions, effects, play_actions = [], [], [], []
        for descriptor in builder.build():
            if isinstance(descriptor, ActionSpec):
                actions.append(CardAction(card, descriptor))
            elif isinstance(descriptor, TriggeredAbilitySpec):
                reactions.append(TriggeredAbility(card, descriptor))
            elif isinstance(descriptor, PersistentEffectSpec):
                effects.append(PersistentEffect(card, descriptor))
            elif isinstance(descriptor, PlayActionSpec):
                play_actions.append(PlayAction.from_spec(card, descriptor))
            else:
                raise CardConfigurationError(f"Unknown ability declaration on {card.name}: {descriptor!r}")

        if card.type is CardType.CHARACTER and card.definition.side is DeckSide.DYNASTY:
            play_actions.append(DynastyCardAction(card))

        return cls(card, actions, reactions, effects, play_actions)

    def should_register(self, reaction: TriggeredAbility, location: Optional[Location]) -> bool:
        """Check if a triggered ability listens for events with the card in ``location``."""
        if location not in reaction.location:
            return False
        # Events sent back to a deck must not react to their own resolution
        return not (self.card.type is CardType.EVENT and location in DECK_LOCATIONS)

    def sync_triggered_abilities(self, event_manager) -> None:
        """Register or release triggered abilities to match the card's current zone."""
        location = self.card.location
        for reaction in self.reactions:
            wanted = self.should_register(reaction, location)
            if wanted and not reaction.is_registered:
                reaction.register_events(event_manager)
            elif not wanted and reaction.is_registered:
                reaction.unregister_events()

    def sync_persistent_effects(self, effect_engine) -> None:
        """Apply or remove zone-scoped persistent effects to match the card's current zone."""
        location = self.card.location
        for effect in self.persistent_effects:
            if effect.location is Location.ANY:
                continue
            if effect.is_in_scope(location):
                effect.apply(effect_engine)
            else:
                effect.remove(effect_engine)

    def apply_any_location_effects(self, effect_engine) -> None:
        """Apply the effects that work in every zone. Called once when the card is created."""
        for effect in self.persistent_effects:
            if effect.location is Location.ANY:
                effect.apply(effect_engine)

    def reset_limits(self) -> None:
        for ability in self.actions + self.reactions:
            ability.limit.reset()

    @property
    def subscription_handles(self) -> FrozenSet[int]:
        """Event-bus handles currently held by this card's triggered abilities."""
        return frozenset(handle for reaction in self.reactions for handle in reaction.handles.values())

    @property
    def applied_refs(self) -> FrozenSet[int]:
        """Effect-engine refs currently held by this card's persistent effects."""
        return frozenset(effect.ref for effect in self.persistent_effects if effect.is_applied)
