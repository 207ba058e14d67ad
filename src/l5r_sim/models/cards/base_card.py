"""The card entity: zone transitions, tokens, effect queries and state projection."""

from typing import Any, Dict, List, Optional, Union

from ..abilities.ability_context import AbilityContext
from ..abilities.registry import AbilityRegistry
from ..constants import (
    CardCapability, CardType, DeckSide, EffectName, EventName, FACEUP_LOCATIONS, Location,
    MENU_LOCATIONS, PROVINCE_LOCATIONS, Token
)
from .card_definition import CardDefinition
from ...utils.logging_config import get_game_logger

logger = get_game_logger(__name__)

TokenKind = Union[Token, str]


def _token_key(kind: TokenKind) -> str:
    return kind.value if isinstance(kind, Token) else kind


class BaseCard:
    """A card instance in a game.

    One flat entity serves every printed type. Type-specific behaviour is
    driven by the definition's capabilities rather than by subclasses.
    """

    def __init__(self, owner, definition: CardDefinition):
        self.owner = owner
        self.controller = owner
        self.game = owner.game
        self.definition = definition
        self.uuid: str = self.game.next_uuid()

        self.id = definition.id
        self.name = definition.name
        self.type = definition.type
        self.traits = definition.traits
        self.printed_faction = definition.clan

        # Zone and visibility
        self.location: Optional[Location] = None
        self.facedown = False
        self.bowed = False
        self.in_conflict = False
        self.broken = False

        # Counters and attachments
        self.tokens: Dict[str, int] = {}
        self.parent: Optional["BaseCard"] = None
        self.attachments: List["BaseCard"] = []

        # Manual-mode presentation
        self.menu = tuple(definition.menu)
        self.show_popup = False
        self.popup_menu_text = ""

        self.abilities = AbilityRegistry.from_setup(self, definition.setup)

    # Zone transitions

    def move_to(self, target_location: Location) -> None:
        """Move the card, keeping ability registrations and effects in step with its zone."""
        original_location = self.location
        if original_location is target_location:
            return

        self.location = target_location
        if target_location in FACEUP_LOCATIONS:
            self.facedown = False

        self.update_ability_events(original_location, target_location)
        self.update_effects(original_location, target_location)
        logger.debug("%s moved from %s to %s", self,
                     getattr(original_location, 'value', None), target_location.value)
        self.game.emit_event(EventName.ON_CARD_MOVED, card=self,
                             original_location=original_location, new_location=target_location)

    def update_ability_events(self, from_location: Optional[Location], to_location: Location) -> None:
        self.abilities.sync_triggered_abilities(self.game.event_manager)

    def update_effects(self, from_location: Optional[Location], to_location: Location) -> None:
        """Remove lasting effects when the card stops being in play, then sync persistent effects."""
        left_play = from_location is Location.PLAY_AREA
        holding_left_province = (self.type is CardType.HOLDING and from_location in PROVINCE_LOCATIONS
                                 and to_location not in PROVINCE_LOCATIONS)
        if left_play or holding_left_province:
            self.game.effect_engine.remove_lasting_effects(self)
        self.abilities.sync_persistent_effects(self.game.effect_engine)

    def apply_any_location_persistent_effects(self) -> None:
        self.abilities.apply_any_location_effects(self.game.effect_engine)

    def leaves_play(self) -> None:
        """Reset round-scoped state when the card leaves the play area."""
        self.tokens = {}
        self.abilities.reset_limits()
        self.controller = self.owner
        self.bowed = False
        if self.in_conflict and self.game.current_conflict is not None:
            self.game.current_conflict.remove_from_conflict(self)
        self.in_conflict = False

    # Tokens

    def add_token(self, kind: TokenKind, number: int = 1) -> None:
        key = _token_key(kind)
        self.tokens[key] = self.tokens.get(key, 0) + number

    def has_token(self, kind: TokenKind) -> bool:
        return bool(self.tokens.get(_token_key(kind)))

    def remove_token(self, kind: TokenKind, number: int = 1) -> None:
        """Remove tokens, flooring at zero. An emptied entry is deleted."""
        key = _token_key(kind)
        remaining = max(0, self.tokens.get(key, 0) - number)
        if remaining:
            self.tokens[key] = remaining
        else:
            self.tokens.pop(key, None)

    def get_token_count(self, kind: TokenKind) -> int:
        return self.tokens.get(_token_key(kind), 0)

    # Effect queries

    def get_effects(self, name: EffectName) -> List[Any]:
        return self.game.effect_engine.get_effects(name, self)

    def sum_effects(self, name: EffectName) -> int:
        return self.game.effect_engine.sum_effects(name, self)

    def any_effect(self, name: EffectName) -> bool:
        return self.game.effect_engine.any_effect(name, self)

    # Identity

    def get_type(self) -> CardType:
        return self.type

    def has_trait(self, trait: str) -> bool:
        trait = trait.lower()
        return trait in self.traits or trait in self.get_effects(EffectName.ADD_TRAIT)

    def get_traits(self) -> List[str]:
        """Printed and added traits, without duplicates."""
        traits = []
        for trait in list(self.traits) + self.get_effects(EffectName.ADD_TRAIT):
            if trait not in traits:
                traits.append(trait)
        return traits

    def is_faction(self, faction: str) -> bool:
        faction = faction.lower()
        if faction == 'neutral':
            return self.printed_faction == faction and not self.any_effect(EffectName.ADD_FACTION)
        return self.printed_faction == faction or faction in self.get_effects(EffectName.ADD_FACTION)

    def get_printed_faction(self) -> str:
        return self.definition.clan

    def is_unique(self) -> bool:
        return self.definition.unicity

    def is_blank(self) -> bool:
        return self.any_effect(EffectName.BLANK)

    @property
    def cost(self) -> int:
        return self.definition.cost

    @property
    def is_province(self) -> bool:
        return self.type is CardType.PROVINCE

    @property
    def is_stronghold(self) -> bool:
        return self.type is CardType.STRONGHOLD

    @property
    def is_dynasty(self) -> bool:
        return self.definition.side is DeckSide.DYNASTY

    @property
    def is_conflict(self) -> bool:
        return self.definition.side is DeckSide.CONFLICT

    @property
    def discard_location(self) -> Location:
        if self.is_dynasty:
            return Location.DYNASTY_DISCARD_PILE
        return Location.CONFLICT_DISCARD_PILE

    # Rules queries

    def check_restrictions(self, action_type: str, context: Optional[AbilityContext] = None) -> bool:
        """Check that neither this card nor its controller is forbidden from an action."""
        for restriction in self.get_effects(EffectName.RESTRICT):
            if restriction.is_match(action_type, context):
                return False
        return self.controller.check_restrictions(action_type, context)

    def can_trigger_abilities(self, context: AbilityContext) -> bool:
        if self.facedown or self.is_blank():
            return False
        if not self.definition.has_capability(CardCapability.TRIGGERABLE):
            return False
        ability = context.ability
        is_triggered = ability is not None and getattr(ability, 'is_triggered_ability', False)
        return self.check_restrictions('triggerAbilities', context) or not is_triggered

    def get_modified_limit_max(self, max_uses: int) -> int:
        return self.sum_effects(EffectName.INCREASE_LIMIT_ON_ABILITIES) + max_uses

    def readies_during_ready_phase(self) -> bool:
        return not self.any_effect(EffectName.DOES_NOT_READY)

    def hide_when_facedown(self) -> bool:
        return not self.any_effect(EffectName.CAN_BE_SEEN_WHEN_FACEDOWN)

    def get_glory(self) -> int:
        """Glory after modifiers. Cards without glory always report 0."""
        if not self.definition.has_capability(CardCapability.HAS_GLORY):
            return 0
        return max(0, self.definition.glory + self.sum_effects(EffectName.MODIFY_GLORY))

    def get_military_skill(self) -> Optional[int]:
        if self.definition.military is None:
            return None
        return max(0, self.definition.military + self.sum_effects(EffectName.MODIFY_MILITARY_SKILL))

    def get_political_skill(self) -> Optional[int]:
        if self.definition.political is None:
            return None
        return max(0, self.definition.political + self.sum_effects(EffectName.MODIFY_POLITICAL_SKILL))

    def get_province_strength_bonus(self) -> int:
        """Strength a face-up holding adds to the province it sits in."""
        if self.facedown or not self.definition.has_capability(CardCapability.PROVINCE_STRENGTH):
            return 0
        return self.definition.strength_bonus

    def get_strength(self) -> int:
        """Province strength including modifiers and holdings in the same province."""
        if not self.is_province:
            return 0
        holdings = sum(card.get_province_strength_bonus()
                       for card in self.controller.card_pile(self.location) if card is not self)
        return max(0, self.definition.province_strength
                   + self.sum_effects(EffectName.MODIFY_PROVINCE_STRENGTH) + holdings)

    def can_attach(self, target: "BaseCard", context: Optional[AbilityContext] = None) -> bool:
        """Check if this card may be attached to ``target``."""
        if not self.definition.has_capability(CardCapability.ATTACHABLE):
            return False
        if target is self or target.type is not CardType.CHARACTER or target.location is not Location.PLAY_AREA:
            return False
        if self.definition.can_attach is not None:
            return bool(self.definition.can_attach(self, target, context))
        return True

    # Conflict

    def is_attacking(self) -> bool:
        conflict = self.game.current_conflict
        return bool(conflict and conflict.is_attacking(self))

    def is_defending(self) -> bool:
        conflict = self.game.current_conflict
        return bool(conflict and conflict.is_defending(self))

    def is_participating(self) -> bool:
        conflict = self.game.current_conflict
        return bool(conflict and conflict.is_participating(self))

    # State changes used by game actions

    def bow(self) -> None:
        self.bowed = True

    def ready(self) -> None:
        self.bowed = False

    # Abilities

    def create_context(self, player=None) -> AbilityContext:
        return AbilityContext(game=self.game, source=self, player=player if player is not None else self.controller)

    def get_actions(self) -> list:
        return list(self.abilities.actions)

    def get_playable_abilities(self, player) -> list:
        """Actions and play actions the player could use on this card right now."""
        abilities = list(self.abilities.actions) + list(self.abilities.play_actions)
        return [ability for ability in abilities if ability.is_playable_by(player)]

    # Presentation

    def get_menu(self) -> Optional[List[Dict[str, str]]]:
        """Manual-mode commands offered for this card, or None when it has no menu."""
        if not self.menu or not self.game.settings.manual_mode or self.location not in MENU_LOCATIONS:
            return None

        if self.facedown:
            return [{'command': 'reveal', 'text': 'Reveal'}]

        menu = [{'command': 'click', 'text': 'Select Card'}]
        if self.location is Location.PLAY_AREA or self.is_province or self.is_stronghold:
            menu.extend(item.to_dict() for item in self.menu)
        return menu

    def get_short_summary(self) -> Dict[str, Any]:
        return {
            'facedown': False,
            'id': self.id,
            'name': self.name,
            'type': self.type.value,
            'uuid': self.uuid,
        }

    def get_short_summary_for_controls(self, active_player) -> Dict[str, Any]:
        if self.facedown and (active_player is not self.controller or self.hide_when_facedown()):
            return {'facedown': True, 'isDynasty': self.is_dynasty, 'isConflict': self.is_conflict}
        return self.get_short_summary()

    def get_summary(self, active_player, hide_when_faceup: bool = False) -> Dict[str, Any]:
        """Project the card's state as seen by ``active_player``."""
        is_active_player = active_player is self.controller
        selection_state = active_player.get_card_selection_state(self)

        if is_active_player:
            hidden = self.facedown and self.hide_when_facedown()
        else:
            hidden = self.facedown or hide_when_faceup or self.any_effect(EffectName.HIDE_WHEN_FACE_UP)

        if hidden:
            state = {
                'controller': self.controller.name,
                'facedown': True,
                'inConflict': self.in_conflict,
                'location': self.location.value if self.location else None,
            }
            state.update(selection_state)
            return state

        state = {
            'id': self.id,
            'controlled': self.owner is not self.controller,
            'inConflict': self.in_conflict,
            'facedown': self.facedown,
            'location': self.location.value if self.location else None,
            'menu': self.get_menu(),
            'name': self.name,
            'popupMenuText': self.popup_menu_text,
            'showPopup': self.show_popup,
            'tokens': dict(self.tokens),
            'type': self.type.value,
            'uuid': self.uuid,
        }
        state.update(selection_state)
        return state

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"BaseCard(id={self.id!r}, uuid={self.uuid!r}, location={getattr(self.location, 'value', None)!r})"
