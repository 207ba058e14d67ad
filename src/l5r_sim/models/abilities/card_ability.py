"""Runtime card abilities: shared requirement checks and action abilities."""

from typing import Any, FrozenSet, List

from ..constants import (
    AbilityType, CardType, Location, PROVINCE_LOCATIONS, TargetController
)
from .ability_context import AbilityContext
from .ability_limit import AbilityLimit
from ...utils.logging_config import get_game_logger

logger = get_game_logger(__name__)

PROVINCE_CARD_TYPES = frozenset({CardType.PROVINCE, CardType.HOLDING, CardType.STRONGHOLD})


def default_ability_locations(card) -> FrozenSet[Location]:
    """Zones in which a card's abilities work when the card does not say otherwise."""
    if card.type is CardType.EVENT:
        return frozenset({Location.HAND})
    if card.type in PROVINCE_CARD_TYPES:
        return PROVINCE_LOCATIONS
    return frozenset({Location.PLAY_AREA})


class CardAbility:
    """An ability printed on a card, built from its declaration."""

    ability_type = AbilityType.ACTION

    def __init__(self, card, spec):
        self.card = card
        self.title = spec.title
        self.condition = spec.condition
        self.game_action = spec.game_action
        self.handler = spec.handler
        self.target_spec = spec.target
        self.limit = AbilityLimit(spec.limit)
        self.location: FrozenSet[Location] = spec.location or default_ability_locations(card)

    @property
    def game(self):
        return self.card.game

    @property
    def is_triggered_ability(self) -> bool:
        return self.ability_type is not AbilityType.ACTION

    def create_context(self, player=None, event=None) -> AbilityContext:
        """Context for using this ability on behalf of a player (the controller by default)."""
        return AbilityContext(
            game=self.game,
            source=self.card,
            player=player if player is not None else self.card.controller,
            ability=self,
            event=event,
        )

    def is_in_valid_location(self) -> bool:
        return self.card.location in self.location

    def meets_requirements(self, context: AbilityContext) -> bool:
        """Check if the ability can be used right now.

        Conditions are evaluated at the moment of use, never cached.
        """
        if not self.is_in_valid_location():
            return False
        if not self.card.can_trigger_abilities(context):
            return False
        if self.limit.is_at_max(self.card.get_modified_limit_max):
            return False
        if self.condition is not None and not self.condition(context):
            return False
        if self.target_spec is not None:
            return bool(self.get_legal_targets(context))
        if self.game_action is not None and self.handler is None:
            return self.game_action.has_legal_target(context)
        return True

    def get_legal_targets(self, context: AbilityContext) -> List[Any]:
        """Cards the ability's target declaration accepts, in game order."""
        spec = self.target_spec
        if spec is None:
            return []

        locations = PROVINCE_LOCATIONS if spec.location is Location.PROVINCES else {spec.location}
        targets = []
        for card in self.game.all_cards():
            if card.location not in locations:
                continue
            if spec.card_type is not None and card.type is not spec.card_type:
                continue
            if spec.controller is TargetController.SELF and card.controller is not context.player:
                continue
            if spec.controller is TargetController.OPPONENT and card.controller is context.player:
                continue
            if spec.card_condition is not None and not spec.card_condition(card, context):
                continue
            if spec.game_action is not None and not spec.game_action.can_affect(card, context.copy(target=card)):
                continue
            targets.append(card)
        return targets

    def execute(self, context: AbilityContext) -> None:
        """Resolve the ability's effects."""
        logger.info("Resolving %s for %s", self, context.player)
        if self.game_action is not None:
            self.game_action.resolve(context)
        if self.target_spec is not None and self.target_spec.game_action is not None and context.target is not None:
            self.target_spec.game_action.resolve(context)
        if self.handler is not None:
            self.handler(context)

    def __str__(self) -> str:
        return f"{self.card.name}: {self.title}"


class CardAction(CardAbility):
    """An action ability; only the card's controller may use it."""

    ability_type = AbilityType.ACTION

    def meets_requirements(self, context: AbilityContext) -> bool:
        if context.player is not self.card.controller:
            return False
        return super().meets_requirements(context)

    def is_playable_by(self, player) -> bool:
        """Check if a player can use this action right now."""
        return self.meets_requirements(self.create_context(player))
