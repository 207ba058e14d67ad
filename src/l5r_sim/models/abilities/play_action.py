"""Ways of playing a card from outside the play area."""

from typing import FrozenSet

from ..constants import CardType, DYNASTY_PROVINCES, EventName, Location, PhaseName
from .ability_context import AbilityContext
from .ability_limit import AbilityLimit
from ...utils.logging_config import get_game_logger

logger = get_game_logger(__name__)


class PlayAction:
    """A special play action declared by a card."""

    target_spec = None
    is_triggered_ability = False

    def __init__(self, card, title: str, condition=None, handler=None, game_action=None,
                 location: FrozenSet[Location] = frozenset({Location.HAND})):
        self.card = card
        self.title = title
        self.condition = condition
        self.handler = handler
        self.game_action = game_action
        self.location = location
        self.limit = AbilityLimit.unlimited()

    @classmethod
    def from_spec(cls, card, spec) -> "PlayAction":
        return cls(card, spec.title, condition=spec.condition, handler=spec.handler,
                   game_action=spec.game_action, location=spec.location)

    def create_context(self, player=None) -> AbilityContext:
        return AbilityContext(game=self.card.game, source=self.card,
                              player=player if player is not None else self.card.controller, ability=self)

    def meets_requirements(self, context: AbilityContext) -> bool:
        if context.player is not self.card.controller:
            return False
        if self.card.location not in self.location:
            return False
        return self.condition is None or bool(self.condition(context))

    def is_playable_by(self, player) -> bool:
        return self.meets_requirements(self.create_context(player))

    def execute(self, context: AbilityContext) -> None:
        logger.info("%s plays %s (%s)", context.player, self.card, self.title)
        if self.game_action is not None:
            self.game_action.resolve(context)
        if self.handler is not None:
            self.handler(context)

    def __str__(self) -> str:
        return f"{self.card.name}: {self.title}"


class DynastyCardAction(PlayAction):
    """Play a face-up character from a province during the dynasty phase by paying its cost in fate."""

    def __init__(self, card):
        super().__init__(card, "Play this character", location=frozenset(DYNASTY_PROVINCES))

    def meets_requirements(self, context: AbilityContext) -> bool:
        card = self.card
        if context.game.current_phase is not PhaseName.DYNASTY:
            return False
        if card.type is not CardType.CHARACTER or card.facedown:
            return False
        if not card.check_restrictions('play', context):
            return False
        return super().meets_requirements(context) and context.player.fate >= card.cost

    def execute(self, context: AbilityContext) -> None:
        card = self.card
        player = context.player
        player.fate -= card.cost
        logger.info("%s pays %d fate to play %s", player, card.cost, card)

        def enter_play(event) -> None:
            province = card.location
            player.move_card(card, Location.PLAY_AREA)
            player.replace_dynasty_card(province)

        context.game.raise_event(EventName.ON_CHARACTER_ENTERS_PLAY, handler=enter_play,
                                 card=card, context=context)
