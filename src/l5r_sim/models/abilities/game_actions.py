"""Game actions: the verbs card abilities are built from.

Every game action resolves through an event window, so interrupts can
cancel it and reactions can respond to it.
"""

from typing import Any, Callable, List, Optional, Union

from ..constants import CardType, Duration, EventName, Location, Token
from .ability_context import AbilityContext
from .effects import EffectSpec
from ...utils.logging_config import get_game_logger

logger = get_game_logger(__name__)

TargetResolver = Union[Callable[[AbilityContext], Any], Any, None]


class GameAction:
    """Base class for game actions."""

    name = "gameAction"
    event_name: EventName = EventName.ON_EFFECT_APPLIED

    def __init__(self, target: TargetResolver = None):
        self._target = target

    def default_targets(self, context: AbilityContext) -> Any:
        """Targets used when the action was not given any."""
        return context.target if context.target is not None else context.source

    def get_targets(self, context: AbilityContext) -> List[Any]:
        """Resolve the action's targets for a context."""
        if self._target is None:
            value = self.default_targets(context)
        elif callable(self._target):
            value = self._target(context)
        else:
            value = self._target

        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return list(value)
        return [value]

    def can_affect(self, target: Any, context: AbilityContext) -> bool:
        """Check if the action can change this target."""
        return True

    def has_legal_target(self, context: AbilityContext) -> bool:
        """Check if at least one target can be affected."""
        return any(self.can_affect(target, context) for target in self.get_targets(context))

    def get_events(self, context: AbilityContext) -> List[Any]:
        """Create one event per affected target."""
        return [self.create_event(target, context)
                for target in self.get_targets(context) if self.can_affect(target, context)]

    def create_event(self, target: Any, context: AbilityContext):
        from ...engine.event_system import Event
        return Event(self.event_name, {'card': target, 'context': context}, handler=self._handle)

    def resolve(self, context: AbilityContext) -> List[Any]:
        """Open an event window for this action's events."""
        events = self.get_events(context)
        if events:
            context.game.open_event_window(events)
        return events

    def _handle(self, event) -> None:
        """Primary effect of the event, skipped if the target became illegal meanwhile."""
        target = event.get('player') if event.get('player') is not None else event.card
        if not self.can_affect(target, event.context):
            logger.debug("%s no longer affects %s", self.name, target)
            return
        self.event_handler(event)

    def event_handler(self, event) -> None:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.name


class CardGameAction(GameAction):
    """A game action aimed at cards in play."""

    card_types = (CardType.CHARACTER, CardType.ATTACHMENT)
    locations = (Location.PLAY_AREA,)

    def can_affect(self, card: Any, context: AbilityContext) -> bool:
        if getattr(card, 'type', None) not in self.card_types:
            return False
        if card.location not in self.locations:
            return False
        return card.check_restrictions(self.name, context)


class PlayerAction(GameAction):
    """A game action aimed at players."""

    def default_targets(self, context: AbilityContext) -> Any:
        return context.player

    def can_affect(self, player: Any, context: AbilityContext) -> bool:
        return player is not None and player.check_restrictions(self.name, context)

    def create_event(self, target: Any, context: AbilityContext):
        from ...engine.event_system import Event
        return Event(self.event_name, {'player': target, 'context': context}, handler=self._handle)


class ReadyAction(CardGameAction):
    name = "ready"
    event_name = EventName.ON_CARD_READIED

    def can_affect(self, card, context) -> bool:
        return super().can_affect(card, context) and card.bowed

    def event_handler(self, event) -> None:
        event.card.ready()


class BowAction(CardGameAction):
    name = "bow"
    event_name = EventName.ON_CARD_BOWED

    def can_affect(self, card, context) -> bool:
        return super().can_affect(card, context) and not card.bowed

    def event_handler(self, event) -> None:
        event.card.bow()


class MoveToConflictAction(CardGameAction):
    name = "moveToConflict"
    event_name = EventName.ON_MOVE_TO_CONFLICT
    card_types = (CardType.CHARACTER,)

    def can_affect(self, card, context) -> bool:
        conflict = context.game.current_conflict
        if conflict is None or card.in_conflict:
            return False
        return super().can_affect(card, context)

    def event_handler(self, event) -> None:
        event.context.game.current_conflict.add_participant(event.card)


class DiscardFromPlayAction(CardGameAction):
    name = "discardFromPlay"
    event_name = EventName.ON_CARD_LEAVES_PLAY

    def event_handler(self, event) -> None:
        card = event.card
        card.controller.move_card(card, card.discard_location)


class PlaceFateAction(CardGameAction):
    name = "placeFate"
    event_name = EventName.ON_FATE_PLACED
    card_types = (CardType.CHARACTER,)

    def __init__(self, amount: int = 1, target: TargetResolver = None):
        super().__init__(target)
        self.amount = amount

    def create_event(self, target, context):
        event = super().create_event(target, context)
        event.params['amount'] = self.amount
        return event

    def event_handler(self, event) -> None:
        event.card.add_token(Token.FATE, event.get('amount'))


class RemoveFateAction(CardGameAction):
    name = "removeFate"
    event_name = EventName.ON_FATE_REMOVED
    card_types = (CardType.CHARACTER,)

    def __init__(self, amount: int = 1, target: TargetResolver = None):
        super().__init__(target)
        self.amount = amount

    def can_affect(self, card, context) -> bool:
        return super().can_affect(card, context) and card.has_token(Token.FATE)

    def create_event(self, target, context):
        event = super().create_event(target, context)
        event.params['amount'] = self.amount
        return event

    def event_handler(self, event) -> None:
        event.card.remove_token(Token.FATE, event.get('amount'))


class RevealAction(CardGameAction):
    name = "reveal"
    event_name = EventName.ON_CARD_REVEALED
    card_types = tuple(CardType)
    locations = tuple(Location)

    def can_affect(self, card, context) -> bool:
        return card.facedown and super().can_affect(card, context)

    def event_handler(self, event) -> None:
        event.card.facedown = False


class CardLastingEffectAction(CardGameAction):
    """Apply an effect to a card until the end of the conflict, phase or round."""

    name = "applyLastingEffect"
    event_name = EventName.ON_EFFECT_APPLIED

    def __init__(self, effect: EffectSpec, duration: Duration = Duration.UNTIL_END_OF_CONFLICT,
                 target: TargetResolver = None):
        if duration is Duration.PERSISTENT:
            raise ValueError("Lasting effects need a finite duration")
        super().__init__(target)
        self.effect = effect
        self.duration = duration

    def event_handler(self, event) -> None:
        from ...engine.effect_engine import Effect
        context = event.context
        context.game.effect_engine.apply(Effect(
            name=self.effect.name,
            value=self.effect.value,
            source=context.source,
            duration=self.duration,
            target=event.card,
        ))


class GainHonorAction(PlayerAction):
    name = "gainHonor"
    event_name = EventName.ON_MODIFY_HONOR

    def __init__(self, amount: int = 1, target: TargetResolver = None):
        super().__init__(target)
        self.amount = amount

    def create_event(self, target, context):
        event = super().create_event(target, context)
        event.params['amount'] = self.amount
        return event

    def event_handler(self, event) -> None:
        event.player.modify_honor(event.get('amount'))


class DrawAction(PlayerAction):
    name = "draw"
    event_name = EventName.ON_CARDS_DRAWN

    def __init__(self, amount: int = 1, target: TargetResolver = None):
        super().__init__(target)
        self.amount = amount

    def create_event(self, target, context):
        event = super().create_event(target, context)
        event.params['amount'] = self.amount
        return event

    def event_handler(self, event) -> None:
        event.player.draw_cards(event.get('amount'))


def ready(target: TargetResolver = None) -> ReadyAction:
    return ReadyAction(target)


def bow(target: TargetResolver = None) -> BowAction:
    return BowAction(target)


def move_to_conflict(target: TargetResolver = None) -> MoveToConflictAction:
    return MoveToConflictAction(target)


def discard_from_play(target: TargetResolver = None) -> DiscardFromPlayAction:
    return DiscardFromPlayAction(target)


def place_fate(amount: int = 1, target: TargetResolver = None) -> PlaceFateAction:
    return PlaceFateAction(amount, target)


def remove_fate(amount: int = 1, target: TargetResolver = None) -> RemoveFateAction:
    return RemoveFateAction(amount, target)


def reveal(target: TargetResolver = None) -> RevealAction:
    return RevealAction(target)


def card_lasting_effect(effect: EffectSpec, duration: Duration = Duration.UNTIL_END_OF_CONFLICT,
                        target: TargetResolver = None) -> CardLastingEffectAction:
    return CardLastingEffectAction(effect, duration, target)


def gain_honor(amount: int = 1, target: TargetResolver = None) -> GainHonorAction:
    return GainHonorAction(amount, target)


def draw(amount: int = 1, target: TargetResolver = None) -> DrawAction:
    return DrawAction(amount, target)
