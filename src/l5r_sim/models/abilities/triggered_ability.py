"""Reactions and interrupts that listen for game events."""

from typing import Dict, Optional

from ..constants import AbilityType, EventName, FORCED_ABILITY_TYPES
from .ability_context import AbilityContext
from .card_ability import CardAbility
from ...utils.logging_config import get_game_logger

logger = get_game_logger(__name__)


class TriggeredAbility(CardAbility):
    """A triggered ability of a card.

    The ability holds one event-bus handle per event it listens for while the
    card is in one of its zones. Registration only makes the ability a
    candidate; the event window decides whether it resolves.
    """

    def __init__(self, card, spec):
        super().__init__(card, spec)
        self.ability_type: AbilityType = spec.kind
        self.when = spec.when
        self.handles: Dict[EventName, int] = {}
        self._event_manager = None

    @property
    def is_forced(self) -> bool:
        return self.ability_type in FORCED_ABILITY_TYPES

    @property
    def is_registered(self) -> bool:
        return bool(self.handles)

    def matches_event(self, event, context: Optional[AbilityContext] = None) -> bool:
        """Check the ability's ``when`` predicate for an event."""
        predicate = self.when.get(event.name)
        if predicate is None:
            return False
        context = context or self.create_context(event=event)
        return bool(predicate(event, context))

    def register_events(self, event_manager) -> None:
        """Subscribe to every event in ``when``. Does nothing if already subscribed."""
        if self.is_registered:
            return
        self._event_manager = event_manager
        for event_name in self.when:
            self.handles[event_name] = event_manager.register_ability(event_name, self)

    def unregister_events(self) -> None:
        """Release every held subscription."""
        if not self.is_registered:
            return
        for handle in self.handles.values():
            self._event_manager.unsubscribe(handle)
        logger.debug("Unregistered %s (%d handle(s))", self, len(self.handles))
        self.handles = {}
        self._event_manager = None
