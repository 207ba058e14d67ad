"""Event bus for game events and triggered-ability subscriptions."""

import itertools
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from ..models.constants import EventName
from ..utils.logging_config import get_game_logger

logger = get_game_logger(__name__)


@dataclass(eq=False)
class Event:
    """A game event, optionally carrying the primary effect it resolves."""
    name: EventName
    params: Dict[str, Any] = field(default_factory=dict)
    handler: Optional[Callable[['Event'], None]] = None
    cancelled: bool = False
    resolved: bool = False

    @property
    def card(self) -> Any:
        """The card this event is about, if any."""
        return self.params.get('card')

    @property
    def player(self) -> Any:
        """The player this event is about, if any."""
        return self.params.get('player')

    @property
    def context(self) -> Any:
        """The ability context that raised this event, if any."""
        return self.params.get('context')

    def get(self, key: str, default: Any = None) -> Any:
        """Read an event parameter."""
        return self.params.get(key, default)

    def cancel(self) -> None:
        """Stop this event's primary effect and reactions from happening."""
        self.cancelled = True

    def execute_handler(self) -> None:
        """Resolve the event's primary effect unless it was cancelled."""
        if self.cancelled:
            return
        if self.handler is not None:
            self.handler(self)
        self.resolved = True

    def to_dict(self) -> Dict[str, Any]:
        """Summarize the event for the game log."""
        data = {'event': self.name.value}
        for key, value in self.params.items():
            if key == 'context':
                continue
            data[key] = _log_value(value)
        return data


def _log_value(value: Any) -> Any:
    """Reduce event parameters to plain values."""
    if hasattr(value, 'uuid'):
        return value.uuid
    if hasattr(value, 'value') and not isinstance(value, (int, str)):
        return value.value
    if hasattr(value, 'name') and isinstance(getattr(value, 'name'), str):
        return value.name
    if value is None or isinstance(value, (int, float, str, dict, list, tuple)):
        return value
    return str(value)


@dataclass(frozen=True)
class Subscription:
    """Handle for one event subscription."""
    handle: int
    event_name: EventName
    listener: Any


class GameEventManager:
    """Publishes events to callbacks and tracks triggered abilities listening for events.

    Callbacks are notified synchronously on :meth:`publish`. Triggered abilities
    are not called directly; event windows ask for the abilities registered to
    an event name and decide whether and when they resolve.
    """

    def __init__(self):
        self._handles = itertools.count(1)
        self._callbacks: Dict[int, Subscription] = {}
        self._abilities: Dict[int, Subscription] = {}

    def subscribe(self, event_name: EventName, callback: Callable[[Event], None]) -> int:
        """Subscribe a callback to an event name."""
        handle = next(self._handles)
        self._callbacks[handle] = Subscription(handle, event_name, callback)
        return handle

    def register_ability(self, event_name: EventName, ability: Any) -> int:
        """Register a triggered ability as a candidate for an event name."""
        handle = next(self._handles)
        self._abilities[handle] = Subscription(handle, event_name, ability)
        logger.debug("Registered %s for %s (handle %d)", ability, event_name.value, handle)
        return handle

    def unsubscribe(self, handle: int) -> bool:
        """Remove a subscription. Unknown handles are ignored."""
        subscription = self._callbacks.pop(handle, None) or self._abilities.pop(handle, None)
        if subscription is None:
            return False
        logger.debug("Removed %s from %s (handle %d)",
                     subscription.listener, subscription.event_name.value, handle)
        return True

    def publish(self, event: Event) -> None:
        """Notify every callback subscribed to the event's name."""
        for subscription in list(self._callbacks.values()):
            if subscription.event_name is event.name:
                subscription.listener(event)

    def abilities_for(self, event_name: EventName) -> List[Any]:
        """Triggered abilities registered for an event name, in registration order."""
        abilities = []
        for subscription in self._abilities.values():
            if subscription.event_name is event_name and subscription.listener not in abilities:
                abilities.append(subscription.listener)
        return abilities

    def subscription_count(self, listener: Any) -> int:
        """Number of live subscriptions held by a listener."""
        return sum(
            1 for subscription in itertools.chain(self._callbacks.values(), self._abilities.values())
            if subscription.listener is listener
        )

    def is_registered(self, handle: int) -> bool:
        """Check if a handle is still live."""
        return handle in self._callbacks or handle in self._abilities
