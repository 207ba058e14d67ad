"""Context passed to ability conditions, handlers and game actions."""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class AbilityContext:
    """Who is using what, and in response to which event."""
    game: Any
    source: Any
    player: Any
    ability: Optional[Any] = None
    event: Optional[Any] = None
    target: Optional[Any] = None

    def copy(self, **changes) -> "AbilityContext":
        """Return a copy with some fields replaced."""
        values = {
            'game': self.game,
            'source': self.source,
            'player': self.player,
            'ability': self.ability,
            'event': self.event,
            'target': self.target,
        }
        values.update(changes)
        return AbilityContext(**values)
