"""Usage limits for card abilities."""

from typing import Callable, Optional


class AbilityLimit:
    """Counts uses of an ability within a round.

    The effective maximum can be raised by effects on the card, so the
    limit asks ``modify_max`` for it on every check.
    """

    def __init__(self, max_uses: Optional[int] = 1):
        if max_uses is not None and max_uses < 1:
            raise ValueError(f"Ability limit must allow at least one use: {max_uses}")
        self.max_uses = max_uses
        self.use_count = 0

    @classmethod
    def per_round(cls, max_uses: int = 1) -> "AbilityLimit":
        """A limit of ``max_uses`` per round."""
        return cls(max_uses)

    @classmethod
    def unlimited(cls) -> "AbilityLimit":
        """No limit on uses."""
        return cls(None)

    def is_at_max(self, modify_max: Optional[Callable[[int], int]] = None) -> bool:
        """Check if the ability has been used as often as it may be this round."""
        if self.max_uses is None:
            return False
        max_uses = modify_max(self.max_uses) if modify_max else self.max_uses
        return self.use_count >= max_uses

    @property
    def is_unused(self) -> bool:
        """True when the ability has not been used since the last reset."""
        return self.use_count == 0

    def increment(self) -> None:
        """Record one use."""
        self.use_count += 1

    def reset(self) -> None:
        """Forget all uses."""
        self.use_count = 0

    def __repr__(self) -> str:
        max_text = "unlimited" if self.max_uses is None else str(self.max_uses)
        return f"AbilityLimit({self.use_count}/{max_text})"
