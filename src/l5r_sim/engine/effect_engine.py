"""Effect engine: the set of modifiers currently applied to the game."""

import itertools
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Set, Tuple

from ..models.constants import Duration, EffectName
from ..utils.logging_config import get_game_logger

logger = get_game_logger(__name__)


@dataclass(eq=False)
class Effect:
    """A modifier applied to the game by a card.

    An effect affects either one explicit ``target`` or every object accepted
    by ``match``. With neither set it affects nothing. ``condition`` is
    evaluated on every query, so a conditional effect never goes stale.
    """
    name: EffectName
    value: Any = True
    source: Any = None
    duration: Duration = Duration.PERSISTENT
    target: Any = None
    match: Optional[Callable[[Any], bool]] = None
    condition: Optional[Callable[[], bool]] = None
    ref: Optional[int] = None

    def applies_to(self, target: Any) -> bool:
        """Check if this effect affects the given card or player."""
        if self.target is not None:
            return target is self.target
        if self.match is not None:
            return bool(self.match(target))
        return False

    @property
    def is_lasting(self) -> bool:
        """Lasting effects have a finite duration that is not tied to a location."""
        return self.duration is not Duration.PERSISTENT

    def __str__(self) -> str:
        source_name = getattr(self.source, 'name', None) or 'game'
        return f"{self.name.value}({self.value!r}) from {source_name}"


class EffectEngine:
    """Holds applied effects and answers aggregate queries over them."""

    def __init__(self):
        self._effects: Dict[int, Effect] = {}
        self._refs = itertools.count(1)
        self._evaluating: Set[Tuple[Optional[int], int]] = set()

    def apply(self, effect: Effect) -> int:
        """Apply an effect and return the handle needed to remove it.

        Applying an effect that is already applied returns its existing handle.
        """
        if effect.ref is not None and effect.ref in self._effects:
            return effect.ref

        effect.ref = next(self._refs)
        self._effects[effect.ref] = effect
        logger.debug("Applied effect %s as ref %d", effect, effect.ref)
        return effect.ref

    def remove(self, ref: Optional[int]) -> bool:
        """Remove an applied effect. Unknown or already removed handles are ignored."""
        if ref is None:
            return False
        effect = self._effects.pop(ref, None)
        if effect is None:
            logger.debug("Effect ref %s already removed", ref)
            return False
        logger.debug("Removed effect %s (ref %d)", effect, ref)
        return True

    def is_applied(self, ref: Optional[int]) -> bool:
        """Check if a handle refers to a currently applied effect."""
        return ref is not None and ref in self._effects

    def get_effects(self, name: EffectName, target: Any) -> List[Any]:
        """Values of all active effects with this name affecting the target, in apply order."""
        return [
            effect.value for effect in list(self._effects.values())
            if effect.name is name and self._affects(effect, target)
        ]

    def sum_effects(self, name: EffectName, target: Any) -> int:
        """Numeric total of all active effects with this name affecting the target."""
        return sum(self.get_effects(name, target))

    def any_effect(self, name: EffectName, target: Any) -> bool:
        """Check if at least one active effect with this name affects the target."""
        return any(
            effect.name is name and self._affects(effect, target)
            for effect in list(self._effects.values())
        )

    def remove_lasting_effects(self, target: Any) -> int:
        """Remove lasting effects aimed directly at a card, regardless of their scope."""
        refs = [
            ref for ref, effect in self._effects.items()
            if effect.is_lasting and effect.target is target
        ]
        for ref in refs:
            self.remove(ref)
        return len(refs)

    def end_duration(self, duration: Duration) -> int:
        """Remove every effect of a duration whose window has closed."""
        refs = [ref for ref, effect in self._effects.items() if effect.duration is duration]
        for ref in refs:
            self.remove(ref)
        if refs:
            logger.debug("%d %s effect(s) expired", len(refs), duration.value)
        return len(refs)

    def effects_from(self, source: Any) -> List[Effect]:
        """All applied effects created by a source, active or not."""
        return [effect for effect in self._effects.values() if effect.source is source]

    def _affects(self, effect: Effect, target: Any) -> bool:
        """Check if an effect applies to the target and is active.

        A match or condition may query other effects, which can lead back to
        the same effect and target. That nested evaluation counts as not
        applying, so every query terminates.
        """
        key = (effect.ref, id(target))
        if key in self._evaluating:
            return False
        self._evaluating.add(key)
        try:
            return effect.applies_to(target) and self._is_active(effect)
        finally:
            self._evaluating.discard(key)

    def _is_active(self, effect: Effect) -> bool:
        """Check if an applied effect currently contributes to queries."""
        if effect.condition is not None and not effect.condition():
            return False
        # Persistent effects stop working while their source is blank
        if (effect.duration is Duration.PERSISTENT and effect.name is not EffectName.BLANK
                and effect.source is not None and self.any_effect(EffectName.BLANK, effect.source)):
            return False
        return True

    def __len__(self) -> int:
        return len(self._effects)
