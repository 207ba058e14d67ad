"""Declarative effect payloads used by persistent and lasting effects."""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..constants import EffectName
from .ability_context import AbilityContext


@dataclass(frozen=True)
class Restriction:
    """Forbids one kind of action, optionally only in some contexts."""
    action_type: str
    condition: Optional[Callable[[Optional[AbilityContext]], bool]] = None

    def is_match(self, action_type: str, context: Optional[AbilityContext] = None) -> bool:
        """Check if this restriction forbids the given action."""
        if action_type != self.action_type:
            return False
        return self.condition is None or bool(self.condition(context))


@dataclass(frozen=True)
class EffectSpec:
    """What an effect does and to whom.

    ``match`` picks the affected cards or players given the source's ability
    context. Without it the effect applies to the source card itself, or to
    its controller when ``target_controller`` is set.
    """
    name: EffectName
    value: Any = True
    match: Optional[Callable[[Any, AbilityContext], bool]] = None
    target_controller: bool = False


def add_trait(trait: str) -> EffectSpec:
    return EffectSpec(EffectName.ADD_TRAIT, trait.lower())


def add_faction(faction: str) -> EffectSpec:
    return EffectSpec(EffectName.ADD_FACTION, faction.lower())


def blank(match: Optional[Callable[[Any, AbilityContext], bool]] = None) -> EffectSpec:
    """Blank the matched cards: their persistent effects and triggered abilities stop working."""
    return EffectSpec(EffectName.BLANK, True, match=match)


def cannot(action_type: str, condition: Optional[Callable[[Optional[AbilityContext]], bool]] = None,
           match: Optional[Callable[[Any, AbilityContext], bool]] = None) -> EffectSpec:
    return EffectSpec(EffectName.RESTRICT, Restriction(action_type, condition), match=match)


def player_cannot(action_type: str,
                  condition: Optional[Callable[[Optional[AbilityContext]], bool]] = None) -> EffectSpec:
    return EffectSpec(EffectName.RESTRICT, Restriction(action_type, condition), target_controller=True)


def increase_limit_on_abilities(amount: int = 1) -> EffectSpec:
    return EffectSpec(EffectName.INCREASE_LIMIT_ON_ABILITIES, amount)


def does_not_ready(match: Optional[Callable[[Any, AbilityContext], bool]] = None) -> EffectSpec:
    return EffectSpec(EffectName.DOES_NOT_READY, True, match=match)


def can_be_seen_when_facedown() -> EffectSpec:
    return EffectSpec(EffectName.CAN_BE_SEEN_WHEN_FACEDOWN, True)


def hide_when_face_up() -> EffectSpec:
    return EffectSpec(EffectName.HIDE_WHEN_FACE_UP, True)


def modify_glory(amount: int, match: Optional[Callable[[Any, AbilityContext], bool]] = None) -> EffectSpec:
    return EffectSpec(EffectName.MODIFY_GLORY, amount, match=match)


def modify_military_skill(amount: int,
                          match: Optional[Callable[[Any, AbilityContext], bool]] = None) -> EffectSpec:
    return EffectSpec(EffectName.MODIFY_MILITARY_SKILL, amount, match=match)


def modify_political_skill(amount: int,
                           match: Optional[Callable[[Any, AbilityContext], bool]] = None) -> EffectSpec:
    return EffectSpec(EffectName.MODIFY_POLITICAL_SKILL, amount, match=match)


def modify_province_strength(amount: int,
                             match: Optional[Callable[[Any, AbilityContext], bool]] = None) -> EffectSpec:
    return EffectSpec(EffectName.MODIFY_PROVINCE_STRENGTH, amount, match=match)
