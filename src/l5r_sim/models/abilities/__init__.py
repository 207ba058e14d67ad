"""Card ability system: the declaration DSL and the runtime abilities built from it."""

from .ability_builder import AbilityBuilder
from .ability_context import AbilityContext
from .ability_limit import AbilityLimit
from .card_ability import CardAbility, CardAction
from .descriptors import ActionSpec, PersistentEffectSpec, PlayActionSpec, TargetSpec, TriggeredAbilitySpec
from .effects import EffectSpec, Restriction
from .persistent_effect import PersistentEffect
from .play_action import DynastyCardAction, PlayAction
from .registry import AbilityRegistry
from .triggered_ability import TriggeredAbility

__all__ = [
    'AbilityBuilder',
    'AbilityContext',
    'AbilityLimit',
    'AbilityRegistry',
    'ActionSpec',
    'CardAbility',
    'CardAction',
    'DynastyCardAction',
    'EffectSpec',
    'PersistentEffect',
    'PersistentEffectSpec',
    'PlayAction',
    'PlayActionSpec',
    'Restriction',
    'TargetSpec',
    'TriggeredAbility',
    'TriggeredAbilitySpec',
]
