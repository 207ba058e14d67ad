"""Immutable ability declarations produced by a card's setup routine."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, FrozenSet, Mapping, Optional

from ..constants import AbilityType, CardType, Duration, EventName, Location, TargetController
from .ability_context import AbilityContext
from .effects import EffectSpec
from .game_actions import GameAction

Condition = Callable[[AbilityContext], bool]
Handler = Callable[[AbilityContext], None]


@dataclass(frozen=True)
class TargetSpec:
    """A card an ability chooses when it is used."""
    game_action: Optional[GameAction] = None
    card_type: Optional[CardType] = None
    card_condition: Optional[Callable[[Any, AbilityContext], bool]] = None
    controller: TargetController = TargetController.ANY
    location: Location = Location.PLAY_AREA


@dataclass(frozen=True)
class ActionSpec:
    """An action ability the controller may use during action windows."""
    title: str
    condition: Optional[Condition] = None
    game_action: Optional[GameAction] = None
    handler: Optional[Handler] = None
    target: Optional[TargetSpec] = None
    limit: Optional[int] = 1
    location: Optional[FrozenSet[Location]] = None


@dataclass(frozen=True)
class TriggeredAbilitySpec:
    """A reaction or interrupt to specific game events."""
    kind: AbilityType
    title: str
    when: Mapping[EventName, Callable[[Any, AbilityContext], bool]] = field(
        default_factory=lambda: MappingProxyType({}))
    condition: Optional[Condition] = None
    game_action: Optional[GameAction] = None
    handler: Optional[Handler] = None
    target: Optional[TargetSpec] = None
    limit: Optional[int] = 1
    location: Optional[FrozenSet[Location]] = None


@dataclass(frozen=True)
class PersistentEffectSpec:
    """An effect active while its source is in the declared location."""
    effect: EffectSpec
    location: Optional[Location] = None
    condition: Optional[Condition] = None
    duration: Duration = Duration.PERSISTENT


@dataclass(frozen=True)
class PlayActionSpec:
    """A special way to play a card from outside the play area."""
    title: str
    condition: Optional[Condition] = None
    handler: Optional[Handler] = None
    game_action: Optional[GameAction] = None
    location: FrozenSet[Location] = frozenset({Location.HAND})
