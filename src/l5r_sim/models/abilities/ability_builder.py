"""Builder handed to card setup routines to declare abilities."""

from types import MappingProxyType
from typing import Any, Callable, Iterable, List, Mapping, Optional, Tuple, Union

from ..constants import AbilityType, CardType, EventName, Location, TargetController
from . import effects as effect_dsl
from . import game_actions as action_dsl
from .ability_context import AbilityContext
from .descriptors import (
    ActionSpec, Condition, Handler, PersistentEffectSpec, PlayActionSpec, TargetSpec, TriggeredAbilitySpec
)
from .effects import EffectSpec
from .game_actions import GameAction
from ...errors import CardConfigurationError

Descriptor = Union[ActionSpec, TriggeredAbilitySpec, PersistentEffectSpec, PlayActionSpec]
LocationArg = Union[Location, Iterable[Location], None]


def _as_locations(location: LocationArg):
    """Normalise a location argument to a frozenset (or None for the type default)."""
    if location is None:
        return None
    if isinstance(location, Location):
        return frozenset({location})
    return frozenset(location)


class AbilityBuilder:
    """Collects the ability declarations of one card.

    Setup routines call the DSL methods, then :meth:`build` returns the
    declarations as an immutable tuple for the card's ability registry.

    ``actions`` and ``effects`` expose the game-action and effect factories,
    e.g. ``ability.actions.ready()`` or ``ability.effects.add_trait('cavalry')``.
    """

    actions = action_dsl
    effects = effect_dsl

    def __init__(self):
        self._descriptors: List[Descriptor] = []

    def action(self, title: str, condition: Optional[Condition] = None,
               game_action: Optional[GameAction] = None, handler: Optional[Handler] = None,
               target: Optional[TargetSpec] = None, limit: Optional[int] = 1,
               location: LocationArg = None) -> ActionSpec:
        """Declare an action ability."""
        self._require_resolution(title, game_action, handler, target)
        spec = ActionSpec(title=title, condition=condition, game_action=game_action, handler=handler,
                          target=target, limit=limit, location=_as_locations(location))
        self._descriptors.append(spec)
        return spec

    def triggered_ability(self, kind: AbilityType, title: str,
                          when: Mapping[EventName, Callable[[Any, AbilityContext], bool]],
                          condition: Optional[Condition] = None,
                          game_action: Optional[GameAction] = None, handler: Optional[Handler] = None,
                          target: Optional[TargetSpec] = None, limit: Optional[int] = 1,
                          location: LocationArg = None) -> TriggeredAbilitySpec:
        """Declare a triggered ability of any kind."""
        if kind is AbilityType.ACTION:
            raise CardConfigurationError(f"'{title}': actions are declared with action(), not as triggers")
        if not when:
            raise CardConfigurationError(f"'{title}': a triggered ability needs at least one event in 'when'")
        self._require_resolution(title, game_action, handler, target)
        spec = TriggeredAbilitySpec(kind=kind, title=title, when=MappingProxyType(dict(when)),
                                    condition=condition, game_action=game_action, handler=handler,
                                    target=target, limit=limit, location=_as_locations(location))
        self._descriptors.append(spec)
        return spec

    def reaction(self, title: str, when, **properties) -> TriggeredAbilitySpec:
        return self.triggered_ability(AbilityType.REACTION, title, when, **properties)

    def forced_reaction(self, title: str, when, **properties) -> TriggeredAbilitySpec:
        return self.triggered_ability(AbilityType.FORCED_REACTION, title, when, **properties)

    def interrupt(self, title: str, when, **properties) -> TriggeredAbilitySpec:
        return self.triggered_ability(AbilityType.INTERRUPT, title, when, **properties)

    def forced_interrupt(self, title: str, when, **properties) -> TriggeredAbilitySpec:
        return self.triggered_ability(AbilityType.FORCED_INTERRUPT, title, when, **properties)

    def would_interrupt(self, title: str, when, **properties) -> TriggeredAbilitySpec:
        return self.triggered_ability(AbilityType.WOULD_INTERRUPT, title, when, **properties)

    def persistent_effect(self, effect: EffectSpec, location: Optional[Location] = None,
                          condition: Optional[Condition] = None) -> PersistentEffectSpec:
        """Declare an effect that lasts while the card is in the declared location.

        The location is validated when the card is built, since the default
        depends on the card's type.
        """
        if not isinstance(effect, EffectSpec):
            raise CardConfigurationError(f"persistent_effect expects an EffectSpec, got {effect!r}")
        spec = PersistentEffectSpec(effect=effect, location=location, condition=condition)
        self._descriptors.append(spec)
        return spec

    def composure(self, effect: EffectSpec, location: Optional[Location] = None) -> PersistentEffectSpec:
        """Declare a persistent effect active while the controller has composure."""
        return self.persistent_effect(effect, location=location,
                                      condition=lambda context: context.player.has_composure())

    def play_action(self, title: str, condition: Optional[Condition] = None,
                    handler: Optional[Handler] = None, game_action: Optional[GameAction] = None,
                    location: LocationArg = Location.HAND) -> PlayActionSpec:
        """Declare a special way of playing the card from outside the play area."""
        self._require_resolution(title, game_action, handler, None)
        spec = PlayActionSpec(title=title, condition=condition, handler=handler,
                              game_action=game_action, location=_as_locations(location))
        self._descriptors.append(spec)
        return spec

    @staticmethod
    def target(game_action: Optional[GameAction] = None, card_type: Optional[CardType] = None,
               card_condition: Optional[Callable[[Any, AbilityContext], bool]] = None,
               controller: TargetController = TargetController.ANY,
               location: Location = Location.PLAY_AREA) -> TargetSpec:
        """Describe the card an ability targets."""
        return TargetSpec(game_action=game_action, card_type=card_type, card_condition=card_condition,
                          controller=controller, location=location)

    def build(self) -> Tuple[Descriptor, ...]:
        """Return the declarations collected so far."""
        return tuple(self._descriptors)

    @staticmethod
    def _require_resolution(title: str, game_action, handler, target) -> None:
        if game_action is None and handler is None and (target is None or target.game_action is None):
            raise CardConfigurationError(f"'{title}' needs a game_action, a handler or a target with a game_action")
