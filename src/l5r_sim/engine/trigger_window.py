"""Event windows, triggered-ability windows and ability resolution.

An event window resolves a set of events in a fixed order::

    would-interrupts -> forced interrupts -> interrupts
        -> primary effects
    -> forced reactions -> reactions

Each triggered-ability window resolves one ability at a time, re-checking
every candidate's condition before each choice.
"""

from typing import Any, List, Optional, Set, Tuple

from ..config import TriggerOrderPolicy
from ..models.constants import AbilityType, EventName, FORCED_ABILITY_TYPES, INTERRUPT_WINDOWS, REACTION_WINDOWS
from ..utils.logging_config import get_game_logger
from .prompts import PASS, SelectCardPrompt
from .step_system import AwaitingInput, BaseStep, ChoiceType, PipelineStep, SimpleStep, StepStatus

logger = get_game_logger(__name__)

Candidate = Tuple[Any, Any, Any]  # (ability, event, context)


class EventWindow(PipelineStep):
    """Resolves a group of simultaneous events with their interrupts and reactions."""

    def __init__(self, game, events: List[Any]):
        super().__init__(game)
        self.events = list(events)
        steps = [self._window_for(ability_type) for ability_type in INTERRUPT_WINDOWS]
        steps.append(SimpleStep(game, self.execute_handlers, description="execute event handlers"))
        steps.extend(self._window_for(ability_type) for ability_type in REACTION_WINDOWS)
        self.initialise(steps)

    def _window_for(self, ability_type: AbilityType) -> BaseStep:
        if ability_type in FORCED_ABILITY_TYPES:
            return ForcedTriggeredAbilityWindow(self.game, ability_type, self)
        return TriggeredAbilityWindow(self.game, ability_type, self)

    def events_for(self, ability_type: AbilityType) -> List[Any]:
        """Events abilities of this type may respond to."""
        if ability_type in REACTION_WINDOWS:
            return [event for event in self.events if event.resolved and not event.cancelled]
        return [event for event in self.events if not event.cancelled]

    def execute_handlers(self) -> None:
        for event in self.events:
            if event.cancelled:
                logger.info("%s was cancelled", event.name.value)
                continue
            event.execute_handler()
            self.game.record_event(event)
            self.game.event_manager.publish(event)

    def __str__(self) -> str:
        return f"EventWindow({', '.join(event.name.value for event in self.events)})"


class ForcedTriggeredAbilityWindow(BaseStep):
    """Resolves every eligible forced ability of one type.

    A single candidate resolves automatically. With several, the first
    player picks which resolves next.
    """

    def __init__(self, game, ability_type: AbilityType, event_window: EventWindow):
        super().__init__(game)
        self.ability_type = ability_type
        self.event_window = event_window
        self.resolved: List[Tuple[Any, Any]] = []
        self.skipped: List[Tuple[Any, Any]] = []
        self.choosing_player = None
        self.options: List[Candidate] = []
        self.prompt_uuid: Optional[str] = None
        self.chosen: Optional[Candidate] = None
        self.passed = False

    def get_candidates(self) -> List[Candidate]:
        """Registered abilities of this window's type that match an event and can resolve now."""
        candidates = []
        for event in self.event_window.events_for(self.ability_type):
            for ability in self.game.event_manager.abilities_for(event.name):
                if ability.ability_type is not self.ability_type or (ability, event) in self.resolved:
                    continue
                context = ability.create_context(event=event)
                if not ability.matches_event(event, context):
                    continue
                if not ability.meets_requirements(context):
                    if (ability, event) not in self.skipped:
                        self.skipped.append((ability, event))
                        logger.debug("Skipping %s for %s: requirements not met", ability, event.name.value)
                    continue
                candidates.append((ability, event, context))
        return candidates

    def resolve(self, candidate: Candidate) -> None:
        ability, event, context = candidate
        self.resolved.append((ability, event))
        self.game.queue_step(AbilityResolver(self.game, ability, context))

    def take_choice(self, candidates: List[Candidate]) -> Optional[Candidate]:
        """The chosen candidate if it is still eligible."""
        chosen, self.chosen = self.chosen, None
        if chosen is None:
            return None
        for candidate in candidates:
            if candidate[0] is chosen[0] and candidate[1] is chosen[1]:
                return candidate
        logger.debug("%s is no longer eligible", chosen[0])
        return None

    def prompt(self, player, options: List[Candidate]) -> bool:
        self.choosing_player = player
        self.options = options
        if self.prompt_uuid is None:
            self.prompt_uuid = self.game.next_uuid()
        self.status = StepStatus.WAITING_FOR_INPUT
        return False

    def clear_prompt(self) -> None:
        self.choosing_player = None
        self.options = []
        self.prompt_uuid = None

    def execute(self) -> bool:
        candidates = self.get_candidates()
        choice = self.take_choice(candidates)
        if choice is not None:
            self.resolve(choice)
            return False
        if not candidates:
            self.status = StepStatus.COMPLETED
            return True
        if len(candidates) == 1:
            self.resolve(candidates[0])
            return False
        return self.prompt(self.game.get_first_player(), candidates)

    def handle_menu_command(self, player, arg: Optional[str], uuid: str) -> bool:
        if self.prompt_uuid is None or player is not self.choosing_player or uuid != self.prompt_uuid:
            return False
        if arg == PASS and self.allow_pass:
            self.passed = True
        elif arg is not None and arg.isdigit() and int(arg) < len(self.options):
            self.chosen = self.options[int(arg)]
        else:
            return False
        self.clear_prompt()
        return True

    allow_pass = False

    def get_awaiting_input(self) -> List[AwaitingInput]:
        if self.prompt_uuid is None:
            return []
        buttons = [{'text': str(ability), 'arg': str(index), 'uuid': self.prompt_uuid}
                   for index, (ability, _, _) in enumerate(self.options)]
        if self.allow_pass:
            buttons.append({'text': 'Pass', 'arg': PASS, 'uuid': self.prompt_uuid})
        return [AwaitingInput(
            prompt_uuid=self.prompt_uuid,
            player=self.choosing_player.name,
            title=f"Choose {self.ability_type.value} to resolve",
            choice_type=ChoiceType.MENU,
            buttons=buttons,
        )]

    def __str__(self) -> str:
        return f"{self.__class__.__name__}({self.ability_type.value})"


class TriggeredAbilityWindow(ForcedTriggeredAbilityWindow):
    """Offers optional abilities of one type to their controllers.

    Players are asked in first-player order. Under ``TURN_ORDER`` each player
    resolves one ability or passes before the next player is asked, and a
    resolved ability gives everyone who passed another chance. Under
    ``ACTIVE_PLAYER_FIRST`` a player keeps choosing until they pass.
    """

    allow_pass = True

    def __init__(self, game, ability_type: AbilityType, event_window: EventWindow):
        super().__init__(game, ability_type, event_window)
        self.players = game.get_players_in_first_player_order()
        self.current_index = 0
        self.passed_players: Set[Any] = set()

    @property
    def policy(self) -> TriggerOrderPolicy:
        return self.game.settings.trigger_order_policy

    def next_player(self, candidates: List[Candidate]):
        """The next player, from the current one on, who has not passed and has something to trigger."""
        for offset in range(len(self.players)):
            index = (self.current_index + offset) % len(self.players)
            player = self.players[index]
            if player in self.passed_players:
                continue
            if any(ability.card.controller is player for ability, _, _ in candidates):
                self.current_index = index
                return player
        return None

    def execute(self) -> bool:
        candidates = self.get_candidates()
        player = self.players[self.current_index]

        if self.passed:
            self.passed = False
            logger.info("%s passes on %s abilities", player, self.ability_type.value)
            self.passed_players.add(player)
            self.current_index = (self.current_index + 1) % len(self.players)
        else:
            choice = self.take_choice(candidates)
            if choice is not None:
                self.resolve(choice)
                if self.policy is TriggerOrderPolicy.TURN_ORDER:
                    self.passed_players.clear()
                    self.current_index = (self.current_index + 1) % len(self.players)
                return False

        player = self.next_player(candidates)
        if player is None:
            self.status = StepStatus.COMPLETED
            return True
        options = [candidate for candidate in candidates if candidate[0].card.controller is player]
        return self.prompt(player, options)


class AbilityResolver(PipelineStep):
    """Resolves one ability: re-check, choose a target, record the use, then apply its effects."""

    def __init__(self, game, ability, context):
        super().__init__(game)
        self.ability = ability
        self.context = context
        self.cancelled = False
        self.initialise([
            SimpleStep(game, self.check_requirements, description="check requirements"),
            SimpleStep(game, self.choose_target, condition=self.is_active, description="choose target"),
            SimpleStep(game, self.mark_used, condition=self.is_active, description="mark ability used"),
            SimpleStep(game, self.execute_ability, condition=self.is_active, description="execute ability"),
        ])

    def is_active(self) -> bool:
        return not self.cancelled

    def check_requirements(self) -> None:
        if not self.ability.meets_requirements(self.context):
            logger.info("%s can no longer be used", self.ability)
            self.cancelled = True

    def choose_target(self) -> None:
        if self.ability.target_spec is None:
            return
        targets = self.ability.get_legal_targets(self.context)
        if not targets:
            self.cancelled = True
            return

        def select(card) -> None:
            self.context.target = card

        def cancel() -> None:
            self.cancelled = True

        self.queue_step(SelectCardPrompt(self.game, self.context.player, f"Choose a target for {self.ability.title}",
                                         targets, select, optional=True, on_cancel=cancel))

    def mark_used(self) -> None:
        self.ability.limit.increment()
        event_name = (EventName.ON_CARD_ABILITY_TRIGGERED if self.ability.is_triggered_ability
                      else EventName.ON_CARD_ABILITY_INITIATED)
        self.game.emit_event(event_name, card=self.ability.card, ability=self.ability,
                             player=self.context.player)

    def execute_ability(self) -> None:
        self.ability.execute(self.context)

    def __str__(self) -> str:
        return f"AbilityResolver({self.ability})"
