"""Cooperative step pipeline that sequences all game progress.

A step's ``execute`` returns True when it is complete and False when it is
waiting for player input. Steps queued while another step is running are
placed ahead of the rest of the queue, so reactive work resolves before the
scripted steps that follow it.
"""

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Deque, Dict, Iterable, List, Optional

from ..utils.logging_config import get_game_logger

logger = get_game_logger(__name__)


class StepStatus(Enum):
    """Status of a step in execution."""
    PENDING = "pending"
    WAITING_FOR_INPUT = "waiting_for_input"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ChoiceType(Enum):
    """Kinds of decisions a suspended step can ask for."""
    MENU = "menu"                # Pick one of the offered buttons
    SELECT_CARD = "select_card"  # Click one of the selectable cards
    ACTION_OR_PASS = "action_or_pass"
    HONOR_BID = "honor_bid"


@dataclass
class AwaitingInput:
    """Serializable record of a decision the engine is waiting for."""
    prompt_uuid: str
    player: str
    title: str
    choice_type: ChoiceType
    buttons: List[Dict[str, str]] = field(default_factory=list)
    selectable: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'prompt_uuid': self.prompt_uuid,
            'player': self.player,
            'title': self.title,
            'choice_type': self.choice_type.value,
            'buttons': [dict(button) for button in self.buttons],
            'selectable': list(self.selectable),
        }


class BaseStep:
    """A unit of work in the game pipeline."""

    def __init__(self, game):
        self.game = game
        self.status = StepStatus.PENDING

    def execute(self) -> bool:
        """Run the step. Return False to suspend waiting for input."""
        self.status = StepStatus.COMPLETED
        return True

    def handle_menu_command(self, player, arg: Optional[str], uuid: str) -> bool:
        """Offer a button press to this step."""
        return False

    def handle_card_clicked(self, player, card) -> bool:
        """Offer a card click to this step."""
        return False

    def get_awaiting_input(self) -> List[AwaitingInput]:
        """Decisions this step is currently waiting for."""
        return []

    def __str__(self) -> str:
        return self.__class__.__name__


class SimpleStep(BaseStep):
    """Runs a function once. An optional condition is checked at execution time."""

    def __init__(self, game, fn: Callable[[], Any], condition: Optional[Callable[[], bool]] = None,
                 description: str = ""):
        super().__init__(game)
        self.fn = fn
        self.condition = condition
        self.description = description or getattr(fn, '__name__', 'step')

    def execute(self) -> bool:
        if self.condition is not None and not self.condition():
            logger.debug("Skipping step %s: precondition no longer holds", self.description)
            self.status = StepStatus.CANCELLED
            return True
        self.fn()
        self.status = StepStatus.COMPLETED
        return True

    def __str__(self) -> str:
        return f"SimpleStep({self.description})"


class GamePipeline:
    """Ordered queue of steps with insert-ahead-of-remainder semantics."""

    def __init__(self):
        self._pipeline: Deque[BaseStep] = deque()
        self._queue: List[BaseStep] = []

    def initialise(self, steps: Iterable[BaseStep]) -> None:
        """Replace the pipeline contents with a fixed list of steps."""
        self._pipeline = deque(steps)
        self._queue = []

    def queue_step(self, step: BaseStep) -> None:
        """Queue a step ahead of the steps that have not started yet.

        If the step in flight owns a pipeline of its own, the new step goes
        there so that it resolves inside the current step.
        """
        if not self._pipeline:
            self._pipeline.appendleft(step)
            return

        current = self._pipeline[0]
        if hasattr(current, 'queue_step'):
            current.queue_step(step)
        else:
            self._queue.append(step)

    def execute(self) -> bool:
        """Run steps in order until one waits for input or the pipeline is empty."""
        self._flush_queue()
        while self._pipeline:
            current = self._pipeline[0]
            if not current.execute():
                if not self._queue:
                    return False
            else:
                self._pipeline.popleft()
            self._flush_queue()
        return True

    def _flush_queue(self) -> None:
        """Move newly queued steps to the front of the pipeline, keeping their order."""
        if self._queue:
            self._pipeline.extendleft(reversed(self._queue))
            self._queue = []

    def get_current_step(self) -> Optional[BaseStep]:
        """The step in flight, or next to run."""
        return self._pipeline[0] if self._pipeline else None

    def handle_menu_command(self, player, arg: Optional[str], uuid: str) -> bool:
        """Forward a button press to the step in flight."""
        current = self.get_current_step()
        return bool(current and current.handle_menu_command(player, arg, uuid))

    def handle_card_clicked(self, player, card) -> bool:
        """Forward a card click to the step in flight."""
        current = self.get_current_step()
        return bool(current and current.handle_card_clicked(player, card))

    def get_awaiting_input(self) -> List[AwaitingInput]:
        """Decisions the step in flight is waiting for."""
        current = self.get_current_step()
        return current.get_awaiting_input() if current else []

    def __len__(self) -> int:
        return len(self._pipeline) + len(self._queue)


class PipelineStep(BaseStep):
    """A step that runs a nested pipeline of its own (phases, event windows, ability resolution)."""

    def __init__(self, game):
        super().__init__(game)
        self.pipeline = GamePipeline()

    def initialise(self, steps: Iterable[BaseStep]) -> None:
        self.pipeline.initialise(steps)

    def queue_step(self, step: BaseStep) -> None:
        self.pipeline.queue_step(step)

    def execute(self) -> bool:
        complete = self.pipeline.execute()
        self.status = StepStatus.COMPLETED if complete else StepStatus.WAITING_FOR_INPUT
        return complete

    def handle_menu_command(self, player, arg: Optional[str], uuid: str) -> bool:
        return self.pipeline.handle_menu_command(player, arg, uuid)

    def handle_card_clicked(self, player, card) -> bool:
        return self.pipeline.handle_card_clicked(player, card)

    def get_awaiting_input(self) -> List[AwaitingInput]:
        return self.pipeline.get_awaiting_input()
