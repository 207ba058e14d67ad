"""Rules engine: effects, events, the step pipeline and the game loop."""

from .effect_engine import Effect, EffectEngine
from .event_system import Event, GameEventManager
from .game_engine import GameEngine
from .menu_commands import MenuCommands
from .phases import ConflictPhase, DrawPhase, DynastyPhase, FatePhase, Phase, ROUND_PHASES
from .prompts import ActionWindow, DynastyActionWindow, HonorBidPrompt, MenuPrompt, SelectCardPrompt
from .step_system import AwaitingInput, BaseStep, ChoiceType, GamePipeline, PipelineStep, SimpleStep, StepStatus
from .trigger_window import AbilityResolver, EventWindow, ForcedTriggeredAbilityWindow, TriggeredAbilityWindow

__all__ = [
    'AbilityResolver',
    'ActionWindow',
    'AwaitingInput',
    'BaseStep',
    'ChoiceType',
    'ConflictPhase',
    'DrawPhase',
    'DynastyActionWindow',
    'DynastyPhase',
    'Effect',
    'EffectEngine',
    'Event',
    'EventWindow',
    'FatePhase',
    'ForcedTriggeredAbilityWindow',
    'GameEngine',
    'GameEventManager',
    'GamePipeline',
    'HonorBidPrompt',
    'MenuCommands',
    'MenuPrompt',
    'Phase',
    'PipelineStep',
    'ROUND_PHASES',
    'SelectCardPrompt',
    'SimpleStep',
    'StepStatus',
    'TriggeredAbilityWindow',
]
