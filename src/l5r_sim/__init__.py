"""L5R card game rules engine."""

__version__ = "0.1.0"

# Set up logging configuration on import
import os
from .utils.logging_config import setup_logging

# Default to INFO level, but allow override via environment variable
log_level = os.getenv('L5R_LOG_LEVEL', 'INFO')
setup_logging(level=log_level)

from . import models
from . import engine
from . import cards
from . import utils
from .config import GameSettings, TriggerOrderPolicy
from .errors import CardConfigurationError, GameSetupError, RulesEngineError

__all__ = [
    "models", "engine", "cards", "utils",
    "GameSettings", "TriggerOrderPolicy",
    "CardConfigurationError", "GameSetupError", "RulesEngineError",
]
