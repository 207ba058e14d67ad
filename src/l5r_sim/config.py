"""Game settings and their environment overrides."""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from .errors import GameSetupError


class TriggerOrderPolicy(Enum):
    """How optional triggered abilities of several players are ordered."""
    TURN_ORDER = "turn_order"                    # Players alternate, one ability (or pass) each
    ACTIVE_PLAYER_FIRST = "active_player_first"  # Each player finishes their abilities before the next


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class GameSettings:
    """Configuration for a single game instance."""
    manual_mode: bool = True
    trigger_order_policy: TriggerOrderPolicy = TriggerOrderPolicy.TURN_ORDER
    seed: int = 0
    starting_honor: int = 10
    starting_fate: int = 0
    max_rounds: int = 0  # 0 means the game runs until a collaborator stops it

    def __post_init__(self) -> None:
        """Validate settings after creation."""
        if self.max_rounds < 0:
            raise GameSetupError(f"max_rounds cannot be negative: {self.max_rounds}")
        if self.starting_honor < 0:
            raise GameSetupError(f"starting_honor cannot be negative: {self.starting_honor}")
        if self.starting_fate < 0:
            raise GameSetupError(f"starting_fate cannot be negative: {self.starting_fate}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GameSettings":
        """Build settings from L5R_* environment variables."""
        environ = os.environ if environ is None else environ
        settings = cls()

        manual_mode = environ.get('L5R_MANUAL_MODE')
        if manual_mode is not None:
            value = manual_mode.strip().lower()
            if value in _TRUE_VALUES:
                settings.manual_mode = True
            elif value in _FALSE_VALUES:
                settings.manual_mode = False
            else:
                raise GameSetupError(f"Invalid L5R_MANUAL_MODE value: {manual_mode!r}")

        trigger_order = environ.get('L5R_TRIGGER_ORDER')
        if trigger_order is not None:
            try:
                settings.trigger_order_policy = TriggerOrderPolicy(trigger_order.strip().lower())
            except ValueError:
                raise GameSetupError(f"Invalid L5R_TRIGGER_ORDER value: {trigger_order!r}") from None

        seed = environ.get('L5R_SEED')
        if seed is not None:
            try:
                settings.seed = int(seed)
            except ValueError:
                raise GameSetupError(f"Invalid L5R_SEED value: {seed!r}") from None

        return settings
