"""Logging configuration for the L5R rules engine."""

import json
import logging
import sys

PACKAGE_PREFIX = 'l5r_sim.'

LOG_FORMATS = {
    "simple": "%(name)s - %(levelname)s - %(message)s",
    "detailed": "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s",
}


class JsonFormatter(logging.Formatter):
    """Formats each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": self.formatTime(record),
            "logger": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def create_formatter(format_style: str) -> logging.Formatter:
    """Build the formatter for a format style, falling back to "simple"."""
    if format_style == "json":
        return JsonFormatter()
    return logging.Formatter(LOG_FORMATS.get(format_style, LOG_FORMATS["simple"]))


def setup_logging(level: str = "INFO", format_style: str = "simple") -> None:
    """
    Set up logging for the engine.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_style: One of "simple", "detailed" or "json"
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(create_formatter(format_style))

    logging.basicConfig(
        level=numeric_level,
        handlers=[handler]
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a specific module."""
    return logging.getLogger(name)


def get_game_logger(module_name: str) -> logging.Logger:
    """
    Get a logger with a shortened name for engine modules.

    Args:
        module_name: Full module name (e.g., 'l5r_sim.engine.effect_engine')

    Returns:
        Logger with shortened name (e.g., 'engine.effect_engine')
    """
    if module_name.startswith(PACKAGE_PREFIX):
        short_name = module_name[len(PACKAGE_PREFIX):]
    else:
        short_name = module_name

    return logging.getLogger(short_name)
