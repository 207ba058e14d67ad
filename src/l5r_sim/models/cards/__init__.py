"""Card definitions and the card entity."""

from .base_card import BaseCard
from .card_definition import CardDefinition, DEFAULT_CAPABILITIES, DEFAULT_MENUS, MenuItem

__all__ = [
    'BaseCard',
    'CardDefinition',
    'DEFAULT_CAPABILITIES',
    'DEFAULT_MENUS',
    'MenuItem',
]
