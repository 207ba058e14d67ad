"""Models for cards, abilities and game state."""

from .abilities import AbilityBuilder, AbilityContext, AbilityRegistry
from .cards import BaseCard, CardDefinition, MenuItem
from .constants import (
    AbilityType, CardCapability, CardType, ConflictType, DeckSide, Duration, EffectName, Element,
    EventName, Location, PhaseName, TargetController, Token
)
from .game import Conflict, Player, Ring

__all__ = [
    'AbilityBuilder',
    'AbilityContext',
    'AbilityRegistry',
    'AbilityType',
    'BaseCard',
    'CardCapability',
    'CardDefinition',
    'CardType',
    'Conflict',
    'ConflictType',
    'DeckSide',
    'Duration',
    'EffectName',
    'Element',
    'EventName',
    'Location',
    'MenuItem',
    'PhaseName',
    'Player',
    'Ring',
    'TargetController',
    'Token',
]
