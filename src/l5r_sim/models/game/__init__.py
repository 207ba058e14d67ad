"""Game state models."""

from .conflict import Conflict, Ring
from .player import Player

__all__ = ['Conflict', 'Player', 'Ring']
