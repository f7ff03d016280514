"""Simulation core for Moon House."""

from .events import EventBus, Notification, DispatchError
from .model.base import Location
from .registry import LocationGraph
from .access import AccessKind, AccessRule
from .agent import Antagonist
from .state import Checkpoint, CheckpointError, WorldEvent
from .game_world import GameWorld
from .player import Player

__all__ = [
    'EventBus', 'Notification', 'DispatchError',
    'Location', 'LocationGraph',
    'AccessKind', 'AccessRule',
    'Antagonist',
    'Checkpoint', 'CheckpointError', 'WorldEvent',
    'GameWorld',
    'Player',
]
