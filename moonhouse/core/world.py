"""Facade for world model & loader.

Re-exports the world building blocks and the build/validate functions to
provide a stable import surface.
"""
from .model.base import Location
from .access import AccessKind, AccessRule
from .agent import Antagonist
from .game_world import GameWorld
from .registry import LocationGraph
from .state import Checkpoint, WorldEvent
from .loader.world_loader import WorldDataError, build_world_from_dict, validate_world_data

__all__ = [
    "Location",
    "AccessKind",
    "AccessRule",
    "Antagonist",
    "GameWorld",
    "LocationGraph",
    "Checkpoint",
    "WorldEvent",
    "WorldDataError",
    "build_world_from_dict",
    "validate_world_data",
]
