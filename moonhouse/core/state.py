"""Snapshot and one-shot world state.

``Checkpoint`` is the immutable save point kept by the world orchestrator;
``WorldEvent`` is the standard pending action (opening a passage between two
locations) registered under a trigger key.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping

from ..items import Item
from .model.base import Location


class CheckpointError(Exception):
    """Raised when a checkpoint cannot be built or used."""
    pass


@dataclass(frozen=True)
class Checkpoint:
    """Location + name-keyed deep copy of the inventory at a point in time.

    The stored items never leave the snapshot: readers get names or clones.
    """
    location: Location
    _items: Mapping[str, Item]
    created_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def capture(cls, location: Location, items: Iterable[Item]) -> "Checkpoint":
        if location is None:
            raise CheckpointError("checkpoint location must not be None")
        if items is None:
            raise CheckpointError("checkpoint inventory must not be None")
        copy: Dict[str, Item] = {}
        for item in items:
            copy[item.name] = item.clone()
        return cls(location, MappingProxyType(copy))

    @property
    def inventory(self) -> List[Item]:
        return self.restore_items()

    def is_valid(self) -> bool:
        return self.location is not None and self._items is not None

    def restore_items(self) -> List[Item]:
        """Fresh clones of the stored items."""
        return [item.clone() for item in self._items.values()]

    def item_names(self) -> List[str]:
        return list(self._items)


class WorldEvent:
    """Opens a two-way passage between two locations when executed.

    Runs once: later calls are ignored.
    """

    def __init__(self, from_location: Location, to_location: Location,
                 to_direction: str, from_direction: str, description: str = "door"):
        if from_location is None or to_location is None:
            raise ValueError("world event locations must not be None")
        if not to_direction or not from_direction:
            raise ValueError("world event directions must not be empty")
        self.from_location = from_location
        self.to_location = to_location
        self.to_direction = to_direction
        self.from_direction = from_direction
        self.description = description or "door"
        self.executed = False

    def execute(self):
        if self.executed:
            return
        self.from_location.set_exit(self.to_direction, self.to_location)
        self.to_location.set_exit(self.from_direction, self.from_location)
        self.executed = True

    __call__ = execute


__all__ = ["Checkpoint", "CheckpointError", "WorldEvent"]
