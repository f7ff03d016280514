"""Inventory and carrying capacity.

Provides the inventory-query half of the player contract: name based lookups
(case-insensitive), "contains all of" checks used by locks, wards and the win
condition, and value clones for checkpoints.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional

from .items import Item


class CapacityError(Exception):
    """Raised when an item is forced into a capacity that cannot hold it."""
    pass


@dataclass
class Capacity:
    """Weight/volume limits with running totals."""
    max_weight: float
    max_volume: float
    current_weight: float = 0.0
    current_volume: float = 0.0

    def __post_init__(self):
        if self.max_weight <= 0:
            raise ValueError("Maximum weight must be greater than zero.")
        if self.max_volume <= 0:
            raise ValueError("Maximum volume must be greater than zero.")

    def can_fit(self, item: Item) -> bool:
        if item is None:
            return False
        return (self.current_weight + item.weight <= self.max_weight
                and self.current_volume + item.volume <= self.max_volume)

    def add(self, item: Item):
        if not self.can_fit(item):
            raise CapacityError(f"Cannot add item '{item.name}': would exceed capacity limits.")
        self.current_weight += item.weight
        self.current_volume += item.volume

    def remove(self, item: Item):
        self.current_weight = max(0.0, self.current_weight - item.weight)
        self.current_volume = max(0.0, self.current_volume - item.volume)

    def clear(self):
        self.current_weight = 0.0
        self.current_volume = 0.0

    def summary(self) -> str:
        return (f"{self.current_weight:.1f}/{self.max_weight:.1f} kg, "
                f"{self.current_volume:.1f}/{self.max_volume:.1f} m³")


class Inventory:
    """Player inventory keyed by item id, queried by name."""

    def __init__(self, capacity: Optional[Capacity] = None):
        self.capacity = capacity
        self._items: Dict[str, Item] = {}

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(list(self._items.values()))

    @property
    def items(self) -> List[Item]:
        return list(self._items.values())

    def names(self) -> List[str]:
        return [i.name for i in self._items.values()]

    def can_add(self, item: Item) -> bool:
        if item is None:
            return False
        return self.capacity is None or self.capacity.can_fit(item)

    def add(self, item: Item) -> bool:
        """Add an item. Returns False (inventory untouched) if it does not fit."""
        if item is None:
            raise ValueError("item must not be None")
        if item.id in self._items:
            return True
        if not self.can_add(item):
            return False
        if self.capacity is not None:
            self.capacity.add(item)
        self._items[item.id] = item
        return True

    def remove(self, item: Item) -> bool:
        if item is None:
            raise ValueError("item must not be None")
        if self._items.pop(item.id, None) is None:
            return False
        if self.capacity is not None:
            self.capacity.remove(item)
        return True

    def find(self, name: str) -> Optional[Item]:
        if not name or not name.strip():
            return None
        for item in self._items.values():
            if item.matches(name.strip()):
                return item
        return None

    def contains(self, name: str) -> bool:
        return self.find(name) is not None

    def contains_all(self, names: Iterable[str]) -> bool:
        return all(self.contains(n) for n in names)

    def missing(self, names: Iterable[str]) -> List[str]:
        """Names from ``names`` not held, in the given order."""
        return [n for n in names if not self.contains(n)]

    def remove_by_name(self, name: str) -> Optional[Item]:
        item = self.find(name)
        if item is not None:
            self.remove(item)
        return item

    def clear(self):
        self._items.clear()
        if self.capacity is not None:
            self.capacity.clear()

    def clone_items(self) -> Dict[str, Item]:
        """Name-keyed deep copy of the contents (used by checkpoints)."""
        return {item.name: item.clone() for item in self._items.values()}

    def summary(self) -> str:
        if not self._items:
            return "Inventory is empty"
        if self.capacity is None:
            return f"Inventory: {len(self._items)} items"
        return f"Inventory: {len(self._items)} items ({self.capacity.summary()})"
