"""Data model for the house graph.

A ``Location`` is a node with directed, labelled exits and the items lying in
it. Graph-level operations (registry, exit resolution through access rules,
range search) live in ``moonhouse.core.registry``.
"""
from __future__ import annotations
from types import MappingProxyType
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional

from ...items import Item

if TYPE_CHECKING:
    from ..access import AccessRule

__all__ = ["Location"]


class Location:
    """A place the player can occupy.

    Locations compare and hash by identity, so they can be used directly as
    trigger keys for pending world events.
    """

    def __init__(self, tag: str, description: str = ""):
        if not tag or not tag.strip():
            raise ValueError("Location tag must not be empty")
        self.tag = tag
        self.description = description or ""
        self._exits: Dict[str, Location] = {}
        self.items: Dict[str, Item] = {}
        # Assegnata dal LocationGraph (binding esclusivo)
        self.access: Optional["AccessRule"] = None

    # --- Exits ---
    @property
    def exits(self) -> Mapping[str, "Location"]:
        return MappingProxyType(self._exits)

    def set_exit(self, direction: str, target: "Location"):
        if not direction or not direction.strip():
            raise ValueError("Exit direction must not be empty")
        if not isinstance(target, Location):
            raise TypeError(f"Exit target must be a Location, got {type(target).__name__}")
        self._exits[direction] = target

    def raw_exit(self, direction: str) -> Optional["Location"]:
        if not direction:
            return None
        return self._exits.get(direction)

    def has_exit(self, direction: str) -> bool:
        return direction in self._exits

    def exit_directions(self) -> List[str]:
        return list(self._exits)

    # --- Items ---
    def add_item(self, item: Item):
        if item is None:
            raise ValueError("item must not be None")
        item.is_new = True
        self.items[item.name] = item

    def find_item(self, name: str) -> Optional[Item]:
        if not name:
            return None
        item = self.items.get(name)
        if item is not None:
            return item
        for candidate in self.items.values():
            if candidate.matches(name):
                return candidate
        return None

    def has_item(self, name: str) -> bool:
        return self.find_item(name) is not None

    def remove_item(self, name: str) -> Optional[Item]:
        item = self.find_item(name)
        if item is not None:
            del self.items[item.name]
        return item

    def clear_items(self):
        self.items.clear()

    # --- Description ---
    def exits_line(self) -> str:
        if not self._exits:
            return "Exits: None"
        return "Exits: " + " ".join(self._exits)

    def describe(self) -> str:
        return f"{self.description}\n *** {self.exits_line()}"

    def detailed_description(self) -> str:
        text = self.describe()
        if self.items:
            text += "\n\nItems in this room:"
            for item in self.items.values():
                text += f"\n  • {item.name}"
        return text

    def __repr__(self) -> str:
        return f"Location({self.tag!r}, exits={len(self._exits)}, items={len(self.items)})"
