"""Item definitions.

Items are plain mutable dataclasses. Snapshots (checkpoints, save files) never
share item instances with live state: they go through ``Item.clone()``, an
explicit value copy that also assigns a fresh id.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from uuid import uuid4


def _new_id() -> str:
    return uuid4().hex


def same_name(a: str, b: str) -> bool:
    """Case-insensitive item name comparison used everywhere in the engine."""
    return a.casefold() == b.casefold()


@dataclass(frozen=True)
class ShotEffect:
    """What happens when the player shoots an item lying in a room.

    ``spawn`` is a template: the room receives a clone, never the template.
    ``reveal_direction``/``reveal_target`` open a new exit from the room the
    player stands in toward the location registered under that tag.
    """
    message: str
    spawn: Optional["Item"] = None
    reveal_direction: Optional[str] = None
    reveal_target: Optional[str] = None
    failure_message: str = "Nothing seems to happen."

    @property
    def reveals_passage(self) -> bool:
        return bool(self.reveal_direction and self.reveal_target)


@dataclass(eq=False)
class Item:
    """Base item carried by the player or lying in a location."""
    name: str
    description: str = ""
    weight: float = 0.0
    volume: float = 0.0
    on_shot: Optional[ShotEffect] = None
    id: str = field(default_factory=_new_id)
    is_new: bool = True

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Item name must not be empty")
        if self.weight < 0:
            raise ValueError(f"Item '{self.name}': weight must be >= 0")
        if self.volume < 0:
            raise ValueError(f"Item '{self.name}': volume must be >= 0")

    @property
    def is_container(self) -> bool:
        return False

    def matches(self, name: str) -> bool:
        return bool(name) and same_name(self.name, name)

    def clone(self) -> "Item":
        """Independent value copy with a new id."""
        return Item(
            name=self.name,
            description=self.description,
            weight=self.weight,
            volume=self.volume,
            on_shot=self.on_shot,
            is_new=self.is_new,
        )

    def info(self) -> str:
        return f"{self.name} - {self.description} (Weight: {self.weight:.1f}kg, Volume: {self.volume:.2f}m³)"

    def __str__(self) -> str:
        return f"{self.name}, weight: {self.weight:.1f}kg, volume: {self.volume:.2f}m³"


@dataclass(eq=False)
class ItemContainer(Item):
    """An item that holds other items (e.g. the chest in Spare_Parts).

    Contents are keyed by item name. Containers cannot be picked up by the
    player; ``max_weight``/``max_volume`` limit what fits inside.
    """
    max_weight: float = 50.0
    max_volume: float = 50.0
    contents: Dict[str, Item] = field(default_factory=dict)

    @property
    def is_container(self) -> bool:
        return True

    @property
    def content_weight(self) -> float:
        return sum(i.weight for i in self.contents.values())

    @property
    def content_volume(self) -> float:
        return sum(i.volume for i in self.contents.values())

    def can_insert(self, item: Item) -> bool:
        if item is self:
            return False
        return (self.content_weight + item.weight <= self.max_weight
                and self.content_volume + item.volume <= self.max_volume)

    def insert(self, item: Item) -> bool:
        if item is None:
            raise ValueError("item must not be None")
        if not self.can_insert(item):
            return False
        self.contents[item.name] = item
        return True

    def find(self, name: str) -> Optional[Item]:
        for item in self.contents.values():
            if item.matches(name):
                return item
        return None

    def remove(self, name: str) -> Optional[Item]:
        item = self.find(name)
        if item is None:
            return None
        del self.contents[item.name]
        return item

    def list_contents(self) -> List[Item]:
        return list(self.contents.values())

    def clone(self) -> "ItemContainer":
        copy = ItemContainer(
            name=self.name,
            description=self.description,
            weight=self.weight,
            volume=self.volume,
            on_shot=self.on_shot,
            is_new=self.is_new,
            max_weight=self.max_weight,
            max_volume=self.max_volume,
        )
        for item in self.contents.values():
            copy.contents[item.name] = item.clone()
        return copy


def item_from_dict(data: Dict[str, Any]) -> Item:
    """Build an Item (or ItemContainer when ``contents`` is present) from table data."""
    effect = None
    shot = data.get("on_shot")
    if shot:
        reveal = shot.get("reveal") or {}
        effect = ShotEffect(
            message=shot["message"],
            spawn=item_from_dict(shot["spawn"]) if shot.get("spawn") else None,
            reveal_direction=reveal.get("direction"),
            reveal_target=reveal.get("target"),
            failure_message=shot.get("failure_message", "Nothing seems to happen."),
        )
    common = dict(
        name=data["name"],
        description=data.get("description", ""),
        weight=float(data.get("weight", 0.0)),
        volume=float(data.get("volume", 0.0)),
        on_shot=effect,
        is_new=data.get("is_new", True),
    )
    if "contents" not in data:
        return Item(**common)
    container = ItemContainer(
        max_weight=float(data.get("max_weight", 50.0)),
        max_volume=float(data.get("max_volume", 50.0)),
        **common,
    )
    for inner in data["contents"]:
        if not container.insert(item_from_dict(inner)):
            raise ValueError(f"'{inner.get('name')}' does not fit in '{container.name}'")
    return container


def item_to_dict(item: Item) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "name": item.name,
        "description": item.description,
        "weight": item.weight,
        "volume": item.volume,
        "is_new": item.is_new,
    }
    if item.on_shot is not None:
        shot: Dict[str, Any] = {"message": item.on_shot.message,
                                "failure_message": item.on_shot.failure_message}
        if item.on_shot.spawn is not None:
            shot["spawn"] = item_to_dict(item.on_shot.spawn)
        if item.on_shot.reveals_passage:
            shot["reveal"] = {"direction": item.on_shot.reveal_direction,
                              "target": item.on_shot.reveal_target}
        data["on_shot"] = shot
    if item.is_container:
        data["max_weight"] = item.max_weight
        data["max_volume"] = item.max_volume
        data["contents"] = [item_to_dict(i) for i in item.list_contents()]
    return data


__all__ = ["Item", "ItemContainer", "ShotEffect", "same_name", "item_from_dict", "item_to_dict"]
