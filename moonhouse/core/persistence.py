"""Save/Load system for Moon House.

A ``GameMemento`` captures the player's location, inventory and the world's
checkpoint slot by tag and value, never by reference. ``SaveService`` writes
mementos as versioned JSON files and validates them with ``jsonschema`` when
reading them back.
"""
from __future__ import annotations
import json
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema

from .. import config
from ..items import Item, item_from_dict, item_to_dict
from .events import PLAYER_ENTERED
from .loader.schema import SAVE_SCHEMA
from .state import Checkpoint

logger = logging.getLogger(__name__)

# Save format version - increment when making breaking changes
SAVE_VERSION = 1


class SaveError(Exception):
    """Exception raised for save/load operations."""
    pass


@dataclass
class GameMemento:
    location: str
    inventory: List[Item] = field(default_factory=list)
    checkpoint_location: Optional[str] = None
    checkpoint_inventory: List[Item] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "_save_metadata": {
                "version": SAVE_VERSION,
                "timestamp": time.time(),
                "date_saved": datetime.now().isoformat(),
            },
            "location": self.location,
            "inventory": [item_to_dict(i) for i in self.inventory],
            "created_at": self.created_at.isoformat(),
            "checkpoint": None,
        }
        if self.checkpoint_location is not None:
            data["checkpoint"] = {
                "location": self.checkpoint_location,
                "inventory": [item_to_dict(i) for i in self.checkpoint_inventory],
            }
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameMemento":
        try:
            jsonschema.validate(data, SAVE_SCHEMA)
        except jsonschema.ValidationError as e:
            raise SaveError(f"Invalid save data: {e.message}") from e
        version = data["_save_metadata"]["version"]
        if version > SAVE_VERSION:
            raise SaveError(f"Save file version {version} is newer than supported version {SAVE_VERSION}")
        checkpoint = data.get("checkpoint") or {}
        created = data.get("created_at")
        try:
            return cls(
                location=data["location"],
                inventory=[item_from_dict(i) for i in data["inventory"]],
                checkpoint_location=checkpoint.get("location"),
                checkpoint_inventory=[item_from_dict(i) for i in checkpoint.get("inventory", [])],
                created_at=datetime.fromisoformat(created) if created else datetime.now(),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise SaveError(f"Invalid save data: {e}") from e


def create_memento(world: Any, player: Any) -> GameMemento:
    """Snapshot *player* and the world's checkpoint slot."""
    memento = GameMemento(
        location=player.location.tag,
        inventory=[item.clone() for item in player.inventory.items],
    )
    if world.checkpoint is not None and world.checkpoint.is_valid():
        memento.checkpoint_location = world.checkpoint.location.tag
        memento.checkpoint_inventory = world.checkpoint.restore_items()
    return memento


def restore_memento(world: Any, player: Any, memento: GameMemento):
    """Apply *memento* to the live world.

    Tags are resolved before anything changes; an unknown tag raises
    ``SaveError`` and leaves player and world untouched.
    """
    location = world.get_location_by_tag(memento.location)
    if location is None:
        raise SaveError(f"Unknown location '{memento.location}' in save data")
    checkpoint = None
    if memento.checkpoint_location is not None:
        cp_location = world.get_location_by_tag(memento.checkpoint_location)
        if cp_location is None:
            raise SaveError(f"Unknown checkpoint location '{memento.checkpoint_location}' in save data")
        checkpoint = Checkpoint.capture(cp_location, memento.checkpoint_inventory)

    player.location = location
    player.clear_history()
    player.inventory.clear()
    for item in memento.inventory:
        if not player.inventory.add(item.clone()):
            logger.warning("item '%s' from save does not fit the inventory", item.name)
    world.checkpoint = checkpoint
    # risincronizza lo stato reattivo (agenti, regole d'accesso)
    world.bus.publish(PLAYER_ENTERED, player)


class SaveService:
    """Writes and reads ``save_<timestamp>.json`` files under one directory."""

    def __init__(self, saves_dir: Optional[Path] = None):
        self.saves_dir = Path(saves_dir) if saves_dir is not None else config.get_saves_dir()

    def ensure_saves_dir(self):
        self.saves_dir.mkdir(parents=True, exist_ok=True)

    def write(self, memento: GameMemento, slot_name: str = "save") -> Path:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        filepath = self.saves_dir / f"{slot_name}_{timestamp}.json"
        try:
            self.ensure_saves_dir()
            with open(filepath, "w", encoding="utf-8") as f:
                json.dump(memento.to_dict(), f, indent=2, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as e:
            raise SaveError(f"Failed to save game: {e}") from e
        logger.info("game saved to %s", filepath)
        return filepath

    def read(self, filepath: Optional[Path] = None) -> GameMemento:
        path = Path(filepath) if filepath is not None else self.latest()
        if path is None:
            raise SaveError("No save file found")
        if not path.exists():
            raise SaveError(f"Save file not found: {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise SaveError(f"Failed to load game: {e}") from e
        return GameMemento.from_dict(data)

    def latest(self) -> Optional[Path]:
        saves = self.list_saves()
        return Path(saves[0]["filepath"]) if saves else None

    def save_game(self, world: Any, player: Any) -> bool:
        try:
            path = self.write(create_memento(world, player))
        except SaveError as e:
            player.error_message(str(e))
            return False
        player.info_message(f"Game saved ({path.name})")
        return True

    def load_game(self, world: Any, player: Any, filepath: Optional[Path] = None) -> bool:
        try:
            restore_memento(world, player, self.read(filepath))
        except (SaveError, OSError) as e:
            player.error_message(str(e))
            return False
        player.info_message("Game loaded")
        return True

    def list_saves(self) -> List[Dict[str, Any]]:
        """All readable save files, newest first."""
        if not self.saves_dir.exists():
            return []
        saves = []
        for save_file in self.saves_dir.glob("*.json"):
            try:
                with open(save_file, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError):
                logger.warning("skipping unreadable save %s", save_file)
                continue
            if not isinstance(data, dict):
                logger.warning("skipping save %s: not a JSON object", save_file)
                continue
            metadata = data.get("_save_metadata")
            if not isinstance(metadata, dict):
                metadata = {}
            timestamp = metadata.get("timestamp")
            if not isinstance(timestamp, (int, float)):
                timestamp = save_file.stat().st_mtime
            saves.append({
                "filename": save_file.name,
                "filepath": str(save_file),
                "timestamp": timestamp,
                "date_saved": metadata.get("date_saved", "Unknown"),
                "version": metadata.get("version", 0),
                "location": data.get("location", "Unknown"),
            })
        saves.sort(key=lambda x: x["timestamp"], reverse=True)
        return saves

    def delete_save(self, filepath: Path) -> bool:
        path = Path(filepath)
        if not path.exists():
            return False
        try:
            path.unlink()
        except OSError as e:
            raise SaveError(f"Failed to delete save: {e}") from e
        return True


__all__ = ["SAVE_VERSION", "SaveError", "GameMemento", "SaveService", "create_memento", "restore_memento"]
