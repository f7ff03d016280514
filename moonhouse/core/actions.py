"""Turn-level player actions for a command layer.

Each function runs one player action, closes the turn with
``world.end_turn(player)`` (combat, then win check) and returns an
ActionResult dict with keys:
- lines: List[str] text to display, in order
- messages: List[dict] the same output with its severity
- game_over: bool
- outcome: "won" | "died" | None
"""
from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Optional

from .game_world import GameWorld
from .persistence import SaveService
from .player import Player


class ActionError(Exception):
    pass


def _ensure_running(world: GameWorld, player: Player):
    if world.game_over:
        raise ActionError("The game is over.")
    if not player.alive:
        raise ActionError("You are dead.")


def _result(world: GameWorld, player: Player) -> Dict[str, Any]:
    world.end_turn(player)
    messages = player.drain_messages()
    return {
        "lines": [m.text for m in messages],
        "messages": [{"severity": m.severity, "text": m.text} for m in messages],
        "game_over": world.game_over,
        "outcome": world.outcome,
    }


def look(world: GameWorld, player: Player) -> Dict[str, Any]:
    _ensure_running(world, player)
    player.normal_message(player.location.detailed_description())
    return _result(world, player)


def go(world: GameWorld, player: Player, direction: str) -> Dict[str, Any]:
    _ensure_running(world, player)
    player.walk_to(direction.lower().strip() if direction else "")
    return _result(world, player)


def back(world: GameWorld, player: Player) -> Dict[str, Any]:
    _ensure_running(world, player)
    player.go_back()
    return _result(world, player)


def take(world: GameWorld, player: Player, item_name: str) -> Dict[str, Any]:
    _ensure_running(world, player)
    player.take(item_name)
    return _result(world, player)


def drop(world: GameWorld, player: Player, item_name: str) -> Dict[str, Any]:
    _ensure_running(world, player)
    player.drop(item_name)
    return _result(world, player)


def say(world: GameWorld, player: Player, text: str) -> Dict[str, Any]:
    _ensure_running(world, player)
    if not player.say(text):
        player.warning_message("Say what?")
    return _result(world, player)


def shoot(world: GameWorld, player: Player, target: str) -> Dict[str, Any]:
    _ensure_running(world, player)
    player.shoot(target)
    return _result(world, player)


def inspect(world: GameWorld, player: Player, target: str) -> Dict[str, Any]:
    _ensure_running(world, player)
    player.inspect(target)
    return _result(world, player)


def show_inventory(world: GameWorld, player: Player) -> Dict[str, Any]:
    _ensure_running(world, player)
    inv = player.inventory
    if not len(inv):
        player.info_message("Your inventory is empty.")
    else:
        player.info_message("=== INVENTORY ===")
        for item in inv:
            player.info_message(f"  • {item.info()}")
        if inv.capacity is not None:
            player.info_message(f"Carrying {inv.capacity.summary()}")
    return _result(world, player)


def restore_checkpoint(world: GameWorld, player: Player) -> Dict[str, Any]:
    _ensure_running(world, player)
    world.restore_from_checkpoint(player)
    return _result(world, player)


def save(world: GameWorld, player: Player, service: Optional[SaveService] = None) -> Dict[str, Any]:
    _ensure_running(world, player)
    (service or world.save_service or SaveService()).save_game(world, player)
    return _result(world, player)


def load(world: GameWorld, player: Player, service: Optional[SaveService] = None,
         filepath: Optional[Path] = None) -> Dict[str, Any]:
    _ensure_running(world, player)
    (service or world.save_service or SaveService()).load_game(world, player, filepath)
    return _result(world, player)


__all__ = [
    "ActionError", "look", "go", "back", "take", "drop", "say", "shoot",
    "inspect", "show_inventory", "restore_checkpoint", "save", "load",
]
