"""World loading and validation utilities.

Turns a world table (dict, usually read from ``assets/world/house.json``) into
a wired ``GameWorld``. No I/O performed here; caller is responsible for
reading JSON from disk.
"""
from __future__ import annotations
import logging
import random
from typing import Any, Dict, List, Optional

import jsonschema

from ...items import item_from_dict
from ..access import AccessRule
from ..agent import Antagonist
from ..events import EventBus
from ..game_world import DEFAULT_ESCAPE_ITEMS, GameWorld
from ..model.base import Location
from ..state import WorldEvent
from .schema import WORLD_SCHEMA

logger = logging.getLogger(__name__)

__all__ = ["WorldDataError", "build_world_from_dict", "validate_world_data"]


class WorldDataError(Exception):
    """The world table is malformed or references unknown locations."""

    def __init__(self, issues: List[str]):
        self.issues = list(issues)
        super().__init__("invalid world data:\n  " + "\n  ".join(self.issues))


def _schema_issues(data: Dict[str, Any]) -> List[str]:
    validator = jsonschema.Draft7Validator(WORLD_SCHEMA)
    issues = []
    for err in sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path]):
        where = "/".join(str(p) for p in err.path) or "<root>"
        issues.append(f"schema: {where}: {err.message}")
    return issues


def validate_world_data(data: Dict[str, Any]) -> List[str]:
    """Return a list of problems found in *data* (empty when valid)."""
    if not isinstance(data, dict):
        return ["world data must be a JSON object"]
    issues = _schema_issues(data)
    if issues:
        return issues

    tags: set = set()
    for loc in data["locations"]:
        if loc["tag"] in tags:
            issues.append(f"duplicate location tag '{loc['tag']}'")
        tags.add(loc["tag"])

    def check(tag: Optional[str], what: str):
        if tag is not None and tag not in tags:
            issues.append(f"{what} references unknown location '{tag}'")

    for loc in data["locations"]:
        for direction, target in loc.get("exits", {}).items():
            check(target, f"exit {loc['tag']}.{direction}")
        access = loc.get("access")
        if access and access["kind"] == "locked":
            if not access.get("required_items"):
                issues.append(f"lock on '{loc['tag']}' has no required items")
            if "guards" not in access:
                issues.append(f"lock on '{loc['tag']}' does not name the location it guards")
            else:
                check(access["guards"], f"lock on '{loc['tag']}'")
                if access["guards"] not in loc.get("exits", {}).values():
                    issues.append(f"lock on '{loc['tag']}' guards '{access['guards']}' which is not one of its exits")
        for item in loc.get("items", []):
            reveal = (item.get("on_shot") or {}).get("reveal")
            if reveal:
                check(reveal["target"], f"item '{item['name']}' passage")

    for key in ("entrance", "exit", "safe_location"):
        check(data.get(key), key)
    for tag in data.get("checkpoints", []):
        check(tag, "checkpoint")
    for agent in data.get("agents", []):
        check(agent["home"], f"agent '{agent['name']}'")
    for ev in data.get("events", []):
        for key in ("trigger", "from", "to"):
            check(ev[key], f"event {key}")
    return issues


def build_world_from_dict(data: Dict[str, Any], bus: Optional[EventBus] = None,
                          rng: Optional[random.Random] = None, **world_kwargs: Any) -> GameWorld:
    issues = validate_world_data(data)
    if issues:
        for issue in issues:
            logger.warning("world data: %s", issue)
        raise WorldDataError(issues)

    world = GameWorld(bus=bus, rng=rng,
                      escape_items=data.get("escape_items", DEFAULT_ESCAPE_ITEMS),
                      **world_kwargs)

    # Prima tutte le stanze, poi le uscite (i riferimenti possono essere in avanti)
    for loc in data["locations"]:
        location = Location(loc["tag"], loc.get("description", ""))
        for item in loc.get("items", []):
            location.add_item(item_from_dict(item))
        world.register_location(location.tag, location)

    for loc in data["locations"]:
        location = world.get_location_by_tag(loc["tag"])
        for direction, target in loc.get("exits", {}).items():
            world.graph.set_exit(location, direction, world.get_location_by_tag(target))
        access = loc.get("access")
        if access:
            world.attach_access(location, _build_rule(world, access))

    world.entrance = world.get_location_by_tag(data["entrance"])
    world.exit = world.get_location_by_tag(data.get("exit"))
    world.safe_location = world.get_location_by_tag(data.get("safe_location"))
    for tag in data.get("checkpoints", []):
        world.add_checkpoint_location(world.get_location_by_tag(tag))

    for agent in data.get("agents", []):
        world.add_agent(Antagonist(
            agent["name"],
            world.get_location_by_tag(agent["home"]),
            world.bus,
            world.graph,
            aggression_radius=agent.get("aggression_radius"),
            ward_items=agent.get("ward_items", ()),
            rng=world.rng,
            cooldown=agent.get("cooldown"),
        ))

    for ev in data.get("events", []):
        world.add_event(
            world.get_location_by_tag(ev["trigger"]),
            WorldEvent(
                world.get_location_by_tag(ev["from"]),
                world.get_location_by_tag(ev["to"]),
                ev["to_direction"],
                ev["from_direction"],
                ev.get("description", "door"),
            ),
        )

    logger.info("world '%s' built: %d locations, %d agents",
                data.get("name", "?"), len(world.graph), len(world.agents))
    return world


def _build_rule(world: GameWorld, access: Dict[str, Any]) -> AccessRule:
    kind = access["kind"]
    if kind == "echo":
        return AccessRule.echo()
    if kind == "pass_through":
        return AccessRule.pass_through()
    return AccessRule.locked(
        access["required_items"],
        world.get_location_by_tag(access["guards"]),
        unlock_message=access.get("unlock_message"),
        locked_message=access.get("locked_message"),
    )
