"""Location graph and tag registry.

Holds every location of a world, resolves exits through access rules and
answers graph-distance queries for the antagonist.
"""
from __future__ import annotations
import logging
from collections import deque
from typing import Any, Dict, Iterator, List, Optional, Set

from .access import AccessRule
from .model.base import Location

logger = logging.getLogger(__name__)


class LocationGraph:
    """Registry (tag -> Location) plus the set of all known graph nodes."""

    def __init__(self):
        self._by_tag: Dict[str, Location] = {}
        # Tutti i nodi noti (registrati o raggiunti tramite set_exit), in ordine
        self._nodes: Dict[Location, None] = {}

    # --- Registry ---
    def register_location(self, tag: str, location: Optional[Location]) -> None:
        """Index *location* under *tag*. Empty tag or None location are ignored."""
        if not tag or location is None:
            return
        self._by_tag[tag] = location
        self._nodes.setdefault(location, None)

    def add(self, location: Location) -> Location:
        """Register a location under its own tag and return it."""
        self.register_location(location.tag, location)
        return location

    def create(self, tag: str, description: str = "") -> Location:
        return self.add(Location(tag, description))

    def get_location_by_tag(self, tag: str) -> Optional[Location]:
        if not tag:
            return None
        return self._by_tag.get(tag)

    def tags(self) -> List[str]:
        return list(self._by_tag)

    def __contains__(self, tag: object) -> bool:
        return tag in self._by_tag

    def __len__(self) -> int:
        return len(self._by_tag)

    def __iter__(self) -> Iterator[Location]:
        return iter(list(self._by_tag.values()))

    # --- Exits ---
    def set_exit(self, origin: Location, direction: str, target: Location) -> None:
        """Create or overwrite the exit *direction* of *origin*."""
        if origin is None:
            raise ValueError("origin must not be None")
        origin.set_exit(direction, target)
        self._nodes.setdefault(origin, None)
        self._nodes.setdefault(target, None)

    def connect(self, a: Location, direction: str, b: Location, back_direction: str) -> None:
        """Two opposite exits in one call."""
        self.set_exit(a, direction, b)
        self.set_exit(b, back_direction, a)

    def get_exit(self, origin: Location, direction: str, asker: Any = None) -> Optional[Location]:
        """Resolve an exit, letting the origin's access rule veto it.

        The rule is consulted only when an asker with an inventory is given;
        agents query with no asker and are never blocked.
        """
        if origin is None:
            return None
        target = origin.raw_exit(direction)
        if target is None:
            return None
        rule = origin.access
        if rule is not None and asker is not None and getattr(asker, "inventory", None) is not None:
            target = rule.filter_exit(direction, target, asker)
        return target

    # --- Access rules ---
    def attach_access(self, location: Location, rule: Optional[AccessRule]) -> None:
        """Bind *rule* to *location* exclusively (None detaches)."""
        if location is None:
            raise ValueError("location must not be None")
        if rule is not None:
            for node in self._nodes:
                if node is not location and node.access is rule:
                    logger.debug("access rule moved from %s to %s", node.tag, location.tag)
                    node.access = None
        location.access = rule
        self._nodes.setdefault(location, None)

    def owner_of(self, rule: AccessRule) -> Optional[Location]:
        for node in self._nodes:
            if node.access is rule:
                return node
        return None

    # --- Distance ---
    def neighbors(self, location: Location) -> Set[Location]:
        """Adjacent locations ignoring edge direction."""
        found: Set[Location] = set(location.exits.values())
        for node in self._nodes:
            if node is not location and location in node.exits.values():
                found.add(node)
        found.discard(location)
        return found

    def distance(self, start: Location, target: Location, limit: Optional[int] = None) -> Optional[int]:
        """Hop count between two locations, or None if unreachable within *limit*."""
        if start is None or target is None:
            return None
        if start is target:
            return 0
        if limit is not None and limit <= 0:
            return None
        visited = {start}
        frontier = deque([(start, 0)])
        while frontier:
            node, depth = frontier.popleft()
            if limit is not None and depth >= limit:
                continue
            for nxt in self.neighbors(node):
                if nxt in visited:
                    continue
                if nxt is target:
                    return depth + 1
                visited.add(nxt)
                frontier.append((nxt, depth + 1))
        return None

    def within_range(self, start: Location, target: Location, radius: int) -> bool:
        if radius < 0:
            return False
        return self.distance(start, target, limit=radius) is not None
