"""The antagonist: an autonomous entity hunting the player through the house.

Two drivers, both subscribed by the world orchestrator:

- ``on_player_moved``: remember the player; if they are within the aggression
  radius (breadth-first, undirected) take one pursuit step through a random
  exit of the current location.
- ``on_player_acted``: a small cooldown, then a coin flip for a random step,
  unless the tracked player already shares the location.

Combat is resolved by the orchestrator through ``attack()`` whenever the
player and the agent are co-located.
"""
from __future__ import annotations
import logging
import random
from typing import Any, Iterable, Optional, Tuple

from .. import config
from .events import AGENT_MOVED, PLAYER_DIED, PLAYER_WON, EventBus, Notification
from .model.base import Location
from .registry import LocationGraph

logger = logging.getLogger(__name__)

# Esiti di attack()
NO_COMBAT = "none"
BANISHED = "banished"
KILLED = "killed"


class Antagonist:
    """A hunting agent (the Butcher in the default world)."""

    def __init__(self, name: str, home: Location, bus: EventBus, graph: LocationGraph,
                 aggression_radius: Optional[int] = None,
                 ward_items: Iterable[str] = (),
                 rng: Optional[random.Random] = None,
                 cooldown: Optional[int] = None):
        if not name or not name.strip():
            raise ValueError("Antagonist name must not be empty")
        if not isinstance(home, Location):
            raise ValueError("Antagonist needs a starting Location")
        radius = config.DEFAULT_AGGRESSION_RADIUS if aggression_radius is None else aggression_radius
        if radius < 0:
            raise ValueError("aggression_radius must be >= 0")
        self.name = name
        self.location: Optional[Location] = home
        self.home = home
        self.bus = bus
        self.graph = graph
        self.aggression_radius = radius
        self.ward_items: Tuple[str, ...] = tuple(ward_items)
        self.rng = rng or random.Random()
        self.cooldown_max = config.AGENT_MOVE_COOLDOWN if cooldown is None else cooldown
        self.cooldown = 0
        self.target: Any = None

    @property
    def removed(self) -> bool:
        """True once banished: the agent no longer occupies any location."""
        return self.location is None

    # --- Range ---
    def is_within_range(self, location: Optional[Location]) -> bool:
        if self.removed or location is None:
            return False
        return self.graph.within_range(self.location, location, self.aggression_radius)

    # --- Bus handlers ---
    def on_player_moved(self, notification: Notification):
        player = notification.sender
        if player is None or self.removed or not getattr(player, "alive", True):
            return
        self.target = player
        if self.is_within_range(getattr(player, "location", None)):
            self.pursue()

    def on_player_acted(self, notification: Notification):
        if self.removed:
            return
        if self.cooldown > 0:
            self.cooldown -= 1
            return
        self.cooldown = self.cooldown_max
        if self.target is not None and getattr(self.target, "location", None) is self.location:
            return
        # lancio della moneta
        if self.rng.randrange(2) == 0:
            self.wander()

    # --- Movement ---
    def pursue(self) -> bool:
        """One step toward the tracked player (a random exit, like the original hunt)."""
        if self.target is None:
            return False
        return self._random_step()

    def wander(self) -> bool:
        return self._random_step()

    def _random_step(self) -> bool:
        if self.removed:
            return False
        directions = self.location.exit_directions()
        if not directions:
            return False
        direction = self.rng.choice(directions)
        nxt = self.graph.get_exit(self.location, direction, None)
        if nxt is None:
            return False
        self.move_to(nxt)
        return True

    def move_to(self, destination: Optional[Location]):
        if destination is None or self.removed:
            return
        origin = self.location
        self.location = destination
        logger.debug("%s moves from %s to %s", self.name, origin.tag, destination.tag)
        self.bus.publish(AGENT_MOVED, self, {"from": origin, "to": destination})

    def return_home(self):
        if not self.removed and self.location is not self.home:
            self.move_to(self.home)

    def stop_tracking(self):
        self.target = None

    # --- Combat ---
    def wards_held(self, player: Any) -> bool:
        inventory = getattr(player, "inventory", None)
        return inventory is not None and inventory.contains_all(self.ward_items)

    def attack(self, player: Any) -> str:
        """Resolve an encounter with a co-located player."""
        if player is None:
            raise ValueError("player must not be None")
        if self.removed or player.location is not self.location:
            return NO_COMBAT
        if self.wards_held(player):
            player.normal_message(f"The {self.name} recoils in fear from your sacred items!")
            self.banish()
            self.bus.publish(PLAYER_WON, player, {"reason": "banished", "agent": self})
            return BANISHED
        player.error_message(f"The {self.name} attacks you mercilessly!")
        player.error_message("You didn't have the required items to defend yourself!")
        player.die()
        self.bus.publish(PLAYER_DIED, player, {"agent": self})
        return KILLED

    def banish(self):
        logger.info("%s banished from %s", self.name, self.location.tag if self.location else "?")
        self.location = None
        self.target = None

    def __repr__(self) -> str:
        where = self.location.tag if self.location else "removed"
        return f"Antagonist({self.name!r} @ {where}, radius={self.aggression_radius})"


__all__ = ["Antagonist", "NO_COMBAT", "BANISHED", "KILLED"]
