"""The player collaborator.

Implements the contract the core relies on: a settable current location, an
inventory with name queries, and message sinks by severity. Every action posts
the matching notifications on the world's bus (``player_entered_location``,
``player_spoke``, ``player_acted``).
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, List, Optional

from .. import config
from ..inventory import Capacity, Inventory
from ..items import Item
from .events import PLAYER_ACTED, PLAYER_ENTERED, PLAYER_SPOKE
from .model.base import Location

if TYPE_CHECKING:
    from .game_world import GameWorld

logger = logging.getLogger(__name__)

NORMAL = "normal"
INFO = "info"
WARNING = "warning"
ERROR = "error"

GUN = "Gun"


@dataclass(frozen=True)
class Message:
    severity: str
    text: str


class Player:
    """Madalyn, the reporter trapped in the house."""

    def __init__(self, world: "GameWorld", start: Location, capacity: Optional[Capacity] = None,
                 name: str = "Madalyn", sink: Optional[Callable[[Message], None]] = None):
        if world is None:
            raise ValueError("Player needs a world")
        if start is None:
            raise ValueError("Player needs a starting location")
        self.world = world
        self.name = name
        self._location = start
        self.inventory = Inventory(capacity or Capacity(config.PLAYER_MAX_WEIGHT, config.PLAYER_MAX_VOLUME))
        self._history: List[Location] = []
        self.alive = True
        self.messages: List[Message] = []
        self.sink = sink

    # --- Location ---
    @property
    def location(self) -> Location:
        return self._location

    @location.setter
    def location(self, value: Location):
        if value is None:
            raise ValueError("Player location must not be None")
        self._location = value

    @property
    def history_count(self) -> int:
        return len(self._history)

    def clear_history(self):
        self._history.clear()

    # --- Messages ---
    def report(self, severity: str, text: str):
        if not text:
            return
        msg = Message(severity, text)
        self.messages.append(msg)
        if self.sink is not None:
            self.sink(msg)

    def normal_message(self, text: str):
        self.report(NORMAL, text)

    def info_message(self, text: str):
        self.report(INFO, text)

    def warning_message(self, text: str):
        self.report(WARNING, text)

    def error_message(self, text: str):
        self.report(ERROR, text)

    def drain_messages(self) -> List[Message]:
        out = self.messages
        self.messages = []
        return out

    # --- Movement ---
    def walk_to(self, direction: str) -> bool:
        if not direction or not direction.strip():
            self.warning_message("Please specify a direction.")
            return False
        direction = direction.strip()
        nxt = self.world.get_exit(self.location, direction, self)
        if nxt is None:
            # un'uscita esistente bloccata dal lucchetto ha già prodotto il suo messaggio
            if not self.location.has_exit(direction):
                self.error_message(f"There is no door to the {direction}.")
            self._acted()
            return False
        for agent in self.world.agents_at(nxt):
            self.warning_message(f"You see the {agent.name} in that room!")
        self._history.append(self.location)
        self.location = nxt
        self.normal_message(self.location.describe())
        self._entered()
        self._acted()
        return True

    def go_back(self) -> bool:
        if not self._history:
            self.warning_message("You have nowhere to go back to.")
            return False
        self.location = self._history.pop()
        self.normal_message(f"You returned to: {self.location.tag}")
        self._entered()
        self._acted()
        return True

    # --- Items ---
    def take(self, name: str) -> bool:
        if not name or not name.strip():
            self.warning_message("Please specify an item to take.")
            return False
        name = name.strip()
        item = self.location.find_item(name)
        container = None
        if item is None:
            for candidate in self.location.items.values():
                if candidate.is_container and candidate.find(name) is not None:
                    container = candidate
                    item = candidate.find(name)
                    break
        if item is None:
            self.warning_message(f"There is no '{name}' here to take.")
            return False
        if item.is_container:
            self.warning_message(f"The {item.name} is too heavy to carry.")
            return False
        if not self.inventory.add(item):
            self.error_message(f"Cannot carry {item.name}. Capacity limit exceeded! ({self.inventory.capacity.summary()})")
            return False
        item.is_new = False
        if container is not None:
            container.remove(item.name)
            self.normal_message(f"You took {item.name} from the {container.name}.")
        else:
            self.location.remove_item(item.name)
            self.normal_message(f"You added {item.name} to your inventory.")
        self._acted()
        return True

    def drop(self, name: str) -> bool:
        if not name or not name.strip():
            self.warning_message("Please specify an item to drop.")
            return False
        item = self.inventory.remove_by_name(name.strip())
        if item is None:
            self.warning_message(f"You don't have '{name.strip()}' in your inventory.")
            return False
        self.location.add_item(item)
        self.normal_message(f"You removed {item.name} from your inventory.")
        self._acted()
        return True

    def inspect(self, name: str) -> Optional[Item]:
        if not name or not name.strip():
            self.warning_message("Please specify what to inspect.")
            return None
        item = self.location.find_item(name.strip())
        if item is None:
            self.error_message(f"There is no '{name.strip()}' here to inspect.")
            return None
        self.info_message(f"{item.name}: {item.description}")
        if item.is_container:
            contents = item.list_contents()
            if not contents:
                self.info_message("It's empty.")
            else:
                self.info_message("It contains:")
                for inner in contents:
                    self.info_message(f"  • {inner.name}: {inner.description}")
        return item

    def shoot(self, target: str) -> bool:
        if not target or not target.strip():
            self.warning_message("Please specify what to shoot.")
            return False
        if not self.inventory.contains(GUN):
            self.error_message("You need a gun to shoot!")
            return False
        item = self.location.find_item(target.strip())
        if item is None:
            self.warning_message(f"There is no '{target.strip()}' here to shoot.")
            return False
        effect = item.on_shot
        if effect is None:
            self.normal_message(f"You shoot the {item.name}, but nothing happens.")
            self._acted()
            return True
        if effect.reveals_passage:
            hidden = self.world.get_location_by_tag(effect.reveal_target)
            if hidden is None:
                self.error_message(effect.failure_message)
                self._acted()
                return False
            self.world.graph.set_exit(self.location, effect.reveal_direction, hidden)
        self.location.remove_item(item.name)
        if effect.spawn is not None:
            self.location.add_item(effect.spawn.clone())
        self.normal_message(effect.message)
        logger.info("%s shot %s in %s", self.name, item.name, self.location.tag)
        self._acted()
        return True

    # --- Speech / death ---
    def say(self, text: str) -> bool:
        if not text or not text.strip():
            return False
        word = text.strip()
        self.normal_message(f'"{word}"')
        self.world.bus.publish(PLAYER_SPOKE, self, {"word": word})
        self._acted()
        return True

    def die(self):
        if not self.alive:
            return
        self.alive = False
        self.error_message("=== YOU ARE DEAD ===")
        self.error_message("The butcher added you to the family...")

    # --- Notifications ---
    def _entered(self):
        self.world.bus.publish(PLAYER_ENTERED, self)

    def _acted(self):
        self.world.bus.publish(PLAYER_ACTED, self)

    def __repr__(self) -> str:
        return f"Player({self.name!r} @ {self.location.tag}, items={len(self.inventory)})"


__all__ = ["Player", "Message", "NORMAL", "INFO", "WARNING", "ERROR", "GUN"]
