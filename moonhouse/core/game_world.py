"""World orchestrator.

``GameWorld`` owns everything a single game needs: the bus, the location
graph, the antagonists, pending world events and the checkpoint slot. It is an
explicit context object handed to every collaborator; there is no global
instance.

All bus subscriptions are made here (``_wire`` for the world's own handlers,
``add_agent`` for antagonists), so the order of reactions to
``player_entered_location`` is fixed:

1. world reaction (combat, entrance/exit, checkpoint, pending event, hint);
2. access rule of the new location (arrival unlock or missing-item report);
3. antagonists (tracking / pursuit), in the order they were added.
"""
from __future__ import annotations
import logging
import random
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Tuple

from .. import config
from .access import AccessRule
from .agent import Antagonist
from .events import (
    AGENT_MOVED, CHECKPOINT_SET, PLAYER_ACTED, PLAYER_DIED, PLAYER_ENTERED,
    PLAYER_SPOKE, PLAYER_WON, EventBus, Notification,
)
from .model.base import Location
from .registry import LocationGraph
from .state import Checkpoint, CheckpointError

logger = logging.getLogger(__name__)

DEFAULT_ESCAPE_ITEMS: Tuple[str, ...] = ("Gun", "Heart of a Madmen", "Fractured Skull")

ITEM_HINTS: Tuple[str, ...] = (
    "You sense something might be worth examining here...",
    "The air feels different here - maybe there's something nearby?",
    "Your instincts tell you to look around carefully...",
    "Something catches your eye in this room...",
    "You notice something unusual about this place...",
)

WON = "won"
DIED = "died"


class GameWorld:
    def __init__(self, bus: Optional[EventBus] = None, graph: Optional[LocationGraph] = None,
                 rng: Optional[random.Random] = None,
                 escape_items: Iterable[str] = DEFAULT_ESCAPE_ITEMS,
                 save_service: Any = None,
                 autosave: Optional[bool] = None):
        self.bus = bus or EventBus()
        self.graph = graph or LocationGraph()
        self.rng = rng or random.Random(config.get_random_seed())
        self.escape_items: Tuple[str, ...] = tuple(escape_items)
        self.save_service = save_service
        self.autosave = config.AUTOSAVE_ON_CHECKPOINT if autosave is None else autosave

        self.entrance: Optional[Location] = None
        self.exit: Optional[Location] = None
        self.safe_location: Optional[Location] = None
        self._checkpoint_locations: List[Location] = []

        self._events: Dict[Hashable, Callable[[], Any]] = {}
        self._agents: List[Antagonist] = []
        self.checkpoint: Optional[Checkpoint] = None
        self.player: Any = None
        self.game_over = False
        self.outcome: Optional[str] = None
        self._wire()

    def _wire(self):
        self.bus.subscribe(PLAYER_ENTERED, self._on_player_entered)
        self.bus.subscribe(PLAYER_ENTERED, self._on_access_arrival)
        self.bus.subscribe(PLAYER_SPOKE, self._on_player_spoke)
        self.bus.subscribe(AGENT_MOVED, self._on_agent_moved)
        self.bus.subscribe(PLAYER_WON, self._on_player_won)
        self.bus.subscribe(PLAYER_DIED, self._on_player_died)

    # --- Registry ---
    def register_location(self, tag: str, location: Optional[Location]):
        self.graph.register_location(tag, location)

    def get_location_by_tag(self, tag: str) -> Optional[Location]:
        return self.graph.get_location_by_tag(tag)

    def get_exit(self, origin: Location, direction: str, asker: Any = None) -> Optional[Location]:
        return self.graph.get_exit(origin, direction, asker)

    def attach_access(self, location: Location, rule: Optional[AccessRule]):
        self.graph.attach_access(location, rule)

    def add_checkpoint_location(self, location: Location):
        if location is None:
            raise ValueError("checkpoint location must not be None")
        if location not in self._checkpoint_locations:
            self._checkpoint_locations.append(location)

    @property
    def checkpoint_locations(self) -> List[Location]:
        return list(self._checkpoint_locations)

    def set_player(self, player: Any):
        self.player = player

    # --- Agents ---
    def add_agent(self, agent: Antagonist) -> Antagonist:
        if agent is None:
            raise ValueError("agent must not be None")
        if agent.bus is not self.bus:
            raise ValueError("agent must publish on the world's bus")
        self._agents.append(agent)
        self.bus.subscribe(PLAYER_ENTERED, agent.on_player_moved)
        self.bus.subscribe(PLAYER_ACTED, agent.on_player_acted)
        return agent

    @property
    def agents(self) -> List[Antagonist]:
        return list(self._agents)

    def agents_at(self, location: Optional[Location]) -> List[Antagonist]:
        if location is None:
            return []
        return [a for a in self._agents if not a.removed and a.location is location]

    def agent_in_range(self, location: Optional[Location]) -> bool:
        return any(a.is_within_range(location) for a in self._agents)

    # --- Pending events ---
    def has_event(self, trigger: Hashable) -> bool:
        return trigger is not None and trigger in self._events

    def add_event(self, trigger: Hashable, action: Optional[Callable[[], Any]]):
        """Register a one-shot action under *trigger*, replacing any previous one."""
        if trigger is None or action is None:
            return
        self._events[trigger] = action

    def trigger_event(self, trigger: Hashable) -> bool:
        """Fire and forget the event under *trigger*. Returns False if none was pending."""
        if not self.has_event(trigger):
            return False
        action = self._events.pop(trigger)
        action()
        logger.info("world event fired for %s", getattr(trigger, "tag", trigger))
        return True

    def pending_events(self) -> List[Hashable]:
        return list(self._events)

    # --- Win / combat ---
    def check_win_condition(self, player: Any) -> bool:
        if self.game_over or player is None or self.safe_location is None:
            return False
        if player.location is not self.safe_location:
            return False
        if not player.inventory.contains_all(self.escape_items):
            return False
        player.normal_message("=== VICTORY ===")
        player.normal_message("You have escaped the Moon Family House with the evidence!")
        self.bus.publish(PLAYER_WON, player, {"reason": "escaped"})
        return True

    def check_enemy_interactions(self, player: Any) -> bool:
        """Resolve combat with every agent sharing the player's location."""
        if self.game_over or player is None or not getattr(player, "alive", True):
            return False
        fought = False
        for agent in self.agents_at(player.location):
            if self.game_over:
                break
            agent.attack(player)
            fought = True
        return fought

    def end_turn(self, player: Any):
        self.check_enemy_interactions(player)
        self.check_win_condition(player)

    # --- Checkpoints ---
    def set_checkpoint(self, location: Location, player: Any):
        if location is None or player is None:
            raise CheckpointError("cannot set a checkpoint without location and player")
        self.checkpoint = Checkpoint.capture(location, player.inventory.items)
        player.info_message(f"Checkpoint set at {location.tag}")
        logger.info("checkpoint at %s (%d items)", location.tag, len(self.checkpoint.item_names()))
        self.bus.publish(CHECKPOINT_SET, self, {"location": location})

    def restore_from_checkpoint(self, player: Any) -> bool:
        if self.checkpoint is None:
            player.error_message("No checkpoint available")
            return False
        if not self.checkpoint.is_valid():
            player.error_message("Checkpoint is invalid")
            return False
        player.location = self.checkpoint.location
        player.clear_history()
        player.inventory.clear()
        for item in self.checkpoint.restore_items():
            player.inventory.add(item)
        player.normal_message(f"Restored from checkpoint at {self.checkpoint.location.tag}")
        return True

    # --- Handlers ---
    def _on_player_entered(self, notification: Notification):
        player = notification.sender
        if player is None or getattr(player, "location", None) is None:
            return
        location = player.location

        self.check_enemy_interactions(player)
        if self.game_over:
            return

        if location is self.entrance:
            player.error_message("You are back at the entrance")
        if location is self.exit:
            player.error_message("You are now at the exit")

        if location in self._checkpoint_locations:
            self.set_checkpoint(location, player)
            if self.autosave and self.save_service is not None:
                self.save_service.save_game(self, player)

        if self.trigger_event(location):
            player.warning_message("You changed the world!")

        if location.items:
            player.warning_message(self.rng.choice(ITEM_HINTS))

    def _on_access_arrival(self, notification: Notification):
        player = notification.sender
        if self.game_over or player is None or getattr(player, "location", None) is None:
            return
        rule = player.location.access
        if rule is not None:
            rule.on_arrival(player)

    def _on_player_spoke(self, notification: Notification):
        player = notification.sender
        if player is None or getattr(player, "location", None) is None:
            return
        rule = player.location.access
        if rule is not None:
            rule.on_speech(player, notification.get("word", ""))

    def _on_agent_moved(self, notification: Notification):
        player = self.player
        if self.game_over or player is None:
            return
        if notification.get("to") is player.location:
            self.check_enemy_interactions(player)

    def _on_player_won(self, notification: Notification):
        self._finish(WON, notification)

    def _on_player_died(self, notification: Notification):
        self._finish(DIED, notification)

    def _finish(self, outcome: str, notification: Notification):
        if self.game_over:
            return
        self.game_over = True
        self.outcome = outcome
        logger.info("game over: %s (%s)", outcome, notification.get("reason", notification.name))

    def __repr__(self) -> str:
        return f"GameWorld(locations={len(self.graph)}, agents={len(self._agents)}, events={len(self._events)})"


__all__ = ["GameWorld", "DEFAULT_ESCAPE_ITEMS", "ITEM_HINTS", "WON", "DIED"]
