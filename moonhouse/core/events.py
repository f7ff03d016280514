"""Event bus for decoupled world reactions.

Named-topic publish/subscribe hub. Dispatch is synchronous and exhaustive:
``publish()`` returns only after every handler subscribed at publish time has
run, so the orchestrator can examine post-conditions (combat, win) right after
an action. Usage::

    bus = EventBus()
    bus.subscribe(PLAYER_ENTERED, on_enter)
    bus.publish(PLAYER_ENTERED, sender=player)

Rules:
  - handlers run in subscription order on a snapshot of the subscriber list;
    subscribing/unsubscribing during dispatch only affects later publishes;
  - publishing to a topic with no subscribers is a no-op;
  - a failing handler never stops the others. Failures are logged, collected
    and returned; in strict mode ``DispatchError`` is raised after the pass.
"""
from __future__ import annotations
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from .. import config

logger = logging.getLogger(__name__)

# Topic names
PLAYER_ENTERED = "player_entered_location"
PLAYER_ACTED = "player_acted"
PLAYER_SPOKE = "player_spoke"
AGENT_MOVED = "agent_moved"
PLAYER_WON = "player_won"
PLAYER_DIED = "player_died"
CHECKPOINT_SET = "checkpoint_set"


@dataclass(frozen=True)
class Notification:
    """A published event: topic name, sending object and extra data."""
    name: str
    sender: Any = None
    info: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.info.get(key, default)

    def __str__(self) -> str:
        sender = f" from {type(self.sender).__name__}" if self.sender is not None else ""
        data = f" with {len(self.info)} data item(s)" if self.info else ""
        return f"Notification: {self.name}{sender}{data}"


Handler = Callable[[Notification], None]
Failure = Tuple[Handler, BaseException]


class DispatchError(Exception):
    """One or more handlers raised during a strict dispatch."""

    def __init__(self, topic: str, failures: List[Failure]):
        self.topic = topic
        self.failures = failures
        names = ", ".join(getattr(h, "__qualname__", repr(h)) for h, _ in failures)
        super().__init__(f"{len(failures)} handler(s) failed for '{topic}': {names}")


class EventBus:
    """Synchronous topic bus owned by one world instance."""

    def __init__(self, strict: Optional[bool] = None):
        self._subs: Dict[str, List[Handler]] = {}
        self._stats: Dict[str, int] = defaultdict(int)
        self.strict = config.BUS_STRICT if strict is None else strict

    # ── Subscriptions ────────────────────────────────────────────────

    def subscribe(self, topic: str, handler: Handler) -> None:
        """Register *handler* for *topic*. The same handler may be added twice."""
        if not topic or not topic.strip():
            raise ValueError("topic must be a non-empty string")
        if not callable(handler):
            raise TypeError("handler must be callable")
        self._subs.setdefault(topic, []).append(handler)

    def unsubscribe(self, topic: str, handler: Handler) -> None:
        """Remove the first registration of *handler*; unknown pairs are ignored."""
        handlers = self._subs.get(topic)
        if not handlers:
            return
        try:
            handlers.remove(handler)
        except ValueError:
            return
        if not handlers:
            del self._subs[topic]

    def has_subscribers(self, topic: str) -> bool:
        return bool(self._subs.get(topic))

    def subscriber_count(self, topic: str) -> int:
        return len(self._subs.get(topic, ()))

    def clear(self, topic: Optional[str] = None) -> None:
        if topic is None:
            self._subs.clear()
        else:
            self._subs.pop(topic, None)

    # ── Dispatch ─────────────────────────────────────────────────────

    def publish(self, topic: str, sender: Any = None, info: Optional[Dict[str, Any]] = None) -> List[Failure]:
        """Deliver a notification to every current subscriber of *topic*.

        Returns the list of ``(handler, exception)`` failures (empty when all
        handlers succeeded).
        """
        return self.post(Notification(topic, sender, dict(info or {})))

    def post(self, notification: Notification) -> List[Failure]:
        if notification is None:
            raise ValueError("notification must not be None")
        topic = notification.name
        self._stats[topic] += 1
        snapshot = list(self._subs.get(topic, ()))
        if not snapshot:
            return []
        logger.debug("dispatch %s to %d handler(s)", topic, len(snapshot))
        failures: List[Failure] = []
        for handler in snapshot:
            try:
                handler(notification)
            except Exception as exc:
                logger.exception("handler %r failed for %s", handler, topic)
                failures.append((handler, exc))
        if failures and self.strict:
            raise DispatchError(topic, failures)
        return failures

    def stats(self) -> Dict[str, int]:
        """Cumulative publish counts by topic."""
        return dict(self._stats)

    def __repr__(self) -> str:
        return f"EventBus(topics={len(self._subs)}, strict={self.strict})"


__all__ = [
    "EventBus", "Notification", "DispatchError", "Handler",
    "PLAYER_ENTERED", "PLAYER_ACTED", "PLAYER_SPOKE", "AGENT_MOVED",
    "PLAYER_WON", "PLAYER_DIED", "CHECKPOINT_SET",
]
