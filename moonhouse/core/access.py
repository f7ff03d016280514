"""Location access rules.

A rule is a tagged variant held directly by its owning ``Location``:

- ``LOCKED``: blocks the exit toward one guarded location until the asker
  carries every required item. The ``engaged -> disengaged`` transition is
  one-way. Matching items are consumed on every unlock, whether it happens on
  an exit request or on arrival in the owning location.
- ``ECHO``: repeats what the player says; never blocks.
- ``PASS_THROUGH``: identity gate.

The asker is any object exposing ``inventory`` (see ``moonhouse.inventory``)
and the message methods of the player contract (``info_message``,
``error_message``).
"""
from __future__ import annotations
import logging
from enum import Enum
from typing import Any, Iterable, List, Optional, Tuple

from .model.base import Location

logger = logging.getLogger(__name__)


class AccessKind(Enum):
    LOCKED = "locked"
    ECHO = "echo"
    PASS_THROUGH = "pass_through"


def _has_inventory(asker: Any) -> bool:
    return asker is not None and getattr(asker, "inventory", None) is not None


class AccessRule:
    """One access rule. Build it with ``locked()``, ``echo()`` or ``pass_through()``."""

    def __init__(self, kind: AccessKind, required_items: Iterable[str] = (),
                 guarded: Optional[Location] = None,
                 unlock_message: Optional[str] = None,
                 locked_message: Optional[str] = None):
        self._kind = kind
        self._required: Tuple[str, ...] = tuple(dict.fromkeys(n.strip() for n in required_items if n and n.strip()))
        self._guarded = guarded
        self.engaged = kind is AccessKind.LOCKED
        if kind is AccessKind.LOCKED:
            if not self._required:
                raise ValueError("At least one required item must be specified.")
            if not isinstance(guarded, Location):
                raise ValueError("A locked rule needs the Location it guards.")
        self.unlock_message = unlock_message or "The required items fit! The path is now unlocked."
        self.locked_message = locked_message or self._default_locked_message()

    # --- Costruttori per variante ---
    @classmethod
    def locked(cls, required_items: Iterable[str], guarded: Location,
               unlock_message: Optional[str] = None,
               locked_message: Optional[str] = None) -> "AccessRule":
        return cls(AccessKind.LOCKED, required_items, guarded, unlock_message, locked_message)

    @classmethod
    def echo(cls) -> "AccessRule":
        return cls(AccessKind.ECHO)

    @classmethod
    def pass_through(cls) -> "AccessRule":
        return cls(AccessKind.PASS_THROUGH)

    @property
    def kind(self) -> AccessKind:
        return self._kind

    @property
    def required_items(self) -> Tuple[str, ...]:
        return self._required

    @property
    def guarded(self) -> Optional[Location]:
        return self._guarded

    # --- Exit requests ---
    def filter_exit(self, direction: str, target: Optional[Location], asker: Any) -> Optional[Location]:
        """Return *target* unchanged, or None when the rule blocks the move."""
        if self._kind is not AccessKind.LOCKED or not self.engaged:
            return target
        if target is None or target is not self._guarded or not _has_inventory(asker):
            return target
        if not asker.inventory.contains_all(self._required):
            asker.error_message(self.locked_message)
            return None
        self._unlock(asker)
        return target

    # --- Reactions (dispatched by the world orchestrator) ---
    def on_arrival(self, asker: Any) -> bool:
        """The asker entered the owning location. Returns True if it unlocked."""
        if self._kind is not AccessKind.LOCKED or not self.engaged or not _has_inventory(asker):
            return False
        missing = self.missing_items(asker)
        if not missing:
            self._unlock(asker)
            return True
        if len(self._required) == 1:
            asker.error_message(f"You still need the {missing[0]}.")
        else:
            asker.error_message(f"You're still missing: {', '.join(missing)}")
        return False

    def on_speech(self, asker: Any, text: str) -> Optional[str]:
        if self._kind is not AccessKind.ECHO or asker is None:
            return None
        word = (text or "").strip()
        if not word:
            return None
        echo = f"{word}... {word}... {word}..."
        asker.info_message(echo)
        return echo

    def missing_items(self, asker: Any) -> List[str]:
        if not _has_inventory(asker):
            return list(self._required)
        return asker.inventory.missing(self._required)

    def _unlock(self, asker: Any):
        self.engaged = False
        asker.info_message(self.unlock_message)
        for name in self._required:
            asker.inventory.remove_by_name(name)
        logger.info("lock toward %s disengaged (consumed %s)", self._guarded.tag, ", ".join(self._required))

    def _default_locked_message(self) -> str:
        if len(self._required) == 1:
            return f"You need {self._required[0]} to proceed!"
        return f"You need: {', '.join(self._required)}"

    def __repr__(self) -> str:
        if self._kind is AccessKind.LOCKED:
            return f"AccessRule(LOCKED -> {self._guarded.tag}, engaged={self.engaged})"
        return f"AccessRule({self._kind.name})"


__all__ = ["AccessKind", "AccessRule"]
