"""Tests for location access rules (locked, echo, pass-through)."""

import pytest

from moonhouse.core.access import AccessKind, AccessRule
from moonhouse.core.model.base import Location
from moonhouse.inventory import Inventory
from moonhouse.items import Item


class Asker:
    def __init__(self, *names):
        self.inventory = Inventory()
        for n in names:
            self.inventory.add(Item(n))
        self.errors = []
        self.infos = []

    def error_message(self, text):
        self.errors.append(text)

    def info_message(self, text):
        self.infos.append(text)


@pytest.fixture
def rooms():
    bedroom = Location("BedRoom_Ch")
    bathroom = Location("Bathroom")
    stairs = Location("Third_Stairs")
    bedroom.set_exit("north", bathroom)
    bedroom.set_exit("west", stairs)
    return bedroom, bathroom, stairs


@pytest.fixture
def lock(rooms):
    _, bathroom, _ = rooms
    return AccessRule.locked(["Silver key", "Old key"], bathroom,
                             unlock_message="The key works!",
                             locked_message="The bathroom door is locked.")


def test_locked_rule_requires_items_and_target():
    with pytest.raises(ValueError):
        AccessRule.locked([], Location("X"))
    with pytest.raises(ValueError):
        AccessRule.locked(["key"], None)


def test_blocks_without_items(rooms, lock):
    _, bathroom, _ = rooms
    asker = Asker("Silver key")
    assert lock.filter_exit("north", bathroom, asker) is None
    assert asker.errors == ["The bathroom door is locked."]
    assert lock.engaged


def test_other_exits_pass(rooms, lock):
    _, _, stairs = rooms
    asker = Asker()
    assert lock.filter_exit("west", stairs, asker) is stairs
    assert asker.errors == []


def test_unlock_consumes_items_and_is_permanent(rooms, lock):
    _, bathroom, _ = rooms
    asker = Asker("silver KEY", "Old key", "Gun")
    assert lock.filter_exit("north", bathroom, asker) is bathroom
    assert not lock.engaged
    assert asker.infos == ["The key works!"]
    assert asker.inventory.names() == ["Gun"]

    empty_handed = Asker()
    assert lock.filter_exit("north", bathroom, empty_handed) is bathroom
    assert empty_handed.errors == []


def test_arrival_unlocks_when_items_held(lock):
    asker = Asker("Silver key", "Old key")
    assert lock.on_arrival(asker) is True
    assert not lock.engaged
    assert len(asker.inventory) == 0
    # una volta aperta non riporta più nulla
    assert lock.on_arrival(Asker()) is False


def test_arrival_reports_missing_items(lock, rooms):
    asker = Asker("Old key")
    assert lock.on_arrival(asker) is False
    assert asker.errors == ["You're still missing: Silver key"]

    single = AccessRule.locked(["Wooden Key"], rooms[1])
    nobody = Asker()
    single.on_arrival(nobody)
    assert nobody.errors == ["You still need the Wooden Key."]

    both = Asker()
    lock.on_arrival(both)
    assert both.errors == ["You're still missing: Silver key, Old key"]


def test_absent_asker_never_unlocks(rooms, lock):
    _, bathroom, _ = rooms
    assert lock.filter_exit("north", bathroom, None) is bathroom
    assert lock.on_arrival(None) is False
    assert lock.engaged


def test_echo_repeats_words():
    rule = AccessRule.echo()
    asker = Asker()
    assert rule.kind is AccessKind.ECHO
    assert rule.on_speech(asker, "hello") == "hello... hello... hello..."
    assert asker.infos == ["hello... hello... hello..."]
    assert rule.on_speech(asker, "   ") is None
    assert not rule.engaged


def test_pass_through_is_identity(rooms):
    _, bathroom, _ = rooms
    rule = AccessRule.pass_through()
    asker = Asker()
    assert rule.filter_exit("north", bathroom, asker) is bathroom
    assert rule.on_arrival(asker) is False
    assert rule.on_speech(asker, "hi") is None
    assert asker.errors == [] and asker.infos == []
