"""Tests for items, containers and the capacity-limited inventory."""

import pytest

from moonhouse.inventory import Capacity, CapacityError, Inventory
from moonhouse.items import Item, ItemContainer, ShotEffect, item_from_dict, item_to_dict


def test_item_validation():
    with pytest.raises(ValueError):
        Item("")
    with pytest.raises(ValueError):
        Item("Rock", weight=-1)


def test_clone_is_independent_value_copy():
    original = Item("Photo", "An old family photo", 0.1, 0.05)
    copy = original.clone()
    assert copy is not original
    assert copy.id != original.id
    assert (copy.name, copy.description, copy.weight) == ("Photo", "An old family photo", 0.1)
    copy.description = "changed"
    assert original.description == "An old family photo"


def test_container_clone_is_deep():
    chest = ItemContainer("Chest", max_weight=5, max_volume=5)
    assert chest.insert(Item("Gun", weight=2, volume=1))
    copy = chest.clone()
    copy.remove("gun")
    assert chest.find("Gun") is not None
    assert copy.find("Gun") is None


def test_container_respects_limits():
    box = ItemContainer("Box", max_weight=1, max_volume=1)
    assert not box.insert(Item("Anvil", weight=3))
    assert box.insert(Item("Pin", weight=0.1, volume=0.1))
    assert [i.name for i in box.list_contents()] == ["Pin"]


def test_capacity_refuses_overflow():
    cap = Capacity(max_weight=2, max_volume=2)
    heavy = Item("Heart of a Madmen", weight=1.5, volume=2.0)
    cap.add(heavy)
    with pytest.raises(CapacityError):
        cap.add(Item("Skull", weight=1.0, volume=0.5))
    cap.remove(heavy)
    assert cap.current_weight == 0


def test_inventory_add_returns_false_when_full():
    inv = Inventory(Capacity(max_weight=1, max_volume=1))
    assert inv.add(Item("Key", weight=0.2, volume=0.1))
    assert not inv.add(Item("Gun", weight=2, volume=1))
    assert inv.names() == ["Key"]


def test_name_queries_are_case_insensitive():
    inv = Inventory()
    inv.add(Item("Silver key"))
    inv.add(Item("Old key"))
    assert inv.contains("SILVER KEY")
    assert inv.contains_all(["silver key", "old key"])
    assert inv.missing(["Old key", "Gun"]) == ["Gun"]
    removed = inv.remove_by_name("old KEY")
    assert removed.name == "Old key"
    assert not inv.contains("Old key")


def test_clear_resets_capacity():
    inv = Inventory(Capacity(max_weight=10, max_volume=10))
    inv.add(Item("Gun", weight=2, volume=1))
    inv.clear()
    assert len(inv) == 0
    assert inv.capacity.current_weight == 0
    assert inv.capacity.current_volume == 0


def test_clone_items_keyed_by_name():
    inv = Inventory()
    gun = Item("Gun")
    inv.add(gun)
    copies = inv.clone_items()
    assert list(copies) == ["Gun"]
    assert copies["Gun"] is not gun


def test_item_dict_conversion_keeps_effects_and_contents():
    data = {
        "name": "Chest",
        "weight": 50,
        "volume": 50,
        "contents": [{"name": "Gun", "weight": 2, "volume": 1}],
    }
    chest = item_from_dict(data)
    assert chest.is_container
    assert chest.find("Gun") is not None

    wall = Item("Hollow Wall", on_shot=ShotEffect("It crumbles", spawn=Item("Eye of Truth"),
                                                  reveal_direction="east", reveal_target="Hidden_Wall"))
    again = item_from_dict(item_to_dict(wall))
    assert again.on_shot.reveals_passage
    assert again.on_shot.reveal_target == "Hidden_Wall"
    assert again.on_shot.spawn.name == "Eye of Truth"
