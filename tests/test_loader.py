"""Tests for world data validation and the bundled house table."""

import copy
import json

import pytest

from moonhouse import config
from moonhouse.bootstrap import load_world_and_player
from moonhouse.core.access import AccessKind
from moonhouse.core.loader.world_loader import WorldDataError, build_world_from_dict, validate_world_data


@pytest.fixture(scope="module")
def house_data():
    with open(config.DEFAULT_WORLD_FILE, "r", encoding="utf-8") as f:
        return json.load(f)


def test_bundled_house_is_valid(house_data):
    assert validate_world_data(house_data) == []


def test_house_designations(house_data):
    world = build_world_from_dict(house_data)
    assert world.entrance.tag == "Recording_Station"
    assert world.exit is world.safe_location
    assert world.exit.tag == "Porch"
    assert [loc.tag for loc in world.checkpoint_locations] == ["Main_Hall", "Second_Hall"]
    assert world.escape_items == ("Gun", "Heart of a Madmen", "Fractured Skull")


def test_house_butcher(house_data):
    world = build_world_from_dict(house_data)
    (butcher,) = world.agents
    assert butcher.name == "Butcher"
    assert butcher.location.tag == "Alter"
    assert butcher.aggression_radius == 3
    assert len(butcher.ward_items) == 6


def test_house_locks(house_data):
    world = build_world_from_dict(house_data)
    expected = {
        "BedRoom_Ch": ("Bathroom", ("Silver key", "Old key")),
        "Kitchen": ("Pantry", ("Wooden Key",)),
        "Basement_Hall": ("Butcher_Closet", ("Rusted key",)),
        "Second_Hall": ("BedRoom_HW", ("Scrap Key",)),
    }
    for owner, (guarded, required) in expected.items():
        rule = world.get_location_by_tag(owner).access
        assert rule.kind is AccessKind.LOCKED
        assert rule.engaged
        assert rule.guarded.tag == guarded
        assert rule.required_items == required
    assert world.get_location_by_tag("Parlor").access.kind is AccessKind.ECHO


def test_house_chest_and_event(house_data):
    world = build_world_from_dict(house_data)
    chest = world.get_location_by_tag("Spare_Parts").find_item("chest")
    assert chest.is_container
    assert chest.find("Gun") is not None
    assert chest.find("Rusted key") is not None
    assert world.has_event(world.get_location_by_tag("Balcony"))


def test_unknown_references_are_reported(house_data):
    data = copy.deepcopy(house_data)
    data["locations"][0]["exits"]["up"] = "Attic"
    data["agents"][0]["home"] = "Nowhere"
    issues = validate_world_data(data)
    assert any("Attic" in i for i in issues)
    assert any("Nowhere" in i for i in issues)
    with pytest.raises(WorldDataError) as info:
        build_world_from_dict(data)
    assert len(info.value.issues) == len(issues)


def test_duplicate_tags_and_bad_locks():
    data = {
        "entrance": "A",
        "locations": [
            {"tag": "A", "exits": {"north": "B"},
             "access": {"kind": "locked", "required_items": ["Key"], "guards": "A"}},
            {"tag": "B"},
            {"tag": "B"},
        ],
    }
    issues = validate_world_data(data)
    assert any("duplicate location tag 'B'" in i for i in issues)
    assert any("not one of its exits" in i for i in issues)


def test_schema_errors_are_reported():
    issues = validate_world_data({"locations": [{"tag": ""}], "entrance": "A"})
    assert issues
    assert all(i.startswith("schema:") for i in issues)
    assert validate_world_data([]) == ["world data must be a JSON object"]


def test_bootstrap_creates_player_at_entrance(tmp_path):
    world, player = load_world_and_player(seed=42, saves_dir=tmp_path)
    assert player.location is world.entrance
    assert world.player is player
    assert player.alive
    assert player.inventory.capacity.max_weight == config.PLAYER_MAX_WEIGHT
