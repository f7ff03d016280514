"""Tests for the turn-level actions on the bundled house."""

import pytest

from moonhouse.bootstrap import load_world_and_player
from moonhouse.core import actions
from moonhouse.items import Item


@pytest.fixture()
def game(tmp_path):
    world, player = load_world_and_player(seed=11, saves_dir=tmp_path)
    # Per test deterministici: il Butcher resta fuori gioco
    for agent in world.agents:
        agent.banish()
    return world, player


def play(world, player, *moves):
    res = None
    for m in moves:
        res = actions.go(world, player, m)
    return res


def test_look_lists_room_and_items(game):
    world, player = game
    res = actions.look(world, player)
    text = "\n".join(res["lines"])
    assert "recording station" in text
    assert "Cracked Mirror" in text
    assert res["game_over"] is False
    assert res["outcome"] is None


def test_go_unknown_direction(game):
    world, player = game
    res = actions.go(world, player, "north")
    assert res["lines"] == ["There is no door to the north."]
    assert res["messages"][0]["severity"] == "error"


def test_go_is_case_insensitive(game):
    world, player = game
    actions.go(world, player, " WEST ")
    assert player.location.tag == "Basement_Hall"


def test_back_returns_to_previous_room(game):
    world, player = game
    play(world, player, "west", "south")
    actions.back(world, player)
    assert player.location.tag == "Basement_Hall"
    res = actions.back(world, player)
    assert player.location.tag == "Recording_Station"
    assert "You returned to: Recording_Station" in res["lines"]


def test_take_from_chest_but_not_the_chest(game):
    world, player = game
    play(world, player, "west", "south", "west")
    res = actions.take(world, player, "gun")
    assert player.inventory.contains("Gun")
    assert "You took Gun from the Chest." in res["lines"]
    res = actions.take(world, player, "Chest")
    assert "The Chest is too heavy to carry." in res["lines"]


def test_drop_puts_item_in_room(game):
    world, player = game
    player.inventory.add(Item("Photo"))
    actions.drop(world, player, "photo")
    assert world.get_location_by_tag("Recording_Station").has_item("Photo")
    assert not player.inventory.contains("Photo")


def test_shoot_needs_gun(game):
    world, player = game
    res = actions.shoot(world, player, "cracked mirror")
    assert res["lines"] == ["You need a gun to shoot!"]
    assert player.location.has_item("Cracked Mirror")


def test_shooting_mirror_releases_holy_essence(game):
    world, player = game
    player.inventory.add(Item("Gun"))
    actions.shoot(world, player, "cracked mirror")
    room = player.location
    assert not room.has_item("Cracked Mirror")
    assert room.has_item("Holy Essence")
    actions.take(world, player, "holy essence")
    assert player.inventory.contains("Holy Essence")


def test_shooting_hollow_wall_reveals_passage(game):
    world, player = game
    player.inventory.add(Item("Gun"))
    player.location = world.get_location_by_tag("BedRoom_HW")
    actions.shoot(world, player, "Hollow Wall")
    room = player.location
    assert room.exits["east"].tag == "Hidden_Wall"
    assert room.has_item("Eye of Truth")
    actions.go(world, player, "east")
    assert player.location.tag == "Hidden_Wall"


def test_shooting_plain_item_does_nothing(game):
    world, player = game
    player.inventory.add(Item("Gun"))
    player.location.add_item(Item("Rock"))
    res = actions.shoot(world, player, "rock")
    assert "You shoot the Rock, but nothing happens." in res["lines"]


def test_inventory_listing(game):
    world, player = game
    res = actions.show_inventory(world, player)
    assert res["lines"] == ["Your inventory is empty."]
    player.inventory.add(Item("Gun", "A loaded revolver", 2.0, 1.0))
    res = actions.show_inventory(world, player)
    assert res["lines"][0] == "=== INVENTORY ==="
    assert any("Gun" in line for line in res["lines"])


def test_parlor_echo(game):
    world, player = game
    player.location = world.get_location_by_tag("Parlor")
    res = actions.say(world, player, "hello")
    assert "hello... hello... hello..." in res["lines"]


def test_restore_checkpoint_action(game):
    world, player = game
    res = actions.restore_checkpoint(world, player)
    assert res["lines"] == ["No checkpoint available"]


def test_save_and_load_actions(game, tmp_path):
    world, player = game
    actions.go(world, player, "west")
    res = actions.save(world, player)
    assert any(line.startswith("Game saved") for line in res["lines"])
    actions.go(world, player, "south")
    actions.load(world, player)
    assert player.location.tag == "Basement_Hall"


def test_actions_refused_after_game_over(game):
    world, player = game
    world.game_over = True
    with pytest.raises(actions.ActionError):
        actions.look(world, player)


def test_escape_through_the_house(game):
    world, player = game
    play(world, player, "west", "south", "west")
    actions.take(world, player, "Gun")
    actions.take(world, player, "Rusted key")
    res = play(world, player, "east", "north")
    assert "The rusted key turns with difficulty, but the lock clicks open!" in res["lines"]
    play(world, player, "west")
    actions.take(world, player, "Heart of a Madmen")
    res = play(world, player, "east", "south", "south", "west", "west")
    assert "You changed the world!" in res["lines"]
    res = play(world, player, "down", "east", "south")
    assert "Checkpoint set at Main_Hall" in res["lines"]
    play(world, player, "west")
    actions.take(world, player, "Wooden Key")
    play(world, player, "east", "north", "east", "north")
    assert player.location.tag == "Pantry"
    actions.take(world, player, "Fractured Skull")
    res = play(world, player, "south", "south", "west", "south")
    assert res["game_over"] is True
    assert res["outcome"] == "won"
    assert "You have escaped the Moon Family House with the evidence!" in res["lines"]
    with pytest.raises(actions.ActionError):
        actions.look(world, player)
