"""Tests for the location graph: registry, exits, access binding and range."""

import pytest

from moonhouse.core.access import AccessRule
from moonhouse.core.model.base import Location
from moonhouse.core.registry import LocationGraph
from moonhouse.inventory import Inventory


class Asker:
    def __init__(self):
        self.inventory = Inventory()
        self.errors = []
        self.infos = []

    def error_message(self, text):
        self.errors.append(text)

    def info_message(self, text):
        self.infos.append(text)


@pytest.fixture
def line_graph():
    """L0 <-> L1 <-> L2 <-> L3 <-> L4"""
    graph = LocationGraph()
    rooms = [graph.create(f"L{i}") for i in range(5)]
    for a, b in zip(rooms, rooms[1:]):
        graph.connect(a, "east", b, "west")
    return graph, rooms


def test_register_ignores_empty_tag_and_none():
    graph = LocationGraph()
    graph.register_location("", Location("X"))
    graph.register_location("Y", None)
    assert len(graph) == 0
    assert graph.get_location_by_tag("Y") is None
    assert graph.get_location_by_tag("") is None


def test_last_registration_wins():
    graph = LocationGraph()
    first, second = Location("Hall"), Location("Hall")
    graph.register_location("Hall", first)
    graph.register_location("Hall", second)
    assert graph.get_location_by_tag("Hall") is second


def test_set_exit_overwrites_and_validates():
    graph = LocationGraph()
    a, b, c = graph.create("A"), graph.create("B"), graph.create("C")
    graph.set_exit(a, "north", b)
    graph.set_exit(a, "north", c)
    assert graph.get_exit(a, "north") is c
    assert graph.get_exit(a, "south") is None
    with pytest.raises(ValueError):
        graph.set_exit(a, "", b)
    with pytest.raises(TypeError):
        graph.set_exit(a, "east", None)


def test_locked_exit_blocks_player_but_not_agents():
    graph = LocationGraph()
    hall, vault = graph.create("Hall"), graph.create("Vault")
    graph.connect(hall, "north", vault, "south")
    graph.attach_access(hall, AccessRule.locked(["Brass key"], vault))
    asker = Asker()
    assert graph.get_exit(hall, "north", asker) is None
    assert asker.errors
    # nessun richiedente: la regola non viene consultata
    assert graph.get_exit(hall, "north") is vault
    assert graph.get_exit(hall, "north", None) is vault


def test_attach_access_is_exclusive():
    graph = LocationGraph()
    a, b = graph.create("A"), graph.create("B")
    rule = AccessRule.echo()
    graph.attach_access(a, rule)
    graph.attach_access(b, rule)
    assert a.access is None
    assert b.access is rule
    assert graph.owner_of(rule) is b
    graph.attach_access(b, None)
    assert b.access is None
    assert graph.owner_of(rule) is None


def test_distance_along_line(line_graph):
    graph, rooms = line_graph
    assert graph.distance(rooms[0], rooms[0]) == 0
    assert graph.distance(rooms[0], rooms[4]) == 4
    assert graph.within_range(rooms[4], rooms[1], 3)
    assert not graph.within_range(rooms[4], rooms[0], 3)
    assert graph.within_range(rooms[2], rooms[2], 0)


def test_range_ignores_edge_direction():
    graph = LocationGraph()
    a, b, c = graph.create("A"), graph.create("B"), graph.create("C")
    graph.set_exit(a, "north", b)
    graph.set_exit(b, "north", c)
    # nessuna uscita verso A, ma A resta a distanza 2 da C
    assert graph.distance(c, a) == 2
    assert graph.within_range(c, a, 2)
    assert not graph.within_range(c, a, 1)


def test_unreachable_and_cycles_terminate():
    graph = LocationGraph()
    a, b, c = graph.create("A"), graph.create("B"), graph.create("C")
    island = graph.create("Island")
    graph.set_exit(a, "n", b)
    graph.set_exit(b, "n", c)
    graph.set_exit(c, "n", a)
    assert graph.distance(a, island) is None
    assert not graph.within_range(a, island, 10)


def test_neighbors_include_incoming_exits():
    graph = LocationGraph()
    a, b = graph.create("A"), graph.create("B")
    graph.set_exit(a, "east", b)
    assert graph.neighbors(b) == {a}
    assert graph.neighbors(a) == {b}
