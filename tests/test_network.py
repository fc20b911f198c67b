import pytest

from src.stopnet.exceptions import ConvergenceError, DuplicateStopError, RoutingLoopError, UnknownStopError
from src.stopnet.models.domain import Stop
from src.stopnet.services.network import StopNetwork, get_network
from src.stopnet.services.routing import table as table_module


def _chain_network() -> StopNetwork:
    network = StopNetwork()
    network.add_stop("A", 0, 0)
    network.add_stop("B", 1, 1)
    network.add_stop("C", 1, -1)
    network.add_stop("H", 10, 10)
    network.connect("A", "B")
    network.connect("B", "C")
    return network


def test_add_stop_rejects_duplicate_names():
    network = StopNetwork()
    network.add_stop("A", 0, 0)

    with pytest.raises(DuplicateStopError):
        network.add_stop("A", 5, 5)
    assert len(network) == 1


def test_get_unknown_stop_raises():
    network = StopNetwork()

    with pytest.raises(UnknownStopError):
        network.get("Z")
    with pytest.raises(UnknownStopError):
        network.get(None)
    assert "Z" not in network


def test_stops_compare_by_name():
    first = StopNetwork().add_stop("A", 0, 0)
    second = StopNetwork().add_stop("A", 3, 3)

    assert first == second
    assert hash(first) == hash(second)
    assert first != StopNetwork().add_stop("B", 0, 0)


def test_connect_links_both_directions():
    network = _chain_network()

    assert [stop.name for stop in network["A"].neighbours] == ["B"]
    assert [stop.name for stop in network["B"].neighbours] == ["A", "C"]
    assert [stop.name for stop in network["C"].neighbours] == ["B"]


def test_failed_synchronisation_drops_new_link(monkeypatch):
    network = StopNetwork()
    a = network.add_stop("A", 0, 0)
    b = network.add_stop("B", 1, 1)
    monkeypatch.setattr(table_module.settings, "sync_pass_limit", 1)

    with pytest.raises(ConvergenceError):
        network.connect(a, b)

    assert a.neighbours == []
    assert b.neighbours == []
    assert a.routing_table.traverse_network() == [a]


def test_connect_undoes_first_direction_when_second_fails(monkeypatch):
    network = StopNetwork()
    a = network.add_stop("A", 0, 0)
    b = network.add_stop("B", 1, 1)
    link = Stop.add_neighbouring_stop

    def add_neighbouring_stop(stop, neighbour):
        if stop.name == "B":
            raise ConvergenceError("B did not converge")
        link(stop, neighbour)

    monkeypatch.setattr(Stop, "add_neighbouring_stop", add_neighbouring_stop)

    with pytest.raises(ConvergenceError):
        network.connect(a, b)

    assert a.neighbours == []
    assert b.neighbours == []


def test_connect_keeps_existing_link_when_second_direction_fails(monkeypatch):
    network = StopNetwork()
    a = network.add_stop("A", 0, 0)
    b = network.add_stop("B", 1, 1)
    a.add_neighbouring_stop(b)
    link = Stop.add_neighbouring_stop

    def add_neighbouring_stop(stop, neighbour):
        if stop.name == "B":
            raise ConvergenceError("B did not converge")
        link(stop, neighbour)

    monkeypatch.setattr(Stop, "add_neighbouring_stop", add_neighbouring_stop)

    with pytest.raises(ConvergenceError):
        network.connect(a, b)

    assert a.neighbours == [b]
    assert b.neighbours == []


def test_add_missing_neighbour_is_ignored():
    network = StopNetwork()
    a = network.add_stop("A", 0, 0)

    a.add_neighbouring_stop(None)

    assert a.neighbours == []
    assert a.routing_table.traverse_network() == [a]


def test_neighbour_from_another_network_is_rejected():
    a = StopNetwork().add_stop("A", 0, 0)
    b = StopNetwork().add_stop("B", 1, 1)

    with pytest.raises(UnknownStopError):
        a.add_neighbouring_stop(b)
    assert a.neighbours == []


def test_one_way_link_only_lists_one_neighbour():
    network = StopNetwork()
    a = network.add_stop("A", 0, 0)
    b = network.add_stop("B", 2, 0)

    a.add_neighbouring_stop(b)

    assert b.neighbours == []
    assert a.routing_table.cost_to(b) == 2
    assert b.routing_table.cost_to(a) == 2
    assert b.get_routing_table().next_stop(a) == a


def test_route_follows_next_hops():
    network = _chain_network()

    assert [stop.name for stop in network.route("A", "C")] == ["A", "B", "C"]
    assert [stop.name for stop in network.route("C", "A")] == ["C", "B", "A"]
    assert network.route("A", "A") == [network["A"]]


def test_route_to_unreachable_stop_is_empty():
    network = _chain_network()

    assert network.route("A", "H") == []


def test_route_detects_next_hop_loops():
    network = StopNetwork()
    network.add_stop("A", 0, 0)
    network.add_stop("B", 1, 0)
    network.add_stop("C", 2, 0)
    network["A"].routing_table.add_or_update_entry("C", 2, "B")
    network["B"].routing_table.add_or_update_entry("C", 1, "A")

    with pytest.raises(RoutingLoopError):
        network.route("A", "C")


def test_iteration_preserves_insertion_order():
    network = _chain_network()

    assert [stop.name for stop in network] == ["A", "B", "C", "H"]
    assert network["B"] in network


def test_get_network_is_cached():
    get_network.cache_clear()

    assert get_network() is get_network()
    get_network.cache_clear()
