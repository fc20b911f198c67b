import math
from dataclasses import FrozenInstanceError

import pytest

from src.stopnet.services.routing import INFINITE_COST, RoutingEntry


def test_default_entry_has_no_route():
    entry = RoutingEntry()

    assert entry.next_hop is None
    assert entry.cost == INFINITE_COST
    assert not entry.reachable


def test_entry_stores_next_hop_and_cost():
    entry = RoutingEntry("B", 4)

    assert entry.next_hop == "B"
    assert entry.cost == 4
    assert isinstance(entry.cost, int)
    assert entry.reachable


def test_zero_cost_entry_is_a_route():
    assert RoutingEntry("A", 0).reachable


@pytest.mark.parametrize("next_hop, cost", [(None, 3), ("B", -1), (None, -5), ("B", math.inf)])
def test_invalid_entry_falls_back_to_no_route(next_hop, cost):
    entry = RoutingEntry(next_hop, cost)

    assert entry == RoutingEntry()


def test_entry_is_immutable():
    entry = RoutingEntry("B", 2)

    with pytest.raises(FrozenInstanceError):
        entry.cost = 1
