"""Per-stop routing tables synchronised with a distance-vector exchange."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator, Optional, Union

from ...config import settings
from ...exceptions import ConvergenceError
from ..geospatial import stop_distance
from .models import INFINITE_COST, RoutingEntry

if TYPE_CHECKING:
    from ...models.domain import Stop
    from ..network import StopNetwork

    StopRef = Union[Stop, str, None]

logger = logging.getLogger(__name__)


def stop_key(stop: "StopRef") -> Optional[str]:
    """Return the identifier used for ``stop`` in routing tables."""
    if stop is None:
        return None
    if isinstance(stop, str):
        return stop
    return stop.name


class RoutingTable:
    """Maps destination stops to the best known next hop and cost.

    Destinations and next hops are held by stop name and resolved through the
    owning network, so tables never keep references to other stops. The home
    stop always routes to itself at cost 0.
    """

    def __init__(self, stop: "Stop") -> None:
        self._home = stop.name
        self._network: "StopNetwork" = stop.network
        self._entries: dict[str, RoutingEntry] = {self._home: RoutingEntry(self._home, 0)}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, destination: object) -> bool:
        key = stop_key(destination)  # type: ignore[arg-type]
        return key is not None and key in self._entries

    def __repr__(self) -> str:
        return f"RoutingTable(stop={self._home!r}, entries={len(self._entries)})"

    @property
    def stop(self) -> "Stop":
        return self._network.get(self._home)

    def get_stop(self) -> "Stop":
        """Return the stop for which this table handles routing."""
        return self.stop

    def entries(self) -> Iterator[tuple[str, RoutingEntry]]:
        """Iterate ``(destination name, entry)`` pairs in table order."""
        return iter(list(self._entries.items()))

    def cost_to(self, destination: "StopRef") -> int | float:
        """Return the cost of reaching ``destination``, or infinity if it is unknown."""
        key = stop_key(destination)
        entry = self._entries.get(key) if key is not None else None
        if entry is None:
            return INFINITE_COST
        return entry.cost

    def next_stop(self, destination: "StopRef") -> Optional["Stop"]:
        """Return the stop to travel to next on the way to ``destination``."""
        key = stop_key(destination)
        entry = self._entries.get(key) if key is not None else None
        if entry is None or entry.next_hop is None:
            return None
        return self._network.get(entry.next_hop)

    def get_costs(self) -> dict["Stop", int | float]:
        """Map every destination in this table to its cost, in table order."""
        return {self._network.get(name): entry.cost for name, entry in self._entries.items()}

    def add_or_update_entry(self, destination: "StopRef", new_cost: int | float, intermediate: "StopRef") -> bool:
        """Record a route to ``destination`` if it is new or strictly cheaper.

        The home stop's own entry is never replaced, and a proposal without a
        route never replaces a known one. Returns True when the table changed.
        """
        key = stop_key(destination)
        if key is None:
            raise ValueError("Destination stop is required.")
        self._network.get(key)
        next_hop = stop_key(intermediate)
        if next_hop is not None:
            self._network.get(next_hop)

        if key == self._home:
            return False

        candidate = RoutingEntry(next_hop, new_cost)
        if key not in self._entries:
            self._entries[key] = candidate
            return True
        if candidate.reachable and candidate.cost < self.cost_to(key):
            self._entries[key] = candidate
            return True
        return False

    def add_neighbour(self, neighbour: "Stop") -> None:
        """Add a direct route to ``neighbour`` and resynchronise the network.

        The direct entry replaces any existing entry for the neighbour, even a
        cheaper route through other stops.
        """
        home = self.stop
        direct_cost = stop_distance(home, neighbour)
        existing = self._entries.get(neighbour.name)
        if existing is not None and existing.cost < direct_cost:
            logger.debug(
                "Direct link %s -> %s (cost %s) replaces cheaper route via %s (cost %s)",
                self._home,
                neighbour.name,
                direct_cost,
                existing.next_hop,
                existing.cost,
            )

        self._entries[neighbour.name] = RoutingEntry(neighbour.name, direct_cost)
        self.synchronise()

    def transfer_entries(self, other: "StopRef") -> bool:
        """Offer every route in this table to the table of neighbour ``other``.

        Each destination is proposed to ``other`` at this table's cost plus the
        cost of reaching ``other``, with this table's stop as the next hop.
        Returns True if any entry in the other table was added or improved.
        """
        if other is None:
            raise ValueError("Cannot transfer routing entries to a missing stop.")

        other_stop = self._network.get(stop_key(other))
        cost_to_other = self.cost_to(other_stop)
        if cost_to_other == INFINITE_COST:
            raise ValueError(f"Stop '{other_stop.name}' is not a neighbour of '{self._home}'.")

        other_table = other_stop.routing_table
        changed = False
        for destination, entry in list(self._entries.items()):
            if not entry.reachable:
                continue
            if other_table.add_or_update_entry(destination, entry.cost + cost_to_other, self._home):
                changed = True
        return changed

    def synchronise(self, max_passes: int | None = None) -> int:
        """Propagate routes across the reachable network until no table changes.

        Every pass visits each reachable stop and transfers its entries to each
        of its neighbours. Returns the number of passes run, including the final
        pass that made no change.

        When the pass limit is exceeded ``ConvergenceError`` is raised and the
        tables keep every relaxation applied up to that point.
        """
        limit = max_passes if max_passes is not None else settings.sync_pass_limit
        passes = 0
        while True:
            passes += 1
            changed = False
            for stop in self.traverse_network():
                for neighbour in stop.neighbours:
                    if stop.routing_table.transfer_entries(neighbour):
                        changed = True

            if not changed:
                break
            if limit is not None and passes >= limit:
                raise ConvergenceError(
                    f"Routing tables reachable from '{self._home}' did not converge within {limit} passes."
                )

        logger.debug("Synchronised network from %s in %d pass(es)", self._home, passes)
        return passes

    def traverse_network(self) -> list["Stop"]:
        """Return every stop reachable from this table's stop.

        Depth-first, driven by an explicit stack: neighbours not yet seen are
        pushed, and a stop is recorded when it is popped for the first time.
        """
        seen: list[Stop] = []
        stack: list[Stop] = [self.stop]

        while stack:
            current = stack.pop()
            for neighbour in current.neighbours:
                if neighbour not in seen:
                    stack.append(neighbour)
            if current not in seen:
                seen.append(current)

        return seen
