"""Domain models for stops in a transport network."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from ..exceptions import TransportError, UnknownStopError
from ..services.routing.table import RoutingTable

if TYPE_CHECKING:
    from ..services.network import StopNetwork

logger = logging.getLogger(__name__)


@dataclass(slots=True, eq=False)
class Stop:
    """A named stop with grid coordinates, registered in a ``StopNetwork``.

    Stops are equal when their names are equal. Neighbours are kept as names
    and resolved through the network.
    """

    name: str
    x: int
    y: int
    network: "StopNetwork" = field(repr=False)
    _neighbours: list[str] = field(default_factory=list, init=False, repr=False)
    routing_table: RoutingTable = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.routing_table = RoutingTable(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Stop):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    @property
    def neighbours(self) -> list[Stop]:
        return [self.network.get(name) for name in self._neighbours]

    def get_routing_table(self) -> RoutingTable:
        return self.routing_table

    def add_neighbouring_stop(self, neighbour: Optional[Stop]) -> None:
        """Link ``neighbour`` to this stop in one direction and update routing.

        If resynchronising fails the link is not kept; relaxations already
        applied to routing tables stay.
        """
        if neighbour is None:
            return
        if self.network.stops.get(neighbour.name) is not neighbour:
            raise UnknownStopError(
                f"Stop '{neighbour.name}' does not belong to the network of '{self.name}'."
            )

        added = neighbour.name not in self._neighbours
        if added:
            self._neighbours.append(neighbour.name)
        try:
            self.routing_table.add_neighbour(neighbour)
        except TransportError:
            if added:
                self.forget_neighbour(neighbour.name)
            raise
        if added:
            logger.info("Linked stop %s -> %s", self.name, neighbour.name)

    def forget_neighbour(self, name: str) -> None:
        """Drop the link to ``name``. Routing tables are left as they are."""
        if name in self._neighbours:
            self._neighbours.remove(name)
