"""In-process arena of stops and the links between them."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING, Iterator

from ..exceptions import DuplicateStopError, RoutingLoopError, TransportError, UnknownStopError
from ..models.domain import Stop
from .routing.table import stop_key

if TYPE_CHECKING:
    from .routing.table import StopRef

logger = logging.getLogger(__name__)


class StopNetwork:
    """Owns every stop of one transport network, indexed by stop name."""

    def __init__(self) -> None:
        self.stops: dict[str, Stop] = {}

    def __len__(self) -> int:
        return len(self.stops)

    def __iter__(self) -> Iterator[Stop]:
        return iter(list(self.stops.values()))

    def __contains__(self, stop: object) -> bool:
        key = stop_key(stop)  # type: ignore[arg-type]
        return key is not None and key in self.stops

    def __getitem__(self, name: str) -> Stop:
        return self.get(name)

    def add_stop(self, name: str, x: int, y: int) -> Stop:
        if name in self.stops:
            raise DuplicateStopError(f"Stop '{name}' already exists in the network.")
        stop = Stop(name=name, x=x, y=y, network=self)
        self.stops[name] = stop
        logger.info("Added stop %s at (%d, %d)", name, x, y)
        return stop

    def get(self, name: str | None) -> Stop:
        if name is None or name not in self.stops:
            raise UnknownStopError(f"Stop '{name}' is not part of the network.")
        return self.stops[name]

    def connect(self, first: StopRef, second: StopRef) -> None:
        """Link two stops in both directions, or in neither if routing fails."""
        a = self.get(stop_key(first))
        b = self.get(stop_key(second))
        already_linked = b in a.neighbours
        a.add_neighbouring_stop(b)
        try:
            b.add_neighbouring_stop(a)
        except TransportError:
            if not already_linked:
                a.forget_neighbour(b.name)
            raise

    def route(self, source: StopRef, destination: StopRef) -> list[Stop]:
        """Follow next hops from ``source`` and return every stop on the way.

        The result starts with ``source`` and ends with ``destination``; it is
        empty when ``source`` knows no route to ``destination``.
        """
        start = self.get(stop_key(source))
        target = self.get(stop_key(destination))

        path = [start]
        current = start
        while current != target:
            next_stop = current.routing_table.next_stop(target)
            if next_stop is None:
                return []
            if next_stop in path:
                raise RoutingLoopError(
                    f"Route from '{start.name}' to '{target.name}' revisits stop '{next_stop.name}'."
                )
            path.append(next_stop)
            current = next_stop
        return path


@lru_cache(maxsize=1)
def get_network() -> StopNetwork:
    """Return the process-wide network served by the API."""
    return StopNetwork()
