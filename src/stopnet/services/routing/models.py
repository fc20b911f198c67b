"""Routing domain models."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

INFINITE_COST = math.inf


@dataclass(frozen=True, slots=True)
class RoutingEntry:
    """Best known next hop and cost towards one destination.

    An entry without a next hop carries an infinite cost and stands for a
    destination with no known route. Passing no next hop, or a negative
    cost, yields that no-route entry.
    """

    next_hop: Optional[str] = None
    cost: int | float = INFINITE_COST

    def __post_init__(self) -> None:
        if self.next_hop is None or self.cost < 0 or math.isinf(self.cost):
            object.__setattr__(self, "next_hop", None)
            object.__setattr__(self, "cost", INFINITE_COST)

    @property
    def reachable(self) -> bool:
        return self.next_hop is not None
