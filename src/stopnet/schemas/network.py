"""Stop network request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class StopCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, description="Unique stop name within the network.")
    x: int
    y: int


class StopModel(BaseModel):
    name: str
    x: int
    y: int
    neighbours: List[str]


class NeighbourRequest(BaseModel):
    neighbour: str
    bidirectional: bool = Field(
        default=True,
        description="If True, the stop is also added as a neighbour of the given stop.",
    )


class RoutingEntryModel(BaseModel):
    destination: str
    next_stop: Optional[str] = Field(default=None, description="Null when no route is known.")
    cost: Optional[int] = Field(default=None, description="Null when no route is known.")


class RoutingTableModel(BaseModel):
    stop: str
    entries: List[RoutingEntryModel]


class TraversalResponse(BaseModel):
    stop: str
    reachable: List[str]


class SynchroniseResponse(BaseModel):
    stop: str
    passes: int


class RouteResponse(BaseModel):
    source: str
    destination: str
    cost: int
    stops: List[str]
