"""Stop and routing table endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...exceptions import DuplicateStopError, TransportError, UnknownStopError
from ...models.domain import Stop
from ...schemas.network import (
    NeighbourRequest,
    RouteResponse,
    RoutingEntryModel,
    RoutingTableModel,
    StopCreateRequest,
    StopModel,
    SynchroniseResponse,
    TraversalResponse,
)
from ...services.network import get_network

router = APIRouter(prefix="/stops", tags=["stops"])

logger = logging.getLogger(__name__)


def _stop_model(stop: Stop) -> StopModel:
    return StopModel(
        name=stop.name,
        x=stop.x,
        y=stop.y,
        neighbours=[neighbour.name for neighbour in stop.neighbours],
    )


def _table_model(stop: Stop) -> RoutingTableModel:
    entries = [
        RoutingEntryModel(
            destination=destination,
            next_stop=entry.next_hop,
            cost=int(entry.cost) if entry.reachable else None,
        )
        for destination, entry in stop.routing_table.entries()
    ]
    return RoutingTableModel(stop=stop.name, entries=entries)


def _resolve(name: str) -> Stop:
    try:
        return get_network().get(name)
    except UnknownStopError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.get("", response_model=list[StopModel], status_code=status.HTTP_200_OK)
def list_stops() -> list[StopModel]:
    return [_stop_model(stop) for stop in get_network()]


@router.post("", response_model=StopModel, status_code=status.HTTP_201_CREATED)
def create_stop(payload: StopCreateRequest) -> StopModel:
    try:
        stop = get_network().add_stop(payload.name, payload.x, payload.y)
    except DuplicateStopError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return _stop_model(stop)


@router.post("/{name}/neighbours", response_model=RoutingTableModel, status_code=status.HTTP_200_OK)
def add_neighbour(name: str, payload: NeighbourRequest) -> RoutingTableModel:
    """Link a neighbour to a stop and return the stop's synchronised table."""
    stop = _resolve(name)
    neighbour = _resolve(payload.neighbour)
    if neighbour == stop:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="A stop cannot neighbour itself.")

    try:
        if payload.bidirectional:
            get_network().connect(stop, neighbour)
        else:
            stop.add_neighbouring_stop(neighbour)
    except TransportError as exc:
        logger.warning(f"Error linking {name} to {payload.neighbour}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Failed to link stops: {str(exc)}",
        ) from exc
    return _table_model(stop)


@router.get("/{name}/routing-table", response_model=RoutingTableModel, status_code=status.HTTP_200_OK)
def routing_table(name: str) -> RoutingTableModel:
    return _table_model(_resolve(name))


@router.get("/{name}/traversal", response_model=TraversalResponse, status_code=status.HTTP_200_OK)
def traversal(name: str) -> TraversalResponse:
    stop = _resolve(name)
    reachable = [visited.name for visited in stop.routing_table.traverse_network()]
    return TraversalResponse(stop=stop.name, reachable=reachable)


@router.post("/{name}/synchronise", response_model=SynchroniseResponse, status_code=status.HTTP_200_OK)
def synchronise(name: str) -> SynchroniseResponse:
    stop = _resolve(name)
    try:
        passes = stop.routing_table.synchronise()
    except TransportError as exc:
        logger.warning(f"Error synchronising from {name}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Failed to synchronise routing tables: {str(exc)}",
        ) from exc
    return SynchroniseResponse(stop=stop.name, passes=passes)


@router.get("/{source}/route/{destination}", response_model=RouteResponse, status_code=status.HTTP_200_OK)
def route(source: str, destination: str) -> RouteResponse:
    """Return the stops visited when travelling from ``source`` to ``destination``."""
    start = _resolve(source)
    target = _resolve(destination)
    try:
        path = get_network().route(start, target)
    except TransportError as exc:
        logger.warning(f"Error resolving route {source} -> {destination}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Failed to resolve route: {str(exc)}",
        ) from exc

    if not path:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No route known from '{source}' to '{destination}'.",
        )
    return RouteResponse(
        source=start.name,
        destination=target.name,
        cost=int(start.routing_table.cost_to(target)),
        stops=[stop.name for stop in path],
    )
