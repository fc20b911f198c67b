"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...services.network import get_network

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/network", status_code=status.HTTP_200_OK)
def health_network() -> dict:
    """Report the size of the in-memory stop network."""
    network = get_network()
    links = sum(len(stop.neighbours) for stop in network)
    return {"stops": len(network), "links": links}
