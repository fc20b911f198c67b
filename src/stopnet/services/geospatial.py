"""Geospatial helper functions."""

from __future__ import annotations


def manhattan_distance(x1: int, y1: int, x2: int, y2: int) -> int:
    """Compute the grid (L1) distance between two coordinates."""

    return abs(x1 - x2) + abs(y1 - y2)


def stop_distance(first, second) -> int:
    """Edge cost between two stops, taken from their coordinates."""

    return manhattan_distance(first.x, first.y, second.x, second.y)
