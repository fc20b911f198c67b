"""Routing table services."""

from .models import INFINITE_COST, RoutingEntry
from .table import RoutingTable, stop_key

__all__ = [
    "INFINITE_COST",
    "RoutingEntry",
    "RoutingTable",
    "stop_key",
]
