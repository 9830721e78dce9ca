"""Catering replanning: moving meals and bottles off disrupted flights."""

from galleyops.replanning.models import (
    CateringOrder,
    Flight,
    FlightStatus,
    OrderStatus,
    ProcessResult,
    Reassignment,
    ReassignmentStatus,
)
from galleyops.replanning.resolver import compatible_flights, find_target_flight
from galleyops.replanning.service import ReplanningService
from galleyops.replanning.store import CsvFlightSource, FlightStore, InMemoryStore

__all__ = [
    "CateringOrder",
    "CsvFlightSource",
    "Flight",
    "FlightStatus",
    "FlightStore",
    "InMemoryStore",
    "OrderStatus",
    "ProcessResult",
    "Reassignment",
    "ReassignmentStatus",
    "ReplanningService",
    "compatible_flights",
    "find_target_flight",
]
