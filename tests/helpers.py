"""Shared builders for tests."""

from datetime import datetime, timedelta
from typing import Optional

from galleyops.replanning.models import Flight


def make_flight(
    flight_number: str = "AM651",
    airline: str = "AeroMexico",
    status: str = "scheduled",
    departs_in: timedelta = timedelta(hours=2),
    now: datetime = datetime(2025, 3, 14, 12, 0, 0),
    meals: int = 180,
    bottles: int = 90,
    destination: str = "New York (JFK)",
    flight_id: Optional[str] = None,
) -> Flight:
    kwargs = {}
    if flight_id is not None:
        kwargs["id"] = flight_id
    return Flight(
        flight_number=flight_number,
        airline=airline,
        destination=destination,
        departure_time=now + departs_in,
        status=status,
        planned_meals=meals,
        planned_bottles=bottles,
        **kwargs,
    )
