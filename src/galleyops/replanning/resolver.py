"""Selection of the flight that receives a disrupted flight's catering."""

from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from galleyops.reference.airlines import extract_airline_code
from galleyops.reference.status import FlightStatus
from galleyops.replanning.models import Flight

DEFAULT_WINDOW = timedelta(hours=6)


def _priority(flight: Flight):
    # Soonest departure first; flight number then id keep ties reproducible
    return (flight.departure_time, flight.flight_number, flight.id)


def compatible_flights(
    flight: Flight,
    flights: Iterable[Flight],
    now: datetime,
    window: timedelta = DEFAULT_WINDOW,
    codes: Optional[dict] = None,
) -> List[Flight]:
    """
    Scheduled flights that can take over `flight`'s catering, best first.

    A candidate is another scheduled flight with the same airline code that
    departs after `now` and no later than `now + window`.
    """
    code = extract_airline_code(flight.flight_number, flight.airline, codes)
    if not code:
        return []

    latest = now + window
    candidates = [
        f
        for f in flights
        if f.id != flight.id
        and f.status is FlightStatus.SCHEDULED
        and now < f.departure_time <= latest
        and extract_airline_code(f.flight_number, f.airline, codes) == code
    ]
    return sorted(candidates, key=_priority)


def find_target_flight(
    flight: Flight,
    flights: Iterable[Flight],
    now: datetime,
    window: timedelta = DEFAULT_WINDOW,
    codes: Optional[dict] = None,
) -> Optional[Flight]:
    """Return the compatible flight departing soonest, or None when there is none."""
    candidates = compatible_flights(flight, flights, now, window, codes)
    return candidates[0] if candidates else None
