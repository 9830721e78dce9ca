"""Data models for catering replanning."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from galleyops.exceptions import InvalidFlightError
from galleyops.reference.status import FlightStatus, is_disrupted, parse_flight_status
from galleyops.reference.weather import WeatherData


class ReassignmentStatus(str, Enum):
    """Outcome of one reassignment attempt."""

    SUCCESS = "success"
    PENDING = "pending"
    NO_FLIGHT = "no_flight"


class OrderStatus(str, Enum):
    PENDING = "pending"
    IN_VERIFICATION = "in_verification"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


def new_id() -> str:
    return str(uuid.uuid4())


def to_naive_local(dt: datetime) -> datetime:
    """Convert a timezone-aware datetime to naive local time; naive values pass through."""
    if dt.tzinfo is not None:
        return dt.astimezone().replace(tzinfo=None)
    return dt


@dataclass
class Flight:
    """One scheduled flight with its planned catering load."""

    flight_number: str
    airline: str
    destination: str
    departure_time: datetime
    status: FlightStatus
    planned_meals: int = 0
    planned_bottles: int = 0
    id: str = field(default_factory=new_id)
    reliability: Optional[float] = None
    actual_meals: Optional[int] = None
    actual_bottles: Optional[int] = None

    def __post_init__(self):
        for name in ("flight_number", "airline"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise InvalidFlightError(
                    f"{name} must be a string, got {value!r}",
                    error_code="INVALID_FIELD",
                    context={name: value},
                )
        self.status = parse_flight_status(self.status)
        if not isinstance(self.departure_time, datetime):
            raise InvalidFlightError(
                f"departure_time must be a datetime, got {self.departure_time!r}",
                error_code="INVALID_DEPARTURE",
                context={"flight_number": self.flight_number},
            )
        # Departures are compared as naive local times
        self.departure_time = to_naive_local(self.departure_time)
        for name in ("planned_meals", "planned_bottles"):
            value = getattr(self, name)
            if value is None or int(value) < 0:
                raise InvalidFlightError(
                    f"{name} must be a non-negative integer, got {value!r}",
                    error_code="INVALID_QUANTITY",
                    context={"flight_number": self.flight_number, name: value},
                )
            setattr(self, name, int(value))
        if self.reliability is not None and not 0 <= self.reliability <= 100:
            raise InvalidFlightError(
                f"reliability must be within 0-100, got {self.reliability!r}",
                error_code="INVALID_RELIABILITY",
            )

    @property
    def is_disrupted(self) -> bool:
        return is_disrupted(self.status)


@dataclass(frozen=True)
class Reassignment:
    """
    Immutable audit entry for one disrupted flight in one processing run.

    A success record names a target and carries the source flight's full
    planned quantities; a no_flight record has no target and zero quantities.
    """

    from_flight_number: str
    to_flight_number: Optional[str]
    airline: str
    airline_code: str
    meals_reassigned: int
    bottles_reassigned: int
    status: ReassignmentStatus
    reason: str = ""
    timestamp: datetime = field(default_factory=datetime.now)
    id: str = field(default_factory=new_id)

    def __post_init__(self):
        status = ReassignmentStatus(self.status)
        object.__setattr__(self, "status", status)
        if status is ReassignmentStatus.SUCCESS and not self.to_flight_number:
            raise ValueError("A successful reassignment needs a target flight")
        if status is ReassignmentStatus.NO_FLIGHT and (
            self.to_flight_number is not None
            or self.meals_reassigned
            or self.bottles_reassigned
        ):
            raise ValueError("A no_flight reassignment has no target and zero quantities")

    @classmethod
    def success(
        cls, source: Flight, target: Flight, airline_code: str, now: Optional[datetime] = None
    ) -> "Reassignment":
        """Hand all of the source flight's planned catering to the target."""
        return cls(
            from_flight_number=source.flight_number,
            to_flight_number=target.flight_number,
            airline=source.airline,
            airline_code=airline_code,
            meals_reassigned=source.planned_meals,
            bottles_reassigned=source.planned_bottles,
            status=ReassignmentStatus.SUCCESS,
            reason=(
                f"Flight {source.flight_number} {source.status.value}: "
                f"{source.planned_meals} meals and {source.planned_bottles} bottles "
                f"reassigned to {target.flight_number}"
            ),
            timestamp=now or datetime.now(),
        )

    @classmethod
    def no_flight(
        cls, source: Flight, airline_code: str, reason: str, now: Optional[datetime] = None
    ) -> "Reassignment":
        return cls(
            from_flight_number=source.flight_number,
            to_flight_number=None,
            airline=source.airline,
            airline_code=airline_code,
            meals_reassigned=0,
            bottles_reassigned=0,
            status=ReassignmentStatus.NO_FLIGHT,
            reason=reason,
            timestamp=now or datetime.now(),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "from_flight_number": self.from_flight_number,
            "to_flight_number": self.to_flight_number,
            "airline": self.airline,
            "airline_code": self.airline_code,
            "meals_reassigned": self.meals_reassigned,
            "bottles_reassigned": self.bottles_reassigned,
            "status": self.status.value,
            "reason": self.reason,
            "timestamp": self.timestamp,
        }


@dataclass
class CateringOrder:
    """Catering order raised for a flight, e.g. when it receives reassigned resources."""

    flight_number: str
    airline: str
    destination: str
    departure_time: datetime
    meals_requested: int = 0
    snacks_requested: int = 0
    beverages_requested: int = 0
    status: OrderStatus = OrderStatus.PENDING
    timestamp: datetime = field(default_factory=datetime.now)
    id: str = field(default_factory=new_id)


@dataclass
class ProcessResult:
    """Records created by one processing run."""

    reassignments: List[Reassignment] = field(default_factory=list)
    processed: int = 0

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.reassignments if r.status is ReassignmentStatus.SUCCESS)

    def to_dataframe(self):
        """Convert to pandas DataFrame."""
        return reassignments_dataframe(self.reassignments)


@dataclass
class ReliabilityResult:
    """Reliability check for one flight."""

    flight: Flight
    weather: WeatherData
    reliability: int
    recommendation: str


REASSIGNMENT_COLUMNS = [
    "id",
    "from_flight_number",
    "to_flight_number",
    "airline",
    "airline_code",
    "meals_reassigned",
    "bottles_reassigned",
    "status",
    "reason",
    "timestamp",
]

FLIGHT_COLUMNS = [
    "id",
    "flight_number",
    "airline",
    "destination",
    "departure_time",
    "status",
    "planned_meals",
    "planned_bottles",
    "reliability",
]


def reassignments_dataframe(records: List[Reassignment]):
    """Tabulate reassignment records."""
    import pandas as pd

    if not records:
        return pd.DataFrame(columns=REASSIGNMENT_COLUMNS)
    return pd.DataFrame([r.to_dict() for r in records], columns=REASSIGNMENT_COLUMNS)


def flights_dataframe(flights: List[Flight]):
    """Tabulate flights."""
    import pandas as pd

    if not flights:
        return pd.DataFrame(columns=FLIGHT_COLUMNS)
    return pd.DataFrame(
        [
            {
                "id": f.id,
                "flight_number": f.flight_number,
                "airline": f.airline,
                "destination": f.destination,
                "departure_time": f.departure_time,
                "status": f.status.value,
                "planned_meals": f.planned_meals,
                "planned_bottles": f.planned_bottles,
                "reliability": f.reliability,
            }
            for f in flights
        ],
        columns=FLIGHT_COLUMNS,
    )
