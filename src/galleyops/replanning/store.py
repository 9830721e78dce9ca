"""Flight registry and reassignment log storage."""

import threading
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Protocol, runtime_checkable

import pandas as pd

from galleyops.catering.models import (
    AirlineRule,
    BottleAnalysis,
    EmployeeMetric,
    TrolleyVerification,
)
from galleyops.exceptions import FlightStoreError, InvalidFlightError
from galleyops.log import get_logger
from galleyops.replanning.models import CateringOrder, Flight, Reassignment, to_naive_local

logger = get_logger(__name__)


@runtime_checkable
class FlightStore(Protocol):
    """Protocol for the flight registry and reassignment log used by the replanning service."""

    def list_flights(self) -> List[Flight]:
        """All flights with their current status. Raises FlightStoreError if unreadable."""
        ...

    def get_flight(self, flight_id: str) -> Optional[Flight]:
        ...

    def update_flight(self, flight_id: str, **changes) -> Optional[Flight]:
        """Apply field changes. Returns None when the flight does not exist."""
        ...

    def append_reassignment(self, record: Reassignment) -> None:
        ...

    def add_order(self, order: CateringOrder) -> CateringOrder:
        ...

    def list_reassignments(self) -> List[Reassignment]:
        """Reassignment log, most recent first."""
        ...


class InMemoryStore:
    """Process-local store for flights, the reassignment log, and catering records."""

    def __init__(self, flights: Optional[List[Flight]] = None):
        self._lock = threading.RLock()
        self._flights: Dict[str, Flight] = {}
        self._reassignments: List[Reassignment] = []
        self._orders: List[CateringOrder] = []
        self._rules: Dict[str, AirlineRule] = {}
        self._bottle_analyses: List[BottleAnalysis] = []
        self._trolley_verifications: List[TrolleyVerification] = []
        self._employee_metrics: List[EmployeeMetric] = []
        for f in flights or []:
            self.add_flight(f)

    # Flights

    def list_flights(self) -> List[Flight]:
        """Flights ordered by departure time, latest first."""
        with self._lock:
            return sorted(self._flights.values(), key=lambda f: f.departure_time, reverse=True)

    def get_flight(self, flight_id: str) -> Optional[Flight]:
        with self._lock:
            return self._flights.get(flight_id)

    def add_flight(self, flight: Flight) -> Flight:
        with self._lock:
            if flight.id in self._flights:
                raise InvalidFlightError(
                    f"Duplicate flight id: {flight.id}", error_code="DUPLICATE_FLIGHT"
                )
            self._flights[flight.id] = flight
            return flight

    def update_flight(self, flight_id: str, **changes) -> Optional[Flight]:
        """Replace the stored flight with an updated copy (validation re-runs)."""
        with self._lock:
            flight = self._flights.get(flight_id)
            if flight is None:
                return None
            changes.pop("id", None)
            updated = replace(flight, **changes)
            self._flights[flight_id] = updated
            return updated

    def delete_flight(self, flight_id: str) -> bool:
        with self._lock:
            return self._flights.pop(flight_id, None) is not None

    # Reassignment log

    def append_reassignment(self, record: Reassignment) -> None:
        with self._lock:
            self._reassignments.append(record)

    def list_reassignments(self) -> List[Reassignment]:
        with self._lock:
            # reversed first so later appends win ties on equal timestamps
            return sorted(reversed(self._reassignments), key=lambda r: r.timestamp, reverse=True)

    # Orders

    def add_order(self, order: CateringOrder) -> CateringOrder:
        with self._lock:
            self._orders.append(order)
            return order

    def list_orders(self) -> List[CateringOrder]:
        with self._lock:
            return sorted(reversed(self._orders), key=lambda o: o.timestamp, reverse=True)

    # Airline rules

    def list_airline_rules(self) -> List[AirlineRule]:
        with self._lock:
            return list(self._rules.values())

    def get_airline_rule(self, airline: str) -> Optional[AirlineRule]:
        with self._lock:
            return next((r for r in self._rules.values() if r.airline == airline), None)

    def add_airline_rule(self, rule: AirlineRule) -> AirlineRule:
        with self._lock:
            if self.get_airline_rule(rule.airline) is not None:
                raise ValueError(f"Rule already exists for airline: {rule.airline}")
            self._rules[rule.id] = rule
            return rule

    def update_airline_rule(self, rule_id: str, **changes) -> Optional[AirlineRule]:
        with self._lock:
            rule = self._rules.get(rule_id)
            if rule is None:
                return None
            changes.pop("id", None)
            updated = replace(rule, **changes)
            self._rules[rule_id] = updated
            return updated

    # Vision check records

    def add_bottle_analysis(self, analysis: BottleAnalysis) -> BottleAnalysis:
        with self._lock:
            self._bottle_analyses.append(analysis)
            return analysis

    def list_bottle_analyses(self) -> List[BottleAnalysis]:
        with self._lock:
            return sorted(reversed(self._bottle_analyses), key=lambda a: a.timestamp, reverse=True)

    def add_trolley_verification(self, verification: TrolleyVerification) -> TrolleyVerification:
        with self._lock:
            self._trolley_verifications.append(verification)
            return verification

    def list_trolley_verifications(self) -> List[TrolleyVerification]:
        with self._lock:
            return sorted(
                reversed(self._trolley_verifications), key=lambda v: v.timestamp, reverse=True
            )

    # Employee performance

    def add_employee_metric(self, metric: EmployeeMetric) -> EmployeeMetric:
        with self._lock:
            self._employee_metrics.append(metric)
            return metric

    def list_employee_metrics(self) -> List[EmployeeMetric]:
        with self._lock:
            return list(self._employee_metrics)

    # Demo mode

    def clear(self) -> None:
        with self._lock:
            self._flights.clear()
            self._reassignments = []
            self._orders = []
            self._rules.clear()
            self._bottle_analyses = []
            self._trolley_verifications = []
            self._employee_metrics = []

    def load_demo_data(self, now: Optional[datetime] = None) -> None:
        """Replace all contents with the demo data set."""
        from galleyops.replanning import demo

        with self._lock:
            self.clear()
            flights = demo.demo_flights(now)
            for f in flights:
                self.add_flight(f)
            for rule in demo.demo_rules():
                self.add_airline_rule(rule)
            # Spread the check records across the demo flights
            for i, analysis in enumerate(demo.demo_bottle_analyses()):
                analysis.flight_id = flights[i % len(flights)].id
                self.add_bottle_analysis(analysis)
            for i, verification in enumerate(demo.demo_trolley_verifications()):
                verification.flight_id = flights[i % len(flights)].id
                self.add_trolley_verification(verification)
            for metric in demo.demo_employee_metrics():
                self.add_employee_metric(metric)
        logger.info("Demo data loaded", flights=len(flights))


CSV_COLUMNS = [
    "flight_number",
    "airline",
    "destination",
    "departure_time",
    "status",
    "planned_meals",
    "planned_bottles",
]


def _parse_departure(value: str) -> datetime:
    """Parse a departure timestamp; aware values are converted to naive local time."""
    if not value or not value.strip():
        raise ValueError("departure_time is required")
    return to_naive_local(pd.Timestamp(value.strip()).to_pydatetime())


class CsvFlightSource(InMemoryStore):
    """
    Store whose flights are read from a CSV file on every `list_flights` call.

    Required columns: flight_number, airline, destination, departure_time,
    status, planned_meals, planned_bottles. Optional: id, reliability.
    Status and reliability updates are kept in memory and overlaid on the
    rows read from disk. The file is read once per `list_flights` call;
    `get_flight` looks flights up in that last snapshot.
    """

    def __init__(self, path):
        super().__init__()
        self.path = Path(path)
        self._overrides: Dict[str, dict] = {}
        self._snapshot: Optional[Dict[str, Flight]] = None

    def _read(self) -> List[Flight]:
        try:
            df = pd.read_csv(self.path, dtype=str, keep_default_na=False)
        except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            raise FlightStoreError(
                f"Cannot read flights from {self.path}: {e}",
                error_code="STORE_UNAVAILABLE",
                context={"path": str(self.path)},
            ) from e
        missing = [c for c in CSV_COLUMNS if c not in df.columns]
        if missing:
            raise FlightStoreError(
                f"{self.path} is missing columns: {', '.join(missing)}",
                error_code="STORE_SCHEMA",
                context={"path": str(self.path), "missing": missing},
            )

        flights = []
        for i, row in enumerate(df.to_dict(orient="records")):
            flight_id = row.get("id") or f"{self.path.stem}-{i + 1}"
            try:
                flight = Flight(
                    id=flight_id,
                    flight_number=row["flight_number"].strip(),
                    airline=row["airline"].strip(),
                    destination=row["destination"].strip(),
                    departure_time=_parse_departure(row["departure_time"]),
                    status=row["status"],
                    planned_meals=int(row["planned_meals"] or 0),
                    planned_bottles=int(row["planned_bottles"] or 0),
                    reliability=float(row["reliability"]) if row.get("reliability") else None,
                )
            except (ValueError, TypeError) as e:
                # InvalidFlightError is a ValueError
                logger.warning(
                    "Skipping invalid flight row", path=str(self.path), row=i + 1, error=str(e)
                )
                continue
            if flight_id in self._overrides:
                flight = replace(flight, **self._overrides[flight_id])
            flights.append(flight)
        return flights

    def list_flights(self) -> List[Flight]:
        flights = self._read()
        with self._lock:
            self._snapshot = {f.id: f for f in flights}
        return sorted(flights, key=lambda f: f.departure_time, reverse=True)

    def get_flight(self, flight_id: str) -> Optional[Flight]:
        with self._lock:
            snapshot = self._snapshot
        if snapshot is None:
            self.list_flights()
            snapshot = self._snapshot
        return snapshot.get(flight_id)

    def update_flight(self, flight_id: str, **changes) -> Optional[Flight]:
        flight = self.get_flight(flight_id)
        if flight is None:
            return None
        changes.pop("id", None)
        updated = replace(flight, **changes)
        with self._lock:
            self._overrides.setdefault(flight_id, {}).update(changes)
            self._snapshot[flight_id] = updated
        return updated

    def add_flight(self, flight: Flight) -> Flight:
        raise FlightStoreError("CSV flight source is read-only", error_code="STORE_READ_ONLY")

    def delete_flight(self, flight_id: str) -> bool:
        raise FlightStoreError("CSV flight source is read-only", error_code="STORE_READ_ONLY")
