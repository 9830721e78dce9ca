"""Replanning service - hands catering from disrupted flights to compatible ones."""

import threading
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from galleyops.config import get_settings
from galleyops.exceptions import FlightNotFoundError, ReassignmentError
from galleyops.log import get_logger
from galleyops.reference.airlines import extract_airline_code, normalize_codes
from galleyops.reference.status import FlightStatus
from galleyops.reference.weather import (
    OpenWeatherMapClient,
    calculate_reliability,
    get_weather,
    reliability_recommendation,
)
from galleyops.replanning.models import (
    CateringOrder,
    Flight,
    ProcessResult,
    Reassignment,
    ReliabilityResult,
    to_naive_local,
)
from galleyops.replanning.resolver import compatible_flights, find_target_flight
from galleyops.replanning.store import FlightStore, InMemoryStore

logger = get_logger(__name__)


class ReplanningService:
    """Processes disrupted flights into reassignment log entries."""

    def __init__(
        self,
        store: Optional[FlightStore] = None,
        clock: Optional[Callable[[], datetime]] = None,
        window: Optional[timedelta] = None,
        weather_client: Optional[OpenWeatherMapClient] = None,
        codes: Optional[dict] = None,
    ):
        settings = get_settings()
        self._store = store if store is not None else InMemoryStore()
        self._clock = clock or datetime.now
        self._window = window or timedelta(hours=settings.reassignment_window_hours)
        self._codes = normalize_codes(codes) if codes is not None else None
        if weather_client is None and settings.openweathermap_api_key:
            weather_client = OpenWeatherMapClient(
                settings.openweathermap_api_key, timeout=settings.weather_timeout
            )
        self._weather_client = weather_client
        # One processing run at a time
        self._lock = threading.Lock()

    @property
    def store(self) -> FlightStore:
        return self._store

    @property
    def window(self) -> timedelta:
        return self._window

    def process_reassignments(self) -> ProcessResult:
        """
        Resolve every delayed or cancelled flight against the current flight set.

        Records for the whole batch are built before any is appended to the
        log. Errors reading the flight collection propagate; per-flight data
        problems become no_flight records.
        """
        with self._lock:
            now = self._now()
            flights = self._store.list_flights()
            disrupted = sorted(
                (f for f in flights if f.is_disrupted),
                key=lambda f: (f.departure_time, f.flight_number, f.id),
            )
            logger.info("Processing reassignments", disrupted=len(disrupted), flights=len(flights))

            records: List[Reassignment] = []
            for flight in disrupted:
                if self._store.get_flight(flight.id) is None:
                    logger.warning(
                        "Flight removed before processing, skipping",
                        flight_id=flight.id,
                        flight_number=flight.flight_number,
                    )
                    continue
                records.append(self._resolve(flight, flights, now))

            for record in records:
                self._store.append_reassignment(record)

            result = ProcessResult(reassignments=records, processed=len(records))
            logger.info(
                "Reassignments processed",
                processed=result.processed,
                succeeded=result.succeeded,
                no_flight=result.processed - result.succeeded,
            )
            return result

    def _resolve(self, flight: Flight, flights: List[Flight], now: datetime) -> Reassignment:
        try:
            code = extract_airline_code(flight.flight_number, flight.airline, self._codes)
        except (TypeError, ValueError, AttributeError) as e:
            return self._data_issue(flight, "", e, now)
        if not code:
            logger.warning("No airline code for flight", flight_id=flight.id)
            return Reassignment.no_flight(
                flight,
                code,
                "Data issue: no airline code could be derived "
                f"(flight number {flight.flight_number!r}, airline {flight.airline!r})",
                now,
            )
        if not (flight.airline or "").strip():
            logger.warning(
                "Flight has no airline name", flight_number=flight.flight_number, airline_code=code
            )

        try:
            target = find_target_flight(flight, flights, now, self._window, self._codes)
        except (TypeError, ValueError, AttributeError) as e:
            return self._data_issue(flight, code, e, now)

        if target is None:
            hours = self._window.total_seconds() / 3600
            logger.debug(
                "No compatible flight", flight_number=flight.flight_number, airline_code=code
            )
            return Reassignment.no_flight(
                flight,
                code,
                f"No scheduled {code} flight departing within {hours:g} hours "
                f"to take catering from {flight.status.value} flight {flight.flight_number}",
                now,
            )

        logger.debug(
            "Reassigned catering",
            from_flight=flight.flight_number,
            to_flight=target.flight_number,
            meals=flight.planned_meals,
            bottles=flight.planned_bottles,
        )
        return Reassignment.success(flight, target, code, now)

    def _data_issue(
        self, flight: Flight, code: str, error: Exception, now: datetime
    ) -> Reassignment:
        logger.warning(
            "Malformed flight data, no reassignment",
            flight_id=flight.id,
            flight_number=flight.flight_number,
            error=str(error),
            exc_info=True,
        )
        return Reassignment.no_flight(
            flight, code, f"Data issue while matching {flight.flight_number}: {error}", now
        )

    def list_reassignments(self) -> List[Reassignment]:
        """Full reassignment log, most recent first."""
        return self._store.list_reassignments()

    def compatible_flights(self, flight_id: str) -> List[Flight]:
        """Candidate targets for a flight, best first."""
        flight = self._require_flight(flight_id)
        return compatible_flights(
            flight, self._store.list_flights(), self._now(), self._window, self._codes
        )

    def confirm_reassignment(self, source_id: str, target_id: str) -> CateringOrder:
        """
        Move a disrupted flight's catering onto a target flight.

        Creates a pending order for the target and marks the source flight
        reassigned so later processing runs no longer pick it up.
        """
        with self._lock:
            source = self._require_flight(source_id)
            target = self._require_flight(target_id)
            if not source.is_disrupted:
                raise ReassignmentError(
                    f"Flight {source.flight_number} is {source.status.value}, not delayed or cancelled",
                    error_code="SOURCE_NOT_DISRUPTED",
                    context={"flight_id": source_id},
                )
            candidates = compatible_flights(
                source, self._store.list_flights(), self._now(), self._window, self._codes
            )
            if target.id not in {f.id for f in candidates}:
                raise ReassignmentError(
                    f"Flight {target.flight_number} cannot take catering from {source.flight_number}",
                    error_code="TARGET_NOT_COMPATIBLE",
                    context={"source_id": source_id, "target_id": target_id},
                )

            order = CateringOrder(
                flight_number=target.flight_number,
                airline=target.airline,
                destination=target.destination,
                departure_time=target.departure_time,
                meals_requested=source.planned_meals,
                beverages_requested=source.planned_bottles,
            )
            self._store.add_order(order)
            self._store.update_flight(source.id, status=FlightStatus.REASSIGNED)
            logger.info(
                "Reassignment confirmed",
                from_flight=source.flight_number,
                to_flight=target.flight_number,
                order_id=order.id,
            )
            return order

    def check_reliability(self, flight_id: str) -> ReliabilityResult:
        """Score a flight's destination weather and store the score on the flight."""
        flight = self._require_flight(flight_id)
        weather = get_weather(flight.destination, flight.departure_time, self._weather_client)
        reliability = calculate_reliability(weather)
        updated = self._store.update_flight(flight.id, reliability=reliability)
        if updated is None:
            raise FlightNotFoundError(flight_id)
        return ReliabilityResult(
            flight=updated,
            weather=weather,
            reliability=reliability,
            recommendation=reliability_recommendation(reliability),
        )

    def _now(self) -> datetime:
        return to_naive_local(self._clock())

    def _require_flight(self, flight_id: str) -> Flight:
        flight = self._store.get_flight(flight_id)
        if flight is None:
            raise FlightNotFoundError(flight_id)
        return flight
