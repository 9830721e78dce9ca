"""Flight status values and parsing of free-text status strings."""

import re
from enum import Enum
from typing import Optional

from galleyops.exceptions import InvalidFlightError


class FlightStatus(str, Enum):
    """Operational status of a flight."""

    SCHEDULED = "scheduled"
    DELAYED = "delayed"
    CANCELLED = "cancelled"
    REASSIGNED = "reassigned"


# Free-text variants seen in operator input and CSV exports
_ALIASES = {
    "on time": FlightStatus.SCHEDULED,
    "ontime": FlightStatus.SCHEDULED,
    "canceled": FlightStatus.CANCELLED,
    "cxl": FlightStatus.CANCELLED,
    "dly": FlightStatus.DELAYED,
}
_SPACE_RE = re.compile(r"[\s_-]+")


def parse_flight_status(status: Optional[str]) -> FlightStatus:
    """Parse a raw status string into a FlightStatus. Unknown values raise InvalidFlightError."""
    if isinstance(status, FlightStatus):
        return status
    if not status or not isinstance(status, str) or not status.strip():
        raise InvalidFlightError("Flight status is required", error_code="INVALID_STATUS")

    s = _SPACE_RE.sub(" ", status.strip().lower())
    if s in _ALIASES:
        return _ALIASES[s]
    try:
        return FlightStatus(s)
    except ValueError:
        raise InvalidFlightError(
            f"Unknown flight status: {status!r}",
            error_code="INVALID_STATUS",
            context={"status": status},
        ) from None


def is_disrupted(status: FlightStatus) -> bool:
    """True for statuses whose catering can be handed off to another flight."""
    return status in (FlightStatus.DELAYED, FlightStatus.CANCELLED)
