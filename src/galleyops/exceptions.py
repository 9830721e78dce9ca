"""Exceptions raised by galleyops."""


class GalleyOpsError(Exception):
    """Base exception for the package."""

    def __init__(self, message: str, error_code: str = None, context: dict = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or "GENERIC_ERROR"
        self.context = context or {}


class FlightStoreError(GalleyOpsError):
    """The flight collection could not be read."""


class FlightNotFoundError(GalleyOpsError):
    """A flight id does not exist in the store."""

    def __init__(self, flight_id: str):
        super().__init__(
            f"Flight not found: {flight_id}",
            error_code="FLIGHT_NOT_FOUND",
            context={"flight_id": flight_id},
        )
        self.flight_id = flight_id


class InvalidFlightError(GalleyOpsError, ValueError):
    """Flight data failed validation."""


class ReassignmentError(GalleyOpsError):
    """A requested reassignment cannot be carried out."""


class WeatherServiceError(GalleyOpsError):
    """The weather API returned an error or an unusable payload."""
