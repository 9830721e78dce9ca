"""Reference data: airline codes, flight status parsing, and weather reliability."""

from galleyops.reference.airlines import (
    code_for_airline,
    extract_airline_code,
    load_airline_codes,
    normalize_codes,
    reset_airline_codes,
)
from galleyops.reference.status import FlightStatus, is_disrupted, parse_flight_status
from galleyops.reference.weather import (
    OpenWeatherMapClient,
    WeatherData,
    calculate_reliability,
    get_weather,
    reliability_recommendation,
)

__all__ = [
    "FlightStatus",
    "OpenWeatherMapClient",
    "WeatherData",
    "calculate_reliability",
    "code_for_airline",
    "extract_airline_code",
    "get_weather",
    "is_disrupted",
    "load_airline_codes",
    "normalize_codes",
    "parse_flight_status",
    "reliability_recommendation",
    "reset_airline_codes",
]
