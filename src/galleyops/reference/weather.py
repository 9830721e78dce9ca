"""Destination weather lookup and the weather-derived flight reliability score."""

import random
import re
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict, Optional

import requests

from galleyops.exceptions import WeatherServiceError
from galleyops.log import get_logger

logger = get_logger(__name__)

BASE_URL = "https://api.openweathermap.org/data/2.5/weather"

_AIRPORT_RE = re.compile(r"\(([A-Z]{3})\)")

# (lat, lon) of the airports the dashboard serves
AIRPORT_COORDINATES: dict[str, tuple[float, float]] = {
    "JFK": (40.6413, -73.7781),
    "LAX": (33.9416, -118.4085),
    "ORD": (41.9742, -87.9073),
    "ATL": (33.6407, -84.4277),
    "DFW": (32.8998, -97.0403),
    "MIA": (25.7959, -80.2870),
    "LHR": (51.4700, -0.4543),
    "CDG": (49.0097, 2.5479),
    "MEX": (19.4361, -99.0719),
    "CUN": (21.0365, -86.8771),
}

MOCK_CONDITIONS = ["Clear", "Partly Cloudy", "Cloudy", "Rain", "Thunderstorm", "Fog"]

_CONDITION_PENALTY = {
    "Thunderstorm": 40,
    "Fog": 30,
    "Rain": 20,
    "Cloudy": 10,
}


@dataclass
class WeatherData:
    """Weather at a destination. Wind in km/h, visibility in km."""

    temperature: int
    wind_speed: int
    precipitation: int
    visibility: int
    conditions: str
    mock: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def extract_airport_code(destination: str) -> str:
    """'New York (JFK)' -> 'JFK'. Returns the input unchanged when no code is present."""
    m = _AIRPORT_RE.search(destination or "")
    return m.group(1) if m else (destination or "")


def mock_weather(rng: Optional[random.Random] = None) -> WeatherData:
    """Randomized weather used when the API is unavailable."""
    factor = (rng or random).random()
    return WeatherData(
        temperature=15 + int(factor * 20),
        wind_speed=int(factor * 50),
        precipitation=int(factor * 100),
        visibility=5 + int(factor * 5),
        conditions=MOCK_CONDITIONS[int(factor * len(MOCK_CONDITIONS))],
        mock=True,
    )


class OpenWeatherMapClient:
    """Current-weather client for the OpenWeatherMap API."""

    def __init__(self, api_key: str, base_url: str = BASE_URL, timeout: int = 10):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout

    def fetch(self, lat: float, lon: float) -> WeatherData:
        """Fetch current weather for a coordinate. Raises WeatherServiceError on failure."""
        params = {"lat": lat, "lon": lon, "appid": self.api_key, "units": "metric"}
        try:
            resp = requests.get(self.base_url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            raise WeatherServiceError(
                f"Weather API request failed: {e}", error_code="WEATHER_API"
            ) from e
        return self._parse(data)

    def _parse(self, data: dict) -> WeatherData:
        try:
            rain = (data.get("rain") or {}).get("1h")
            conditions = (data.get("weather") or [{}])[0].get("main") or "Clear"
            return WeatherData(
                temperature=round(data["main"]["temp"]),
                # m/s -> km/h
                wind_speed=round(data["wind"]["speed"] * 3.6),
                precipitation=round(rain * 100) if rain else 0,
                # m -> km
                visibility=round(data["visibility"] / 1000),
                conditions=conditions,
            )
        except (KeyError, TypeError, IndexError) as e:
            raise WeatherServiceError(
                f"Unexpected weather payload: {e}", error_code="WEATHER_PAYLOAD"
            ) from e


def get_weather(
    destination: str,
    when: Optional[datetime] = None,
    client: Optional[OpenWeatherMapClient] = None,
    rng: Optional[random.Random] = None,
) -> WeatherData:
    """
    Weather for a flight destination.

    Falls back to mock weather when no client is configured, the destination
    airport has no known coordinates, or the API call fails. `when` is only
    used for logging; the API serves current conditions.
    """
    code = extract_airport_code(destination)
    coords = AIRPORT_COORDINATES.get(code)
    if client is None or not client.api_key or coords is None:
        logger.info("Using mock weather", destination=destination, airport=code)
        return mock_weather(rng)

    try:
        return client.fetch(*coords)
    except WeatherServiceError as e:
        logger.warning(
            "Weather API unavailable, using mock weather",
            destination=destination,
            departure=when.isoformat() if when else None,
            error=e.message,
        )
        return mock_weather(rng)


def calculate_reliability(weather: WeatherData) -> int:
    """Score 0-100: 100 minus penalties for conditions, wind, precipitation and visibility."""
    score = 100 - _CONDITION_PENALTY.get(weather.conditions, 0)

    if weather.wind_speed > 40:
        score -= 25
    elif weather.wind_speed > 30:
        score -= 15
    elif weather.wind_speed > 20:
        score -= 10

    if weather.precipitation > 70:
        score -= 20
    elif weather.precipitation > 40:
        score -= 10

    if weather.visibility < 3:
        score -= 25
    elif weather.visibility < 5:
        score -= 15

    return max(0, min(100, score))


def reliability_recommendation(reliability: float) -> str:
    """Catering guidance for a reliability score."""
    if reliability >= 80:
        return "Excellent flight conditions. Proceed with full meal preparation as planned."
    if reliability >= 70:
        return "Good flight conditions with minor concerns. Maintain standard operations."
    if reliability >= 50:
        return "Moderate concerns due to weather. Consider reducing fresh food load by 20%."
    return (
        "Low reliability due to adverse weather. Recommend reducing fresh food "
        "load by 30-40% to minimize waste."
    )
