"""Airline code derivation used as the reassignment compatibility key."""

import json
import re
from importlib import resources
from pathlib import Path
from typing import Optional

from galleyops.config import get_settings
from galleyops.log import get_logger

logger = get_logger(__name__)

_PREFIX_RE = re.compile(r"^([A-Z]{2,3})")

_codes_cache: Optional[dict[str, str]] = None

# Carriers whose display name differs from what the shipped table covers
_CODE_OVERRIDES: dict[str, str] = {
    "Aeroméxico": "AM",
    "Interjet": "4O",
}


def _normalize_name(name: str) -> str:
    return " ".join(name.split()).casefold()


def normalize_codes(table: dict[str, str]) -> dict[str, str]:
    """Key a name->code table by normalized airline name."""
    return {_normalize_name(str(name)): code for name, code in table.items()}


def _read_table(path) -> dict[str, str]:
    with path.open(encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Airline code table must be a JSON object: {path}")
    return {str(name): str(code).strip().upper() for name, code in data.items() if code}


def load_airline_codes(extra_path: Optional[str] = None) -> dict[str, str]:
    """
    Load the airline name->code table.

    The shipped table is merged with the built-in overrides and then with the
    JSON object at `extra_path` (if given), later sources winning. Keys are
    normalized (case and whitespace insensitive).
    """
    table: dict[str, str] = {}
    try:
        shipped = resources.files("galleyops.reference.data").joinpath("airline_codes.json")
        table.update(_read_table(shipped))
    except (FileNotFoundError, json.JSONDecodeError):
        logger.warning("Shipped airline code table unavailable")
    table.update(_CODE_OVERRIDES)
    if extra_path:
        table.update(_read_table(Path(extra_path)))
    return normalize_codes(table)


def _get_codes() -> dict[str, str]:
    global _codes_cache
    if _codes_cache is None:
        _codes_cache = load_airline_codes(get_settings().airline_codes_path)
    return _codes_cache


def reset_airline_codes() -> None:
    """Drop the cached table so the next lookup reloads it."""
    global _codes_cache
    _codes_cache = None


def code_for_airline(airline: str, codes: Optional[dict[str, str]] = None) -> Optional[str]:
    """Look up an airline display name in the name->code table. Returns None if not found."""
    if not airline or not airline.strip():
        return None
    table = _get_codes() if codes is None else normalize_codes(codes)
    return table.get(_normalize_name(airline))


def extract_airline_code(
    flight_number: str, airline: str, codes: Optional[dict[str, str]] = None
) -> str:
    """
    Derive the airline code for a flight.

    "AM651" -> "AM". Flight numbers without a 2-3 letter uppercase prefix fall
    back to the name table, then to the first two letters of the airline name.
    Returns "" only when both inputs are empty.
    """
    m = _PREFIX_RE.match((flight_number or "").strip())
    if m:
        return m.group(1)

    code = code_for_airline(airline, codes)
    if code:
        return code

    name = (airline or "").strip()
    return name[:2].upper()
