"""Pytest configuration and fixtures."""

import sys
from datetime import datetime
from pathlib import Path

import pytest

# Ensure src is on path when running tests without installed package
src = Path(__file__).resolve().parent.parent / "src"
if src.exists() and str(src) not in sys.path:
    sys.path.insert(0, str(src))


@pytest.fixture
def now() -> datetime:
    """Fixed reference time for window calculations."""
    return datetime(2025, 3, 14, 12, 0, 0)
