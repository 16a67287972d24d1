import json
import time
from datetime import date
from pathlib import Path

import pytest


FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def listing_snapshot():
    """Load a listing's reservation snapshot (mixed statuses, one malformed)."""
    with open(FIXTURES_DIR / "reservations" / "listing_snapshot.json") as f:
        return json.load(f)


@pytest.fixture
def overlapping_requests():
    """Load two overlapping active reservations (confirmed + pending)."""
    with open(FIXTURES_DIR / "reservations" / "overlapping_requests.json") as f:
        return json.load(f)


@pytest.fixture
def fixed_today():
    """A today provider pinned to 2024-06-15."""
    return lambda: date(2024, 6, 15)


@pytest.fixture
def new_york_time(monkeypatch):
    """Run with America/New_York as the local zone (DST observed)."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", "America/New_York")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()
