"""
Pytest configuration for booking widget tests
"""
import os
import sys
from pathlib import Path

import pytest

# Ensure app is importable
sys.path.insert(0, str(Path(__file__).parent.parent))

# Settings are read at import time, so the environment is pinned before any app import
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("TELEGRAM_BOT_TOKEN", "")
os.environ.setdefault("TELEGRAM_CHAT_ID", "0")
os.environ.setdefault("LOG_SLOW_REQUEST_THRESHOLD_MS", "100000")

from app.domain.calendar import days_in_month  # noqa: E402
from app.schemas.availability import AvailabilityResponse, RoomAvailabilityRecord  # noqa: E402


def make_record(room_number, year, month, available, room_name=None, tab_title="tab"):
    month_days = days_in_month(year, month)
    available = sorted(available)
    return RoomAvailabilityRecord(
        room_number=room_number,
        room_name=room_name or f"Кімната {room_number}",
        available_dates=available,
        occupied_dates=[d for d in range(1, month_days + 1) if d not in available],
        year=year,
        month=month,
        tab_title=tab_title,
    )


def make_snapshot(months, rooms=(1, 2, 3), occupied=()):
    """Every room free every day of `months`, except the completely occupied dates."""
    snapshot = []
    for year, month in months:
        blocked = {d.day for d in occupied if (d.year, d.month) == (year, month)}
        free = [d for d in range(1, days_in_month(year, month) + 1) if d not in blocked]
        snapshot.extend(make_record(room, year, month, free) for room in rooms)
    return snapshot


class StaticFeed:
    """Availability feed returning one prepared response."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    async def fetch(self, requested):
        self.requests.append(requested)
        if self.error:
            raise self.error
        return self.response


@pytest.fixture
def june_july():
    return [(2025, 6), (2025, 7)]


@pytest.fixture
def free_snapshot(june_july):
    """Rooms 1-7 free for all of June and July 2025."""
    return make_snapshot(june_july, rooms=range(1, 8))


@pytest.fixture
def free_feed(free_snapshot):
    return StaticFeed(AvailabilityResponse(success=True, data=free_snapshot))


@pytest.fixture
def sample_booking_payload():
    """Sample booking form submission, as the widget sends it"""
    return {
        "startDate": "2025-06-10",
        "endDate": "2025-06-13",
        "name": "Олена Коваль",
        "phone": "050 123 45 67",
        "adults": 2,
        "children": 1,
        "pets": 1,
        "roomName": "Кімната 2",
        "roomNumber": 2,
        "isMirador": False,
    }

