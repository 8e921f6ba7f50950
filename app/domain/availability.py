"""
Availability index: projections of a two-month snapshot into date and room sets.

Everything here is a pure derivation over the snapshot the index was built
with. The snapshot is tiny (a handful of rooms, two months), so queries
recompute freely and nothing is cached between calls.
"""
import datetime
import logging
from typing import Mapping, Optional, Sequence

from app.data.rooms_config import ROOMS_CONFIG
from app.domain.calendar import SelectedRange, days_in_month, stay_dates
from app.schemas.availability import RoomAvailabilityRecord, RoomInfo
from app.schemas.room import RoomConfig

logger = logging.getLogger(__name__)

MonthKey = tuple[int, int]


class AvailabilityIndex:
    """Read-only view over one AvailabilitySnapshot.

    `snapshot=None` means the feed failed or has not answered yet; every
    query then fails closed (no available dates, every date occupied).
    `room_filter` restricts all queries to a single room (Mirador widget).
    """

    def __init__(
        self,
        snapshot: Optional[Sequence[RoomAvailabilityRecord]],
        room_configs: Optional[Mapping[int, RoomConfig]] = None,
        room_filter: Optional[int] = None,
    ):
        self.room_configs = ROOMS_CONFIG if room_configs is None else room_configs
        self.room_filter = room_filter
        self.has_data = snapshot is not None

        # (year, month) -> room_number -> available day numbers
        self._days: dict[MonthKey, dict[int, frozenset[int]]] = {}
        self._rooms: dict[int, RoomInfo] = {}

        for record in snapshot or []:
            if room_filter is not None and record.room_number != room_filter:
                continue
            month_days = days_in_month(record.year, record.month)
            days = frozenset(d for d in record.available_dates if 1 <= d <= month_days)
            self._days.setdefault((record.year, record.month), {})[record.room_number] = days
            self._rooms[record.room_number] = RoomInfo(
                room_number=record.room_number, room_name=record.room_name
            )

    def rooms(self) -> list[RoomInfo]:
        """Rooms present in the snapshot, ordered by number."""
        return [self._rooms[n] for n in sorted(self._rooms)]

    def _fits(self, room_number: int, party_size: Optional[int]) -> bool:
        if party_size is None:
            return True
        config = self.room_configs.get(room_number)
        # Unknown room: its capacity cannot be checked
        return config is not None and config.max_persons >= party_size

    def available_days_for_month(
        self, year: int, month: int, party_size: Optional[int] = None
    ) -> set[int]:
        days: set[int] = set()
        for room_number, room_days in self._days.get((year, month), {}).items():
            if self._fits(room_number, party_size):
                days |= room_days
        return days

    def available_dates_for_month(
        self, year: int, month: int, party_size: Optional[int] = None
    ) -> set[datetime.date]:
        """Dates on which at least one (fitting) room is free for the night."""
        return {
            datetime.date(year, month, day)
            for day in self.available_days_for_month(year, month, party_size)
        }

    def occupied_dates_for_month(self, year: int, month: int) -> set[datetime.date]:
        """Dates on which no room at all is free, whatever the party size."""
        available = self.available_days_for_month(year, month)
        return {
            datetime.date(year, month, day)
            for day in range(1, days_in_month(year, month) + 1)
            if day not in available
        }

    def is_day_available(self, night: datetime.date) -> bool:
        """True if at least one room is free for the night starting on `night`."""
        rooms = self._days.get((night.year, night.month), {})
        return any(night.day in days for days in rooms.values())

    def is_room_available(self, room_number: int, night: datetime.date) -> bool:
        days = self._days.get((night.year, night.month), {}).get(room_number)
        # No record for that month: treated as occupied
        return days is not None and night.day in days

    def eligible_rooms(
        self,
        selected: Optional[SelectedRange],
        party_size: Optional[int] = None,
    ) -> list[RoomInfo]:
        """Rooms free for every night of the selection.

        An open selection stands for a single night. Rooms without a
        configuration entry are left out.
        """
        if selected is None:
            return []

        nights = stay_dates(selected.start, selected.checkout)
        eligible = []
        for room in self.rooms():
            if room.room_number not in self.room_configs:
                logger.debug("Room %s has no configuration, skipping", room.room_number)
                continue
            if not self._fits(room.room_number, party_size):
                continue
            if all(self.is_room_available(room.room_number, night) for night in nights):
                eligible.append(room)
        return eligible
