"""
Widget session: ties the availability feed, the index, the validator and the
selection state machine together, the way the booking widget uses them.
"""
import datetime
import logging
from typing import Mapping, Optional, Protocol

from app.core.config import settings
from app.domain.availability import AvailabilityIndex
from app.domain.calendar import SelectedRange, first_of_month
from app.domain.date_validation import RangeValidator
from app.domain.selection import RangeCallback, SelectionController
from app.schemas.availability import (
    AvailabilityResponse,
    GuestInfo,
    RoomAvailabilityRecord,
    RoomInfo,
)
from app.schemas.booking import BookingForm, BookingRequest
from app.schemas.room import RoomConfig

logger = logging.getLogger(__name__)


class AvailabilityFeed(Protocol):
    async def fetch(self, requested: datetime.date) -> AvailabilityResponse: ...


class DatesPicker:
    def __init__(
        self,
        feed: AvailabilityFeed,
        room_configs: Optional[Mapping[int, RoomConfig]] = None,
        guest_info: Optional[GuestInfo] = None,
        is_mirador: bool = False,
        on_range_select: Optional[RangeCallback] = None,
        today: Optional[datetime.date] = None,
        mirador_room_number: Optional[int] = None,
    ):
        self.feed = feed
        self.room_configs = room_configs
        self.guest_info = guest_info
        self.is_mirador = is_mirador
        self.mirador_room_number = (
            settings.mirador_room_number if mirador_room_number is None else mirador_room_number
        )
        self.current_month = first_of_month(today or datetime.date.today())

        self.snapshot: Optional[list[RoomAvailabilityRecord]] = None
        self.error: Optional[str] = None
        self.loading = False
        # Sequence number of the latest fetch issued; older responses are dropped
        self._generation = 0

        self.selection = SelectionController(on_change=on_range_select)
        self._rebuild()

    def _rebuild(self) -> None:
        room_filter = self.mirador_room_number if self.is_mirador else None
        self.index = AvailabilityIndex(self.snapshot, self.room_configs, room_filter)
        self.validator = RangeValidator(self.index, self.current_month)
        self.selection.validator = self.validator

    @property
    def party_size(self) -> Optional[int]:
        return self.guest_info.party_size if self.guest_info else None

    @property
    def selected(self) -> Optional[SelectedRange]:
        return self.selection.selected

    def set_guest_info(self, guest_info: Optional[GuestInfo]) -> None:
        self.guest_info = guest_info

    async def load(self) -> bool:
        return await self.change_month(self.current_month)

    async def change_month(self, new_month: datetime.date) -> bool:
        """Show `new_month` and the one after it; True if the fetched data was applied."""
        self.current_month = first_of_month(new_month)
        self._generation += 1
        generation = self._generation
        self.loading = True
        self._rebuild()

        snapshot, error = await self._fetch(self.current_month)

        if generation != self._generation:
            logger.debug(
                "Discarding stale availability for %s (request %s, latest %s)",
                new_month,
                generation,
                self._generation,
            )
            return False

        self.snapshot = snapshot
        self.error = error
        self.loading = False
        self._rebuild()
        return True

    async def _fetch(
        self, month: datetime.date
    ) -> tuple[Optional[list[RoomAvailabilityRecord]], Optional[str]]:
        try:
            response = await self.feed.fetch(month)
        except Exception as e:
            logger.error(f"Error fetching monthly availability: {e}", exc_info=True)
            return None, str(e) or type(e).__name__

        if not response.success or response.data is None:
            logger.error(
                f"Failed to fetch monthly availability for {month:%Y-%m}: "
                f"{response.error or 'no data'}"
            )
            return None, response.error or "No data"
        return response.data, None

    # Picker interaction

    def pick(self, day: datetime.date) -> Optional[SelectedRange]:
        return self.selection.pick(day)

    def handle_range_select(
        self, start: Optional[datetime.date], end: Optional[datetime.date] = None
    ) -> Optional[SelectedRange]:
        return self.selection.handle_range_select(start, end)

    def clear(self) -> None:
        self.selection.clear()

    # Outputs for the UI

    def available_dates(self) -> list[datetime.date]:
        dates: set[datetime.date] = set()
        for year, month in self.validator.window:
            dates |= self.index.available_dates_for_month(year, month, self.party_size)
        return self.selection.picker_available_dates(dates)

    def occupied_dates(self) -> list[datetime.date]:
        return sorted(self.validator.occupied_dates())

    def disabled_dates(self) -> list[datetime.date]:
        return self.validator.all_disabled_dates(self.selected)

    def eligible_rooms(self) -> list[RoomInfo]:
        return self.index.eligible_rooms(self.selected, self.party_size)

    def build_booking_request(self, form: BookingForm, room: RoomInfo) -> BookingRequest:
        selected = self.selected
        if selected is None or not selected.is_closed:
            raise ValueError("Select check-in and checkout dates first")

        return BookingRequest(
            start_date=selected.start,
            end_date=selected.end,
            name=form.name,
            phone=form.phone,
            adults=form.adults,
            children=form.children,
            pets=form.dogs,
            room_name=room.room_name,
            room_number=room.room_number,
            is_mirador=self.is_mirador,
        )
