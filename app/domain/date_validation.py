"""
Range validation for the two-month picker.

Checkout on a completely occupied day is legal: the guest leaves before that
night starts. So once a check-in is chosen, the guest may walk forward through
available nights and check out on the first day nobody can host them.
"""
import datetime
from typing import Optional

from app.domain.availability import AvailabilityIndex
from app.domain.calendar import (
    ONE_DAY,
    SelectedRange,
    display_window,
    first_of_month,
    get_month_dates,
    last_of_month,
    next_month,
    stay_dates,
)


class RangeValidator:
    """Stay-validity and disabled-date rules for one snapshot and window."""

    def __init__(self, index: AvailabilityIndex, current_month: datetime.date):
        self.index = index
        self.current_month = first_of_month(current_month)
        self.window = display_window(self.current_month)

    @property
    def window_start(self) -> datetime.date:
        return self.current_month

    @property
    def window_end(self) -> datetime.date:
        return last_of_month(*self.window[1])

    def window_dates(self) -> list[datetime.date]:
        return [d for month in self.window for d in get_month_dates(*month)]

    def is_range_valid(self, check_in: datetime.date, check_out: datetime.date) -> bool:
        """Every night of [check_in, check_out) has at least one free room."""
        if not self.index.has_data or check_out <= check_in:
            return False
        return all(self.index.is_day_available(night) for night in stay_dates(check_in, check_out))

    def _scan_limit(self, check_in: datetime.date) -> datetime.date:
        # Check-in month and the one after, never past the displayed window
        following = last_of_month(*next_month(check_in.year, check_in.month))
        return min(following, self.window_end)

    def find_first_allowed_checkout_date(
        self, check_in: datetime.date
    ) -> Optional[datetime.date]:
        """First completely occupied day after check-in, or None if there is none.

        That day is the furthest checkout the guest can reach.
        """
        if not self.index.has_data:
            return None

        limit = self._scan_limit(check_in)
        day = check_in + ONE_DAY
        while day <= limit:
            if not self.index.is_day_available(day):
                return day
            day += ONE_DAY
        return None

    def smart_disabled_dates(self, selected: Optional[SelectedRange]) -> set[datetime.date]:
        """Window dates a checkout pick must not land on, while a range is open."""
        if not self.index.has_data or selected is None or not selected.is_open:
            return set()

        check_in = selected.start
        boundary = self.find_first_allowed_checkout_date(check_in)
        last_allowed = boundary if boundary is not None else self._scan_limit(check_in)

        return {
            day
            for day in self.window_dates()
            if day <= check_in or day > last_allowed
        }

    def occupied_dates(self) -> set[datetime.date]:
        """Completely occupied dates across both displayed months.

        Without data the whole window comes back occupied.
        """
        occupied: set[datetime.date] = set()
        for year, month in self.window:
            occupied |= self.index.occupied_dates_for_month(year, month)
        return occupied

    def all_disabled_dates(self, selected: Optional[SelectedRange]) -> list[datetime.date]:
        disabled = self.occupied_dates()
        if selected is None or not selected.is_open:
            return sorted(disabled)

        disabled |= self.smart_disabled_dates(selected)

        # These stay clickable so a one-night or boundary stay can be completed
        keep = {selected.start, selected.start + ONE_DAY}
        boundary = self.find_first_allowed_checkout_date(selected.start)
        if boundary is not None:
            keep.add(boundary)
        return sorted(disabled - keep)
