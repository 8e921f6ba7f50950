import calendar
import datetime
from dataclasses import dataclass
from typing import Optional

ONE_DAY = datetime.timedelta(days=1)


@dataclass(frozen=True)
class SelectedRange:
    """
    Date range chosen in the picker.

    Open while only `start` is set (the guest is picking checkout),
    closed once `end` is set too. An empty selection is represented by None.
    """

    start: datetime.date
    end: Optional[datetime.date] = None

    @property
    def is_open(self) -> bool:
        return self.end is None

    @property
    def is_closed(self) -> bool:
        return self.end is not None

    @property
    def checkout(self) -> datetime.date:
        """Checkout date, implicitly the next day while the range is open."""
        return self.end if self.end is not None else self.start + ONE_DAY

    @property
    def nights(self) -> int:
        return (self.checkout - self.start).days


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def get_month_dates(year: int, month: int) -> list[datetime.date]:
    return [
        datetime.date(year, month, day)
        for day in range(1, days_in_month(year, month) + 1)
    ]


def first_of_month(value: datetime.date) -> datetime.date:
    return value.replace(day=1)


def last_of_month(year: int, month: int) -> datetime.date:
    return datetime.date(year, month, days_in_month(year, month))


def next_month(year: int, month: int) -> tuple[int, int]:
    if month == 12:
        return year + 1, 1
    return year, month + 1


def display_window(
    current_month: datetime.date,
) -> tuple[tuple[int, int], tuple[int, int]]:
    """The two months shown side by side: the current one and the next."""
    first = (current_month.year, current_month.month)
    return first, next_month(*first)


def stay_dates(
    check_in: datetime.date, check_out: datetime.date
) -> list[datetime.date]:
    """Nights of a half-open stay [check_in, check_out)."""
    nights = []
    current = check_in
    while current < check_out:
        nights.append(current)
        current += ONE_DAY
    return nights
