"""
Selection state machine of the date-range picker.

    Empty  --pick(d)-->                      Open(d)
    Open(f) --pick(f)-->                     Open(f)
    Open(f) --pick(d), valid stay-->         Closed(f, d)
    Open(f) --pick(d), invalid stay-->       Open(f)      (ignored)
    Closed --pick(d)-->                      Empty, then Open(d)
    any    --clear-->                        Empty
"""
import datetime
import enum
import logging
from typing import Callable, Iterable, Optional

from app.domain.calendar import ONE_DAY, SelectedRange
from app.domain.date_validation import RangeValidator

logger = logging.getLogger(__name__)

RangeCallback = Callable[[Optional[SelectedRange]], None]


class SelectionState(str, enum.Enum):
    EMPTY = "empty"
    OPEN = "open"
    CLOSED = "closed"


class SelectionController:
    def __init__(
        self,
        validator: Optional[RangeValidator] = None,
        on_change: Optional[RangeCallback] = None,
    ):
        # Swapped by the owner whenever a new snapshot arrives
        self.validator = validator
        self.on_change = on_change
        self.selected: Optional[SelectedRange] = None

    @property
    def state(self) -> SelectionState:
        if self.selected is None:
            return SelectionState.EMPTY
        if self.selected.is_open:
            return SelectionState.OPEN
        return SelectionState.CLOSED

    def _transition(self, selected: Optional[SelectedRange]) -> None:
        self.selected = selected
        logger.debug("Selection -> %s", selected)
        if self.on_change:
            self.on_change(selected)

    def clear(self) -> None:
        self._transition(None)

    def pick(self, day: datetime.date) -> Optional[SelectedRange]:
        """Apply a click on `day` and return the resulting selection."""
        if self.state is SelectionState.CLOSED:
            # Any click on a complete range starts over
            self._transition(None)

        current = self.selected
        if current is None or day == current.start:
            self._transition(SelectedRange(start=day))
        elif self._accepts_checkout(current.start, day):
            self._transition(SelectedRange(start=current.start, end=day))
        else:
            logger.debug("Ignoring checkout %s for check-in %s", day, current.start)

        return self.selected

    def _accepts_checkout(self, check_in: datetime.date, check_out: datetime.date) -> bool:
        nights = (check_out - check_in).days
        if nights < 1:
            return False
        if nights == 1:
            # Reachable only through the always-clickable next day
            return True
        return self.validator is not None and self.validator.is_range_valid(check_in, check_out)

    def handle_range_select(
        self,
        start: Optional[datetime.date],
        end: Optional[datetime.date] = None,
    ) -> Optional[SelectedRange]:
        """Translate a raw range-picker event into a single `pick`.

        Range pickers report the whole range rather than the clicked day, and
        re-clicking the start date comes back as {from: d, to: d}.
        """
        if start is None:
            self.clear()
            return None

        current = self.selected
        if end is None or end == start:
            clicked = start
        elif current is None:
            self.pick(start)
            clicked = end
        elif start != current.start:
            clicked = start
        else:
            clicked = end

        return self.pick(clicked)

    def picker_available_dates(
        self, available: Iterable[datetime.date]
    ) -> list[datetime.date]:
        """Available dates as shown in the picker.

        While checkout is being picked, the night after check-in is always
        offered so that a one-night stay stays reachable.
        """
        dates = set(available)
        if self.selected is not None and self.selected.is_open:
            dates.add(self.selected.start + ONE_DAY)
        return sorted(dates)
