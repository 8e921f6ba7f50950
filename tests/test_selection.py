"""
Tests for the picker selection state machine
"""
from datetime import date

import pytest

from app.domain.availability import AvailabilityIndex
from app.domain.calendar import SelectedRange
from app.domain.date_validation import RangeValidator
from app.domain.selection import SelectionController, SelectionState
from conftest import make_snapshot

JUNE_10 = date(2025, 6, 10)


def controller_for(occupied=(), calls=None):
    index = AvailabilityIndex(make_snapshot([(2025, 6), (2025, 7)], occupied=occupied))
    on_change = calls.append if calls is not None else None
    return SelectionController(RangeValidator(index, date(2025, 6, 1)), on_change)


class TestTransitions:
    def test_first_pick_opens_range(self):
        controller = controller_for()
        assert controller.state is SelectionState.EMPTY
        assert controller.pick(JUNE_10) == SelectedRange(JUNE_10)
        assert controller.state is SelectionState.OPEN

    def test_reclick_start_stays_open(self):
        controller = controller_for()
        controller.pick(JUNE_10)
        assert controller.pick(JUNE_10) == SelectedRange(JUNE_10)
        assert controller.state is SelectionState.OPEN

    def test_valid_checkout_closes_range(self):
        controller = controller_for()
        controller.pick(JUNE_10)
        assert controller.pick(date(2025, 6, 13)) == SelectedRange(JUNE_10, date(2025, 6, 13))
        assert controller.state is SelectionState.CLOSED

    def test_invalid_stay_ignored(self):
        controller = controller_for(occupied=[date(2025, 6, 11)])
        controller.pick(JUNE_10)
        assert controller.pick(date(2025, 6, 13)) == SelectedRange(JUNE_10)
        assert controller.pick(date(2025, 6, 12)) == SelectedRange(JUNE_10)

    def test_one_night_always_accepted(self):
        # Even check-in night fully booked in the data
        controller = controller_for(occupied=[JUNE_10, date(2025, 6, 11)])
        controller.pick(JUNE_10)
        assert controller.pick(date(2025, 6, 11)) == SelectedRange(JUNE_10, date(2025, 6, 11))

    def test_checkout_before_check_in_ignored(self):
        controller = controller_for()
        controller.pick(JUNE_10)
        assert controller.pick(date(2025, 6, 5)) == SelectedRange(JUNE_10)

    def test_multi_night_needs_validator(self):
        controller = SelectionController()
        controller.pick(JUNE_10)
        assert controller.pick(date(2025, 6, 12)) == SelectedRange(JUNE_10)
        assert controller.pick(date(2025, 6, 11)) == SelectedRange(JUNE_10, date(2025, 6, 11))

    def test_pick_on_closed_range_restarts(self):
        calls = []
        controller = controller_for(calls=calls)
        controller.pick(JUNE_10)
        controller.pick(date(2025, 6, 12))
        calls.clear()

        assert controller.pick(date(2025, 6, 20)) == SelectedRange(date(2025, 6, 20))
        assert calls == [None, SelectedRange(date(2025, 6, 20))]

    def test_clear(self):
        calls = []
        controller = controller_for(calls=calls)
        controller.pick(JUNE_10)
        controller.clear()
        assert controller.selected is None
        assert calls == [SelectedRange(JUNE_10), None]

    @pytest.mark.parametrize("occupied_day", [12, 15, 21])
    def test_closed_range_always_valid(self, occupied_day):
        occupied = [date(2025, 6, occupied_day)]
        controller = controller_for(occupied=occupied)
        validator = controller.validator

        for checkout_day in range(12, 25):
            controller.clear()
            controller.pick(JUNE_10)
            selected = controller.pick(date(2025, 6, checkout_day))
            if selected.is_closed:
                assert validator.is_range_valid(selected.start, selected.end)
            else:
                assert not validator.is_range_valid(JUNE_10, date(2025, 6, checkout_day))


class TestRawPickerEvents:
    def test_same_day_range_normalized_to_open(self):
        controller = controller_for()
        controller.handle_range_select(JUNE_10)
        assert controller.handle_range_select(JUNE_10, JUNE_10) == SelectedRange(JUNE_10)

    def test_checkout_click_closes(self):
        controller = controller_for()
        controller.handle_range_select(JUNE_10)
        assert controller.handle_range_select(JUNE_10, date(2025, 6, 14)) == SelectedRange(
            JUNE_10, date(2025, 6, 14)
        )

    def test_full_range_from_empty(self):
        controller = controller_for()
        assert controller.handle_range_select(JUNE_10, date(2025, 6, 12)) == SelectedRange(
            JUNE_10, date(2025, 6, 12)
        )

    def test_click_after_closed_range_restarts(self):
        controller = controller_for()
        controller.handle_range_select(JUNE_10, date(2025, 6, 12))
        # Picker extends the range to the clicked day
        assert controller.handle_range_select(JUNE_10, date(2025, 6, 20)) == SelectedRange(
            date(2025, 6, 20)
        )

    def test_click_before_closed_range_restarts(self):
        controller = controller_for()
        controller.handle_range_select(JUNE_10, date(2025, 6, 12))
        assert controller.handle_range_select(date(2025, 6, 5), date(2025, 6, 12)) == SelectedRange(
            date(2025, 6, 5)
        )

    def test_deselect(self):
        controller = controller_for()
        controller.handle_range_select(JUNE_10)
        assert controller.handle_range_select(None) is None
        assert controller.state is SelectionState.EMPTY


class TestPickerAvailableDates:
    def test_next_day_added_while_open(self):
        controller = controller_for()
        controller.pick(JUNE_10)
        assert controller.picker_available_dates({date(2025, 6, 5)}) == [
            date(2025, 6, 5),
            date(2025, 6, 11),
        ]

    def test_no_duplicate(self):
        controller = controller_for()
        controller.pick(JUNE_10)
        assert controller.picker_available_dates([date(2025, 6, 11)]) == [date(2025, 6, 11)]

    def test_unchanged_when_closed_or_empty(self):
        controller = controller_for()
        assert controller.picker_available_dates([date(2025, 6, 5)]) == [date(2025, 6, 5)]
        controller.pick(JUNE_10)
        controller.pick(date(2025, 6, 12))
        assert controller.picker_available_dates([date(2025, 6, 5)]) == [date(2025, 6, 5)]
