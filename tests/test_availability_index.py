"""
Tests for the availability index
"""
from datetime import date

import pytest

from app.data.rooms_config import ROOMS_CONFIG
from app.domain.availability import AvailabilityIndex
from app.domain.calendar import SelectedRange
from app.services.availability_service import occupied_month
from conftest import make_record


def numbers(rooms):
    return [room.room_number for room in rooms]


@pytest.fixture
def scenario_a():
    """Room 3 free on June 5-8 2025, rooms 1-6 otherwise fully booked."""
    return [
        make_record(n, 2025, 6, [5, 6, 7, 8] if n == 3 else [])
        for n in range(1, 7)
    ]


class TestEligibleRooms:
    def test_room_free_for_every_night(self, scenario_a):
        index = AvailabilityIndex(scenario_a)
        selected = SelectedRange(date(2025, 6, 5), date(2025, 6, 8))
        assert numbers(index.eligible_rooms(selected)) == [3]

    def test_checkout_day_itself_not_required(self, scenario_a):
        index = AvailabilityIndex(scenario_a)
        # Nights 5-8, all free in room 3
        selected = SelectedRange(date(2025, 6, 5), date(2025, 6, 9))
        assert numbers(index.eligible_rooms(selected)) == [3]

    def test_one_missing_night_excludes_room(self, scenario_a):
        index = AvailabilityIndex(scenario_a)
        selected = SelectedRange(date(2025, 6, 5), date(2025, 6, 10))
        assert index.eligible_rooms(selected) == []

    def test_open_selection_is_a_single_night(self, scenario_a):
        index = AvailabilityIndex(scenario_a)
        assert numbers(index.eligible_rooms(SelectedRange(date(2025, 6, 8)))) == [3]
        assert index.eligible_rooms(SelectedRange(date(2025, 6, 9))) == []

    def test_no_selection(self, scenario_a):
        assert AvailabilityIndex(scenario_a).eligible_rooms(None) == []

    def test_missing_month_record_excludes_room(self):
        snapshot = [make_record(1, 2025, 6, range(1, 31))]
        index = AvailabilityIndex(snapshot)
        selected = SelectedRange(date(2025, 6, 30), date(2025, 7, 2))
        assert index.eligible_rooms(selected) == []

    def test_party_size_filter(self, free_snapshot):
        index = AvailabilityIndex(free_snapshot)
        selected = SelectedRange(date(2025, 6, 10), date(2025, 6, 12))
        assert numbers(index.eligible_rooms(selected, party_size=3)) == [2, 6, 7]
        assert numbers(index.eligible_rooms(selected, party_size=4)) == [7]
        assert index.eligible_rooms(selected, party_size=5) == []

    def test_unconfigured_room_excluded(self):
        snapshot = [make_record(9, 2025, 6, [10]), make_record(1, 2025, 6, [10])]
        index = AvailabilityIndex(snapshot, ROOMS_CONFIG)
        assert numbers(index.eligible_rooms(SelectedRange(date(2025, 6, 10)))) == [1]

    def test_monotonic_as_stay_grows(self):
        snapshot = [
            make_record(1, 2025, 6, range(1, 31)),
            make_record(2, 2025, 6, range(10, 15)),
            make_record(3, 2025, 6, [10, 11]),
        ]
        index = AvailabilityIndex(snapshot)
        check_in = date(2025, 6, 10)
        previous = None
        for checkout_day in range(11, 20):
            current = set(numbers(index.eligible_rooms(SelectedRange(check_in, date(2025, 6, checkout_day)))))
            if previous is not None:
                assert current <= previous
            previous = current
        assert previous == {1}


class TestDateSets:
    def test_occupied_is_complement_of_unfiltered_union(self):
        snapshot = [
            make_record(1, 2025, 6, [1, 2, 3]),
            make_record(2, 2025, 6, [3, 4, 20]),
            make_record(7, 2025, 6, [25]),
        ]
        index = AvailabilityIndex(snapshot)
        available = {d.day for d in index.available_dates_for_month(2025, 6)}
        occupied = {d.day for d in index.occupied_dates_for_month(2025, 6)}

        assert available == {1, 2, 3, 4, 20, 25}
        assert available & occupied == set()
        assert available | occupied == set(range(1, 31))

    def test_party_size_filters_available_but_not_occupied(self):
        snapshot = [
            make_record(1, 2025, 6, [1, 2]),  # max 2 persons
            make_record(7, 2025, 6, [3]),  # max 4 persons
        ]
        index = AvailabilityIndex(snapshot)
        assert index.available_dates_for_month(2025, 6) == {
            date(2025, 6, 1),
            date(2025, 6, 2),
            date(2025, 6, 3),
        }
        assert index.available_dates_for_month(2025, 6, party_size=3) == {date(2025, 6, 3)}
        # Dates 1 and 2 are unselectable for the party, not occupied
        assert date(2025, 6, 1) not in index.occupied_dates_for_month(2025, 6)

    def test_unconfigured_room_counts_only_in_unfiltered_union(self):
        index = AvailabilityIndex([make_record(9, 2025, 6, [10])])
        assert index.available_dates_for_month(2025, 6) == {date(2025, 6, 10)}
        assert index.available_dates_for_month(2025, 6, party_size=1) == set()
        assert index.is_day_available(date(2025, 6, 10))

    def test_month_without_tab_fully_occupied(self):
        index = AvailabilityIndex(occupied_month(list(range(1, 7)), 2025, 7))
        assert len(index.occupied_dates_for_month(2025, 7)) == 31
        assert index.available_dates_for_month(2025, 7) == set()

    def test_no_snapshot_fails_closed(self):
        index = AvailabilityIndex(None)
        assert not index.has_data
        assert index.available_dates_for_month(2025, 6) == set()
        assert len(index.occupied_dates_for_month(2025, 6)) == 30
        assert not index.is_day_available(date(2025, 6, 10))

    def test_days_outside_month_ignored(self):
        record = make_record(1, 2025, 6, [30])
        record.available_dates.append(31)
        index = AvailabilityIndex([record])
        assert index.available_dates_for_month(2025, 6) == {date(2025, 6, 30)}

    def test_queries_are_idempotent(self, free_snapshot):
        index = AvailabilityIndex(free_snapshot)
        selected = SelectedRange(date(2025, 6, 10), date(2025, 6, 15))
        assert index.available_dates_for_month(2025, 6, 2) == index.available_dates_for_month(2025, 6, 2)
        assert index.occupied_dates_for_month(2025, 7) == index.occupied_dates_for_month(2025, 7)
        assert index.eligible_rooms(selected, 2) == index.eligible_rooms(selected, 2)


class TestMiradorFilter:
    def test_only_designated_room_considered(self):
        snapshot = [
            make_record(1, 2025, 6, [1, 2, 3]),
            make_record(7, 2025, 6, [5], room_name="Mirador"),
        ]
        index = AvailabilityIndex(snapshot, room_filter=7)

        assert numbers(index.rooms()) == [7]
        assert index.available_dates_for_month(2025, 6) == {date(2025, 6, 5)}
        assert date(2025, 6, 1) in index.occupied_dates_for_month(2025, 6)
        assert index.eligible_rooms(SelectedRange(date(2025, 6, 1))) == []

    def test_room_name_taken_from_feed(self):
        index = AvailabilityIndex([make_record(7, 2025, 6, [5], room_name="Mirador")])
        assert index.rooms()[0].room_name == "Mirador"
