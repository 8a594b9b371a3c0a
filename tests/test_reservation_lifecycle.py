"""
Tests for reservation lifecycle helpers.
"""

from datetime import date

import pytest

from steakz.core.errors import BadRequestError
from steakz.schemas.reservation import ReservationCreate
from steakz.services.reservations import day_bounds, list_available_times, validate_booking

SLOTS = ["13:00", "19:00"]


class TestListAvailableTimes:
    def test_nothing_booked(self):
        assert list_available_times(SLOTS, []) == ["13:00", "19:00"]

    def test_keeps_declared_order(self):
        slots = ["19:00", "12:00", "15:30"]
        assert list_available_times(slots, ["12:00"]) == ["19:00", "15:30"]

    def test_all_booked(self):
        assert list_available_times(SLOTS, ["19:00", "13:00"]) == []

    def test_unknown_booked_times_are_ignored(self):
        assert list_available_times(SLOTS, ["08:00"]) == SLOTS


class TestValidateBooking:
    def payload(self, **overrides):
        data = {"userId": 1, "name": "Alice", "date": "2026-10-20", "time": "19:00"}
        data.update(overrides)
        return ReservationCreate(**data)

    def test_valid_payload(self):
        validate_booking(self.payload(), SLOTS)

    @pytest.mark.parametrize("field", ["userId", "name", "date", "time"])
    def test_missing_field(self, field):
        with pytest.raises(BadRequestError, match="Missing reservation details"):
            validate_booking(self.payload(**{field: None}), SLOTS)

    def test_blank_name(self):
        with pytest.raises(BadRequestError):
            validate_booking(self.payload(name="   "), SLOTS)

    def test_time_outside_slot_universe(self):
        with pytest.raises(BadRequestError, match="Invalid time slot"):
            validate_booking(self.payload(time="10:00"), SLOTS)


def test_day_bounds_is_half_open_single_day():
    assert day_bounds(date(2026, 12, 31)) == (date(2026, 12, 31), date(2027, 1, 1))
