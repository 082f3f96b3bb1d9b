"""Unit tests: booking form validation."""
from datetime import date, time

import pytest

from utils.booking_validators import INVALID_FORMAT_MESSAGE, MISSING_FIELDS_MESSAGE, validate_booking_form

pytestmark = pytest.mark.unit


def _form(**overrides):
    row = {
        "station_id": "1",
        "charging_point_id": "2",
        "date": "2030-05-17",
        "start_time": "09:00",
        "end_time": "10:00",
    }
    row.update(overrides)
    return row


def test_validate_booking_form_success():
    """A complete form is normalized to ints, a date and times."""
    ok, norm, err = validate_booking_form(_form())
    assert ok is True and err == ""
    assert norm == {
        "station_id": 1,
        "charging_point_id": 2,
        "booking_date": date(2030, 5, 17),
        "start_time": time(9, 0),
        "end_time": time(10, 0),
    }


@pytest.mark.parametrize("field", ["station_id", "charging_point_id", "date", "start_time", "end_time"])
def test_validate_booking_form_missing_field(field):
    """Any missing or blank field gives the missing-fields message."""
    ok, norm, err = validate_booking_form(_form(**{field: "  "}))
    assert ok is False and norm is None and err == MISSING_FIELDS_MESSAGE


def test_validate_booking_form_non_numeric_id():
    """A non-numeric charging point id counts as missing."""
    ok, _, err = validate_booking_form(_form(charging_point_id="abc"))
    assert ok is False and err == MISSING_FIELDS_MESSAGE


@pytest.mark.parametrize(
    "overrides",
    [
        {"date": "17/05/2030"},
        {"start_time": "9:00"},
        {"end_time": "10:00:00"},
        {"date": "2030-02-30"},
        {"start_time": "24:30"},
    ],
)
def test_validate_booking_form_bad_format(overrides):
    """Malformed or impossible dates and times are rejected."""
    ok, _, err = validate_booking_form(_form(**overrides))
    assert ok is False and err == INVALID_FORMAT_MESSAGE


def test_validate_booking_form_end_not_after_start():
    """Zero-length and reversed intervals are rejected."""
    ok, _, _ = validate_booking_form(_form(start_time="10:00", end_time="10:00"))
    assert ok is False
    ok, _, _ = validate_booking_form(_form(start_time="11:00", end_time="10:00"))
    assert ok is False
