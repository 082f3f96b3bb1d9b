"""Validate booking form submissions before they reach the booking transaction."""
import re
from datetime import date, datetime
from typing import Any

from utils.time_slots import parse_hhmm

MISSING_FIELDS_MESSAGE = "Please fill in all required fields."
INVALID_FORMAT_MESSAGE = "Invalid date or time format."

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^\d{2}:\d{2}$")


def _get_str(row: dict[str, Any], key: str) -> str | None:
    """Get string value; empty string treated as missing."""
    v = row.get(key)
    if v is None:
        return None
    s = str(v).strip()
    return s if s else None


def _get_positive_int(row: dict[str, Any], key: str) -> int | None:
    """Get positive integer from row; return None if missing or invalid."""
    v = row.get(key)
    if v is None:
        return None
    try:
        n = int(v) if not isinstance(v, int) else v
        return n if n >= 1 else None
    except (TypeError, ValueError):
        return None


def validate_booking_form(row: dict[str, Any]) -> tuple[bool, dict[str, Any] | None, str]:
    """
    Validate a booking form. Returns (ok, normalized_dict, error_message).
    normalized_dict has station_id, charging_point_id (int), booking_date (date),
    start_time and end_time (time), ready for create_booking.
    """
    station_id = _get_positive_int(row, "station_id")
    charging_point_id = _get_positive_int(row, "charging_point_id")
    raw_date = _get_str(row, "date")
    raw_start = _get_str(row, "start_time")
    raw_end = _get_str(row, "end_time")
    if not station_id or not charging_point_id or not raw_date or not raw_start or not raw_end:
        return False, None, MISSING_FIELDS_MESSAGE

    if not _DATE_RE.match(raw_date) or not _TIME_RE.match(raw_start) or not _TIME_RE.match(raw_end):
        return False, None, INVALID_FORMAT_MESSAGE
    try:
        booking_date: date = datetime.strptime(raw_date, "%Y-%m-%d").date()
        start_time = parse_hhmm(raw_start)
        end_time = parse_hhmm(raw_end)
    except ValueError:
        return False, None, INVALID_FORMAT_MESSAGE
    if end_time <= start_time:
        return False, None, INVALID_FORMAT_MESSAGE

    normalized = {
        "station_id": station_id,
        "charging_point_id": charging_point_id,
        "booking_date": booking_date,
        "start_time": start_time,
        "end_time": end_time,
    }
    return True, normalized, ""
