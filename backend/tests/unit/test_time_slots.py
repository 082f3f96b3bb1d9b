"""Unit tests: half-open interval overlap and the daily slot grid."""
from datetime import time

import pytest

from utils.time_slots import build_day_slots, format_hhmm, intervals_overlap, parse_hhmm

pytestmark = pytest.mark.unit


def t(value: str) -> time:
    return parse_hhmm(value)


@pytest.mark.parametrize(
    "a, b",
    [
        (("09:30", "10:30"), ("09:00", "10:00")),  # new start inside existing
        (("08:30", "09:30"), ("09:00", "10:00")),  # new end inside existing
        (("08:00", "11:00"), ("09:00", "10:00")),  # new contains existing
        (("09:15", "09:45"), ("09:00", "10:00")),  # existing contains new
        (("09:00", "10:00"), ("09:00", "10:00")),  # identical
    ],
)
def test_overlapping_intervals(a, b):
    """Each overlap shape is detected."""
    assert intervals_overlap(t(a[0]), t(a[1]), t(b[0]), t(b[1])) is True


def test_back_to_back_slots_do_not_overlap():
    """Existing end == new start (and the reverse) is not an overlap."""
    assert intervals_overlap(t("10:00"), t("11:00"), t("09:00"), t("10:00")) is False
    assert intervals_overlap(t("08:00"), t("09:00"), t("09:00"), t("10:00")) is False


def test_disjoint_intervals():
    """Intervals with a gap between them do not overlap."""
    assert intervals_overlap(t("13:00"), t("14:00"), t("09:00"), t("10:00")) is False


def test_build_day_slots_hourly():
    """09:00-12:00 in 60-minute slots gives three consecutive slots."""
    slots = build_day_slots(t("09:00"), t("12:00"), 60)
    assert [(format_hhmm(s), format_hhmm(e)) for s, e in slots] == [
        ("09:00", "10:00"),
        ("10:00", "11:00"),
        ("11:00", "12:00"),
    ]


def test_build_day_slots_drops_partial_slot():
    """A remainder shorter than one slot is not offered."""
    slots = build_day_slots(t("09:00"), t("10:30"), 60)
    assert len(slots) == 1


def test_build_day_slots_rejects_non_positive_length():
    """slot_minutes must be positive."""
    with pytest.raises(ValueError):
        build_day_slots(t("09:00"), t("10:00"), 0)


def test_parse_hhmm_invalid():
    """Out-of-range hours are rejected."""
    with pytest.raises(ValueError):
        parse_hhmm("25:00")
