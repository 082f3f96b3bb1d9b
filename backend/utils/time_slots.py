"""Half-open time interval helpers and the daily slot grid offered by the booking form."""
from datetime import date, datetime, time, timedelta


def parse_hhmm(value: str) -> time:
    """Parse 'HH:MM' into a time. Raises ValueError on malformed input."""
    return datetime.strptime(value, "%H:%M").time()


def intervals_overlap(start_a: time, end_a: time, start_b: time, end_b: time) -> bool:
    """
    True if [start_a, end_a) and [start_b, end_b) share any instant.

    Same three clauses as the booking availability query: b contains a's start,
    b contains a's end, or a contains b. Touching endpoints do not overlap.
    """
    return (
        (start_b <= start_a < end_b)
        or (start_b < end_a <= end_b)
        or (start_a <= start_b and end_b <= end_a)
    )


def build_day_slots(day_start: time, day_end: time, slot_minutes: int) -> list[tuple[time, time]]:
    """Consecutive [start, end) slots of slot_minutes from day_start; a trailing partial slot is dropped."""
    if slot_minutes <= 0:
        raise ValueError("slot_minutes must be positive")
    anchor = date(2000, 1, 1)
    cursor = datetime.combine(anchor, day_start)
    limit = datetime.combine(anchor, day_end)
    step = timedelta(minutes=slot_minutes)
    slots = []
    while cursor + step <= limit:
        slots.append((cursor.time(), (cursor + step).time()))
        cursor += step
    return slots


def format_hhmm(value: time) -> str:
    return value.strftime("%H:%M")
