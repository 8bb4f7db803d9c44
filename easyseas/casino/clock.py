"""Clock-string helpers.

All times are plain wall-clock strings ("HH:MM") in ship time. Arithmetic is done in
minutes since midnight; results are wrapped back into a single day.
"""
import logging
from datetime import datetime

MINUTES_PER_DAY = 24 * 60

_CLOCK_FORMATS = ["%H:%M", "%H:%M:%S", "%I:%M %p", "%I:%M%p", "%I %p"]
_NO_TIME_MARKERS = {"", "-", "overnight", "tba", "tbd", "n/a", "none"}


def parse_clock(value: str) -> int:
    text = value.strip().upper()
    for clock_format in _CLOCK_FORMATS:
        try:
            parsed = datetime.strptime(text, clock_format)
        except ValueError:
            continue
        return parsed.hour * 60 + parsed.minute
    raise ValueError(f"Time string '{value}' not in formats {_CLOCK_FORMATS}")


def format_clock(minutes: int) -> str:
    hours, mins = divmod(minutes % MINUTES_PER_DAY, 60)
    return f"{hours:02d}:{mins:02d}"


def add_minutes(time: str, minutes: int) -> str:
    return format_clock(parse_clock(time) + minutes)


def normalize_clock(value: str | None) -> str | None:
    """Lenient parse for imported itinerary data: unknown or garbled times become None."""
    if value is None or value.strip().lower() in _NO_TIME_MARKERS:
        return None
    try:
        return format_clock(parse_clock(value))
    except ValueError:
        logging.warning("Ignoring unparseable itinerary time %r", value)
        return None


def span(start: str, end: str | None) -> tuple[int, int]:
    """Window as (start, end) minutes; end is pushed past midnight when it wraps, None means end of day."""
    start_minutes = parse_clock(start)
    end_minutes = parse_clock(end) if end else MINUTES_PER_DAY
    if end_minutes <= start_minutes:
        end_minutes += MINUTES_PER_DAY
    return start_minutes, end_minutes
