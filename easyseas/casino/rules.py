"""Casino opening rules for a single itinerary day.

Rules are evaluated in priority order and the first match wins. The function is pure:
the decision depends only on the CasinoDayContext it is given.
"""
from ..models import CasinoAvailability, CasinoDayContext, TimeWindow
from .clock import MINUTES_PER_DAY, add_minutes, format_clock, parse_clock, span
from .ports import is_us_restricted_port, is_us_territory, port_kind

# Policy constants. Tune these, not the decision logic below.
SAIL_AWAY_BUFFER_MINUTES = 90
EARLY_BIRD_OPEN = "05:00"
EARLY_BIRD_CLOSE = "07:30"
SEA_DAY_MAIN_OPEN = "10:00"
LATE_NIGHT_CLOSE = "02:30"
PORT_NIGHT_SLOTS_CLOSE = "05:00"
DEFAULT_SAIL_AWAY_TIME = "17:00"

DEPARTURE_HOURS_24H = 12
DEPARTURE_HOURS = 8
SEA_DAY_HOURS_24H = 16
SEA_DAY_HOURS = 14
PORT_DAY_HOURS_24H = 12
PORT_DAY_HOURS = 10

REASON_DISEMBARK = "Disembarkation day — casino closed"
REASON_DEPARTURE_CLOSED = "Departure day — casino closed in port"
REASON_DEPARTURE_OPEN = "Opens after sail away"
REASON_SEA_DAY = "At sea — full casino hours"
REASON_MISSING_TIMES = "At sea — full casino hours (no port times recorded)"
REASON_OVERNIGHT = "Overnight in port — casino closed while docked"
REASON_PORT_DAY = "Opens after sail away from port"
REASON_NEXT_PORT_TOO_CLOSE = "Next port reached before the casino reopens"


def _closed(reason: str) -> CasinoAvailability:
    return CasinoAvailability(open=False, reason=reason)


def _reopen_time(sail_away_time: str) -> str:
    return add_minutes(sail_away_time, SAIL_AWAY_BUFFER_MINUTES)


def _disembark_day(context: CasinoDayContext) -> CasinoAvailability:
    return _closed(REASON_DISEMBARK)


def _departure_day(context: CasinoDayContext) -> CasinoAvailability:
    if not context.sail_away_time:
        return _closed(REASON_DEPARTURE_CLOSED)
    open_time = _reopen_time(context.sail_away_time)
    if context.next_day_is_sea_day:
        close_time, hours, estimated = None, f"Opens ~{open_time}, 24 hrs slots", DEPARTURE_HOURS_24H
    else:
        close_time, hours, estimated = LATE_NIGHT_CLOSE, f"Opens ~{open_time} until {LATE_NIGHT_CLOSE}", DEPARTURE_HOURS
    return CasinoAvailability(
        open=True,
        reason=REASON_DEPARTURE_OPEN,
        open_time=open_time,
        close_time=close_time,
        hours=hours,
        estimated_hours=estimated,
        windows=(TimeWindow(open_time, close_time, "After sail away"),),
    )


def _sea_day(context: CasinoDayContext, reason: str = REASON_SEA_DAY) -> CasinoAvailability:
    # The casino runs slots around the clock before another sea day and on the final night.
    all_night = context.next_day_is_sea_day or context.day_number == context.total_days - 1
    close_time = None if all_night else LATE_NIGHT_CLOSE
    return CasinoAvailability(
        open=True,
        reason=reason,
        open_time=EARLY_BIRD_OPEN,
        close_time=close_time,
        hours=f"Open all day until {close_time or '(24 hrs)'}",
        estimated_hours=SEA_DAY_HOURS_24H if all_night else SEA_DAY_HOURS,
        windows=(
            TimeWindow(EARLY_BIRD_OPEN, EARLY_BIRD_CLOSE, "Early bird"),
            TimeWindow(SEA_DAY_MAIN_OPEN, close_time, "Main casino"),
        ),
    )


def _us_waters_day(context: CasinoDayContext) -> CasinoAvailability:
    where = "territory" if is_us_territory(context.port) else "port"
    return _closed(f"US {where} ({context.port}) - casino closed in US waters")


def _port_day(context: CasinoDayContext) -> CasinoAvailability:
    reopen = parse_clock(context.sail_away_time) + SAIL_AWAY_BUFFER_MINUTES
    open_time = format_clock(reopen)
    next_arrival = context.next_day_arrival_time
    if context.next_day_is_sea_day:
        close_time, estimated = None, PORT_DAY_HOURS_24H
    elif next_arrival:
        arrival = parse_clock(next_arrival) + MINUTES_PER_DAY
        if arrival <= reopen:
            return _closed(REASON_NEXT_PORT_TOO_CLOSE)
        if arrival - reopen >= MINUTES_PER_DAY:
            close_time, estimated = None, PORT_DAY_HOURS_24H
        else:
            close_time, estimated = next_arrival, PORT_DAY_HOURS
    else:
        close_time, estimated = PORT_NIGHT_SLOTS_CLOSE, PORT_DAY_HOURS
    return CasinoAvailability(
        open=True,
        reason=REASON_PORT_DAY,
        open_time=open_time,
        close_time=close_time,
        hours=f"{port_kind(context.port)}: closed while docked, reopens ~{open_time} until {close_time or '(24 hrs)'}",
        estimated_hours=estimated,
        windows=(TimeWindow(open_time, close_time, "After sail away"),),
    )


def estimate_casino_day(context: CasinoDayContext) -> CasinoAvailability:
    if context.is_disembark_day:
        return _disembark_day(context)
    if context.is_departure_day:
        return _departure_day(context)
    if context.is_sea_day:
        return _sea_day(context)
    if not context.arrival_time and not context.sail_away_time:
        # Itinerary data gap: no port times means no port call we know of
        return _sea_day(context, REASON_MISSING_TIMES)
    if is_us_restricted_port(context.port):
        return _us_waters_day(context)
    if not context.sail_away_time:
        return _closed(REASON_OVERNIGHT)
    return _port_day(context)


def is_open_at(availability: CasinoAvailability, time: str) -> bool:
    """Whether the clock time falls inside one of the day's casino windows."""
    minute = parse_clock(time)
    for window in availability.windows:
        start, end = span(window.start, window.end)
        if start <= minute < end or start <= minute + MINUTES_PER_DAY < end:
            return True
    return False
