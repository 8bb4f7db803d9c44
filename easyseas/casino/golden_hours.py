"""Golden hours: where the casino schedule meets the player's own preferred play sessions."""
import logging
from typing import Iterable

from ..models import (
    CruiseCasinoSummary,
    DayPlayEstimate,
    GoldenWindow,
    PersonalizedPlayEstimate,
    PlayingHours,
    PlayingSession,
    TimeWindow,
)
from .clock import MINUTES_PER_DAY, format_clock, span

POINTS_PER_SESSION = 384

# Fallback player schedule used when no personal playing hours are enabled
FIRST_DAY_HOURS = 1
LAST_DAY_HOURS = 2
SEA_DAY_SESSION_HOURS = 2.5
SEA_DAY_SESSIONS = 4
PORT_DAY_EVENING_HOURS = 2


def _overlap(casino: tuple[int, int], session: tuple[int, int]) -> tuple[int, int] | None:
    start = max(casino[0], session[0])
    end = min(casino[1], session[1])
    return (start, end) if start < end else None


def _next_day(window: tuple[int, int]) -> tuple[int, int]:
    return window[0] + MINUTES_PER_DAY, window[1] + MINUTES_PER_DAY


def time_overlap(
        casino_start: str, casino_end: str | None, session_start: str, session_end: str
) -> list[tuple[int, int]]:
    """Overlaps as (start, end) minute pairs in the wrapped domain; end may exceed 1440.

    When only one of the two windows runs past midnight, the other one is also tried one
    day later: an after-midnight session (00:30-01:30) still meets a 22:00-02:00 casino, and
    a night-owl session (22:00-06:00) still meets the 05:00 early bird opening.
    """
    casino = span(casino_start, casino_end)
    session = span(session_start, session_end)
    candidates = [(casino, session)]
    if casino[1] > MINUTES_PER_DAY and session[1] <= MINUTES_PER_DAY:
        candidates.append((casino, _next_day(session)))
    elif session[1] > MINUTES_PER_DAY and casino[1] <= MINUTES_PER_DAY:
        candidates.append((_next_day(casino), session))
    return [found for pair in candidates if (found := _overlap(*pair)) is not None]


def active_sessions(playing_hours: PlayingHours | None) -> list[PlayingSession]:
    if playing_hours is None or not playing_hours.enabled:
        return []
    return [session for session in playing_hours.sessions if session.enabled]


def find_golden_hours(windows: Iterable[TimeWindow], playing_hours: PlayingHours | None) -> list[GoldenWindow]:
    sessions = active_sessions(playing_hours)
    found: dict[tuple[int, int, str], GoldenWindow] = {}
    for window in windows:
        for session in sessions:
            for start, end in time_overlap(window.start, window.end, session.start_time, session.end_time):
                found.setdefault((start, end, session.name), GoldenWindow(
                    start=format_clock(start),
                    end=format_clock(end),
                    duration_minutes=end - start,
                    label=session.name,
                ))
    return [found[key] for key in sorted(found)]


def _default_day(day_index: int, total_days: int, is_sea_day: bool) -> tuple[int, float, str]:
    if day_index == 0:
        return 1, FIRST_DAY_HOURS, "First day brief session after departure"
    if day_index == total_days - 1:
        return 1, LAST_DAY_HOURS, "Last day session before arrival"
    if is_sea_day:
        return (SEA_DAY_SESSIONS, SEA_DAY_SESSION_HOURS * SEA_DAY_SESSIONS,
                f"Sea day: early bird session + {SEA_DAY_SESSIONS - 1} additional sessions")
    return 1, PORT_DAY_EVENING_HOURS, "Evening session after returning to international waters"


def personalized_play_estimate(
        summary: CruiseCasinoSummary, playing_hours: PlayingHours | None = None
) -> PersonalizedPlayEstimate:
    """Expected play time and points for a cruise, honouring the player's golden hours when set."""
    use_golden_hours = bool(active_sessions(playing_hours))
    total_days = len(summary.daily)
    days = []
    golden_minutes = 0
    for index, day in enumerate(summary.daily):
        windows: list[GoldenWindow] = []
        if not day.casino_open:
            sessions, hours, notes = 0, 0.0, "Casino closed - no play"
        elif use_golden_hours:
            windows = find_golden_hours(day.availability.windows, playing_hours)
            day_minutes = sum(w.duration_minutes for w in windows)
            golden_minutes += day_minutes
            sessions, hours = len(windows), round(day_minutes / 60, 1)
            if windows:
                spans = ", ".join(f"{w.start}-{w.end}" for w in windows)
                notes = f"{sessions} golden session{'s' if sessions > 1 else ''}: {spans}"
            else:
                notes = "Casino open but no overlap with your playing hours"
        else:
            sessions, hours, notes = _default_day(index, total_days, day.is_sea_day)
        days.append(DayPlayEstimate(
            day=day.day,
            date=day.date,
            port=day.port,
            is_sea_day=day.is_sea_day,
            casino_open=day.casino_open,
            sessions=sessions,
            hours_played=hours,
            points_earned=POINTS_PER_SESSION * sessions,
            notes=notes,
            golden_windows=windows,
        ))

    estimate = PersonalizedPlayEstimate(
        estimated_play_hours=round(sum(d.hours_played for d in days), 1),
        estimated_points=sum(d.points_earned for d in days),
        golden_hours_total=round(golden_minutes / 60, 1),
        play_days=sum(1 for d in days if d.sessions > 0),
        days=days,
    )
    logging.debug("Cruise %s play estimate: %.1f h, %d points, golden hours %s",
                  summary.cruise_id, estimate.estimated_play_hours, estimate.estimated_points,
                  "on" if use_golden_hours else "off")
    return estimate
