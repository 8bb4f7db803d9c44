import logging
from datetime import date, timedelta
from typing import Iterable, Sequence

from ..models import CasinoOffer, Cruise, CruiseCasinoSummary, DailyCasinoAvailability
from .itinerary import build_day_contexts, day_is_at_sea, resolve_itinerary, synthesize_days
from .ports import is_us_port, is_us_territory
from .rules import estimate_casino_day

DEFAULT_NIGHTS = 7


def _day_date(sail_date: date | None, day_index: int) -> date | None:
    return sail_date + timedelta(days=day_index) if sail_date else None


def _describe(open_days: int, total_days: int, sea_days: int, foreign_port_days: int) -> str:
    if open_days == 0:
        return "No casino availability on this cruise (US territorial waters only)"
    if open_days == total_days:
        return "Casino open every day of the cruise"
    return f"Casino open {open_days} of {total_days} days: {sea_days} sea days + {foreign_port_days} foreign port days"


def summarize_cruise(cruise: Cruise, offers: Sequence[CasinoOffer] = ()) -> CruiseCasinoSummary:
    """Day-by-day casino calendar of a cruise plus the aggregate counts shown on cruise cards."""
    nights = cruise.nights or DEFAULT_NIGHTS
    expected_days = nights + 1
    days = resolve_itinerary(cruise, offers)
    if not days:
        logging.debug("Cruise %s: no itinerary data, synthesizing %d days", cruise.id, expected_days)
        days = synthesize_days(nights, cruise.departure_port)
    elif len(days) < expected_days:
        logging.debug("Cruise %s: itinerary has %d of %d days, extending", cruise.id, len(days), expected_days)
        days = days + synthesize_days(nights, cruise.departure_port, start=len(days))

    daily = []
    for index, (day, context) in enumerate(zip(days, build_day_contexts(days))):
        port = day.port or "At Sea"
        daily.append(DailyCasinoAvailability(
            day=index + 1,
            date=_day_date(cruise.sail_date, index),
            port=port,
            is_sea_day=day_is_at_sea(day),
            is_us_port=is_us_port(port),
            is_us_territory=is_us_territory(port),
            availability=estimate_casino_day(context),
            arrival_time=day.arrival,
            departure_time=day.departure,
        ))

    total_days = len(daily)
    sea_days = sum(1 for d in daily if d.is_sea_day)
    port_days = total_days - sea_days
    open_days = sum(1 for d in daily if d.casino_open)
    us_port_days = sum(1 for d in daily if d.is_us_port and not d.is_sea_day)
    foreign_port_days = port_days - us_port_days
    summary = CruiseCasinoSummary(
        cruise_id=cruise.id,
        total_days=total_days,
        sea_days=sea_days,
        port_days=port_days,
        casino_open_days=open_days,
        casino_closed_days=total_days - open_days,
        us_port_days=us_port_days,
        foreign_port_days=foreign_port_days,
        estimated_casino_hours=sum(d.availability.estimated_hours for d in daily),
        daily=daily,
        best_gambling_days=[d.day for d in daily if d.casino_open],
        description=_describe(open_days, total_days, sea_days, foreign_port_days),
    )
    logging.debug("Cruise %s casino summary: %d/%d open days, ~%d hours",
                  cruise.id, open_days, total_days, summary.estimated_casino_hours)
    return summary


def format_summary_text(summary: CruiseCasinoSummary) -> str:
    lines = [
        "Casino Availability Summary",
        "===========================",
        "",
        f"Total Days: {summary.total_days}",
        f"Sea Days: {summary.sea_days}",
        f"Port Days: {summary.port_days}",
        "",
        f"Casino Open Days: {summary.casino_open_days}",
        f"Casino Closed Days: {summary.casino_closed_days}",
        "",
        f"Estimated Casino Hours: ~{summary.estimated_casino_hours}",
        "",
        "Day-by-Day Schedule:",
        "--------------------",
    ]
    for day in summary.daily:
        status = "OPEN  " if day.casino_open else "CLOSED"
        where = "At Sea" if day.is_sea_day else day.port
        lines.append(f"Day {day.day}: {status} {where} - {day.availability.hours}")
    lines.append("")
    lines.append(summary.description)
    return "\n".join(lines)


def casino_calendar(
        cruises: Iterable[Cruise], start: date, end: date, offers: Sequence[CasinoOffer] = ()
) -> list[tuple[date, str, bool]]:
    """(date, cruise id, casino open) for every cruise day within [start, end], sorted by date."""
    entries = []
    for cruise in cruises:
        if cruise.sail_date is None:
            logging.warning("Cruise %s has no sail date, skipping it in the calendar", cruise.id)
            continue
        for day in summarize_cruise(cruise, offers).daily:
            if start <= day.date <= end:
                entries.append((day.date, cruise.id, day.casino_open))
    entries.sort(key=lambda entry: entry[0])
    return entries


def estimate_gambling_opportunity(nights: int, departure_port: str, destination: str | None = None) -> dict:
    """Rough sea/casino day estimate for a sailing without an itinerary."""
    if nights <= 3:
        sea_days = max(0, nights - 2)
    elif nights <= 5:
        sea_days = int(nights * 0.3)
    elif nights <= 7:
        sea_days = int(nights * 0.35)
    else:
        sea_days = int(nights * 0.4)

    port_days = nights - sea_days
    foreign_port_days = port_days
    region = (destination or "").lower()
    home_port_penalty = 1 if is_us_port(departure_port) else 0
    if any(name in region for name in ("caribbean", "bahamas", "mexico")):
        foreign_port_days = port_days - home_port_penalty
    elif "alaska" in region:
        foreign_port_days = int(port_days * 0.3)

    casino_open_days = sea_days + max(0, foreign_port_days)
    ratio = casino_open_days / nights if nights > 0 else 0
    if ratio >= 0.7:
        recommendation = "Excellent gambling opportunity - casino open most of the cruise"
    elif ratio >= 0.5:
        recommendation = "Good gambling opportunity - casino open roughly half the cruise"
    elif ratio >= 0.3:
        recommendation = "Moderate gambling opportunity - limited casino hours"
    else:
        recommendation = "Limited gambling opportunity - primarily US waters"
    return {"sea_days": sea_days, "casino_open_days": casino_open_days, "recommendation": recommendation}


def casino_status_badge(casino_open_days: int, total_days: int) -> dict:
    percentage = casino_open_days / total_days * 100 if total_days > 0 else 0
    if percentage >= 70:
        label, color = "High Availability", "#22c55e"
    elif percentage >= 50:
        label, color = "Good Availability", "#3b82f6"
    elif percentage >= 30:
        label, color = "Moderate", "#f59e0b"
    else:
        label, color = "Limited", "#ef4444"
    return {"label": label, "color": color, "percentage": percentage}
