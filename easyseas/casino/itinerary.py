import logging
import re
from dataclasses import replace
from typing import Iterable, Sequence

from ..models import CasinoAvailability, CasinoDayContext, CasinoOffer, Cruise, ItineraryDay
from .clock import normalize_clock
from .ports import is_sea_day_name
from .rules import DEFAULT_SAIL_AWAY_TIME, estimate_casino_day

_FIELD_SEPARATORS = re.compile(r"[;,|\t]")

SYNTHETIC_SEA_PORT = "At Sea"
SYNTHETIC_CALL_PORT = "Port of Call"


def day_is_at_sea(day: ItineraryDay) -> bool:
    """Explicit flag, no port at all, or a sea-day label such as "At Sea"."""
    return day.is_sea_day or not day.port or is_sea_day_name(day.port)


def _sail_away_time(day: ItineraryDay, at_sea: bool) -> str | None:
    # Port listed by name only: assume the usual afternoon sail away
    if not at_sea and day.arrival is None and day.departure is None:
        return DEFAULT_SAIL_AWAY_TIME
    return day.departure


def parse_ports_and_times(text: str | None) -> list[ItineraryDay]:
    """Parse the free-text "Ports&Times" column: one day per line, "port; arrival; departure"."""
    if not text or not isinstance(text, str):
        return []
    days = []
    lines = [line for line in text.splitlines() if line.strip()]
    for index, line in enumerate(lines, start=1):
        parts = [part.strip() for part in _FIELD_SEPARATORS.split(line)]
        port = parts[0]
        arrival = normalize_clock(parts[1]) if len(parts) > 1 else None
        departure = normalize_clock(parts[2]) if len(parts) > 2 else None
        days.append(ItineraryDay(
            day=index,
            port=port or None,
            is_sea_day=is_sea_day_name(port),
            arrival=arrival,
            departure=departure,
        ))
    logging.debug("Parsed %d itinerary days from Ports&Times", len(days))
    return days


def _days_from_ports(ports: Iterable[str]) -> list[ItineraryDay]:
    return [
        ItineraryDay(day=index, port=port.strip(), is_sea_day=is_sea_day_name(port))
        for index, port in enumerate(ports, start=1)
    ]


def _normalize_times(days: Sequence[ItineraryDay]) -> list[ItineraryDay]:
    normalized = []
    for day in days:
        arrival = normalize_clock(day.arrival)
        departure = normalize_clock(day.departure)
        if (arrival, departure) != (day.arrival, day.departure):
            day = replace(day, arrival=arrival, departure=departure)
        normalized.append(day)
    return normalized


def _linked_offer(cruise: Cruise, offers: Sequence[CasinoOffer]) -> CasinoOffer | None:
    if not cruise.offer_code:
        return None
    return next((o for o in offers if o.offer_code in (cruise.offer_code, cruise.id)), None)


def resolve_itinerary(cruise: Cruise, offers: Sequence[CasinoOffer] = ()) -> list[ItineraryDay]:
    """Pick the best itinerary source available for a cruise; empty list when there is none."""
    if cruise.itinerary:
        logging.debug("Cruise %s: using recorded itinerary (%d days)", cruise.id, len(cruise.itinerary))
        return _normalize_times(cruise.itinerary)
    if days := parse_ports_and_times(cruise.ports_and_times):
        logging.debug("Cruise %s: using cruise Ports&Times", cruise.id)
        return days
    offer = _linked_offer(cruise, offers)
    if offer is not None:
        if days := parse_ports_and_times(offer.ports_and_times):
            logging.debug("Cruise %s: using Ports&Times of offer %s", cruise.id, offer.offer_code)
            return days
        if offer.ports:
            logging.debug("Cruise %s: using port list of offer %s", cruise.id, offer.offer_code)
            return _days_from_ports(offer.ports)
    if cruise.ports:
        logging.debug("Cruise %s: using cruise port list", cruise.id)
        return _days_from_ports(cruise.ports)
    return []


def synthesize_days(nights: int, departure_port: str, start: int = 0) -> list[ItineraryDay]:
    """Placeholder itinerary alternating port calls and sea days, for days start..nights (0-based)."""
    total = nights + 1
    days = []
    for index in range(start, total):
        at_home_port = index in (0, total - 1)
        is_sea_day = not at_home_port and index % 2 == 0
        if at_home_port:
            port = departure_port or "Departure Port"
        else:
            port = SYNTHETIC_SEA_PORT if is_sea_day else SYNTHETIC_CALL_PORT
        departure = None if is_sea_day or index == total - 1 else DEFAULT_SAIL_AWAY_TIME
        days.append(ItineraryDay(day=index + 1, port=port, is_sea_day=is_sea_day, departure=departure))
    return days


def build_day_contexts(days: Sequence[ItineraryDay]) -> list[CasinoDayContext]:
    total = len(days)
    at_sea = [day_is_at_sea(day) for day in days]
    contexts = []
    for index, day in enumerate(days):
        has_previous = index > 0
        has_next = index + 1 < total
        next_day = days[index + 1] if has_next else None
        contexts.append(CasinoDayContext(
            day_number=index + 1,
            total_days=total,
            is_sea_day=at_sea[index],
            is_departure_day=index == 0,
            is_disembark_day=index == total - 1,
            previous_day_is_sea_day=has_previous and at_sea[index - 1],
            next_day_is_sea_day=has_next and at_sea[index + 1],
            next_day_is_port_day=has_next and not at_sea[index + 1],
            arrival_time=day.arrival,
            sail_away_time=_sail_away_time(day, at_sea[index]),
            next_day_arrival_time=next_day.arrival if next_day else None,
            port=day.port,
        ))
    return contexts


def estimate_itinerary(days: Sequence[ItineraryDay]) -> list[CasinoAvailability]:
    return [estimate_casino_day(context) for context in build_day_contexts(days)]
