import logging
from dataclasses import replace
from datetime import date
from enum import Enum
from typing import Iterable, Sequence

from ..models import (
    CasinoOffer,
    Cruise,
    OfferComparison,
    OfferGroup,
    OfferGroupValue,
    OfferPortfolioSummary,
    PortfolioValue,
    ValueBreakdown,
)
from .pricing import resolve_pricing

DOLLARS_PER_POINT = 5
EXPIRING_SOON_DAYS = 7
COMPARISON_TIE_BAND = 50

PERK_FLAGS = (
    ('free_gratuities', 'Gratuities'),
    ('free_drink_package', 'Drink Package'),
    ('free_wifi', 'WiFi'),
    ('free_specialty_dining', 'Specialty Dining'),
)


class SortMode(str, Enum):
    SOONEST_EXPIRING = "soonest"
    HIGHEST_VALUE = "highest-value"
    LOWEST_PRICE = "lowest-price"
    LONGEST = "longest"
    SHORTEST = "shortest"


def _price(value: float | None) -> float:
    return value if value and value > 0 else 0


def _first_price(*values: float | None) -> float:
    return next((p for v in values if (p := _price(v))), 0)


def _cabin_range(cruise: Cruise) -> tuple[float, float]:
    """Cheapest and dearest per-guest price recorded for a cruise, 0 when nothing is recorded."""
    low = _first_price(cruise.interior_price, cruise.balcony_price, cruise.oceanview_price, cruise.suite_price)
    high = _first_price(cruise.suite_price, cruise.balcony_price, cruise.oceanview_price, cruise.interior_price)
    return low, high


def max_cabin_price(cruise: Cruise) -> float:
    return max(_price(cruise.suite_price), _price(cruise.balcony_price),
               _price(cruise.oceanview_price), _price(cruise.interior_price))


def min_cabin_price(cruise: Cruise) -> float | None:
    prices = [p for p in (cruise.interior_price, cruise.oceanview_price, cruise.balcony_price, cruise.suite_price)
              if p and p > 0]
    return min(prices) if prices else None


def coverage_fraction(free_value: float, total_retail_value: float) -> float:
    if total_retail_value <= 0:
        return 0.0
    return min(1.0, max(0.0, free_value / total_retail_value))


def calculate_cruise_value(cruise: Cruise, cabin_type: str | None = None) -> ValueBreakdown:
    """Estimated dollar value of a cruise: cabin for all guests, taxes, free play and onboard credit."""
    pricing = resolve_pricing(cruise, cabin_type)
    cabin_value = pricing.cabin_price * pricing.guests
    free_value = pricing.free_play + pricing.free_obc
    total = cabin_value + pricing.taxes + free_value

    low, high = _cabin_range(cruise)
    min_retail = low * pricing.guests + pricing.taxes if low else total
    max_retail = high * pricing.guests + pricing.taxes if high else total

    breakdown = ValueBreakdown(
        cabin_price=pricing.cabin_price,
        guests=pricing.guests,
        cabin_value=cabin_value,
        taxes_fees=pricing.taxes,
        free_play=pricing.free_play,
        free_obc=pricing.free_obc,
        total_retail_value=total,
        min_retail_value=min_retail,
        max_retail_value=max_retail,
        coverage_fraction=coverage_fraction(free_value, total),
        price_estimated=pricing.price_estimated,
        taxes_estimated=pricing.taxes_estimated,
    )
    logging.debug("Cruise %s value: cabin %s + taxes %s + free play %s + OBC %s = %s",
                  cruise.id, cabin_value, pricing.taxes, pricing.free_play, pricing.free_obc, total)
    return breakdown


def _money(value: float) -> str:
    return f"${value:,.0f}"


def format_value_text(breakdown: ValueBreakdown) -> str:
    lines = [
        f"Cabin Value: {_money(breakdown.cabin_price)} x {breakdown.guests} = {_money(breakdown.cabin_value)}",
        f"Taxes & Fees: {_money(breakdown.taxes_fees)}",
    ]
    if breakdown.free_play > 0:
        lines.append(f"FreePlay: {_money(breakdown.free_play)}")
    if breakdown.free_obc > 0:
        lines.append(f"OBC: {_money(breakdown.free_obc)}")
    lines.append("-----------------")
    lines.append(f"Total Retail Value: {_money(breakdown.total_retail_value)}")
    lines.append(f"Amount Paid: {_money(breakdown.amount_paid)}")
    lines.append(f"Net Value: {_money(breakdown.net_value)}")
    lines.append(f"Coverage: {breakdown.coverage_fraction * 100:.0f}%")
    if breakdown.price_estimated or breakdown.taxes_estimated:
        lines.append("(includes estimated prices)")
    return "\n".join(lines)


def cruise_perks(cruise: Cruise) -> list[str]:
    """Listed perks plus the ones implied by the free-amenity flags, without duplicates."""
    perks = list(cruise.perks)
    perks.extend(label for flag, label in PERK_FLAGS if getattr(cruise, flag))
    return list(dict.fromkeys(perks))


# ---------------- Offer groups -----------------
def _enrich_from_offer(cruise: Cruise, offer: CasinoOffer) -> Cruise:
    """Fill a cruise that carries no prices with the prices printed on its offer."""
    if any(_price(p) for p in (cruise.interior_price, cruise.oceanview_price, cruise.balcony_price, cruise.suite_price)):
        return cruise
    logging.debug("Cruise %s: using prices of offer %s", cruise.id, offer.offer_code)
    return replace(
        cruise,
        interior_price=offer.interior_price,
        oceanview_price=offer.oceanview_price,
        balcony_price=offer.balcony_price,
        suite_price=offer.suite_price,
        taxes=cruise.taxes or offer.taxes_fees,
        cabin_type=cruise.cabin_type or offer.room_type,
        free_play=cruise.free_play or offer.free_play,
        free_obc=cruise.free_obc or offer.obc,
    )


def group_cruises_by_offer(cruises: Iterable[Cruise], offers: Sequence[CasinoOffer] = ()) -> list[OfferGroup]:
    """One group per offer code, in first-seen order. Cruises without an offer code are left out."""
    offers_by_code = {offer.offer_code: offer for offer in offers}
    groups: dict[str, OfferGroup] = {}
    for cruise in cruises:
        if not cruise.offer_code:
            continue
        offer = offers_by_code.get(cruise.offer_code)
        group = groups.get(cruise.offer_code)
        if group is None:
            group = groups[cruise.offer_code] = OfferGroup(
                offer_code=cruise.offer_code,
                offer_name=(offer and offer.offer_name) or cruise.offer_name or cruise.offer_code,
                expiry_date=offer.expiry_date if offer else None,
            )
        if offer is None and cruise.offer_expiry:
            if group.expiry_date is None or cruise.offer_expiry < group.expiry_date:
                group.expiry_date = cruise.offer_expiry
        group.cruises.append(_enrich_from_offer(cruise, offer) if offer else cruise)
    return list(groups.values())


def aggregate_offer_group(group: OfferGroup) -> OfferGroupValue:
    breakdowns = tuple(calculate_cruise_value(cruise) for cruise in group.cruises)
    total_value = sum(b.total_retail_value for b in breakdowns)
    count = len(group.cruises)

    lows, highs = [], []
    for cruise, breakdown in zip(group.cruises, breakdowns):
        low, high = _cabin_range(cruise)
        if low:
            lows.append(low * breakdown.guests + breakdown.taxes_fees)
        if high:
            highs.append(high * breakdown.guests + breakdown.taxes_fees)
    even_split = total_value / max(count, 1)
    perks = dict.fromkeys(perk for cruise in group.cruises for perk in cruise_perks(cruise))
    value = OfferGroupValue(
        offer_code=group.offer_code,
        total_value=total_value,
        total_cruises=count,
        min_retail_value=min(lows) if lows else even_split,
        max_retail_value=max(highs) if highs else even_split,
        breakdowns=breakdowns,
        perks=tuple(perks),
    )
    logging.debug("Offer %s: %d cruises worth %s", group.offer_code, count, total_value)
    return value


def compare_offers(offer_a: OfferGroupValue, offer_b: OfferGroupValue) -> OfferComparison:
    """Compare two offers on net value; differences under COMPARISON_TIE_BAND dollars are a tie."""
    difference = offer_a.net_value - offer_b.net_value
    if abs(difference) < COMPARISON_TIE_BAND:
        winner = "tie"
        recommendation = "Both offers provide similar value - choose based on cabin preference or dates"
    else:
        winner = "A" if difference > 0 else "B"
        better = offer_a if difference > 0 else offer_b
        recommendation = f"Offer {better.offer_code or winner} provides {_money(abs(difference))} more value"
    logging.debug("Compared offers %s and %s: %s (%s)", offer_a.offer_code, offer_b.offer_code, winner, difference)
    return OfferComparison(
        winner=winner,
        value_a=offer_a.net_value,
        value_b=offer_b.net_value,
        value_difference=difference,
        recommendation=recommendation,
    )


def summarize_offer_groups(groups: Sequence[OfferGroup]) -> OfferPortfolioSummary:
    values = [aggregate_offer_group(group) for group in groups]
    return OfferPortfolioSummary(
        total_value=sum(v.total_value for v in values),
        total_cruises=sum(v.total_cruises for v in values),
        total_offers=len(groups),
    )


# ---------------- Sorting / ranking -----------------
def _expiry_key(expiry: date | None) -> date:
    return expiry or date.max


def sort_offer_groups(groups: Iterable[OfferGroup], mode: SortMode | str = SortMode.SOONEST_EXPIRING) -> list[OfferGroup]:
    mode = SortMode(mode)
    if mode == SortMode.SOONEST_EXPIRING:
        return sorted(groups, key=lambda g: _expiry_key(g.expiry_date))
    if mode == SortMode.HIGHEST_VALUE:
        return sorted(groups, key=lambda g: max((max_cabin_price(c) for c in g.cruises), default=0), reverse=True)
    raise ValueError(f"Sort mode {mode.value!r} is not supported for offer groups")


def sort_cruises(cruises: Iterable[Cruise], mode: SortMode | str = SortMode.SOONEST_EXPIRING) -> list[Cruise]:
    """Cruise list ordering of the offer details view. Stable: ties keep their input order."""
    mode = SortMode(mode)
    if mode == SortMode.SOONEST_EXPIRING:
        return sorted(cruises, key=lambda c: _expiry_key(c.offer_expiry))
    if mode == SortMode.HIGHEST_VALUE:
        return sorted(cruises, key=max_cabin_price, reverse=True)
    if mode == SortMode.LOWEST_PRICE:
        return sorted(cruises, key=lambda c: min_cabin_price(c) or float('inf'))
    if mode == SortMode.LONGEST:
        return sorted(cruises, key=lambda c: c.nights or 0, reverse=True)
    return sorted(cruises, key=lambda c: c.nights or 0)


def is_expiring_soon(expiry: date | None, today: date, within_days: int = EXPIRING_SOON_DAYS) -> bool:
    if expiry is None:
        return False
    return 0 < (expiry - today).days <= within_days


def rank_cruises_by_value(cruises: Iterable[Cruise], key: str = "total") -> list[tuple[int, Cruise, ValueBreakdown]]:
    metrics = {
        "total": lambda b: b.total_retail_value,
        "coverage": lambda b: b.coverage_fraction,
        "free_play": lambda b: b.free_play,
    }
    if key not in metrics:
        raise ValueError(f"Unknown ranking key {key!r}, expected one of {sorted(metrics)}")
    scored = [(cruise, calculate_cruise_value(cruise)) for cruise in cruises]
    scored.sort(key=lambda item: metrics[key](item[1]), reverse=True)
    return [(rank, cruise, breakdown) for rank, (cruise, breakdown) in enumerate(scored, start=1)]


# ---------------- Casino money helpers -----------------
def calculate_roi(retail_value: float, winnings: float, out_of_pocket: float) -> tuple[float, float]:
    """(roi, roi percentage) of a sailing; both 0 when nothing was paid."""
    if out_of_pocket <= 0:
        return 0.0, 0.0
    roi = retail_value + winnings - out_of_pocket
    return roi, roi / out_of_pocket * 100


def points_from_coin_in(coin_in: float) -> int:
    return int(coin_in // DOLLARS_PER_POINT)


def coin_in_from_points(points: int) -> float:
    return points * DOLLARS_PER_POINT


def cost_per_point(coin_in: float, points: int) -> float:
    return coin_in / points if points > 0 else 0.0


def calculate_portfolio_value(cruises: Iterable[Cruise]) -> PortfolioValue:
    """Totals over booked cruises. Only taxes recorded on a cruise count as paid, never estimates."""
    breakdowns = []
    retail = taxes = received = winnings = 0.0
    points = 0
    for cruise in cruises:
        breakdown = calculate_cruise_value(cruise)
        breakdowns.append((cruise.id, breakdown))
        retail += breakdown.cabin_value
        received += breakdown.cabin_value + breakdown.free_play + breakdown.free_obc
        taxes += _price(cruise.taxes)
        winnings += cruise.winnings or 0
        points += max(cruise.earned_points or 0, 0)

    profit, roi = calculate_roi(received, winnings, taxes)
    if taxes <= 0:
        profit = received + winnings
        roi = 1000.0 if profit > 0 else 0.0
        value_per_dollar = float('inf') if profit > 0 else 0.0
    else:
        value_per_dollar = (received + winnings) / taxes

    portfolio = PortfolioValue(
        total_retail_value=retail,
        total_taxes_fees=taxes,
        total_comp_value=received,
        total_points=points,
        total_coin_in=coin_in_from_points(points),
        total_winnings=winnings,
        total_profit=profit,
        avg_value_per_dollar=value_per_dollar,
        avg_roi=roi,
        breakdowns=tuple(breakdowns),
    )
    logging.debug("Portfolio of %d cruises: value %s, taxes %s, profit %s",
                  len(breakdowns), received, taxes, profit)
    return portfolio
