"""Cabin categories, nightly rate estimates and the single resolver for cruise pricing defaults.

All "what if the number is missing" decisions for a cruise live in resolve_pricing(); callers
never re-derive guest counts, cabin prices or taxes on their own.
"""
import logging

from ..models import Cruise, ResolvedPricing

GUEST_COUNT_DEFAULT = 2
TAXES_PER_NIGHT_PER_GUEST = 30
DEFAULT_CABIN_TYPE = 'Balcony'

# Estimated per-guest price per night, used only when a cruise carries no price at all.
# GTY (guarantee) cabins are cheaper because the room is assigned at embarkation.
NIGHTLY_RATES = {
    'Interior': 100,
    'Interior GTY': 80,
    'Oceanview': 140,
    'Oceanview GTY': 120,
    'Balcony': 180,
    'Balcony GTY': 150,
    'Suite GTY': 280,
    'Junior Suite': 320,
    'Grand Suite': 500,
    "Owner's Suite": 600,
}

CABIN_PRICE_MULTIPLIERS = {
    'Interior GTY': 0.7,
    'Interior': 0.8,
    'Oceanview GTY': 0.9,
    'Oceanview': 1.0,
    'Balcony GTY': 1.15,
    'Balcony': 1.3,
    'Suite GTY': 1.6,
    'Junior Suite': 1.8,
    'Grand Suite': 2.2,
    "Owner's Suite": 2.8,
    'Grand Suite 2BR': 3.0,
    "Owner's Suite 2BR": 3.5,
    'Royal Suite': 4.0,
    'Penthouse Suite': 5.0,
}


def cabin_type_key(cabin_type: str | None) -> str:
    """Map free-text cabin descriptions ("Balcony GTY", "jr suite", ...) to a category key."""
    normalized = (cabin_type or '').lower().strip()
    gty = 'gty' in normalized
    if 'interior' in normalized or 'inside' in normalized:
        return 'Interior GTY' if gty else 'Interior'
    if 'ocean' in normalized:
        return 'Oceanview GTY' if gty else 'Oceanview'
    if 'balcony' in normalized or 'veranda' in normalized:
        return 'Balcony GTY' if gty else 'Balcony'
    if 'penthouse' in normalized:
        return 'Penthouse Suite'
    if 'royal' in normalized and 'suite' in normalized:
        return 'Royal Suite'
    if 'owner' in normalized:
        return "Owner's Suite 2BR" if '2br' in normalized else "Owner's Suite"
    if 'grand' in normalized:
        return 'Grand Suite 2BR' if '2br' in normalized else 'Grand Suite'
    if 'junior' in normalized or 'jr' in normalized:
        return 'Junior Suite'
    if 'suite' in normalized:
        return 'Suite GTY' if gty else 'Junior Suite'
    return DEFAULT_CABIN_TYPE


def nightly_rate(cabin_type: str | None) -> int:
    """Estimated nightly rate for the cabin's category key.

    Categories missing from NIGHTLY_RATES (two-bedroom, Royal and Penthouse suites) are scaled
    from the closest listed suite with CABIN_PRICE_MULTIPLIERS.
    """
    key = cabin_type_key(cabin_type)
    if key in NIGHTLY_RATES:
        return NIGHTLY_RATES[key]
    anchor = key.removesuffix(' 2BR')
    if anchor not in NIGHTLY_RATES:
        anchor = "Owner's Suite"
    return estimate_cabin_price(NIGHTLY_RATES[anchor], anchor, key)


def _positive(value: float | None) -> float:
    return value if value and value > 0 else 0


def recorded_price_for(cruise: Cruise, cabin_type: str | None) -> float:
    key = cabin_type_key(cabin_type)
    if 'Interior' in key:
        return _positive(cruise.interior_price)
    if 'Oceanview' in key:
        return _positive(cruise.oceanview_price)
    if 'Balcony' in key:
        return _positive(cruise.balcony_price)
    if 'Junior' in key:
        return _positive(cruise.junior_suite_price) or _positive(cruise.suite_price)
    if 'Grand' in key:
        return _positive(cruise.grand_suite_price) or _positive(cruise.suite_price)
    return _positive(cruise.suite_price)


def estimate_cabin_price(base_price: float, from_type: str, to_type: str) -> float:
    """Translate a known price of one cabin category into another using relative multipliers."""
    from_multiplier = CABIN_PRICE_MULTIPLIERS.get(cabin_type_key(from_type), 1.0)
    to_multiplier = CABIN_PRICE_MULTIPLIERS.get(cabin_type_key(to_type), 1.0)
    return round(base_price / from_multiplier * to_multiplier)


def estimate_taxes(nights: int, guests: int) -> float:
    return round(nights * TAXES_PER_NIGHT_PER_GUEST * guests)


def resolve_guests(cruise: Cruise) -> int:
    return cruise.guests if cruise.guests and cruise.guests > 0 else GUEST_COUNT_DEFAULT


def resolve_pricing(cruise: Cruise, cabin_type: str | None = None) -> ResolvedPricing:
    cabin_type = cabin_type or cruise.cabin_type or DEFAULT_CABIN_TYPE
    guests = resolve_guests(cruise)
    nights = max(cruise.nights or 0, 0)

    cabin_price = (
        recorded_price_for(cruise, cabin_type)
        or _positive(cruise.balcony_price)
        or _positive(cruise.interior_price)
        or _positive(cruise.suite_price)
        or _positive(cruise.price)
    )
    price_estimated = False
    if not cabin_price and nights > 0:
        cabin_price = nightly_rate(cabin_type) * nights
        price_estimated = True
        logging.debug("Cruise %s: estimated %s price %s for %d nights", cruise.id, cabin_type, cabin_price, nights)

    taxes = _positive(cruise.taxes)
    taxes_estimated = False
    if not taxes and nights > 0:
        taxes = estimate_taxes(nights, guests)
        taxes_estimated = True
        logging.debug("Cruise %s: estimated taxes %s (%d nights, %d guests)", cruise.id, taxes, nights, guests)

    return ResolvedPricing(
        cabin_type=cabin_type,
        cabin_price=cabin_price,
        price_estimated=price_estimated,
        guests=guests,
        taxes=taxes,
        taxes_estimated=taxes_estimated,
        free_play=_positive(cruise.free_play),
        free_obc=_positive(cruise.free_obc),
    )
