import pytest

from easyseas.models import Cruise
from easyseas.valuation.pricing import (
    NIGHTLY_RATES,
    cabin_type_key,
    estimate_cabin_price,
    estimate_taxes,
    nightly_rate,
    resolve_guests,
    resolve_pricing,
)


@pytest.mark.parametrize("text,expected", [
    ("Balcony GTY", "Balcony GTY"),
    ("Inside", "Interior"),
    ("Ocean View", "Oceanview"),
    ("jr suite", "Junior Suite"),
    ("Grand Suite 2BR", "Grand Suite 2BR"),
    ("Owner's Suite", "Owner's Suite"),
    ("Suite GTY", "Suite GTY"),
    ("", "Balcony"),
    (None, "Balcony"),
])
def test_cabin_type_key(text, expected):
    assert cabin_type_key(text) == expected


@pytest.mark.parametrize("cabin_type,rate", [
    ("Interior", 100),
    ("Balcony GTY", 150),
    ("Balcony", 180),
    ("Ocean View", 140),
    ("Oceanview GTY", 120),
    ("Suite", 320),
    ("Jr Suite", 320),
    ("Junior Suite", 320),
    ("Grand Suite", 500),
    ("Grand Suite 2BR", 682),
    ("Owner's Suite 2BR", 750),
    ("Penthouse Suite", 1071),
    ("mystery", 180),
])
def test_nightly_rate(cabin_type, rate):
    assert nightly_rate(cabin_type) == rate


@pytest.mark.parametrize("cabin_type", [
    "Interior", "Inside GTY", "Ocean View", "Balcony GTY", "Veranda", "Jr Suite", "Suite GTY", "Grand Suite",
])
def test_nightly_rate_follows_cabin_category(cabin_type):
    assert nightly_rate(cabin_type) == NIGHTLY_RATES[cabin_type_key(cabin_type)]


def test_premium_suite_estimate_scales_with_nights():
    pricing = resolve_pricing(Cruise(id="c", nights=7, cabin_type="Royal Suite"))
    assert pricing.cabin_price == 857 * 7
    assert pricing.price_estimated


def test_estimate_cabin_price():
    assert estimate_cabin_price(1300, "Balcony", "Interior") == 800


def test_estimate_taxes():
    assert estimate_taxes(7, 2) == 420


@pytest.mark.parametrize("guests,expected", [(None, 2), (0, 2), (-1, 2), (4, 4)])
def test_resolve_guests(guests, expected):
    assert resolve_guests(Cruise(id="c", guests=guests)) == expected


def test_recorded_price_wins():
    pricing = resolve_pricing(Cruise(id="c", nights=7, cabin_type="Balcony", balcony_price=200, taxes=150))
    assert pricing.cabin_price == 200
    assert not pricing.price_estimated
    assert pricing.taxes == 150
    assert not pricing.taxes_estimated


def test_price_fallback_chain():
    cruise = Cruise(id="c", nights=7, cabin_type="Suite", interior_price=600, balcony_price=1000)
    assert resolve_pricing(cruise).cabin_price == 1000
    assert resolve_pricing(cruise, "Oceanview").cabin_price == 1000
    assert resolve_pricing(Cruise(id="c", price=750)).cabin_price == 750


def test_junior_suite_uses_suite_price_when_missing():
    cruise = Cruise(id="c", suite_price=2500)
    assert resolve_pricing(cruise, "Junior Suite").cabin_price == 2500


def test_price_estimated_from_nightly_rates():
    pricing = resolve_pricing(Cruise(id="c", nights=7, cabin_type="Interior"))
    assert pricing.cabin_price == 700
    assert pricing.price_estimated
    assert pricing.taxes == 420
    assert pricing.taxes_estimated


def test_nothing_known_resolves_to_zero():
    pricing = resolve_pricing(Cruise(id="c"))
    assert pricing.cabin_price == 0
    assert pricing.taxes == 0
    assert not pricing.price_estimated
    assert not pricing.taxes_estimated
    assert pricing.guests == 2
