from datetime import date

import pytest

from easyseas.models import CasinoDayContext, Cruise, ItineraryDay, PlayingHours, PlayingSession


@pytest.fixture
def make_context():
    def _make(**overrides) -> CasinoDayContext:
        fields = dict(
            day_number=3,
            total_days=8,
            is_sea_day=False,
            is_departure_day=False,
            is_disembark_day=False,
        )
        fields.update(overrides)
        return CasinoDayContext(**fields)
    return _make


@pytest.fixture
def caribbean_itinerary() -> list[ItineraryDay]:
    return [
        ItineraryDay(day=1, port="Miami", departure="16:00"),
        ItineraryDay(day=2, port="At Sea", is_sea_day=True),
        ItineraryDay(day=3, port="Cozumel", arrival="08:00", departure="17:00"),
        ItineraryDay(day=4, port="At Sea", is_sea_day=True),
        ItineraryDay(day=5, port="Miami", arrival="07:00"),
    ]


@pytest.fixture
def caribbean_cruise(caribbean_itinerary) -> Cruise:
    return Cruise(
        id="SY-20250302",
        ship_name="Symphony of the Seas",
        sail_date=date(2025, 3, 2),
        nights=4,
        departure_port="Miami",
        destination="Western Caribbean",
        itinerary=caribbean_itinerary,
    )


@pytest.fixture
def night_owl_hours() -> PlayingHours:
    return PlayingHours(enabled=True, sessions=[
        PlayingSession(name="Night owl", start_time="23:00", end_time="01:00"),
        PlayingSession(name="Breakfast", start_time="08:00", end_time="09:00", enabled=False),
    ])


@pytest.fixture
def sample_data() -> dict:
    return {
        "cruises": [
            {
                "id": "SY-1",
                "ship_name": "Symphony of the Seas",
                "sail_date": "2099-03-02",
                "nights": 4,
                "departure_port": "Miami",
                "destination": "Western Caribbean",
                "balcony_price": 200,
                "taxes": 420,
                "free_play": 100,
                "free_obc": 50,
                "free_drink_package": True,
                "offer_code": "25CLS303",
                "ports_and_times": "Miami; ; 16:00\nAt Sea\nCozumel; 08:00; 17:00\nAt Sea\nMiami; 07:00;",
            },
            {
                "id": "WO-1",
                "ship_name": "Wonder of the Seas",
                "sail_date": "03/10/2099",
                "nights": 3,
                "departure_port": "Port Canaveral",
                "interior_price": 200,
                "taxes": 100,
                "offer_code": "25CLS303",
            },
            {
                "id": "OLD-1",
                "ship_name": "Navigator of the Seas",
                "sail_date": "2001-01-01",
                "nights": 3,
                "offer_code": "24OLD",
            },
        ],
        "offers": [
            {"offer_code": "25CLS303", "offer_name": "Club Royale Select", "expiry_date": "2099-02-15"},
        ],
        "playing_hours": {
            "enabled": True,
            "sessions": [{"name": "Night owl", "start_time": "23:00", "end_time": "01:00"}],
        },
    }
