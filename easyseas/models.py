from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True, slots=True)
class ItineraryDay:
    """One calendar day of a cruise itinerary.

    port is None (or a sea-day label such as "At Sea") for days without a port call.
    arrival / departure are clock strings ("HH:MM"). A named port without either assumes the
    default sail away; a day with no port and no times is a sea day.
    """
    day: int
    port: str | None = None
    is_sea_day: bool = False
    arrival: str | None = None
    departure: str | None = None
    notes: str | None = None


@dataclass(frozen=True, slots=True)
class CasinoDayContext:
    """A single itinerary day seen together with its neighbours."""
    day_number: int
    total_days: int
    is_sea_day: bool
    is_departure_day: bool
    is_disembark_day: bool
    previous_day_is_sea_day: bool = False
    next_day_is_sea_day: bool = False
    next_day_is_port_day: bool = False
    arrival_time: str | None = None
    sail_away_time: str | None = None
    next_day_arrival_time: str | None = None
    port: str | None = None

    def __post_init__(self):
        if self.day_number < 1:
            raise ValueError(f"day_number must be >= 1, got {self.day_number}")
        if self.total_days < self.day_number:
            raise ValueError(f"total_days ({self.total_days}) is smaller than day_number ({self.day_number})")
        if self.is_departure_day and self.is_disembark_day and self.total_days != 1:
            raise ValueError("Only a single-day cruise can be both departure and disembark day")


@dataclass(frozen=True, slots=True)
class TimeWindow:
    """Clock window; end None means "until the end of the day" (24 hour slots)."""
    start: str
    end: str | None
    label: str = ""


@dataclass(frozen=True, slots=True)
class CasinoAvailability:
    open: bool
    reason: str
    open_time: str | None = None
    close_time: str | None = None
    hours: str = "Closed"
    estimated_hours: int = 0
    windows: tuple[TimeWindow, ...] = ()


@dataclass(slots=True)
class PlayingSession:
    name: str
    start_time: str
    end_time: str
    enabled: bool = True
    id: str | None = None


@dataclass(slots=True)
class PlayingHours:
    enabled: bool = False
    sessions: list[PlayingSession] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class GoldenWindow:
    start: str
    end: str
    duration_minutes: int
    label: str


@dataclass(slots=True)
class Cruise:
    """Cruise record as supplied by the import/storage layer (available, offered or booked).

    Every price is per guest for the whole sailing. Zero and None are both treated as "unknown".
    """
    id: str
    ship_name: str = ""
    sail_date: date | None = None
    nights: int = 0
    departure_port: str = ""
    destination: str = ""
    cabin_type: str | None = None
    interior_price: float | None = None
    oceanview_price: float | None = None
    balcony_price: float | None = None
    suite_price: float | None = None
    junior_suite_price: float | None = None
    grand_suite_price: float | None = None
    price: float | None = None
    taxes: float | None = None
    free_play: float | None = None
    free_obc: float | None = None
    guests: int | None = None
    offer_code: str | None = None
    offer_name: str | None = None
    offer_expiry: date | None = None
    itinerary: list[ItineraryDay] = field(default_factory=list)
    ports: list[str] = field(default_factory=list)
    ports_and_times: str | None = None
    perks: list[str] = field(default_factory=list)
    free_gratuities: bool = False
    free_drink_package: bool = False
    free_wifi: bool = False
    free_specialty_dining: bool = False
    earned_points: int = 0
    winnings: float | None = None


@dataclass(slots=True)
class CasinoOffer:
    """Casino offer certificate, linked to cruises by offer_code."""
    offer_code: str
    offer_name: str | None = None
    expiry_date: date | None = None
    room_type: str | None = None
    free_play: float | None = None
    obc: float | None = None
    interior_price: float | None = None
    oceanview_price: float | None = None
    balcony_price: float | None = None
    suite_price: float | None = None
    taxes_fees: float | None = None
    ports_and_times: str | None = None
    ports: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class ResolvedPricing:
    cabin_type: str
    cabin_price: float
    price_estimated: bool
    guests: int
    taxes: float
    taxes_estimated: bool
    free_play: float
    free_obc: float


@dataclass(frozen=True, slots=True)
class ValueBreakdown:
    cabin_price: float
    guests: int
    cabin_value: float
    taxes_fees: float
    free_play: float
    free_obc: float
    total_retail_value: float
    min_retail_value: float
    max_retail_value: float
    coverage_fraction: float
    price_estimated: bool = False
    taxes_estimated: bool = False

    @property
    def amount_paid(self) -> float:
        """Out of pocket on a comped sailing: the taxes and fees."""
        return self.taxes_fees

    @property
    def net_value(self) -> float:
        return self.cabin_value + self.free_play + self.free_obc - self.amount_paid


@dataclass(slots=True)
class OfferGroup:
    offer_code: str
    offer_name: str
    expiry_date: date | None
    cruises: list[Cruise] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class OfferGroupValue:
    offer_code: str
    total_value: float
    total_cruises: int
    min_retail_value: float
    max_retail_value: float
    breakdowns: tuple[ValueBreakdown, ...] = ()
    perks: tuple[str, ...] = ()

    @property
    def net_value(self) -> float:
        return sum(b.net_value for b in self.breakdowns)


@dataclass(frozen=True, slots=True)
class OfferPortfolioSummary:
    total_value: float
    total_cruises: int
    total_offers: int


@dataclass(frozen=True, slots=True)
class OfferComparison:
    """winner is "A", "B" or "tie"; value_difference is A minus B."""
    winner: str
    value_a: float
    value_b: float
    value_difference: float
    recommendation: str


@dataclass(frozen=True, slots=True)
class PortfolioValue:
    """Value received across booked cruises against the taxes actually recorded for them."""
    total_retail_value: float
    total_taxes_fees: float
    total_comp_value: float
    total_points: int
    total_coin_in: float
    total_winnings: float
    total_profit: float
    avg_value_per_dollar: float
    avg_roi: float
    breakdowns: tuple[tuple[str, ValueBreakdown], ...] = ()


@dataclass(frozen=True, slots=True)
class DailyCasinoAvailability:
    day: int
    date: date | None
    port: str
    is_sea_day: bool
    is_us_port: bool
    is_us_territory: bool
    availability: CasinoAvailability
    arrival_time: str | None = None
    departure_time: str | None = None

    @property
    def casino_open(self) -> bool:
        return self.availability.open


@dataclass(slots=True)
class CruiseCasinoSummary:
    cruise_id: str
    total_days: int
    sea_days: int
    port_days: int
    casino_open_days: int
    casino_closed_days: int
    us_port_days: int
    foreign_port_days: int
    estimated_casino_hours: int
    daily: list[DailyCasinoAvailability]
    best_gambling_days: list[int]
    description: str


@dataclass(slots=True)
class DayPlayEstimate:
    day: int
    date: date | None
    port: str
    is_sea_day: bool
    casino_open: bool
    sessions: int
    hours_played: float
    points_earned: int
    notes: str
    golden_windows: list[GoldenWindow] = field(default_factory=list)


@dataclass(slots=True)
class PersonalizedPlayEstimate:
    estimated_play_hours: float
    estimated_points: int
    golden_hours_total: float
    play_days: int
    days: list[DayPlayEstimate]


@dataclass(slots=True)
class Dataset:
    cruises: list[Cruise] = field(default_factory=list)
    offers: list[CasinoOffer] = field(default_factory=list)
    playing_hours: PlayingHours = field(default_factory=PlayingHours)
