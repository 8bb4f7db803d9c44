"""What-if projections: casino tier and loyalty level forecasts, ROI of a planned spend."""
import logging
import math
from dataclasses import dataclass
from datetime import date, timedelta

from .calculator import DOLLARS_PER_POINT

# Casino tier reached at each point total.
TIER_THRESHOLDS = {
    'Choice': 0,
    'Prime': 2501,
    'Signature': 25001,
    'Masters': 100001,
}
TIER_ORDER = list(TIER_THRESHOLDS)

# Loyalty level reached at each count of cruise nights.
LEVEL_THRESHOLDS = {
    'Gold': 1,
    'Platinum': 30,
    'Emerald': 55,
    'Diamond': 80,
    'Diamond Plus': 175,
    'Pinnacle': 700,
}
LEVEL_ORDER = list(LEVEL_THRESHOLDS)

DAYS_PER_MONTH = 30
RISK_FACTOR = 0.85


@dataclass(slots=True)
class PlayerContext:
    current_points: int = 0
    current_nights: int = 0
    average_points_per_night: float = 0
    average_nights_per_month: float = 0


@dataclass(frozen=True, slots=True)
class TierForecast:
    current_tier: str
    projected_tier: str
    current_points: int
    projected_points: int
    tier_upgrade: bool
    next_tier_threshold: int
    points_to_next_tier: int
    months_to_next_tier: int
    projected_date: date | None


@dataclass(frozen=True, slots=True)
class LoyaltyForecast:
    current_level: str
    projected_level: str
    current_nights: int
    projected_nights: int
    level_upgrade: bool
    next_level_threshold: int
    nights_to_next_level: int
    months_to_next_level: int
    projected_date: date | None


@dataclass(frozen=True, slots=True)
class RoiProjection:
    total_investment: float
    projected_value: float
    projected_roi: float
    points_value: float
    comp_value: float
    savings: float
    monthly_roi: float
    risk_adjusted_roi: float
    break_even_date: date | None


def _highest_reached(thresholds: dict[str, int], amount: float) -> str:
    reached = [name for name, threshold in thresholds.items() if amount >= threshold]
    return reached[-1] if reached else next(iter(thresholds))


def tier_for_points(points: int) -> str:
    return _highest_reached(TIER_THRESHOLDS, points)


def level_for_nights(nights: int) -> str:
    return _highest_reached(LEVEL_THRESHOLDS, nights)


def _next_step(order: list[str], thresholds: dict[str, int], current: str, amount: float) -> tuple[int, float]:
    """(threshold of the step after current, amount still missing); (0, 0) at the top."""
    index = order.index(current)
    if index == len(order) - 1:
        return 0, 0
    threshold = thresholds[order[index + 1]]
    return threshold, max(0, threshold - amount)


def _months_from(today: date | None, months: int) -> date | None:
    if months <= 0:
        return None
    return (today or date.today()) + timedelta(days=months * DAYS_PER_MONTH)


def tier_forecast(context: PlayerContext, additional_points: int = 0, today: date | None = None) -> TierForecast:
    projected_points = context.current_points + additional_points
    current_tier = tier_for_points(context.current_points)
    projected_tier = tier_for_points(projected_points)
    threshold, missing = _next_step(TIER_ORDER, TIER_THRESHOLDS, projected_tier, projected_points)

    points_per_month = context.average_points_per_night * context.average_nights_per_month
    months = math.ceil(missing / points_per_month) if missing > 0 and points_per_month > 0 else 0
    return TierForecast(
        current_tier=current_tier,
        projected_tier=projected_tier,
        current_points=context.current_points,
        projected_points=projected_points,
        tier_upgrade=TIER_ORDER.index(projected_tier) > TIER_ORDER.index(current_tier),
        next_tier_threshold=threshold,
        points_to_next_tier=missing,
        months_to_next_tier=months,
        projected_date=_months_from(today, months),
    )


def loyalty_forecast(context: PlayerContext, additional_nights: int = 0, today: date | None = None) -> LoyaltyForecast:
    projected_nights = context.current_nights + additional_nights
    current_level = level_for_nights(context.current_nights)
    projected_level = level_for_nights(projected_nights)
    threshold, missing = _next_step(LEVEL_ORDER, LEVEL_THRESHOLDS, projected_level, projected_nights)

    nights_per_month = context.average_nights_per_month
    months = math.ceil(missing / nights_per_month) if missing > 0 and nights_per_month > 0 else 0
    return LoyaltyForecast(
        current_level=current_level,
        projected_level=projected_level,
        current_nights=context.current_nights,
        projected_nights=projected_nights,
        level_upgrade=LEVEL_ORDER.index(projected_level) > LEVEL_ORDER.index(current_level),
        next_level_threshold=threshold,
        nights_to_next_level=missing,
        months_to_next_level=months,
        projected_date=_months_from(today, months),
    )


def roi_projection(
        total_spend: float,
        retail_value: float,
        points_earned: int,
        comp_value: float = 0,
        horizon_months: int = 12,
        today: date | None = None,
) -> RoiProjection:
    """Return on a planned spend over a time horizon.

    The ROI counts savings against retail, the dollar value of the points earned and any comps.
    A break-even date exists only when the spend exceeds the retail value and the ROI is positive.
    """
    points_value = points_earned * DOLLARS_PER_POINT
    savings = max(0, retail_value - total_spend)
    roi = (savings + points_value + comp_value) / total_spend * 100 if total_spend > 0 else 0.0
    monthly_roi = roi / max(1, horizon_months)

    break_even = None
    if total_spend > retail_value and monthly_roi > 0:
        months = (total_spend - retail_value) / (monthly_roi * total_spend / 100)
        break_even = (today or date.today()) + timedelta(days=round(months * DAYS_PER_MONTH))
    logging.debug("ROI projection: spend %s, retail %s, points %s -> %.1f%%", total_spend, retail_value,
                  points_earned, roi)
    return RoiProjection(
        total_investment=total_spend,
        projected_value=retail_value + points_value + comp_value,
        projected_roi=roi,
        points_value=points_value,
        comp_value=comp_value,
        savings=savings,
        monthly_roi=monthly_roi,
        risk_adjusted_roi=roi * RISK_FACTOR,
        break_even_date=break_even,
    )
