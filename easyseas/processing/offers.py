from tqdm import tqdm

from ..models import Dataset, OfferPortfolioSummary
from ..valuation.calculator import (
    SortMode,
    aggregate_offer_group,
    group_cruises_by_offer,
    is_expiring_soon,
    sort_offer_groups,
    summarize_offer_groups,
)
from .base import BaseCruiseProcessor


class OfferValueProcessor(BaseCruiseProcessor):
    """Casino offers grouped by offer code, valued and sorted for the overview page."""
    template_name = 'offer_values.html.j2'

    def __init__(self, sort_mode: SortMode | str = SortMode.SOONEST_EXPIRING, include_expired: bool = False, **kwargs):
        super().__init__(**kwargs)
        self.sort_mode = SortMode(sort_mode)
        self.include_expired = include_expired

    def build_offers(self, dataset: Dataset) -> tuple[list[dict], OfferPortfolioSummary]:
        groups = group_cruises_by_offer(self.upcoming(dataset.cruises), dataset.offers)
        if not self.include_expired:
            groups = [g for g in groups if g.expiry_date is None or g.expiry_date >= self.today]
        groups = sort_offer_groups(groups, self.sort_mode)
        rows = []
        for group in tqdm(groups, desc='Valuing offers', leave=False):
            value = aggregate_offer_group(group)
            rows.append({
                'group': group,
                'value': value,
                'cruises': [
                    {'title': self.cruise_title(cruise), 'cruise': cruise, 'breakdown': breakdown}
                    for cruise, breakdown in zip(group.cruises, value.breakdowns)
                ],
                'expiring_soon': is_expiring_soon(group.expiry_date, self.today),
            })
        return rows, summarize_offer_groups(groups)

    def process(self, dataset: Dataset) -> str:
        rows, totals = self.build_offers(dataset)
        return self.render(offers=rows, totals=totals, sort_mode=self.sort_mode.value)
