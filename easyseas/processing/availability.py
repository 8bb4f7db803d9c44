from tqdm import tqdm

from ..casino.golden_hours import personalized_play_estimate
from ..casino.summary import casino_status_badge, summarize_cruise
from ..models import Dataset
from .base import BaseCruiseProcessor


class CasinoAvailabilityProcessor(BaseCruiseProcessor):
    """Day-by-day casino calendar for every upcoming cruise, with the player's golden hours."""
    template_name = 'casino_availability.html.j2'

    def __init__(self, include_past: bool = False, **kwargs):
        super().__init__(**kwargs)
        self.include_past = include_past

    def build_rows(self, dataset: Dataset) -> list[dict]:
        cruises = dataset.cruises if self.include_past else self.upcoming(dataset.cruises)
        cruises = sorted(cruises, key=lambda c: (c.sail_date is None, c.sail_date))
        rows = []
        for cruise in tqdm(cruises, desc='Estimating casino hours', leave=False):
            summary = summarize_cruise(cruise, dataset.offers)
            rows.append({
                'title': self.cruise_title(cruise),
                'cruise': cruise,
                'summary': summary,
                'badge': casino_status_badge(summary.casino_open_days, summary.total_days),
                'play': personalized_play_estimate(summary, dataset.playing_hours),
            })
        return rows

    def process(self, dataset: Dataset) -> str:
        rows = self.build_rows(dataset)
        return self.render(
            cruises=rows,
            golden_hours_enabled=dataset.playing_hours.enabled,
        )
