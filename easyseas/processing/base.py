import logging
from abc import ABC, abstractmethod
from datetime import date
from pathlib import Path

from bs4 import BeautifulSoup
from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..models import Cruise, Dataset

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / 'templates'


class BaseCruiseProcessor(ABC):
    """Common helpers for concrete report processors."""
    template_name: str = ''

    def __init__(self, today: date | None = None):
        self.today = today or date.today()
        self.env = Environment(
            loader=FileSystemLoader(str(TEMPLATES_DIR)),
            autoescape=select_autoescape(['html', 'xml', 'j2']),
        )
        self.env.filters['money'] = self.format_money
        self.env.filters['percent'] = self.format_percent
        self.env.filters['day'] = self.format_date

    # ---------------- Formatting helpers -----------------
    @staticmethod
    def format_money(value: float | None) -> str:
        return f"${value or 0:,.0f}"

    @staticmethod
    def format_percent(value: float | None) -> str:
        return f"{(value or 0) * 100:.0f}%"

    @staticmethod
    def format_date(value: date | None) -> str:
        return value.strftime("%Y-%m-%d (%a)") if value else "N/A"

    @staticmethod
    def cruise_title(cruise: Cruise) -> str:
        nights = f"{cruise.nights}-night " if cruise.nights else ""
        ship = cruise.ship_name or "Unknown ship"
        return f"{ship}: {nights}{cruise.destination or 'cruise'}".strip()

    # ---------------- Filtering -----------------
    def upcoming(self, cruises: list[Cruise]) -> list[Cruise]:
        """Cruises sailing today or later; cruises without a sail date are kept."""
        kept = [c for c in cruises if c.sail_date is None or c.sail_date >= self.today]
        if len(kept) != len(cruises):
            logging.info("Skipping %d cruises that already sailed", len(cruises) - len(kept))
        return kept

    # ---------------- Rendering -----------------
    def render(self, **context) -> str:
        tpl = self.env.get_template(self.template_name)
        rendered = tpl.render(today=self.today, **context)
        soup = BeautifulSoup(rendered, 'lxml')
        return soup.prettify()

    @abstractmethod
    def process(self, dataset: Dataset) -> str:  # pragma: no cover
        raise NotImplementedError
