"""Load exported cruise / offer / preference data (JSON) into domain dataclasses.

Expected shape:

    {
      "cruises": [{"id": "...", "ship_name": "...", "sail_date": "2025-03-02", ...}],
      "offers": [{"offer_code": "25CLS303", "expiry_date": "2025-04-30", ...}],
      "playing_hours": {"enabled": true, "sessions": [{"name": "Night owl", ...}]}
    }
"""
import json
import logging
from datetime import date, datetime
from pathlib import Path

import dacite

from .models import Dataset

DATE_FORMATS = ["%Y-%m-%d", "%Y/%m/%d", "%m/%d/%Y", "%m-%d-%Y"]


def parse_date(value: str | date, formats: list[str] | None = None) -> date:
    if isinstance(value, date):
        return value
    formats = formats or DATE_FORMATS
    text = value.strip()
    # ISO timestamps ("2025-03-02T00:00:00.000Z") carry the date in the first ten characters
    if "T" in text:
        text = text.split("T", 1)[0]
    for date_format in formats:
        try:
            return datetime.strptime(text, date_format).date()
        except ValueError:
            continue
    raise ValueError(f"Date string '{value}' not in formats {formats}")


DACITE_CONFIG = dacite.Config(type_hooks={date: parse_date, float: float})


def dataset_from_dict(data: dict) -> Dataset:
    return dacite.from_dict(data_class=Dataset, data=data, config=DACITE_CONFIG)


def load_dataset(path: Path | str) -> Dataset:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Data file {path} not found.")
    with open(path, "rt", encoding="utf-8") as f:
        logging.info(f"Loading cruise data from {path}")
        dataset = dataset_from_dict(json.load(f))
    logging.info("Loaded %d cruises, %d offers", len(dataset.cruises), len(dataset.offers))
    return dataset
