"""High-level orchestration: load exported cruise data, build a report, deliver it.

Usage patterns:

1. Casino calendar for every upcoming cruise:
   run_pipeline(mode="availability", data_file="cruises.json")

2. Offer overview sorted by value, mailed when credentials are configured:
   run_pipeline(mode="offers", sort="highest-value", email=True)
"""
import argparse
import logging
import time
from datetime import date
from pathlib import Path
from typing import Literal, Sequence

import schedule

from easyseas.config import settings
from easyseas.emailer import send_email
from easyseas.loader import load_dataset
from easyseas.logging_config import setup_logging
from easyseas.processing.availability import CasinoAvailabilityProcessor
from easyseas.processing.offers import OfferValueProcessor
from easyseas.valuation.calculator import SortMode

ReportMode = Literal["availability", "offers"]

EMAIL_SUBJECTS = {
    "availability": "Easy Seas - casino availability",
    "offers": "Easy Seas - casino offers",
}


def run_pipeline(
        mode: ReportMode,
        data_file: Path | str | None = None,
        output_html: Path | str | None = None,
        sort: SortMode | str = SortMode.SOONEST_EXPIRING,
        email: bool = False,
        today: date | None = None,
) -> Path:
    dataset = load_dataset(data_file or settings.data_file)

    if mode == "availability":
        processor = CasinoAvailabilityProcessor(today=today)
    elif mode == "offers":
        processor = OfferValueProcessor(sort_mode=sort, today=today)
    else:
        raise ValueError(f"Unknown report mode {mode!r}")

    logging.info(f"Building '{mode}' report")
    html = processor.process(dataset)
    output = Path(output_html or settings.output_html)
    output.write_text(html, encoding="utf-8")
    logging.info(f"Output written to {output}")

    if email:
        send_email(subject=EMAIL_SUBJECTS[mode], html_body=html)

    return output


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Cruise casino availability and offer value reports")
    p.add_argument("--mode", choices=["availability", "offers"], default="availability")
    p.add_argument("--data", type=Path, default=None, help=f"Exported cruise data JSON (default: {settings.data_file})")
    p.add_argument("--output", type=Path, default=None, help=f"HTML report path (default: {settings.output_html})")
    # Offers mode specific
    p.add_argument("--sort", choices=[SortMode.SOONEST_EXPIRING.value, SortMode.HIGHEST_VALUE.value],
                   default=SortMode.SOONEST_EXPIRING.value, help="Offer ordering (offers mode)")
    # Misc
    p.add_argument("--email", action="store_true", help="Send email if credentials configured")
    p.add_argument("--log-level", default=settings.log_level)
    p.add_argument(
        "--schedule-at",
        metavar="HH:MM",
        default=None,
        help="Run the pipeline every day at the given time (e.g. 07:30). "
             "Without this flag the pipeline runs once and exits.",
    )
    return p


def main_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    pipeline_kwargs = dict(
        mode=args.mode,
        data_file=args.data,
        output_html=args.output,
        sort=args.sort,
        email=args.email,
    )

    def _run() -> None:
        try:
            run_pipeline(**pipeline_kwargs)
        except Exception:  # noqa: BLE001
            logging.exception("Pipeline failed")

    if args.schedule_at:
        logging.info(f"Scheduler started - pipeline will run every day at {args.schedule_at}")
        _run()
        schedule.every().day.at(args.schedule_at).do(_run)
        while True:
            try:
                schedule.run_pending()
            except Exception:  # noqa: BLE001
                logging.exception("Scheduler error:")
                time.sleep(60 * 60)
            time.sleep(1)
    else:
        try:
            run_pipeline(**pipeline_kwargs)
        except Exception:  # noqa: BLE001
            logging.exception("Pipeline failed")
            return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main_cli())
