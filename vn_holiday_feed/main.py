"""CLI orchestrator for the Vietnam holiday iCal feed."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Iterable, List

PROJECT_ROOT = Path(__file__).resolve().parent
PARENT_ROOT = PROJECT_ROOT.parent

if str(PARENT_ROOT) not in sys.path:
    sys.path.insert(0, str(PARENT_ROOT))

from vn_holiday_feed import config  # noqa: E402
from vn_holiday_feed.io import ics_writer, index_page, save_csv  # noqa: E402
from vn_holiday_feed.scraper import parse_utils  # noqa: E402
from vn_holiday_feed.scraper.holidays import build_holiday_records, summarize_years  # noqa: E402
from vn_holiday_feed.scraper.models import HolidayRecord, SourcePage  # noqa: E402

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def source_pages(year: int | None = None) -> List[SourcePage]:
    """Configured pages; ``year`` pins the year of the un-dated (current) page."""
    if year is None:
        return list(config.SOURCE_PAGES)
    pages = []
    for page in config.SOURCE_PAGES:
        if page.year is None and parse_utils.url_year(page.url) is None:
            page = SourcePage(url=page.url, year=year)
        pages.append(page)
    return pages


def run_generate(output_dir: Path, pages: List[SourcePage], write_csv: bool = False) -> List[HolidayRecord]:
    """Scrape all pages and write the .ics file plus its landing page."""
    logger.info(f"Generating Vietnam holiday calendar at {date.today().isoformat()}")
    records = build_holiday_records(pages)
    if not records:
        logger.error("No holidays scraped from any page")
        raise SystemExit(1)

    ics_path = ics_writer.save_ics(records, output_dir)
    index_page.save_index_html(records, output_dir)
    if write_csv:
        csv_path = save_csv.save_holidays_csv(records, output_dir)
        logger.info(f"Saved {len(records)} rows to {csv_path}")

    years = ", ".join(str(year) for year in summarize_years(records))
    logger.info(f"Generated {len(records)} holidays ({years}) to {ics_path}")
    return records


def run_serve(host: str, port: int, pages: List[SourcePage]) -> None:
    import uvicorn

    from vn_holiday_feed.server import create_app

    logger.info(f"Starting Vietnam holiday iCal server on port {port}")
    uvicorn.run(create_app(pages=pages), host=host, port=port)


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--mode",
        choices=("generate", "serve"),
        default="generate",
        help="Write the calendar once, or serve it over HTTP with weekly refresh.",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=config.OUTPUT_DIR,
        help="Directory for the generated .ics and index.html.",
    )
    parser.add_argument(
        "--csv",
        action="store_true",
        help="Also export the records as CSV.",
    )
    parser.add_argument(
        "--year",
        type=int,
        help="Year of the current listing page (defaults to this year).",
    )
    parser.add_argument("--host", default=config.SERVER_HOST)
    parser.add_argument("--port", type=int, default=config.SERVER_PORT)
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )
    return parser.parse_args(argv)


def main(argv: Iterable[str] | None = None) -> None:
    args = parse_args(argv)
    configure_logging(args.verbose)
    pages = source_pages(args.year)

    if args.mode == "serve":
        run_serve(args.host, args.port, pages)
        return

    run_generate(args.output_dir, pages, write_csv=args.csv)


if __name__ == "__main__":
    main()
