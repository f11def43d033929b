"""Build finalized holiday records from the configured listing pages.

Pages are processed one at a time, in configuration order. A page that
cannot be fetched or parsed contributes nothing; records already collected
from earlier pages are kept. Within a page, entries keep their listing order
and are never merged or deduplicated, so the same holiday listed on two
pages appears twice.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Iterable, List, Optional, Sequence

from vn_holiday_feed.scraper import parse_utils
from vn_holiday_feed.scraper.holiday_page import FetchError, fetch_and_extract
from vn_holiday_feed.scraper.models import HolidayRecord, RawHolidayEntry, SourcePage

logger = logging.getLogger(__name__)

FetchFunc = Callable[[str], Sequence[RawHolidayEntry]]


def resolve_page_year(page: SourcePage, current_year: int) -> int:
    """Return the explicit page year, else the one found in its URL, else ``current_year``."""
    if page.year is not None:
        return page.year
    return parse_utils.year_from_url(page.url, current_year)


def records_from_entries(entries: Iterable[RawHolidayEntry], year: int) -> List[HolidayRecord]:
    """Convert one page's raw entries into records for ``year``.

    Entries without a date or name, and entries whose date text does not
    parse (header rows, decorative items), are skipped silently.
    """
    records: List[HolidayRecord] = []
    for entry in entries:
        if not entry.date_text or not entry.name:
            continue

        span = parse_utils.parse_date_text(entry.date_text, year)
        if span is None:
            logger.debug(f"Skipping unrecognised date text: {entry.date_text!r} ({entry.name})")
            continue

        records.append(
            HolidayRecord(
                name=entry.name,
                start_date=span.start,
                end_date=span.end,
                note=entry.note or "",
                year=year,
            )
        )
    return records


def build_holiday_records(
    pages: Iterable[SourcePage],
    fetch: FetchFunc = fetch_and_extract,
    current_year: Optional[int] = None,
) -> List[HolidayRecord]:
    """Fetch every page in order and concatenate their records."""
    if current_year is None:
        current_year = date.today().year

    all_records: List[HolidayRecord] = []
    for page in pages:
        year = resolve_page_year(page, current_year)
        logger.info(f"Scraping {year} holidays: {page.url}")
        try:
            entries = fetch(page.url)
            records = records_from_entries(entries, year)
        except FetchError as e:
            logger.warning(f"Fetch failed, skipping page: {e}")
            continue
        except Exception as e:
            logger.error(f"Failed to parse {page.url}: {e}")
            continue

        logger.info(f"Parsed {len(records)} holidays for {year}")
        all_records.extend(records)

    return all_records


def summarize_years(records: Iterable[HolidayRecord]) -> List[int]:
    """Distinct record years in first-seen order."""
    years: List[int] = []
    for record in records:
        if record.year not in years:
            years.append(record.year)
    return years
