"""Parsing helpers for the zh-CN holiday date fragments."""

from __future__ import annotations

import re
from datetime import date, timedelta
from typing import Optional

from vn_holiday_feed.scraper.models import DateSpan, ResolvedDate

# Source pages mix hyphen, en/em dash and (fullwidth) tilde between range ends.
RANGE_SEPARATORS = "-–—~～〜"

_RANGE_PATTERN = re.compile(
    rf"(\d+)月(\d+)日\s*[{RANGE_SEPARATORS}]\s*(?:(\d+)月)?(\d+)日"
)
_MONTH_DAY_PATTERN = re.compile(r"(\d+)月(\d+)日")
_URL_YEAR_PATTERN = re.compile(r"/(\d{4})/")


def clean_text(value: Optional[str]) -> Optional[str]:
    """Normalize whitespace and strip strings."""
    if value is None:
        return None
    return " ".join(value.split()).strip() or None


def lenient_date(year: int, month: int, day: int) -> date:
    """Build a date without rejecting out-of-range month/day values.

    Overflow rolls forward the way a plain calendar count would:
    February 30 becomes March 2 (or 1 in leap years), month 13 becomes
    January of the following year, day 0 is the last day of the previous month.
    """
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    return date(year, month, 1) + timedelta(days=day - 1)


def parse_month_day(text: Optional[str]) -> Optional[ResolvedDate]:
    """Return the first ``<M>月<D>日`` in ``text``, e.g. "4月26日 (27日补假)" -> 4/26."""
    if not text:
        return None
    match = _MONTH_DAY_PATTERN.search(text)
    if not match:
        return None
    return ResolvedDate(month=int(match.group(1)), day=int(match.group(2)))


def parse_date_text(date_text: Optional[str], year: int) -> Optional[DateSpan]:
    """Convert a date fragment into an all-day span with an exclusive end.

    Ranges are tried first ("2月14日–2月22日", "9月1日–2日"); a missing end
    month means the start month. Otherwise the first single day is used.
    Returns None when nothing matches, or when the numbers are too large to
    form any calendar date ("99999月1日").
    """
    if not date_text:
        return None

    try:
        range_match = _RANGE_PATTERN.search(date_text)
        if range_match:
            start_month = int(range_match.group(1))
            start_day = int(range_match.group(2))
            end_month = int(range_match.group(3)) if range_match.group(3) else start_month
            end_day = int(range_match.group(4))

            start = lenient_date(year, start_month, start_day)
            last_day = lenient_date(year, end_month, end_day)
            return DateSpan(start=start, end=last_day + timedelta(days=1))

        resolved = parse_month_day(date_text)
        if resolved is None:
            return None

        start = lenient_date(year, resolved.month, resolved.day)
        return DateSpan(start=start, end=start + timedelta(days=1))
    except (ValueError, OverflowError):
        return None


def url_year(url: Optional[str]) -> Optional[int]:
    """Return the year in a ``/YYYY/`` path segment, if any."""
    match = _URL_YEAR_PATTERN.search(url or "")
    if match:
        return int(match.group(1))
    return None


def year_from_url(url: str, current_year: int) -> int:
    """Infer the listing year from the URL, else ``current_year``."""
    year = url_year(url)
    return current_year if year is None else year
