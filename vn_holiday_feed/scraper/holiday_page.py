"""HTTP fetching and item extraction for holidays-calendar.net listing pages."""

from __future__ import annotations

import logging
from typing import List, Optional

import requests
from bs4 import BeautifulSoup

from vn_holiday_feed import config
from vn_holiday_feed.scraper import parse_utils
from vn_holiday_feed.scraper.models import RawHolidayEntry

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": config.REQUEST_USER_AGENT,
    "Accept-Language": config.ACCEPT_LANGUAGE,
}


class FetchError(Exception):
    """Raised when a listing page cannot be retrieved."""

    def __init__(self, url: str, reason: str, status_code: Optional[int] = None):
        self.url = url
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"{reason} for {url}")


def fetch_page_html(url: str, session: Optional[requests.Session] = None) -> str:
    """Fetch a listing page and return its HTML.

    Raises:
        FetchError: on transport failure or a non-success status.
    """
    http = session or requests
    try:
        response = http.get(url, headers=DEFAULT_HEADERS, timeout=config.REQUEST_TIMEOUT)
    except requests.RequestException as e:
        raise FetchError(url, f"Request failed: {e}") from e

    if not response.ok:
        raise FetchError(url, f"HTTP {response.status_code}", status_code=response.status_code)

    # Pages are UTF-8 but not always declared as such.
    if "charset" not in response.headers.get("Content-Type", "").lower():
        response.encoding = "utf-8"
    return response.text


def extract_entries(html: str) -> List[RawHolidayEntry]:
    """Pull the date, name and note text out of every listing item."""
    soup = BeautifulSoup(html, "lxml")
    entries: List[RawHolidayEntry] = []

    for item in soup.select(config.ITEM_SEL):
        entries.append(
            RawHolidayEntry(
                date_text=parse_utils.clean_text(_field_text(item, config.DATE_SEL)) or "",
                name=_field_text(item, config.NAME_SEL),
                note=_field_text(item, config.NOTE_SEL),
            )
        )

    return entries


def fetch_and_extract(url: str) -> List[RawHolidayEntry]:
    """Fetch ``url`` and return its raw holiday entries."""
    html = fetch_page_html(url)
    entries = extract_entries(html)
    logger.debug(f"Extracted {len(entries)} items from {url}")
    return entries


def _field_text(item, selector: str) -> str:
    node = item.select_one(selector)
    if node is None:
        return ""
    # Trim only the ends; notes may span several lines.
    return node.get_text().strip()
