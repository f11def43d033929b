"""iCalendar output for finalized holiday records."""

from __future__ import annotations

import hashlib
import logging
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

import pytz
from icalendar import Calendar, Event

from vn_holiday_feed import config
from vn_holiday_feed.scraper.models import HolidayRecord

logger = logging.getLogger(__name__)


def event_summary(name: str) -> str:
    return f"{config.EVENT_EMBLEM} {name}"


def event_uid(record: HolidayRecord, occurrence: int = 0) -> str:
    """Stable UID from year, start date and name; ``occurrence`` separates repeats."""
    name_hash = hashlib.sha1(record.name.encode("utf-8")).hexdigest()[:10]
    uid = f"{record.year}-{record.start_date:%Y%m%d}-{name_hash}"
    if occurrence:
        uid = f"{uid}-{occurrence}"
    return f"{uid}@{config.UID_DOMAIN}"


def make_event(record: HolidayRecord, occurrence: int, stamp: datetime) -> Event:
    """Render one record as an all-day VEVENT (DTEND exclusive)."""
    event = Event()
    event.add("uid", event_uid(record, occurrence))
    event.add("dtstamp", stamp)
    event.add("summary", event_summary(record.name))
    event.add("description", record.note or "")
    event.add("dtstart", record.start_date)
    event.add("dtend", record.end_date)
    event.add("url", config.SOURCE_SITE_URL)
    return event


def build_calendar(
    records: Iterable[HolidayRecord],
    generated_at: Optional[datetime] = None,
) -> Calendar:
    """Build the feed calendar; metadata is constant, events keep record order."""
    stamp = generated_at or datetime.now(pytz.utc)

    cal = Calendar()
    cal.add("prodid", config.CALENDAR_PRODID)
    cal.add("version", "2.0")
    cal.add("calscale", "GREGORIAN")
    cal.add("method", "PUBLISH")
    cal.add("name", config.CALENDAR_NAME)
    cal.add("x-wr-calname", config.CALENDAR_NAME)
    cal.add("x-wr-caldesc", config.CALENDAR_DESCRIPTION)
    cal.add("x-wr-timezone", config.FEED_TIMEZONE)
    cal.add("url", config.SOURCE_SITE_URL)

    # Identical records are kept, so repeats get a counter suffix.
    seen: Counter = Counter()
    for record in records:
        key = (record.year, record.start_date, record.name)
        cal.add_component(make_event(record, seen[key], stamp))
        seen[key] += 1

    return cal


def render_ics(
    records: Iterable[HolidayRecord],
    generated_at: Optional[datetime] = None,
) -> bytes:
    return build_calendar(records, generated_at).to_ical()


def save_ics(records: Iterable[HolidayRecord], output_dir: Path) -> Path:
    """Write the feed to ``output_dir`` and return the file path."""
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / config.ICS_FILENAME
    output_path.write_bytes(render_ics(records))
    logger.info(f"Wrote calendar to {output_path}")
    return output_path
