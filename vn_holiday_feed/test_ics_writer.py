"""Tests for the calendar, landing page and CSV writers."""

from __future__ import annotations

from datetime import date, datetime

import pandas as pd
import pytest
import pytz
from icalendar import Calendar

from vn_holiday_feed import config
from vn_holiday_feed.io import ics_writer, index_page, save_csv
from vn_holiday_feed.scraper.models import HolidayRecord

GENERATED_AT = datetime(2026, 10, 19, 3, 0, tzinfo=pytz.utc)


def _records():
    return [
        HolidayRecord("元旦", date(2026, 1, 1), date(2026, 1, 2), "公共假日", 2026),
        HolidayRecord("春节", date(2026, 2, 14), date(2026, 2, 23), "", 2026),
        HolidayRecord("元旦", date(2025, 1, 1), date(2025, 1, 2), "", 2025),
    ]


def _events(ics_bytes):
    cal = Calendar.from_ical(ics_bytes)
    return cal, [c for c in cal.walk() if c.name == "VEVENT"]


def test_calendar_metadata_is_constant():
    cal, _ = _events(ics_writer.render_ics(_records(), GENERATED_AT))

    assert str(cal.get("prodid")) == config.CALENDAR_PRODID
    assert str(cal.get("x-wr-calname")) == config.CALENDAR_NAME
    assert str(cal.get("x-wr-timezone")) == "Asia/Ho_Chi_Minh"
    assert str(cal.get("version")) == "2.0"


def test_events_are_all_day_with_exclusive_end():
    _, events = _events(ics_writer.render_ics(_records(), GENERATED_AT))

    assert len(events) == 3
    spring = events[1]
    assert str(spring.get("summary")) == "🇻🇳 春节"
    assert spring.decoded("dtstart") == date(2026, 2, 14)
    assert spring.decoded("dtend") == date(2026, 2, 23)
    assert not isinstance(spring.decoded("dtstart"), datetime), "All-day events must use DATE values"


def test_event_description_uses_note_or_empty():
    _, events = _events(ics_writer.render_ics(_records(), GENERATED_AT))

    assert str(events[0].get("description")) == "公共假日"
    assert str(events[1].get("description", "")) == ""


def test_events_keep_record_order_and_unique_uids():
    _, events = _events(ics_writer.render_ics(_records(), GENERATED_AT))

    assert [e.decoded("dtstart") for e in events] == [r.start_date for r in _records()]
    uids = [str(e.get("uid")) for e in events]
    assert len(set(uids)) == len(uids)
    assert uids[0].startswith("2026-20260101-")
    assert uids[0].endswith("@vietnam-holidays")


def test_save_ics_writes_file(tmp_path):
    output_path = ics_writer.save_ics(_records(), tmp_path / "docs")

    assert output_path.name == "vietnam-holidays.ics"
    assert output_path.read_bytes().startswith(b"BEGIN:VCALENDAR")


def test_index_page_lists_count_and_years(tmp_path):
    output_path = index_page.save_index_html(_records(), tmp_path, updated_on=date(2026, 10, 19))
    page = output_path.read_text(encoding="utf-8")

    assert "共 3 个节假日 (2026, 2025 年)" in page
    assert 'href="vietnam-holidays.ics"' in page
    assert "上次更新: 2026-10-19" in page


def test_save_holidays_csv_keeps_order(tmp_path):
    output_path = save_csv.save_holidays_csv(_records(), tmp_path)
    df = pd.read_csv(output_path, keep_default_na=False)

    assert list(df.columns) == save_csv.CSV_COLUMNS
    assert list(df["name"]) == ["元旦", "春节", "元旦"]
    assert list(df["end_date"]) == ["2026-01-02", "2026-02-23", "2025-01-02"]
    assert list(df["year"]) == [2026, 2026, 2025]


def test_save_holidays_csv_rejects_empty(tmp_path):
    with pytest.raises(RuntimeError):
        save_csv.save_holidays_csv([], tmp_path)


def test_uids_survive_upstream_rows_being_added():
    """Inserting a row before an event must not change that event's UID."""
    records = _records()
    inserted = [HolidayRecord("新增节日", date(2025, 12, 31), date(2026, 1, 1), "", 2026)] + records

    _, before = _events(ics_writer.render_ics(records, GENERATED_AT))
    _, after = _events(ics_writer.render_ics(inserted, GENERATED_AT))

    assert [str(e.get("uid")) for e in before] == [str(e.get("uid")) for e in after[1:]]


def test_identical_records_get_distinct_uids():
    record = _records()[0]
    _, events = _events(ics_writer.render_ics([record, record], GENERATED_AT))

    first, second = (str(e.get("uid")) for e in events)
    assert first == ics_writer.event_uid(record)
    assert second == ics_writer.event_uid(record, 1)
    assert first != second
