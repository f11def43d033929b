"""Tests for the one-shot generate mode of the CLI."""

from __future__ import annotations

from datetime import date

import pytest

from vn_holiday_feed import main
from vn_holiday_feed.scraper.models import HolidayRecord, SourcePage


def test_generate_fails_when_nothing_scraped(monkeypatch, tmp_path):
    monkeypatch.setattr(main, "build_holiday_records", lambda pages: [])

    with pytest.raises(SystemExit) as excinfo:
        main.run_generate(tmp_path, [SourcePage(url="https://example.invalid/")])

    assert excinfo.value.code == 1
    assert not (tmp_path / "vietnam-holidays.ics").exists()


def test_generate_writes_calendar_and_landing_page(monkeypatch, tmp_path):
    records = [HolidayRecord("元旦", date(2026, 1, 1), date(2026, 1, 2), "", 2026)]
    monkeypatch.setattr(main, "build_holiday_records", lambda pages: records)

    main.run_generate(tmp_path, [], write_csv=True)

    assert (tmp_path / "vietnam-holidays.ics").exists()
    assert (tmp_path / "index.html").exists()
    assert (tmp_path / "vietnam-holidays.csv").exists()


def test_source_pages_pins_only_undated_page():
    pages = main.source_pages(2030)

    assert pages[0].year == 2030
    assert pages[1].year is None, "Pages with a year in the URL keep it"
    assert main.source_pages() == list(main.config.SOURCE_PAGES)


def test_parse_args_defaults():
    args = main.parse_args([])
    assert args.mode == "generate"
    assert args.csv is False
