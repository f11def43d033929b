"""
Vietnam Holiday Feed - iCal subscription feed for Vietnamese public holidays

Scrapes the zh-CN holiday listing pages on holidays-calendar.net, normalizes
the localized date fragments ("2月14日–2月22日", "9月1日–2日", "1月1日") into
all-day event boundaries and republishes them as an .ics calendar, either as
a one-shot file or from a small HTTP server that refreshes weekly.

Usage:
    from vn_holiday_feed import config
    from vn_holiday_feed.scraper.holidays import build_holiday_records
    from vn_holiday_feed.io.ics_writer import render_ics

    records = build_holiday_records(config.SOURCE_PAGES)
    ics_bytes = render_ics(records)
"""

__version__ = "0.1.0"
