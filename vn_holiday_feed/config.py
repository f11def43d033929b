"""Configuration constants for the Vietnam holiday iCal feed."""

from __future__ import annotations

import os
from pathlib import Path

from vn_holiday_feed.scraper.models import SourcePage

# ---------------------------------------------------------------------------
# Project metadata
# ---------------------------------------------------------------------------

PROJECT_ROOT = Path(__file__).resolve().parent

# ---------------------------------------------------------------------------
# Source pages
# ---------------------------------------------------------------------------

SOURCE_SITE_URL = "https://holidays-calendar.net/calendar_zh_cn/vietnam_zh_cn.html"

# Order matters: records are concatenated page by page.
# The un-dated page always lists the current year.
SOURCE_PAGES = [
    SourcePage(url=SOURCE_SITE_URL),
    SourcePage(url="https://holidays-calendar.net/2025/calendar_zh_cn/vietnam_zh_cn.html"),
]

# ---------------------------------------------------------------------------
# HTTP fetching
# ---------------------------------------------------------------------------

REQUEST_USER_AGENT = os.getenv(
    "VN_HOLIDAY_USER_AGENT",
    "Mozilla/5.0 (compatible; VietnamHolidayBot/1.0)",
)
ACCEPT_LANGUAGE = "zh-CN,zh;q=0.9"
REQUEST_TIMEOUT = float(os.getenv("VN_HOLIDAY_REQUEST_TIMEOUT", "30"))

# CSS selectors for the holiday listing (div.details > span.hol-item)
ITEM_SEL = ".hol-item"
DATE_SEL = ".hol-date"
NAME_SEL = ".hol-name"
NOTE_SEL = ".hol-info"

# ---------------------------------------------------------------------------
# Calendar metadata
# ---------------------------------------------------------------------------

CALENDAR_NAME = "越南法定节假日"
CALENDAR_DESCRIPTION = "越南法定节假日日历 - 数据来源: holidays-calendar.net"
CALENDAR_PRODID = "-//vietnam-holidays//ical-feed//ZH"
FEED_TIMEZONE = "Asia/Ho_Chi_Minh"
EVENT_EMBLEM = "🇻🇳"
UID_DOMAIN = "vietnam-holidays"

# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

OUTPUT_DIR = Path(os.getenv("VN_HOLIDAY_OUTPUT_DIR", str(PROJECT_ROOT.parent / "docs")))
ICS_FILENAME = "vietnam-holidays.ics"
INDEX_FILENAME = "index.html"
CSV_FILENAME = "vietnam-holidays.csv"

# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------

SERVER_HOST = os.getenv("HOST", "0.0.0.0")
SERVER_PORT = int(os.getenv("PORT", "8080"))
ICS_CACHE_MAX_AGE = 3600

# Weekly refresh: Monday 03:00 in FEED_TIMEZONE
REFRESH_WEEKDAY = 0
REFRESH_HOUR = 3
