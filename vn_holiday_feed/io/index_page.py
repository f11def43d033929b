"""Static landing page published next to the .ics file."""

from __future__ import annotations

import html
import logging
from datetime import date
from pathlib import Path
from typing import Optional, Sequence

from vn_holiday_feed import config
from vn_holiday_feed.scraper.holidays import summarize_years
from vn_holiday_feed.scraper.models import HolidayRecord

logger = logging.getLogger(__name__)

_PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="zh-CN">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{emblem} {name} iCal 订阅</title>
  <style>
    body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif; background: #16213e; color: #e0e0e0; min-height: 100vh; display: flex; align-items: center; justify-content: center; margin: 0; }}
    .card {{ background: rgba(255,255,255,0.08); border-radius: 20px; padding: 48px; max-width: 520px; width: 90%; text-align: center; }}
    .subscribe-btn {{ display: inline-block; background: #e94560; color: #fff; text-decoration: none; padding: 14px 32px; border-radius: 12px; font-weight: 600; }}
    .info {{ margin-top: 24px; font-size: 13px; color: #888; line-height: 1.8; }}
    .info a {{ color: #e94560; text-decoration: none; }}
    .update-time {{ margin-top: 16px; font-size: 12px; color: #666; }}
  </style>
</head>
<body>
  <div class="card">
    <h1>{emblem} {name}</h1>
    <p>iCal 日历订阅</p>
    <a class="subscribe-btn" href="{ics_filename}">📅 下载 / 订阅日历</a>
    <div class="info">
      <p>共 {count} 个节假日 ({years} 年)</p>
      <p>数据来源: <a href="{source_url}" target="_blank">holidays-calendar.net</a></p>
      <p>每周自动更新</p>
    </div>
    <p class="update-time">上次更新: {updated_on}</p>
  </div>
</body>
</html>
"""


def render_index_html(records: Sequence[HolidayRecord], updated_on: date) -> str:
    years = ", ".join(str(year) for year in summarize_years(records))
    return _PAGE_TEMPLATE.format(
        emblem=config.EVENT_EMBLEM,
        name=html.escape(config.CALENDAR_NAME),
        ics_filename=config.ICS_FILENAME,
        count=len(records),
        years=years,
        source_url=config.SOURCE_SITE_URL,
        updated_on=updated_on.isoformat(),
    )


def save_index_html(
    records: Sequence[HolidayRecord],
    output_dir: Path,
    updated_on: Optional[date] = None,
) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / config.INDEX_FILENAME
    output_path.write_text(
        render_index_html(records, updated_on or date.today()),
        encoding="utf-8",
    )
    logger.info(f"Wrote landing page to {output_path}")
    return output_path
