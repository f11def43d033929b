"""
HTTP server for the Vietnam holiday iCal feed.

Serves the last successfully generated calendar from an in-memory cache and
refreshes it on startup, every Monday at 03:00 (Asia/Ho_Chi_Minh) and on
demand through ``POST /update``. A refresh that yields no holidays, or fails
outright, leaves the previous calendar in place.
"""

from __future__ import annotations

import asyncio
import html
import logging
import threading
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager, suppress
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional, Sequence

import pytz
from dateutil.relativedelta import relativedelta
from fastapi import FastAPI
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from vn_holiday_feed import config
from vn_holiday_feed.io.ics_writer import render_ics
from vn_holiday_feed.scraper.holiday_page import fetch_and_extract
from vn_holiday_feed.scraper.holidays import FetchFunc, build_holiday_records
from vn_holiday_feed.scraper.models import SourcePage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeedSnapshot:
    """Immutable view of the cache at one point in time."""

    content: Optional[bytes] = None
    last_update: Optional[datetime] = None
    holiday_count: int = 0

    @property
    def has_data(self) -> bool:
        return self.content is not None


class FeedCache:
    """Last known good calendar, shared between request handlers and the refresher."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._snapshot = FeedSnapshot()

    def snapshot(self) -> FeedSnapshot:
        with self._lock:
            return self._snapshot

    def store(self, content: bytes, holiday_count: int, updated_at: Optional[datetime] = None) -> FeedSnapshot:
        snapshot = FeedSnapshot(
            content=content,
            last_update=updated_at or datetime.now(pytz.utc),
            holiday_count=holiday_count,
        )
        with self._lock:
            self._snapshot = snapshot
        return snapshot


def refresh_feed(
    cache: FeedCache,
    pages: Optional[Sequence[SourcePage]] = None,
    fetch: FetchFunc = fetch_and_extract,
    current_year: Optional[int] = None,
) -> bool:
    """Scrape all pages and replace the cached calendar if anything was found."""
    logger.info("Refreshing holiday feed...")
    try:
        records = build_holiday_records(
            config.SOURCE_PAGES if pages is None else pages,
            fetch=fetch,
            current_year=current_year,
        )
        if not records:
            logger.warning("No holidays scraped, keeping previous calendar")
            return False
        snapshot = cache.store(render_ics(records), len(records))
    except Exception as e:
        logger.error(f"Feed refresh failed: {e}")
        return False

    logger.info(f"Feed refreshed: {snapshot.holiday_count} holidays at {snapshot.last_update.isoformat()}")
    return True


def next_refresh_time(now: datetime) -> datetime:
    """Next weekly refresh strictly after ``now``, in the feed timezone."""
    tz = pytz.timezone(config.FEED_TIMEZONE)
    local_now = now.astimezone(tz).replace(tzinfo=None)
    candidate = local_now + relativedelta(
        weekday=config.REFRESH_WEEKDAY,
        hour=config.REFRESH_HOUR,
        minute=0,
        second=0,
        microsecond=0,
    )
    if candidate <= local_now:
        candidate += relativedelta(weeks=1)
    return tz.localize(candidate)


def schedule_after(now: datetime, last_run: Optional[datetime] = None) -> datetime:
    """Next refresh slot, never at or before the slot that already ran."""
    if last_run is not None and now < last_run:
        now = last_run
    return next_refresh_time(now)


async def _weekly_refresh_loop(refresh: Callable[[], bool]) -> None:
    last_run: Optional[datetime] = None
    while True:
        now = datetime.now(pytz.utc)
        # asyncio.sleep may wake slightly before the wall-clock slot.
        run_at = schedule_after(now, last_run)
        logger.info(f"Next scheduled refresh at {run_at.isoformat()}")
        await asyncio.sleep(max((run_at - now).total_seconds(), 0))
        logger.info("Starting weekly scheduled refresh")
        await asyncio.to_thread(refresh)
        last_run = run_at


def create_app(
    cache: Optional[FeedCache] = None,
    pages: Optional[Sequence[SourcePage]] = None,
    fetch: FetchFunc = fetch_and_extract,
    current_year: Optional[int] = None,
    refresh_on_startup: bool = True,
    schedule_refresh: bool = True,
) -> FastAPI:
    """Build the FastAPI app around a feed cache."""
    feed_cache = cache or FeedCache()

    def refresh() -> bool:
        return refresh_feed(feed_cache, pages=pages, fetch=fetch, current_year=current_year)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        if refresh_on_startup:
            await asyncio.to_thread(refresh)

        refresh_task = None
        if schedule_refresh:
            refresh_task = asyncio.create_task(_weekly_refresh_loop(refresh))
            logger.info(f"Weekly refresh scheduled (weekday {config.REFRESH_WEEKDAY}, {config.REFRESH_HOUR:02d}:00 {config.FEED_TIMEZONE})")

        try:
            yield
        finally:
            if refresh_task is not None:
                refresh_task.cancel()
                with suppress(asyncio.CancelledError):
                    await refresh_task

    app = FastAPI(title="Vietnam Holiday iCal Feed", lifespan=lifespan)
    app.state.feed_cache = feed_cache

    @app.get(f"/{config.ICS_FILENAME}")
    async def get_calendar() -> Response:
        snapshot = feed_cache.snapshot()
        if not snapshot.has_data:
            return PlainTextResponse("日历数据尚未就绪，请稍后再试", status_code=503)
        return Response(
            content=snapshot.content,
            media_type="text/calendar; charset=utf-8",
            headers={
                "Content-Disposition": f'attachment; filename="{config.ICS_FILENAME}"',
                "Cache-Control": f"public, max-age={config.ICS_CACHE_MAX_AGE}",
            },
        )

    @app.get("/health")
    async def health() -> dict[str, Any]:
        snapshot = feed_cache.snapshot()
        return {
            "status": "ok",
            "lastUpdate": snapshot.last_update.isoformat() if snapshot.last_update else None,
            "hasData": snapshot.has_data,
        }

    @app.get("/", response_class=HTMLResponse)
    async def index() -> str:
        snapshot = feed_cache.snapshot()
        last_update = snapshot.last_update.isoformat() if snapshot.last_update else "尚未更新"
        return (
            f"<h1>{config.EVENT_EMBLEM} {html.escape(config.CALENDAR_NAME)} iCal 订阅</h1>\n"
            f'<p>订阅链接: <a href="/{config.ICS_FILENAME}">/{config.ICS_FILENAME}</a></p>\n'
            f"<p>上次更新: {last_update}</p>\n"
            f'<p>数据来源: <a href="{config.SOURCE_SITE_URL}">holidays-calendar.net</a></p>\n'
            "<p>每周自动抓取更新一次</p>\n"
        )

    @app.post("/update")
    async def update() -> dict[str, Any]:
        await asyncio.to_thread(refresh)
        snapshot = feed_cache.snapshot()
        return {
            "status": "updated",
            "lastUpdate": snapshot.last_update.isoformat() if snapshot.last_update else None,
        }

    return app
