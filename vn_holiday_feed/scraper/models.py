"""Shared data models for the Vietnam holiday scraper."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(slots=True)
class SourcePage:
    """A holiday listing page; ``year`` overrides the one inferred from the URL."""

    url: str
    year: Optional[int] = None


@dataclass(slots=True)
class RawHolidayEntry:
    """Text fields extracted from one listing item, before any parsing."""

    date_text: str
    name: str
    note: str = ""


@dataclass(frozen=True, slots=True)
class ResolvedDate:
    month: int
    day: int


@dataclass(frozen=True, slots=True)
class DateSpan:
    """All-day span; ``end`` is exclusive (the day after the last holiday day)."""

    start: date
    end: date


@dataclass(frozen=True, slots=True)
class HolidayRecord:
    """Finalized holiday ready for calendar serialization."""

    name: str
    start_date: date
    end_date: date
    note: str
    year: int
