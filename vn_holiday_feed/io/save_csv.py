"""CSV export of finalized holiday records."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

import pandas as pd

from vn_holiday_feed import config
from vn_holiday_feed.scraper.models import HolidayRecord

CSV_COLUMNS = ["name", "start_date", "end_date", "note", "year"]


def prepare_rows_for_csv(records: Iterable[HolidayRecord]) -> List[dict]:
    return [
        {
            "name": record.name,
            "start_date": record.start_date.isoformat(),
            "end_date": record.end_date.isoformat(),
            "note": record.note or "",
            "year": record.year,
        }
        for record in records
    ]


def save_holidays_csv(records: Iterable[HolidayRecord], output_dir: Path) -> Path:
    """Save records to a CSV file, keeping their order (end_date is exclusive)."""
    prepared_rows = prepare_rows_for_csv(records)
    if not prepared_rows:
        raise RuntimeError("No rows to save.")

    df = pd.DataFrame(prepared_rows, columns=CSV_COLUMNS)

    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / config.CSV_FILENAME
    df.to_csv(output_path, index=False)
    return output_path
