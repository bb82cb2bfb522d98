from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Sequence

import pytest

import drawdash


def epoch_ms(year: int, month: int, day: int) -> int:
    return int(datetime(year, month, day, tzinfo=timezone.utc).timestamp()) * 1000


def make_draw(date: Sequence[int], mains: Sequence[int], powerball: int, multiplier: Optional[int] = None) -> drawdash.DrawRecord:
    year, month, day = date
    return drawdash.DrawRecord(
        date_ms=epoch_ms(year, month, day),
        date_label=f"{datetime(year, month, day):%b} {day}, {year}",
        main_numbers=tuple(mains),
        powerball=powerball,
        multiplier=multiplier,
        main_sum=sum(mains),
    )


def make_day(date: Sequence[int], combined: int, socrata: Optional[int] = None, geohub: Optional[int] = None) -> drawdash.TrafficRecord:
    year, month, day = date
    return drawdash.TrafficRecord(
        date_ms=epoch_ms(year, month, day),
        date_label=f"{datetime(year, month, day):%b} {day}, {year}",
        socrata_users=socrata,
        geohub_users=geohub,
        combined_users=combined,
    )


@pytest.fixture
def data_dir():
    return drawdash.APP_DIR / "data"
