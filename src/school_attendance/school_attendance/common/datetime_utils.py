from __future__ import annotations

from datetime import date, datetime

from ..core.constants import LIVE_KEY_DATE_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, LIVE_KEY_DATE_FORMAT).date()


def format_iso_date(value: date) -> str:
    return value.strftime(LIVE_KEY_DATE_FORMAT)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def epoch_millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)
