"""Calendar-date helpers pinned to a fixed time zone."""

from __future__ import annotations

import datetime as dt
from typing import Callable
from zoneinfo import ZoneInfo

from unari.config import TIMEZONE_NAME
from unari.constant import WEEKDAY_ABBREVIATIONS


class Clock:
    """Resolves "today" in one time zone; `now` is injectable for tests."""

    def __init__(self, tz_name: str = TIMEZONE_NAME, now: Callable[[dt.tzinfo], dt.datetime] | None = None) -> None:
        self.tz = ZoneInfo(tz_name)
        self._now = now or (lambda tz: dt.datetime.now(tz))

    def today(self) -> dt.date:
        return self._now(self.tz).astimezone(self.tz).date()


def shift_date(day: dt.date, delta_days: int) -> dt.date:
    """Move by whole calendar days; no wall-clock arithmetic, so DST never matters."""
    return day + dt.timedelta(days=delta_days)


def format_date(day: dt.date) -> str:
    """Render as e.g. ``"Su 18.10.2026"``."""
    return f"{WEEKDAY_ABBREVIATIONS[day.weekday()]} {day.day}.{day.month}.{day.year}"


DEFAULT_CLOCK = Clock()
