from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date, datetime

from ..core.exceptions import InvalidInputError

_MONTH_RE = re.compile(r"(\d{4})-(\d{2})", re.ASCII)


@dataclass(frozen=True)
class MonthWindow:
    """Inclusive calendar window [start, end] of one month."""

    month: str
    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except (AttributeError, ValueError):
        raise InvalidInputError(f"Invalid date {value!r} (expected YYYY-MM-DD)")


def parse_month(value: str) -> tuple[int, int]:
    """Parse a "YYYY-MM" key into (year, month)."""
    m = _MONTH_RE.fullmatch(value) if isinstance(value, str) else None
    if not m:
        raise InvalidInputError(f"Invalid month {value!r} (expected YYYY-MM)")
    year, month = int(m.group(1)), int(m.group(2))
    if not 1 <= month <= 12 or year < 1:
        raise InvalidInputError(f"Invalid month {value!r} (expected YYYY-MM)")
    return year, month


def month_window(value: str) -> MonthWindow:
    year, month = parse_month(value)
    last_day = calendar.monthrange(year, month)[1]
    return MonthWindow(month=value, start=date(year, month, 1), end=date(year, month, last_day))


def month_key(day: date) -> str:
    return day.strftime("%Y-%m")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch it.
    """
    return datetime.now()
