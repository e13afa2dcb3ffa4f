# app/utils/periods.py
import calendar
from datetime import date
from typing import Optional, Tuple


def month_start(day: Optional[date] = None) -> date:
    """First day of ``day``'s month (today's month by default)."""
    day = day or date.today()
    return date(day.year, day.month, 1)


def month_bounds(day: date) -> Tuple[date, date]:
    """Inclusive first and last day of ``day``'s month."""
    last_dom = calendar.monthrange(day.year, day.month)[1]
    return date(day.year, day.month, 1), date(day.year, day.month, last_dom)


def parse_month(value: Optional[str]) -> date:
    """
    Parse ``YYYY-MM`` (or a full ``YYYY-MM-DD``) into the first day of that
    month. ``None`` means the current month.
    """
    if not value:
        return month_start()
    parts = value.strip().split("-")
    if len(parts) not in (2, 3):
        raise ValueError(f"Expected YYYY-MM, got {value!r}")
    year, month = int(parts[0]), int(parts[1])
    return date(year, month, 1)
