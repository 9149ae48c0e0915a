"""Date manipulation utilities"""

from datetime import date
from typing import Optional


def months_between(start: date, end: date) -> int:
    """Whole months from start to end; a partial trailing month counts as one"""
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if end.day > start.day:
        months += 1
    return months


def parse_optional_date(value: Optional[str]) -> Optional[date]:
    """Parse YYYY-MM-DD or YYYY-MM (first of month); empty values give None"""
    if not value:
        return None
    if len(value) == 7:
        return date.fromisoformat(f"{value}-01")
    return date.fromisoformat(value[:10])
