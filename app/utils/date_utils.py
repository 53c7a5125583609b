# app/utils/date_utils.py
"""
Date and academic-year helpers.

Academic years are written ``YYYY/YYYY`` where the second year is the
first plus one. A timestamp belongs to the academic year that started on
the first day of the configured start month on or before it.
"""

import re
from datetime import date, datetime, timezone
from typing import List

UTC = timezone.utc

ACADEMIC_YEAR_PATTERN = re.compile(r"^(\d{4})/(\d{4})$")


class DateUtilsError(ValueError):
    """Raised for malformed date or academic-year input."""
    pass


def now_utc() -> datetime:
    """Return current UTC datetime (timezone-aware)."""
    return datetime.now(UTC)


def today_utc() -> date:
    """Return today's date in UTC."""
    return now_utc().date()


def parse_academic_year(value: str) -> int:
    """
    Parse an academic year label into its starting calendar year.

    Raises:
        DateUtilsError: If the label is not ``YYYY/YYYY`` with consecutive years
    """
    match = ACADEMIC_YEAR_PATTERN.match(value or "")
    if not match:
        raise DateUtilsError(f"Academic year must look like YYYY/YYYY, got {value!r}")

    start, end = int(match.group(1)), int(match.group(2))
    if end != start + 1:
        raise DateUtilsError(f"Academic year must span consecutive years, got {value!r}")
    return start


def is_valid_academic_year(value: str) -> bool:
    try:
        parse_academic_year(value)
    except DateUtilsError:
        return False
    return True


def format_academic_year(start_year: int) -> str:
    return f"{start_year}/{start_year + 1}"


def academic_year_for(moment: datetime, start_month: int = 10) -> str:
    """Academic year label containing ``moment``."""
    if not 1 <= start_month <= 12:
        raise DateUtilsError(f"start_month must be 1-12, got {start_month}")
    start = moment.year if moment.month >= start_month else moment.year - 1
    return format_academic_year(start)


def academic_year_range(first: str, last: str) -> List[str]:
    """Contiguous academic years from ``first`` to ``last`` inclusive."""
    start, end = parse_academic_year(first), parse_academic_year(last)
    return [format_academic_year(year) for year in range(start, end + 1)]
