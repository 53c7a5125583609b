"""
Utility package initialization and exports
"""

from .date_utils import (
    DateUtilsError,
    academic_year_for,
    academic_year_range,
    format_academic_year,
    is_valid_academic_year,
    now_utc,
    parse_academic_year,
    today_utc,
)

from .formatters import (
    collect_headers,
    flatten_record,
    round_mean,
    round_rate,
    to_csv,
    to_json,
)

__all__ = [
    "DateUtilsError",
    "academic_year_for",
    "academic_year_range",
    "format_academic_year",
    "is_valid_academic_year",
    "now_utc",
    "parse_academic_year",
    "today_utc",
    "collect_headers",
    "flatten_record",
    "round_mean",
    "round_rate",
    "to_csv",
    "to_json",
]
