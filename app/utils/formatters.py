"""
Data formatting utilities for open-data exports.

Records are plain JSON-compatible dictionaries. CSV output flattens
nested mappings into dotted column names; JSON output is a direct dump.
"""

import csv
import io
import json
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence

LIST_SEPARATOR = ", "


def _scalar(value: Any) -> Any:
    """Render a leaf value for a CSV cell."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    return value


def flatten_record(record: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    """
    Flatten nested mappings into dotted-path keys.

    Lists of scalars become one joined cell; lists that hold mappings are
    flattened by position (``items.0.name``).
    """
    flat: Dict[str, Any] = {}

    for key, value in record.items():
        column = f"{prefix}{key}"

        if isinstance(value, dict):
            if value:
                flat.update(flatten_record(value, prefix=f"{column}."))
            else:
                flat[column] = ""
        elif isinstance(value, (list, tuple)):
            if any(isinstance(item, dict) for item in value):
                for index, item in enumerate(value):
                    if isinstance(item, dict):
                        flat.update(flatten_record(item, prefix=f"{column}.{index}."))
                    else:
                        flat[f"{column}.{index}"] = _scalar(item)
            else:
                flat[column] = LIST_SEPARATOR.join(str(_scalar(item)) for item in value)
        else:
            flat[column] = _scalar(value)

    return flat


def collect_headers(rows: Iterable[Dict[str, Any]]) -> List[str]:
    """Union of row keys in first-seen order."""
    headers: Dict[str, None] = {}
    for row in rows:
        for key in row:
            headers.setdefault(key, None)
    return list(headers)


def to_csv(
    records: Sequence[Dict[str, Any]],
    delimiter: str = ",",
    default_headers: Optional[Sequence[str]] = None,
) -> str:
    """
    Serialize records to CSV text.

    Args:
        records: JSON-compatible dictionaries
        delimiter: Field delimiter
        default_headers: Header used when there are no records

    Returns:
        CSV document with one header row; empty string when there is
        neither a record nor a default header
    """
    rows = [flatten_record(record) for record in records]
    headers = collect_headers(rows) if rows else list(default_headers or [])
    if not headers:
        return ""

    buffer = io.StringIO()
    writer = csv.DictWriter(
        buffer,
        fieldnames=headers,
        delimiter=delimiter,
        restval="",
        quoting=csv.QUOTE_MINIMAL,
        lineterminator="\n",
    )
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue()


def to_json(payload: Any) -> str:
    """Serialize a payload to indented JSON text."""
    return json.dumps(payload, indent=2, default=str, ensure_ascii=False)


def round_rate(numerator: float, denominator: float) -> float:
    """
    Percentage rounded to two decimals.

    Zero when the denominator is zero; never above 100.
    """
    if denominator <= 0:
        return 0.0
    return min(round(numerator / denominator * 100, 2), 100.0)


def round_mean(values: Sequence[float]) -> Optional[float]:
    """Arithmetic mean rounded to two decimals, None for an empty sequence."""
    if not values:
        return None
    return round(sum(values) / len(values), 2)
