"""
utils/dates.py
--------------
Normalization of date inputs coming from API payloads.

Clients send dates either as ``YYYY-MM-DD`` or as ``MM/DD/YYYY``.
Both are normalized to ``YYYY-MM-DD`` before they reach the database.
Anything else is handed through untouched and left for PostgreSQL to accept
or reject.
"""

import re
from datetime import date, datetime
from typing import Optional, Union

from dateutil.parser import isoparse

DateLike = Union[date, datetime, str]

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_US_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")

DEFAULT_TIME = "00:00:00"


def normalize_date(value: Optional[DateLike]) -> Optional[DateLike]:
    """
    Normalize a date input to ``YYYY-MM-DD``.

    Args:
        value: A date/datetime object or a string in ISO or US format.

    Returns:
        The normalized string, None for empty input, or the input
        unchanged when the format is not recognized.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()

    text = str(value).strip()
    if not text:
        return None
    if _ISO_DATE.match(text):
        return text

    match = _US_DATE.match(text)
    if match:
        month, day, year = match.groups()
        return f"{year}-{month.zfill(2)}-{day.zfill(2)}"

    return value


def normalize_timestamp(value: Optional[DateLike]) -> Optional[DateLike]:
    """
    Normalize a timestamp input to ``YYYY-MM-DD HH:MM:SS``.

    Plain dates (either format) get midnight as their time. Full ISO-8601
    datetimes such as ``2025-04-30T13:45:00Z`` are re-rendered without the
    ``T`` and fractional seconds.
    """
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M:%S")

    normalized = normalize_date(value)
    if normalized is None:
        return None
    if isinstance(normalized, str) and _ISO_DATE.match(normalized):
        return f"{normalized} {DEFAULT_TIME}"

    try:
        return isoparse(str(normalized)).strftime("%Y-%m-%d %H:%M:%S")
    except (ValueError, OverflowError):
        return value


def to_iso(value: Optional[DateLike]) -> Optional[str]:
    """Render a date/datetime read from the database for JSON output."""
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)
