"""
Date normalization - every date cell becomes a DD-MM-YYYY string or "".
"""
import logging
import math
import re
from datetime import date, datetime, timedelta
from typing import Any, Optional

logger = logging.getLogger(__name__)

DD_MM_YYYY = re.compile(r"^(\d{2})-(\d{2})-(\d{4})$")
YYYY_MM_DD = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
DD_SLASH_MM_YYYY = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")

# Spreadsheet serial day 1 is 1900-01-01, but the numbering also counts a
# 29-02-1900 that never existed. Anchor plus (serial - 1) days reproduces the
# dates already exported with this rule; only serials from 01-03-1900 on are exact.
SERIAL_EPOCH = date(1899, 12, 31)


def format_date(value: date) -> str:
    return value.strftime("%d-%m-%Y")


def serial_to_date(serial: float) -> date:
    return SERIAL_EPOCH + timedelta(days=math.floor(serial) - 1)


def normalize_date(value: Any) -> str:
    """
    Convert a date-like cell to DD-MM-YYYY.

    Strings already in DD-MM-YYYY pass through, YYYY-MM-DD and DD/MM/YYYY are
    reordered, any other text is returned as-is. Numbers are spreadsheet
    serial days. Never raises: unusable input gives "".
    """
    if value is None:
        return ""

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return ""
        if DD_MM_YYYY.match(text):
            return text
        match = YYYY_MM_DD.match(text)
        if match:
            year, month, day = match.groups()
            return f"{day}-{month}-{year}"
        match = DD_SLASH_MM_YYYY.match(text)
        if match:
            day, month, year = match.groups()
            return f"{day.zfill(2)}-{month.zfill(2)}-{year}"
        return text

    # bool is an int subclass but never a date
    if isinstance(value, bool):
        return ""

    if isinstance(value, (int, float)):
        try:
            return format_date(serial_to_date(value))
        except (OverflowError, ValueError) as e:
            logger.debug(f"Serial date {value!r} out of range: {e}")
            return ""

    if isinstance(value, (datetime, date)):
        try:
            return format_date(value)
        except ValueError:
            return ""

    return ""


def parse_canonical_date(value: Optional[str]) -> Optional[date]:
    """Parse a stored DD-MM-YYYY string; None when absent or malformed."""
    if not value:
        return None
    match = DD_MM_YYYY.match(value.strip())
    if not match:
        return None
    day, month, year = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_activity_date(value: Optional[str]) -> Optional[date]:
    """
    Parse a last-activity stamp for ordering.
    Accepts DD-MM-YYYY, DD/MM/YYYY and ISO-8601 dates or timestamps.
    """
    if not value:
        return None
    parsed = parse_canonical_date(normalize_date(value))
    if parsed:
        return parsed
    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00")).date()
    except ValueError:
        return None


def today_string(today: Optional[date] = None) -> str:
    return format_date(today or date.today())
