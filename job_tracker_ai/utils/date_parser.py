"""Find application dates in OCR text and normalize them to YYYY-MM-DD."""

import re
from datetime import date, datetime, time
from typing import List, Optional

from dateutil import parser as date_parser

from utils.logger import get_logger

logger = get_logger(__name__)

_MONTHS = (
    r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?"
    r"|aug(?:ust)?|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)"
)
_WEEKDAYS = r"(?:mon|tue|wed|thu|fri|sat|sun)[a-z]*"

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Tried in order; the first match of each pattern gets one parse attempt.
DATE_PATTERNS: List[re.Pattern[str]] = [
    re.compile(r"\b\d{1,2}/\d{1,2}/\d{4}\b"),  # 03/14/2024
    re.compile(r"\b\d{4}-\d{2}-\d{2}\b"),  # 2024-03-14
    re.compile(r"\b\d{1,2}-\d{1,2}-\d{4}\b"),  # 03-14-2024
    re.compile(rf"\b{_MONTHS}\.? \d{{1,2}}, \d{{4}}\b", re.IGNORECASE),  # March 14, 2024
    # Tue, Mar 14, 10:30am (mail client header, no year)
    re.compile(rf"\b{_WEEKDAYS},\s+{_MONTHS}\.? \d{{1,2}}, \d{{1,2}}:\d{{2}}\s?[ap]m\b", re.IGNORECASE),
]


def today_iso() -> str:
    """Today's local calendar date as YYYY-MM-DD."""
    return date.today().isoformat()


def to_iso_date(raw: str) -> Optional[str]:
    """
    Parse a date-like fragment with dateutil and return YYYY-MM-DD.
    Missing components (e.g. the year) default to today's. Returns None if unparseable.
    """
    if not raw or not raw.strip():
        return None
    default = datetime.combine(date.today(), time())
    try:
        parsed = date_parser.parse(raw.strip(), default=default)
    except (ValueError, OverflowError) as e:
        logger.debug("Could not parse date fragment %r: %s", raw, e)
        return None
    return parsed.date().isoformat()


def is_iso_date(value: str) -> bool:
    """True if value is a syntactically valid YYYY-MM-DD calendar date."""
    if not isinstance(value, str) or not _ISO_DATE.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def find_date(text: str) -> Optional[str]:
    """Return the first date in text that parses, as YYYY-MM-DD, or None."""
    if not text:
        return None
    for pattern in DATE_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        iso = to_iso_date(match.group(0))
        if iso:
            return iso
    return None


def normalize_application_date(text: str) -> str:
    """Date found in text, or today if none."""
    return find_date(text) or today_iso()
