"""Utility exports."""

from .date_parser import find_date, is_iso_date, normalize_application_date, to_iso_date, today_iso
from .helpers import first_to_settle, is_remote_ref, split_lines, strip_angle_brackets
from .logger import get_logger

__all__ = [
    "get_logger",
    "find_date",
    "is_iso_date",
    "normalize_application_date",
    "to_iso_date",
    "today_iso",
    "first_to_settle",
    "is_remote_ref",
    "split_lines",
    "strip_angle_brackets",
]
