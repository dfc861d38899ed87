"""
Heuristic parser: raw OCR text -> ExtractedJobData.

Rule-based only. Always returns a record; empty company/title means
"could not determine", not a failure.
"""

from typing import List, Optional, Sequence, Tuple

from config import DEFAULT_STATUS, NOTES_MAX_CHARS
from heuristics.company_rules import detect_company
from heuristics.title_rules import detect_title
from schemas.extracted_job import ExtractedJobData
from utils.date_parser import normalize_application_date
from utils.helpers import split_lines, strip_angle_brackets
from utils.logger import get_logger

logger = get_logger(__name__)

# Checked in order; the first family with a keyword in the text wins.
STATUS_KEYWORDS: List[Tuple[str, Tuple[str, ...]]] = [
    ("interview", ("interview", "scheduled")),
    ("offer", ("offer", "accepted")),
    ("rejected", ("reject", "declined")),
]

NOTES_MIN_LINE_CHARS = 15
NOTES_MAX_LINES = 2


def infer_status(text: str) -> str:
    """interview > offer > rejected > applied."""
    lower = (text or "").lower()
    for status, keywords in STATUS_KEYWORDS:
        if any(k in lower for k in keywords):
            return status
    return DEFAULT_STATUS


def build_notes(lines: Sequence[str], company: str, title: str) -> str:
    """First two substantive lines that do not repeat the company or title."""
    kept = []
    for line in lines:
        if company and company in line:
            continue
        if title and title in line:
            continue
        if "@" in line or "http" in line or len(line) <= NOTES_MIN_LINE_CHARS:
            continue
        kept.append(line)
        if len(kept) == NOTES_MAX_LINES:
            break
    return " ".join(kept)[:NOTES_MAX_CHARS]


def parse_job_text(text: str, image_ref: Optional[str] = None) -> ExtractedJobData:
    """Extract company, title, status, date and notes from unstructured text."""
    text = text or ""
    lines = split_lines(text)
    logger.debug("Parsing %s lines; first lines: %s", len(lines), lines[:15])

    company = strip_angle_brackets(detect_company(text, lines))
    title = strip_angle_brackets(detect_title(text, lines))
    status = infer_status(text)
    date = normalize_application_date(text)
    notes = build_notes(lines, company, title)

    logger.info(
        "Heuristic parse: company=%r title=%r status=%s date=%s",
        company,
        title,
        status,
        date,
    )
    return ExtractedJobData(
        company=company,
        title=title,
        status=status,
        date=date,
        notes=notes,
        source_image_url=image_ref,
    )
