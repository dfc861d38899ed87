"""Rule-based parsing of OCR text into job application fields."""

from heuristics.company_rules import detect_company, find_repeated_capitalized_words
from heuristics.greeting_filter import is_common_greeting
from heuristics.text_parser import infer_status, parse_job_text
from heuristics.title_rules import detect_title

__all__ = [
    "parse_job_text",
    "detect_company",
    "detect_title",
    "infer_status",
    "is_common_greeting",
    "find_repeated_capitalized_words",
]
