"""Job title detection: labeled fields, phrasing patterns, keyword lines, templates."""

import re
from typing import List, Sequence

from heuristics.rules import RegexRule, first_line_match, first_text_match
from utils.logger import get_logger

logger = get_logger(__name__)

TITLE_KEYWORDS = (
    "engineer",
    "developer",
    "internship",
    "manager",
    "analyst",
    "specialist",
    "coordinator",
    "assistant",
    "director",
    "frontend",
    "backend",
    "fullstack",
    "software",
)

_LEADING_FILLER = re.compile(r"^(to our|for our|apply to|applying to|the|a|an)\s+", re.IGNORECASE)
_TRAILING_QUALIFIER = re.compile(r"\s+(opening|position|role|at\s+\w+).*$", re.IGNORECASE)


def clean_title_line(line: str) -> str:
    """Strip filler before and qualifiers after a title-bearing line."""
    cleaned = _LEADING_FILLER.sub("", line)
    cleaned = _TRAILING_QUALIFIER.sub("", cleaned)
    return cleaned.strip()


def _title_length_ok(value: str) -> bool:
    return 5 <= len(value) < 100


TITLE_LINE_RULES: List[RegexRule] = [
    RegexRule("labeled_field", re.compile(r"(?:job title|position|title|role):\s*([^:]*)", re.IGNORECASE)),
    RegexRule(
        "apply_to_our",
        re.compile(r"apply to our ([^!.]+?)(?:\s+opening|\s+at|\s+position|!|\.)", re.IGNORECASE),
    ),
    RegexRule(
        "keyword_line",
        re.compile("|".join(TITLE_KEYWORDS), re.IGNORECASE),
        accept=_title_length_ok,
        capture=lambda m: clean_title_line(m.string),
    ),
]


def _template(name: str, pattern: str) -> RegexRule:
    return RegexRule(name, re.compile(pattern, re.IGNORECASE), capture=lambda m: m.group(0))


# Last resort, matched against the whole text in order.
TITLE_TEMPLATES: List[RegexRule] = [
    _template("associate_degree_programmer", r"software\s+associate\s+degree\s+programmer[^.]*?(?:entry\s+level)?[^.]*"),
    _template("software_engineer", r"software\s+engineer(?:\s+internship)?(?:\s*\|\s*frontend)?"),
    _template("frontend", r"frontend\s+(?:engineer|developer)(?:\s+internship)?"),
    _template("backend", r"backend\s+(?:engineer|developer)(?:\s+internship)?"),
    _template("full_stack", r"full\s*stack\s+(?:engineer|developer)(?:\s+internship)?"),
    _template("data", r"data\s+(?:scientist|analyst|engineer)"),
    _template("product_manager", r"product\s+manager(?:\s+internship)?"),
    _template("seniority", r"(?:senior|junior|lead)\s+(?:engineer|developer)"),
    _template("entry_level", r"(?:entry\s+level\s+)?(?:software|hardware|systems?)\s+(?:engineer|developer|programmer)"),
    _template("associate", r"associate\s+(?:software|hardware|systems?)\s+(?:engineer|developer|programmer)"),
]


def detect_title(text: str, lines: Sequence[str]) -> str:
    """Job title from the line rules, falling back to the whole-text templates."""
    hit = first_line_match(TITLE_LINE_RULES, lines) or first_text_match(TITLE_TEMPLATES, text)
    if hit:
        rule, title = hit
        logger.debug("Title %r matched rule %s", title, rule)
        return title
    return ""
