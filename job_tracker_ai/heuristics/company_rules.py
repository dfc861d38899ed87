"""Company name detection for application confirmation emails."""

import re
from collections import Counter
from typing import List, Optional, Sequence

from heuristics.greeting_filter import is_common_greeting
from heuristics.rules import RegexRule, first_line_match
from utils.logger import get_logger

logger = get_logger(__name__)


def _plausible_sender(value: str) -> bool:
    return len(value) > 2 and not is_common_greeting(value)


# Tried per line, in this order, before any frequency-based inference.
COMPANY_LINE_RULES: List[RegexRule] = [
    RegexRule("labeled_field", re.compile(r"(?:company|employer|organization):\s*([^:]*)", re.IGNORECASE)),
    RegexRule("thank_you_for_applying", re.compile(r"thank you for applying to ([^!.]+)", re.IGNORECASE)),
    RegexRule("at_company", re.compile(r"\sat\s+([A-Z][a-zA-Z0-9\s&]+?)[\s!.,]")),
    RegexRule("hiring_team", re.compile(r"^([A-Z][a-zA-Z0-9\s&]+?)\s+Hiring\s+Team", re.IGNORECASE)),
    RegexRule(
        "email_sender",
        re.compile(r"^([A-Z][a-zA-Z0-9\s&]+?)\s*<[^>]+@([a-zA-Z0-9.-]+)"),
        accept=_plausible_sender,
    ),
    RegexRule(
        "reference_number",
        re.compile(r"reference number\s*-\s*([A-Za-z\s]+)", re.IGNORECASE),
        accept=_plausible_sender,
    ),
]

# Capitalized words that show up in every confirmation email
STOPWORDS = frozenset(
    """
    Thank You Your Application Team Hiring Email Message Subject Dear Hello Best
    Regards Sincerely Please We This That The A An And Or But For To From With By
    At In On Of As Is Are Was Were Be Been Have Has Had Do Does Did Will Would
    Could Should May Might Can Must Shall Reference Number Candidate Letter
    Letters Inbox
    """.split()
)

_CALENDAR_PREFIX = re.compile(r"^(Mon|Tue|Wed|Thu|Fri|Sat|Sun|Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)")
_GENERIC_NOUN = re.compile(r"^(Application|Position|Job|Role|Team|Hiring|Email|Message|Subject)$", re.IGNORECASE)
_SINGLE_CAPITALIZED = re.compile(r"\b[A-Z][a-z]+\b")
_CAPITALIZED_PHRASE = re.compile(r"\b[A-Z][a-z]+(?:\s+[A-Z][a-z]+)+\b")

LEADING_LINES_SCANNED = 8
_LEADING_LINE_SKIP = ("thank", "application", "team")


def find_repeated_capitalized_words(text: str) -> List[str]:
    """
    Capitalized words and phrases seen at least twice, most likely company first.
    Companies tend to repeat their name in subject, body and signature.
    Ranked by count, then number of words, then length; ties keep first-seen order.
    """
    matches = _SINGLE_CAPITALIZED.findall(text or "") + _CAPITALIZED_PHRASE.findall(text or "")
    counts: Counter = Counter()
    for match in matches:
        word = match.strip()
        if (
            len(word) > 1
            and word not in STOPWORDS
            and not is_common_greeting(word)
            and not _CALENDAR_PREFIX.match(word)
        ):
            counts[word] += 1

    repeated = [(w, c) for w, c in counts.items() if c >= 2 and len(w) >= 3]
    repeated.sort(key=lambda wc: (-wc[1], -len(wc[0].split()), -len(wc[0])))
    words = [w for w, _ in repeated]
    logger.debug("Repeated capitalized words found: %s", words)
    return words


def infer_company_from_repeats(text: str) -> Optional[str]:
    """Most frequent repeated capitalized word that could be a company name."""
    for word in find_repeated_capitalized_words(text):
        if is_common_greeting(word) or not 3 <= len(word) <= 30:
            continue
        if _GENERIC_NOUN.match(word):
            continue
        return word
    return None


def infer_company_from_leading_lines(lines: Sequence[str]) -> Optional[str]:
    """
    Look for a short capitalized name near the top of the screenshot, skipping
    addresses, links and boilerplate lines.
    """
    for line in lines[:LEADING_LINES_SCANNED]:
        lower = line.lower()
        if "@" in line or "http" in line or any(w in lower for w in _LEADING_LINE_SKIP):
            continue
        if is_common_greeting(line) or not 2 < len(line) < 50:
            continue

        for word in line.split():
            if re.fullmatch(r"[A-Z][a-z]+", word) and len(word) > 3 and not is_common_greeting(word):
                return word

        # Multi-word names like "Lockheed Martin"
        clean_line = re.sub(r"[^\w\s]", "", line).strip()
        if (
            re.fullmatch(r"[A-Z][a-zA-Z\s]+", clean_line)
            and len(clean_line.split()) <= 3
            and not is_common_greeting(clean_line)
        ):
            return clean_line
    return None


def detect_company(text: str, lines: Sequence[str]) -> str:
    """Company name from explicit patterns, then repetition, then the leading lines."""
    hit = first_line_match(COMPANY_LINE_RULES, lines)
    if hit:
        rule, company = hit
        logger.debug("Company %r matched rule %s", company, rule)
        return company

    company = infer_company_from_repeats(text)
    if company:
        logger.debug("Company %r inferred from repeated words", company)
        return company

    company = infer_company_from_leading_lines(lines)
    if company:
        logger.debug("Company %r taken from leading lines", company)
        return company
    return ""
