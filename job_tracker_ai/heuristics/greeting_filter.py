"""Reject salutation and role words that look like company names in email text."""

from typing import Tuple

COMMON_GREETINGS: Tuple[str, ...] = (
    "dear",
    "hello",
    "hi",
    "greetings",
    "good morning",
    "good afternoon",
    "good evening",
    "to whom it may concern",
    "sir",
    "madam",
    "mr",
    "mrs",
    "ms",
    "dr",
    "prof",
    "professor",
    "candidate",
    "applicant",
    "team",
    "hiring",
    "hr",
    "human resources",
    "recruiting",
    "recruitment",
)


def is_common_greeting(text: str) -> bool:
    """
    True if text equals, starts with, or ends with a greeting/role word (case-insensitive).
    "Hiring Team" and "Dear Alex" are greetings; "Ramp" and "Lockheed Martin" are not.
    """
    lower = (text or "").lower().strip()
    return any(
        lower == greeting
        or lower.startswith(greeting + " ")
        or lower.endswith(" " + greeting)
        for greeting in COMMON_GREETINGS
    )
