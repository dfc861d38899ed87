"""Ordered regex rule batteries shared by the company and title detectors."""

import re
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence, Tuple


def _non_empty(value: str) -> bool:
    return bool(value)


def _first_group(match: re.Match[str]) -> str:
    return match.group(1)


@dataclass(frozen=True)
class RegexRule:
    """
    One named extraction rule: a pattern, how to pull the value out of a match,
    and whether the pulled value is acceptable. Rules are data so they can be
    tested one by one and reordered without touching control flow.
    """

    name: str
    pattern: re.Pattern[str]
    accept: Callable[[str], bool] = _non_empty
    capture: Callable[[re.Match[str]], str] = _first_group

    def apply(self, text: str) -> Optional[str]:
        """Accepted value for text, or None if the rule does not fire."""
        match = self.pattern.search(text)
        if not match:
            return None
        value = (self.capture(match) or "").strip()
        if value and self.accept(value):
            return value
        return None


def first_line_match(rules: Sequence[RegexRule], lines: Iterable[str]) -> Optional[Tuple[str, str]]:
    """
    Scan lines top to bottom, trying every rule on a line before moving on.
    Returns (rule name, value) for the first accepted value.
    """
    for line in lines:
        for rule in rules:
            value = rule.apply(line)
            if value is not None:
                return rule.name, value
    return None


def first_text_match(rules: Sequence[RegexRule], text: str) -> Optional[Tuple[str, str]]:
    """Try each rule against the whole text; first accepted value wins."""
    for rule in rules:
        value = rule.apply(text)
        if value is not None:
            return rule.name, value
    return None
