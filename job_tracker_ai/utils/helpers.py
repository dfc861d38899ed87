"""Helper utilities for the extraction pipeline."""

import asyncio
import re
from typing import Awaitable, List, Type, TypeVar

from errors import ExtractionError

T = TypeVar("T")


async def first_to_settle(
    operation: Awaitable[T],
    timeout_seconds: float,
    error_cls: Type[ExtractionError],
    label: str,
) -> T:
    """
    Race an awaitable against a timer. Whichever settles first wins; a timer win
    raises error_cls so the caller's stage fails instead of hanging.
    """
    try:
        return await asyncio.wait_for(operation, timeout=timeout_seconds)
    except asyncio.TimeoutError as e:
        raise error_cls(f"{label} timed out after {timeout_seconds:g}s") from e


def split_lines(text: str) -> List[str]:
    """Non-empty, trimmed lines of text."""
    if not text:
        return []
    return [line.strip() for line in text.split("\n") if line.strip()]


def strip_angle_brackets(value: str) -> str:
    """Remove '<' and '>' left over from mail headers, then trim."""
    return re.sub(r"[<>]", "", value or "").strip()


def is_remote_ref(image_ref: str) -> bool:
    """True for http(s) and data: image references."""
    ref = (image_ref or "").strip().lower()
    return ref.startswith(("http://", "https://", "data:"))
