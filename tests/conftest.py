"""Shared fakes for the OpenAI client and the OCR engine."""

import asyncio
from types import SimpleNamespace
from typing import List, Optional

import pytest

from services.ocr_service import OcrEngine


class FakeCompletions:
    """Stands in for AsyncOpenAI().chat.completions."""

    def __init__(self, content: Optional[str] = None, error: Optional[Exception] = None, delay: float = 0):
        self.content = content
        self.error = error
        self.delay = delay
        self.calls: List[dict] = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeOpenAIClient:
    """Stands in for AsyncOpenAI(); counts close() calls."""

    def __init__(self, completions: FakeCompletions):
        self.chat = SimpleNamespace(completions=completions)
        self.closed = 0

    async def close(self) -> None:
        self.closed += 1


def fake_openai_client(content: Optional[str] = None, error: Optional[Exception] = None, delay: float = 0):
    return FakeOpenAIClient(FakeCompletions(content=content, error=error, delay=delay))


class FakeEngine(OcrEngine):
    """Records its lifecycle so tests can check the engine is always released."""

    def __init__(
        self,
        text: str = "",
        start_delay: float = 0,
        recognize_delay: float = 0,
        error: Optional[Exception] = None,
    ):
        self.text = text
        self.start_delay = start_delay
        self.recognize_delay = recognize_delay
        self.error = error
        self.events: List[str] = []

    async def start(self) -> None:
        self.events.append("start")
        if self.start_delay:
            await asyncio.sleep(self.start_delay)

    async def recognize(self, image_bytes: bytes) -> str:
        self.events.append("recognize")
        if self.recognize_delay:
            await asyncio.sleep(self.recognize_delay)
        if self.error:
            raise self.error
        return self.text

    async def terminate(self) -> None:
        self.events.append("terminate")


async def fake_fetch(image_ref: str) -> Optional[bytes]:
    return b"\x89PNG fake screenshot"


async def failing_fetch(image_ref: str) -> Optional[bytes]:
    return None


RAMP_EMAIL = (
    "Thank you for applying to Ramp! We received your application on 03/14/2024. "
    "The Ramp Hiring Team will review your application."
)


@pytest.fixture
def ramp_email() -> str:
    return RAMP_EMAIL
