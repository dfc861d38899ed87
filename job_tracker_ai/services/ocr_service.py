"""Text extraction from screenshots with Tesseract OCR (pytesseract + Pillow)."""

import asyncio
import io
import shutil
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, Optional

import pytesseract
from PIL import Image, UnidentifiedImageError

from config import (
    OCR_INIT_TIMEOUT_SECONDS,
    OCR_LANGUAGE,
    OCR_RECOGNIZE_TIMEOUT_SECONDS,
    TESSERACT_CMD,
)
from errors import OcrFailure
from services.image_fetcher import fetch_image
from utils.helpers import first_to_settle
from utils.logger import get_logger

logger = get_logger(__name__)


def configure_tesseract(tesseract_cmd: str = TESSERACT_CMD) -> None:
    """Point pytesseract at TESSERACT_CMD. Process-wide; called once when the agent is wired."""
    if tesseract_cmd:
        pytesseract.pytesseract.tesseract_cmd = tesseract_cmd


def tesseract_available(tesseract_cmd: str = TESSERACT_CMD) -> bool:
    """True if a Tesseract executable can be resolved in this runtime."""
    cmd = tesseract_cmd or pytesseract.pytesseract.tesseract_cmd
    return shutil.which(cmd) is not None


class OcrEngine(ABC):
    """Stateful OCR engine: start once, recognize, then terminate."""

    @abstractmethod
    async def start(self) -> None:
        ...

    @abstractmethod
    async def recognize(self, image_bytes: bytes) -> str:
        ...

    @abstractmethod
    async def terminate(self) -> None:
        ...


class TesseractEngine(OcrEngine):
    """Tesseract via pytesseract. Blocking calls run in a worker thread."""

    def __init__(
        self,
        language: str = OCR_LANGUAGE,
        process_timeout: float = OCR_RECOGNIZE_TIMEOUT_SECONDS,
    ) -> None:
        self.language = language
        self.process_timeout = process_timeout
        self._started = False

    async def start(self) -> None:
        version = await asyncio.to_thread(pytesseract.get_tesseract_version)
        languages = await asyncio.to_thread(pytesseract.get_languages, config="")
        missing = [lang for lang in self.language.split("+") if lang not in languages]
        if missing:
            raise OcrFailure(f"Tesseract {version} has no language data for {', '.join(missing)}")
        logger.debug("Tesseract %s ready (lang=%s)", version, self.language)
        self._started = True

    async def recognize(self, image_bytes: bytes) -> str:
        if not self._started:
            raise OcrFailure("Tesseract engine used before start()")
        return await asyncio.to_thread(self._recognize_sync, image_bytes)

    def _recognize_sync(self, image_bytes: bytes) -> str:
        with Image.open(io.BytesIO(image_bytes)) as image:
            image.load()
            # Tesseract kills its own subprocess after process_timeout
            return pytesseract.image_to_string(image, lang=self.language, timeout=self.process_timeout)

    async def terminate(self) -> None:
        self._started = False


class OcrTextExtractor:
    """
    Screenshot -> raw text. Engine start and recognition are each bounded by a
    timeout, and the engine is terminated on every path. Raises OcrFailure.
    """

    def __init__(
        self,
        engine_factory: Callable[[], OcrEngine] = TesseractEngine,
        fetcher: Callable[[str], Awaitable[Optional[bytes]]] = fetch_image,
        init_timeout: float = OCR_INIT_TIMEOUT_SECONDS,
        recognize_timeout: float = OCR_RECOGNIZE_TIMEOUT_SECONDS,
    ) -> None:
        self._engine_factory = engine_factory
        self._fetcher = fetcher
        self.init_timeout = init_timeout
        self.recognize_timeout = recognize_timeout

    @asynccontextmanager
    async def _engine(self) -> AsyncIterator[OcrEngine]:
        engine = self._engine_factory()
        try:
            await first_to_settle(engine.start(), self.init_timeout, OcrFailure, "OCR engine initialization")
            yield engine
        finally:
            await engine.terminate()

    async def recognize(self, image_ref: str) -> str:
        image_bytes = await self._fetcher(image_ref)
        if not image_bytes:
            raise OcrFailure(f"Could not load screenshot {image_ref}")

        try:
            async with self._engine() as engine:
                text = await first_to_settle(
                    engine.recognize(image_bytes),
                    self.recognize_timeout,
                    OcrFailure,
                    "OCR recognition",
                )
        except OcrFailure:
            raise
        except (pytesseract.TesseractError, UnidentifiedImageError, RuntimeError, OSError) as e:
            raise OcrFailure(f"Tesseract OCR failed: {e}") from e

        if not text or not text.strip():
            raise OcrFailure("OCR produced no text")
        logger.info("OCR recognized %s characters: %r", len(text), text[:200])
        return text
