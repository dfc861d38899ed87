"""Extraction Agent: screenshot -> job record via vision model, OCR + heuristics, or manual default."""

import asyncio
from functools import partial
from typing import Callable, List, Optional

from openai import AsyncOpenAI

from config import EXTRACTOR_CONCURRENCY, MANUAL_ENTRY_NOTES, OPENAI_API_KEY
from errors import ExtractionError
from heuristics.text_parser import parse_job_text
from schemas.extracted_job import ExtractedJobData
from services.ocr_service import OcrTextExtractor, configure_tesseract, tesseract_available
from services.vision_service import VisionExtractor
from utils.logger import get_logger

logger = get_logger(__name__)

TextParser = Callable[[str, Optional[str]], ExtractedJobData]


def manual_entry_record(image_ref: str) -> ExtractedJobData:
    """Record returned when no stage produced data; the user fills it in."""
    return ExtractedJobData(
        company="",
        title="",
        status="applied",
        notes=MANUAL_ENTRY_NOTES,
        source_image_url=image_ref,
    )


class ScreenshotExtractionAgent:
    """
    Runs the fallback chain for one screenshot:
    vision model (if configured) -> OCR + heuristic parser (if OCR can run) -> manual default.

    A stage that succeeds ends the chain. A stage that fails is logged and skipped;
    extract() never raises. Holds no per-request state, so one agent can serve
    many concurrent requests.
    """

    def __init__(
        self,
        vision: Optional[VisionExtractor] = None,
        ocr: Optional[OcrTextExtractor] = None,
        parser: TextParser = parse_job_text,
    ) -> None:
        self._vision = vision
        self._ocr = ocr
        self._parser = parser

    @property
    def vision_enabled(self) -> bool:
        return self._vision is not None

    @property
    def ocr_enabled(self) -> bool:
        return self._ocr is not None

    async def _try_vision(self, image_ref: str) -> Optional[ExtractedJobData]:
        logger.info("Attempting vision extraction for %s", image_ref)
        try:
            job = await self._vision.extract_structured(image_ref)
        except ExtractionError as e:
            logger.warning("Vision extraction failed for %s: %s", image_ref, e)
            return None
        except Exception:
            logger.exception("Unexpected vision extraction error for %s", image_ref)
            return None
        logger.info("Vision extraction successful for %s", image_ref)
        return job

    async def _try_ocr(self, image_ref: str) -> Optional[ExtractedJobData]:
        logger.info("Falling back to OCR for %s", image_ref)
        try:
            text = await self._ocr.recognize(image_ref)
            return self._parser(text, image_ref)
        except ExtractionError as e:
            logger.warning("OCR extraction failed for %s: %s", image_ref, e)
        except Exception:
            logger.exception("Unexpected OCR extraction error for %s", image_ref)
        return None

    async def extract(self, image_ref: str) -> ExtractedJobData:
        """Best-effort job record for a screenshot. Always returns a record."""
        if self._vision is not None:
            job = await self._try_vision(image_ref)
            if job is not None:
                return job
        else:
            logger.debug("Vision stage skipped: no API key configured")

        if self._ocr is not None:
            job = await self._try_ocr(image_ref)
            if job is not None:
                return job
        else:
            logger.debug("OCR stage skipped: no OCR engine in this runtime")

        logger.info("No extraction stage succeeded for %s; returning manual-entry record", image_ref)
        return manual_entry_record(image_ref)


def build_extraction_agent(
    api_key: str = OPENAI_API_KEY,
    ocr_enabled: Optional[bool] = None,
) -> ScreenshotExtractionAgent:
    """
    Wire an agent from the environment. Capabilities are decided once here:
    the vision stage needs an API key, the OCR stage needs a Tesseract binary.
    """
    vision = VisionExtractor(partial(AsyncOpenAI, api_key=api_key)) if api_key else None
    if ocr_enabled is None:
        ocr_enabled = tesseract_available()
    ocr = None
    if ocr_enabled:
        configure_tesseract()
        ocr = OcrTextExtractor()
    logger.info("Extraction agent ready: vision=%s ocr=%s", vision is not None, ocr is not None)
    return ScreenshotExtractionAgent(vision=vision, ocr=ocr)


async def run_extraction_agent(
    image_refs: List[str],
    agent: Optional[ScreenshotExtractionAgent] = None,
) -> List[ExtractedJobData]:
    """
    Extract records for many screenshots concurrently (bounded by
    EXTRACTOR_CONCURRENCY). Results are in input order.
    """
    agent = agent or build_extraction_agent()
    sem = asyncio.Semaphore(EXTRACTOR_CONCURRENCY)

    async def task(image_ref: str) -> ExtractedJobData:
        async with sem:
            return await agent.extract(image_ref)

    results = await asyncio.gather(*[task(ref) for ref in image_refs])
    logger.info("Extraction Agent finished: screenshots=%s", len(results))
    return list(results)


def extract_job_data(
    image_ref: str,
    agent: Optional[ScreenshotExtractionAgent] = None,
) -> ExtractedJobData:
    """
    Synchronous entry point (e.g. Streamlit). Runs the agent on a private event loop.
    """
    agent = agent or build_extraction_agent()
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(agent.extract(image_ref))
    finally:
        loop.close()
