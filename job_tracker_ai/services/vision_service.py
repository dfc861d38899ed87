"""Structured extraction from a screenshot with an OpenAI vision model."""

import base64
import json
import mimetypes
import re
from typing import Any, Callable, Dict, Optional

from openai import AsyncOpenAI, OpenAIError
from pydantic import ValidationError

from config import VISION_MAX_TOKENS, VISION_MODEL_NAME, VISION_TIMEOUT_SECONDS
from errors import VisionFailure
from schemas.extracted_job import ExtractedJobData
from services.image_fetcher import fetch_image
from utils.date_parser import today_iso
from utils.helpers import first_to_settle, is_remote_ref
from utils.logger import get_logger

logger = get_logger(__name__)

VISION_PROMPT = """Analyze this job application screenshot and extract the following information in JSON format:
- company: Company name
- title: Job title/position
- status: One of "applied", "interview", "offer", "rejected"
- date: Application date (format: YYYY-MM-DD, use {today} if not visible)
- notes: Any key highlights, requirements, or important details

Return ONLY valid JSON with these exact field names. If you cannot find certain information, use reasonable defaults or empty strings."""

_RESPONSE_FIELDS = ("company", "title", "status", "date", "notes")


def _strip_code_fences(text: str) -> str:
    raw = text.strip()
    if raw.startswith("```"):
        raw = re.sub(r"^```(?:json)?\s*", "", raw)
        raw = re.sub(r"\s*```$", "", raw)
    return raw


def _isolate_json_object(text: str) -> Optional[str]:
    """First balanced {...} block in text, ignoring braces inside strings."""
    start = text.find("{")
    if start == -1:
        return None
    depth = 0
    in_str = False
    escape = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_str:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_str = False
            continue
        if ch == '"':
            in_str = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start : i + 1]
    return None


def parse_vision_json(text: str) -> Dict[str, Any]:
    """
    Parse the model's reply into a dict. Tolerates code fences and chatter around
    a single JSON object; anything else raises VisionFailure.
    """
    raw = _strip_code_fences(text or "")
    if not raw:
        raise VisionFailure("Vision model returned an empty response")
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        candidate = _isolate_json_object(raw)
        if candidate is None:
            raise VisionFailure("Vision response contains no JSON object")
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError as e:
            raise VisionFailure(f"Vision response JSON is malformed: {e}") from e
    if not isinstance(parsed, dict):
        raise VisionFailure(f"Vision response JSON is not an object: {type(parsed).__name__}")
    return parsed


class VisionExtractor:
    """
    Vision model adapter. Only constructed when an OpenAI key is configured.

    A client is built per request and closed afterwards, so no pooled
    connection outlives the event loop it was opened on.
    """

    def __init__(
        self,
        client_factory: Callable[[], AsyncOpenAI],
        model: str = VISION_MODEL_NAME,
        max_tokens: int = VISION_MAX_TOKENS,
        timeout: float = VISION_TIMEOUT_SECONDS,
    ) -> None:
        self._client_factory = client_factory
        self.model = model
        self.max_tokens = max_tokens
        self.timeout = timeout

    async def _image_url(self, image_ref: str) -> str:
        """Remote refs go as-is; local files are inlined as a base64 data URL."""
        if is_remote_ref(image_ref):
            return image_ref
        image_bytes = await fetch_image(image_ref)
        if not image_bytes:
            raise VisionFailure(f"Could not load screenshot {image_ref}")
        mime = mimetypes.guess_type(image_ref)[0] or "image/png"
        return f"data:{mime};base64,{base64.b64encode(image_bytes).decode('ascii')}"

    async def _complete(self, image_ref: str) -> str:
        image_url = await self._image_url(image_ref)
        client = self._client_factory()
        try:
            response = await first_to_settle(
                client.chat.completions.create(
                    model=self.model,
                    messages=[
                        {
                            "role": "user",
                            "content": [
                                {"type": "text", "text": VISION_PROMPT.format(today=today_iso())},
                                {"type": "image_url", "image_url": {"url": image_url}},
                            ],
                        }
                    ],
                    max_tokens=self.max_tokens,
                ),
                self.timeout,
                VisionFailure,
                "Vision request",
            )
        except OpenAIError as e:
            raise VisionFailure(f"Vision request failed: {e}") from e
        finally:
            await client.close()
        choice = response.choices[0] if response.choices else None
        if not choice or not choice.message or not choice.message.content:
            raise VisionFailure("Vision model returned no content")
        return choice.message.content

    async def extract_structured(self, image_ref: str) -> ExtractedJobData:
        """Ask the model for the job fields and normalize them into a record."""
        content = await self._complete(image_ref)
        parsed = parse_vision_json(content)
        fields = {k: parsed[k] for k in _RESPONSE_FIELDS if k in parsed}
        try:
            job = ExtractedJobData(**fields, source_image_url=image_ref)
        except ValidationError as e:
            raise VisionFailure(f"Vision output validation failed: {e}") from e
        if "status" in parsed and str(parsed["status"]).strip().lower() != job.status:
            logger.info("Coerced vision status %r to %r", parsed.get("status"), job.status)
        return job
