"""Load screenshot bytes from a URL, data: URI or local path."""

import asyncio
import base64
from pathlib import Path
from typing import Optional

import httpx

from config import HTTP_MAX_RETRIES, HTTP_TIMEOUT_SECONDS
from utils.logger import get_logger

logger = get_logger(__name__)


def _decode_data_uri(image_ref: str) -> Optional[bytes]:
    header, _, payload = image_ref.partition(",")
    if not payload or ";base64" not in header:
        logger.warning("Unsupported data URI (expected base64 payload)")
        return None
    try:
        return base64.b64decode(payload, validate=True)
    except ValueError as e:
        logger.warning("Invalid base64 in data URI: %s", e)
        return None


async def _read_local(path: Path) -> Optional[bytes]:
    if not path.is_file():
        logger.warning("Screenshot not found: %s", path)
        return None
    return await asyncio.to_thread(path.read_bytes)


async def fetch_image(image_ref: str) -> Optional[bytes]:
    """
    Fetch screenshot bytes. Remote URLs are retried on transient failures with
    timeout protection; client errors are not retried. Returns None on failure.
    """
    ref = (image_ref or "").strip()
    if not ref:
        return None
    if ref.lower().startswith("data:"):
        return _decode_data_uri(ref)
    if not ref.lower().startswith(("http://", "https://")):
        return await _read_local(Path(ref))

    last_error: Optional[Exception] = None
    for attempt in range(HTTP_MAX_RETRIES):
        try:
            async with httpx.AsyncClient(
                follow_redirects=True,
                timeout=HTTP_TIMEOUT_SECONDS,
                headers={
                    "User-Agent": "Mozilla/5.0 (compatible; JobTrackerBot/1.0)",
                    "Accept": "image/*",
                },
            ) as client:
                response = await client.get(ref)
                response.raise_for_status()
                return response.content
        except httpx.HTTPStatusError as e:
            last_error = e
            logger.warning("HTTP error %s for %s: %s", e.response.status_code, ref, str(e))
            if 400 <= e.response.status_code < 500:
                break  # Don't retry client errors
        except (httpx.TimeoutException, httpx.ConnectError) as e:
            last_error = e
            logger.warning("Image request failed for %s (attempt %s): %s", ref, attempt + 1, str(e))
        except httpx.HTTPError as e:
            last_error = e
            logger.exception("Unexpected error fetching %s", ref)
            break
        if attempt < HTTP_MAX_RETRIES - 1:
            await asyncio.sleep(1.0 * (attempt + 1))  # Backoff

    if last_error:
        logger.error("Failed to fetch %s after %s attempts: %s", ref, attempt + 1, last_error)
    return None
