"""Configuration loaded from environment variables."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env: try package dir then project root
_base = Path(__file__).resolve().parent
for _env_path in (_base / ".env", _base.parent / ".env"):
    if load_dotenv(_env_path):
        break
load_dotenv()  # also allow process env

# API keys – never hardcode. Empty key disables the vision stage.
OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
VISION_MODEL_NAME: str = os.getenv("VISION_MODEL_NAME", "gpt-4o-mini")
VISION_MAX_TOKENS: int = int(os.getenv("VISION_MAX_TOKENS", "500"))
VISION_TIMEOUT_SECONDS: float = float(os.getenv("VISION_TIMEOUT_SECONDS", "30"))

# Tesseract OCR
OCR_LANGUAGE: str = os.getenv("OCR_LANGUAGE", "eng")
TESSERACT_CMD: str = os.getenv("TESSERACT_CMD", "")
OCR_INIT_TIMEOUT_SECONDS: float = float(os.getenv("OCR_INIT_TIMEOUT_SECONDS", "30"))
OCR_RECOGNIZE_TIMEOUT_SECONDS: float = float(os.getenv("OCR_RECOGNIZE_TIMEOUT_SECONDS", "30"))

# HTTP / image fetch settings
HTTP_TIMEOUT_SECONDS: float = 30.0
HTTP_MAX_RETRIES: int = 3

# Concurrency
EXTRACTOR_CONCURRENCY: int = 5  # Max concurrent screenshot extractions per batch

# Record limits
NOTES_MAX_CHARS: int = 500

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# Shown when neither vision nor OCR produced anything
MANUAL_ENTRY_NOTES: str = "No data extracted — please fill in manually"

VALID_STATUSES: tuple = ("applied", "interview", "offer", "rejected")
DEFAULT_STATUS: str = "applied"
