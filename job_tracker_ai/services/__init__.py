"""Service exports."""

from .image_fetcher import fetch_image
from .ocr_service import OcrEngine, OcrTextExtractor, TesseractEngine, configure_tesseract, tesseract_available
from .vision_service import VisionExtractor, parse_vision_json

__all__ = [
    "fetch_image",
    "OcrEngine",
    "OcrTextExtractor",
    "TesseractEngine",
    "configure_tesseract",
    "tesseract_available",
    "VisionExtractor",
    "parse_vision_json",
]
