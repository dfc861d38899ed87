"""Failure taxonomy for the extraction stages.

Adapters raise these; the extraction agent catches them and moves on to the
next stage, so none of them ever reaches a caller of ``extract``.
"""


class ExtractionError(Exception):
    """Base class for a failed extraction stage."""


class OcrFailure(ExtractionError):
    """OCR engine could not start, timed out, or produced no text."""


class VisionFailure(ExtractionError):
    """Vision model call failed or returned something that is not job JSON."""
