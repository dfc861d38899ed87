"""Agent exports."""

from .extraction_agent import (
    ScreenshotExtractionAgent,
    build_extraction_agent,
    extract_job_data,
    manual_entry_record,
    run_extraction_agent,
)

__all__ = [
    "ScreenshotExtractionAgent",
    "build_extraction_agent",
    "extract_job_data",
    "manual_entry_record",
    "run_extraction_agent",
]
