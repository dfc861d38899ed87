"""Schema exports."""

from .extracted_job import ExtractedJobData, JobStatus, normalize_status

__all__ = ["ExtractedJobData", "JobStatus", "normalize_status"]
