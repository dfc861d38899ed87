"""Job application record extracted from a screenshot."""

import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from config import DEFAULT_STATUS, NOTES_MAX_CHARS, VALID_STATUSES
from utils.date_parser import is_iso_date, to_iso_date, today_iso

JobStatus = Literal["applied", "interview", "offer", "rejected"]


def normalize_status(value: Any) -> str:
    """Map any service-provided status onto the four known values; unknown -> applied."""
    status = str(value or "").strip().lower()
    return status if status in VALID_STATUSES else DEFAULT_STATUS


class ExtractedJobData(BaseModel):
    """
    Structured application data produced by one extraction request.
    Frozen: stages replace the whole record, never patch it.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    company: str = Field(default="", description="Best-guess employer name; empty if undetermined")
    title: str = Field(default="", description="Best-guess job title; empty if undetermined")
    status: JobStatus = Field(default="applied", description="applied, interview, offer or rejected")
    date: str = Field(default_factory=today_iso, description="Application date, YYYY-MM-DD")
    notes: Optional[str] = Field(default=None, description="Short free-text summary")
    source_image_url: Optional[str] = Field(
        default=None,
        alias="sourceImageUrl",
        description="Screenshot the record was extracted from",
    )

    @field_validator("company", "title", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("status", mode="before")
    @classmethod
    def _coerce_status(cls, v: Any) -> str:
        return normalize_status(v)

    @field_validator("date", mode="before")
    @classmethod
    def _normalize_date(cls, v: Any) -> str:
        if isinstance(v, datetime.datetime):
            return v.date().isoformat()
        if isinstance(v, datetime.date):
            return v.isoformat()
        if isinstance(v, str) and is_iso_date(v.strip()):
            return v.strip()
        if isinstance(v, str):
            return to_iso_date(v) or today_iso()
        return today_iso()

    @field_validator("notes", mode="before")
    @classmethod
    def _truncate_notes(cls, v: Any) -> Any:
        if v is None:
            return None
        if isinstance(v, str):
            return v[:NOTES_MAX_CHARS]
        return v

    def to_record(self) -> dict:
        """camelCase dict in the shape the job form expects."""
        return self.model_dump(by_alias=True)
