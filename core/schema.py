"""
Pydantic schemas for shift records and request/response validation.
"""
import datetime as dt
import uuid
from typing import Annotated, List

from pydantic import BaseModel, BeforeValidator, Field

from core.config import get_settings

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


def normalize_title(v):
    """Collapse whitespace and fall back to the configured default title when blank."""
    title = " ".join(str(v).split()) if v is not None else ""
    return title or get_settings().default_shift_title


def clamp_confidence(v):
    """OCR engines occasionally report values outside 0-100 (e.g. -1 for no text)."""
    if v is None:
        return 0.0
    try:
        value = float(v)
    except (TypeError, ValueError):
        return 0.0
    return max(0.0, min(100.0, value))


class ShiftCandidate(BaseModel):
    """A shift recovered from one transcript, before cross-image deduplication."""
    date: dt.date
    start_time: str = Field(..., pattern=TIME_PATTERN, description="24-hour HH:MM")
    end_time: str = Field(..., pattern=TIME_PATTERN, description="24-hour HH:MM")
    title: Annotated[str, BeforeValidator(normalize_title)] = Field(default=None, validate_default=True)
    source_index: int = Field(default=0, ge=0, description="Index of the source image")

    @property
    def key(self):
        """Identity used for deduplication; title is not part of it."""
        return (self.date, self.start_time, self.end_time)

    @property
    def sort_key(self):
        return (self.date.isoformat(), self.start_time)


def new_shift_id() -> str:
    return uuid.uuid4().hex


class ReconciledShift(ShiftCandidate):
    """
    A deduplicated shift ready for display or export.

    The id is only unique within one session; it identifies the row while
    a user edits the list.
    """
    id: str = Field(default_factory=new_shift_id)


class OcrResult(BaseModel):
    """Output of the external OCR collaborator for one image."""
    text: str = ""
    confidence: Annotated[float, BeforeValidator(clamp_confidence)] = Field(
        default=0.0, ge=0.0, le=100.0, description="Recognition confidence, 0-100"
    )


class ReconcileResult(BaseModel):
    """Session-level output: ordered shifts plus per-image warnings."""
    shifts: List[ReconciledShift] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    raw_text: str = ""

    @property
    def is_empty(self) -> bool:
        """True when nothing at all could be read, distinct from partial failure."""
        return not self.shifts and not self.warnings


class ParseRequest(BaseModel):
    """Single transcript to parse."""
    text: str
    source_index: int = Field(default=0, ge=0)


class ReconcileRequest(BaseModel):
    """All transcripts of one session, in image order."""
    transcripts: List[OcrResult] = Field(default_factory=list)


class ExportRequest(BaseModel):
    """Shifts to export as a review spreadsheet."""
    shifts: List[ReconciledShift] = Field(..., min_length=1)
