"""
Multi-source reconciliation of shift candidates.

Overlapping screenshots of the same schedule produce the same shift more
than once, usually with slightly different OCR noise in the title. Shifts
are identified by (date, start_time, end_time); the first occurrence in
image order wins and later duplicates are dropped, never merged.
"""
from typing import Iterable, List, Optional, Sequence

from core.config import get_settings
from core.exceptions import ValidationError
from core.logger import setup_logger
from core.schema import ReconciledShift, ReconcileResult, ShiftCandidate

logger = setup_logger(__name__)
settings = get_settings()


def to_reconciled(candidate: ShiftCandidate) -> ReconciledShift:
    """Promote a candidate to a reconciled shift, keeping an existing id."""
    if isinstance(candidate, ReconciledShift):
        return candidate
    return ReconciledShift(**candidate.model_dump())


def deduplicate_shifts(shifts: Iterable[ShiftCandidate]) -> List[ReconciledShift]:
    """
    Drop shifts whose (date, start_time, end_time) was already seen.

    Args:
        shifts: Candidates in processing order

    Returns:
        Reconciled shifts, first occurrence of each key only
    """
    seen = set()
    unique: List[ReconciledShift] = []
    for shift in shifts:
        if shift.key in seen:
            logger.debug(
                f"Dropping duplicate shift {shift.date.isoformat()} {shift.start_time}-{shift.end_time} "
                f"from screenshot {shift.source_index + 1} ('{shift.title}')"
            )
            continue
        seen.add(shift.key)
        unique.append(to_reconciled(shift))
    return unique


def sort_shifts(shifts: Iterable[ReconciledShift]) -> List[ReconciledShift]:
    """Order shifts by date, then start time. The sort is stable."""
    return sorted(shifts, key=lambda s: s.sort_key)


def build_image_warning(
    image_index: int,
    confidence: float,
    threshold: Optional[float] = None
) -> str:
    """
    Build the warning shown for an image that yielded no shifts.

    Args:
        image_index: 0-based image index
        confidence: OCR confidence for the image (0-100)
        threshold: Confidence below which the image is reported unreadable

    Returns:
        Human-readable warning
    """
    if threshold is None:
        threshold = settings.unreadable_confidence_threshold

    label = f"Screenshot {image_index + 1}"
    if confidence < threshold:
        return (
            f"{label}: the text could not be read clearly ({confidence:.0f}% confidence). "
            f"It may not be a schedule screenshot."
        )
    return f"{label}: the text was readable but no shifts were found."


def combine_raw_text(raw_texts: Sequence[str]) -> str:
    """Join per-image transcripts under a header naming each screenshot."""
    sections = []
    for index, text in enumerate(raw_texts):
        sections.append(f"--- Screenshot {index + 1} ---\n{text.strip()}")
    return "\n\n".join(sections)


def reconcile(
    per_image_candidates: Sequence[Iterable[ShiftCandidate]],
    per_image_confidence: Sequence[float],
    raw_texts: Optional[Sequence[str]] = None,
    threshold: Optional[float] = None,
) -> ReconcileResult:
    """
    Merge candidates from every image of a session.

    Args:
        per_image_candidates: Candidates for each image, in image order
        per_image_confidence: OCR confidence for each image (0-100)
        raw_texts: Optional transcripts, kept for provenance
        threshold: Override for the unreadable-confidence threshold

    Returns:
        ReconcileResult with ordered unique shifts and per-image warnings

    Raises:
        ValidationError: If the per-image inputs have different lengths
    """
    if len(per_image_candidates) != len(per_image_confidence):
        raise ValidationError(
            "Candidate and confidence lists must have one entry per image",
            details={
                "candidates_length": len(per_image_candidates),
                "confidence_length": len(per_image_confidence),
            }
        )
    if raw_texts is not None and len(raw_texts) != len(per_image_candidates):
        raise ValidationError(
            "Raw text list must have one entry per image",
            details={
                "candidates_length": len(per_image_candidates),
                "raw_texts_length": len(raw_texts),
            }
        )

    all_candidates: List[ShiftCandidate] = []
    warnings: List[str] = []

    for index, (candidates, confidence) in enumerate(zip(per_image_candidates, per_image_confidence)):
        image_candidates = list(candidates)
        if not image_candidates:
            warning = build_image_warning(index, confidence, threshold)
            logger.warning(warning)
            warnings.append(warning)
            continue
        all_candidates.extend(image_candidates)

    shifts = sort_shifts(deduplicate_shifts(all_candidates))

    logger.info(
        f"Reconciled {len(per_image_candidates)} images: {len(all_candidates)} candidates -> "
        f"{len(shifts)} shifts ({len(warnings)} warnings)"
    )

    return ReconcileResult(
        shifts=shifts,
        warnings=warnings,
        raw_text=combine_raw_text(raw_texts) if raw_texts else "",
    )
