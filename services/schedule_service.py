"""
Schedule import service.
Orchestrates OCR, parsing and reconciliation for one upload session.
"""
import asyncio
from typing import Awaitable, Callable, List, Sequence

from core.config import get_settings
from core.exceptions import NoScheduleDataError, OCRError
from core.logger import setup_logger
from core.parsing import parse_schedule_text
from core.reconcile import reconcile
from core.schema import OcrResult, ReconcileResult, ShiftCandidate

logger = setup_logger(__name__)

# External OCR collaborator: image bytes in, text plus confidence out
Recognizer = Callable[[bytes], Awaitable[OcrResult]]


class ScheduleService:
    """Service for turning schedule screenshots into reconciled shifts."""

    def __init__(self):
        """Initialize schedule service."""
        self.settings = get_settings()

    def parse_transcript(self, text: str, source_index: int = 0) -> List[ShiftCandidate]:
        """
        Parse a single transcript.

        Args:
            text: OCR text of one image
            source_index: Index of the image in the session

        Returns:
            List of shift candidates in transcript order
        """
        return list(parse_schedule_text(text, source_index))

    def process_transcripts(self, transcripts: Sequence[OcrResult]) -> ReconcileResult:
        """
        Parse every transcript of a session and reconcile the results.

        Args:
            transcripts: OCR results in image order

        Returns:
            ReconcileResult with ordered shifts and per-image warnings

        Raises:
            NoScheduleDataError: If nothing at all could be read
        """
        logger.info(f"Processing {len(transcripts)} transcripts")

        per_image_candidates = [
            self.parse_transcript(t.text, index) for index, t in enumerate(transcripts)
        ]
        result = reconcile(
            per_image_candidates,
            [t.confidence for t in transcripts],
            raw_texts=[t.text for t in transcripts],
            threshold=self.settings.unreadable_confidence_threshold,
        )

        if result.is_empty:
            raise NoScheduleDataError(
                "No schedule data could be read from the uploaded screenshots",
                details={"images": len(transcripts)}
            )

        return result

    async def recognize_images(
        self,
        images: Sequence[bytes],
        recognizer: Recognizer
    ) -> List[OcrResult]:
        """
        Run OCR on every image with concurrency control.

        A failed recognition is logged and recorded as an empty, zero-confidence
        transcript so the image is reported as unreadable.

        Args:
            images: Raw image bytes in upload order
            recognizer: Async OCR callable

        Returns:
            OcrResult per image, in image order
        """
        semaphore = asyncio.Semaphore(self.settings.max_concurrent_ocr_calls)
        total = len(images)
        completed = [0]  # Use list to allow modification in nested function

        async def recognize_single(image: bytes, idx: int) -> OcrResult:
            async with semaphore:
                try:
                    result = await recognizer(image)
                except Exception as e:
                    raise OCRError(
                        f"OCR failed for screenshot {idx + 1}",
                        details={"image_index": idx, "error": str(e)}
                    ) from e
                completed[0] += 1
                logger.info(f"Progress: {completed[0]}/{total} screenshots recognized")
                return result

        tasks = [recognize_single(image, i) for i, image in enumerate(images)]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        transcripts: List[OcrResult] = []
        for i, result in enumerate(results):
            if isinstance(result, asyncio.CancelledError):
                raise result
            if isinstance(result, Exception):
                logger.error(f"Screenshot {i + 1} failed: {result}")
                transcripts.append(OcrResult(text="", confidence=0.0))
            else:
                transcripts.append(result)

        return transcripts

    async def process_images(
        self,
        images: Sequence[bytes],
        recognizer: Recognizer
    ) -> ReconcileResult:
        """
        Recognize, parse and reconcile a whole upload session.

        Args:
            images: Raw image bytes in upload order
            recognizer: Async OCR callable

        Returns:
            ReconcileResult for the session
        """
        transcripts = await self.recognize_images(images, recognizer)
        return self.process_transcripts(transcripts)
