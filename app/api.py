"""
FastAPI routes for schedule parsing, reconciliation and export.
Clean API layer following separation of concerns principle.
"""
from pathlib import Path

from fastapi import BackgroundTasks, FastAPI, HTTPException, Request
from fastapi.responses import FileResponse, JSONResponse

from core.config import get_settings
from core.exceptions import ExportError, NoScheduleDataError, ParsingError
from core.exporters import create_output_filename, export_to_excel
from core.logger import setup_logger
from core.schema import ExportRequest, ParseRequest, ReconcileRequest
from services.schedule_service import ScheduleService

logger = setup_logger(__name__)
settings = get_settings()

# Initialize FastAPI app
app = FastAPI(
    title="Schedule Shift Sync",
    description="Reconstruct work shifts from OCR text of schedule screenshots",
    version="1.0.0"
)

# Service instance
schedule_service = ScheduleService()


@app.exception_handler(NoScheduleDataError)
async def no_schedule_data_handler(request: Request, exc: NoScheduleDataError):
    """Nothing could be read at all: tell the user what to try next."""
    logger.warning(f"No schedule data: {exc.details}")
    return JSONResponse(
        status_code=422,
        content={
            "error": exc.message,
            "hint": "Make sure the screenshots show the schedule list with dates and shift times, then try again.",
            "details": exc.details,
        }
    )


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "schedule_sync",
        "version": "1.0.0"
    }


@app.post("/parse")
async def parse_transcript(body: ParseRequest):
    """
    Parse a single OCR transcript into shift candidates.

    Args:
        body: Transcript text and source image index

    Returns:
        Candidates in transcript order
    """
    try:
        shifts = schedule_service.parse_transcript(body.text, body.source_index)
    except ParsingError as e:
        raise HTTPException(status_code=400, detail=e.message)

    return {
        "shifts": [s.model_dump(mode="json") for s in shifts],
        "count": len(shifts),
    }


@app.post("/reconcile")
async def reconcile_transcripts(body: ReconcileRequest):
    """
    Parse and reconcile every transcript of an upload session.

    Args:
        body: OCR results in image order

    Returns:
        Ordered unique shifts, per-image warnings and the combined raw text
    """
    logger.info(f"Received {len(body.transcripts)} transcripts")
    result = schedule_service.process_transcripts(body.transcripts)
    return result.model_dump(mode="json")


def remove_file(path: Path) -> None:
    """Delete a temporary export once it has been sent."""
    try:
        if path.exists():
            path.unlink()
            logger.debug(f"Cleaned up: {path}")
    except OSError as cleanup_error:
        logger.warning(f"Failed to cleanup {path}: {cleanup_error}")


@app.post("/export")
async def export_shifts(body: ExportRequest, background_tasks: BackgroundTasks):
    """
    Export reviewed shifts as an Excel workbook.

    Args:
        body: Shifts to export

    Returns:
        The workbook as a file download
    """
    output_path = Path(create_output_filename(settings.temp_storage_path))

    try:
        export_to_excel(body.shifts, str(output_path))
    except ExportError as e:
        logger.error(f"Export failed: {e.message}")
        remove_file(output_path)
        raise HTTPException(status_code=500, detail=e.message)

    background_tasks.add_task(remove_file, output_path)

    return FileResponse(
        path=str(output_path),
        filename="schedule_shifts.xlsx",
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
