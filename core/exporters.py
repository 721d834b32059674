"""
Excel export of reconciled shifts for review.
One row per shift, with the screenshot it came from.
"""
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import pandas as pd

from core.config import get_settings
from core.exceptions import ExportError
from core.logger import setup_logger
from core.normalize import format_12h
from core.schema import ReconciledShift

logger = setup_logger(__name__)
settings = get_settings()

SHEET_NAME = "Shifts"
EXPORT_COLUMNS = ["Date", "Day", "Start", "End", "Title", "Screenshot"]


def shifts_to_dataframe(shifts: List[ReconciledShift]) -> pd.DataFrame:
    """
    Build the review table for a list of shifts.

    Args:
        shifts: Reconciled shifts, already ordered

    Returns:
        DataFrame with EXPORT_COLUMNS
    """
    rows = [
        {
            "Date": shift.date.isoformat(),
            "Day": shift.date.strftime("%a"),
            "Start": format_12h(shift.start_time),
            "End": format_12h(shift.end_time),
            "Title": shift.title,
            "Screenshot": shift.source_index + 1,
        }
        for shift in shifts
    ]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def export_to_excel(shifts: List[ReconciledShift], output_path: str) -> str:
    """
    Export shifts to an Excel workbook.

    Args:
        shifts: Reconciled shifts
        output_path: Output file path

    Returns:
        Path to created file

    Raises:
        ExportError: If there is nothing to export or writing fails
    """
    if not shifts:
        raise ExportError("No shifts to export", details={"output_path": output_path})

    logger.info(f"Exporting {len(shifts)} shifts to {output_path}")

    output_df = shifts_to_dataframe(shifts)

    output_file = Path(output_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)

    try:
        with pd.ExcelWriter(output_path, engine="xlsxwriter") as writer:
            output_df.to_excel(writer, sheet_name=SHEET_NAME, index=False)

            worksheet = writer.sheets[SHEET_NAME]
            for idx, col in enumerate(output_df.columns):
                max_len = max(
                    output_df[col].astype(str).map(len).max(),
                    len(str(col))
                )
                worksheet.set_column(idx, idx, min(max_len + 2, 50))

        logger.info(f"Successfully exported to {output_path}")
        return output_path

    except Exception as e:
        logger.error(f"Failed to export Excel: {e}")
        raise ExportError(
            "Failed to export shifts to Excel",
            details={"output_path": output_path, "error": str(e)}
        )


def create_output_filename(base_path: Optional[str] = None) -> str:
    """
    Create timestamped output filename.

    Args:
        base_path: Base directory path (defaults to configured temp storage)

    Returns:
        Full output file path
    """
    if base_path is None:
        base_path = settings.temp_storage_path

    Path(base_path).mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y-%m-%dT%H-%M-%S-%f")
    return str(Path(base_path) / f"schedule_shifts_{timestamp}.xlsx")
