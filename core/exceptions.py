"""
Custom exceptions for the schedule sync service.

Individual OCR lines never raise: unresolvable lines are skipped by the
parser. These exceptions cover whole-transcript and whole-session failures.
"""
from typing import Any, Dict, Optional


class ScheduleSyncException(Exception):
    """Base exception for all schedule sync errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize exception.

        Args:
            message: Error message
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ParsingError(ScheduleSyncException):
    """Raised when a transcript cannot be parsed at all."""
    pass


class ValidationError(ScheduleSyncException):
    """Raised when reconciler input is inconsistent."""
    pass


class OCRError(ScheduleSyncException):
    """Raised when the OCR collaborator fails for an image."""
    pass


class NoScheduleDataError(ScheduleSyncException):
    """Raised when no image in a session yielded shifts or warnings."""
    pass


class ExportError(ScheduleSyncException):
    """Raised when the spreadsheet export fails."""
    pass


class ConfigurationError(ScheduleSyncException):
    """Raised when configuration is invalid."""
    pass
