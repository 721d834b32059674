"""
Centralized configuration management.
All environment variables and settings are defined here.
"""
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = Field(default="Schedule Shift Sync Service", alias="APP_NAME")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000)
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Reconciliation
    unreadable_confidence_threshold: float = Field(
        default=30.0, alias="UNREADABLE_CONFIDENCE_THRESHOLD"
    )

    # Title extraction
    default_shift_title: str = Field(default="Work Shift", alias="DEFAULT_SHIFT_TITLE")
    title_path_separator: str = Field(default="/", alias="TITLE_PATH_SEPARATOR")
    title_path_segments: int = Field(default=2, alias="TITLE_PATH_SEGMENTS")
    title_segment_joiner: str = Field(default=" - ", alias="TITLE_SEGMENT_JOINER")

    # Processing
    max_concurrent_ocr_calls: int = Field(default=4, alias="MAX_CONCURRENT_OCR_CALLS")

    # Storage
    temp_storage_path: str = Field(default="files", alias="STORAGE_PATH")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level is one of the standard levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v_upper

    @field_validator("port")
    @classmethod
    def validate_port(cls, v):
        """Validate port is in valid range."""
        if not (1 <= v <= 65535):
            raise ValueError("Port must be between 1 and 65535")
        return v

    @field_validator("unreadable_confidence_threshold")
    @classmethod
    def validate_confidence_threshold(cls, v):
        """OCR confidence is reported on a 0-100 scale."""
        if not (0 <= v <= 100):
            raise ValueError("Confidence threshold must be between 0 and 100")
        return v

    @field_validator("default_shift_title")
    @classmethod
    def validate_default_title(cls, v):
        if not v or not v.strip():
            raise ValueError("Default shift title must not be blank")
        return v.strip()

    @field_validator("title_path_separator")
    @classmethod
    def validate_path_separator(cls, v):
        if not v:
            raise ValueError("Title path separator must not be empty")
        return v

    @field_validator("title_path_segments")
    @classmethod
    def validate_path_segments(cls, v):
        if v < 1:
            raise ValueError("Title path segments must be at least 1")
        return v

    @field_validator("max_concurrent_ocr_calls")
    @classmethod
    def validate_concurrency(cls, v):
        """Validate concurrency setting."""
        if v < 1:
            raise ValueError("Max concurrent OCR calls must be at least 1")
        if v > 50:
            raise ValueError("Max concurrent OCR calls should not exceed 50")
        return v

    class Config:
        """Pydantic configuration."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    def ensure_directories(self) -> None:
        """Ensure required directories exist."""
        Path(self.temp_storage_path).mkdir(parents=True, exist_ok=True)


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings singleton (useful for testing)."""
    global _settings
    _settings = None
