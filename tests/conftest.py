"""
Shared fixtures for the schedule sync test suite.
"""
import pytest

from core.config import reset_settings

SETTINGS_ENV_VARS = [
    "APP_NAME",
    "HOST",
    "PORT",
    "LOG_LEVEL",
    "UNREADABLE_CONFIDENCE_THRESHOLD",
    "DEFAULT_SHIFT_TITLE",
    "TITLE_PATH_SEPARATOR",
    "TITLE_PATH_SEGMENTS",
    "TITLE_SEGMENT_JOINER",
    "MAX_CONCURRENT_OCR_CALLS",
    "STORAGE_PATH",
]


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Run every test against default settings and a fresh singleton."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def layout_a_text():
    """Day number inline with the time range."""
    return "\n".join([
        "Menu",
        "My Schedule",
        "February 2026 v",
        "Fri",
        "20 4 9:30 AM-5:30 PM [8:00]",
        "REI/REI/Retail/East/Midwest/0073/Hardgoods/Cycling",
        "Sat",
        "21 10:00 AM-6:00 PM [8:00]",
        "REI/REI/Retail/East/Midwest/0073/Softgoods/Footwear",
        "February 22 - 28",
        "Sun",
        "22 11:00 AM-5:00 PM [6:00]",
        "REI/REI/Retail/East/Midwest/0073/Hardgoods/Cycling",
    ])


@pytest.fixture
def layout_b_text():
    """Day number on its own line before the time range."""
    return "\n".join([
        "February 2026",
        "Sat",
        "21",
        "10:00 AM-5:30 PM [7:30]",
        "REI/REI/Retail/East/Midwest/0073/Hardgoods/Action Sports",
        "Mon",
        "23",
        "Time Off Unpaid",
        "9:00 AM-5:30 PM [8:30]",
        "Tue",
        "24",
        "12:00 PM-8:00 PM",
        "[8:00]",
        "REI/REI/Retail/East/Midwest/0073/Softgoods/Camping",
    ])
