"""
Unit tests for normalization helpers.
"""
import pytest

from core.normalize import (
    extract_title,
    format_12h,
    month_number,
    normalize_to_24h,
    normalize_whitespace,
    pad_day,
)


@pytest.mark.parametrize("raw, expected", [
    ("9:30 AM", "09:30"),
    ("5:30 PM", "17:30"),
    ("5:30PM", "17:30"),
    ("12:00 PM", "12:00"),
    ("12:15 am", "00:15"),
    ("11:59 pm", "23:59"),
])
def test_normalize_to_24h(raw, expected):
    assert normalize_to_24h(raw) == expected


@pytest.mark.parametrize("raw", ["13:30 PM", "9:75 AM", "930 AM", ":30 PM"])
def test_normalize_to_24h_rejects_invalid(raw):
    with pytest.raises(ValueError):
        normalize_to_24h(raw)


def test_normalization_is_idempotent_through_12h_shape():
    """Re-rendering a normalized time as H:MM AM/PM and normalizing again is a no-op."""
    for hour in range(24):
        for minute in ("00", "30", "59"):
            time_24 = f"{hour:02d}:{minute}"
            assert normalize_to_24h(format_12h(time_24)) == time_24


def test_format_12h():
    assert format_12h("00:05") == "12:05 AM"
    assert format_12h("09:30") == "9:30 AM"
    assert format_12h("12:00") == "12:00 PM"
    assert format_12h("17:30") == "5:30 PM"


def test_month_number():
    assert month_number("February") == 2
    assert month_number("feb") == 2
    assert month_number("Sept") == 9
    assert month_number("DEC") == 12
    assert month_number("Frebuary") is None
    assert month_number("") is None


def test_pad_day():
    assert pad_day("4") == "04"
    assert pad_day("21") == "21"


def test_normalize_whitespace():
    assert normalize_whitespace("  Hardgoods   Cycling ") == "Hardgoods Cycling"
    assert normalize_whitespace(None) == ""


def test_extract_title_keeps_last_two_path_segments():
    title = extract_title(
        "REI/REI/Retail/East/Midwest/0073/Hardgoods/Cycling", default="Work Shift"
    )
    assert title == "Hardgoods - Cycling"


def test_extract_title_path_split_across_lines():
    title = extract_title("REI/REI/Retail/Hardgoods/ Action Sports", default="Work Shift")
    assert title == "Hardgoods - Action Sports"


def test_extract_title_plain_text_verbatim():
    assert extract_title("Cashier  Front End", default="Work Shift") == "Cashier Front End"


def test_extract_title_single_segment_and_empty():
    assert extract_title("/Cycling/", default="Work Shift") == "Cycling"
    assert extract_title("///", default="Work Shift") == "Work Shift"
    assert extract_title("", default="Work Shift") == "Work Shift"


def test_extract_title_configurable_rules():
    path = "REI/REI/Retail/East/Midwest/0073/Hardgoods/Cycling"
    assert extract_title(path, default="Shift", segments=1) == "Cycling"
    assert extract_title(path, default="Shift", segments=3, joiner=" / ") == "0073 / Hardgoods / Cycling"
    assert extract_title("Retail>Hardgoods>Cycling", default="Shift", separator=">") == "Hardgoods - Cycling"
