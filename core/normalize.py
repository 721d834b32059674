"""
Normalization helpers for OCR schedule text.
Handles clock times, day numbers, month names and department-path titles.
"""
import re
from typing import List, Optional

from core.logger import setup_logger

logger = setup_logger(__name__)

MONTH_NUMBERS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4,
    "may": 5, "jun": 6, "jul": 7, "aug": 8,
    "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}

_NON_DIGIT_COLON = re.compile(r"[^\d:]")


def normalize_whitespace(text: Optional[str]) -> str:
    """
    Trim and collapse internal whitespace.

    Args:
        text: Input string

    Returns:
        Normalized string ("" for None)
    """
    if not text or not isinstance(text, str):
        return ""
    return " ".join(text.split())


def month_number(name: str) -> Optional[int]:
    """
    Map a month name or abbreviation to its number.

    Args:
        name: Month name, e.g. "February", "feb", "Sept"

    Returns:
        Month number 1-12, or None if not recognized
    """
    if not name:
        return None
    return MONTH_NUMBERS.get(name.strip().lower()[:3])


def pad_day(day: str) -> str:
    """Left-pad a one or two digit day number to two digits."""
    return day.strip().zfill(2)


def normalize_to_24h(time_str: str) -> str:
    """
    Convert a 12-hour clock token to 24-hour "HH:MM".

    AM/PM is detected by substring presence, then every letter and space is
    stripped and the remainder split on the colon. PM adds 12 hours except
    for 12 PM; 12 AM becomes 0.

    Args:
        time_str: Clock token such as "9:30 AM", "5:30PM" or "12:00 am"

    Returns:
        Time as "HH:MM"

    Raises:
        ValueError: If the token does not resolve to a valid clock time
    """
    cleaned = time_str.strip().upper()
    is_pm = "P" in cleaned
    is_am = "A" in cleaned

    time_part = _NON_DIGIT_COLON.sub("", cleaned)
    pieces = time_part.split(":")
    if len(pieces) != 2 or not pieces[0] or len(pieces[1]) != 2:
        raise ValueError(f"Unrecognized clock time: {time_str!r}")

    hour = int(pieces[0])
    minute = pieces[1]

    if is_pm and hour != 12:
        hour += 12
    if is_am and hour == 12:
        hour = 0

    if hour > 23 or int(minute) > 59:
        raise ValueError(f"Clock time out of range: {time_str!r}")

    return f"{hour:02d}:{minute}"


def format_12h(time_24: str) -> str:
    """
    Render a 24-hour "HH:MM" time in the "H:MM AM/PM" shape shown in schedules.

    normalize_to_24h(format_12h(t)) == t for every valid t.
    """
    hour_str, minute = time_24.split(":")
    hour = int(hour_str)
    suffix = "PM" if hour >= 12 else "AM"
    display_hour = hour % 12 or 12
    return f"{display_hour}:{minute} {suffix}"


def extract_title(
    text: str,
    default: str,
    separator: str = "/",
    segments: int = 2,
    joiner: str = " - ",
) -> str:
    """
    Turn accumulated label text into a shift title.

    Department paths such as "REI/REI/Retail/East/Midwest/0073/Hardgoods/Cycling"
    keep only their trailing segments ("Hardgoods - Cycling"). Text without a
    separator is used as-is.

    Args:
        text: Accumulated label text
        default: Title used when nothing usable remains
        separator: Path separator
        segments: Number of trailing path segments to keep
        joiner: String placed between kept segments

    Returns:
        Resolved, non-empty title
    """
    text = normalize_whitespace(text)
    if not text:
        return default

    if separator not in text:
        return text

    parts: List[str] = [p.strip() for p in text.split(separator)]
    parts = [p for p in parts if p]
    if not parts:
        logger.debug(f"Path title had no usable segments: '{text}'")
        return default

    return joiner.join(parts[-segments:])
