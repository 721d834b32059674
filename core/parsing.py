"""
OCR schedule transcript parsing.

Classifies each line of a transcript and runs a small state machine over the
classified lines to materialize shift candidates. Handles both observed
layouts of the mobile schedule screen:

    Layout A                          Layout B
    February 2026                     February 2026
    Fri                               Sat
    20 4 9:30 AM-5:30 PM [8:00]       21
    REI/REI/.../Hardgoods/Cycling     10:00 AM-5:30 PM [7:30]
                                      REI/REI/.../Hardgoods/Action Sports

Lines that cannot be resolved are skipped; they never abort the transcript.
"""
import datetime as dt
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, NamedTuple, Optional, Sequence

from core.config import get_settings
from core.exceptions import ParsingError
from core.logger import setup_logger
from core.normalize import extract_title, month_number, normalize_to_24h, pad_day
from core.schema import ShiftCandidate

logger = setup_logger(__name__)

MONTH_NAME = (
    r"(Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|Jun(?:e)?|Jul(?:y)?"
    r"|Aug(?:ust)?|Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)"
)
# Hyphen plus the long-dash variants OCR produces for the same glyph
DASH = r"[-‐‑‒–—―−]"
CLOCK = r"\d{1,2}:\d{2}\s*[AaPp][Mm]"

MONTH_YEAR_RE = re.compile(rf"^{MONTH_NAME}\s+(\d{{4}})(?!\d)", re.IGNORECASE)
WEEK_HEADER_RE = re.compile(rf"^{MONTH_NAME}\s+\S+\s*{DASH}\s*\S+", re.IGNORECASE)
MONTH_PREFIX_RE = re.compile(r"^(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)", re.IGNORECASE)
DAY_OF_WEEK_RE = re.compile(r"^(Mon|Tue|Wed|Thu|Fri|Sat|Sun)", re.IGNORECASE)
UI_CHROME_RE = re.compile(r"^(Home|Inbox|Menu|Schedule|My Schedule)", re.IGNORECASE)
DURATION_RE = re.compile(r"^\[\s*\d{1,2}:\d{2}\s*\]$")
TIME_OFF_RE = re.compile(r"time\s*off", re.IGNORECASE)
DAY_NUMBER_RE = re.compile(r"^\d{1,2}$")
TIME_RANGE_RE = re.compile(rf"({CLOCK})\s*{DASH}\s*({CLOCK})")
INLINE_DAY_RE = re.compile(rf"^(\d{{1,2}})\s+.*?{CLOCK}")

MAX_DAY_MARKER_LENGTH = 10
WEEKDAYS = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")


class LineKind(str, Enum):
    """Line categories, listed in the order they are tested."""
    MONTH_YEAR = "month_year"
    WEEK_HEADER = "week_header"
    DAY_OF_WEEK = "day_of_week"
    UI_CHROME = "ui_chrome"
    DURATION = "duration"
    TIME_OFF = "time_off"
    DAY_NUMBER = "day_number"
    TIME_RANGE = "time_range"
    LABEL = "label"
    IGNORED = "ignored"


class TitleRules(NamedTuple):
    """How department paths are turned into shift titles."""
    default: str
    separator: str = "/"
    segments: int = 2
    joiner: str = " - "

    @classmethod
    def from_settings(cls) -> "TitleRules":
        settings = get_settings()
        return cls(
            default=settings.default_shift_title,
            separator=settings.title_path_separator,
            segments=settings.title_path_segments,
            joiner=settings.title_segment_joiner,
        )


@dataclass
class ParseContext:
    """
    Running state for one transcript.

    Month and year persist across days; everything else is per-day state
    cleared by reset_day(). A fresh context is created for every transcript.
    """
    month: Optional[int] = None
    year: Optional[int] = None
    day_of_week: Optional[str] = None
    expecting_day: bool = False
    pending_day: Optional[str] = None
    pending_label: Optional[str] = None
    skip_next_shift: bool = False

    def reset_day(self) -> None:
        self.day_of_week = None
        self.expecting_day = False
        self.pending_day = None
        self.pending_label = None
        self.skip_next_shift = False

    def advance_to_month(self, month: int) -> None:
        """
        Move to the month named by a week header.

        Week headers carry no year, so crossing December/January in either
        direction adjusts the year.
        """
        if self.year is not None and self.month is not None:
            if self.month == 12 and month == 1:
                self.year += 1
            elif self.month == 1 and month == 12:
                self.year -= 1
        self.month = month


def split_transcript_lines(raw_text: str) -> List[str]:
    """Split a transcript into trimmed, non-empty lines."""
    return [line.strip() for line in raw_text.splitlines() if line.strip()]


def is_day_of_week(line: str) -> bool:
    return len(line) <= MAX_DAY_MARKER_LENGTH and bool(DAY_OF_WEEK_RE.match(line))


def is_title_terminator(line: str) -> bool:
    """Lines that end the forward scan for a shift title."""
    return (
        is_day_of_week(line)
        or bool(MONTH_PREFIX_RE.match(line))
        or bool(TIME_RANGE_RE.search(line))
        or bool(UI_CHROME_RE.match(line))
    )


def classify_line(line: str, ctx: ParseContext, separator: str = "/") -> LineKind:
    """
    Classify a single transcript line. First match wins.

    Args:
        line: Trimmed, non-empty line
        ctx: Current parse context (read only)
        separator: Path separator that disqualifies a line as a pending label

    Returns:
        The line's category
    """
    if MONTH_YEAR_RE.match(line):
        return LineKind.MONTH_YEAR
    if WEEK_HEADER_RE.match(line):
        return LineKind.WEEK_HEADER
    if is_day_of_week(line):
        return LineKind.DAY_OF_WEEK
    if UI_CHROME_RE.match(line):
        return LineKind.UI_CHROME
    if DURATION_RE.match(line):
        return LineKind.DURATION
    if TIME_OFF_RE.search(line):
        return LineKind.TIME_OFF
    if ctx.expecting_day and DAY_NUMBER_RE.match(line):
        return LineKind.DAY_NUMBER
    if TIME_RANGE_RE.search(line):
        return LineKind.TIME_RANGE
    if ctx.pending_day is not None and separator not in line:
        return LineKind.LABEL
    return LineKind.IGNORED


def scan_title_lines(lines: Sequence[str], start: int) -> str:
    """
    Accumulate label text that follows a time range.

    Bracketed duration lines are skipped; the scan stops at the next
    structural line or at the end of the transcript.
    """
    parts: List[str] = []
    for line in lines[start:]:
        if is_title_terminator(line):
            break
        if DURATION_RE.match(line):
            continue
        parts.append(line)
    return " ".join(parts)


def _check_weekday(ctx: ParseContext, shift_date: dt.date) -> None:
    if not ctx.day_of_week:
        return
    marker = ctx.day_of_week[:3].lower()
    actual = WEEKDAYS[shift_date.weekday()]
    if marker != actual:
        logger.debug(f"Day marker '{ctx.day_of_week}' does not match {shift_date.isoformat()} ({actual})")


def build_candidate(
    lines: Sequence[str],
    index: int,
    ctx: ParseContext,
    source_index: int,
    rules: TitleRules,
) -> Optional[ShiftCandidate]:
    """
    Materialize a candidate from the time-range line at lines[index].

    Returns:
        The candidate, or None when the line is a time-off entry or its date
        or times cannot be resolved
    """
    line = lines[index]
    match = TIME_RANGE_RE.search(line)
    if match is None:
        return None

    if ctx.skip_next_shift:
        logger.debug(f"Skipping time-off entry: '{line}'")
        return None

    day = ctx.pending_day
    if day is None:
        inline = INLINE_DAY_RE.match(line)
        if inline:
            day = pad_day(inline.group(1))
    if day is None:
        logger.debug(f"No day number for time range: '{line}'")
        return None

    if ctx.month is None or ctx.year is None:
        logger.debug(f"No month/year context for time range: '{line}'")
        return None

    try:
        start_time = normalize_to_24h(match.group(1))
        end_time = normalize_to_24h(match.group(2))
        shift_date = dt.date(ctx.year, ctx.month, int(day))
    except ValueError as e:
        logger.debug(f"Unresolvable shift line '{line}': {e}")
        return None

    _check_weekday(ctx, shift_date)

    label = ctx.pending_label or scan_title_lines(lines, index + 1)
    title = extract_title(
        label,
        default=rules.default,
        separator=rules.separator,
        segments=rules.segments,
        joiner=rules.joiner,
    )

    return ShiftCandidate(
        date=shift_date,
        start_time=start_time,
        end_time=end_time,
        title=title,
        source_index=source_index,
    )


def iter_shift_candidates(
    lines: Sequence[str],
    source_index: int = 0,
    rules: Optional[TitleRules] = None,
) -> Iterator[ShiftCandidate]:
    """
    Run the line state machine over one transcript and yield candidates.

    Args:
        lines: Trimmed, non-empty transcript lines
        source_index: Index of the image the transcript came from
        rules: Title extraction rules (defaults to configured values)

    Yields:
        ShiftCandidate objects in transcript order
    """
    rules = rules or TitleRules.from_settings()
    ctx = ParseContext()
    emitted = 0

    for index, line in enumerate(lines):
        kind = classify_line(line, ctx, rules.separator)
        # A day number is only accepted on the line right after a day marker
        ctx.expecting_day = False

        if kind is LineKind.MONTH_YEAR:
            match = MONTH_YEAR_RE.match(line)
            ctx.month = month_number(match.group(1))
            ctx.year = int(match.group(2))
            ctx.reset_day()

        elif kind is LineKind.WEEK_HEADER:
            # Day numbers in week headers are often misread; trust the month only
            ctx.advance_to_month(month_number(WEEK_HEADER_RE.match(line).group(1)))
            ctx.reset_day()

        elif kind is LineKind.DAY_OF_WEEK:
            ctx.reset_day()
            ctx.day_of_week = line
            ctx.expecting_day = True

        elif kind is LineKind.TIME_OFF:
            ctx.skip_next_shift = True
            ctx.pending_label = None

        elif kind is LineKind.DAY_NUMBER:
            ctx.pending_day = pad_day(line)

        elif kind is LineKind.TIME_RANGE:
            candidate = build_candidate(lines, index, ctx, source_index, rules)
            ctx.reset_day()
            if candidate is not None:
                emitted += 1
                yield candidate

        elif kind is LineKind.LABEL:
            ctx.pending_label = line

    logger.info(f"Transcript {source_index}: {len(lines)} lines, {emitted} shift candidates")


def parse_schedule_text(
    raw_text: str,
    source_index: int = 0,
    rules: Optional[TitleRules] = None,
) -> Iterator[ShiftCandidate]:
    """
    Parse one OCR transcript into shift candidates.

    The returned iterator is lazy and single-pass.

    Args:
        raw_text: Full transcript text of one image
        source_index: Index of the image the transcript came from
        rules: Title extraction rules (defaults to configured values)

    Returns:
        Iterator of ShiftCandidate

    Raises:
        ParsingError: If raw_text is not a string
    """
    if not isinstance(raw_text, str):
        raise ParsingError(
            "Transcript must be text",
            details={"source_index": source_index, "type": type(raw_text).__name__}
        )

    return iter_shift_candidates(split_transcript_lines(raw_text), source_index, rules)
