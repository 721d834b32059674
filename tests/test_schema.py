"""
Unit tests for shift schemas.
"""
import datetime as dt

import pytest
from pydantic import ValidationError

from core.config import reset_settings
from core.schema import (
    OcrResult,
    ReconciledShift,
    ReconcileResult,
    ShiftCandidate,
)


def test_blank_title_falls_back_to_default():
    shift = ShiftCandidate(date=dt.date(2026, 2, 20), start_time="09:30", end_time="17:30", title="   ")
    assert shift.title == "Work Shift"

    shift = ShiftCandidate(date=dt.date(2026, 2, 20), start_time="09:30", end_time="17:30", title=None)
    assert shift.title == "Work Shift"


def test_times_must_be_24_hour():
    with pytest.raises(ValidationError):
        ShiftCandidate(date=dt.date(2026, 2, 20), start_time="9:30 AM", end_time="17:30")

    with pytest.raises(ValidationError):
        ShiftCandidate(date=dt.date(2026, 2, 20), start_time="09:30", end_time="24:00")


def test_key_excludes_title():
    a = ShiftCandidate(date=dt.date(2026, 2, 20), start_time="09:30", end_time="17:30", title="A")
    b = ShiftCandidate(date=dt.date(2026, 2, 20), start_time="09:30", end_time="17:30", title="B")
    assert a.key == b.key


def test_reconciled_shift_gets_id():
    a = ReconciledShift(date=dt.date(2026, 2, 20), start_time="09:30", end_time="17:30")
    b = ReconciledShift(date=dt.date(2026, 2, 20), start_time="09:30", end_time="17:30")
    assert a.id and b.id and a.id != b.id


def test_ocr_confidence_is_clamped():
    assert OcrResult(text="x", confidence=-1).confidence == 0.0
    assert OcrResult(text="x", confidence=140).confidence == 100.0
    assert OcrResult(text="x", confidence="62.5").confidence == 62.5
    assert OcrResult(text="x", confidence=None).confidence == 0.0


def test_reconcile_result_serializes_dates():
    shift = ReconciledShift(date=dt.date(2026, 2, 20), start_time="09:30", end_time="17:30")
    data = ReconcileResult(shifts=[shift], warnings=[]).model_dump(mode="json")

    assert data["shifts"][0]["date"] == "2026-02-20"
    assert data["shifts"][0]["title"] == "Work Shift"


def test_blank_title_uses_configured_default(monkeypatch):
    monkeypatch.setenv("DEFAULT_SHIFT_TITLE", "Shift")
    reset_settings()

    shift = ReconciledShift(date=dt.date(2026, 2, 20), start_time="09:30", end_time="17:30", title="")
    assert shift.title == "Shift"

    shift = ReconciledShift(date=dt.date(2026, 2, 20), start_time="09:30", end_time="17:30")
    assert shift.title == "Shift"
