"""Pydantic schemas for attendance records."""

from __future__ import annotations

import datetime as dt
import enum

from pydantic import BaseModel, field_validator

from staffhub.schemas.common import WIRE_MODEL_CONFIG, parse_status


class AttendanceStatus(str, enum.Enum):
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"


# ── Attendance ──────────────────────────────────────────────────────
class AttendanceRecord(BaseModel):
    employee_id: int
    date: dt.date
    status: AttendanceStatus = AttendanceStatus.PRESENT
    check_in_time: str | None = None  # HH:MM
    check_out_time: str | None = None

    model_config = WIRE_MODEL_CONFIG

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, v: object) -> AttendanceStatus:
        return parse_status(AttendanceStatus, v)

    @property
    def key(self) -> tuple[int, dt.date]:
        return (self.employee_id, self.date)

    @property
    def is_present(self) -> bool:
        return self.status is AttendanceStatus.PRESENT


class AttendanceCount(BaseModel):
    present_count: int = 0
    absent_count: int = 0
    total_count: int = 0

    model_config = WIRE_MODEL_CONFIG

    @classmethod
    def from_records(cls, records: list[AttendanceRecord]) -> AttendanceCount:
        present = sum(1 for r in records if r.is_present)
        return cls(
            present_count=present,
            absent_count=len(records) - present,
            total_count=len(records),
        )
