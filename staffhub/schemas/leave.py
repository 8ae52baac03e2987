"""Pydantic schemas for leave requests."""

from __future__ import annotations

import datetime as dt
import enum

from pydantic import BaseModel, field_validator

from staffhub.schemas.common import WIRE_MODEL_CONFIG, parse_status


class LeaveStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class EmployeeSnapshot(BaseModel):
    """Employee display fields copied into a record when it is written.

    A snapshot, not a reference: renaming or deleting the employee later
    leaves the copied values untouched.
    """

    id: int
    name: str | None = None
    email: str | None = None

    model_config = {**WIRE_MODEL_CONFIG, "frozen": True, "extra": "ignore"}


# ── Leave ───────────────────────────────────────────────────────────
class LeaveApplication(BaseModel):
    start_date: dt.date
    end_date: dt.date
    reason: str

    model_config = WIRE_MODEL_CONFIG


class LeaveRequest(BaseModel):
    id: int | None = None
    start_date: dt.date
    end_date: dt.date
    reason: str = ""
    status: LeaveStatus = LeaveStatus.PENDING
    employee: EmployeeSnapshot | None = None

    model_config = WIRE_MODEL_CONFIG

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, v: object) -> LeaveStatus:
        return parse_status(LeaveStatus, v)

    @property
    def employee_id(self) -> int | None:
        return self.employee.id if self.employee else None
