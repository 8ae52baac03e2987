"""Pydantic schemas for projects and project assignments."""

from __future__ import annotations

import datetime as dt
import enum
import logging

from pydantic import BaseModel, Field, field_validator

from staffhub.schemas.common import WIRE_MODEL_CONFIG, parse_status

logger = logging.getLogger(__name__)


class ProjectStatus(str, enum.Enum):
    PLANNING = "PLANNING"
    ACTIVE = "ACTIVE"
    ON_HOLD = "ON_HOLD"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


# ── Project ─────────────────────────────────────────────────────────
class Project(BaseModel):
    id: int | None = None
    name: str
    description: str = ""
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    status: ProjectStatus | None = None
    # Only meaningful while ON_HOLD; derived for every other status.
    progress: int | None = Field(default=None, ge=0, le=100)
    deleted: bool = Field(default=False, exclude=True)  # local soft delete

    model_config = WIRE_MODEL_CONFIG

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, v: object) -> ProjectStatus | None:
        if v is None or v == "":
            return None
        try:
            return parse_status(ProjectStatus, v)
        except ValueError:
            # Unrecognised statuses are treated as active by the progress engine.
            logger.warning("Unknown project status %r, treating as unset", v)
            return None


# ── Assignment ──────────────────────────────────────────────────────
class ProjectAssignment(BaseModel):
    id: int | None = None
    employee_id: int
    project_id: int
    employee_name: str = ""  # denormalised at assignment time
    project_name: str = ""
    role: str
    assigned_by: str = ""
    remarks: str | None = None
    active: bool = True

    model_config = WIRE_MODEL_CONFIG
