"""Pydantic schemas for the employee directory."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field, field_validator

from staffhub.schemas.common import WIRE_MODEL_CONFIG


class Employee(BaseModel):
    id: int | None = None
    name: str
    email: str
    designation: str = ""
    department: str = ""
    joining_date: dt.date | None = None
    is_available: bool = True
    skills: str = ""  # comma-separated, as the API sends it
    # Soft-delete marker kept by the local store; never sent over the wire.
    deleted: bool = Field(default=False, exclude=True)

    model_config = WIRE_MODEL_CONFIG

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return v.strip().lower()

    @property
    def skill_list(self) -> list[str]:
        return [s.strip() for s in self.skills.split(",") if s.strip()]

    def has_skill(self, skill: str) -> bool:
        """Case-insensitive substring match against any listed skill."""
        needle = skill.strip().lower()
        return bool(needle) and any(needle in s.lower() for s in self.skill_list)

    def to_payload(self) -> dict:
        """Body for create / update calls: every field except ``id``."""
        return self.model_dump(mode="json", by_alias=True, exclude={"id"})
