"""Pydantic schemas for the signed-in user."""

from __future__ import annotations

import enum

from pydantic import BaseModel, field_validator
from pydantic.alias_generators import to_camel


class Role(str, enum.Enum):
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    DEVELOPER = "DEVELOPER"


class CurrentUser(BaseModel):
    id: int
    name: str
    email: str
    role: Role
    employee_id: int | None = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    @field_validator("role", mode="before")
    @classmethod
    def _normalise_role(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("email")
    @classmethod
    def _normalise_email(cls, v: str) -> str:
        return v.strip().lower()
