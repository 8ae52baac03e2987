"""Helpers shared by the record schemas."""

from __future__ import annotations

import enum
import re
from typing import TypeVar

from pydantic.alias_generators import to_camel

E = TypeVar("E", bound=enum.Enum)

_SEPARATORS_RE = re.compile(r"[\s_-]+")

# Wire payloads are camelCase; Python code uses snake_case.
WIRE_MODEL_CONFIG = {"alias_generator": to_camel, "populate_by_name": True}


def status_key(value: str) -> str:
    """Collapse casing and separators: ``On Hold`` / ``on_hold`` -> ``ONHOLD``."""
    return _SEPARATORS_RE.sub("", value).upper()


def parse_status(enum_cls: type[E], value: object) -> E:
    """Map a loosely-cased status string onto its canonical enum member."""
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Status must be a string, got {type(value).__name__}")
    key = status_key(value)
    for member in enum_cls:
        if status_key(member.value) == key:
            return member
    allowed = ", ".join(m.value for m in enum_cls)
    raise ValueError(f"Unknown status {value!r}; expected one of: {allowed}")
