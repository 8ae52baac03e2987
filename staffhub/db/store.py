"""
In-memory local store used while the remote API is unreachable.

Each table mirrors one remote resource. Every operation holds the store
lock for its whole duration and hands out copies, so a reader never sees
a half-applied write and cannot mutate stored records. Nothing is ever
removed: deleting a record sets its ``deleted`` flag.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from staffhub.core.exceptions import RecordNotFoundError
from staffhub.db import fixtures
from staffhub.schemas.attendance import AttendanceRecord
from staffhub.schemas.employee import Employee
from staffhub.schemas.leave import LeaveRequest
from staffhub.schemas.project import Project, ProjectAssignment

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=BaseModel)
Predicate = Callable[[R], bool]


class RecordTable(Generic[R]):
    """Ordered collection of records keyed by an auto-incrementing ``id``."""

    def __init__(self, name: str, lock: threading.RLock) -> None:
        self.name = name
        self._lock = lock
        self._rows: list[R] = []

    # ── Writes ──────────────────────────────────────────────────────
    def insert(self, record: R) -> R:
        with self._lock:
            row = record.model_copy(deep=True)
            if row.id is None:  # type: ignore[attr-defined]
                row.id = self._next_id()  # type: ignore[attr-defined]
            self._rows.append(row)
            logger.debug("%s: inserted %r", self.name, row)
            return row.model_copy(deep=True)

    def update(self, record_id: int, **changes: Any) -> R:
        """Apply *changes* in place to the record with *record_id*."""
        with self._lock:
            for row in self._rows:
                if getattr(row, "id", None) == record_id:
                    for field, value in changes.items():
                        setattr(row, field, value)
                    logger.debug("%s: updated #%s with %s", self.name, record_id, changes)
                    return row.model_copy(deep=True)
        raise RecordNotFoundError(f"{self.name} #{record_id} not found")

    # ── Reads ───────────────────────────────────────────────────────
    def list_by(self, predicate: Predicate[R]) -> list[R]:
        with self._lock:
            return [r.model_copy(deep=True) for r in self._rows if predicate(r)]

    def find_one(self, predicate: Predicate[R]) -> R | None:
        with self._lock:
            for row in self._rows:
                if predicate(row):
                    return row.model_copy(deep=True)
        return None

    def all(self) -> list[R]:
        return self.list_by(lambda _r: True)

    def __len__(self) -> int:
        with self._lock:
            return len(self._rows)

    # ── Internals ───────────────────────────────────────────────────
    def _next_id(self) -> int:
        ids = [r.id for r in self._rows if r.id is not None]  # type: ignore[attr-defined]
        return max(ids, default=0) + 1

    def _seed(self, records: Iterable[R]) -> None:
        for record in records:
            self.insert(record)


class AttendanceTable(RecordTable[AttendanceRecord]):
    """Attendance is keyed by (employee_id, date) and upserted on insert."""

    def insert(self, record: AttendanceRecord) -> AttendanceRecord:
        with self._lock:
            before = len(self._rows)
            self._rows = [r for r in self._rows if r.key != record.key]
            if len(self._rows) != before:
                logger.debug("%s: replacing record for %s", self.name, record.key)
            row = record.model_copy(deep=True)
            self._rows.append(row)
            return row.model_copy(deep=True)


class LocalStore:
    """Fixture-seeded in-memory tables, one per remote resource."""

    def __init__(self, *, seed: bool = True) -> None:
        self._lock = threading.RLock()
        self.employees: RecordTable[Employee] = RecordTable("employee", self._lock)
        self.attendance = AttendanceTable("attendance", self._lock)
        self.leaves: RecordTable[LeaveRequest] = RecordTable("leave", self._lock)
        self.assignments: RecordTable[ProjectAssignment] = RecordTable("assignment", self._lock)
        self.projects: RecordTable[Project] = RecordTable("project", self._lock)
        if seed:
            self._seed()

    def _seed(self) -> None:
        with self._lock:
            self.employees._seed(fixtures.employees())
            self.attendance._seed(fixtures.attendance_records())
            self.leaves._seed(fixtures.leave_requests())
            self.projects._seed(fixtures.projects())
            self.assignments._seed(fixtures.assignments())
        logger.info(
            "Local store seeded: %d employee, %d attendance, %d leave, %d project, %d assignment records",
            len(self.employees),
            len(self.attendance),
            len(self.leaves),
            len(self.projects),
            len(self.assignments),
        )
