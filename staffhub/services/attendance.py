"""
Attendance façade: mark attendance and read per-employee / per-day reports.

The organisation-wide report is restricted to managers and admins.
"""

from __future__ import annotations

import logging
from datetime import date

from staffhub.core.exceptions import RecordNotFoundError
from staffhub.schemas.attendance import AttendanceCount, AttendanceRecord
from staffhub.schemas.user import Role
from staffhub.services.base import ResilientService

logger = logging.getLogger(__name__)

VIEW_ALL_ATTENDANCE_ROLES = (Role.MANAGER, Role.ADMIN)


def _records(payload: object) -> list[AttendanceRecord]:
    return [AttendanceRecord.model_validate(item) for item in payload or []]


class AttendanceService(ResilientService):
    name = "attendance"

    # ── Writes ──────────────────────────────────────────────────────
    async def mark_attendance(self, record: AttendanceRecord) -> AttendanceRecord:
        """Create or replace the record for (employee_id, date)."""

        async def remote() -> AttendanceRecord:
            data = await self._client.post(
                "/attendance/mark",
                json=record.model_dump(mode="json", by_alias=True),
            )
            return AttendanceRecord.model_validate(data)

        def local() -> AttendanceRecord:
            stored = self._store.attendance.insert(record)
            logger.info(
                "Attendance marked offline: employee %s on %s (%s)",
                stored.employee_id,
                stored.date,
                stored.status.value,
            )
            return stored

        return await self._execute("mark_attendance", remote, local)

    # ── Reads ───────────────────────────────────────────────────────
    async def get_attendance_by_employee(self, employee_id: int) -> list[AttendanceRecord]:
        async def remote() -> list[AttendanceRecord]:
            return _records(await self._client.get(f"/attendance/employee/{employee_id}"))

        def local() -> list[AttendanceRecord]:
            return self._store.attendance.list_by(lambda r: r.employee_id == employee_id)

        return await self._execute("get_attendance_by_employee", remote, local)

    async def get_attendance_by_employee_and_date(
        self, employee_id: int, day: date
    ) -> AttendanceRecord:
        async def remote() -> AttendanceRecord:
            data = await self._client.get(
                f"/attendance/employee/{employee_id}/date/{day.isoformat()}"
            )
            return AttendanceRecord.model_validate(data)

        def local() -> AttendanceRecord:
            found = self._store.attendance.find_one(lambda r: r.key == (employee_id, day))
            if found is None:
                raise RecordNotFoundError(
                    f"No attendance for employee {employee_id} on {day.isoformat()}"
                )
            return found

        return await self._execute("get_attendance_by_employee_and_date", remote, local)

    async def get_attendance_count(self, employee_id: int) -> AttendanceCount:
        async def remote() -> AttendanceCount:
            data = await self._client.get(f"/attendance/employee/{employee_id}/count")
            return AttendanceCount.model_validate(data)

        def local() -> AttendanceCount:
            records = self._store.attendance.list_by(lambda r: r.employee_id == employee_id)
            return AttendanceCount.from_records(records)

        return await self._execute("get_attendance_count", remote, local)

    async def get_all_attendance_reports(self) -> list[AttendanceRecord]:
        self._session.require_role(*VIEW_ALL_ATTENDANCE_ROLES)

        async def remote() -> list[AttendanceRecord]:
            return _records(await self._client.get("/attendance/all"))

        return await self._execute("get_all_attendance_reports", remote, self._store.attendance.all)

    async def get_attendance_reports_by_date(self, day: date) -> list[AttendanceRecord]:
        async def remote() -> list[AttendanceRecord]:
            return _records(await self._client.get(f"/attendance/date/{day.isoformat()}"))

        def local() -> list[AttendanceRecord]:
            return self._store.attendance.list_by(lambda r: r.date == day)

        return await self._execute("get_attendance_reports_by_date", remote, local)

    async def count_present_days(self, employee_ids: set[int]) -> int:
        """Total PRESENT records across *employee_ids*."""
        total = 0
        for employee_id in sorted(employee_ids):
            records = await self.get_attendance_by_employee(employee_id)
            total += sum(1 for r in records if r.is_present)
        return total
