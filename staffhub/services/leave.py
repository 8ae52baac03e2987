"""
Leave façade: apply for leave, list requests, approve / reject.

Listing every request and changing a status are manager operations.
"""

from __future__ import annotations

import logging

from staffhub.schemas.common import parse_status
from staffhub.schemas.leave import LeaveApplication, LeaveRequest, LeaveStatus
from staffhub.schemas.user import Role
from staffhub.services.base import ResilientService

logger = logging.getLogger(__name__)

MANAGE_LEAVE_ROLES = (Role.MANAGER, Role.ADMIN)


def _requests(payload: object) -> list[LeaveRequest]:
    return [LeaveRequest.model_validate(item) for item in payload or []]


class LeaveService(ResilientService):
    name = "leave"

    async def apply_leave(self, employee_id: int, application: LeaveApplication) -> LeaveRequest:
        """Submit a request; new requests always start PENDING."""

        async def remote() -> LeaveRequest:
            payload = {
                "employeeId": employee_id,
                **application.model_dump(mode="json", by_alias=True),
                "status": LeaveStatus.PENDING.value,
            }
            data = await self._client.post(f"/leaves/apply/{employee_id}", json=payload)
            return LeaveRequest.model_validate(data)

        def local() -> LeaveRequest:
            stored = self._store.leaves.insert(
                LeaveRequest(
                    start_date=application.start_date,
                    end_date=application.end_date,
                    reason=application.reason,
                    status=LeaveStatus.PENDING,
                    employee=self._session.employee_snapshot(employee_id),
                )
            )
            logger.info("Leave request #%s stored offline for employee %s", stored.id, employee_id)
            return stored

        return await self._execute("apply_leave", remote, local)

    async def get_leaves_by_employee(self, employee_id: int) -> list[LeaveRequest]:
        async def remote() -> list[LeaveRequest]:
            return _requests(await self._client.get(f"/leaves/employee/{employee_id}"))

        def local() -> list[LeaveRequest]:
            return self._store.leaves.list_by(lambda r: r.employee_id == employee_id)

        return await self._execute("get_leaves_by_employee", remote, local)

    async def get_all_leave_requests(self) -> list[LeaveRequest]:
        self._session.require_role(*MANAGE_LEAVE_ROLES)

        async def remote() -> list[LeaveRequest]:
            return _requests(await self._client.get("/leaves/all"))

        return await self._execute("get_all_leave_requests", remote, self._store.leaves.all)

    async def update_leave_status(self, leave_id: int, status: LeaveStatus | str) -> bool:
        """Move request *leave_id* to *status* (any casing accepted)."""
        self._session.require_role(*MANAGE_LEAVE_ROLES)
        new_status = parse_status(LeaveStatus, status)

        async def remote() -> bool:
            data = await self._client.put(
                f"/leaves/update-status/{leave_id}", json={"status": new_status.value}
            )
            return bool(data)

        def local() -> bool:
            self._store.leaves.update(leave_id, status=new_status)
            logger.info("Leave request #%s set to %s offline", leave_id, new_status.value)
            return True

        return await self._execute("update_leave_status", remote, local)
