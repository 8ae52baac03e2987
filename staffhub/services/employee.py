"""
Employee directory façade.

Creating and deleting employees is an admin operation. Managers may edit
records too, since assigning someone to a project marks them unavailable.
Offline deletes are soft: the record stays in the local store, flagged.
"""

from __future__ import annotations

import logging

from staffhub.core.exceptions import RecordNotFoundError
from staffhub.schemas.employee import Employee
from staffhub.schemas.user import Role
from staffhub.services.base import ResilientService

logger = logging.getLogger(__name__)

ADMIN_ROLES = (Role.ADMIN,)
EDIT_EMPLOYEE_ROLES = (Role.ADMIN, Role.MANAGER)


def _employees(payload: object) -> list[Employee]:
    return [Employee.model_validate(item) for item in payload or []]


class EmployeeService(ResilientService):
    name = "employee"

    def _find_active(self, employee_id: int) -> Employee:
        found = self._store.employees.find_one(lambda e: e.id == employee_id and not e.deleted)
        if found is None:
            raise RecordNotFoundError(f"employee #{employee_id} not found")
        return found

    # ── Reads ───────────────────────────────────────────────────────
    async def get_all_employees(self) -> list[Employee]:
        async def remote() -> list[Employee]:
            return _employees(await self._client.get("/employees"))

        def local() -> list[Employee]:
            return self._store.employees.list_by(lambda e: not e.deleted)

        return await self._execute("get_all_employees", remote, local)

    async def get_employee(self, employee_id: int) -> Employee:
        async def remote() -> Employee:
            return Employee.model_validate(await self._client.get(f"/employees/{employee_id}"))

        return await self._execute("get_employee", remote, lambda: self._find_active(employee_id))

    async def get_deleted_employees(self) -> list[Employee]:
        self._session.require_role(*ADMIN_ROLES)

        async def remote() -> list[Employee]:
            return _employees(await self._client.get("/employees/deleted"))

        def local() -> list[Employee]:
            return self._store.employees.list_by(lambda e: e.deleted)

        return await self._execute("get_deleted_employees", remote, local)

    async def search_by_skill(self, skill: str) -> list[Employee]:
        async def remote() -> list[Employee]:
            return _employees(
                await self._client.get("/employees/searchBySkill", params={"skill": skill})
            )

        def local() -> list[Employee]:
            return self._store.employees.list_by(lambda e: not e.deleted and e.has_skill(skill))

        return await self._execute("search_by_skill", remote, local)

    async def search_by_project_assigned(self, project_id: int) -> list[Employee]:
        """Employees holding an active assignment to *project_id*."""

        async def remote() -> list[Employee]:
            return _employees(
                await self._client.get(
                    "/employees/searchByProjectAssigned", params={"projectId": project_id}
                )
            )

        def local() -> list[Employee]:
            member_ids = {
                a.employee_id
                for a in self._store.assignments.list_by(
                    lambda a: a.project_id == project_id and a.active
                )
            }
            return self._store.employees.list_by(lambda e: e.id in member_ids and not e.deleted)

        return await self._execute("search_by_project_assigned", remote, local)

    # ── Writes ──────────────────────────────────────────────────────
    async def create_employee(self, employee: Employee) -> Employee:
        self._session.require_role(*ADMIN_ROLES)

        async def remote() -> Employee:
            return Employee.model_validate(
                await self._client.post("/employees", json=employee.to_payload())
            )

        def local() -> Employee:
            stored = self._store.employees.insert(
                employee.model_copy(update={"id": None, "deleted": False})
            )
            logger.info("Employee #%s (%s) created offline", stored.id, stored.email)
            return stored

        return await self._execute("create_employee", remote, local)

    async def update_employee(self, employee_id: int, employee: Employee) -> Employee:
        """Replace every editable field of *employee_id* with those of *employee*."""
        self._session.require_role(*EDIT_EMPLOYEE_ROLES)

        async def remote() -> Employee:
            return Employee.model_validate(
                await self._client.put(f"/employees/{employee_id}", json=employee.to_payload())
            )

        def local() -> Employee:
            self._find_active(employee_id)
            return self._store.employees.update(employee_id, **employee.model_dump(exclude={"id"}))

        return await self._execute("update_employee", remote, local)

    async def delete_employee(self, employee_id: int) -> None:
        self._session.require_role(*ADMIN_ROLES)

        async def remote() -> None:
            await self._client.delete(f"/employees/{employee_id}")

        def local() -> None:
            self._find_active(employee_id)
            self._store.employees.update(employee_id, deleted=True)
            logger.info("Employee #%s deleted offline", employee_id)

        await self._execute("delete_employee", remote, local)

    async def set_availability(self, employee_id: int, available: bool) -> Employee:
        employee = await self.get_employee(employee_id)
        return await self.update_employee(
            employee_id, employee.model_copy(update={"is_available": available})
        )
