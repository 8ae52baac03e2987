"""
Project and project-assignment façades.

Creating, editing or deleting projects and assigning people to them is
limited to managers and admins. Each façade degrades independently.
Assigning someone marks them unavailable in the employee directory.
"""

from __future__ import annotations

import logging

from staffhub.core.exceptions import BackendRejectedError, RecordNotFoundError
from staffhub.schemas.project import Project, ProjectAssignment
from staffhub.schemas.user import Role
from staffhub.services.base import ResilientService
from staffhub.services.employee import EmployeeService

logger = logging.getLogger(__name__)

MANAGE_PROJECT_ROLES = (Role.MANAGER, Role.ADMIN)


# ── Projects ────────────────────────────────────────────────────────
class ProjectService(ResilientService):
    name = "project"

    def _find_active(self, project_id: int) -> Project:
        found = self._store.projects.find_one(lambda p: p.id == project_id and not p.deleted)
        if found is None:
            raise RecordNotFoundError(f"project #{project_id} not found")
        return found

    async def get_all_projects(self) -> list[Project]:
        async def remote() -> list[Project]:
            data = await self._client.get("/projects")
            return [Project.model_validate(item) for item in data or []]

        def local() -> list[Project]:
            return self._store.projects.list_by(lambda p: not p.deleted)

        return await self._execute("get_all_projects", remote, local)

    async def get_project(self, project_id: int) -> Project:
        async def remote() -> Project:
            return Project.model_validate(await self._client.get(f"/projects/{project_id}"))

        return await self._execute("get_project", remote, lambda: self._find_active(project_id))

    async def create_project(self, project: Project) -> Project:
        self._session.require_role(*MANAGE_PROJECT_ROLES)

        async def remote() -> Project:
            data = await self._client.post(
                "/projects", json=project.model_dump(mode="json", by_alias=True, exclude_none=True)
            )
            return Project.model_validate(data)

        def local() -> Project:
            stored = self._store.projects.insert(project.model_copy(update={"id": None}))
            logger.info("Project #%s '%s' created offline", stored.id, stored.name)
            return stored

        return await self._execute("create_project", remote, local)

    async def update_project(self, project_id: int, project: Project) -> Project:
        self._session.require_role(*MANAGE_PROJECT_ROLES)

        async def remote() -> Project:
            data = await self._client.patch(
                f"/projects/{project_id}",
                json=project.model_dump(mode="json", by_alias=True, exclude_none=True),
            )
            return Project.model_validate(data)

        def local() -> Project:
            self._find_active(project_id)
            changes = project.model_dump(exclude={"id"}, exclude_none=True)
            return self._store.projects.update(project_id, **changes)

        return await self._execute("update_project", remote, local)

    async def delete_project(self, project_id: int) -> None:
        self._session.require_role(*MANAGE_PROJECT_ROLES)

        async def remote() -> None:
            await self._client.delete(f"/projects/{project_id}")

        def local() -> None:
            self._find_active(project_id)
            self._store.projects.update(project_id, deleted=True)
            logger.info("Project #%s deleted offline", project_id)

        await self._execute("delete_project", remote, local)


# ── Assignments ─────────────────────────────────────────────────────
class AssignmentService(ResilientService):
    name = "assignment"

    def __init__(self, *args, employees: EmployeeService | None = None, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._employees = employees

    async def assign_project(self, assignment: ProjectAssignment) -> ProjectAssignment:
        user = self._session.require_role(*MANAGE_PROJECT_ROLES)

        async def remote() -> ProjectAssignment:
            data = await self._client.post(
                "/assignments",
                json=assignment.model_dump(mode="json", by_alias=True, exclude={"id"}),
            )
            return ProjectAssignment.model_validate(data)

        def local() -> ProjectAssignment:
            record = assignment.model_copy(
                update={"id": None, "assigned_by": assignment.assigned_by or user.name}
            )
            stored = self._store.assignments.insert(record)
            logger.info(
                "Employee %s assigned to project %s offline (assignment #%s)",
                stored.employee_id,
                stored.project_id,
                stored.id,
            )
            return stored

        created = await self._execute("assign_project", remote, local)
        if self._employees is not None:
            await self._mark_unavailable(created.employee_id)
        return created

    async def _mark_unavailable(self, employee_id: int) -> None:
        try:
            await self._employees.set_availability(employee_id, False)
        except BackendRejectedError as exc:
            # The assignment itself already succeeded.
            logger.error(
                "Project assigned but availability of employee %s not updated: %s",
                employee_id,
                exc,
            )

    async def get_all_assignments(self) -> list[ProjectAssignment]:
        async def remote() -> list[ProjectAssignment]:
            data = await self._client.get("/assignments")
            return [ProjectAssignment.model_validate(item) for item in data or []]

        return await self._execute("get_all_assignments", remote, self._store.assignments.all)

    async def get_assignments_for_project(self, project_id: int) -> list[ProjectAssignment]:
        """Active assignments of one project; duplicates per employee are kept."""
        assignments = await self.get_all_assignments()
        return [a for a in assignments if a.project_id == project_id and a.active]

    async def get_team_member_ids(self, project_id: int) -> set[int]:
        """Employees with at least one active assignment to *project_id*."""
        return {a.employee_id for a in await self.get_assignments_for_project(project_id)}
