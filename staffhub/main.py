"""
StaffHub — service container and entry point.

This is the **only** module that assembles the client. Data access lives
in `services/`, records in `schemas/`, the offline fallback in `db/` and
cross-cutting concerns in `core/`.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx

from staffhub.api.client import ApiClient
from staffhub.core.config import Settings, settings as default_settings
from staffhub.core.session import SessionContext
from staffhub.db.store import LocalStore
from staffhub.services.attendance import AttendanceService
from staffhub.services.base import ResilientService
from staffhub.services.employee import EmployeeService
from staffhub.services.leave import LeaveService
from staffhub.services.progress import ProgressEngine, build_strategy
from staffhub.services.project import AssignmentService, ProjectService

logger = logging.getLogger(__name__)


def configure_logging(config: Settings | None = None) -> None:
    config = config or default_settings
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )


@dataclass(frozen=True)
class ServiceContainer:
    settings: Settings
    client: ApiClient
    store: LocalStore
    session: SessionContext

    attendance: AttendanceService
    leaves: LeaveService
    assignments: AssignmentService
    projects: ProjectService
    employees: EmployeeService
    progress: ProgressEngine

    def facades(self) -> tuple[ResilientService, ...]:
        return (self.attendance, self.leaves, self.assignments, self.projects, self.employees)

    def backend_status(self) -> dict[str, bool]:
        """Façade name -> whether it still talks to the remote API."""
        return {f.name: f.is_backend_available() for f in self.facades()}


def build_container(
    config: Settings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    session: SessionContext | None = None,
    store: LocalStore | None = None,
) -> ServiceContainer:
    config = config or default_settings
    client = ApiClient(config=config, transport=transport)
    store = store or LocalStore()
    session = session or SessionContext()

    attendance = AttendanceService(client, store, session, config=config)
    leaves = LeaveService(client, store, session, config=config)
    employees = EmployeeService(client, store, session, config=config)
    assignments = AssignmentService(client, store, session, config=config, employees=employees)
    projects = ProjectService(client, store, session, config=config)
    progress = ProgressEngine(
        build_strategy(config=config),
        assignments=assignments,
        attendance=attendance,
        projects=projects,
    )

    return ServiceContainer(
        settings=config,
        client=client,
        store=store,
        session=session,
        attendance=attendance,
        leaves=leaves,
        assignments=assignments,
        projects=projects,
        employees=employees,
        progress=progress,
    )


# ── Lifespan ────────────────────────────────────────────────────────
@asynccontextmanager
async def open_container(
    config: Settings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    session: SessionContext | None = None,
    store: LocalStore | None = None,
) -> AsyncIterator[ServiceContainer]:
    """Build a container and close its HTTP client on exit."""
    container = build_container(config, transport=transport, session=session, store=store)
    logger.info(
        "%s v%s started (API %s, progress strategy %s)",
        container.settings.PROJECT_NAME,
        container.settings.VERSION,
        container.client.base_url,
        container.progress.strategy.name,
    )
    try:
        yield container
    finally:
        await container.client.aclose()
        logger.info("Shutdown complete")
