"""
Shared test fixtures for the StaffHub data-access core.

The remote API is the FastAPI app in ``fake_backend.py`` driven through
``httpx.ASGITransport``; outages are simulated with transports that raise
``httpx.ConnectError``.
"""

import os
import sys
from typing import AsyncGenerator

import pytest

# Ensure project root is importable
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

# Override environment BEFORE importing application modules
os.environ["API_BASE_URL"] = "http://test/api"
os.environ["FALLBACK_LATENCY_MS"] = "0"
os.environ["PROGRESS_STRATEGY"] = "time_ratio"

from fastapi import FastAPI
from httpx import ASGITransport

from fake_backend import UnreachableTransport, create_fake_backend
from staffhub.core.session import SessionContext
from staffhub.main import ServiceContainer, build_container
from staffhub.schemas.user import CurrentUser, Role


# ── Users ───────────────────────────────────────────────────────────
@pytest.fixture
def manager() -> CurrentUser:
    return CurrentUser(id=2, name="Project Manager", email="manager@company.com", role=Role.MANAGER)


@pytest.fixture
def developer() -> CurrentUser:
    return CurrentUser(
        id=65, name="John Doe", email="john.doe@company.com", role=Role.DEVELOPER, employee_id=65
    )


@pytest.fixture
def session(manager: CurrentUser) -> SessionContext:
    """Session signed in as a manager."""
    return SessionContext(manager)


# ── Remote API ──────────────────────────────────────────────────────
@pytest.fixture
def backend() -> FastAPI:
    return create_fake_backend()


@pytest.fixture
def unreachable() -> UnreachableTransport:
    return UnreachableTransport()


@pytest.fixture
async def online(backend: FastAPI, session: SessionContext) -> AsyncGenerator[ServiceContainer, None]:
    """Container whose remote calls reach the fake backend."""
    container = build_container(transport=ASGITransport(app=backend), session=session)
    yield container
    await container.client.aclose()


@pytest.fixture
async def offline(
    unreachable: UnreachableTransport, session: SessionContext
) -> AsyncGenerator[ServiceContainer, None]:
    """Container whose remote calls all fail with a refused connection."""
    container = build_container(transport=unreachable, session=session)
    yield container
    await container.client.aclose()
