"""Tests for the session/role context and the service container."""

import logging

import pytest

from staffhub.core.exceptions import NotAuthenticatedError, PermissionDeniedError
from staffhub.core.session import SessionContext
from staffhub.main import open_container
from staffhub.schemas.user import CurrentUser, Role


def test_anonymous_session():
    session = SessionContext()
    assert session.is_authenticated() is False
    assert session.has_role("developer") is False
    with pytest.raises(NotAuthenticatedError):
        session.require_user()


def test_role_checks_are_case_insensitive(session):
    assert session.has_role("manager") is True
    assert session.has_role(Role.MANAGER) is True
    assert session.has_role("Admin") is False
    assert session.has_role("superuser") is False
    assert session.has_any_role("admin", "MANAGER") is True


def test_require_role(session, developer):
    assert session.require_role(Role.MANAGER, Role.ADMIN).id == 2
    session.sign_in(developer)
    with pytest.raises(PermissionDeniedError) as exc_info:
        session.require_role(Role.MANAGER, Role.ADMIN)
    assert "MANAGER, ADMIN" in str(exc_info.value)


def test_sign_out(session):
    session.sign_out()
    assert session.get_current_user() is None
    session.sign_out()  # already signed out


def test_user_role_is_normalised():
    user = CurrentUser(id=1, name="Admin", email="Admin@Company.com", role="admin")
    assert user.role is Role.ADMIN
    assert user.email == "admin@company.com"


def test_employee_snapshot_only_copies_own_details(developer):
    session = SessionContext(developer)
    own = session.employee_snapshot(65)
    other = session.employee_snapshot(66)
    assert (own.name, own.email) == ("John Doe", "john.doe@company.com")
    assert other.id == 66
    assert other.name is None


@pytest.mark.asyncio
async def test_open_container_closes_client(unreachable, session, caplog):
    caplog.set_level(logging.INFO, logger="staffhub")
    async with open_container(transport=unreachable, session=session) as container:
        assert container.backend_status() == {
            "attendance": True,
            "leave": True,
            "assignment": True,
            "project": True,
            "employee": True,
        }
        await container.attendance.get_all_attendance_reports()
        assert container.backend_status()["attendance"] is False

    assert container.client.is_closed
    assert "progress strategy time_ratio" in caplog.text
    assert "Shutdown complete" in caplog.text
