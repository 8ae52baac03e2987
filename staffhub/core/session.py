"""
Session and role context: who is signed in and what they may do.

Consumed synchronously by the service façades: role checks gate
manager-only operations, and the current user stamps the denormalised
employee fields of records written to the local store.
"""

from __future__ import annotations

import logging
import threading

from staffhub.core.exceptions import NotAuthenticatedError, PermissionDeniedError
from staffhub.schemas.leave import EmployeeSnapshot
from staffhub.schemas.user import CurrentUser, Role

logger = logging.getLogger(__name__)


class SessionContext:
    def __init__(self, user: CurrentUser | None = None) -> None:
        self._lock = threading.Lock()
        self._user = user

    # ── Sign in / out ───────────────────────────────────────────────
    def sign_in(self, user: CurrentUser) -> None:
        with self._lock:
            self._user = user
        logger.info("Signed in %s (%s)", user.email, user.role.value)

    def sign_out(self) -> None:
        with self._lock:
            user, self._user = self._user, None
        if user is not None:
            logger.info("Signed out %s", user.email)

    # ── Queries ─────────────────────────────────────────────────────
    def get_current_user(self) -> CurrentUser | None:
        with self._lock:
            return self._user

    def is_authenticated(self) -> bool:
        return self.get_current_user() is not None

    def has_role(self, role: Role | str) -> bool:
        user = self.get_current_user()
        if user is None:
            return False
        try:
            return user.role is Role(role.upper())
        except ValueError:
            return False

    def has_any_role(self, *roles: Role | str) -> bool:
        return any(self.has_role(r) for r in roles)

    # ── Guards ──────────────────────────────────────────────────────
    def require_user(self) -> CurrentUser:
        user = self.get_current_user()
        if user is None:
            raise NotAuthenticatedError("Sign in required")
        return user

    def require_role(self, *roles: Role) -> CurrentUser:
        """Return the current user if they hold one of *roles*."""
        user = self.require_user()
        if user.role not in roles:
            allowed = ", ".join(r.value for r in roles)
            raise PermissionDeniedError(f"{allowed} privileges required")
        return user

    def employee_snapshot(self, employee_id: int) -> EmployeeSnapshot:
        """Denormalised employee fields for a record written on *employee_id*'s behalf.

        Name and email are only copied when the signed-in user is that
        employee; otherwise the snapshot carries the id alone.
        """
        user = self.get_current_user()
        if user is not None and employee_id in (user.employee_id, user.id):
            return EmployeeSnapshot(id=employee_id, name=user.name, email=user.email)
        return EmployeeSnapshot(id=employee_id)
