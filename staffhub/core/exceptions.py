"""
Error taxonomy and the network failure classifier.

A failed remote call is either UNREACHABLE (no response ever arrived) or
REJECTED (the server answered with an error status). Only the former is
recovered by the service façades.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class StaffHubError(Exception):
    """Base class for every error raised by this package."""


class ApiError(StaffHubError):
    """Failure talking to the remote API."""

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class BackendRejectedError(ApiError):
    """The remote API answered with a non-success status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        body: Any = None,
        url: str | None = None,
    ) -> None:
        super().__init__(message, url=url)
        self.status_code = status_code
        self.body = body


class RecordNotFoundError(BackendRejectedError):
    """The local store has no record matching the request."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=404, body={"detail": message})


class NotAuthenticatedError(StaffHubError):
    """No user is signed in."""


class PermissionDeniedError(StaffHubError):
    """The signed-in user lacks the role required for an operation."""


# ── Classification ──────────────────────────────────────────────────
class FailureKind(str, enum.Enum):
    UNREACHABLE = "UNREACHABLE"
    REJECTED = "REJECTED"


@dataclass(frozen=True)
class Failure:
    kind: FailureKind
    status_code: int | None = None
    body: Any = None
    url: str | None = None
    message: str = ""

    @property
    def is_unreachable(self) -> bool:
        return self.kind is FailureKind.UNREACHABLE


def _response_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def classify_failure(exc: BaseException) -> Failure:
    """Classify a failed httpx call. Pure; never retries.

    Raises ``TypeError`` for anything that is not an httpx network error so
    programming mistakes are never mistaken for an outage.
    """
    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        return Failure(
            kind=FailureKind.REJECTED,
            status_code=response.status_code,
            body=_response_body(response),
            url=str(exc.request.url),
            message=str(exc),
        )
    if isinstance(exc, httpx.UnsupportedProtocol):
        # bad scheme in API_BASE_URL: a configuration error, not an outage
        raise TypeError(f"Unsupported API URL: {exc}") from exc
    if isinstance(exc, httpx.TransportError):
        try:
            url = str(exc.request.url)
        except RuntimeError:  # raised when the error was built without a request
            url = None
        return Failure(kind=FailureKind.UNREACHABLE, url=url, message=str(exc) or type(exc).__name__)
    raise TypeError(f"Not a network failure: {type(exc).__name__}")


def rejected_error(failure: Failure) -> BackendRejectedError:
    """Build the caller-facing error for a REJECTED failure."""
    return BackendRejectedError(
        f"API error {failure.status_code}: {failure.body}",
        status_code=failure.status_code or 0,
        body=failure.body,
        url=failure.url,
    )


def log_api_failure(context: str, failure: Failure) -> None:
    """Log a failure with a hint matching its class."""
    if failure.is_unreachable:
        logger.warning(
            "%s: connection failed (%s) - backend server may not be running",
            context,
            failure.message,
        )
    elif (failure.status_code or 0) >= 500:
        logger.error(
            "%s: server error %s from %s - check backend logs: %s",
            context,
            failure.status_code,
            failure.url,
            failure.body,
        )
    else:
        logger.error(
            "%s: client error %s from %s - check request parameters: %s",
            context,
            failure.status_code,
            failure.url,
            failure.body,
        )
