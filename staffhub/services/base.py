"""
Resilient service façade — remote first, local store once the backend is gone.

Each façade owns a ``FacadeState``. The first UNREACHABLE failure flips it
to degraded; from then on every call is served by the local store and the
remote endpoint is never tried again in this process. REJECTED failures
are raised to the caller untouched and never flip the state.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Awaitable, Callable
from typing import TypeVar

import httpx

from staffhub.api.client import ApiClient
from staffhub.core.config import Settings, settings as default_settings
from staffhub.core.exceptions import classify_failure, log_api_failure, rejected_error
from staffhub.core.session import SessionContext
from staffhub.db.store import LocalStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FacadeState:
    """One-way ``healthy -> degraded`` switch, safe to flip from any thread."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._degraded = False

    @property
    def degraded(self) -> bool:
        with self._lock:
            return self._degraded

    def mark_degraded(self) -> bool:
        """Compare-and-set; returns ``True`` only for the call that flipped it."""
        with self._lock:
            if self._degraded:
                return False
            self._degraded = True
            return True


class ResilientService:
    name = "service"

    def __init__(
        self,
        client: ApiClient,
        store: LocalStore,
        session: SessionContext,
        *,
        config: Settings | None = None,
    ) -> None:
        config = config or default_settings
        self._client = client
        self._store = store
        self._session = session
        self._state = FacadeState()
        self._fallback_latency = max(config.FALLBACK_LATENCY_MS, 0) / 1000

    # ── Availability ────────────────────────────────────────────────
    def is_backend_available(self) -> bool:
        return not self._state.degraded

    @property
    def state(self) -> FacadeState:
        return self._state

    # ── Dispatch ────────────────────────────────────────────────────
    async def _execute(
        self,
        operation: str,
        remote: Callable[[], Awaitable[T]],
        local: Callable[[], T],
    ) -> T:
        """Run *remote*, falling back to *local* when the backend is unreachable."""
        if self._state.degraded:
            return await self._run_local(operation, local)

        try:
            return await remote()
        except (httpx.TransportError, httpx.HTTPStatusError) as exc:
            failure = classify_failure(exc)
            context = f"{self.name}.{operation}"
            if not failure.is_unreachable:
                log_api_failure(context, failure)
                raise rejected_error(failure) from exc
            if self._state.mark_degraded():
                log_api_failure(context, failure)
                logger.warning("%s: backend unreachable, switching to local store", self.name)

        return await self._run_local(operation, local)

    async def _run_local(self, operation: str, local: Callable[[], T]) -> T:
        if self._fallback_latency:
            await asyncio.sleep(self._fallback_latency)
        logger.debug("%s.%s served from local store", self.name, operation)
        return local()
