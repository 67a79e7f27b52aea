"""One-shot readiness barrier for the catalog facade.

Every facade accessor waits on the gate before touching the cache or the
network. The gate opens exactly once, when the initializer has handed over
the remote catalog client, and never closes again.
"""

from __future__ import annotations

import asyncio
import logging

from streamflix.shared.errors import DependencyUnavailableError, ErrorCode, ErrorContext
from streamflix.shared.logging import log_operation_error

logger = logging.getLogger(__name__)


class ReadinessGate:
    """Asynchronous ``pending -> ready`` barrier.

    Args:
        timeout: Optional default wait bound in seconds. ``None`` waits
            indefinitely; otherwise an expired wait raises
            DependencyUnavailableError.
    """

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout
        self._event = asyncio.Event()

    @property
    def is_ready(self) -> bool:
        return self._event.is_set()

    def signal(self) -> None:
        """Open the gate. Repeated calls are no-ops."""
        if self._event.is_set():
            logger.debug("Readiness gate already open, ignoring repeated signal")
            return

        self._event.set()
        logger.info("Catalog readiness gate opened")

    async def wait(self, timeout: float | None = None) -> None:
        """Suspend until the gate is open.

        Args:
            timeout: Overrides the gate's default bound for this call

        Raises:
            DependencyUnavailableError: If a bound is set and expires first
        """
        if self._event.is_set():
            return

        bound = self.timeout if timeout is None else timeout
        if bound is None:
            await self._event.wait()
            return

        try:
            await asyncio.wait_for(self._event.wait(), timeout=bound)
        except asyncio.TimeoutError as e:
            error = DependencyUnavailableError(
                code=ErrorCode.DEPENDENCY_UNAVAILABLE,
                message=f"Catalog client not available after {bound}s",
                context=ErrorContext(
                    operation="readiness_wait",
                    additional_data={"timeout": bound},
                ),
                original_error=e,
            )
            log_operation_error(logger=logger, error=error)
            raise error from e
