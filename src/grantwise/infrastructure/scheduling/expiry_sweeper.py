"""Periodic runner for the expired-permission cleanup."""

import asyncio

import structlog

from grantwise.application.use_cases.maintenance.cleanup_expired_permissions import (
    CleanupExpiredPermissionsUseCase,
)
from grantwise.domain.exceptions import StoreError

log = structlog.get_logger(__name__)


class ExpirySweeper:
    """Runs CleanupExpiredPermissionsUseCase every interval_seconds.

    A failed sweep is logged and retried on the next tick; the loop only
    ends when stop() is called or the task is cancelled.
    """

    def __init__(
        self,
        cleanup: CleanupExpiredPermissionsUseCase,
        interval_seconds: float,
    ) -> None:
        self._cleanup = cleanup
        self._interval = interval_seconds
        self._stopped = asyncio.Event()

    async def run_once(self) -> int | None:
        """Run one sweep. Returns the count removed, or None if the store failed."""
        try:
            return await self._cleanup.execute()
        except StoreError as exc:
            log.warning("expiry_sweep_failed", error=str(exc))
            return None

    async def run_forever(self) -> None:
        log.info("expiry_sweeper_started", interval_seconds=self._interval)
        while not self._stopped.is_set():
            await self.run_once()
            try:
                await asyncio.wait_for(self._stopped.wait(), timeout=self._interval)
            except TimeoutError:
                pass
        log.info("expiry_sweeper_stopped")

    def stop(self) -> None:
        self._stopped.set()
