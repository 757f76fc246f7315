"""Cleanup expired permissions use case.

Deletes resource-permission grants whose expiry has passed. Role
assignments and catalog rows have no expiry and are never touched.
"""

import structlog

from grantwise.application.ports import Clock, UnitOfWorkFactory

log = structlog.get_logger(__name__)


class CleanupExpiredPermissionsUseCase:
    """Idempotent sweep of expired resource permissions.

    Safe to run concurrently with itself and with checks: a row deleted by
    an overlapping sweep simply is not counted twice, and checks already
    treat expired rows as non-authorizing.
    """

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory, clock: Clock) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock

    async def execute(self) -> int:
        """Delete grants with expires_at strictly before now. Returns count removed."""
        now = self._clock.now()
        async with self._uow_factory() as uow:
            deleted = await uow.resource_permissions.delete_expired(now)

        log.info(
            "expired_permissions_cleaned",
            deleted=deleted,
            cutoff=now.isoformat(),
        )
        return deleted
