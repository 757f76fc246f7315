"""Revoke resource permission use case."""

import structlog

from grantwise.application.dto import RevokePermissionRequest
from grantwise.application.ports import UnitOfWorkFactory
from grantwise.application.use_cases.grant.validation import validate_reason
from grantwise.domain.entities import ResourcePermission
from grantwise.domain.exceptions import NotFound

log = structlog.get_logger(__name__)


class RevokeResourcePermissionUseCase:
    """Delete a resource permission grant."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self, request: RevokePermissionRequest, revoked_by: str
    ) -> ResourcePermission:
        """Revoke the grant and return the removed record for auditing."""
        validate_reason(request.reason)

        async with self._uow_factory() as uow:
            perm = await uow.resource_permissions.get_by_id(request.permission_id)
            if not perm:
                raise NotFound("ResourcePermission", request.permission_id)
            # A concurrent revoke may have won between the read and the delete.
            if not await uow.resource_permissions.delete(perm.id):
                raise NotFound("ResourcePermission", request.permission_id)

        log.info(
            "resource_permission_revoked",
            permission_id=str(perm.id),
            user_id=perm.user_id,
            resource_type=str(perm.resource_type),
            resource_id=perm.resource_id,
            revoked_by=revoked_by,
            reason=request.reason,
        )
        return perm
