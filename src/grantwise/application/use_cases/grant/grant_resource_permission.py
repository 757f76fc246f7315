"""Grant resource permission use case."""

from uuid import uuid4

import structlog

from grantwise.application.dto import GrantPermissionRequest
from grantwise.application.ports import Clock, UnitOfWorkFactory
from grantwise.application.use_cases.grant.validation import (
    normalize_actions,
    validate_expiry,
    validate_identifier,
    validate_reason,
)
from grantwise.domain.entities import ResourcePermission
from grantwise.domain.exceptions import NotFound
from grantwise.domain.value_objects import ResourceType, scope_for

log = structlog.get_logger(__name__)


class GrantResourcePermissionUseCase:
    """Grant a set of actions on one resource to a user.

    Overlapping grants for the same user and resource are stored side by
    side; the resolver unions them at check time.
    """

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory, clock: Clock) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock

    async def execute(
        self, request: GrantPermissionRequest, granted_by: str
    ) -> ResourcePermission:
        now = self._clock.now()
        validate_identifier(request.user_id, "user_id")
        resource_type = ResourceType.parse(request.resource_type)
        validate_identifier(request.resource_id, "resource_id")
        actions = normalize_actions(request.actions)
        scope = scope_for(request.environment_id)
        validate_expiry(request.expires_at, now)
        validate_reason(request.reason)

        async with self._uow_factory() as uow:
            if not await uow.users.get_by_id(request.user_id):
                raise NotFound("User", request.user_id)

            permission = ResourcePermission(
                id=uuid4(),
                user_id=request.user_id,
                resource_type=resource_type,
                resource_id=request.resource_id,
                actions=actions,
                scope=scope,
                expires_at=request.expires_at,
                granted_by=granted_by,
                reason=request.reason,
                created_at=now,
                updated_at=now,
            )
            await uow.resource_permissions.create(permission)

        log.info(
            "resource_permission_granted",
            permission_id=str(permission.id),
            user_id=permission.user_id,
            resource_type=str(resource_type),
            resource_id=permission.resource_id,
            actions=sorted(actions),
            environment_id=permission.environment_id,
            expires_at=permission.expires_at.isoformat() if permission.expires_at else None,
            granted_by=granted_by,
            reason=permission.reason,
        )
        return permission
