"""Create permission use case."""

from uuid import uuid4

import structlog

from grantwise.application.ports import UnitOfWorkFactory
from grantwise.domain.entities import Permission
from grantwise.domain.exceptions import AlreadyExists, ValidationError
from grantwise.domain.value_objects.effective_permission import contains_reserved

log = structlog.get_logger(__name__)


class CreatePermissionUseCase:
    """Add a ``<resource>.<action>`` permission to the catalog."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, resource: str, action: str, description: str = "") -> Permission:
        for field, value in (("resource", resource), ("action", action)):
            if not value or not value.strip():
                raise ValidationError(f"{field} must not be empty")
            if contains_reserved(value):
                raise ValidationError(f"{field} must not contain '@' or '#': {value!r}")
        if "." in resource:
            raise ValidationError(f"resource must not contain '.': {resource!r}")

        name = Permission.compose_name(resource, action)
        async with self._uow_factory() as uow:
            if await uow.permissions.get_by_name(name):
                raise AlreadyExists(f"permission already exists: {name}")
            permission = Permission(
                id=uuid4(),
                name=name,
                resource=resource,
                action=action,
                description=description,
            )
            await uow.permissions.create(permission)

        log.info("permission_created", permission=name)
        return permission
