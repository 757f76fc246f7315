"""Create role use case."""

from collections.abc import Iterable
from uuid import uuid4

import structlog

from grantwise.application.ports import UnitOfWorkFactory
from grantwise.domain.entities import Role
from grantwise.domain.exceptions import AlreadyExists, NotFound, ValidationError

log = structlog.get_logger(__name__)


class CreateRoleUseCase:
    """Create a named role bundling existing catalog permissions."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        name: str,
        description: str = "",
        permission_names: Iterable[str] = (),
    ) -> Role:
        if not name or not name.strip():
            raise ValidationError("role name must not be empty")
        names = frozenset(permission_names)

        async with self._uow_factory() as uow:
            if await uow.roles.get_by_name(name):
                raise AlreadyExists(f"role already exists: {name}")
            for permission_name in sorted(names):
                if not await uow.permissions.get_by_name(permission_name):
                    raise NotFound("Permission", permission_name)

            role = Role(id=uuid4(), name=name, description=description, permissions=names)
            await uow.roles.create(role)

        log.info("role_created", role=name, permissions=sorted(names))
        return role
