"""Update role permissions use case."""

from collections.abc import Iterable
from uuid import UUID

import structlog

from grantwise.application.ports import UnitOfWorkFactory
from grantwise.domain.entities import Role
from grantwise.domain.exceptions import NotFound

log = structlog.get_logger(__name__)


class UpdateRolePermissionsUseCase:
    """Link permissions to, or unlink them from, an existing role."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        role_id: UUID,
        add: Iterable[str] = (),
        remove: Iterable[str] = (),
    ) -> Role:
        """Apply additions then removals and return the updated role."""
        to_add = sorted(set(add))
        to_remove = sorted(set(remove))

        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
            if not role:
                raise NotFound("Role", role_id)
            for permission_name in to_add:
                if not await uow.permissions.get_by_name(permission_name):
                    raise NotFound("Permission", permission_name)

            if to_add:
                await uow.roles.add_permissions(role.id, to_add)
            if to_remove:
                await uow.roles.remove_permissions(role.id, to_remove)
            updated = await uow.roles.get_by_id(role.id)

        log.info(
            "role_permissions_updated",
            role=role.name,
            added=to_add,
            removed=to_remove,
        )
        return updated
