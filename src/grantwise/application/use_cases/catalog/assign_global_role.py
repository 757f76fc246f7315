"""Assign global role use case."""

from uuid import UUID

import structlog

from grantwise.application.ports import UnitOfWorkFactory
from grantwise.domain.exceptions import NotFound

log = structlog.get_logger(__name__)


class AssignGlobalRoleUseCase:
    """Set (or clear, with role_id=None) the single global role of a user."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, user_id: str, role_id: UUID | None, assigned_by: str) -> None:
        async with self._uow_factory() as uow:
            if role_id is not None and not await uow.roles.get_by_id(role_id):
                raise NotFound("Role", role_id)
            if not await uow.users.set_role(user_id, role_id):
                raise NotFound("User", user_id)

        log.info(
            "global_role_assigned",
            user_id=user_id,
            role_id=str(role_id) if role_id else None,
            assigned_by=assigned_by,
        )
