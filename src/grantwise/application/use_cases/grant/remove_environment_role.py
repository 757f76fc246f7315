"""Remove environment role use case."""

from uuid import UUID

import structlog

from grantwise.application.ports import UnitOfWorkFactory
from grantwise.domain.exceptions import NotFound

log = structlog.get_logger(__name__)


class RemoveEnvironmentRoleUseCase:
    """Delete an environment role assignment."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, assignment_id: UUID) -> None:
        async with self._uow_factory() as uow:
            if not await uow.environment_roles.delete(assignment_id):
                raise NotFound("UserEnvironmentRole", assignment_id)

        log.info("environment_role_removed", assignment_id=str(assignment_id))
