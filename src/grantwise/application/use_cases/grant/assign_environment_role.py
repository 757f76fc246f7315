"""Assign environment role use case."""

from uuid import UUID, uuid4

import structlog

from grantwise.application.ports import Clock, UnitOfWorkFactory
from grantwise.application.use_cases.grant.validation import validate_identifier
from grantwise.domain.entities import UserEnvironmentRole
from grantwise.domain.exceptions import NotFound
from grantwise.domain.value_objects import scope_for

log = structlog.get_logger(__name__)


class AssignEnvironmentRoleUseCase:
    """Assign a role to a user in one environment, or in all of them."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory, clock: Clock) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock

    async def execute(
        self,
        user_id: str,
        role_id: UUID,
        environment_id: str | None,
        assigned_by: str,
    ) -> UserEnvironmentRole:
        """Create the assignment. environment_id=None applies in every environment."""
        validate_identifier(user_id, "user_id")
        scope = scope_for(environment_id)

        async with self._uow_factory() as uow:
            if not await uow.users.get_by_id(user_id):
                raise NotFound("User", user_id)
            role = await uow.roles.get_by_id(role_id)
            if not role:
                raise NotFound("Role", role_id)

            assignment = UserEnvironmentRole(
                id=uuid4(),
                user_id=user_id,
                role_id=role.id,
                scope=scope,
                created_by=assigned_by,
                created_at=self._clock.now(),
            )
            await uow.environment_roles.create(assignment)

        log.info(
            "environment_role_assigned",
            assignment_id=str(assignment.id),
            user_id=user_id,
            role=role.name,
            environment_id=assignment.environment_id,
            assigned_by=assigned_by,
        )
        return assignment
