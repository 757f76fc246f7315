"""UserEnvironmentRole repository port."""

from typing import Protocol
from uuid import UUID

from grantwise.domain.entities import UserEnvironmentRole


class EnvironmentRoleRepository(Protocol):
    """Port for environment-role assignment persistence."""

    async def list_by_user(self, user_id: str) -> list[UserEnvironmentRole]: ...

    async def list_for_environment(
        self, user_id: str, environment_id: str
    ) -> list[UserEnvironmentRole]:
        """Assignments in environment_id plus the all-environment ones."""
        ...

    async def create(self, assignment: UserEnvironmentRole) -> UserEnvironmentRole: ...

    async def delete(self, assignment_id: UUID) -> bool:
        """Delete assignment. Returns False if nothing was deleted."""
        ...
