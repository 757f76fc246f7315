"""UserEnvironmentRole entity - role assignment scoped to an environment."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from grantwise.domain.value_objects import Scope


@dataclass
class UserEnvironmentRole:
    """User holds role within scope. GlobalScope means every environment."""

    id: UUID
    user_id: str
    role_id: UUID
    scope: Scope
    created_at: datetime
    created_by: str | None = None

    @property
    def environment_id(self) -> str | None:
        return self.scope.environment_id
