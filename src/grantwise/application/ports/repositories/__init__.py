"""Repository ports."""

from grantwise.application.ports.repositories.environment_role_repository import (
    EnvironmentRoleRepository,
)
from grantwise.application.ports.repositories.permission_repository import (
    PermissionRepository,
)
from grantwise.application.ports.repositories.resource_permission_repository import (
    ResourcePermissionRepository,
)
from grantwise.application.ports.repositories.role_repository import RoleRepository
from grantwise.application.ports.repositories.user_repository import UserRepository

__all__ = [
    "EnvironmentRoleRepository",
    "PermissionRepository",
    "ResourcePermissionRepository",
    "RoleRepository",
    "UserRepository",
]
