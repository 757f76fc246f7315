"""Domain entities."""

from grantwise.domain.entities.effective_permissions import EffectivePermissions
from grantwise.domain.entities.permission import Permission
from grantwise.domain.entities.resource_permission import ResourcePermission
from grantwise.domain.entities.role import Role
from grantwise.domain.entities.user import User
from grantwise.domain.entities.user_environment_role import UserEnvironmentRole

__all__ = [
    "EffectivePermissions",
    "Permission",
    "ResourcePermission",
    "Role",
    "User",
    "UserEnvironmentRole",
]
