"""EffectivePermissions - derived view of everything a user may do."""

from dataclasses import dataclass, field

from grantwise.domain.entities.resource_permission import ResourcePermission
from grantwise.domain.entities.role import Role
from grantwise.domain.entities.user_environment_role import UserEnvironmentRole
from grantwise.domain.value_objects import EffectivePermission


@dataclass
class EffectivePermissions:
    """Union of global role, environment roles and live resource grants.

    Recomputed on every request, never persisted.
    """

    user_id: str
    global_role: Role | None = None
    environment_roles: list[UserEnvironmentRole] = field(default_factory=list)
    resource_permissions: list[ResourcePermission] = field(default_factory=list)
    permissions: list[EffectivePermission] = field(default_factory=list)

    @property
    def tokens(self) -> list[str]:
        """Encoded, de-duplicated and sorted effective permission strings."""
        return sorted({p.encode() for p in self.permissions})
