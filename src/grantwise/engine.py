"""AuthorizationEngine - the interface exposed to calling services.

Gateways call the check methods on every request, administrators call the
grant methods, and a scheduler calls cleanup_expired_permissions.
"""

from collections.abc import Iterable
from uuid import UUID

from grantwise.application.dto import GrantPermissionRequest, RevokePermissionRequest
from grantwise.application.ports import Clock, PermissionResolver, UnitOfWorkFactory
from grantwise.application.use_cases.catalog.assign_global_role import (
    AssignGlobalRoleUseCase,
)
from grantwise.application.use_cases.catalog.create_permission import (
    CreatePermissionUseCase,
)
from grantwise.application.use_cases.catalog.create_role import CreateRoleUseCase
from grantwise.application.use_cases.catalog.update_role_permissions import (
    UpdateRolePermissionsUseCase,
)
from grantwise.application.use_cases.grant.assign_environment_role import (
    AssignEnvironmentRoleUseCase,
)
from grantwise.application.use_cases.grant.grant_resource_permission import (
    GrantResourcePermissionUseCase,
)
from grantwise.application.use_cases.grant.remove_environment_role import (
    RemoveEnvironmentRoleUseCase,
)
from grantwise.application.use_cases.grant.revoke_resource_permission import (
    RevokeResourcePermissionUseCase,
)
from grantwise.application.use_cases.maintenance.cleanup_expired_permissions import (
    CleanupExpiredPermissionsUseCase,
)
from grantwise.domain.entities import (
    EffectivePermissions,
    Permission,
    ResourcePermission,
    Role,
    UserEnvironmentRole,
)
from grantwise.domain.value_objects import ResourceType
from grantwise.infrastructure.clock import SystemClock
from grantwise.infrastructure.permission import EffectivePermissionResolver


class AuthorizationEngine:
    """Facade over the resolver, grant manager, catalog and sweeper."""

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        clock: Clock | None = None,
        resolver: PermissionResolver | None = None,
    ) -> None:
        clock = clock or SystemClock()
        self.resolver: PermissionResolver = resolver or EffectivePermissionResolver(
            unit_of_work_factory, clock
        )
        self.cleanup = CleanupExpiredPermissionsUseCase(unit_of_work_factory, clock)
        self._grant = GrantResourcePermissionUseCase(unit_of_work_factory, clock)
        self._revoke = RevokeResourcePermissionUseCase(unit_of_work_factory)
        self._assign_env_role = AssignEnvironmentRoleUseCase(unit_of_work_factory, clock)
        self._remove_env_role = RemoveEnvironmentRoleUseCase(unit_of_work_factory)
        self._create_permission = CreatePermissionUseCase(unit_of_work_factory)
        self._create_role = CreateRoleUseCase(unit_of_work_factory)
        self._update_role = UpdateRolePermissionsUseCase(unit_of_work_factory)
        self._assign_global_role = AssignGlobalRoleUseCase(unit_of_work_factory)

    # Checks

    async def check_permission(self, user_id: str, permission: str) -> bool:
        return await self.resolver.check_permission(user_id, permission)

    async def check_environment_permission(
        self, user_id: str, permission: str, environment_id: str
    ) -> bool:
        return await self.resolver.check_environment_permission(
            user_id, permission, environment_id
        )

    async def check_resource_permission(
        self,
        user_id: str,
        resource_type: ResourceType | str,
        resource_id: str,
        action: str,
    ) -> bool:
        return await self.resolver.check_resource_permission(
            user_id, resource_type, resource_id, action
        )

    async def check_namespace_permission(
        self, user_id: str, cluster_id: str, namespace: str, action: str
    ) -> bool:
        return await self.resolver.check_namespace_permission(
            user_id, cluster_id, namespace, action
        )

    async def authorize(
        self,
        user_id: str,
        resource_type: ResourceType | str,
        resource_id: str,
        action: str,
        environment_id: str | None = None,
    ) -> bool:
        return await self.resolver.authorize(
            user_id, resource_type, resource_id, action, environment_id
        )

    # Grant manager

    async def grant_resource_permission(
        self, request: GrantPermissionRequest, granted_by: str
    ) -> ResourcePermission:
        return await self._grant.execute(request, granted_by)

    async def revoke_resource_permission(
        self, request: RevokePermissionRequest, revoked_by: str
    ) -> ResourcePermission:
        return await self._revoke.execute(request, revoked_by)

    async def assign_environment_role(
        self,
        user_id: str,
        role_id: UUID,
        environment_id: str | None,
        assigned_by: str,
    ) -> UserEnvironmentRole:
        return await self._assign_env_role.execute(user_id, role_id, environment_id, assigned_by)

    async def remove_environment_role(self, assignment_id: UUID) -> None:
        await self._remove_env_role.execute(assignment_id)

    # Listings

    async def list_user_permissions(self, user_id: str) -> EffectivePermissions:
        return await self.resolver.list_user_permissions(user_id)

    async def list_resource_permissions(
        self,
        resource_type: ResourceType | str,
        resource_id: str,
        include_expired: bool = False,
    ) -> list[ResourcePermission]:
        return await self.resolver.list_resource_permissions(
            resource_type, resource_id, include_expired
        )

    # Maintenance

    async def cleanup_expired_permissions(self) -> int:
        return await self.cleanup.execute()

    # Catalog

    async def create_permission(
        self, resource: str, action: str, description: str = ""
    ) -> Permission:
        return await self._create_permission.execute(resource, action, description)

    async def create_role(
        self, name: str, description: str = "", permission_names: Iterable[str] = ()
    ) -> Role:
        return await self._create_role.execute(name, description, permission_names)

    async def update_role_permissions(
        self, role_id: UUID, add: Iterable[str] = (), remove: Iterable[str] = ()
    ) -> Role:
        return await self._update_role.execute(role_id, add, remove)

    async def assign_global_role(
        self, user_id: str, role_id: UUID | None, assigned_by: str
    ) -> None:
        await self._assign_global_role.execute(user_id, role_id, assigned_by)
