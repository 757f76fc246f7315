"""Permission resolver port - answers authorization questions."""

from typing import Protocol

from grantwise.domain.entities import EffectivePermissions, ResourcePermission
from grantwise.domain.value_objects import ResourceType


class PermissionResolver(Protocol):
    """Port for checking user permissions. Never raises for "not authorized"."""

    async def check_permission(self, user_id: str, permission_name: str) -> bool: ...

    async def check_environment_permission(
        self, user_id: str, permission_name: str, environment_id: str
    ) -> bool: ...

    async def check_resource_permission(
        self, user_id: str, resource_type: ResourceType | str, resource_id: str, action: str
    ) -> bool: ...

    async def check_namespace_permission(
        self, user_id: str, cluster_id: str, namespace: str, action: str
    ) -> bool: ...

    async def authorize(
        self,
        user_id: str,
        resource_type: ResourceType | str,
        resource_id: str,
        action: str,
        environment_id: str | None = None,
    ) -> bool: ...

    async def list_user_permissions(self, user_id: str) -> EffectivePermissions: ...

    async def list_resource_permissions(
        self,
        resource_type: ResourceType | str,
        resource_id: str,
        include_expired: bool = False,
    ) -> list[ResourcePermission]: ...
