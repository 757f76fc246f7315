"""ResourcePermission repository port."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from grantwise.domain.entities import ResourcePermission
from grantwise.domain.value_objects import ResourceType


class ResourcePermissionRepository(Protocol):
    """Port for resource-permission grant persistence.

    List queries return expired rows too; read-time expiry filtering belongs
    to the resolver so that it uses one clock read per call.
    """

    async def get_by_id(self, permission_id: UUID) -> ResourcePermission | None: ...

    async def list_by_user(self, user_id: str) -> list[ResourcePermission]: ...

    async def list_by_user_and_resource(
        self, user_id: str, resource_type: ResourceType, resource_id: str
    ) -> list[ResourcePermission]: ...

    async def list_by_resource(
        self, resource_type: ResourceType, resource_id: str
    ) -> list[ResourcePermission]: ...

    async def create(self, permission: ResourcePermission) -> ResourcePermission: ...

    async def delete(self, permission_id: UUID) -> bool:
        """Delete grant. Returns False if nothing was deleted."""
        ...

    async def delete_expired(self, now: datetime) -> int:
        """Delete grants with expires_at strictly before now. Returns count."""
        ...
