"""Permission catalog repository port."""

from typing import Protocol

from grantwise.domain.entities import Permission


class PermissionRepository(Protocol):
    """Port for permission catalog persistence."""

    async def get_by_name(self, name: str) -> Permission | None: ...

    async def create(self, permission: Permission) -> Permission: ...
