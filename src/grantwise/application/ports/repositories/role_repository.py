"""Role repository port."""

from typing import Protocol
from uuid import UUID

from grantwise.domain.entities import Role


class RoleRepository(Protocol):
    """Port for role persistence. Returned roles carry their permission names."""

    async def get_by_id(self, role_id: UUID) -> Role | None: ...

    async def get_by_name(self, name: str) -> Role | None: ...

    async def create(self, role: Role) -> Role: ...

    async def add_permissions(self, role_id: UUID, permission_names: list[str]) -> None: ...

    async def remove_permissions(self, role_id: UUID, permission_names: list[str]) -> None: ...
