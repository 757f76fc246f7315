"""User repository port - global role assignment embedded in the user record."""

from typing import Protocol
from uuid import UUID

from grantwise.domain.entities import User


class UserRepository(Protocol):
    """Port for reading users and setting their global role."""

    async def get_by_id(self, user_id: str) -> User | None: ...

    async def set_role(self, user_id: str, role_id: UUID | None) -> bool: ...
