"""Unit of Work port - transactional boundary over the grant store."""

from contextlib import AbstractAsyncContextManager
from typing import Protocol

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


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def permissions(self) -> PermissionRepository: ...

    @property
    def roles(self) -> RoleRepository: ...

    @property
    def users(self) -> UserRepository: ...

    @property
    def environment_roles(self) -> EnvironmentRoleRepository: ...

    @property
    def resource_permissions(self) -> ResourcePermissionRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    def __call__(self) -> AbstractAsyncContextManager[UnitOfWork]: ...
