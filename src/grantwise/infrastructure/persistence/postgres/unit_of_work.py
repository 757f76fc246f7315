"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import psycopg
from psycopg_pool import AsyncConnectionPool

from grantwise.application.ports import UnitOfWorkFactory
from grantwise.domain.exceptions import StoreError
from grantwise.infrastructure.persistence.postgres.environment_role_repository import (
    PostgresEnvironmentRoleRepository,
)
from grantwise.infrastructure.persistence.postgres.permission_repository import (
    PostgresPermissionRepository,
)
from grantwise.infrastructure.persistence.postgres.resource_permission_repository import (
    PostgresResourcePermissionRepository,
)
from grantwise.infrastructure.persistence.postgres.role_repository import (
    PostgresRoleRepository,
)
from grantwise.infrastructure.persistence.postgres.user_repository import (
    PostgresUserRepository,
)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: object | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._permissions = PostgresPermissionRepository(self._conn)
        self._roles = PostgresRoleRepository(self._conn)
        self._users = PostgresUserRepository(self._conn)
        self._environment_roles = PostgresEnvironmentRoleRepository(self._conn)
        self._resource_permissions = PostgresResourcePermissionRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def permissions(self) -> PostgresPermissionRepository:
        return self._permissions

    @property
    def roles(self) -> PostgresRoleRepository:
        return self._roles

    @property
    def users(self) -> PostgresUserRepository:
        return self._users

    @property
    def environment_roles(self) -> PostgresEnvironmentRoleRepository:
        return self._environment_roles

    @property
    def resource_permissions(self) -> PostgresResourcePermissionRepository:
        return self._resource_permissions

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool) -> UnitOfWorkFactory:
    """Create UnitOfWork factory (async context manager).

    Commits when the block exits cleanly, rolls back on any exception
    (including task cancellation) and reports driver failures as StoreError.
    """

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        try:
            async with PostgresUnitOfWork(pool) as uow:
                try:
                    yield uow
                    await uow.commit()
                except BaseException:
                    await uow.rollback()
                    raise
        except psycopg.Error as exc:
            raise StoreError(str(exc)) from exc

    return factory
