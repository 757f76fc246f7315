"""PostgreSQL environment role repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from grantwise.domain.entities import UserEnvironmentRole
from grantwise.domain.value_objects import scope_for

_COLUMNS = "id, user_id, role_id, environment_id, created_at, created_by"


def _to_assignment(r: tuple) -> UserEnvironmentRole:
    return UserEnvironmentRole(
        id=r[0],
        user_id=r[1],
        role_id=r[2],
        scope=scope_for(r[3]),
        created_at=r[4],
        created_by=r[5],
    )


class PostgresEnvironmentRoleRepository:
    """UserEnvironmentRole repository implementation.

    environment_id IS NULL stores GlobalScope.
    """

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def list_by_user(self, user_id: str) -> list[UserEnvironmentRole]:
        """List every assignment of user."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM user_environment_role WHERE user_id = %s "
            "ORDER BY created_at",
            (user_id,),
        )
        rows = await cur.fetchall()
        return [_to_assignment(r) for r in rows]

    async def list_for_environment(
        self, user_id: str, environment_id: str
    ) -> list[UserEnvironmentRole]:
        """List assignments in environment_id plus all-environment ones."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM user_environment_role "
            "WHERE user_id = %s AND (environment_id = %s OR environment_id IS NULL)",
            (user_id, environment_id),
        )
        rows = await cur.fetchall()
        return [_to_assignment(r) for r in rows]

    async def create(self, assignment: UserEnvironmentRole) -> UserEnvironmentRole:
        """Create assignment."""
        await self._conn.execute(
            "INSERT INTO user_environment_role "
            "(id, user_id, role_id, environment_id, created_at, created_by) "
            "VALUES (%s, %s, %s, %s, %s, %s)",
            (
                assignment.id,
                assignment.user_id,
                assignment.role_id,
                assignment.environment_id,
                assignment.created_at,
                assignment.created_by,
            ),
        )
        return assignment

    async def delete(self, assignment_id: UUID) -> bool:
        """Delete assignment."""
        cur = await self._conn.execute(
            "DELETE FROM user_environment_role WHERE id = %s",
            (assignment_id,),
        )
        return cur.rowcount > 0
