"""PostgreSQL user repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from grantwise.domain.entities import User


class PostgresUserRepository:
    """Reads app_user rows; the engine only touches their global role."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, user_id: str) -> User | None:
        """Get user by id."""
        cur = await self._conn.execute(
            "SELECT id, role_id FROM app_user WHERE id = %s",
            (user_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return User(id=r[0], role_id=r[1])

    async def set_role(self, user_id: str, role_id: UUID | None) -> bool:
        """Set the global role. Returns False if the user does not exist."""
        cur = await self._conn.execute(
            "UPDATE app_user SET role_id = %s WHERE id = %s",
            (role_id, user_id),
        )
        return cur.rowcount > 0
