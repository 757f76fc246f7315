"""PostgreSQL resource permission repository implementation."""

from datetime import datetime
from uuid import UUID

from psycopg import AsyncConnection

from grantwise.domain.entities import ResourcePermission
from grantwise.domain.value_objects import ResourceType, scope_for

_COLUMNS = (
    "id, user_id, resource_type, resource_id, actions, environment_id, "
    "expires_at, granted_by, reason, created_at, updated_at"
)


def _to_resource_permission(r: tuple) -> ResourcePermission:
    return ResourcePermission(
        id=r[0],
        user_id=r[1],
        resource_type=ResourceType(r[2]),
        resource_id=r[3],
        actions=frozenset(r[4]),
        scope=scope_for(r[5]),
        expires_at=r[6],
        granted_by=r[7],
        reason=r[8] or "",
        created_at=r[9],
        updated_at=r[10],
    )


class PostgresResourcePermissionRepository:
    """ResourcePermission repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, permission_id: UUID) -> ResourcePermission | None:
        """Get grant by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM resource_permission WHERE id = %s",
            (permission_id,),
        )
        r = await cur.fetchone()
        return _to_resource_permission(r) if r else None

    async def list_by_user(self, user_id: str) -> list[ResourcePermission]:
        """List every grant held by user."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM resource_permission WHERE user_id = %s "
            "ORDER BY created_at",
            (user_id,),
        )
        rows = await cur.fetchall()
        return [_to_resource_permission(r) for r in rows]

    async def list_by_user_and_resource(
        self, user_id: str, resource_type: ResourceType, resource_id: str
    ) -> list[ResourcePermission]:
        """List grants held by user on one resource."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM resource_permission "
            "WHERE user_id = %s AND resource_type = %s AND resource_id = %s",
            (user_id, str(resource_type), resource_id),
        )
        rows = await cur.fetchall()
        return [_to_resource_permission(r) for r in rows]

    async def list_by_resource(
        self, resource_type: ResourceType, resource_id: str
    ) -> list[ResourcePermission]:
        """List grants on one resource for every user."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM resource_permission "
            "WHERE resource_type = %s AND resource_id = %s ORDER BY created_at",
            (str(resource_type), resource_id),
        )
        rows = await cur.fetchall()
        return [_to_resource_permission(r) for r in rows]

    async def create(self, permission: ResourcePermission) -> ResourcePermission:
        """Create grant."""
        await self._conn.execute(
            f"INSERT INTO resource_permission ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                permission.id,
                permission.user_id,
                str(permission.resource_type),
                permission.resource_id,
                sorted(permission.actions),
                permission.environment_id,
                permission.expires_at,
                permission.granted_by,
                permission.reason,
                permission.created_at,
                permission.updated_at,
            ),
        )
        return permission

    async def delete(self, permission_id: UUID) -> bool:
        """Delete grant."""
        cur = await self._conn.execute(
            "DELETE FROM resource_permission WHERE id = %s",
            (permission_id,),
        )
        return cur.rowcount > 0

    async def delete_expired(self, now: datetime) -> int:
        """Delete grants that expired strictly before now."""
        cur = await self._conn.execute(
            "DELETE FROM resource_permission "
            "WHERE expires_at IS NOT NULL AND expires_at < %s",
            (now,),
        )
        return cur.rowcount
