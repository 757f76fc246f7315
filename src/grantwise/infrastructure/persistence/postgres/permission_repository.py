"""PostgreSQL permission catalog repository implementation."""

from psycopg import AsyncConnection

from grantwise.domain.entities import Permission

_COLUMNS = "id, name, resource, action, description"


def _to_permission(r: tuple) -> Permission:
    return Permission(id=r[0], name=r[1], resource=r[2], action=r[3], description=r[4] or "")


class PostgresPermissionRepository:
    """Permission repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_name(self, name: str) -> Permission | None:
        """Get permission by unique name."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission WHERE name = %s",
            (name,),
        )
        r = await cur.fetchone()
        return _to_permission(r) if r else None

    async def create(self, permission: Permission) -> Permission:
        """Create permission."""
        await self._conn.execute(
            "INSERT INTO permission (id, name, resource, action, description) "
            "VALUES (%s, %s, %s, %s, %s)",
            (
                permission.id,
                permission.name,
                permission.resource,
                permission.action,
                permission.description,
            ),
        )
        return permission
