"""PostgreSQL role repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from grantwise.domain.entities import Role

_SELECT_ROLE = (
    "SELECT r.id, r.name, r.description, "
    "COALESCE(array_agg(p.name) FILTER (WHERE p.name IS NOT NULL), '{}') "
    "FROM role r "
    "LEFT JOIN role_permission rp ON rp.role_id = r.id "
    "LEFT JOIN permission p ON p.id = rp.permission_id "
)


def _to_role(r: tuple) -> Role:
    return Role(id=r[0], name=r[1], description=r[2] or "", permissions=frozenset(r[3]))


class PostgresRoleRepository:
    """Role repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, role_id: UUID) -> Role | None:
        """Get role with its permission names by id."""
        cur = await self._conn.execute(
            _SELECT_ROLE + "WHERE r.id = %s GROUP BY r.id",
            (role_id,),
        )
        r = await cur.fetchone()
        return _to_role(r) if r else None

    async def get_by_name(self, name: str) -> Role | None:
        """Get role with its permission names by name."""
        cur = await self._conn.execute(
            _SELECT_ROLE + "WHERE r.name = %s GROUP BY r.id",
            (name,),
        )
        r = await cur.fetchone()
        return _to_role(r) if r else None

    async def create(self, role: Role) -> Role:
        """Create role and link its permissions."""
        await self._conn.execute(
            "INSERT INTO role (id, name, description) VALUES (%s, %s, %s)",
            (role.id, role.name, role.description),
        )
        if role.permissions:
            await self.add_permissions(role.id, sorted(role.permissions))
        return role

    async def add_permissions(self, role_id: UUID, permission_names: list[str]) -> None:
        """Link permissions by name. Already linked permissions are skipped."""
        await self._conn.execute(
            "INSERT INTO role_permission (role_id, permission_id) "
            "SELECT %s, id FROM permission WHERE name = ANY(%s) "
            "ON CONFLICT DO NOTHING",
            (role_id, permission_names),
        )

    async def remove_permissions(self, role_id: UUID, permission_names: list[str]) -> None:
        """Unlink permissions by name."""
        await self._conn.execute(
            "DELETE FROM role_permission WHERE role_id = %s AND permission_id IN "
            "(SELECT id FROM permission WHERE name = ANY(%s))",
            (role_id, permission_names),
        )
