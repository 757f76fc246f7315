"""Unit tests for PostgreSQL row mapping and statements, with a recording connection."""

import asyncio
from datetime import UTC, datetime
from uuid import uuid4

import psycopg
import pytest

from grantwise.domain.exceptions import NotFound, StoreError
from grantwise.domain.value_objects import GLOBAL_SCOPE, EnvironmentScope, ResourceType
from grantwise.infrastructure.persistence.postgres.environment_role_repository import (
    _to_assignment,
)
from grantwise.infrastructure.persistence.postgres.resource_permission_repository import (
    PostgresResourcePermissionRepository,
    _to_resource_permission,
)
from grantwise.infrastructure.persistence.postgres.role_repository import _to_role
from grantwise.infrastructure.persistence.postgres.unit_of_work import create_uow_factory

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


class _Cursor:
    def __init__(self, rows, rowcount) -> None:
        self._rows = rows
        self.rowcount = rowcount

    async def fetchone(self):
        return self._rows[0] if self._rows else None

    async def fetchall(self):
        return self._rows


class _RecordingConnection:
    """Stands in for psycopg.AsyncConnection; records every statement."""

    def __init__(self, rows=(), rowcount=0, error=None) -> None:
        self.rows = list(rows)
        self.rowcount = rowcount
        self.error = error
        self.statements: list[tuple[str, tuple]] = []
        self.committed = 0
        self.rolled_back = 0

    async def execute(self, query, params=()):
        self.statements.append((query, params))
        if self.error is not None:
            raise self.error
        return _Cursor(self.rows, self.rowcount)

    async def commit(self) -> None:
        self.committed += 1

    async def rollback(self) -> None:
        self.rolled_back += 1


def _grant_row(environment_id=None, expires_at=None) -> tuple:
    return (
        uuid4(),
        "alice",
        "k8s_cluster",
        "abc",
        ["update", "read"],
        environment_id,
        expires_at,
        "admin-1",
        None,
        NOW,
        NOW,
    )


class TestRowMapping:
    def test_resource_permission_global(self) -> None:
        grant = _to_resource_permission(_grant_row())
        assert grant.resource_type is ResourceType.K8S_CLUSTER
        assert grant.actions == frozenset({"read", "update"})
        assert grant.scope is GLOBAL_SCOPE
        assert grant.reason == ""

    def test_resource_permission_environment(self) -> None:
        grant = _to_resource_permission(_grant_row(environment_id="prod", expires_at=NOW))
        assert grant.scope == EnvironmentScope("prod")
        assert grant.expires_at == NOW

    def test_assignment_null_environment_is_global(self) -> None:
        assignment = _to_assignment((uuid4(), "alice", uuid4(), None, NOW, "admin-1"))
        assert assignment.scope is GLOBAL_SCOPE

    def test_role_without_permissions(self) -> None:
        role = _to_role((uuid4(), "empty", None, []))
        assert role.permissions == frozenset()
        assert role.description == ""


@pytest.mark.asyncio
async def test_delete_reports_missing_row() -> None:
    repo = PostgresResourcePermissionRepository(_RecordingConnection(rowcount=0))
    assert await repo.delete(uuid4()) is False


@pytest.mark.asyncio
async def test_delete_expired_uses_strict_cutoff() -> None:
    conn = _RecordingConnection(rowcount=3)
    repo = PostgresResourcePermissionRepository(conn)

    assert await repo.delete_expired(NOW) == 3

    query, params = conn.statements[0]
    assert "expires_at < %s" in query
    assert params == (NOW,)


@pytest.mark.asyncio
async def test_create_stores_sorted_actions_and_nullable_environment() -> None:
    conn = _RecordingConnection()
    repo = PostgresResourcePermissionRepository(conn)
    grant = _to_resource_permission(_grant_row())

    await repo.create(grant)

    _, params = conn.statements[0]
    assert params[2] == "k8s_cluster"
    assert params[4] == ["read", "update"]
    assert params[5] is None


# --- Unit of work transaction handling ---


class _ConnectionContext:
    def __init__(self, conn) -> None:
        self._conn = conn

    async def __aenter__(self):
        return self._conn

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        return None


class _StubPool:
    """Hands out one recording connection, like AsyncConnectionPool.connection()."""

    def __init__(self, conn: _RecordingConnection) -> None:
        self.conn = conn

    def connection(self) -> _ConnectionContext:
        return _ConnectionContext(self.conn)


@pytest.mark.asyncio
async def test_uow_commits_clean_block() -> None:
    conn = _RecordingConnection(rowcount=1)
    factory = create_uow_factory(_StubPool(conn))

    async with factory() as uow:
        await uow.resource_permissions.delete(uuid4())

    assert conn.committed == 1
    assert conn.rolled_back == 0


@pytest.mark.asyncio
async def test_uow_driver_error_becomes_store_error() -> None:
    driver_error = psycopg.OperationalError("connection lost")
    conn = _RecordingConnection(error=driver_error)
    factory = create_uow_factory(_StubPool(conn))

    with pytest.raises(StoreError) as exc_info:
        async with factory() as uow:
            await uow.permissions.get_by_name("server.read")

    assert exc_info.value.__cause__ is driver_error
    assert conn.committed == 0
    assert conn.rolled_back >= 1


@pytest.mark.asyncio
async def test_uow_domain_error_propagates_after_rollback() -> None:
    conn = _RecordingConnection()
    factory = create_uow_factory(_StubPool(conn))

    with pytest.raises(NotFound):
        async with factory() as uow:
            await uow.resource_permissions.delete(uuid4())
            raise NotFound("ResourcePermission", "42")

    assert conn.committed == 0
    assert conn.rolled_back >= 1


@pytest.mark.asyncio
async def test_uow_cancelled_block_rolls_back() -> None:
    conn = _RecordingConnection()
    factory = create_uow_factory(_StubPool(conn))
    entered = asyncio.Event()

    async def _write() -> None:
        async with factory() as uow:
            await uow.resource_permissions.delete_expired(NOW)
            entered.set()
            await asyncio.sleep(10)

    task = asyncio.create_task(_write())
    await entered.wait()
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert conn.committed == 0
    assert conn.rolled_back >= 1
