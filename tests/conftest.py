"""Pytest fixtures for grantwise tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from grantwise.domain.entities import (
    Permission,
    ResourcePermission,
    Role,
    User,
    UserEnvironmentRole,
)
from grantwise.domain.value_objects import ResourceType
from grantwise.engine import AuthorizationEngine


# --- Fake repositories ---


class FakePermissionRepository:
    """In-memory permission catalog."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Permission] = {}

    async def get_by_name(self, name: str) -> Permission | None:
        for p in self._by_id.values():
            if p.name == name:
                return p
        return None

    async def create(self, permission: Permission) -> Permission:
        self._by_id[permission.id] = permission
        return permission


class FakeRoleRepository:
    """In-memory role repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Role] = {}

    async def get_by_id(self, role_id: UUID) -> Role | None:
        return self._by_id.get(role_id)

    async def get_by_name(self, name: str) -> Role | None:
        for r in self._by_id.values():
            if r.name == name:
                return r
        return None

    async def create(self, role: Role) -> Role:
        self._by_id[role.id] = role
        return role

    async def add_permissions(self, role_id: UUID, permission_names: list[str]) -> None:
        role = self._by_id[role_id]
        self._by_id[role_id] = replace(role, permissions=role.permissions | set(permission_names))

    async def remove_permissions(self, role_id: UUID, permission_names: list[str]) -> None:
        role = self._by_id[role_id]
        self._by_id[role_id] = replace(role, permissions=role.permissions - set(permission_names))

    def add_role(self, name: str, *permissions: str) -> Role:
        """Helper to add role for tests."""
        role = Role(id=uuid4(), name=name, description=name, permissions=frozenset(permissions))
        self._by_id[role.id] = role
        return role


class FakeUserRepository:
    """In-memory users."""

    def __init__(self) -> None:
        self._by_id: dict[str, User] = {}

    async def get_by_id(self, user_id: str) -> User | None:
        return self._by_id.get(user_id)

    async def set_role(self, user_id: str, role_id: UUID | None) -> bool:
        user = self._by_id.get(user_id)
        if not user:
            return False
        user.role_id = role_id
        return True

    def add_user(self, user_id: str, role_id: UUID | None = None) -> User:
        """Helper to add user for tests."""
        user = User(id=user_id, role_id=role_id)
        self._by_id[user_id] = user
        return user


class FakeEnvironmentRoleRepository:
    """In-memory environment role assignments."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, UserEnvironmentRole] = {}

    async def list_by_user(self, user_id: str) -> list[UserEnvironmentRole]:
        return [a for a in self._by_id.values() if a.user_id == user_id]

    async def list_for_environment(
        self, user_id: str, environment_id: str
    ) -> list[UserEnvironmentRole]:
        return [
            a
            for a in self._by_id.values()
            if a.user_id == user_id
            and (a.environment_id is None or a.environment_id == environment_id)
        ]

    async def create(self, assignment: UserEnvironmentRole) -> UserEnvironmentRole:
        self._by_id[assignment.id] = assignment
        return assignment

    async def delete(self, assignment_id: UUID) -> bool:
        return self._by_id.pop(assignment_id, None) is not None


class FakeResourcePermissionRepository:
    """In-memory resource permission grants."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, ResourcePermission] = {}

    async def get_by_id(self, permission_id: UUID) -> ResourcePermission | None:
        return self._by_id.get(permission_id)

    async def list_by_user(self, user_id: str) -> list[ResourcePermission]:
        return [p for p in self._by_id.values() if p.user_id == user_id]

    async def list_by_user_and_resource(
        self, user_id: str, resource_type: ResourceType, resource_id: str
    ) -> list[ResourcePermission]:
        return [
            p
            for p in self._by_id.values()
            if p.user_id == user_id and p.matches(resource_type, resource_id)
        ]

    async def list_by_resource(
        self, resource_type: ResourceType, resource_id: str
    ) -> list[ResourcePermission]:
        return [p for p in self._by_id.values() if p.matches(resource_type, resource_id)]

    async def create(self, permission: ResourcePermission) -> ResourcePermission:
        self._by_id[permission.id] = permission
        return permission

    async def delete(self, permission_id: UUID) -> bool:
        return self._by_id.pop(permission_id, None) is not None

    async def delete_expired(self, now: datetime) -> int:
        expired = [p.id for p in self._by_id.values() if p.is_expired(now)]
        for permission_id in expired:
            del self._by_id[permission_id]
        return len(expired)


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.permissions = FakePermissionRepository()
        self.roles = FakeRoleRepository()
        self.users = FakeUserRepository()
        self.environment_roles = FakeEnvironmentRoleRepository()
        self.resource_permissions = FakeResourcePermissionRepository()

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, delta: timedelta) -> None:
        self.current = self.current + delta


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager that yields the same FakeUnitOfWork."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        yield fake_uow

    return _factory


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 1, 1, 12, 0, tzinfo=UTC))


@pytest.fixture
def engine(uow_factory, clock: FakeClock) -> AuthorizationEngine:
    return AuthorizationEngine(uow_factory, clock)
