"""Unit tests for the permission and role catalog use cases."""

from uuid import uuid4

import pytest

from grantwise.application.use_cases.catalog.assign_global_role import (
    AssignGlobalRoleUseCase,
)
from grantwise.application.use_cases.catalog.create_permission import (
    CreatePermissionUseCase,
)
from grantwise.application.use_cases.catalog.create_role import CreateRoleUseCase
from grantwise.application.use_cases.catalog.update_role_permissions import (
    UpdateRolePermissionsUseCase,
)
from grantwise.domain.exceptions import AlreadyExists, NotFound, ValidationError


@pytest.mark.asyncio
async def test_create_permission(uow_factory, fake_uow) -> None:
    use_case = CreatePermissionUseCase(uow_factory)

    permission = await use_case.execute("server", "create", "Create servers")

    assert permission.name == "server.create"
    assert permission.resource == "server"
    assert permission.action == "create"
    assert await fake_uow.permissions.get_by_name("server.create") == permission


@pytest.mark.asyncio
async def test_create_permission_duplicate(uow_factory) -> None:
    use_case = CreatePermissionUseCase(uow_factory)
    await use_case.execute("server", "create")

    with pytest.raises(AlreadyExists):
        await use_case.execute("server", "create")


@pytest.mark.parametrize(
    ("resource", "action"),
    [("", "create"), ("server", " "), ("server@prod", "create"), ("server", "create#1"), ("k8s.ns", "read")],
)
@pytest.mark.asyncio
async def test_create_permission_rejects_bad_names(uow_factory, resource, action) -> None:
    use_case = CreatePermissionUseCase(uow_factory)

    with pytest.raises(ValidationError):
        await use_case.execute(resource, action)


@pytest.mark.asyncio
async def test_create_role_with_permissions(uow_factory, fake_uow) -> None:
    await CreatePermissionUseCase(uow_factory).execute("server", "read")
    use_case = CreateRoleUseCase(uow_factory)

    role = await use_case.execute("viewer", "Read only", ["server.read"])

    assert role.permissions == frozenset({"server.read"})
    assert await fake_uow.roles.get_by_name("viewer") == role


@pytest.mark.asyncio
async def test_create_role_unknown_permission(uow_factory, fake_uow) -> None:
    use_case = CreateRoleUseCase(uow_factory)

    with pytest.raises(NotFound) as exc_info:
        await use_case.execute("viewer", permission_names=["server.read"])

    assert exc_info.value.kind == "Permission"
    assert await fake_uow.roles.get_by_name("viewer") is None


@pytest.mark.asyncio
async def test_create_role_duplicate_name(uow_factory, fake_uow) -> None:
    fake_uow.roles.add_role("viewer")
    use_case = CreateRoleUseCase(uow_factory)

    with pytest.raises(AlreadyExists):
        await use_case.execute("viewer")


@pytest.mark.asyncio
async def test_update_role_permissions(uow_factory, fake_uow) -> None:
    create = CreatePermissionUseCase(uow_factory)
    await create.execute("server", "read")
    await create.execute("server", "delete")
    role = fake_uow.roles.add_role("operator", "server.read")
    use_case = UpdateRolePermissionsUseCase(uow_factory)

    updated = await use_case.execute(role.id, add=["server.delete"], remove=["server.read"])

    assert updated.permissions == frozenset({"server.delete"})


@pytest.mark.asyncio
async def test_update_role_permissions_unknown_role(uow_factory) -> None:
    use_case = UpdateRolePermissionsUseCase(uow_factory)

    with pytest.raises(NotFound):
        await use_case.execute(uuid4(), add=["server.read"])


@pytest.mark.asyncio
async def test_update_role_permissions_unknown_permission(uow_factory, fake_uow) -> None:
    role = fake_uow.roles.add_role("operator")
    use_case = UpdateRolePermissionsUseCase(uow_factory)

    with pytest.raises(NotFound):
        await use_case.execute(role.id, add=["server.read"])


@pytest.mark.asyncio
async def test_assign_global_role_unknown_user(uow_factory, fake_uow) -> None:
    role = fake_uow.roles.add_role("operator")
    use_case = AssignGlobalRoleUseCase(uow_factory)

    with pytest.raises(NotFound) as exc_info:
        await use_case.execute("ghost", role.id, assigned_by="admin-1")

    assert exc_info.value.kind == "User"


@pytest.mark.asyncio
async def test_assign_global_role_unknown_role(uow_factory, fake_uow) -> None:
    fake_uow.users.add_user("alice")
    use_case = AssignGlobalRoleUseCase(uow_factory)

    with pytest.raises(NotFound) as exc_info:
        await use_case.execute("alice", uuid4(), assigned_by="admin-1")

    assert exc_info.value.kind == "Role"
