"""Effective permission resolver - merges every grant source for a user.

Policy: grants are additive only. A user is authorized when ANY applicable
source grants the permission; there is no deny rule and no narrower scope
that takes away a broader grant. Adding a deny-override would change the
meaning of every stored grant and must not be done silently.

Sources, in the order they are consulted:

1. the global role embedded in the user record;
2. environment-role assignments (GlobalScope applies in every environment);
3. resource-permission grants, ignored once expired.

Each call opens its own unit of work and reads the clock once, so checks
share no mutable state and can run with unbounded concurrency.
"""

from collections.abc import Iterable
from datetime import datetime
from uuid import UUID

import structlog

from grantwise.application.ports import Clock, UnitOfWork, UnitOfWorkFactory
from grantwise.domain.entities import (
    EffectivePermissions,
    ResourcePermission,
    Role,
    UserEnvironmentRole,
)
from grantwise.domain.exceptions import ValidationError
from grantwise.domain.value_objects import (
    EffectivePermission,
    EnvironmentScope,
    ResourceType,
    namespace_resource_id,
)

log = structlog.get_logger(__name__)


def _resource_type(value: ResourceType | str) -> ResourceType | None:
    try:
        return ResourceType(value)
    except ValueError:
        return None


class EffectivePermissionResolver:
    """Answers permission checks and builds EffectivePermissions views."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory, clock: Clock) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock

    # --- checks ---

    async def check_permission(self, user_id: str, permission_name: str) -> bool:
        """True iff the user's global role contains permission_name."""
        async with self._uow_factory() as uow:
            role = await self._global_role(uow, user_id)
        return role is not None and role.grants(permission_name)

    async def check_environment_permission(
        self, user_id: str, permission_name: str, environment_id: str
    ) -> bool:
        """True iff an environment role applying to environment_id grants it."""
        async with self._uow_factory() as uow:
            return await self._environment_grants(
                uow, user_id, permission_name, environment_id
            )

    async def check_resource_permission(
        self,
        user_id: str,
        resource_type: ResourceType | str,
        resource_id: str,
        action: str,
    ) -> bool:
        """True iff a non-expired grant on the resource contains action."""
        rtype = _resource_type(resource_type)
        if rtype is None:
            return False
        now = self._clock.now()
        async with self._uow_factory() as uow:
            grants = await self._live_grants(uow, user_id, rtype, resource_id, now)
        return any(g.has_action(action) for g in grants)

    async def check_namespace_permission(
        self, user_id: str, cluster_id: str, namespace: str, action: str
    ) -> bool:
        """Namespace grant, or a grant on the parent cluster, contains action."""
        try:
            resource_id = namespace_resource_id(cluster_id, namespace)
        except ValidationError:
            return False
        now = self._clock.now()
        async with self._uow_factory() as uow:
            grants = await self._live_grants(
                uow, user_id, ResourceType.K8S_CLUSTER, cluster_id, now
            )
            grants += await self._live_grants(
                uow, user_id, ResourceType.K8S_NAMESPACE, resource_id, now
            )
        return any(g.has_action(action) for g in grants)

    async def authorize(
        self,
        user_id: str,
        resource_type: ResourceType | str,
        resource_id: str,
        action: str,
        environment_id: str | None = None,
    ) -> bool:
        """Cascading check over every source for ``<resource_type>.<action>``.

        Global role first, then environment roles when an environment is
        given, then resource grants (whose scope must apply to the
        environment when one is given). Namespace requests also accept a
        grant on the parent cluster.
        """
        rtype = _resource_type(resource_type)
        if rtype is None:
            return False
        permission_name = f"{rtype}.{action}"
        now = self._clock.now()

        async with self._uow_factory() as uow:
            allowed = await self._authorize(
                uow, user_id, rtype, resource_id, action, permission_name, environment_id, now
            )

        log.debug(
            "authorization_resolved",
            user_id=user_id,
            permission=permission_name,
            resource_id=resource_id,
            environment_id=environment_id,
            allowed=allowed,
        )
        return allowed

    async def _authorize(
        self,
        uow: UnitOfWork,
        user_id: str,
        rtype: ResourceType,
        resource_id: str,
        action: str,
        permission_name: str,
        environment_id: str | None,
        now: datetime,
    ) -> bool:
        role = await self._global_role(uow, user_id)
        if role is not None and role.grants(permission_name):
            return True
        if environment_id is not None and await self._environment_grants(
            uow, user_id, permission_name, environment_id
        ):
            return True

        targets = [(rtype, resource_id)]
        if rtype is ResourceType.K8S_NAMESPACE:
            cluster_id, _, namespace = resource_id.rpartition("/")
            if cluster_id and namespace:
                targets.append((ResourceType.K8S_CLUSTER, cluster_id))
        for target_type, target_id in targets:
            grants = await self._live_grants(uow, user_id, target_type, target_id, now)
            for grant in grants:
                if environment_id is not None and not grant.scope.applies_to(environment_id):
                    continue
                if grant.has_action(action):
                    return True
        return False

    # --- listings ---

    async def list_user_permissions(self, user_id: str) -> EffectivePermissions:
        """Resolve every source into one EffectivePermissions view."""
        now = self._clock.now()
        view = EffectivePermissions(user_id=user_id)

        async with self._uow_factory() as uow:
            roles: dict[UUID, Role | None] = {}
            view.global_role = await self._global_role(uow, user_id)
            if view.global_role is not None:
                roles[view.global_role.id] = view.global_role
                view.permissions.extend(
                    EffectivePermission(permission=name)
                    for name in view.global_role.permissions
                )

            # Role assignments have no expiry; every one of them counts.
            view.environment_roles = await uow.environment_roles.list_by_user(user_id)
            for assignment in view.environment_roles:
                role = await self._role(uow, assignment.role_id, roles)
                if role is not None:
                    view.permissions.extend(_environment_tokens(assignment, role.permissions))

            grants = await uow.resource_permissions.list_by_user(user_id)
            view.resource_permissions = [g for g in grants if not g.is_expired(now)]
            for grant in view.resource_permissions:
                view.permissions.extend(grant.effective_permissions())

        return view

    async def list_resource_permissions(
        self,
        resource_type: ResourceType | str,
        resource_id: str,
        include_expired: bool = False,
    ) -> list[ResourcePermission]:
        """Grants on one resource, expired ones only when asked for."""
        rtype = _resource_type(resource_type)
        if rtype is None:
            return []
        now = self._clock.now()
        async with self._uow_factory() as uow:
            grants = await uow.resource_permissions.list_by_resource(rtype, resource_id)
        if include_expired:
            return grants
        return [g for g in grants if not g.is_expired(now)]

    # --- helpers ---

    async def _global_role(self, uow: UnitOfWork, user_id: str) -> Role | None:
        user = await uow.users.get_by_id(user_id)
        if user is None or user.role_id is None:
            return None
        return await uow.roles.get_by_id(user.role_id)

    async def _role(
        self, uow: UnitOfWork, role_id: UUID, cache: dict[UUID, Role | None]
    ) -> Role | None:
        if role_id not in cache:
            cache[role_id] = await uow.roles.get_by_id(role_id)
        return cache[role_id]

    async def _environment_grants(
        self, uow: UnitOfWork, user_id: str, permission_name: str, environment_id: str
    ) -> bool:
        assignments = await uow.environment_roles.list_for_environment(user_id, environment_id)
        roles: dict[UUID, Role | None] = {}
        for assignment in assignments:
            if not assignment.scope.applies_to(environment_id):
                continue
            role = await self._role(uow, assignment.role_id, roles)
            if role is not None and role.grants(permission_name):
                return True
        return False

    async def _live_grants(
        self,
        uow: UnitOfWork,
        user_id: str,
        resource_type: ResourceType,
        resource_id: str,
        now: datetime,
    ) -> list[ResourcePermission]:
        grants = await uow.resource_permissions.list_by_user_and_resource(
            user_id, resource_type, resource_id
        )
        return [g for g in grants if not g.is_expired(now)]


def _environment_tokens(
    assignment: UserEnvironmentRole, permission_names: Iterable[str]
) -> list[EffectivePermission]:
    if isinstance(assignment.scope, EnvironmentScope):
        environment_id = assignment.scope.environment_id
        return [
            EffectivePermission(permission=name, environment_id=environment_id)
            for name in permission_names
        ]
    return [EffectivePermission(permission=name) for name in permission_names]
