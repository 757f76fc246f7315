"""ResourcePermission entity - actions granted on one resource instance."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from grantwise.domain.exceptions import ValidationError
from grantwise.domain.value_objects import (
    GLOBAL_SCOPE,
    EffectivePermission,
    ResourceType,
    Scope,
)


@dataclass
class ResourcePermission:
    """Grant of actions on (resource_type, resource_id), optionally time-boxed."""

    id: UUID
    user_id: str
    resource_type: ResourceType
    resource_id: str
    actions: frozenset[str]
    created_at: datetime
    updated_at: datetime
    scope: Scope = GLOBAL_SCOPE
    expires_at: datetime | None = None
    granted_by: str | None = None
    reason: str = ""

    def __post_init__(self) -> None:
        self.actions = frozenset(self.actions)
        if not self.actions:
            raise ValidationError("resource permission requires at least one action")

    @property
    def environment_id(self) -> str | None:
        return self.scope.environment_id

    def is_expired(self, now: datetime) -> bool:
        """Expired iff expires_at is set and strictly before now.

        Callers pass a single clock read so that every grant in one
        resolution is judged against the same instant.
        """
        return self.expires_at is not None and self.expires_at < now

    def has_action(self, action: str) -> bool:
        return action in self.actions

    def matches(self, resource_type: ResourceType, resource_id: str) -> bool:
        return self.resource_type == resource_type and self.resource_id == resource_id

    def effective_permissions(self) -> list[EffectivePermission]:
        return [
            EffectivePermission.for_resource(self.resource_type, action, self.resource_id)
            for action in sorted(self.actions)
        ]
