"""Grant and revoke request DTOs."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from grantwise.domain.value_objects import ResourceType

MAX_REASON_LENGTH = 500


@dataclass
class GrantPermissionRequest:
    """Input for granting actions on a resource to a user."""

    user_id: str
    resource_type: ResourceType | str
    resource_id: str
    actions: Iterable[str]
    environment_id: str | None = None
    expires_at: datetime | None = None
    reason: str = ""


@dataclass
class RevokePermissionRequest:
    """Input for revoking a resource permission grant."""

    permission_id: UUID
    reason: str = ""
