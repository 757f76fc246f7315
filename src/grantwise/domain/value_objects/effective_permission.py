"""Effective permission tokens - display/audit encoding of resolved grants.

Encodings:

* ``<permission>``                       global role or all-environment role
* ``<permission>@<environment>``         environment-scoped role
* ``<resource_type>.<action>#<resource>`` resource grant

Permission names and actions never contain ``@`` or ``#`` (enforced by the
catalog and the grant manager), so the first reserved character in a token
decides its kind.
"""

from dataclasses import dataclass

from grantwise.domain.exceptions import ValidationError
from grantwise.domain.value_objects.resource_type import ResourceType

ENVIRONMENT_MARKER = "@"
RESOURCE_MARKER = "#"
RESERVED_CHARACTERS = frozenset({ENVIRONMENT_MARKER, RESOURCE_MARKER})


def contains_reserved(value: str) -> bool:
    """Return True if value contains a character reserved by the token encoding."""
    return any(ch in RESERVED_CHARACTERS for ch in value)


@dataclass(frozen=True)
class EffectivePermission:
    """One resolved permission, as listed in EffectivePermissions."""

    permission: str
    environment_id: str | None = None
    resource_id: str | None = None

    def encode(self) -> str:
        if self.resource_id is not None:
            return f"{self.permission}{RESOURCE_MARKER}{self.resource_id}"
        if self.environment_id is not None:
            return f"{self.permission}{ENVIRONMENT_MARKER}{self.environment_id}"
        return self.permission

    @property
    def resource_type(self) -> ResourceType | None:
        if self.resource_id is None:
            return None
        return ResourceType(self.permission.split(".", 1)[0])

    @property
    def action(self) -> str | None:
        if self.resource_id is None:
            return None
        return self.permission.split(".", 1)[1]

    @classmethod
    def for_resource(
        cls, resource_type: ResourceType, action: str, resource_id: str
    ) -> "EffectivePermission":
        return cls(permission=f"{resource_type}.{action}", resource_id=resource_id)

    @classmethod
    def parse(cls, token: str) -> "EffectivePermission":
        """Reverse encode(). Raises ValidationError for malformed tokens."""
        positions = [token.find(m) for m in (ENVIRONMENT_MARKER, RESOURCE_MARKER)]
        present = [p for p in positions if p >= 0]
        if not present:
            if not token:
                raise ValidationError("empty permission token")
            return cls(permission=token)

        idx = min(present)
        permission, marker, rest = token[:idx], token[idx], token[idx + 1 :]
        if not permission or not rest:
            raise ValidationError(f"malformed permission token: {token!r}")
        if marker == ENVIRONMENT_MARKER:
            return cls(permission=permission, environment_id=rest)

        resource_type, dot, action = permission.partition(".")
        if not dot or not action:
            raise ValidationError(f"malformed resource permission token: {token!r}")
        return cls.for_resource(ResourceType.parse(resource_type), action, rest)
