"""Role entity for RBAC."""

from dataclasses import dataclass, field
from uuid import UUID


@dataclass
class Role:
    """Role - named bundle of permission names, shared between users."""

    id: UUID
    name: str
    description: str
    permissions: frozenset[str] = field(default_factory=frozenset)

    def grants(self, permission_name: str) -> bool:
        return permission_name in self.permissions
