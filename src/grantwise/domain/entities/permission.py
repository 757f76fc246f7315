"""Permission entity - catalog entry for one (resource, action) pair."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class Permission:
    """Permission named ``<resource>.<action>``, e.g. ``server.create``.

    Immutable once created; a rename is a new permission plus a role re-link.
    """

    id: UUID
    name: str
    resource: str
    action: str
    description: str = ""

    @staticmethod
    def compose_name(resource: str, action: str) -> str:
        return f"{resource}.{action}"
