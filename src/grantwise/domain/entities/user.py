"""User record as seen by the authorization engine."""

from dataclasses import dataclass
from uuid import UUID


@dataclass
class User:
    """Externally managed user; the engine only reads its global role."""

    id: str
    role_id: UUID | None = None
