"""Applicability scope of a role assignment or resource grant."""

from dataclasses import dataclass
from typing import TypeAlias

from grantwise.domain.exceptions import ValidationError


@dataclass(frozen=True)
class GlobalScope:
    """Applies in every environment, including ones created later."""

    @property
    def environment_id(self) -> None:
        return None

    def applies_to(self, environment_id: str) -> bool:
        return True


@dataclass(frozen=True)
class EnvironmentScope:
    """Applies in exactly one environment."""

    environment_id: str

    def __post_init__(self) -> None:
        if not self.environment_id:
            raise ValidationError("environment id must not be empty; use GlobalScope")

    def applies_to(self, environment_id: str) -> bool:
        return self.environment_id == environment_id


Scope: TypeAlias = GlobalScope | EnvironmentScope

GLOBAL_SCOPE = GlobalScope()


def scope_for(environment_id: str | None) -> Scope:
    """Map a nullable environment id (as stored) to a Scope."""
    if environment_id is None:
        return GLOBAL_SCOPE
    return EnvironmentScope(environment_id)
