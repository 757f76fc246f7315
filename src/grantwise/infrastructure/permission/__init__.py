"""Permission resolution."""

from grantwise.infrastructure.permission.effective_permission_resolver import (
    EffectivePermissionResolver,
)

__all__ = ["EffectivePermissionResolver"]
