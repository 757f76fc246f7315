"""Domain value objects."""

from grantwise.domain.value_objects.effective_permission import EffectivePermission
from grantwise.domain.value_objects.resource_type import (
    ResourceType,
    namespace_resource_id,
    split_namespace_resource_id,
)
from grantwise.domain.value_objects.scope import (
    GLOBAL_SCOPE,
    EnvironmentScope,
    GlobalScope,
    Scope,
    scope_for,
)

__all__ = [
    "GLOBAL_SCOPE",
    "EffectivePermission",
    "EnvironmentScope",
    "GlobalScope",
    "ResourceType",
    "Scope",
    "namespace_resource_id",
    "scope_for",
    "split_namespace_resource_id",
]
