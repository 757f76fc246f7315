"""Application ports - interfaces for external adapters."""

from grantwise.application.ports.clock import Clock
from grantwise.application.ports.permission_resolver import PermissionResolver
from grantwise.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "Clock",
    "PermissionResolver",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
