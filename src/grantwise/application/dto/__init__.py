"""Application DTOs."""

from grantwise.application.dto.grant_dto import (
    MAX_REASON_LENGTH,
    GrantPermissionRequest,
    RevokePermissionRequest,
)

__all__ = [
    "MAX_REASON_LENGTH",
    "GrantPermissionRequest",
    "RevokePermissionRequest",
]
