"""Request validation shared by the grant manager use cases.

All checks run before any store write.
"""

from datetime import datetime

from grantwise.application.dto import MAX_REASON_LENGTH
from grantwise.domain.exceptions import ValidationError
from grantwise.domain.value_objects.effective_permission import contains_reserved


def validate_reason(reason: str) -> None:
    if not isinstance(reason, str):
        raise ValidationError("reason must be a string")
    if len(reason) > MAX_REASON_LENGTH:
        raise ValidationError(
            f"reason must be at most {MAX_REASON_LENGTH} characters, got {len(reason)}"
        )


def validate_identifier(value: str, field: str) -> None:
    if not value or not value.strip():
        raise ValidationError(f"{field} must not be empty")


def normalize_actions(actions) -> frozenset[str]:
    """Return the action set, rejecting empty sets and malformed names."""
    if isinstance(actions, str):
        raise ValidationError("actions must be a collection of action names")
    result = frozenset(actions or ())
    if not result:
        raise ValidationError("actions must not be empty")
    for action in result:
        if not isinstance(action, str) or not action.strip():
            raise ValidationError(f"invalid action: {action!r}")
        if contains_reserved(action):
            raise ValidationError(f"action must not contain '@' or '#': {action!r}")
    return result


def validate_expiry(expires_at: datetime | None, now: datetime) -> None:
    if expires_at is None:
        return
    if expires_at.tzinfo is None:
        raise ValidationError("expires_at must be timezone-aware")
    if expires_at <= now:
        raise ValidationError("expires_at must be in the future")
