from __future__ import annotations

from typing import Optional

from ..core.enums import MANAGER_ROLES, Role
from ..core.exceptions import AuthorizationError, ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def optional_text(value: Optional[str]) -> Optional[str]:
    return (value or "").strip() or None


def require_manager(current_role: Role) -> None:
    if current_role not in MANAGER_ROLES:
        raise AuthorizationError("You do not have permission for this action")
