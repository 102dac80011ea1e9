from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Profile:
    """Domain entity: a team member profile.

    Plain data object (no DB access code).
    """

    user_id: str
    first_name: str
    last_name: str
    role: Role
    is_active: bool = True
    avatar_url: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
