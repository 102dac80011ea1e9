from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_manager, require_non_empty
from ..core.constants import DEFAULT_LEAVE_LIST_LIMIT
from ..core.enums import LeaveStatus, Role
from ..core.exceptions import NotFoundError, ValidationError
from ..users.repository import ProfileRepository
from .model import LeaveApplication
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    """Use cases: apply for leave, review applications."""

    def __init__(self, leaves: LeaveRepository, profiles: ProfileRepository):
        self._leaves = leaves
        self._profiles = profiles

    def apply(self, *, user_id: str, start_date: date, end_date: date, reason: str) -> int:
        if end_date < start_date:
            raise ValidationError("End date must be on or after start date")

        reason = require_non_empty(reason, "Reason")
        leave_id = self._leaves.create(user_id=user_id, start_date=start_date, end_date=end_date, reason=reason)
        logger.info("leave %s submitted by %s (%s..%s)", leave_id, user_id, start_date, end_date)
        return leave_id

    def approve(self, *, current_role: Role, approver_id: str, leave_id: int, now: Optional[datetime] = None) -> None:
        self._decide(current_role=current_role, approver_id=approver_id, leave_id=leave_id, status=LeaveStatus.APPROVED, now=now)

    def reject(self, *, current_role: Role, approver_id: str, leave_id: int, now: Optional[datetime] = None) -> None:
        self._decide(current_role=current_role, approver_id=approver_id, leave_id=leave_id, status=LeaveStatus.REJECTED, now=now)

    def _decide(
        self,
        *,
        current_role: Role,
        approver_id: str,
        leave_id: int,
        status: LeaveStatus,
        now: Optional[datetime],
    ) -> None:
        require_manager(current_role)

        application = self._leaves.get_by_id(int(leave_id))
        if not application:
            raise NotFoundError("Leave application not found")
        if application.status != LeaveStatus.PENDING:
            raise ValidationError("Leave application has already been processed")

        decided = self._leaves.decide(
            leave_id=int(leave_id),
            status=status,
            decided_by=approver_id,
            decided_at=now or now_local(),
        )
        if not decided:
            raise ValidationError("Leave application has already been processed")
        logger.info("leave %s %s by %s", leave_id, status.value, approver_id)

    def list_mine(self, *, user_id: str) -> Sequence[LeaveApplication]:
        return self._with_names(self._leaves.list_applications(user_id=user_id))

    def list_all(self, *, current_role: Role, status: Optional[LeaveStatus] = None) -> Sequence[LeaveApplication]:
        require_manager(current_role)
        return self._with_names(self._leaves.list_applications(status=status, limit=DEFAULT_LEAVE_LIST_LIMIT))

    def _with_names(self, applications: Sequence[LeaveApplication]) -> list[LeaveApplication]:
        """Attach applicant and approver display names; unknown profiles stay None."""
        names: dict[str, Optional[str]] = {}

        def name_of(user_id: Optional[str]) -> Optional[str]:
            if not user_id:
                return None
            if user_id not in names:
                profile = self._profiles.get_by_id(user_id)
                names[user_id] = profile.full_name if profile else None
            return names[user_id]

        return [
            replace(a, applicant_name=name_of(a.user_id), approver_name=name_of(a.approved_by))
            for a in applications
        ]
