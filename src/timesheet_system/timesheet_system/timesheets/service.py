from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local, week_start_for
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import Role, WeekStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import Week
from .repository import DayEntryRepository, WeekRepository

logger = logging.getLogger(__name__)


class WeekService:
    """Weekly timesheet workflow: draft -> submitted -> approved | rejected."""

    def __init__(self, weeks: WeekRepository, days: DayEntryRepository, *, clock: Callable[[], datetime] = now_local):
        self._weeks = weeks
        self._days = days
        self._clock = clock

    def get_or_create_week(self, *, user_id: int, any_day: Optional[date] = None) -> Week:
        week_start = week_start_for(any_day or self._clock().date())
        week = self._weeks.get_for_user(user_id=int(user_id), week_start=week_start)
        if week:
            return week

        week_id = self._weeks.create(user_id=int(user_id), week_start=week_start)
        return self._require_week(week_id)

    def submit_week(self, *, current_user_id: int, week_id: int) -> Week:
        week = self._require_week(week_id)
        if week.user_id != int(current_user_id):
            raise AuthorizationError("You can only submit your own timesheet")
        if week.status != WeekStatus.DRAFT:
            raise ValidationError("Only draft timesheets can be submitted")
        if not self._days.list_days(week_id=week.week_id):
            raise ValidationError("Cannot submit an empty timesheet")

        if not self._weeks.mark_submitted(week_id=week.week_id, submitted_at=self._clock()):
            raise ValidationError("Failed to submit timesheet")
        return self._require_week(week.week_id)

    def approve_week(self, *, current_role: Role, admin_user_id: int, week_id: int) -> Week:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Unauthorized: Admin access required")

        week = self._require_submitted(week_id)
        decided = self._weeks.decide(
            week_id=week.week_id,
            status=WeekStatus.APPROVED,
            decided_by=int(admin_user_id),
            decided_at=self._clock(),
        )
        if not decided:
            raise ValidationError("Failed to approve timesheet")

        logger.info("Admin %s approved week %s of user %s", admin_user_id, week.week_id, week.user_id)
        return self._require_week(week.week_id)

    def reject_week(self, *, current_role: Role, admin_user_id: int, week_id: int, reason: str) -> Week:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Unauthorized: Admin access required")

        reason = require_non_empty(reason, "Rejection reason")
        week = self._require_submitted(week_id)
        decided = self._weeks.decide(
            week_id=week.week_id,
            status=WeekStatus.REJECTED,
            decided_by=int(admin_user_id),
            decided_at=self._clock(),
            rejection_reason=reason,
        )
        if not decided:
            raise ValidationError("Failed to reject timesheet")

        logger.info("Admin %s rejected week %s of user %s", admin_user_id, week.week_id, week.user_id)
        return self._require_week(week.week_id)

    def list_weeks(self, *, current_role: Role, status: Optional[WeekStatus] = None) -> Sequence[dict]:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Unauthorized: Admin access required")
        return self._weeks.list_by_status(status=status, limit=DEFAULT_LIST_LIMIT)

    def get_week(self, week_id: int) -> Week:
        return self._require_week(week_id)

    def _require_week(self, week_id: int) -> Week:
        week = self._weeks.get_by_id(int(week_id))
        if not week:
            raise NotFoundError("Timesheet not found")
        return week

    def _require_submitted(self, week_id: int) -> Week:
        week = self._require_week(week_id)
        if week.status != WeekStatus.SUBMITTED:
            raise ValidationError("Timesheet is not awaiting approval")
        return week
