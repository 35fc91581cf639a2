from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local, rounded_minutes, stamp
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.exceptions import ConflictError, IneligibleError, InvalidStateError, NotFoundError
from ..members.repository import MemberRepository
from ..payments.service import MembershipService
from .model import AttendanceRecord
from .repository import AttendanceRepository
from .statistics import AttendanceStats

logger = logging.getLogger(__name__)


class AttendanceService:
    """Attendance session state machine: check-in opens a session, check-out closes it.

    A member holds at most one open session. Closing is a one-shot transition that
    stamps the check-out time and the rounded duration in minutes.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        members: MemberRepository,
        membership: Optional[MembershipService] = None,
        *,
        require_active_subscription: bool = False,
    ):
        self._attendance = attendance
        self._members = members
        self._membership = membership
        self._require_subscription = bool(require_active_subscription)

    def check_in(self, member_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = stamp(now)

        member = self._members.get_by_id(member_id)
        if not member:
            raise NotFoundError("Member not found")

        if not member.can_check_in:
            logger.warning("check-in refused for member %s: status %s", member_id, member.status.value)
            raise IneligibleError(f"Member is {member.status.value} and cannot check in")

        if self._require_subscription and self._membership:
            if not self._membership.is_subscription_active(member, now=now):
                logger.warning("check-in refused for member %s: no active subscription", member_id)
                raise IneligibleError("Membership has expired")

        if self._attendance.get_open_for_member(member_id):
            raise ConflictError("Member is already checked in")

        attendance_id = self._attendance.create_checkin(member_id=member_id, check_in_time=now)
        if attendance_id is None:
            raise ConflictError("Member is already checked in")

        logger.info("member %s checked in (attendance %s)", member_id, attendance_id)
        return AttendanceRecord(attendance_id=attendance_id, member_id=member_id, check_in_time=now)

    def check_out(self, attendance_id: int, *, now: datetime | None = None) -> int:
        now = stamp(now)

        record = self._attendance.get_by_id(attendance_id)
        if not record:
            raise NotFoundError("Attendance record not found")
        if not record.is_open:
            raise InvalidStateError("Attendance session is already checked out")
        if now < record.check_in_time:
            raise InvalidStateError("Check-out time is before check-in time")

        duration = rounded_minutes(record.check_in_time, now)
        if not self._attendance.close_session(attendance_id=attendance_id, check_out_time=now, duration_minutes=duration):
            raise InvalidStateError("Attendance session is already checked out")

        logger.info("attendance %s closed for member %s after %d min", attendance_id, record.member_id, duration)
        return duration

    def history(self, member_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_member(member_id, limit)

    def statistics(self, *, day: date | None = None) -> AttendanceStats:
        day = day or now_local().date()
        return AttendanceStats.from_records(list(self._attendance.list_all()), day=day)
