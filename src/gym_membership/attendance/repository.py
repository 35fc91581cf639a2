from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_open_for_member(self, member_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_member(self, member_id: int, limit: int) -> Sequence[AttendanceRecord]:
        """Newest check-in first."""

        raise NotImplementedError

    def list_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(self, *, member_id: int, check_in_time: datetime) -> Optional[int]:
        """Open a session; returns None if the member already has one open."""

        raise NotImplementedError

    def close_session(self, *, attendance_id: int, check_out_time: datetime, duration_minutes: int) -> bool:
        """Close an open session; returns False if it was not open anymore."""

        raise NotImplementedError
