from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import SessionState


@dataclass(frozen=True)
class AttendanceRecord:
    """One gym visit. Open until checked out; duration is derived at check-out."""

    attendance_id: int
    member_id: int
    check_in_time: datetime
    check_out_time: Optional[datetime] = None
    duration_minutes: Optional[int] = None

    @property
    def state(self) -> SessionState:
        return SessionState.OPEN if self.check_out_time is None else SessionState.CLOSED

    @property
    def is_open(self) -> bool:
        return self.state == SessionState.OPEN

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "member_id": self.member_id,
            "check_in_date": self.check_in_time.isoformat(),
            "check_out_date": self.check_out_time.isoformat() if self.check_out_time else None,
            "duration_minutes": self.duration_minutes,
        }
