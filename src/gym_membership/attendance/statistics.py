"""Attendance statistics over a sequence of sessions. Pure functions, no I/O."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, Optional, Sequence

from .model import AttendanceRecord


def average_duration(records: Iterable[AttendanceRecord]) -> Optional[float]:
    """Mean duration of closed sessions; None when nothing has been checked out."""
    durations = [r.duration_minutes for r in records if r.duration_minutes is not None]
    if not durations:
        return None
    return sum(durations) / len(durations)


def checkins_per_member(records: Iterable[AttendanceRecord]) -> Dict[int, int]:
    return dict(Counter(r.member_id for r in records))


def checkins_on_day(records: Iterable[AttendanceRecord], day: date) -> int:
    # Timestamps are local time, so the calendar date compares directly.
    return sum(1 for r in records if r.check_in_time.date() == day)


def peak_checkin_hour(records: Iterable[AttendanceRecord]) -> Optional[int]:
    """Hour of day with most check-ins; the earliest hour wins a tie."""
    counts = Counter(r.check_in_time.hour for r in records)
    if not counts:
        return None
    return min(counts, key=lambda hour: (-counts[hour], hour))


@dataclass(frozen=True)
class AttendanceStats:
    total_checkins: int
    open_sessions: int
    average_duration_minutes: Optional[float]
    checkins_per_member: Dict[int, int]
    day: date
    checkins_on_day: int
    peak_hour: Optional[int]

    @classmethod
    def from_records(cls, records: Sequence[AttendanceRecord], *, day: date) -> "AttendanceStats":
        return cls(
            total_checkins=len(records),
            open_sessions=sum(1 for r in records if r.is_open),
            average_duration_minutes=average_duration(records),
            checkins_per_member=checkins_per_member(records),
            day=day,
            checkins_on_day=checkins_on_day(records, day),
            peak_hour=peak_checkin_hour(records),
        )

    def to_dict(self) -> dict:
        return {
            "total_checkins": self.total_checkins,
            "open_sessions": self.open_sessions,
            "average_duration_minutes": self.average_duration_minutes,
            "checkins_per_member": {str(k): v for k, v in sorted(self.checkins_per_member.items())},
            "date": self.day.isoformat(),
            "checkins_on_date": self.checkins_on_day,
            "peak_hour": self.peak_hour,
        }
