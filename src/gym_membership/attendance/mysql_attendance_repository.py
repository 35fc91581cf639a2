from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "id, member_id, check_in_date, check_out_date, duration_minutes"


def _to_record(r: dict) -> AttendanceRecord:
    duration = r.get("duration_minutes")
    return AttendanceRecord(
        attendance_id=int(r["id"]),
        member_id=int(r["member_id"]),
        check_in_time=r["check_in_date"],
        check_out_time=r.get("check_out_date"),
        duration_minutes=int(duration) if duration is not None else None,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance WHERE id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_open_for_member(self, member_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM attendance
                WHERE member_id=%s AND check_out_date IS NULL
                ORDER BY check_in_date DESC
                LIMIT 1
                """,
                (int(member_id),),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_member(self, member_id: int, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM attendance
                WHERE member_id=%s
                ORDER BY check_in_date DESC, id DESC
                LIMIT %s
                """,
                (int(member_id), int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance ORDER BY check_in_date DESC, id DESC")
            return [_to_record(r) for r in fetchall(cur)]

    def create_checkin(self, *, member_id: int, check_in_time: datetime) -> Optional[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            # Lock the member row so concurrent check-ins for one member serialize.
            cur.execute("SELECT id FROM members WHERE id=%s FOR UPDATE", (int(member_id),))
            fetchall(cur)
            cur.execute(
                "SELECT id FROM attendance WHERE member_id=%s AND check_out_date IS NULL LIMIT 1",
                (int(member_id),),
            )
            if fetchall(cur):
                return None
            cur.execute(
                "INSERT INTO attendance(member_id, check_in_date) VALUES(%s,%s)",
                (int(member_id), check_in_time),
            )
            return int(cur.lastrowid)

    def close_session(self, *, attendance_id: int, check_out_time: datetime, duration_minutes: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET check_out_date=%s, duration_minutes=%s
                WHERE id=%s AND check_out_date IS NULL
                """,
                (check_out_time, int(duration_minutes), int(attendance_id)),
            )
            return cur.rowcount > 0
