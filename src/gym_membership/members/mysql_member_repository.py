from __future__ import annotations

from typing import Optional, Sequence

import mysql.connector

from ..core.enums import MemberStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import Member
from .repository import MemberRepository

_SELECT = """
    SELECT m.id, m.name, m.email, m.phone, m.status, m.membership_plan_id, m.join_date,
           mp.name AS plan_name
    FROM members m
    LEFT JOIN membership_plans mp ON m.membership_plan_id = mp.id
"""


def _to_member(r: dict) -> Member:
    plan_id = r.get("membership_plan_id")
    return Member(
        member_id=int(r["id"]),
        name=r["name"],
        email=r["email"],
        phone=r.get("phone"),
        status=MemberStatus(r["status"]),
        plan_id=int(plan_id) if plan_id is not None else None,
        join_date=r["join_date"],
        plan_name=r.get("plan_name"),
    )


class MySQLMemberRepository(MemberRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, member_id: int) -> Optional[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE m.id=%s", (int(member_id),))
            r = fetchone(cur)
            return _to_member(r) if r else None

    def get_by_email(self, email: str) -> Optional[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE LOWER(m.email)=LOWER(%s)", (email,))
            r = fetchone(cur)
            return _to_member(r) if r else None

    def list_all(self) -> Sequence[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY m.created_at DESC, m.id DESC")
            return [_to_member(r) for r in fetchall(cur)]

    def create_member(
        self,
        *,
        name: str,
        email: str,
        phone: Optional[str],
        plan_id: Optional[int],
        status: MemberStatus,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO members(name, email, phone, membership_plan_id, status)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (name, email, phone, plan_id, status.value),
                )
                return int(cur.lastrowid)
        except mysql.connector.errors.IntegrityError as e:
            if is_duplicate_key(e):
                raise ConflictError("Email already registered") from e
            raise

    def update_member(
        self,
        *,
        member_id: int,
        name: str,
        email: str,
        phone: Optional[str],
        status: MemberStatus,
    ) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE members
                    SET name=%s, email=%s, phone=%s, status=%s
                    WHERE id=%s
                    """,
                    (name, email, phone, status.value, int(member_id)),
                )
                # rowcount is 0 when nothing changed, so confirm the row exists.
                if cur.rowcount > 0:
                    return True
                cur.execute("SELECT 1 AS found FROM members WHERE id=%s", (int(member_id),))
                return fetchone(cur) is not None
        except mysql.connector.errors.IntegrityError as e:
            if is_duplicate_key(e):
                raise ConflictError("Email already registered") from e
            raise

    def delete_by_id(self, member_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM members WHERE id=%s", (int(member_id),))
            return cur.rowcount > 0
