from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

import mysql.connector

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key, to_decimal
from .model import MembershipPlan
from .repository import PlanRepository

_COLUMNS = "id, name, duration_months, price, description, created_at"


def _to_plan(r: dict) -> MembershipPlan:
    return MembershipPlan(
        plan_id=int(r["id"]),
        name=r["name"],
        duration_months=int(r["duration_months"]),
        price=to_decimal(r["price"]),
        description=r.get("description"),
        created_at=r.get("created_at"),
    )


class MySQLPlanRepository(PlanRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, plan_id: int) -> Optional[MembershipPlan]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM membership_plans WHERE id=%s", (int(plan_id),))
            r = fetchone(cur)
            return _to_plan(r) if r else None

    def get_by_name(self, name: str) -> Optional[MembershipPlan]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM membership_plans WHERE name=%s", (name,))
            r = fetchone(cur)
            return _to_plan(r) if r else None

    def list_all(self) -> Sequence[MembershipPlan]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM membership_plans ORDER BY price ASC, id ASC")
            return [_to_plan(r) for r in fetchall(cur)]

    def create_plan(self, *, name: str, duration_months: int, price: Decimal, description: Optional[str]) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO membership_plans(name, duration_months, price, description)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (name, int(duration_months), price, description),
                )
                return int(cur.lastrowid)
        except mysql.connector.errors.IntegrityError as e:
            if is_duplicate_key(e):
                raise ConflictError("Plan name already exists") from e
            raise

    def update_plan(
        self,
        *,
        plan_id: int,
        name: str,
        duration_months: int,
        price: Decimal,
        description: Optional[str],
    ) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE membership_plans
                    SET name=%s, duration_months=%s, price=%s, description=%s
                    WHERE id=%s
                      AND NOT EXISTS (SELECT 1 FROM payments WHERE plan_id=%s)
                    """,
                    (name, int(duration_months), price, description, int(plan_id), int(plan_id)),
                )
                return cur.rowcount > 0
        except mysql.connector.errors.IntegrityError as e:
            if is_duplicate_key(e):
                raise ConflictError("Plan name already exists") from e
            raise

    def count_payments(self, plan_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS c FROM payments WHERE plan_id=%s", (int(plan_id),))
            r = fetchone(cur)
            return int(r["c"]) if r else 0
