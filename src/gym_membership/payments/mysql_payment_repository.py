from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import PaymentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from .model import Payment
from .repository import PaymentRepository

_SELECT = """
    SELECT p.id, p.member_id, p.plan_id, p.amount, p.payment_date, p.expiry_date, p.status,
           m.name AS member_name, mp.name AS plan_name
    FROM payments p
    JOIN members m ON p.member_id = m.id
    LEFT JOIN membership_plans mp ON p.plan_id = mp.id
"""


def _to_payment(r: dict) -> Payment:
    plan_id = r.get("plan_id")
    return Payment(
        payment_id=int(r["id"]),
        member_id=int(r["member_id"]),
        plan_id=int(plan_id) if plan_id is not None else None,
        amount=to_decimal(r["amount"]),
        payment_date=r["payment_date"],
        expiry_date=r.get("expiry_date"),
        status=PaymentStatus(r["status"]),
        member_name=r.get("member_name"),
        plan_name=r.get("plan_name"),
    )


class MySQLPaymentRepository(PaymentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert_payment(
        self,
        *,
        member_id: int,
        plan_id: Optional[int],
        amount: Decimal,
        payment_date: datetime,
        expiry_date: date,
        status: PaymentStatus,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payments(member_id, plan_id, amount, payment_date, expiry_date, status)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(member_id), plan_id, amount, payment_date, expiry_date, status.value),
            )
            return int(cur.lastrowid)

    def get_by_id(self, payment_id: int) -> Optional[Payment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE p.id=%s", (int(payment_id),))
            r = fetchone(cur)
            return _to_payment(r) if r else None

    def get_latest_completed(self, member_id: int) -> Optional[Payment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT
                + """
                WHERE p.member_id=%s AND p.status=%s
                ORDER BY p.payment_date DESC, p.id DESC
                LIMIT 1
                """,
                (int(member_id), PaymentStatus.COMPLETED.value),
            )
            r = fetchone(cur)
            return _to_payment(r) if r else None

    def list_all(self) -> Sequence[Payment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY p.payment_date DESC, p.id DESC")
            return [_to_payment(r) for r in fetchall(cur)]
