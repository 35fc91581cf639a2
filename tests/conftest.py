from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

import pytest

from gym_membership.attendance.model import AttendanceRecord
from gym_membership.container import Container, wire_services
from gym_membership.core.enums import MemberStatus, PaymentStatus
from gym_membership.members.model import Member
from gym_membership.payments.model import Payment
from gym_membership.plans.model import MembershipPlan


class InMemoryMembers:
    def __init__(self):
        self._by_id: dict[int, Member] = {}
        self._id = 0

    def add(self, name: str, email: str, *, status: MemberStatus = MemberStatus.ACTIVE, plan_id=None) -> Member:
        member_id = self.create_member(name=name, email=email, phone=None, plan_id=plan_id, status=status)
        return self._by_id[member_id]

    def get_by_id(self, member_id: int) -> Optional[Member]:
        return self._by_id.get(member_id)

    def get_by_email(self, email: str) -> Optional[Member]:
        for m in self._by_id.values():
            if m.email.lower() == email.lower():
                return m
        return None

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda m: m.member_id, reverse=True)

    def create_member(self, *, name, email, phone, plan_id, status) -> int:
        self._id += 1
        self._by_id[self._id] = Member(
            member_id=self._id,
            name=name,
            email=email,
            phone=phone,
            status=status,
            plan_id=plan_id,
            join_date=datetime(2025, 1, 1, 9, 0),
        )
        return self._id

    def update_member(self, *, member_id, name, email, phone, status) -> bool:
        current = self._by_id.get(member_id)
        if not current:
            return False
        self._by_id[member_id] = replace(current, name=name, email=email, phone=phone, status=status)
        return True

    def delete_by_id(self, member_id: int) -> bool:
        return self._by_id.pop(member_id, None) is not None


class InMemoryPayments:
    def __init__(self):
        self.rows: list[Payment] = []

    def add(self, member_id: int, amount: str, *, paid_at: datetime, expiry: Optional[date], plan_id=None,
            status: PaymentStatus = PaymentStatus.COMPLETED) -> Payment:
        payment_id = self.insert_payment(
            member_id=member_id,
            plan_id=plan_id,
            amount=Decimal(amount),
            payment_date=paid_at,
            expiry_date=expiry,
            status=status,
        )
        return self.get_by_id(payment_id)

    def insert_payment(self, *, member_id, plan_id, amount, payment_date, expiry_date, status) -> int:
        payment_id = len(self.rows) + 1
        self.rows.append(
            Payment(
                payment_id=payment_id,
                member_id=member_id,
                plan_id=plan_id,
                amount=amount,
                payment_date=payment_date,
                expiry_date=expiry_date,
                status=status,
            )
        )
        return payment_id

    def get_by_id(self, payment_id: int) -> Optional[Payment]:
        return next((p for p in self.rows if p.payment_id == payment_id), None)

    def get_latest_completed(self, member_id: int) -> Optional[Payment]:
        completed = [p for p in self.rows if p.member_id == member_id and p.is_completed]
        if not completed:
            return None
        return max(completed, key=lambda p: (p.payment_date, p.payment_id))

    def list_all(self):
        return sorted(self.rows, key=lambda p: (p.payment_date, p.payment_id), reverse=True)


class InMemoryPlans:
    def __init__(self, payments: InMemoryPayments):
        self._by_id: dict[int, MembershipPlan] = {}
        self._payments = payments

    def add(self, name: str, months: int, price: str = "49.99") -> MembershipPlan:
        plan_id = self.create_plan(name=name, duration_months=months, price=Decimal(price), description=None)
        return self._by_id[plan_id]

    def get_by_id(self, plan_id: int) -> Optional[MembershipPlan]:
        return self._by_id.get(plan_id)

    def get_by_name(self, name: str) -> Optional[MembershipPlan]:
        return next((p for p in self._by_id.values() if p.name == name), None)

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda p: (p.price, p.plan_id))

    def create_plan(self, *, name, duration_months, price, description) -> int:
        plan_id = len(self._by_id) + 1
        self._by_id[plan_id] = MembershipPlan(
            plan_id=plan_id, name=name, duration_months=duration_months, price=price, description=description
        )
        return plan_id

    def update_plan(self, *, plan_id, name, duration_months, price, description) -> bool:
        if plan_id not in self._by_id or self.count_payments(plan_id):
            return False
        self._by_id[plan_id] = replace(
            self._by_id[plan_id], name=name, duration_months=duration_months, price=price, description=description
        )
        return True

    def count_payments(self, plan_id: int) -> int:
        return sum(1 for p in self._payments.rows if p.plan_id == plan_id)


class InMemoryAttendance:
    def __init__(self):
        self._by_id: dict[int, AttendanceRecord] = {}
        self._id = 0

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        return self._by_id.get(attendance_id)

    def get_open_for_member(self, member_id: int) -> Optional[AttendanceRecord]:
        return next((r for r in self._by_id.values() if r.member_id == member_id and r.is_open), None)

    def list_for_member(self, member_id: int, limit: int):
        items = [r for r in self._by_id.values() if r.member_id == member_id]
        items.sort(key=lambda r: (r.check_in_time, r.attendance_id), reverse=True)
        return items[:limit]

    def list_all(self):
        return list(self._by_id.values())

    def create_checkin(self, *, member_id: int, check_in_time: datetime) -> Optional[int]:
        if self.get_open_for_member(member_id):
            return None
        self._id += 1
        self._by_id[self._id] = AttendanceRecord(attendance_id=self._id, member_id=member_id, check_in_time=check_in_time)
        return self._id

    def close_session(self, *, attendance_id: int, check_out_time: datetime, duration_minutes: int) -> bool:
        record = self._by_id.get(attendance_id)
        if not record or not record.is_open:
            return False
        self._by_id[attendance_id] = replace(record, check_out_time=check_out_time, duration_minutes=duration_minutes)
        return True


class FakeConnection:
    def __init__(self, available: bool = True):
        self.available = available
        self.open_calls = 0

    def open(self) -> bool:
        self.open_calls += 1
        return self.available

    def is_available(self) -> bool:
        return self.available

    def close(self) -> None:
        self.available = False


@dataclass
class Store:
    members: InMemoryMembers = field(default_factory=InMemoryMembers)
    payments: InMemoryPayments = field(default_factory=InMemoryPayments)
    attendance: InMemoryAttendance = field(default_factory=InMemoryAttendance)
    conn: FakeConnection = field(default_factory=FakeConnection)
    plans: InMemoryPlans = None

    def __post_init__(self):
        if self.plans is None:
            self.plans = InMemoryPlans(self.payments)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 12, 8, 8, 0, 0)


@pytest.fixture
def store() -> Store:
    return Store()


@pytest.fixture
def container(store: Store) -> Container:
    return wire_services(
        conn=store.conn,
        members_repo=store.members,
        plans_repo=store.plans,
        payments_repo=store.payments,
        attendance_repo=store.attendance,
    )


@pytest.fixture
def app(monkeypatch, container: Container):
    monkeypatch.setenv("APP_ENV", "testing")
    from gym_membership.main import create_app

    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()
