from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import now_local, stamp
from ..common.validators import optional_id, require_id, require_positive_amount
from ..core.enums import PaymentStatus
from ..core.exceptions import NotFoundError
from ..members.model import Member
from ..members.repository import MemberRepository
from ..plans.repository import PlanRepository
from .calculator.base import ExpiryCalculator
from .calculator.calendar_month_calculator import CalendarMonthExpiryCalculator
from .model import Payment, SubscriptionStatus
from .repository import PaymentRepository
from .revenue import compute_revenue, revenue_by_plan

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RevenueReport:
    total: Decimal
    by_plan: Dict[Optional[int], Decimal]
    plan_id: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "plan_id": self.plan_id,
            "total": str(self.total),
            "by_plan": [
                {"plan_id": plan_id, "revenue": str(amount)}
                for plan_id, amount in sorted(self.by_plan.items(), key=lambda kv: (kv[0] is None, kv[0] or 0))
            ],
        }


class MembershipService:
    """Use case: payments and the subscription window they define."""

    def __init__(
        self,
        payments: PaymentRepository,
        members: MemberRepository,
        plans: PlanRepository,
        *,
        calculator: Optional[ExpiryCalculator] = None,
    ):
        self._payments = payments
        self._members = members
        self._plans = plans
        self._calculator = calculator or CalendarMonthExpiryCalculator()

    def record_payment(
        self,
        member_id: Any,
        amount: Any,
        plan_id: Any = None,
        *,
        now: datetime | None = None,
    ) -> Payment:
        member_id = require_id(member_id, "Member ID")
        amount = require_positive_amount(amount)
        plan_id = optional_id(plan_id, "Plan id")

        if not self._members.get_by_id(member_id):
            raise NotFoundError("Member not found")

        plan = None
        if plan_id is not None:
            plan = self._plans.get_by_id(plan_id)
            if not plan:
                raise NotFoundError("Plan not found")

        paid_at = stamp(now)
        expiry = self._calculator.expiry_for(paid_at=paid_at, plan=plan)

        payment_id = self._payments.insert_payment(
            member_id=member_id,
            plan_id=plan_id,
            amount=amount,
            payment_date=paid_at,
            expiry_date=expiry,
            status=PaymentStatus.COMPLETED,
        )
        logger.info("payment %s recorded for member %s: %s, expires %s", payment_id, member_id, amount, expiry)

        return Payment(
            payment_id=payment_id,
            member_id=member_id,
            plan_id=plan_id,
            amount=amount,
            payment_date=paid_at,
            expiry_date=expiry,
            status=PaymentStatus.COMPLETED,
            plan_name=plan.name if plan else None,
        )

    def is_subscription_active(self, member: Member, *, now: datetime | None = None) -> bool:
        """Independent of member.status: only the latest completed payment decides."""
        latest = self._payments.get_latest_completed(member.member_id)
        return bool(latest and latest.covers(now or now_local()))

    def subscription_status(self, member_id: int, *, now: datetime | None = None) -> SubscriptionStatus:
        if not self._members.get_by_id(member_id):
            raise NotFoundError("Member not found")

        latest = self._payments.get_latest_completed(member_id)
        return SubscriptionStatus(
            member_id=member_id,
            active=bool(latest and latest.covers(now or now_local())),
            expiry_date=latest.expiry_date if latest else None,
            last_payment_id=latest.payment_id if latest else None,
        )

    def list_payments(self) -> Sequence[Payment]:
        return self._payments.list_all()

    def revenue_report(self, *, plan_id: Any = None) -> RevenueReport:
        plan_id = optional_id(plan_id, "Plan id")
        payments = self._payments.list_all()
        total = compute_revenue(payments, plan_id)
        return RevenueReport(total=total, by_plan=revenue_by_plan(payments), plan_id=plan_id)
