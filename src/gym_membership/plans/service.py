from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..common.validators import parse_decimal, require_money, require_non_empty
from ..core.constants import MAX_PLAN_DURATION_MONTHS
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from .model import MembershipPlan
from .repository import PlanRepository

logger = logging.getLogger(__name__)


def _validate_duration(value: Any) -> int:
    months = parse_decimal(value, "Duration")
    if months != months.to_integral_value():
        raise ValidationError("Duration must be a whole number of months")
    if months <= 0 or months > MAX_PLAN_DURATION_MONTHS:
        raise ValidationError(f"Duration must be between 1 and {MAX_PLAN_DURATION_MONTHS} months")
    return int(months)


class PlanService:
    """Use case: manage membership plans."""

    def __init__(self, plans: PlanRepository):
        self._plans = plans

    def list_plans(self) -> Sequence[MembershipPlan]:
        return self._plans.list_all()

    def get_plan(self, plan_id: int) -> MembershipPlan:
        plan = self._plans.get_by_id(plan_id)
        if not plan:
            raise NotFoundError("Plan not found")
        return plan

    def create_plan(
        self,
        *,
        name: Optional[str],
        duration_months: Any,
        price: Any,
        description: Optional[str] = None,
    ) -> MembershipPlan:
        name = require_non_empty(name, "Name")
        months = _validate_duration(duration_months)
        amount = require_money(price, "Price", allow_zero=True)

        if self._plans.get_by_name(name):
            raise ConflictError("Plan name already exists")

        plan_id = self._plans.create_plan(
            name=name,
            duration_months=months,
            price=amount,
            description=(description or None),
        )
        logger.info("plan %s created: %s (%d months, %s)", plan_id, name, months, amount)
        return MembershipPlan(plan_id=plan_id, name=name, duration_months=months, price=amount, description=description or None)

    def update_plan(
        self,
        plan_id: int,
        *,
        name: Optional[str],
        duration_months: Any,
        price: Any,
        description: Optional[str] = None,
    ) -> MembershipPlan:
        self.get_plan(plan_id)

        name = require_non_empty(name, "Name")
        months = _validate_duration(duration_months)
        amount = require_money(price, "Price", allow_zero=True)

        other = self._plans.get_by_name(name)
        if other and other.plan_id != plan_id:
            raise ConflictError("Plan name already exists")

        if self._plans.count_payments(plan_id) > 0:
            raise ConflictError("Plan is referenced by payments and can no longer be changed")

        if not self._plans.update_plan(
            plan_id=plan_id,
            name=name,
            duration_months=months,
            price=amount,
            description=description or None,
        ):
            # A payment landed between the check and the update.
            raise ConflictError("Plan is referenced by payments and can no longer be changed")

        return MembershipPlan(plan_id=plan_id, name=name, duration_months=months, price=amount, description=description or None)
