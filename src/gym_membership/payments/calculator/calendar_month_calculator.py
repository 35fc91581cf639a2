from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ...common.datetime_utils import add_months
from ...plans.model import MembershipPlan
from .base import ExpiryCalculator


class CalendarMonthExpiryCalculator(ExpiryCalculator):
    """Standard rule: payment date + plan months, clamped to the last day of the month.

    Without a plan the payment buys no extension and expires on the payment date.
    """

    def expiry_for(self, *, paid_at: datetime, plan: Optional[MembershipPlan]) -> date:
        if plan is None:
            return paid_at.date()
        return add_months(paid_at.date(), plan.duration_months)
