from datetime import date, datetime
from decimal import Decimal

from gym_membership.payments.calculator.calendar_month_calculator import CalendarMonthExpiryCalculator
from gym_membership.plans.model import MembershipPlan


def _plan(months: int) -> MembershipPlan:
    return MembershipPlan(plan_id=1, name=f"{months}m", duration_months=months, price=Decimal("10"))


def test_month_end_payment_expires_end_of_february():
    calc = CalendarMonthExpiryCalculator()
    assert calc.expiry_for(paid_at=datetime(2025, 1, 31, 18, 45), plan=_plan(1)) == date(2025, 2, 28)


def test_twelve_month_plan():
    calc = CalendarMonthExpiryCalculator()
    assert calc.expiry_for(paid_at=datetime(2025, 12, 8, 10, 0), plan=_plan(12)) == date(2026, 12, 8)


def test_no_plan_expires_on_payment_date():
    calc = CalendarMonthExpiryCalculator()
    assert calc.expiry_for(paid_at=datetime(2025, 12, 8, 10, 0), plan=None) == date(2025, 12, 8)
