from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import MembershipPlan


class PlanRepository(Protocol):
    def get_by_id(self, plan_id: int) -> Optional[MembershipPlan]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[MembershipPlan]:
        raise NotImplementedError

    def list_all(self) -> Sequence[MembershipPlan]:
        """Cheapest first."""

        raise NotImplementedError

    def create_plan(self, *, name: str, duration_months: int, price: Decimal, description: Optional[str]) -> int:
        raise NotImplementedError

    def update_plan(
        self,
        *,
        plan_id: int,
        name: str,
        duration_months: int,
        price: Decimal,
        description: Optional[str],
    ) -> bool:
        raise NotImplementedError

    def count_payments(self, plan_id: int) -> int:
        raise NotImplementedError
