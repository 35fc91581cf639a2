from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Optional

from ...plans.model import MembershipPlan


class ExpiryCalculator(ABC):
    """Calculator interface (Strategy Pattern for subscription expiry)."""

    @abstractmethod
    def expiry_for(self, *, paid_at: datetime, plan: Optional[MembershipPlan]) -> date:
        raise NotImplementedError
