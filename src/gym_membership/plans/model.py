from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class MembershipPlan:
    """A named tier with a fixed duration and price.

    Frozen once any payment references it, so historic expiry dates stay reproducible.
    """

    plan_id: int
    name: str
    duration_months: int
    price: Decimal
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.plan_id,
            "name": self.name,
            "duration_months": self.duration_months,
            "price": str(self.price),
            "description": self.description,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
