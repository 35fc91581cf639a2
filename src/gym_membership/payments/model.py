from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional

from ..core.enums import PaymentStatus


@dataclass(frozen=True)
class Payment:
    """A single discrete payment. Never mutated once recorded."""

    payment_id: int
    member_id: int
    plan_id: Optional[int]
    amount: Decimal
    payment_date: datetime
    expiry_date: Optional[date]
    status: PaymentStatus
    member_name: Optional[str] = None
    plan_name: Optional[str] = None

    @property
    def is_completed(self) -> bool:
        return self.status == PaymentStatus.COMPLETED

    def covers(self, now: datetime) -> bool:
        """True while the expiry date (taken at midnight) is still ahead of `now`."""
        if not self.is_completed or self.expiry_date is None:
            return False
        return datetime.combine(self.expiry_date, time.min) > now

    def to_dict(self) -> dict:
        return {
            "id": self.payment_id,
            "member_id": self.member_id,
            "member_name": self.member_name,
            "plan_id": self.plan_id,
            "plan_name": self.plan_name,
            "amount": str(self.amount),
            "payment_date": self.payment_date.isoformat(),
            "expiry_date": self.expiry_date.isoformat() if self.expiry_date else None,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class SubscriptionStatus:
    """Read-model: where a member stands according to the latest completed payment."""

    member_id: int
    active: bool
    expiry_date: Optional[date]
    last_payment_id: Optional[int]

    def to_dict(self) -> dict:
        return {
            "member_id": self.member_id,
            "active": self.active,
            "expiry_date": self.expiry_date.isoformat() if self.expiry_date else None,
            "last_payment_id": self.last_payment_id,
        }
