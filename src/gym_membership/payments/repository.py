from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import PaymentStatus
from .model import Payment


class PaymentRepository(Protocol):
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
        raise NotImplementedError

    def get_by_id(self, payment_id: int) -> Optional[Payment]:
        raise NotImplementedError

    def get_latest_completed(self, member_id: int) -> Optional[Payment]:
        """Most recent COMPLETED payment by payment date."""

        raise NotImplementedError

    def list_all(self) -> Sequence[Payment]:
        """Newest first, with member and plan names."""

        raise NotImplementedError
