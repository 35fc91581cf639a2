"""Revenue aggregation over payment history.

Pure functions; only COMPLETED payments count.
"""

from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from typing import Dict, Iterable, Optional

from .model import Payment


def compute_revenue(payments: Iterable[Payment], plan_id: Optional[int] = None) -> Decimal:
    """Sum of completed amounts, optionally only for one plan."""
    return sum(
        (p.amount for p in payments if p.is_completed and (plan_id is None or p.plan_id == plan_id)),
        Decimal("0"),
    )


def revenue_by_plan(payments: Iterable[Payment]) -> Dict[Optional[int], Decimal]:
    totals: Dict[Optional[int], Decimal] = defaultdict(lambda: Decimal("0"))
    for p in payments:
        if p.is_completed:
            totals[p.plan_id] += p.amount
    return dict(totals)
