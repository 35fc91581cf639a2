from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import MemberStatus


@dataclass(frozen=True)
class Member:
    """Registered gym member. Email is stored lower-cased and is unique."""

    member_id: int
    name: str
    email: str
    phone: Optional[str]
    status: MemberStatus
    plan_id: Optional[int]
    join_date: datetime
    plan_name: Optional[str] = None

    @property
    def can_check_in(self) -> bool:
        return self.status == MemberStatus.ACTIVE

    def to_dict(self) -> dict:
        return {
            "id": self.member_id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "status": self.status.value,
            "membership_plan_id": self.plan_id,
            "plan_name": self.plan_name,
            "join_date": self.join_date.isoformat() if self.join_date else None,
        }
