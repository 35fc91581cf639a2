from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..common.validators import optional_id, require_email, require_non_empty
from ..core.enums import MemberStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..plans.repository import PlanRepository
from .model import Member
from .repository import MemberRepository

logger = logging.getLogger(__name__)


def _parse_status(value: Optional[str]) -> MemberStatus:
    if value is None or value == "":
        return MemberStatus.ACTIVE
    try:
        return MemberStatus(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(s.value for s in MemberStatus)
        raise ValidationError(f"Status must be one of: {allowed}")


def _clean_phone(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    phone = str(value).strip()
    return phone or None


class MemberService:
    """Use case: register and maintain members."""

    def __init__(self, members: MemberRepository, plans: PlanRepository):
        self._members = members
        self._plans = plans

    def list_members(self) -> Sequence[Member]:
        return self._members.list_all()

    def get_member(self, member_id: int) -> Member:
        member = self._members.get_by_id(member_id)
        if not member:
            raise NotFoundError("Member not found")
        return member

    def register(
        self,
        *,
        name: Optional[str],
        email: Optional[str],
        phone: Optional[str] = None,
        plan_id: Any = None,
    ) -> Member:
        name = require_non_empty(name, "Name")
        email = require_email(email)
        plan = optional_id(plan_id, "Membership plan id")

        if plan is not None and not self._plans.get_by_id(plan):
            raise NotFoundError("Plan not found")

        if self._members.get_by_email(email):
            raise ConflictError("Email already registered")

        member_id = self._members.create_member(
            name=name,
            email=email,
            phone=_clean_phone(phone),
            plan_id=plan,
            status=MemberStatus.ACTIVE,
        )
        logger.info("member %s registered", member_id)
        return self.get_member(member_id)

    def update(
        self,
        member_id: int,
        *,
        name: Optional[str],
        email: Optional[str],
        phone: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Member:
        name = require_non_empty(name, "Name")
        email = require_email(email)
        new_status = _parse_status(status)

        current = self.get_member(member_id)

        other = self._members.get_by_email(email)
        if other and other.member_id != member_id:
            raise ConflictError("Email already registered")

        if not self._members.update_member(
            member_id=member_id,
            name=name,
            email=email,
            phone=_clean_phone(phone),
            status=new_status,
        ):
            raise NotFoundError("Member not found")

        if current.status != new_status:
            logger.info("member %s status %s -> %s", member_id, current.status.value, new_status.value)
        return self.get_member(member_id)

    def delete(self, member_id: int) -> None:
        if not self._members.delete_by_id(member_id):
            raise NotFoundError("Member not found")
        logger.info("member %s deleted with payments and attendance", member_id)
