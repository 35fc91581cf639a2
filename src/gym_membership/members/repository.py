from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import MemberStatus
from .model import Member


class MemberRepository(Protocol):
    """Member store used by the services.

    Deleting a member removes its payments and attendance with it.
    """

    def get_by_id(self, member_id: int) -> Optional[Member]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Member]:
        """Case-insensitive lookup."""

        raise NotImplementedError

    def list_all(self) -> Sequence[Member]:
        raise NotImplementedError

    def create_member(
        self,
        *,
        name: str,
        email: str,
        phone: Optional[str],
        plan_id: Optional[int],
        status: MemberStatus,
    ) -> int:
        raise NotImplementedError

    def update_member(
        self,
        *,
        member_id: int,
        name: str,
        email: str,
        phone: Optional[str],
        status: MemberStatus,
    ) -> bool:
        raise NotImplementedError

    def delete_by_id(self, member_id: int) -> bool:
        raise NotImplementedError
