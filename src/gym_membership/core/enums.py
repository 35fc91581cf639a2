from __future__ import annotations

from enum import Enum


class MemberStatus(str, Enum):
    """Only ACTIVE members may check in."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


class PaymentStatus(str, Enum):
    """Only COMPLETED payments count toward validity and revenue."""

    COMPLETED = "completed"
    PENDING = "pending"
    FAILED = "failed"


class SessionState(str, Enum):
    """Attendance session lifecycle: OPEN (checked in) -> CLOSED (checked out, terminal)."""

    OPEN = "open"
    CLOSED = "closed"
