from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.constants import EMAIL_PATTERN, MONEY_DECIMAL_PLACES, MONEY_UPPER_BOUND
from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(EMAIL_PATTERN)


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_email(value: Optional[str]) -> str:
    """Validate and normalize an email; addresses compare case-insensitively."""
    email = require_non_empty(value, "Email")
    if not _EMAIL_RE.match(email):
        raise ValidationError("Email is not valid")
    return email.lower()


def require_id(value: Any, field_name: str) -> int:
    if value is None or value == "" or isinstance(value, bool):
        raise ValidationError(f"{field_name} is required")
    try:
        ident = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
    if ident <= 0:
        raise ValidationError(f"{field_name} must be positive")
    return ident


def optional_id(value: Any, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    return require_id(value, field_name)


def parse_decimal(value: Any, field_name: str) -> Decimal:
    if value is None or value == "" or isinstance(value, bool):
        raise ValidationError(f"{field_name} is required")
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} must be numeric")
    if not amount.is_finite():
        raise ValidationError(f"{field_name} must be numeric")
    return amount


def require_money(value: Any, field_name: str, *, allow_zero: bool = False) -> Decimal:
    """Amount that fits a DECIMAL(10, 2) column without rounding or overflow."""
    amount = parse_decimal(value, field_name)
    if allow_zero:
        if amount < 0:
            raise ValidationError(f"{field_name} cannot be negative")
    elif amount <= 0:
        raise ValidationError(f"{field_name} must be greater than 0")
    if amount >= MONEY_UPPER_BOUND:
        raise ValidationError(f"{field_name} must be less than {MONEY_UPPER_BOUND}")
    if amount != amount.quantize(Decimal(1).scaleb(-MONEY_DECIMAL_PLACES)):
        raise ValidationError(f"{field_name} cannot have more than {MONEY_DECIMAL_PLACES} decimal places")
    return amount


def require_positive_amount(value: Any, field_name: str = "Amount") -> Decimal:
    return require_money(value, field_name)
