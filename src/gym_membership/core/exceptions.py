class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400


class ValidationError(DomainError):
    """Raised when required input is missing or malformed."""

    status_code = 400


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""

    status_code = 404


class IneligibleError(DomainError):
    """Raised when a business rule blocks the operation (e.g. inactive member check-in)."""

    status_code = 403


class ConflictError(DomainError):
    """Raised on duplicates: registered email, plan name, second open session."""

    status_code = 409


class InvalidStateError(DomainError):
    """Raised when the operation is not valid for the entity's current state."""

    status_code = 400


class StoreUnavailableError(DomainError):
    """Raised when the database cannot be reached."""

    status_code = 503
