class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class MissingFields(ValidationError):
    """Raised when a required field is absent or empty."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class InvalidCredentials(AuthenticationError):
    """Unknown identifier or wrong password. Both read the same to callers."""


class NotFound(DomainError):
    """Raised when the addressed record does not exist."""


class RecordNotFound(NotFound):
    """Store-level miss on ``get``/``update``."""


class EmployeeNotFound(NotFound):
    pass


class NoActiveSession(NotFound):
    """No open attendance record for today."""


class DuplicateKey(DomainError):
    """Raised when an insert-if-absent finds the key already present."""


class DuplicateEmployee(DuplicateKey):
    pass


class AlreadyClockedIn(DuplicateKey):
    pass


class StoreUnavailable(DomainError):
    """Backend transport or availability failure. Never retried."""


class ConditionFailed(DomainError):
    """Raised when a conditional update finds the item in another state."""
