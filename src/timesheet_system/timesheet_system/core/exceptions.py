class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class InvalidInterval(ValidationError):
    """Raised when a trip does not end strictly after it starts."""


class InvalidRate(ValidationError):
    """Raised when an allowance rate is negative or not a number."""
