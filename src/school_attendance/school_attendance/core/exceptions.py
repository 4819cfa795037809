class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced record (or scanned code) does not exist."""


class RejectedError(DomainError):
    """Raised when a well-formed request is refused by a business rule.

    Examples: a third scan on the same day, the loser of a concurrent
    check-in, an invalid settings update.
    """


class AuthenticationError(DomainError):
    """Raised when no valid API key was presented."""


class AuthorizationError(DomainError):
    """Raised when an API key lacks the capability for an action."""


class DuplicateEventError(Exception):
    """Raised by attendance stores when the (person, date, type) key already exists."""


class DuplicateKeyError(Exception):
    """Raised by stores when a unique column (code, class code, ...) collides."""
