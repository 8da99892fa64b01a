class DirectoryError(Exception):
    """Base exception for directory business rule violations."""


class UnauthorizedError(DirectoryError):
    """Raised when the caller lacks the role required for a mutating call."""


class InvalidArgumentError(DirectoryError):
    """Raised when an employee model violates its employment-type rules."""
