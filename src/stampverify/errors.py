from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Document not found") -> None:
        super().__init__(message)


class SessionNotFoundError(NotFoundError):
    """Raised when a sign-in session token is unknown or its TTL has elapsed."""

    def __init__(self, message: str = "session not found or expired") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message)


class NotAuthenticatedError(AuthenticationError):
    """Raised when an identity query is made before the signature challenge is passed."""

    def __init__(self, message: str = "authentication not passed") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when user input fails validation."""


class UpstreamError(Exception):
    """Raised when an external API answers with an unexpected status code.

    Not a UserError: the message may contain upstream URLs.
    """

    def __init__(self, method: str, path: str, status: int, expected: int = 200) -> None:
        self.method = method
        self.path = path
        self.status = status
        self.expected = expected
        super().__init__(
            f"{method.lower()} {path} returned status code {status} instead of the expected {expected}"
        )
