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


class AuthenticationError(UserError):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message)


class AccessDeniedError(UserError):
    """Raised when a caller is not allowed to perform the request, e.g. a webhook with a wrong secret."""

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when user input fails validation."""


class InvalidOrExpiredTokenError(UserError):
    """Raised when a well-formed login token does not match a live token.

    The message never tells apart unknown and expired tokens.
    """

    def __init__(self) -> None:
        super().__init__("Invalid or expired token.")


class LoginRequiredError(Exception):
    """Raised by protected routes when there is no valid session. Handled as a redirect to the login page."""

    def __init__(self, next_path: str | None = None) -> None:
        super().__init__("Login required")
        self.next_path = next_path


class DeliveryError(Exception):
    """Raised when the messaging provider rejects a message."""
