"""Custom exceptions for authentication."""


class AuthenticationError(Exception):
    """Raised when the identity provider rejects a token or returns no user."""

    pass
