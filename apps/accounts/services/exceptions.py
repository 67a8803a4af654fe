"""
Domain-specific exceptions for accounts app.

Views map these to 400 (registration, reset token), 401 (credentials)
and 403 (deactivated account).
"""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class UserRegistrationError(AccountsServiceError):
    """Sign-up rejected, e.g. the email is already registered."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Unknown email or wrong password."""
    pass


class InactiveAccountError(AccountsServiceError):
    """Shop owner account has been deactivated."""
    pass


class InvalidTokenError(AccountsServiceError):
    """Password reset token is unknown, used or expired."""
    pass


class UserNotFoundError(AccountsServiceError):
    """No active account has the given email."""
    pass
