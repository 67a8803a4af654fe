"""Password reset service."""

import logging
import secrets

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.mail import send_mail
from django.db import transaction
from django.utils import timezone

from .exceptions import UserNotFoundError, InvalidTokenError

User = get_user_model()

logger = logging.getLogger(__name__)


def send_password_reset_email(user, token: str) -> None:
    """Email the reset token to the user."""
    send_mail(
        subject='Borrow Tracker password reset',
        message=(
            f"Hello {user.get_display_name()},\n\n"
            f"Use this token to reset your password: {token}\n\n"
            "If you did not request a password reset, ignore this email."
        ),
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[user.email],
    )


@transaction.atomic
def request_password_reset(*, email: str) -> str:
    """
    Generate a password reset token and email it after commit.

    Args:
        email: User's email address

    Returns:
        Reset token

    Raises:
        UserNotFoundError: If no active user has this email
    """
    try:
        user = (
            User.objects
            .select_for_update()
            .get(email__iexact=email, is_active=True)
        )
    except User.DoesNotExist:
        raise UserNotFoundError(f"No active user with email: {email}")

    reset_token = secrets.token_urlsafe(32)
    user.password_reset_token = reset_token
    user.password_reset_requested_at = timezone.now()
    user.save(update_fields=['password_reset_token', 'password_reset_requested_at'])

    transaction.on_commit(lambda: send_password_reset_email(user, reset_token))
    logger.info("Password reset requested for user %s", user.id)

    return reset_token


@transaction.atomic
def confirm_password_reset(*, token: str, new_password: str) -> User:
    """
    Reset user password with token.

    Args:
        token: Reset token
        new_password: New password

    Returns:
        User instance

    Raises:
        InvalidTokenError: If token is invalid or expired
    """
    try:
        user = (
            User.objects
            .select_for_update()
            .get(password_reset_token=token, is_active=True)
        )
    except User.DoesNotExist:
        raise InvalidTokenError("Invalid or expired reset token")

    if user.password_reset_expired(settings.PASSWORD_RESET_TIMEOUT):
        raise InvalidTokenError("Invalid or expired reset token")

    user.set_password(new_password)
    user.clear_password_reset()
    user.save(update_fields=['password', 'password_reset_token', 'password_reset_requested_at'])

    logger.info("Password reset completed for user %s", user.id)

    return user
