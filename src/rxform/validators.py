"""Field validation — pure predicates and the error text shown for them.

Every *_error function returns None when the field is valid.
"""

from __future__ import annotations

import re

from rxform.models import PasswordChange

MIN_PASSWORD_LENGTH = 6

INVALID_EMAIL = "Invalid email address"
SHORT_PASSWORD = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
SHORT_NEW_PASSWORD = f"New password must be at least {MIN_PASSWORD_LENGTH} characters"
SAME_PASSWORD = "New password is same old password!"

_EMAIL_RE = re.compile(r"^[A-Za-z0-9._%+\-]+@[A-Za-z0-9\-]+(\.[A-Za-z0-9\-]+)*\.[A-Za-z]{2,}$")


def is_valid_email(email: str) -> bool:
    return _EMAIL_RE.match(email) is not None


def is_valid_password(password: str) -> bool:
    return len(password) >= MIN_PASSWORD_LENGTH


def email_error(email: str) -> str | None:
    return None if is_valid_email(email) else INVALID_EMAIL


def password_error(password: str) -> str | None:
    return None if is_valid_password(password) else SHORT_PASSWORD


def current_password_error(change: PasswordChange) -> str | None:
    """Error for the current-password field of a password change."""
    if not is_valid_password(change.password):
        return SHORT_PASSWORD
    if is_valid_password(change.new_password) and change.password == change.new_password:
        return SAME_PASSWORD
    return None


def new_password_error(change: PasswordChange) -> str | None:
    """Error for the new-password field. Mirrors current_password_error."""
    if not is_valid_password(change.new_password):
        return SHORT_NEW_PASSWORD
    if is_valid_password(change.password) and change.password == change.new_password:
        return SAME_PASSWORD
    return None


def is_valid_change(change: PasswordChange) -> bool:
    return (
        is_valid_password(change.password)
        and is_valid_password(change.new_password)
        and change.password != change.new_password
    )
