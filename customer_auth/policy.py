"""
Format and strength rules for customer-supplied credentials.

There are two password rules. The signup rule is narrow (3 to 10 characters)
and the change rule is longer and forbids whitespace; they are kept separate
on purpose and must not be unified.
"""

import re
from typing import Optional

from .exceptions import InvalidFormat, PasswordTooWeak

_EMAIL = re.compile(r"[a-z0-9_!#$%&'’*+/=?`{|}~^.-]+@[a-z0-9.-]+",
                    re.IGNORECASE | re.ASCII)
_CONTACT_NUMBER = re.compile(r'[0-9]{10}')
_SIGNUP_PASSWORD = re.compile(
    r'(?=.*[0-9])(?=.*[A-Z])(?=.*[a-z])(?=.*[@#$%]).{3,10}'
)
_NEW_PASSWORD = re.compile(
    r'(?=.*[0-9])(?=.*[A-Z])(?=.*[@#$%^&\-+=()])(?=\S+\Z).{8,}'
)


def validate_email(email: str) -> None:
    """Raise :class:`.InvalidFormat` unless ``email`` looks like local@domain."""
    if _EMAIL.fullmatch(email) is None:
        raise InvalidFormat('Invalid email-id format')


def validate_contact_number(contact_number: str) -> None:
    """Raise :class:`.InvalidFormat` unless exactly ten ASCII digits."""
    if _CONTACT_NUMBER.fullmatch(contact_number) is None:
        raise InvalidFormat('Contact number must be exactly ten digits')


def validate_password_strength(password: str) -> None:
    """
    Check a password against the signup rule.

    The password must be 3 to 10 characters long and contain a digit, an
    upper-case letter, a lower-case letter and one of ``@#$%``.

    Raises
    ------
    :class:`.PasswordTooWeak`

    """
    if _SIGNUP_PASSWORD.fullmatch(password) is None:
        raise PasswordTooWeak('Password does not meet the signup rule')


def is_strong_new_password(password: Optional[str]) -> bool:
    """
    Check a password against the password-change rule.

    At least 8 characters, a digit, an upper-case letter, one of
    ``@#$%^&-+=()``, and no whitespace.
    """
    if password is None:
        return False
    return _NEW_PASSWORD.fullmatch(password) is not None


def validate_new_password_strength(password: Optional[str]) -> None:
    """Raise :class:`.PasswordTooWeak` if the password-change rule fails."""
    if not is_strong_new_password(password):
        raise PasswordTooWeak('Password does not meet the password-change rule')
