"""
Exceptions.

Errors that callers are expected to act on carry a stable ``code``; match on
the code (or the class), not on the message, which is for humans.
"""

from typing import Optional


class CustomerError(RuntimeError):
    """Base class for failures reported to callers with a stable code."""

    code = ''
    message = ''

    def __init__(self, message: Optional[str] = None) -> None:
        if message is not None:
            self.message = message
        super(CustomerError, self).__init__(f'{self.code}: {self.message}')


class SignUpRestricted(CustomerError):
    """Registration was refused."""


class DuplicateContact(SignUpRestricted):
    """The contact number already belongs to a customer."""

    code = 'SGR-001'
    message = ('This contact number is already registered! Try other'
               ' contact number.')


class InvalidEmail(SignUpRestricted):
    """The e-mail address is malformed."""

    code = 'SGR-002'
    message = 'Invalid email-id format!'


class InvalidContact(SignUpRestricted):
    """The contact number is not ten digits."""

    code = 'SGR-003'
    message = 'Invalid contact number!'


class WeakPassword(SignUpRestricted):
    """The password does not meet the signup rule."""

    code = 'SGR-004'
    message = 'Weak password!'


class MissingField(SignUpRestricted):
    """A required registration field is empty."""

    code = 'SGR-005'
    message = 'Except last name all fields should be filled'


class AuthenticationFailed(CustomerError):
    """Failed to authenticate customer with provided credentials."""


class UnknownContact(AuthenticationFailed):
    """No customer has this contact number."""

    code = 'ATH-001'
    message = 'This contact number has not been registered!'


class BadCredentials(AuthenticationFailed):
    """Password is not correct."""

    code = 'ATH-002'
    message = 'Invalid Credentials'


class AuthorizationFailed(CustomerError):
    """The presented access token does not belong to a live session."""


class NotLoggedIn(AuthorizationFailed):
    code = 'ATHR-001'
    message = 'Customer is not Logged in.'


class AlreadyLoggedOut(AuthorizationFailed):
    code = 'ATHR-002'
    message = 'Customer is logged out. Log in again to access this endpoint.'


class SessionExpired(AuthorizationFailed):
    code = 'ATHR-003'
    message = 'Your session is expired. Log in again to access this endpoint.'


class UpdateCustomerFailed(CustomerError):
    """A change to customer credentials was refused."""


class WeakNewPassword(UpdateCustomerFailed):
    code = 'UCR-001'
    message = 'Weak password!'


class WrongOldPassword(UpdateCustomerFailed):
    code = 'UCR-004'
    message = 'Incorrect old password!'


# Policy failures, raised by :mod:`.policy` and translated by the engine.

class InvalidFormat(ValueError):
    """Value does not match the required format."""


class PasswordTooWeak(ValueError):
    """Password does not satisfy a strength rule."""


class InvalidToken(ValueError):
    """Token signature or claims could not be verified."""


# Storage failures.

class StoreError(RuntimeError):
    """The storage collaborator could not complete a request."""


class NoSuchCustomer(StoreError):
    """Customer does not exist."""


class CustomerConflict(StoreError):
    """A uniqueness constraint on customer data was violated."""


class RegistrationFailed(StoreError):
    """Failed to create a customer in the store."""


class SessionConflict(StoreError):
    """The session was already closed when an update was attempted."""


class SessionCreationFailed(StoreError):
    """Failed to create a session in the store."""
