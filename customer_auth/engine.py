"""
Registration, authentication and the session lifecycle.

A session moves from ACTIVE to exactly one terminal state: LOGGED_OUT when the
customer logs out, or EXPIRED once :data:`SESSION_DURATION` has elapsed. Only
the logout time is stored; expiry is computed from ``expires_at`` on every
read, so there is nothing to sweep.
"""

import logging
import uuid
from datetime import datetime, timedelta
from typing import Callable, Optional

from . import passwords, policy, tokens, util
from .domain import Customer, CustomerRegistration, Session, SessionState
from .exceptions import AlreadyLoggedOut, BadCredentials, CustomerConflict, \
    DuplicateContact, InvalidContact, InvalidEmail, InvalidFormat, \
    MissingField, NoSuchCustomer, NotLoggedIn, PasswordTooWeak, \
    RegistrationFailed, SessionConflict, SessionExpired, UnknownContact, \
    WeakNewPassword, WeakPassword, WrongOldPassword
from .store import CustomerStore

logger = logging.getLogger(__name__)

SESSION_DURATION = timedelta(hours=8)
"""How long a session remains usable after login. Not configurable."""

Clock = Callable[[], datetime]


class SessionEngine(object):
    """
    Orchestrates customer credentials and sessions against a store.

    The engine keeps no mutable state of its own; any number of instances may
    share one store.
    """

    def __init__(self, store: CustomerStore,
                 clock: Optional[Clock] = None) -> None:
        self.store = store
        self._clock = clock or util.now

    def _now(self) -> datetime:
        return self._clock().replace(microsecond=0)

    def register(self, registration: CustomerRegistration) -> Customer:
        """
        Register a new customer.

        Parameters
        ----------
        registration : :class:`.CustomerRegistration`

        Returns
        -------
        :class:`.Customer`
            The stored customer. Neither the password nor its digest is
            included.

        Raises
        ------
        :class:`.DuplicateContact`
        :class:`.MissingField`
        :class:`.InvalidEmail`
        :class:`.InvalidContact`
        :class:`.WeakPassword`

        """
        contact_number = registration.contact_number
        if contact_number \
                and self.store.find_customer_by_contact(contact_number):
            raise DuplicateContact()
        if not (registration.first_name and registration.email
                and registration.password and contact_number):
            raise MissingField()
        _check_signup_data(registration)

        salt, digest = passwords.hash_new_password(registration.password)
        customer = Customer(
            first_name=registration.first_name,
            last_name=registration.last_name,
            email=registration.email,
            contact_number=contact_number,
            address=registration.address
        )
        try:
            customer = self.store.create_customer(customer, salt, digest)
        except CustomerConflict as e:
            # Lost a race with a concurrent registration, or the e-mail
            # address belongs to someone else.
            if self.store.find_customer_by_contact(contact_number):
                raise DuplicateContact() from e
            raise RegistrationFailed('Could not create customer') from e
        logger.info('Registered customer %s', customer.customer_id)
        return customer

    def authenticate(self, contact_number: str, password: str) -> Session:
        """
        Log a customer in with contact number and password.

        Returns
        -------
        :class:`.Session`
            A new session, valid for :data:`SESSION_DURATION`.

        Raises
        ------
        :class:`.UnknownContact`
        :class:`.BadCredentials`

        """
        db_customer = self.store.find_customer_by_contact(contact_number)
        if db_customer is None:
            logger.debug('No customer with that contact number')
            raise UnknownContact()
        if not passwords.verify_password(password, db_customer.salt,
                                         db_customer.password):
            logger.debug('Bad password for customer %s', db_customer.uuid)
            raise BadCredentials()

        session_id = str(uuid.uuid4())
        login_at = self._now()
        expires_at = login_at + SESSION_DURATION
        access_token = tokens.issue(session_id, login_at, expires_at,
                                    db_customer.password)
        user_session = self.store.create_session(Session(
            session_id=session_id,
            customer=db_customer.to_domain(),
            access_token=access_token,
            login_at=login_at,
            expires_at=expires_at
        ))
        logger.info('Created session %s for customer %s', session_id,
                    db_customer.uuid)
        return user_session

    def validate(self, access_token: str) -> Customer:
        """
        Get the customer for an access token if its session is live.

        Raises
        ------
        :class:`.NotLoggedIn`
        :class:`.AlreadyLoggedOut`
        :class:`.SessionExpired`

        """
        return self._load_live_session(access_token, self._now()).customer

    def get_customer(self, access_token: str) -> Customer:
        """Alias of :meth:`validate`."""
        return self.validate(access_token)

    def logout(self, access_token: str) -> Session:
        """
        End a live session.

        Logging out twice is an error: the second call raises
        :class:`.AlreadyLoggedOut`.
        """
        now = self._now()
        user_session = self._load_live_session(access_token, now)
        try:
            user_session = self.store.update_session(
                user_session._replace(logout_at=now)
            )
        except SessionConflict as e:
            raise AlreadyLoggedOut() from e
        logger.info('Session %s logged out', user_session.session_id)
        return user_session

    def change_password(self, customer_id: str, old_password: str,
                        new_password: str) -> Customer:
        """
        Replace a customer's password.

        The new password must satisfy the password-change rule, which is
        stricter than the signup rule. A fresh salt is generated.

        Raises
        ------
        :class:`.WeakNewPassword`
        :class:`.WrongOldPassword`
        :class:`.NoSuchCustomer`

        """
        try:
            policy.validate_new_password_strength(new_password)
        except PasswordTooWeak as e:
            raise WeakNewPassword() from e
        db_customer = self.store.find_customer_by_id(customer_id)
        if db_customer is None:
            raise NoSuchCustomer('Customer does not exist')
        if not passwords.verify_password(old_password, db_customer.salt,
                                         db_customer.password):
            raise WrongOldPassword()
        salt, digest = passwords.hash_new_password(new_password)
        customer = self.store.update_password(customer_id, salt, digest)
        logger.info('Changed password for customer %s', customer_id)
        return customer

    def update_profile(self, customer: Customer) -> Customer:
        """Persist profile changes. Fields are stored as given."""
        return self.store.update_customer(customer)

    def _load_live_session(self, access_token: str,
                           now: datetime) -> Session:
        user_session = self.store.find_session_by_token(access_token)
        if user_session is None:
            raise NotLoggedIn()
        state = user_session.state_at(now)
        if state is SessionState.LOGGED_OUT:
            raise AlreadyLoggedOut()
        if state is SessionState.EXPIRED:
            logger.info('Session has expired: %s', user_session.session_id)
            raise SessionExpired()
        return user_session


def _check_signup_data(registration: CustomerRegistration) -> None:
    try:
        policy.validate_email(registration.email)
    except InvalidFormat as e:
        raise InvalidEmail() from e
    try:
        policy.validate_contact_number(registration.contact_number)
    except InvalidFormat as e:
        raise InvalidContact() from e
    try:
        policy.validate_password_strength(registration.password)
    except PasswordTooWeak as e:
        raise WeakPassword() from e
