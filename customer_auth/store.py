"""
Storage for customers and auth sessions.

:class:`CustomerStore` is the storage collaborator used by
:class:`.engine.SessionEngine`. Each method runs in its own transaction.
Uniqueness of contact numbers, e-mail addresses and access tokens is enforced
by the database, and logout is a conditional update, so concurrent engines
sharing a database cannot both register the same contact number or both
close the same session.
"""

import logging
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Generator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.orm.session import Session
from sqlalchemy.pool import StaticPool

from . import config, domain, util
from .exceptions import CustomerConflict, NoSuchCustomer, SessionConflict, \
    SessionCreationFailed
from .models import Base, DBCustomer, DBCustomerAuth

logger = logging.getLogger(__name__)


class CustomerStore(object):
    """Reads and writes customer and session records."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._sessions = sessionmaker(bind=engine, autoflush=False,
                                      expire_on_commit=False)

    @contextmanager
    def transaction(self) -> Generator[Session, None, None]:
        """Context manager for database transaction."""
        session = self._sessions()
        try:
            yield session
            session.commit()
        except Exception as e:
            logger.warning('Commit failed, rolling back: %s', str(e))
            session.rollback()
            raise
        finally:
            session.close()

    def create_all(self) -> None:
        """Create all tables in the database."""
        Base.metadata.create_all(self._engine)

    def drop_all(self) -> None:
        """Drop all tables in the database."""
        Base.metadata.drop_all(self._engine)

    def is_available(self) -> bool:
        """Check our connection to the database."""
        try:
            with self.transaction() as session:
                session.execute(text('SELECT 1'))
        except Exception as e:
            logger.error('Encountered an error talking to database: %s', e)
            return False
        return True

    # Customers.

    def find_customer_by_contact(self, contact_number: str) \
            -> Optional[DBCustomer]:
        """Get the customer row (with credentials) for a contact number."""
        with self.transaction() as session:
            db_customer: Optional[DBCustomer] = session.query(DBCustomer) \
                .filter(DBCustomer.contact_number == contact_number) \
                .first()
        return db_customer

    def find_customer_by_id(self, customer_id: str) -> Optional[DBCustomer]:
        """Get the customer row (with credentials) by its public id."""
        with self.transaction() as session:
            db_customer: Optional[DBCustomer] = session.query(DBCustomer) \
                .filter(DBCustomer.uuid == customer_id) \
                .first()
        return db_customer

    def create_customer(self, customer: domain.Customer, salt: str,
                        password_digest: str) -> domain.Customer:
        """
        Insert a new customer.

        Parameters
        ----------
        customer : :class:`.domain.Customer`
            Profile data; ``customer_id`` is ignored and a new one assigned.
        salt : str
        password_digest : str

        Returns
        -------
        :class:`.domain.Customer`

        Raises
        ------
        :class:`.CustomerConflict`
            The contact number or e-mail address is already taken, or a
            required field is missing.

        """
        db_customer = DBCustomer(
            uuid=str(uuid.uuid4()),
            firstname=customer.first_name,
            lastname=customer.last_name,
            email=customer.email,
            contact_number=customer.contact_number,
            password=password_digest,
            salt=salt
        )
        _set_address(db_customer, customer.address)
        try:
            with self.transaction() as session:
                session.add(db_customer)
        except IntegrityError as e:
            raise CustomerConflict(
                'Customer data violates a uniqueness or required-field'
                ' constraint'
            ) from e
        logger.debug('created customer %s', db_customer.uuid)
        return db_customer.to_domain()

    def update_customer(self, customer: domain.Customer) -> domain.Customer:
        """Persist the non-credential fields of an existing customer."""
        if customer.customer_id is None:
            raise ValueError('Customer ID must be set')
        try:
            with self.transaction() as session:
                db_customer = _get_customer(session, customer.customer_id)
                _update_field_if_changed(db_customer, 'firstname',
                                         customer.first_name)
                _update_field_if_changed(db_customer, 'lastname',
                                         customer.last_name)
                _update_field_if_changed(db_customer, 'email', customer.email)
                _update_field_if_changed(db_customer, 'contact_number',
                                         customer.contact_number)
                _set_address(db_customer, customer.address)
        except IntegrityError as e:
            raise CustomerConflict(
                'Customer data violates a uniqueness or required-field'
                ' constraint'
            ) from e
        return db_customer.to_domain()

    def update_password(self, customer_id: str, salt: str,
                        password_digest: str) -> domain.Customer:
        """Replace a customer's salt and password digest."""
        with self.transaction() as session:
            db_customer = _get_customer(session, customer_id)
            db_customer.salt = salt
            db_customer.password = password_digest
        return db_customer.to_domain()

    # Sessions.

    def find_session_by_token(self, access_token: str) \
            -> Optional[domain.Session]:
        """Get the session that was issued ``access_token``, if any."""
        with self.transaction() as session:
            db_auth: Optional[DBCustomerAuth] = session.query(DBCustomerAuth) \
                .filter(DBCustomerAuth.access_token == access_token) \
                .first()
            if db_auth is None:
                return None
            return db_auth.to_domain()

    def create_session(self, user_session: domain.Session) -> domain.Session:
        """
        Insert a new session for an existing customer.

        Raises
        ------
        :class:`.SessionCreationFailed`

        """
        customer_id = user_session.customer.customer_id
        try:
            with self.transaction() as session:
                db_customer = _get_customer(session, customer_id)
                db_auth = DBCustomerAuth(
                    uuid=user_session.session_id,
                    customer=db_customer,
                    access_token=user_session.access_token,
                    login_at=util.epoch(user_session.login_at),
                    expires_at=util.epoch(user_session.expires_at),
                    logout_at=None
                )
                session.add(db_auth)
        except SQLAlchemyError as e:
            raise SessionCreationFailed(f'Failed to create: {e}') from e
        return db_auth.to_domain()

    def update_session(self, user_session: domain.Session) -> domain.Session:
        """
        Record the logout time of a session.

        The update only applies if the stored session is still open, so of
        two concurrent logouts exactly one succeeds.

        Raises
        ------
        :class:`.SessionConflict`
            The session does not exist or was already logged out.

        """
        if user_session.logout_at is None:
            raise ValueError('Only the logout time of a session may change')
        with self.transaction() as session:
            updated = session.query(DBCustomerAuth) \
                .filter(DBCustomerAuth.uuid == user_session.session_id) \
                .filter(DBCustomerAuth.logout_at.is_(None)) \
                .update({DBCustomerAuth.logout_at:
                         util.epoch(user_session.logout_at)},
                        synchronize_session=False)
        if not updated:
            raise SessionConflict(
                f'Session {user_session.session_id} is already closed'
            )
        stored = self.find_session_by_token(user_session.access_token)
        if stored is None:
            raise SessionConflict(
                f'Session {user_session.session_id} disappeared'
            )
        return stored


def _get_customer(session: Session, customer_id: Optional[str]) -> DBCustomer:
    db_customer: Optional[DBCustomer] = session.query(DBCustomer) \
        .filter(DBCustomer.uuid == customer_id) \
        .first()
    if db_customer is None:
        raise NoSuchCustomer('Customer does not exist')
    return db_customer


def _update_field_if_changed(obj: DBCustomer, field: str,
                             update_with: Optional[str]) -> None:
    if getattr(obj, field) != update_with:
        setattr(obj, field, update_with)


def _set_address(db_customer: DBCustomer,
                 address: Optional[domain.Address]) -> None:
    if address is None:
        return
    for field, column in DBCustomer.ADDRESS_FIELDS:
        _update_field_if_changed(db_customer, column, getattr(address, field))


def get_store(database_uri: Optional[str] = None) -> CustomerStore:
    """Build a :class:`.CustomerStore` from configuration."""
    uri = database_uri or config.DATABASE_URI
    kwargs: Dict[str, Any] = {}
    if uri.startswith('sqlite'):
        kwargs['connect_args'] = {'check_same_thread': False}
        if ':memory:' in uri or uri == 'sqlite://':
            kwargs['poolclass'] = StaticPool
    engine = create_engine(uri, echo=config.ECHO_SQL, **kwargs)
    return CustomerStore(engine)
