"""Defines customer and session concepts for the ordering platform."""

from datetime import datetime
from enum import Enum
from typing import NamedTuple, Optional


class Address(NamedTuple):
    """Postal address attached to a customer profile."""

    flat_building_number: str = ''
    locality: str = ''
    city: str = ''
    pincode: str = ''
    state_name: str = ''


class Customer(NamedTuple):
    """
    Represents a registered customer.

    Credentials (password digest and salt) are deliberately absent; they never
    leave :mod:`.passwords` and the store.
    """

    first_name: str
    """Given name. Required at registration."""

    email: str
    """Primary e-mail address. Unique across customers."""

    contact_number: str
    """Ten-digit phone number used to log in. Unique across customers."""

    last_name: Optional[str] = None
    """Family name (optional)."""

    customer_id: Optional[str] = None
    """Unique identifier. If ``None``, the customer does not exist yet."""

    address: Optional[Address] = None
    """Postal address (if available)."""


class CustomerRegistration(NamedTuple):
    """Data submitted by a prospective customer."""

    first_name: Optional[str]
    email: Optional[str]
    contact_number: Optional[str]
    password: Optional[str]
    last_name: Optional[str] = None
    address: Optional[Address] = None


class SessionState(Enum):
    """Liveness of a :class:`.Session` at a point in time."""

    ACTIVE = 'active'
    EXPIRED = 'expired'
    LOGGED_OUT = 'logged_out'


class Session(NamedTuple):
    """Represents one login by a customer."""

    session_id: str
    """Unique, unguessable identifier for the session."""

    customer: Customer
    """The customer who logged in."""

    access_token: str
    """Opaque bearer token presented by the caller."""

    login_at: datetime
    """When the session was created."""

    expires_at: datetime
    """Fixed at creation; the session is unusable from this moment."""

    logout_at: Optional[datetime] = None
    """When the customer logged out. Once set, never cleared."""

    def state_at(self, now: datetime) -> SessionState:
        """
        Compute the liveness of this session at ``now``.

        Logout takes precedence over expiry, and a session expiring exactly at
        ``now`` is already expired.
        """
        if self.logout_at is not None:
            return SessionState.LOGGED_OUT
        if self.expires_at <= now:
            return SessionState.EXPIRED
        return SessionState.ACTIVE

    def is_active(self, now: datetime) -> bool:
        """Whether the session can be used at ``now``."""
        return self.state_at(now) is SessionState.ACTIVE
