"""Tests for :mod:`customer_auth.domain`."""

from datetime import datetime, timedelta
from unittest import TestCase

from pytz import UTC

from .. import domain

LOGIN = datetime(2026, 1, 1, 8, 0, tzinfo=UTC)


class TestSessionState(TestCase):
    """Liveness is computed from the stored timestamps."""

    def setUp(self):
        """An eight-hour session with no logout."""
        self.session = domain.Session(
            session_id='s',
            customer=domain.Customer(first_name='A', email='a@b.c',
                                     contact_number='9999999999'),
            access_token='t',
            login_at=LOGIN,
            expires_at=LOGIN + timedelta(hours=8)
        )

    def test_active(self):
        """Before expiry and without logout the session is active."""
        self.assertIs(self.session.state_at(LOGIN), domain.SessionState.ACTIVE)
        self.assertTrue(self.session.is_active(LOGIN + timedelta(hours=7)))

    def test_expired(self):
        """At or after ``expires_at`` the session is expired."""
        for now in [LOGIN + timedelta(hours=8), LOGIN + timedelta(days=1)]:
            self.assertIs(self.session.state_at(now),
                          domain.SessionState.EXPIRED)
            self.assertFalse(self.session.is_active(now))

    def test_logged_out(self):
        """Logout wins over expiry."""
        closed = self.session._replace(logout_at=LOGIN + timedelta(hours=1))
        self.assertIs(closed.state_at(LOGIN + timedelta(hours=2)),
                      domain.SessionState.LOGGED_OUT)
        self.assertIs(closed.state_at(LOGIN + timedelta(days=3)),
                      domain.SessionState.LOGGED_OUT)
