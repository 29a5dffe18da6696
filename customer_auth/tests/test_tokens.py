"""Tests for :mod:`customer_auth.tokens`."""

import json
from base64 import urlsafe_b64decode, urlsafe_b64encode
from datetime import datetime
from unittest import TestCase

import jwt
from pytz import UTC

from .. import tokens, util
from ..engine import SESSION_DURATION
from ..exceptions import InvalidToken

SECRET = 'F00D' * 32


def _tamper(token: str, **claims) -> str:
    """Rewrite claims in the payload but keep the original signature."""
    header, payload, signature = token.split('.')
    data = json.loads(urlsafe_b64decode(payload + '=' * (-len(payload) % 4)))
    data.update(claims)
    forged = urlsafe_b64encode(json.dumps(data).encode('utf-8')) \
        .decode('ascii').rstrip('=')
    return '.'.join([header, forged, signature])


class TestIssue(TestCase):
    """Tests for :func:`.tokens.issue`."""

    def setUp(self):
        """Issue a token for an eight-hour session."""
        self.issued_at = datetime(2026, 3, 1, 9, 30, tzinfo=UTC)
        self.expires_at = self.issued_at + SESSION_DURATION
        self.token = tokens.issue('session-1', self.issued_at,
                                  self.expires_at, SECRET)

    def test_claims(self):
        """The token binds the session id and both timestamps."""
        claims = tokens.decode(self.token, 'session-1', SECRET)
        self.assertEqual(claims['aud'], 'session-1')
        self.assertEqual(claims['iat'], util.epoch(self.issued_at))
        self.assertEqual(claims['exp'], util.epoch(self.expires_at))
        self.assertEqual(claims['iss'], tokens.config.TOKEN_ISSUER)

    def test_header(self):
        """The key id names the session."""
        header = jwt.get_unverified_header(self.token)
        self.assertEqual(header['kid'], 'session-1')
        self.assertEqual(header['alg'], tokens.ALGORITHM)

    def test_expired_token_still_decodes(self):
        """Expiry is judged from stored state, not from the token."""
        old = tokens.issue('session-2', datetime(2001, 1, 1, tzinfo=UTC),
                           datetime(2001, 1, 1, 8, tzinfo=UTC), SECRET)
        self.assertEqual(tokens.decode(old, 'session-2', SECRET)['aud'],
                         'session-2')

    def test_tampered_expiry_is_detected(self):
        """Extending ``exp`` invalidates the signature."""
        forged = _tamper(self.token, exp=util.epoch(self.expires_at) + 3600)
        with self.assertRaises(InvalidToken):
            tokens.decode(forged, 'session-1', SECRET)

    def test_tampered_session_is_detected(self):
        """Pointing the token at another session invalidates it."""
        forged = _tamper(self.token, aud='session-2')
        with self.assertRaises(InvalidToken):
            tokens.decode(forged, 'session-2', SECRET)

    def test_wrong_secret(self):
        """A token does not verify with another customer's secret."""
        with self.assertRaises(InvalidToken):
            tokens.decode(self.token, 'session-1', 'BEEF' * 32)

    def test_garbage(self):
        """Strings that are not tokens raise :class:`.InvalidToken`."""
        with self.assertRaises(InvalidToken):
            tokens.decode('not-a-token', 'session-1', SECRET)


class TestSigningKeys(TestCase):
    """Each session signs with its own key."""

    def test_keys_differ_per_session(self):
        """Same customer secret, different sessions, different keys."""
        self.assertNotEqual(tokens.derive_signing_key('session-1', SECRET),
                            tokens.derive_signing_key('session-2', SECRET))

    def test_key_of_one_session_cannot_sign_another(self):
        """A token signed with session 1's key fails for session 2."""
        key = tokens.derive_signing_key('session-1', SECRET)
        forged = jwt.encode({'aud': 'session-2',
                             'iss': tokens.config.TOKEN_ISSUER},
                            key, algorithm=tokens.ALGORITHM)
        with self.assertRaises(InvalidToken):
            tokens.decode(forged, 'session-2', SECRET)
