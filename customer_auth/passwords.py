"""Salted hashing and verification of customer passwords."""

import hashlib
import hmac
import logging
import secrets
from base64 import b64decode, b64encode
from typing import Tuple

from . import config

logger = logging.getLogger(__name__)

SALT_BYTES = 16
KEY_LENGTH = 64


def generate_salt() -> str:
    """Generate a fresh random salt, base64 encoded for storage."""
    return b64encode(secrets.token_bytes(SALT_BYTES)).decode('ascii')


def hash_password(password: str, salt: str) -> str:
    """
    Hash a password with a salt.

    Parameters
    ----------
    password : str
        Password as entered by the customer.
    salt : str
        Base64 salt, as produced by :func:`generate_salt`.

    Returns
    -------
    str
        Upper-case hex PBKDF2-HMAC-SHA512 digest. The same password and salt
        always produce the same digest.

    """
    derived = hashlib.pbkdf2_hmac('sha512', password.encode('utf-8'),
                                  b64decode(salt),
                                  config.PASSWORD_HASH_ITERATIONS,
                                  dklen=KEY_LENGTH)
    return derived.hex().upper()


def hash_new_password(password: str) -> Tuple[str, str]:
    """Generate a salt and hash ``password`` with it; returns (salt, digest)."""
    salt = generate_salt()
    return salt, hash_password(password, salt)


def verify_password(password: str, salt: str, expected: str) -> bool:
    """Check a password against a stored digest in constant time."""
    computed = hash_password(password, salt)
    matches = hmac.compare_digest(computed.encode('ascii'),
                                  expected.encode('ascii'))
    if not matches:
        logger.debug('Password digest mismatch')
    return matches
