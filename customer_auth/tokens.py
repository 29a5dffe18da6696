"""
Signed access tokens bound to a single session.

The signing key is derived from the session id and the customer's password
digest, so every session signs with its own key. Tokens are only compared
verbatim against the stored value to authorize requests; logout and expiry
recorded in the store are authoritative over anything inside the token.
"""

import hashlib
import hmac
from datetime import datetime
from typing import Any, Dict

import jwt

from . import config, util
from .exceptions import InvalidToken

ALGORITHM = 'HS512'


def derive_signing_key(session_id: str, secret_material: str) -> str:
    """Derive the per-session HMAC key."""
    return hmac.new(secret_material.encode('utf-8'),
                    session_id.encode('utf-8'),
                    hashlib.sha512).hexdigest()


def issue(session_id: str, issued_at: datetime, expires_at: datetime,
          secret_material: str) -> str:
    """
    Generate a signed access token for a session.

    Parameters
    ----------
    session_id : str
        Identifier of the session; becomes the ``aud`` claim and key id.
    issued_at : datetime
    expires_at : datetime
    secret_material : str
        Customer-specific secret (the stored password digest).

    Returns
    -------
    str

    """
    claims = {
        'aud': session_id,
        'iss': config.TOKEN_ISSUER,
        'iat': util.epoch(issued_at),
        'exp': util.epoch(expires_at),
    }
    token: str = jwt.encode(claims,
                            derive_signing_key(session_id, secret_material),
                            algorithm=ALGORITHM,
                            headers={'kid': session_id})
    return token


def decode(token: str, session_id: str, secret_material: str) -> Dict[str, Any]:
    """
    Verify a token's signature and audience and return its claims.

    Expiry and issue time are not enforced here.

    Raises
    ------
    :class:`.InvalidToken`

    """
    try:
        claims: Dict[str, Any] = jwt.decode(
            token,
            derive_signing_key(session_id, secret_material),
            algorithms=[ALGORITHM],
            audience=session_id,
            issuer=config.TOKEN_ISSUER,
            options={'verify_exp': False, 'verify_iat': False}
        )
    except jwt.exceptions.InvalidTokenError as e:
        raise InvalidToken('Not a valid token') from e
    return claims
