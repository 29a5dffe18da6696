"""Configuration for the customer identity core."""

import os

DATABASE_URI = os.environ.get('CUSTOMER_DATABASE_URI', 'sqlite:///:memory:')
"""SQLAlchemy URI for the customer and session tables."""

ECHO_SQL = os.environ.get('ECHO_SQL', '0') == '1'

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

PASSWORD_HASH_ITERATIONS = int(os.environ.get('PASSWORD_HASH_ITERATIONS',
                                              '1000'))
"""
PBKDF2 iteration count.

Changing this invalidates every stored password digest, so it must be the same
for every process that shares a database.
"""

TOKEN_ISSUER = os.environ.get('TOKEN_ISSUER', 'https://FoodOrderingApp.io')
"""Value of the ``iss`` claim in issued access tokens."""
