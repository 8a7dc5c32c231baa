"""bcrypt password hashing.

Digests are salted per call, so hashing the same password twice gives two
different strings that both verify.
"""

import bcrypt

from bloodbank.core import config

# bcrypt ignores (or, in newer releases, rejects) input past this length.
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int | None = None) -> str:
    salt = bcrypt.gensalt(rounds=rounds or config.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')


def verify_password(password: str, password_digest: str) -> bool:
    """Constant-time check against a stored digest. Malformed digests never match."""
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_digest.encode('utf-8'))
    except (ValueError, TypeError):
        return False
