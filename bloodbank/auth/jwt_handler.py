from datetime import datetime, timedelta, timezone

import jwt

from bloodbank.core import config
from bloodbank.core.errors import InvalidToken


def create_access_token(
    claims: dict,
    secret: str,
    ttl: timedelta | None = None,
    algorithm: str | None = None,
    issued_at: datetime | None = None,
) -> str:
    issued_at = issued_at or datetime.now(timezone.utc)
    if ttl is None:
        ttl = timedelta(minutes=config.JWT_EXPIRES_MINUTES)
    expire = issued_at + ttl
    payload = {**claims, "iat": issued_at, "exp": expire}
    return jwt.encode(payload, secret, algorithm=algorithm or config.JWT_ALGORITHM)


def decode_access_token(token: str, secret: str, algorithm: str | None = None) -> dict:
    try:
        return jwt.decode(
            token,
            secret,
            algorithms=[algorithm or config.JWT_ALGORITHM],
            options={"require": ["exp", "iat"]},
        )
    except jwt.InvalidTokenError as exc:
        raise InvalidToken(str(exc)) from exc
