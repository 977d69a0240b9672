"""Password hashing and access tokens.

Passwords are hashed with bcrypt. Access tokens are HS256 JWTs whose
subject is the user id and which expire after ``JWT_EXPIRES_DAYS`` days.
"""

import os
from datetime import UTC, datetime, timedelta

import bcrypt
import jwt

ALGORITHM = "HS256"
DEFAULT_EXPIRY_DAYS = 7
DEFAULT_BCRYPT_ROUNDS = 12
_DEV_SECRET = "storefront-dev-secret-change-me"


def _secret() -> str:
    return os.getenv("JWT_SECRET", _DEV_SECRET)


def _expiry_days() -> int:
    return int(os.getenv("JWT_EXPIRES_DAYS", DEFAULT_EXPIRY_DAYS))


def _bcrypt_rounds() -> int:
    return int(os.getenv("BCRYPT_ROUNDS", DEFAULT_BCRYPT_ROUNDS))


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=_bcrypt_rounds())).decode("utf-8")


def verify_password(password: str, password_hash: str | None) -> bool:
    if not password or not password_hash:
        return False
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


def issue_token(user_id: str, now: datetime | None = None) -> str:
    """Sign a token for ``user_id``."""
    issued_at = now or datetime.now(UTC)
    payload = {
        "sub": str(user_id),
        "iat": issued_at,
        "exp": issued_at + timedelta(days=_expiry_days()),
    }
    return jwt.encode(payload, _secret(), algorithm=ALGORITHM)


def decode_token(token: str) -> str:
    """Return the user id carried by ``token``.

    Raises ``jwt.InvalidTokenError`` (or a subclass such as
    ``jwt.ExpiredSignatureError``) when the token cannot be trusted.
    """
    payload = jwt.decode(
        token,
        _secret(),
        algorithms=[ALGORITHM],
        options={"require": ["sub", "exp"]},
    )
    return payload["sub"]
