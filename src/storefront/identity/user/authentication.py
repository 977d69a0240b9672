"""Credential checks for login and bearer-token resolution."""

import jwt
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.identity.user.user import User, normalize_email
from storefront.utils.logging import get_logger
from storefront.utils.security import decode_token, verify_password

logger = get_logger(__name__)


class AuthenticationError(Exception):
    """Raised when a caller cannot be identified. Maps to HTTP 401."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


def authenticate(email, password) -> User:
    """Return the user owning ``email`` when ``password`` matches its hash."""
    repo = current_domain.repository_for(User)
    matches = repo._dao.query.filter(email=normalize_email(email)).all().items if email else []
    if not matches or not verify_password(password, matches[0].password_hash):
        logger.info("login_rejected", email=normalize_email(email))
        raise AuthenticationError("Invalid credentials")
    return matches[0]


def resolve_bearer(token) -> User:
    """Return the user identified by ``token``.

    Missing tokens, bad signatures and unknown users each fail with their
    own message.
    """
    if not token:
        raise AuthenticationError("No token")
    try:
        user_id = decode_token(token)
    except jwt.InvalidTokenError:
        raise AuthenticationError("Token error") from None
    try:
        return current_domain.repository_for(User).get(user_id)
    except ObjectNotFoundError:
        raise AuthenticationError("Invalid token") from None
