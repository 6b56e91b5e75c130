import secrets
import string

import structlog

from coffee_tracker.core.core import Service
from coffee_tracker.core.modules.session.models import (
    SESSION_COOKIE_LIFETIME,
    SESSION_TOKEN_BYTES,
    SESSION_TOKEN_LENGTH,
    SessionCookie,
    SessionResolution,
    SessionToken,
)
from coffee_tracker.utils import now

logger = structlog.get_logger(__name__)

_HEX_DIGITS = frozenset(string.hexdigits)


class SessionService(Service):
    """Issues and validates anonymous session tokens.

    Tokens are never stored; a token is valid when it is 32 hex characters.
    There is nothing to revoke: a session ends when the browser drops the cookie.
    """

    def is_valid(self, token: str | None) -> bool:
        """Check token format without touching storage."""
        if not token or len(token) != SESSION_TOKEN_LENGTH:
            return False
        return all(char in _HEX_DIGITS for char in token)

    def generate_token(self) -> SessionToken:
        """Mint a new token from a cryptographically secure source."""
        return SessionToken(secrets.token_hex(SESSION_TOKEN_BYTES))

    def resolve(self, cookie_value: str | None, is_https: bool) -> SessionResolution:
        """Return the session carried by the request, or mint one with a cookie to set."""
        if cookie_value is not None and self.is_valid(cookie_value):
            return SessionResolution(token=SessionToken(cookie_value))

        if cookie_value:
            logger.warning("invalid_session_token", length=len(cookie_value))

        token = self.generate_token()
        cookie = SessionCookie(value=token, expires=now() + SESSION_COOKIE_LIFETIME, secure=is_https)
        logger.info("session_created", session_token=token)
        return SessionResolution(token=token, cookie=cookie)
