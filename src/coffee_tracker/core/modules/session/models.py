"""Anonymous session identity models."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Literal, NewType

SessionToken = NewType("SessionToken", str)

SESSION_COOKIE_NAME = "coffee-session"
SESSION_TOKEN_BYTES = 16  # rendered as 32 hex characters
SESSION_TOKEN_LENGTH = SESSION_TOKEN_BYTES * 2
SESSION_COOKIE_LIFETIME = timedelta(hours=24)


@dataclass(frozen=True)
class SessionCookie:
    """Cookie the transport layer must set for a newly minted token."""

    value: SessionToken
    expires: datetime
    secure: bool
    max_age: int = int(SESSION_COOKIE_LIFETIME.total_seconds())
    key: str = SESSION_COOKIE_NAME
    httponly: bool = True
    samesite: Literal["lax", "strict", "none"] = "lax"


@dataclass(frozen=True)
class SessionResolution:
    """Outcome of resolving an incoming cookie: the token to act as, plus a cookie to set if one was minted."""

    token: SessionToken
    cookie: SessionCookie | None = None

    @property
    def is_new(self) -> bool:
        return self.cookie is not None
