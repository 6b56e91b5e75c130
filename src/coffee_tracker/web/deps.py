from typing import Annotated, cast

from fastapi import Depends, Request, Response
from fastapi.security import APIKeyCookie

from coffee_tracker.app import App
from coffee_tracker.core.modules.session.models import SESSION_COOKIE_NAME, SessionCookie, SessionToken

# Security schemes
session_cookie_scheme = APIKeyCookie(name=SESSION_COOKIE_NAME, auto_error=False)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


def set_session_cookie(response: Response, cookie: SessionCookie) -> None:
    response.set_cookie(
        key=cookie.key,
        value=cookie.value,
        max_age=cookie.max_age,
        expires=cookie.expires,
        httponly=cookie.httponly,
        samesite=cookie.samesite,
        secure=cookie.secure,
    )


def apply_pending_session_cookie(request: Request, response: Response) -> None:
    """Set the cookie minted for this request on a response built outside the route (error handlers)."""
    cookie: SessionCookie | None = getattr(request.state, "session_cookie", None)
    if cookie is not None:
        set_session_cookie(response, cookie)


async def get_session_token(
    request: Request,
    response: Response,
    app: Annotated[App, Depends(get_app)],
    session_cookie: Annotated[str | None, Depends(session_cookie_scheme)] = None,
) -> SessionToken:
    """Resolve the anonymous session from its cookie, issuing a new cookie when needed."""
    resolution = app.resolve_session(session_cookie, is_https=request.url.scheme == "https")
    if resolution.cookie is not None:
        # Error handlers replace `response`, so they pick the cookie up from request state
        request.state.session_cookie = resolution.cookie
        set_session_cookie(response, resolution.cookie)
    return resolution.token


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
SessionTokenDep = Annotated[SessionToken, Depends(get_session_token)]
