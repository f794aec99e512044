"""
Demo authentication: one configured credential, state kept in two cookies.

``isAuthenticated`` gates the dashboard pages, ``userData`` carries the
signed-in user for the frontend. Replace with a real identity provider
before exposing the service outside a demo.
"""
from __future__ import annotations

import json
import secrets
from typing import Awaitable, Callable, Optional
from urllib.parse import quote, unquote

from fastapi import Request, Response
from fastapi.responses import RedirectResponse

from jakarta_insight.config import (
    AUTH_COOKIE,
    HOME_PATH,
    LOGIN_PATH,
    PROTECTED_PREFIXES,
    USER_COOKIE,
    get_settings,
)
from jakarta_insight.models import User


def authenticate(username: str, password: str) -> Optional[User]:
    """Return the user for a matching credential pair, else None."""
    settings = get_settings()
    user_ok = secrets.compare_digest(username.encode(), settings.AUTH_USERNAME.encode())
    password_ok = secrets.compare_digest(password.encode(), settings.AUTH_PASSWORD.encode())
    if user_ok and password_ok:
        return User(username=settings.AUTH_USERNAME, role=settings.AUTH_ROLE)
    return None


def set_auth_cookies(response: Response, user: User) -> None:
    max_age = get_settings().AUTH_COOKIE_DAYS * 24 * 60 * 60
    response.set_cookie(key=AUTH_COOKIE, value="true", max_age=max_age, samesite="lax")
    response.set_cookie(
        key=USER_COOKIE,
        value=quote(json.dumps(user.as_dict())),
        max_age=max_age,
        samesite="lax",
    )


def clear_auth_cookies(response: Response) -> None:
    response.delete_cookie(AUTH_COOKIE)
    response.delete_cookie(USER_COOKIE)


def is_authenticated(request: Request) -> bool:
    return request.cookies.get(AUTH_COOKIE) == "true"


def current_user(request: Request) -> Optional[User]:
    """User stored in the cookies, if the session is authenticated and intact."""
    if not is_authenticated(request):
        return None
    raw = request.cookies.get(USER_COOKIE)
    if not raw:
        return None
    try:
        data = json.loads(unquote(raw))
        return User(username=data["username"], role=data["role"])
    except (ValueError, KeyError, TypeError):
        return None


def is_protected(path: str) -> bool:
    """True for a protected page itself or anything below it, matched by whole path segment."""
    return any(path == prefix or path.startswith(prefix + "/") for prefix in PROTECTED_PREFIXES)


async def auth_gate(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    """Redirect anonymous visitors away from the dashboard pages and signed-in ones away from login."""
    path = request.url.path
    authenticated = is_authenticated(request)

    if not authenticated and is_protected(path):
        return RedirectResponse(url=LOGIN_PATH, status_code=307)

    if authenticated and path.rstrip("/") == LOGIN_PATH:
        return RedirectResponse(url=HOME_PATH, status_code=307)

    return await call_next(request)
