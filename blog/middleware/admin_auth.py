"""
Admin Session Authentication Middleware

Session-based authentication for the admin area, using an HMAC-signed
cookie (same signing scheme as the CSRF tokens).

Flow:
1. Operator submits username/password to /admin/login
2. If valid, the admin_session cookie is set
3. The middleware checks the cookie on every other /admin/* path
4. Missing, tampered or expired sessions are redirected to the login page

Token format: "username:timestamp.signature"
"""

import hmac
import hashlib
import time
from typing import Optional
from urllib.parse import quote
from fastapi import Request
from fastapi.responses import RedirectResponse
from blog.config import settings

ADMIN_SESSION_COOKIE_NAME = "admin_session"


def _sign(payload: str) -> str:
    return hmac.new(
        settings.SECRET_KEY.encode(), payload.encode(), hashlib.sha256
    ).hexdigest()


def _max_age_seconds() -> int:
    return settings.ADMIN_SESSION_DAYS * 24 * 60 * 60


def create_admin_session_token(username: str, issued_at: Optional[int] = None) -> str:
    """
    Create a signed admin session token.

    Args:
        username: Authenticated operator
        issued_at: Unix timestamp of the session start (defaults to now)

    Returns:
        Signed session token
    """
    timestamp = issued_at if issued_at is not None else int(time.time())
    payload = f"{username}:{timestamp}"
    return f"{payload}.{_sign(payload)}"


def verify_admin_session_token(token: Optional[str]) -> Optional[str]:
    """
    Verify an admin session token and check expiration.

    Returns:
        The username if the token is valid and not expired, None otherwise
    """
    if not token:
        return None

    try:
        payload, signature = token.rsplit(".", 1)
        if not hmac.compare_digest(signature, _sign(payload)):
            return None

        username, timestamp_str = payload.rsplit(":", 1)
        if not username:
            return None

        if time.time() - int(timestamp_str) > _max_age_seconds():
            return None

        return username

    except (ValueError, TypeError, AttributeError):
        return None


class AdminAuthMiddleware:
    """
    Enforce session authentication on /admin/* routes.

    /admin/login and /admin/logout are public. For authenticated requests
    the operator's username is exposed as request.state.admin_user.
    """

    PUBLIC_PATHS = {"/admin/login", "/admin/logout"}

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        path = scope.get("path", "")

        if path != "/admin" and not path.startswith("/admin/"):
            await self.app(scope, receive, send)
            return

        if path in self.PUBLIC_PATHS:
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive)
        username = verify_admin_session_token(
            request.cookies.get(ADMIN_SESSION_COOKIE_NAME)
        )

        if username:
            scope.setdefault("state", {})["admin_user"] = username
            await self.app(scope, receive, send)
            return

        # Keep the original path (and query) for the redirect after login
        target = path
        if scope.get("query_string"):
            target += "?" + scope["query_string"].decode("latin-1")
        login_url = f"/admin/login?next={quote(target, safe='')}"
        response = RedirectResponse(url=login_url, status_code=302)
        await response(scope, receive, send)


def _session_cookie(value: str, max_age: int) -> str:
    cookie_value = (
        f"{ADMIN_SESSION_COOKIE_NAME}={value}; "
        f"Path=/admin; "
        f"HttpOnly; "
        f"SameSite=strict; "
        f"Max-Age={max_age}"
    )
    if not settings.DEBUG:
        cookie_value += "; Secure"
    return cookie_value


def set_admin_session_cookie(
    response: RedirectResponse, username: str
) -> RedirectResponse:
    """Attach a fresh session cookie for `username` to the response."""
    token = create_admin_session_token(username)
    response.headers.append("set-cookie", _session_cookie(token, _max_age_seconds()))
    return response


def clear_admin_session_cookie(response: RedirectResponse) -> RedirectResponse:
    """Expire the session cookie on the response."""
    response.headers.append("set-cookie", _session_cookie("", 0))
    return response
