"""
CSRF Protection Service
Double-submit cookie pattern: a signed token lives in the `csrf_token`
cookie and every form posts the same value back.

The middleware only issues the cookie; validation happens in the
validate_csrf_token dependency (blog.dependencies.csrf).
"""

import secrets
import hmac
import hashlib
from contextlib import suppress
from typing import Optional
from starlette.requests import Request
from blog.config import settings

CSRF_COOKIE_NAME = "csrf_token"
CSRF_COOKIE_MAX_AGE = 7 * 24 * 60 * 60


def generate_csrf_token() -> str:
    return secrets.token_urlsafe(32)


def sign_csrf_token(token: str) -> str:
    """Sign a CSRF token with the secret key: "token.signature"."""
    signature = hmac.new(
        settings.SECRET_KEY.encode(), token.encode(), hashlib.sha256
    ).hexdigest()
    return f"{token}.{signature}"


def verify_csrf_signature(signed_token: str) -> Optional[str]:
    """Return the bare token if the signature matches, else None."""
    with suppress(ValueError):
        token, signature = signed_token.rsplit(".", 1)
        expected_signature = hmac.new(
            settings.SECRET_KEY.encode(), token.encode(), hashlib.sha256
        ).hexdigest()
        if hmac.compare_digest(signature, expected_signature):
            return token
    return None


def new_signed_csrf_token() -> str:
    return sign_csrf_token(generate_csrf_token())


class CSRFMiddleware:
    """
    Issue a signed CSRF cookie to clients that don't have a valid one.

    Templates read the token from request.state.csrf_token (set here for
    first-time visitors) or from the cookie.
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        if scope.get("path", "").startswith("/static"):
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive)
        existing_cookie = request.cookies.get(CSRF_COOKIE_NAME)

        if existing_cookie and verify_csrf_signature(existing_cookie):
            await self.app(scope, receive, send)
            return

        signed_token = new_signed_csrf_token()
        scope.setdefault("state", {})["csrf_token"] = signed_token

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                cookie_value = (
                    f"{CSRF_COOKIE_NAME}={signed_token}; Path=/; "
                    f"SameSite=strict; Max-Age={CSRF_COOKIE_MAX_AGE}"
                )
                if not settings.DEBUG:
                    cookie_value += "; Secure"

                headers = list(message.get("headers", []))
                headers.append((b"set-cookie", cookie_value.encode()))
                message["headers"] = headers

            await send(message)

        await self.app(scope, receive, send_wrapper)


def get_csrf_token(request: Request) -> str:
    """Token to embed in forms rendered for this request."""
    issued = getattr(request.state, "csrf_token", None)
    if issued:
        return issued
    return request.cookies.get(CSRF_COOKIE_NAME, "")
