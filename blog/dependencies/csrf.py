"""
CSRF check for the admin forms (login, logout).
"""

import logging
import secrets
from typing import Optional

from fastapi import HTTPException, Request, status

from blog.services.csrf_service import CSRF_COOKIE_NAME, verify_csrf_signature

logger = logging.getLogger(__name__)

UNSAFE_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})
FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def _submitted_token(request: Request) -> Optional[str]:
    """Token from the X-CSRF-Token header, else from the `csrf_token` form field."""
    header_token = request.headers.get("X-CSRF-Token")
    if header_token:
        return header_token

    content_type = request.headers.get("content-type", "")
    if not content_type.startswith(FORM_CONTENT_TYPES):
        return None

    form = await request.form()
    value = form.get("csrf_token")
    return value if isinstance(value, str) else None


def _forbidden(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


async def validate_csrf_token(request: Request) -> None:
    """
    Dependency comparing the submitted token with the signed cookie.

    Raises:
        HTTPException: 403 when the cookie is missing or forged, or the
        submitted token does not match it
    """
    if request.method not in UNSAFE_METHODS:
        return

    cookie_token = request.cookies.get(CSRF_COOKIE_NAME)
    if not cookie_token:
        raise _forbidden("CSRF cookie missing. Please refresh the page.")

    submitted = await _submitted_token(request)
    if not submitted:
        raise _forbidden("CSRF token missing from request.")

    if verify_csrf_signature(cookie_token) is None or not secrets.compare_digest(
        cookie_token, submitted
    ):
        logger.warning("Rejected CSRF token on %s", request.url.path)
        raise _forbidden("CSRF token invalid.")
