"""
Admin Authentication Routes - Login/logout functionality
"""

import logging

from fastapi import APIRouter, Request, Depends, Form
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.orm import Session

from blog.database import get_db
from blog.dependencies.csrf import validate_csrf_token
from blog.repositories.login_event_repository import record_event
from blog.services.auth_service import authenticate
from blog.services.rate_limit_service import (
    check_admin_login_rate_limit,
    reset_admin_login_rate_limit,
)
from blog.middleware.admin_auth import (
    set_admin_session_cookie,
    clear_admin_session_cookie,
    verify_admin_session_token,
    ADMIN_SESSION_COOKIE_NAME,
)
from blog.utils.ip_utils import get_client_ip
from blog.utils.security_utils import sanitize_redirect
from blog.utils.template_helpers import render_template

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin Auth"])


def _login_page(
    request: Request, next_url: str, error: str | None, status_code: int = 200
):
    return render_template(
        request,
        "admin/login.html",
        {"next_url": next_url, "error": error},
        status_code=status_code,
    )


@router.get("/login", response_class=HTMLResponse)
async def admin_login_page(request: Request):
    """Login form. Already logged-in operators go straight to the dashboard."""
    if verify_admin_session_token(request.cookies.get(ADMIN_SESSION_COOKIE_NAME)):
        return RedirectResponse(url="/admin", status_code=302)

    next_url = sanitize_redirect(request.query_params.get("next", "/admin"), "/admin")
    return _login_page(request, next_url, None)


@router.post("/login", response_class=HTMLResponse)
async def admin_login_submit(
    request: Request,
    csrf_protected: None = Depends(validate_csrf_token),
    username: str = Form(""),
    password: str = Form(""),
    next: str = Form("/admin"),
    db: Session = Depends(get_db),
):
    """
    Process the login form.

    Rate limited: 5 attempts per IP per 15 minutes.
    """
    safe_next = sanitize_redirect(next, "/admin")
    client_ip = get_client_ip(request)

    if not username.strip() or not password:
        return _login_page(
            request, safe_next, "Username and password are required.", 400
        )

    allowed, retry_after = check_admin_login_rate_limit(client_ip)
    if not allowed:
        minutes = (retry_after // 60 + 1) if retry_after else 1
        logger.warning("Admin login rate limit hit from %s", client_ip)
        return _login_page(
            request,
            safe_next,
            f"Too many attempts. Try again in {minutes} minute(s).",
            429,
        )

    user = authenticate(db, username, password, client_ip)
    if user is None:
        return _login_page(request, safe_next, "Invalid username or password.", 401)

    reset_admin_login_rate_limit(client_ip)

    response = RedirectResponse(url=safe_next, status_code=302)
    return set_admin_session_cookie(response, user.username)


@router.post("/logout")
async def admin_logout(
    request: Request,
    csrf_protected: None = Depends(validate_csrf_token),
    db: Session = Depends(get_db),
):
    """Clear the admin session and go back to the login page."""
    username = verify_admin_session_token(
        request.cookies.get(ADMIN_SESSION_COOKIE_NAME)
    )
    if username:
        record_event(db, username, "logout", get_client_ip(request))
        logger.info("Admin %s logged out", username)

    response = RedirectResponse(url="/admin/login", status_code=302)
    return clear_admin_session_cookie(response)
