"""
Template rendering helpers.

Static texts from content.py are loaded once and shared; request-specific
values (CSRF token, admin user) are added per render.
"""

from typing import Any, Dict, Optional

from fastapi import Request

from blog.services.csrf_service import get_csrf_token
from blog.utils.template_config import templates

_static_context: Optional[Dict[str, Any]] = None


def get_static_context() -> Dict[str, Any]:
    """Immutable site texts, built on first use."""
    global _static_context
    if _static_context is None:
        from blog.content import (
            SITE,
            UNCATEGORIZED,
            EVENT_LABELS,
            PAGINATION_LABELS,
        )

        _static_context = {
            "site": SITE,
            "uncategorized": UNCATEGORIZED,
            "event_labels": EVENT_LABELS,
            "pagination_labels": PAGINATION_LABELS,
        }
    return _static_context


def get_common_context(request: Request, admin_user: Optional[str] = None) -> dict:
    context = get_static_context().copy()
    context.update(
        {
            "admin_user": admin_user,
            "csrf_token": get_csrf_token(request),
        }
    )
    return context


def render_template(
    request: Request,
    template_name: str,
    context: dict,
    admin_user: Optional[str] = None,
    status_code: int = 200,
):
    common_context = get_common_context(request, admin_user)
    common_context.update(context)

    # request is passed separately in the TemplateResponse signature
    common_context.pop("request", None)

    return templates.TemplateResponse(
        request, template_name, common_context, status_code=status_code
    )
