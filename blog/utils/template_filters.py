"""
Jinja2 filters and globals shared by all templates.
"""

import re
from datetime import datetime
from html import unescape

from blog.content import PAGINATION_LABELS
from blog.utils.pagination import ELLIPSIS, build_page_query

_TAGS = re.compile(r"<[^>]+>")
_SPACES = re.compile(r"\s+")


def date_filter(value, format_string="%Y-%m-%d"):
    """Format a datetime (or ISO string) for display"""
    if not value:
        return ""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return value
    return value.strftime(format_string)


def excerpt(value, length=200):
    """Plain-text preview of rich-text post content"""
    if not value:
        return ""
    text = _SPACES.sub(" ", unescape(_TAGS.sub(" ", str(value)))).strip()
    if len(text) <= length:
        return text
    return text[:length].rsplit(" ", 1)[0] + "…"


def page_url(request, **overrides):
    """Current query string with only the given keys replaced"""
    return build_page_query(request.query_params.multi_items(), **overrides)


def pagination_summary(pagination):
    return PAGINATION_LABELS["summary"].format(
        current=pagination.current_page,
        pages=pagination.total_pages,
        total=pagination.total,
    )


def register_filters(templates):
    """
    Register custom filters and globals on a Jinja2Templates instance.

    Usage:
        templates = Jinja2Templates(directory="templates")
        register_filters(templates)
    """
    templates.env.filters["date"] = date_filter
    templates.env.filters["excerpt"] = excerpt
    templates.env.filters["pagination_summary"] = pagination_summary
    templates.env.globals["page_url"] = page_url
    templates.env.globals["ELLIPSIS"] = ELLIPSIS
