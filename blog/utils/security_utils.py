"""
Security Utilities - validation of the `next` target after admin login.
"""

import re
from urllib.parse import urlsplit

# Scheme-looking fragments anywhere in the path or query, e.g. /https://x or ?u=javascript:
_EMBEDDED_SCHEME = re.compile(r"(^|[/=])(https?|ftp|javascript):", re.IGNORECASE)


def is_safe_redirect(url: str) -> bool:
    """
    Check that a redirect target is a path on this site.

    Examples:
        >>> is_safe_redirect("/admin/posts")
        True
        >>> is_safe_redirect("//evil.com")
        False
        >>> is_safe_redirect("https://evil.com")
        False
    """
    url = (url or "").strip()
    if not url.startswith("/") or "\\" in url:
        return False

    parts = urlsplit(url)
    if parts.scheme or parts.netloc:
        return False

    return not _EMBEDDED_SCHEME.search(url)


def sanitize_redirect(url: str, default: str = "/admin") -> str:
    """Return `url` if it is safe, otherwise `default`."""
    return url if is_safe_redirect(url) else default
