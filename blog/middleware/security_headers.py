"""
Security Headers Middleware
Adds browser security headers to every response.
"""

from starlette.middleware.base import BaseHTTPMiddleware
from blog.config import settings

# Post bodies are operator-authored rich text and may embed remote images
CONTENT_SECURITY_POLICY = "; ".join(
    [
        "default-src 'self'",
        "script-src 'self'",
        "style-src 'self' 'unsafe-inline'",
        "img-src 'self' data: https:",
        "font-src 'self'",
        "object-src 'none'",
        "frame-ancestors 'self'",
        "base-uri 'self'",
        "form-action 'self'",
    ]
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Headers implemented:
    - X-Frame-Options / frame-ancestors: clickjacking
    - X-Content-Type-Options: MIME sniffing
    - Strict-Transport-Security: HTTPS only (production)
    - Content-Security-Policy
    - Referrer-Policy
    """

    async def dispatch(self, request, call_next):
        response = await call_next(request)

        response.headers["X-Frame-Options"] = "SAMEORIGIN"
        response.headers["X-Content-Type-Options"] = "nosniff"

        if not settings.DEBUG:
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )

        response.headers["Content-Security-Policy"] = CONTENT_SECURITY_POLICY
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        return response
