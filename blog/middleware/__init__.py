from blog.middleware.admin_auth import AdminAuthMiddleware
from blog.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "AdminAuthMiddleware",
    "SecurityHeadersMiddleware",
]
