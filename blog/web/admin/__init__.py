"""
Admin Routes Package
"""

from blog.web.admin.auth_routes import router as auth_router
from blog.web.admin.dashboard_routes import router as dashboard_router
from blog.web.admin.post_routes import router as post_router
from blog.web.admin.category_routes import router as category_router

__all__ = [
    "auth_router",
    "dashboard_router",
    "post_router",
    "category_router",
]
