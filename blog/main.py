from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from blog.config import settings
from blog.database import init_db, close_db
from blog.web.home_routes import router as home_router
from blog.web.category_routes import router as category_router
from blog.web.tag_routes import router as tag_router
from blog.web.post_routes import router as post_router
from blog.web.admin.auth_routes import router as admin_auth_router
from blog.web.admin.dashboard_routes import router as admin_dashboard_router
from blog.web.admin.post_routes import router as admin_post_router
from blog.web.admin.category_routes import router as admin_category_router
from blog.services.csrf_service import CSRFMiddleware
from blog.middleware.admin_auth import AdminAuthMiddleware
from blog.middleware.security_headers import SecurityHeadersMiddleware
from blog.utils.template_helpers import render_template
from contextlib import asynccontextmanager
from pathlib import Path

import logging

_log_dir = Path(settings.LOG_DIR)
_log_dir.mkdir(parents=True, exist_ok=True)

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.FileHandler(_log_dir / "blog.log"), logging.StreamHandler()],
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database pool on startup and release it on shutdown"""
    logger.info("[>>] Starting %s...", settings.APP_NAME)
    init_db()
    logger.info("[OK] Database initialized")
    yield
    logger.info("[<<] Shutting down %s...", settings.APP_NAME)
    close_db()
    logger.info("[OK] Database connections closed")


app = FastAPI(
    title=settings.APP_NAME,
    description="Server-rendered blog with category and tag browsing",
    version="1.0.0",
    lifespan=lifespan,
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as HTML pages"""
    if exc.status_code in (301, 302, 303, 307, 308) and exc.headers:
        return RedirectResponse(
            url=exc.headers.get("Location", "/"), status_code=exc.status_code
        )
    return render_template(
        request,
        "errors/error.html",
        {"status_code": exc.status_code, "detail": exc.detail},
        status_code=exc.status_code,
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Log every unhandled exception"""
    logger.error(
        "Unhandled exception on %s %s: %s",
        request.method,
        request.url.path,
        str(exc),
        exc_info=True,
    )
    return PlainTextResponse(
        "Internal Server Error. Please try again later.",
        status_code=500,
    )


# Admin session check (innermost: runs after the CSRF cookie is issued)
app.add_middleware(AdminAuthMiddleware)

# CSRF cookie issuing
app.add_middleware(CSRFMiddleware)

# Security headers (outermost: also covers redirects from the admin check)
app.add_middleware(SecurityHeadersMiddleware)


@app.get("/api/health")
async def health_check():
    return {"status": "ok"}


APP_DIR = Path(__file__).parent

static_dir = APP_DIR / "static"
if static_dir.exists():
    app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")


# Public pages
app.include_router(home_router)
app.include_router(category_router)
app.include_router(tag_router)
app.include_router(post_router)

# Admin pages
app.include_router(admin_auth_router)
app.include_router(admin_dashboard_router)
app.include_router(admin_post_router)
app.include_router(admin_category_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
