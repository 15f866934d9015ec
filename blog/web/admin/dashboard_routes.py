"""
Admin Dashboard Routes - totals and recent admin events
"""

import logging

from fastapi import APIRouter, Request, Depends, HTTPException
from fastapi.responses import HTMLResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from blog.config import settings
from blog.content import LOAD_ERRORS
from blog.database import get_db
from blog.repositories.category_repository import count_categories
from blog.repositories.login_event_repository import get_recent_events
from blog.repositories.post_repository import count_posts
from blog.utils.template_helpers import render_template

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin Dashboard"])


@router.get("", response_class=HTMLResponse)
@router.get("/", response_class=HTMLResponse)
async def admin_dashboard(request: Request, db: Session = Depends(get_db)):
    try:
        total_posts = count_posts(db)
        total_categories = count_categories(db)
        recent_events = get_recent_events(db, settings.RECENT_EVENTS_LIMIT)
    except SQLAlchemyError:
        logger.error("Error loading admin dashboard", exc_info=True)
        raise HTTPException(status_code=500, detail=LOAD_ERRORS["admin"])

    return render_template(
        request,
        "admin/dashboard.html",
        {
            "total_posts": total_posts,
            "total_categories": total_categories,
            "recent_events": recent_events,
        },
        admin_user=request.state.admin_user,
    )
