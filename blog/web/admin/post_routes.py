"""
Admin Post Routes - paginated post table with category filter
"""

import logging
from typing import Optional

from fastapi import APIRouter, Request, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from blog.config import settings
from blog.content import LOAD_ERRORS
from blog.database import get_db
from blog.repositories.category_repository import list_categories_with_counts
from blog.repositories.post_repository import PostFilter
from blog.services.listing_service import load_listing
from blog.utils.pagination import parse_positive_int
from blog.utils.template_helpers import render_template

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin Posts"])


@router.get("/posts", response_class=HTMLResponse)
async def admin_posts(
    request: Request,
    page: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """
    Post table, fixed page size. An invalid `category` shows every post;
    page links keep the filter.
    """
    category_id = parse_positive_int(category, 0) or None

    try:
        context = load_listing(
            db,
            PostFilter(category_id=category_id),
            page,
            None,
            default_page_size=settings.ADMIN_PAGE_SIZE,
            with_sidebar=False,
        )
        context["categories"] = list_categories_with_counts(db)
    except SQLAlchemyError:
        logger.error("Error loading admin post list", exc_info=True)
        raise HTTPException(status_code=500, detail=LOAD_ERRORS["admin"])

    context["selected_category_id"] = category_id
    return render_template(
        request,
        "admin/posts.html",
        context,
        admin_user=request.state.admin_user,
    )
