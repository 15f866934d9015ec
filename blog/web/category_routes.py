"""
Category listing: posts filed under one category.
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
from blog.repositories.category_repository import get_category_by_value
from blog.repositories.post_repository import PostFilter
from blog.services.listing_service import load_listing
from blog.utils.template_helpers import render_template

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Categories"])


@router.get("/category/{value}", response_class=HTMLResponse)
async def category_posts(
    request: Request,
    value: str,
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    db: Session = Depends(get_db),
):
    value = value.strip()
    if not value:
        raise HTTPException(status_code=400, detail="Category is required")

    try:
        category = get_category_by_value(db, value)
        if category is None:
            raise HTTPException(status_code=404, detail="Category not found")

        context = load_listing(
            db,
            PostFilter(category_id=category.id),
            page,
            page_size,
            allowed_page_sizes=settings.page_size_options_list,
        )
    except SQLAlchemyError:
        logger.error("Error loading posts for category %s", value, exc_info=True)
        raise HTTPException(status_code=500, detail=LOAD_ERRORS["category"])

    context["category"] = category
    return render_template(request, "pages/category.html", context)
