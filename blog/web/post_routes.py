"""
Single post page.
"""

import logging

from fastapi import APIRouter, Request, Depends, HTTPException
from fastapi.responses import HTMLResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from blog.config import settings
from blog.content import LOAD_ERRORS
from blog.database import get_db
from blog.repositories.category_repository import list_categories_with_counts
from blog.repositories.label_repository import list_hot_tags
from blog.repositories.post_repository import (
    get_post,
    get_post_detail,
    increment_views,
)
from blog.utils.pagination import parse_positive_int
from blog.utils.template_helpers import render_template

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Posts"])


@router.get("/post/{post_id}", response_class=HTMLResponse)
async def post_detail(request: Request, post_id: str, db: Session = Depends(get_db)):
    """Show one post and count the view."""
    parsed_id = parse_positive_int(post_id, 0)
    if not parsed_id:
        raise HTTPException(status_code=400, detail="Invalid post ID")

    try:
        post = get_post(db, parsed_id)
        if post is None:
            raise HTTPException(status_code=404, detail="Post not found")

        increment_views(db, post)
        db.refresh(post)

        detail = get_post_detail(db, parsed_id)
        categories = list_categories_with_counts(db)
        hot_tags = list_hot_tags(db, settings.HOT_TAGS_LIMIT)
    except SQLAlchemyError:
        logger.error("Error loading post %s", parsed_id, exc_info=True)
        raise HTTPException(status_code=500, detail=LOAD_ERRORS["post"])

    return render_template(
        request,
        "pages/post.html",
        {
            "post": detail,
            "categories": categories,
            "hot_tags": hot_tags,
        },
    )
