"""
Home page: every post, newest first.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Request, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from blog.content import LOAD_ERRORS
from blog.database import get_db
from blog.repositories.post_repository import ALL_POSTS
from blog.services.listing_service import load_listing
from blog.utils.template_helpers import render_template

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Home"])


@router.get("/", response_class=HTMLResponse)
async def home(
    request: Request,
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    db: Session = Depends(get_db),
):
    try:
        context = load_listing(db, ALL_POSTS, page, page_size)
    except SQLAlchemyError:
        logger.error("Error loading posts", exc_info=True)
        raise HTTPException(status_code=500, detail=LOAD_ERRORS["posts"])

    return render_template(request, "pages/home.html", context)
