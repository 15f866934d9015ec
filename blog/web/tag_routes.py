"""
Tag listing: posts carrying one label.
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
from blog.repositories.post_repository import PostFilter
from blog.services.listing_service import load_listing
from blog.utils.template_helpers import render_template

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Tags"])


@router.get("/tag/{name}", response_class=HTMLResponse)
async def tag_posts(
    request: Request,
    name: str,
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    db: Session = Depends(get_db),
):
    name = name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Tag is required")

    try:
        context = load_listing(
            db,
            PostFilter(tag_name=name),
            page,
            page_size,
            allowed_page_sizes=settings.page_size_options_list,
        )
    except SQLAlchemyError:
        logger.error("Error loading posts for tag %s", name, exc_info=True)
        raise HTTPException(status_code=500, detail=LOAD_ERRORS["tag"])

    context["tag_name"] = name
    return render_template(request, "pages/tag.html", context)
