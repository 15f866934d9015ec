"""
Admin Category Routes - category table with post counts
"""

import logging

from fastapi import APIRouter, Request, Depends, HTTPException
from fastapi.responses import HTMLResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from blog.content import LOAD_ERRORS
from blog.database import get_db
from blog.repositories.category_repository import list_categories_with_counts
from blog.utils.template_helpers import render_template

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin Categories"])


@router.get("/categories", response_class=HTMLResponse)
async def admin_categories(request: Request, db: Session = Depends(get_db)):
    try:
        categories = list_categories_with_counts(db, newest_first=True)
    except SQLAlchemyError:
        logger.error("Error loading admin category list", exc_info=True)
        raise HTTPException(status_code=500, detail=LOAD_ERRORS["admin"])

    return render_template(
        request,
        "admin/categories.html",
        {"categories": categories},
        admin_user=request.state.admin_user,
    )
