"""
Listing Service - assembles the data behind every public post listing.

Each listing page needs the same pieces: one page of posts, its
pagination descriptor and page window, and the category/tag sidebar.
"""

from typing import Any, Dict, Iterable, Optional

from sqlalchemy.orm import Session

from blog.config import settings
from blog.repositories.category_repository import list_categories_with_counts
from blog.repositories.label_repository import list_tags_with_counts
from blog.repositories.post_repository import PostFilter, get_paginated_posts
from blog.utils.pagination import build_page_window


def get_sidebar(db: Session) -> Dict[str, Any]:
    return {
        "categories": list_categories_with_counts(db),
        "tags": list_tags_with_counts(db),
    }


def load_listing(
    db: Session,
    post_filter: PostFilter,
    raw_page: Optional[str],
    raw_page_size: Optional[str],
    allowed_page_sizes: Optional[Iterable[int]] = None,
    default_page_size: Optional[int] = None,
    with_sidebar: bool = True,
) -> Dict[str, Any]:
    """
    Load one page of a listing plus everything its template renders.

    Args:
        db: Database session
        post_filter: Listing filter (category, tag or none)
        raw_page: Raw `page` query value
        raw_page_size: Raw `pageSize` query value
        allowed_page_sizes: Page sizes offered by the view, or None for any
        default_page_size: Overrides settings.DEFAULT_PAGE_SIZE
        with_sidebar: Include categories and tags

    Returns:
        Template context with posts, pagination, page_window, page_sizes
        and (optionally) the sidebar

    Raises:
        SQLAlchemyError: When the store fails; callers turn it into a
        generic "failed to load" page
    """
    page_sizes = list(allowed_page_sizes) if allowed_page_sizes is not None else []

    posts, pagination = get_paginated_posts(
        db,
        post_filter,
        raw_page,
        raw_page_size,
        default_page_size or settings.DEFAULT_PAGE_SIZE,
        allowed_page_sizes=page_sizes or None,
        max_page_size=settings.MAX_PAGE_SIZE,
    )

    context: Dict[str, Any] = {
        "posts": posts,
        "pagination": pagination,
        "page_window": build_page_window(
            pagination.current_page,
            pagination.total_pages,
            settings.PAGE_WINDOW_SIZE,
        ),
        "page_sizes": page_sizes,
    }

    if with_sidebar:
        context.update(get_sidebar(db))

    return context
