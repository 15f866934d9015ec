"""
Post Repository - Data access layer for post listings.

The count query and the page query of a listing must agree on which rows
they see, otherwise the pagination descriptor disagrees with the rendered
rows. Both queries therefore take the same PostFilter and let it apply the
predicate.

Filters:
- category_id: posts filed under one category
- tag_name: posts carrying a label with that name
- neither: all posts
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import distinct, func
from sqlalchemy.orm import Session

from blog.models.category import Category
from blog.models.label import Label
from blog.models.post import Post
from blog.schemas.post import CountResult, LabelBrief, PostDetail, PostSummary
from blog.utils.pagination import (
    MAX_PAGE_SIZE,
    PaginationDescriptor,
    resolve_pagination,
)


@dataclass(frozen=True)
class PostFilter:
    """Filter predicate shared by a listing's count and fetch queries."""

    category_id: Optional[int] = None
    tag_name: Optional[str] = None

    def apply(self, query):
        """
        Apply this filter to a query whose FROM clause includes posts.

        Args:
            query: SQLAlchemy query selecting from Post

        Returns:
            Query with the filter predicate applied
        """
        if self.category_id is not None:
            query = query.filter(Post.category_id == self.category_id)

        if self.tag_name is not None:
            query = query.join(Label, Label.post_id == Post.id).filter(
                Label.label_name == self.tag_name
            )

        return query


ALL_POSTS = PostFilter()


def count_posts(db: Session, post_filter: PostFilter = ALL_POSTS) -> int:
    """Count distinct posts matching the filter."""
    query = db.query(func.count(distinct(Post.id))).select_from(Post)
    result = CountResult(total=post_filter.apply(query).scalar() or 0)
    return result.total


def fetch_posts(
    db: Session, post_filter: PostFilter, offset: int, limit: int
) -> List[PostSummary]:
    """
    Fetch one page of posts matching the filter, newest first.

    Args:
        db: Database session
        post_filter: Same filter used for the count query
        offset: Rows to skip (>= 0)
        limit: Rows to return (>= 1)

    Returns:
        List of PostSummary records (empty past the last page)
    """
    query = db.query(
        Post.id,
        Post.title,
        Post.content,
        Post.views,
        Post.created_at,
        Category.name.label("category_name"),
        Category.value.label("category_value"),
    ).outerjoin(Category, Post.category_id == Category.id)

    query = post_filter.apply(query)

    # A post tagged twice with the same name would otherwise appear twice
    if post_filter.tag_name is not None:
        query = query.distinct()

    rows = (
        query.order_by(Post.created_at.desc(), Post.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )

    return [PostSummary.model_validate(dict(row._mapping)) for row in rows]


def get_paginated_posts(
    db: Session,
    post_filter: PostFilter,
    raw_page: Optional[str],
    raw_page_size: Optional[str],
    default_page_size: int,
    allowed_page_sizes: Optional[Iterable[int]] = None,
    max_page_size: int = MAX_PAGE_SIZE,
) -> Tuple[List[PostSummary], PaginationDescriptor]:
    """
    Retrieve one page of a post listing with its pagination metadata.

    Args:
        db: Database session
        post_filter: Listing filter, applied to both count and fetch
        raw_page: Raw `page` query value
        raw_page_size: Raw `pageSize` query value
        default_page_size: Page size used when raw_page_size is invalid
        allowed_page_sizes: Optional whitelist of page sizes
        max_page_size: Largest page size accepted without a whitelist

    Returns:
        Tuple of (posts, pagination descriptor)

    Example:
        >>> posts, pagination = get_paginated_posts(
        ...     db, PostFilter(category_id=3), "2", None, default_page_size=5
        ... )
    """
    total = count_posts(db, post_filter)

    pagination = resolve_pagination(
        raw_page,
        raw_page_size,
        total,
        default_page_size,
        allowed_page_sizes,
        max_page_size,
    )

    posts = fetch_posts(db, post_filter, pagination.offset, pagination.limit)

    return posts, pagination


def get_post(db: Session, post_id: int) -> Optional[Post]:
    return db.query(Post).filter(Post.id == post_id).first()


def get_post_labels(db: Session, post_id: int) -> List[LabelBrief]:
    labels = (
        db.query(Label)
        .filter(Label.post_id == post_id)
        .order_by(Label.created_at, Label.id)
        .all()
    )
    return [LabelBrief.model_validate(label) for label in labels]


def increment_views(db: Session, post: Post) -> None:
    """Bump the view counter in SQL so concurrent readers don't lose updates."""
    db.query(Post).filter(Post.id == post.id).update(
        {Post.views: Post.views + 1}, synchronize_session=False
    )
    db.flush()


def get_post_detail(db: Session, post_id: int) -> Optional[PostDetail]:
    """
    Load a single post with its category and tags.

    Returns:
        PostDetail or None if the post does not exist
    """
    post = get_post(db, post_id)
    if post is None:
        return None

    return PostDetail(
        id=post.id,
        title=post.title,
        content=post.content,
        views=post.views,
        created_at=post.created_at,
        category_name=post.category.name if post.category else None,
        category_value=post.category.value if post.category else None,
        labels=get_post_labels(db, post.id),
    )
