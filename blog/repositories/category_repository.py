"""
Category Repository - Category lookups and per-category post counts.
"""

from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from blog.models.category import Category
from blog.models.post import Post
from blog.schemas.taxonomy import CategorySummary


def list_categories_with_counts(
    db: Session, newest_first: bool = False
) -> List[CategorySummary]:
    """
    List every category with the number of posts filed under it.

    Args:
        db: Database session
        newest_first: Order by id descending (admin view) instead of by name

    Returns:
        List of CategorySummary, categories without posts included
    """
    query = (
        db.query(
            Category.id,
            Category.name,
            Category.value,
            func.count(Post.id).label("post_count"),
        )
        .outerjoin(Post, Post.category_id == Category.id)
        .group_by(Category.id, Category.name, Category.value)
    )

    if newest_first:
        query = query.order_by(Category.id.desc())
    else:
        query = query.order_by(Category.name)

    return [CategorySummary.model_validate(dict(row._mapping)) for row in query.all()]


def get_category_by_value(db: Session, value: str) -> Optional[Category]:
    return db.query(Category).filter(Category.value == value).first()


def count_categories(db: Session) -> int:
    return db.query(func.count(Category.id)).scalar() or 0
