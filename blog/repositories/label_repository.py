"""
Label Repository - Tag aggregates for the sidebar and the post page.
"""

from typing import List

from sqlalchemy import distinct, func
from sqlalchemy.orm import Session

from blog.models.label import Label
from blog.schemas.taxonomy import TagSummary


def list_tags_with_counts(db: Session) -> List[TagSummary]:
    """
    List every tag name once, with its distinct post count.

    Most recently used tags come first.
    """
    latest = func.max(Label.created_at).label("latest")
    rows = (
        db.query(
            Label.label_name,
            func.count(distinct(Label.post_id)).label("post_count"),
            latest,
        )
        .group_by(Label.label_name)
        .order_by(latest.desc(), Label.label_name)
        .all()
    )
    return [
        TagSummary(label_name=row.label_name, post_count=row.post_count)
        for row in rows
    ]


def list_hot_tags(db: Session, limit: int = 10) -> List[TagSummary]:
    """List the most used tags, ties broken alphabetically."""
    post_count = func.count(distinct(Label.post_id)).label("post_count")
    rows = (
        db.query(Label.label_name, post_count)
        .group_by(Label.label_name)
        .order_by(post_count.desc(), Label.label_name)
        .limit(limit)
        .all()
    )
    return [TagSummary.model_validate(dict(row._mapping)) for row in rows]
