from blog.schemas.post import CountResult, LabelBrief, PostSummary, PostDetail
from blog.schemas.taxonomy import CategorySummary, TagSummary
from blog.schemas.login_event import LoginEventRecord

__all__ = [
    # Post schemas
    "CountResult",
    "LabelBrief",
    "PostSummary",
    "PostDetail",
    # Category and tag schemas
    "CategorySummary",
    "TagSummary",
    # Admin event schemas
    "LoginEventRecord",
]
