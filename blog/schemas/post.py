from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import List, Optional


class CountResult(BaseModel):
    """Result of a listing's count query"""

    total: int = 0


class LabelBrief(BaseModel):
    nickname: Optional[str] = None
    label_name: str

    model_config = ConfigDict(from_attributes=True)


class PostSummary(BaseModel):
    """One row of a post listing"""

    id: int
    title: str
    content: str
    views: int = 0
    created_at: datetime
    category_name: Optional[str] = None
    category_value: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class PostDetail(PostSummary):
    """Single post page, with the tags attached to it"""

    labels: List[LabelBrief] = []
