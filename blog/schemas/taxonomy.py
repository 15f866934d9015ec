from pydantic import BaseModel, ConfigDict


class CategorySummary(BaseModel):
    """Category with the number of posts filed under it"""

    id: int
    name: str
    value: str
    post_count: int = 0

    model_config = ConfigDict(from_attributes=True)


class TagSummary(BaseModel):
    """Tag name with the number of distinct posts carrying it"""

    label_name: str
    post_count: int = 0

    model_config = ConfigDict(from_attributes=True)
