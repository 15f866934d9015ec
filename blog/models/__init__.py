from blog.models.category import Category
from blog.models.post import Post
from blog.models.label import Label
from blog.models.user import User
from blog.models.login_event import LoginEvent

__all__ = [
    "Category",
    "Post",
    "Label",
    "User",
    "LoginEvent",
]
