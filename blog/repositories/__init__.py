"""
Repository layer for the blog.

Repositories encapsulate database query logic and shape rows into typed
records before they reach pagination or rendering code.
"""

from blog.repositories.post_repository import (
    PostFilter,
    count_posts,
    fetch_posts,
    get_paginated_posts,
    get_post_detail,
)

from blog.repositories.category_repository import (
    list_categories_with_counts,
    get_category_by_value,
)

from blog.repositories.label_repository import (
    list_tags_with_counts,
    list_hot_tags,
)

__all__ = [
    "PostFilter",
    "count_posts",
    "fetch_posts",
    "get_paginated_posts",
    "get_post_detail",
    "list_categories_with_counts",
    "get_category_by_value",
    "list_tags_with_counts",
    "list_hot_tags",
]
