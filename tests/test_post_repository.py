"""
Tests for listing queries: the count and the page fetch must agree.
"""

import pytest

from blog.models.label import Label
from blog.repositories.category_repository import (
    count_categories,
    get_category_by_value,
    list_categories_with_counts,
)
from blog.repositories.label_repository import list_hot_tags, list_tags_with_counts
from blog.repositories.post_repository import (
    ALL_POSTS,
    PostFilter,
    count_posts,
    fetch_posts,
    get_paginated_posts,
    get_post_detail,
)


@pytest.mark.integration
def test_count_and_fetch_agree_for_each_filter(db_session, make_category, make_posts):
    python = make_category("Python")
    rust = make_category("Rust")
    make_posts(7, category=python, tags=["web"], title_prefix="Py")
    make_posts(3, category=rust, tags=["systems"], title_prefix="Rs")
    make_posts(2, title_prefix="Loose")

    for post_filter in (
        ALL_POSTS,
        PostFilter(category_id=python.id),
        PostFilter(category_id=rust.id),
        PostFilter(tag_name="web"),
        PostFilter(tag_name="missing"),
    ):
        total = count_posts(db_session, post_filter)
        rows = fetch_posts(db_session, post_filter, offset=0, limit=100)
        assert total == len(rows)


@pytest.mark.integration
def test_fetch_is_newest_first_and_bounded(db_session, make_posts):
    make_posts(12)

    first_page = fetch_posts(db_session, ALL_POSTS, offset=0, limit=5)
    last_page = fetch_posts(db_session, ALL_POSTS, offset=10, limit=5)

    assert [p.title for p in first_page] == [f"Post {n}" for n in (12, 11, 10, 9, 8)]
    assert [p.title for p in last_page] == ["Post 2", "Post 1"]


@pytest.mark.integration
def test_fetch_past_the_end_is_empty(db_session, make_posts):
    make_posts(12)

    posts, pagination = get_paginated_posts(db_session, ALL_POSTS, "99", "5", 5)

    assert posts == []
    assert pagination.current_page == 99
    assert pagination.total_pages == 3
    assert pagination.offset == 490


@pytest.mark.integration
def test_tag_filter_counts_each_post_once(db_session, make_posts):
    (post,) = make_posts(1, tags=["python"])
    post.labels.append(Label(label_name="python", nickname="someone else"))
    db_session.commit()

    post_filter = PostFilter(tag_name="python")

    assert count_posts(db_session, post_filter) == 1
    assert len(fetch_posts(db_session, post_filter, 0, 10)) == 1


@pytest.mark.integration
def test_paginated_posts_with_category(db_session, make_category, make_posts):
    python = make_category("Python")
    make_posts(12, category=python)
    make_posts(4)

    posts, pagination = get_paginated_posts(
        db_session, PostFilter(category_id=python.id), "2", "5", 5, [5, 10, 20]
    )

    assert pagination.total == 12
    assert pagination.total_pages == 3
    assert len(posts) == 5
    assert all(p.category_name == "Python" for p in posts)
    assert all(p.category_value == "python" for p in posts)


@pytest.mark.integration
def test_posts_without_category(db_session, make_posts):
    make_posts(1)

    (post,) = fetch_posts(db_session, ALL_POSTS, 0, 5)

    assert post.category_name is None
    assert post.category_value is None


@pytest.mark.integration
def test_categories_with_counts(db_session, make_category, make_posts):
    python = make_category("Python")
    make_category("Empty Shelf")
    make_posts(3, category=python)

    categories = list_categories_with_counts(db_session)

    assert [(c.name, c.value, c.post_count) for c in categories] == [
        ("Empty Shelf", "empty-shelf", 0),
        ("Python", "python", 3),
    ]
    newest_first = list_categories_with_counts(db_session, newest_first=True)
    assert [c.name for c in newest_first] == ["Empty Shelf", "Python"]
    assert count_categories(db_session) == 2
    assert get_category_by_value(db_session, "python").id == python.id
    assert get_category_by_value(db_session, "nope") is None


@pytest.mark.integration
def test_tag_aggregates(db_session, make_posts):
    make_posts(3, tags=["python"])
    make_posts(1, tags=["rust", "python"], title_prefix="Mixed")

    tags = {t.label_name: t.post_count for t in list_tags_with_counts(db_session)}
    assert tags == {"python": 4, "rust": 1}

    hot = list_hot_tags(db_session, limit=1)
    assert [(t.label_name, t.post_count) for t in hot] == [("python", 4)]


@pytest.mark.integration
def test_post_detail_includes_labels(db_session, make_category, make_posts):
    python = make_category("Python")
    (post,) = make_posts(1, category=python, tags=["asyncio", "web"])

    detail = get_post_detail(db_session, post.id)

    assert detail.title == "Post 1"
    assert detail.category_name == "Python"
    assert [label.label_name for label in detail.labels] == ["asyncio", "web"]
    assert get_post_detail(db_session, 12345) is None
