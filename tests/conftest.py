"""
Pytest configuration and fixtures for the blog tests.

Environment variables are set before the application is imported, since
blog.config builds its settings at import time.
"""

import os
import tempfile

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_DIR"] = os.path.join(tempfile.gettempdir(), "blog-test-logs")

from datetime import datetime, timedelta  # noqa: E402
from typing import Generator, Iterable, Optional  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import blog.models  # noqa: E402,F401
from blog.database import Base, get_db  # noqa: E402
from blog.main import app  # noqa: E402
from blog.middleware.admin_auth import (  # noqa: E402
    ADMIN_SESSION_COOKIE_NAME,
    create_admin_session_token,
)
from blog.models.category import Category  # noqa: E402
from blog.models.label import Label  # noqa: E402
from blog.models.post import Post  # noqa: E402
from blog.services.csrf_service import CSRF_COOKIE_NAME, new_signed_csrf_token  # noqa: E402
from blog.services.rate_limit_service import login_rate_limiter  # noqa: E402

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture
def engine():
    """One in-memory SQLite database per test, shared by every session."""
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory) -> Generator[Session, None, None]:
    """Session used by tests to seed and inspect data."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def override_db(session_factory):
    """Point the get_db dependency at the test database."""

    def _get_test_db():
        db = session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_test_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    login_rate_limiter.reset()
    yield
    login_rate_limiter.reset()


@pytest.fixture
def client(override_db) -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def csrf_token(client: TestClient) -> str:
    """Install a signed CSRF cookie on the client and return its value."""
    token = new_signed_csrf_token()
    client.cookies.set(CSRF_COOKIE_NAME, token)
    return token


@pytest.fixture
def admin_client(client: TestClient) -> TestClient:
    """Client carrying a valid admin session for user "admin"."""
    client.cookies.set(ADMIN_SESSION_COOKIE_NAME, create_admin_session_token("admin"))
    return client


# Data factories


@pytest.fixture
def make_category(db_session: Session):
    def _make(name: str, value: Optional[str] = None) -> Category:
        category = Category(name=name, value=value or name.lower().replace(" ", "-"))
        db_session.add(category)
        db_session.commit()
        return category

    return _make


@pytest.fixture
def make_posts(db_session: Session):
    """
    Create `count` posts, one minute apart. The last one created is the
    newest, so listings show them in reverse creation order.
    """

    def _make(
        count: int,
        category: Optional[Category] = None,
        tags: Iterable[str] = (),
        title_prefix: str = "Post",
        start: datetime = BASE_TIME,
    ) -> list:
        posts = []
        for i in range(count):
            post = Post(
                title=f"{title_prefix} {i + 1}",
                content=f"<p>Body of <strong>{title_prefix.lower()} {i + 1}</strong></p>",
                category_id=category.id if category else None,
                created_at=start + timedelta(minutes=i),
            )
            for tag in tags:
                post.labels.append(Label(label_name=tag, nickname="editor"))
            db_session.add(post)
            posts.append(post)
        db_session.commit()
        return posts

    return _make
