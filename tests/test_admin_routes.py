"""
Tests for the admin area: session gate, login/logout and listings.
"""

import pytest
from fastapi.testclient import TestClient

from blog.models.login_event import LoginEvent
from blog.models.user import User
from blog.services.auth_service import create_or_reset_admin


@pytest.fixture
def admin_user(db_session) -> User:
    user = create_or_reset_admin(db_session, "admin", "correct-horse")
    db_session.commit()
    return user


@pytest.mark.integration
@pytest.mark.parametrize("path", ["/admin", "/admin/posts", "/admin/categories"])
def test_admin_requires_session(client: TestClient, path):
    response = client.get(path, follow_redirects=False)

    assert response.status_code == 302
    assert response.headers["location"].startswith("/admin/login?next=")


@pytest.mark.integration
def test_admin_redirect_keeps_query(client: TestClient):
    response = client.get("/admin/posts?page=2", follow_redirects=False)

    assert response.headers["location"] == "/admin/login?next=%2Fadmin%2Fposts%3Fpage%3D2"


@pytest.mark.integration
def test_forged_session_is_rejected(client: TestClient):
    client.cookies.set("admin_session", "admin:9999999999.deadbeef")

    response = client.get("/admin", follow_redirects=False)

    assert response.status_code == 302


@pytest.mark.integration
def test_login_page(client: TestClient):
    response = client.get("/admin/login?next=/admin/posts")

    assert response.status_code == 200
    assert 'name="csrf_token"' in response.text
    assert 'value="/admin/posts"' in response.text
    assert "csrf_token=" in response.headers.get("set-cookie", "")


@pytest.mark.integration
def test_login_page_ignores_external_next(client: TestClient):
    response = client.get("/admin/login?next=https://evil.com")

    assert 'value="/admin"' in response.text
    assert "evil.com" not in response.text


@pytest.mark.integration
def test_login_success(client: TestClient, csrf_token, admin_user, db_session):
    response = client.post(
        "/admin/login",
        data={
            "csrf_token": csrf_token,
            "username": "admin",
            "password": "correct-horse",
            "next": "/admin/posts",
        },
        follow_redirects=False,
    )

    assert response.status_code == 302
    assert response.headers["location"] == "/admin/posts"
    assert "admin_session=admin:" in response.headers["set-cookie"]

    db_session.expire_all()
    assert db_session.get(User, admin_user.id).last_login is not None
    events = db_session.query(LoginEvent).all()
    assert [(e.username, e.event_type) for e in events] == [("admin", "login")]


@pytest.mark.integration
def test_login_wrong_password(client: TestClient, csrf_token, admin_user, db_session):
    response = client.post(
        "/admin/login",
        data={"csrf_token": csrf_token, "username": "admin", "password": "nope"},
        follow_redirects=False,
    )

    assert response.status_code == 401
    assert "Invalid username or password." in response.text
    assert "admin_session=" not in response.headers.get("set-cookie", "")
    assert db_session.query(LoginEvent).one().event_type == "login_failed"


@pytest.mark.integration
def test_login_unknown_user(client: TestClient, csrf_token):
    response = client.post(
        "/admin/login",
        data={"csrf_token": csrf_token, "username": "ghost", "password": "whatever"},
    )

    assert response.status_code == 401


@pytest.mark.integration
def test_login_missing_fields(client: TestClient, csrf_token):
    response = client.post(
        "/admin/login", data={"csrf_token": csrf_token, "username": "admin"}
    )

    assert response.status_code == 400
    assert "Username and password are required." in response.text


@pytest.mark.integration
def test_login_requires_csrf(client: TestClient, admin_user):
    response = client.post(
        "/admin/login",
        data={"username": "admin", "password": "correct-horse"},
        follow_redirects=False,
    )

    assert response.status_code == 403


@pytest.mark.integration
def test_login_rate_limited(client: TestClient, csrf_token, admin_user):
    for _ in range(5):
        response = client.post(
            "/admin/login",
            data={"csrf_token": csrf_token, "username": "admin", "password": "bad"},
        )
        assert response.status_code == 401

    response = client.post(
        "/admin/login",
        data={
            "csrf_token": csrf_token,
            "username": "admin",
            "password": "correct-horse",
        },
        follow_redirects=False,
    )

    assert response.status_code == 429
    assert "Too many attempts" in response.text


@pytest.mark.integration
def test_logout(admin_client: TestClient, csrf_token, db_session):
    response = admin_client.post(
        "/admin/logout", data={"csrf_token": csrf_token}, follow_redirects=False
    )

    assert response.status_code == 302
    assert response.headers["location"] == "/admin/login"
    assert "Max-Age=0" in response.headers["set-cookie"]
    assert db_session.query(LoginEvent).one().event_type == "logout"


@pytest.mark.integration
def test_dashboard(admin_client: TestClient, db_session, make_category, make_posts):
    python = make_category("Python")
    make_category("Rust")
    make_posts(3, category=python)
    db_session.add(LoginEvent(username="admin", event_type="login", ip_address="10.0.0.5"))
    db_session.commit()

    response = admin_client.get("/admin")

    assert response.status_code == 200
    assert 'id="total-posts">3<' in response.text
    assert 'id="total-categories">2<' in response.text
    assert "10.0.0.5" in response.text
    assert "Log out" in response.text


@pytest.mark.integration
def test_admin_posts_fixed_page_size(admin_client: TestClient, make_posts):
    make_posts(12)

    response = admin_client.get("/admin/posts?pageSize=20")

    assert response.status_code == 200
    assert "Page 1 of 3, 12 posts in total" in response.text


@pytest.mark.integration
def test_admin_posts_category_filter_kept_in_links(
    admin_client: TestClient, make_category, make_posts
):
    python = make_category("Python")
    make_posts(12, category=python, title_prefix="Py")
    make_posts(4, title_prefix="Loose")

    response = admin_client.get(f"/admin/posts?category={python.id}")

    assert "Page 1 of 3, 12 posts in total" in response.text
    assert f'href="?category={python.id}&amp;page=2"' in response.text
    assert "Loose" not in response.text


@pytest.mark.integration
def test_admin_posts_invalid_category_shows_all(admin_client: TestClient, make_posts):
    make_posts(7)

    response = admin_client.get("/admin/posts?category=abc")

    assert response.status_code == 200
    assert "Page 1 of 2, 7 posts in total" in response.text


@pytest.mark.integration
def test_admin_categories(admin_client: TestClient, make_category, make_posts):
    python = make_category("Python")
    make_category("Empty Shelf")
    make_posts(2, category=python)

    response = admin_client.get("/admin/categories")

    assert response.status_code == 200
    text = response.text
    assert text.index("Empty Shelf") < text.index("Python")
    assert f'href="/admin/posts?category={python.id}"' in text


@pytest.mark.integration
def test_create_or_reset_admin_replaces_password(db_session):
    first = create_or_reset_admin(db_session, "admin", "first-password")
    old_hash = first.password_hash

    second = create_or_reset_admin(db_session, " admin ", "second-password")

    assert second.id == first.id
    assert second.password_hash != old_hash
    assert db_session.query(User).count() == 1


@pytest.mark.integration
@pytest.mark.parametrize(
    "username,password", [("", "long-enough"), ("   ", "long-enough"), ("admin", "short")]
)
def test_create_or_reset_admin_validation(db_session, username, password):
    with pytest.raises(ValueError):
        create_or_reset_admin(db_session, username, password)


@pytest.mark.integration
@pytest.mark.parametrize("category", ["9" * 25, "9" * 5000, str(2**63)])
def test_admin_posts_huge_category_shows_all(admin_client: TestClient, make_posts, category):
    make_posts(7)

    response = admin_client.get(f"/admin/posts?category={category}&page=" + "9" * 25)

    assert response.status_code == 200
    assert "Page 1 of 2, 7 posts in total" in response.text
