# Site texts and labels shared by templates

SITE = {
    "name": "Blog",
    "title": "Notes & Articles",
    "description": "Articles, notes and tutorials",
}

UNCATEGORIZED = "Uncategorized"

EVENT_LABELS = {
    "login": "Login",
    "login_failed": "Failed login",
    "logout": "Logout",
}

LOAD_ERRORS = {
    "posts": "Failed to load posts.",
    "category": "Failed to load category posts.",
    "tag": "Failed to load tag posts.",
    "post": "Failed to load the post.",
    "admin": "Failed to load admin data.",
}

PAGINATION_LABELS = {
    "previous": "Previous",
    "next": "Next",
    "page_size": "Per page",
    "summary": "Page {current} of {pages}, {total} posts in total",
    "empty": "No posts here yet.",
}
