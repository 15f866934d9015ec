"""
Admin authentication: password hashing and credential checks.

Session cookies are handled by blog.middleware.admin_auth.
"""

import logging
from datetime import datetime
from typing import Optional

import bcrypt
from sqlalchemy.orm import Session

from blog.models.user import User
from blog.repositories.login_event_repository import record_event
from blog.repositories.user_repository import create_user, get_user_by_username

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """Hash a password with bcrypt."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """
    Check a password against a bcrypt hash.

    A malformed stored hash counts as a mismatch.
    """
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError as e:
        logger.error(f"Error verifying admin password: {e}")
        return False


def authenticate(
    db: Session, username: str, password: str, ip_address: Optional[str] = None
) -> Optional[User]:
    """
    Verify admin credentials and record the attempt.

    On success the user's last_login is updated and a "login" event is
    recorded; on failure a "login_failed" event is recorded.

    Args:
        db: Database session
        username: Submitted username
        password: Submitted password
        ip_address: Client IP for the audit trail

    Returns:
        The authenticated User, or None
    """
    username = (username or "").strip()
    if not username or not password:
        return None

    user = get_user_by_username(db, username)
    if user is None or not verify_password(password, user.password_hash):
        record_event(db, username, "login_failed", ip_address)
        logger.warning("Failed admin login for %s from %s", username, ip_address)
        return None

    user.last_login = datetime.now()
    record_event(db, user.username, "login", ip_address)
    logger.info("Admin %s logged in from %s", user.username, ip_address)
    return user


def create_or_reset_admin(db: Session, username: str, password: str) -> User:
    """
    Create an admin user, or replace the password of an existing one.

    Used by scripts/create_admin.py.
    """
    username = username.strip()
    if not username:
        raise ValueError("Username is required")
    if len(password) < 8:
        raise ValueError("Password must have at least 8 characters")

    user = get_user_by_username(db, username)
    if user is None:
        return create_user(db, username, hash_password(password))

    user.password_hash = hash_password(password)
    db.flush()
    return user
