"""
User Repository - Admin operator accounts.
"""

from typing import Optional

from sqlalchemy.orm import Session

from blog.models.user import User


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def create_user(db: Session, username: str, password_hash: str) -> User:
    """
    Create an admin user.

    Args:
        db: Database session
        username: Unique login name
        password_hash: bcrypt hash of the password

    Returns:
        Created User object
    """
    user = User(username=username, password_hash=password_hash)
    db.add(user)
    db.flush()
    return user
