"""
Login Event Repository - Admin audit trail.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from blog.models.login_event import LoginEvent
from blog.schemas.login_event import LoginEventRecord


def record_event(
    db: Session, username: str, event_type: str, ip_address: Optional[str] = None
) -> LoginEvent:
    event = LoginEvent(username=username, event_type=event_type, ip_address=ip_address)
    db.add(event)
    db.flush()
    return event


def get_recent_events(db: Session, limit: int = 10) -> List[LoginEventRecord]:
    events = (
        db.query(LoginEvent)
        .order_by(LoginEvent.created_at.desc(), LoginEvent.id.desc())
        .limit(limit)
        .all()
    )
    return [LoginEventRecord.model_validate(event) for event in events]
