from sqlalchemy import Integer, String, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime
from blog.database import Base


class LoginEvent(Base):
    """Audit trail of admin-area events shown on the dashboard."""

    __tablename__ = "login_events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(100), nullable=False)
    ip_address: Mapped[str | None] = mapped_column(String(64), nullable=True)
    event_type: Mapped[str] = mapped_column(
        String(20), nullable=False
    )  # login, logout, login_failed
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.now, nullable=False, index=True
    )

    def __repr__(self):
        return f"<LoginEvent {self.event_type} {self.username} at {self.created_at}>"
