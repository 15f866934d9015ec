from sqlalchemy import Integer, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column
from datetime import datetime
from blog.database import Base


class Label(Base):
    """A tag attached to one post. Tags are identified by `label_name`."""

    __tablename__ = "labels"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("posts.id"), nullable=False, index=True
    )
    nickname: Mapped[str | None] = mapped_column(
        String(100), nullable=True
    )  # Who attached the tag
    label_name: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.now, nullable=False
    )

    post = relationship("Post", back_populates="labels")

    __table_args__ = (Index("ix_labels_name_post", "label_name", "post_id"),)

    def __repr__(self):
        return f"<Label {self.label_name} on {self.post_id}>"
