from sqlalchemy import Integer, String
from sqlalchemy.orm import relationship, Mapped, mapped_column
from blog.database import Base


class Category(Base):
    """Post category. `value` is the URL slug used by /category/{value}."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    value: Mapped[str] = mapped_column(
        String(100), unique=True, nullable=False, index=True
    )

    posts = relationship("Post", back_populates="category")

    def __repr__(self):
        return f"<Category {self.value}>"
