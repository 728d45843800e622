"""Post model - the rows listed on an admin list screen"""

from typing import TYPE_CHECKING

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base

if TYPE_CHECKING:
    from models.post_meta import PostMeta


class Post(Base):
    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_type: Mapped[str] = mapped_column(String(20), nullable=False, index=True, default="post")
    title: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    meta: Mapped[list["PostMeta"]] = relationship(
        back_populates="post",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Post(id={self.id}, post_type={self.post_type})>"
