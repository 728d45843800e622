"""PostMeta model - key/value metadata attached to a post"""

from typing import Optional, TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base

if TYPE_CHECKING:
    from models.post import Post


class PostMeta(Base):
    """One metadata entry; meta_value holds the JSON encoded value"""
    __tablename__ = "post_meta"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    meta_key: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    meta_value: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    post: Mapped["Post"] = relationship(back_populates="meta")

    __table_args__ = (
        UniqueConstraint("post_id", "meta_key", name="uq_post_meta_post_key"),
    )

    def __repr__(self):
        return f"<PostMeta(post_id={self.post_id}, meta_key={self.meta_key})>"
