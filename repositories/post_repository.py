from typing import Optional

from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session

from db.session import get_db
from models import Post


class PostRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, post_id: int) -> Post:
        post = self.db.get(Post, post_id)
        if not post:
            raise HTTPException(status_code=404, detail="Post not found")
        return post

    def get_post_type(self, post_id: int) -> Optional[str]:
        post = self.db.get(Post, post_id)
        return post.post_type if post else None

    def create(self, post_type: str, title: str = "") -> Post:
        post = Post(post_type=post_type, title=title)
        self.db.add(post)
        self.db.commit()
        self.db.refresh(post)
        return post


def get_post_repository(db: Session = Depends(get_db)) -> PostRepository:
    return PostRepository(db)
