"""Post Meta Repository - the metadata store quick edit values are written to"""

import json
from typing import Any

from fastapi import Depends
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from db.session import get_db
from models import PostMeta


class PostMetaRepository:
    def __init__(self, session: Session):
        self.session = session

    def _get_entry(self, post_id: int, meta_key: str) -> PostMeta | None:
        stmt = (
            select(PostMeta)
            .where(PostMeta.post_id == post_id)
            .where(PostMeta.meta_key == meta_key)
        )
        return self.session.scalar(stmt)

    def get_value(self, post_id: int, meta_key: str, default: Any = None) -> Any:
        entry = self._get_entry(post_id, meta_key)
        if entry is None or entry.meta_value is None:
            return default
        return json.loads(entry.meta_value)

    def get_all(self, post_id: int) -> dict[str, Any]:
        stmt = select(PostMeta).where(PostMeta.post_id == post_id).order_by(PostMeta.id)
        return {
            entry.meta_key: json.loads(entry.meta_value) if entry.meta_value is not None else None
            for entry in self.session.scalars(stmt)
        }

    def update_value(self, post_id: int, meta_key: str, value: Any) -> None:
        """Insert or replace one entry"""
        serialized_value = json.dumps(value)
        entry = self._get_entry(post_id, meta_key)

        if entry:
            entry.meta_value = serialized_value
        else:
            entry = PostMeta(post_id=post_id, meta_key=meta_key, meta_value=serialized_value)
            self.session.add(entry)

        self.session.commit()

    def delete_value(self, post_id: int, meta_key: str) -> bool:
        result = self.session.execute(
            delete(PostMeta)
            .where(PostMeta.post_id == post_id)
            .where(PostMeta.meta_key == meta_key)
        )
        self.session.commit()
        return result.rowcount > 0


def get_post_meta_repository(db: Session = Depends(get_db)) -> PostMetaRepository:
    return PostMetaRepository(db)
