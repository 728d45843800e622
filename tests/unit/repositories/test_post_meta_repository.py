import pytest
from fastapi import HTTPException

from repositories.post_meta_repository import PostMetaRepository
from repositories.post_repository import PostRepository


@pytest.mark.unit
class TestPostMetaRepository:

    def test_missing_value_returns_default(self, meta_repository: PostMetaRepository, sample_post):
        assert meta_repository.get_value(sample_post.id, "_price") is None
        assert meta_repository.get_value(sample_post.id, "_price", default="") == ""

    def test_update_inserts_then_replaces(self, meta_repository: PostMetaRepository, sample_post):
        meta_repository.update_value(sample_post.id, "_price", 10)
        meta_repository.update_value(sample_post.id, "_price", 12.5)

        assert meta_repository.get_value(sample_post.id, "_price") == 12.5
        assert meta_repository.get_all(sample_post.id) == {"_price": 12.5}

    def test_values_keep_their_type(self, meta_repository: PostMetaRepository, sample_post):
        meta_repository.update_value(sample_post.id, "_count", 3)
        meta_repository.update_value(sample_post.id, "_code", "3")

        assert meta_repository.get_value(sample_post.id, "_count") == 3
        assert meta_repository.get_value(sample_post.id, "_code") == "3"

    def test_delete_removes_entry(self, meta_repository: PostMetaRepository, sample_post):
        meta_repository.update_value(sample_post.id, "_price", 10)

        assert meta_repository.delete_value(sample_post.id, "_price") is True
        assert meta_repository.get_value(sample_post.id, "_price") is None

    def test_delete_missing_entry(self, meta_repository: PostMetaRepository, sample_post):
        assert meta_repository.delete_value(sample_post.id, "_price") is False

    def test_entries_are_scoped_per_post(self, meta_repository: PostMetaRepository, post_repository: PostRepository, sample_post):
        other = post_repository.create("post", title="Other")

        meta_repository.update_value(sample_post.id, "_price", 10)

        assert meta_repository.get_value(other.id, "_price") is None


@pytest.mark.unit
class TestPostRepository:

    def test_get_post_type(self, post_repository: PostRepository, sample_download):
        assert post_repository.get_post_type(sample_download.id) == "download"

    def test_get_post_type_of_missing_post(self, post_repository: PostRepository, db_session):
        assert post_repository.get_post_type(9999) is None

    def test_get_by_id_missing_raises_404(self, post_repository: PostRepository, db_session):
        with pytest.raises(HTTPException) as exc_info:
            post_repository.get_by_id(9999)

        assert exc_info.value.status_code == 404
