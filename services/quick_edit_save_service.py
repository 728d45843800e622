"""Quick Edit Save Service - persists submitted quick edit values to post meta"""

from collections.abc import Mapping
from typing import Any

from core.logging_config import get_logger
from core.settings import settings
from repositories.post_meta_repository import PostMetaRepository
from repositories.post_repository import PostRepository
from schemas.quick_edit_field import QuickEditField, QuickEditFieldType, QuickEditSaveResult
from services.permission_service import CurrentUserCan
from services.sanitizer_service import sanitize_value

logger = get_logger(__name__)


class QuickEditSaveService:
    def __init__(
        self,
        meta_repository: PostMetaRepository,
        post_repository: PostRepository,
        current_user_can: CurrentUserCan,
        inline_edit_flag: str = None,
    ):
        self.meta_repository = meta_repository
        self.post_repository = post_repository
        self.current_user_can = current_user_can
        self.inline_edit_flag = inline_edit_flag or settings.QUICK_EDIT_INLINE_FLAG

    def can_save(self, post_type: str, post_id: int, doing_autosave: bool = False) -> bool:
        """All-or-nothing gates checked before any field is looked at"""
        if doing_autosave:
            logger.debug(f"Skipping quick edit save for post {post_id}: autosave")
            return False

        if self.post_repository.get_post_type(post_id) != post_type:
            return False

        if not self.current_user_can("edit_post", post_id):
            logger.debug(f"Skipping quick edit save for post {post_id}: no edit permission")
            return False

        return True

    def save_fields(
        self,
        post_type: str,
        fields: Mapping[str, QuickEditField],
        post_id: int,
        request_values: Mapping[str, Any],
        doing_autosave: bool = False,
    ) -> QuickEditSaveResult:
        result = QuickEditSaveResult(post_id=post_id)

        if not self.can_save(post_type, post_id, doing_autosave):
            return result

        for key, field in fields.items():
            if not self.current_user_can(field.capability):
                result.skipped.append(key)
                continue

            meta_key = field.meta_key

            # An unchecked checkbox is simply missing from the submission
            if field.type == QuickEditFieldType.CHECKBOX:
                if self.inline_edit_flag not in request_values:
                    result.skipped.append(key)
                    continue
                value = 1 if meta_key in request_values else 0
                self.meta_repository.update_value(post_id, meta_key, value)
                result.updated.append(key)
                continue

            if request_values.get(meta_key) is None:
                result.skipped.append(key)
                continue

            # A failing override or an unstorable value only costs this field
            try:
                value = sanitize_value(request_values[meta_key], field)

                if value is None:
                    # Rejected values leave the stored value as it was
                    logger.debug(f"Rejected value for quick edit field '{key}' on post {post_id}")
                    result.rejected.append(key)
                elif value == "":
                    self.meta_repository.delete_value(post_id, meta_key)
                    result.deleted.append(key)
                else:
                    self.meta_repository.update_value(post_id, meta_key, value)
                    result.updated.append(key)
            except Exception as e:
                logger.error(f"Failed to save quick edit field '{key}' for post {post_id}: {e}")
                result.failed.append(key)

        logger.info(
            f"Quick edit save for post {post_id}: "
            f"{len(result.updated)} updated, {len(result.deleted)} deleted, "
            f"{len(result.rejected)} rejected, {len(result.failed)} failed"
        )
        return result
