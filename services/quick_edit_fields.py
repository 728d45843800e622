"""Quick Edit Fields - the render, save and script hooks bound to one post type"""

from collections.abc import Mapping
from typing import Any, Optional, TYPE_CHECKING

from core.logging_config import get_logger
from schemas.quick_edit_field import QuickEditField, QuickEditSaveResult
from services.permission_service import CurrentUserCan
from services.quick_edit_registry import group_id_for
from services.render_service import FieldRenderer
from services.script_emitter_service import ScriptEmitter

if TYPE_CHECKING:
    from services.quick_edit_registry import QuickEditRegistry
    from services.quick_edit_save_service import QuickEditSaveService

logger = get_logger(__name__)


class QuickEditFields:
    """
    Lifecycle handlers for the quick edit fields of a single post type.

    Created by QuickEditRegistry.register; reads its fields from the
    registry on every call, so later registrations for the same post type
    are picked up.
    """

    def __init__(self, registry: "QuickEditRegistry", post_type: str, renderer: FieldRenderer = None):
        self.registry = registry
        self.post_type = post_type
        self.group_id = group_id_for(post_type)
        self.renderer = renderer or FieldRenderer()

    def get_fields(self) -> dict[str, QuickEditField]:
        return self.registry.get_fields(self.post_type)

    def get_field(self, key: str) -> Optional[QuickEditField]:
        return self.registry.get_field(self.post_type, key)

    def render_fields(self, column_name: str, post_type: str, current_user_can: CurrentUserCan) -> str:
        """Markup for the field shown in column_name, or empty when none applies"""
        if post_type != self.post_type:
            return ""

        rendered = []
        for key, field in self.get_fields().items():
            if column_name != key:
                continue

            if not current_user_can(field.capability):
                continue

            rendered.append(self.renderer.render_field(field))

        return "".join(rendered)

    def save_fields(
        self,
        post_id: int,
        request_values: Mapping[str, Any],
        save_service: "QuickEditSaveService",
        doing_autosave: bool = False,
    ) -> QuickEditSaveResult:
        return save_service.save_fields(
            self.post_type,
            self.get_fields(),
            post_id,
            request_values,
            doing_autosave=doing_autosave,
        )

    def output_scripts(self, emitter: ScriptEmitter) -> str:
        return emitter.output_scripts(self.post_type, self.get_fields())
