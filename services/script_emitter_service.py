"""Script Emitter - footer script that fills quick edit controls from the list table"""

from collections.abc import Mapping
from typing import Optional

from core.logging_config import get_logger
from core.settings import settings
from core.templating import template_env
from schemas.quick_edit_field import QuickEditField, ScriptField

logger = get_logger(__name__)


class ScriptEmitter:
    """
    Emits the populate script for the screen being rendered.

    One emitter lives for one screen render; each post type is emitted at
    most once no matter how often the footer hook fires.
    """

    def __init__(
        self,
        screen_id: Optional[str],
        populate_delay_ms: int = None,
        template_name: str = "quick_edit/populate_script.html",
    ):
        self.screen_id = screen_id
        self.populate_delay_ms = (
            settings.QUICK_EDIT_POPULATE_DELAY_MS if populate_delay_ms is None else populate_delay_ms
        )
        self.template = template_env.get_template(template_name)
        self._emitted: set[str] = set()

    def is_list_screen_for(self, post_type: str) -> bool:
        return bool(self.screen_id) and self.screen_id == f"edit-{post_type}"

    def has_emitted(self, post_type: str) -> bool:
        return post_type in self._emitted

    @staticmethod
    def script_fields(fields: Mapping[str, QuickEditField]) -> list[dict]:
        return [
            ScriptField(key=key, column=field.column, type=field.type).model_dump(mode="json")
            for key, field in fields.items()
        ]

    def output_scripts(self, post_type: str, fields: Mapping[str, QuickEditField]) -> str:
        if not self.is_list_screen_for(post_type):
            return ""

        if post_type in self._emitted:
            return ""
        self._emitted.add(post_type)

        if not fields:
            return ""

        logger.debug(f"Emitting quick edit populate script for '{post_type}' ({len(fields)} field(s))")
        return self.template.render(
            fields=self.script_fields(fields),
            populate_delay=int(self.populate_delay_ms),
        )
