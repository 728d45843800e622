"""Render Service - quick edit input controls for the inline edit row"""

from typing import Any

from core.templating import template_env
from schemas.quick_edit_field import QuickEditField, QuickEditFieldType
from services.option_resolver import resolve_options

_TEXT_INPUT_TYPES = {
    QuickEditFieldType.TEXT: "text",
    QuickEditFieldType.URL: "url",
    QuickEditFieldType.EMAIL: "email",
}


class FieldRenderer:
    """
    Renders one field's control inside the host's inline edit column.

    The control never carries the current value; the populate script fills
    it in from the list table row.
    """

    def __init__(self, template_name: str = "quick_edit/field.html"):
        self.template = template_env.get_template(template_name)

    @staticmethod
    def build_attrs(field: QuickEditField) -> dict[str, Any]:
        attrs = dict(field.attrs)

        if field.type == QuickEditFieldType.NUMBER:
            if field.min is not None:
                attrs["min"] = field.min
            if field.max is not None:
                attrs["max"] = field.max
            if field.step is not None:
                attrs["step"] = field.step

        return attrs

    @staticmethod
    def control_for(field: QuickEditField) -> str:
        return _TEXT_INPUT_TYPES.get(field.type, field.type.value)

    def render_field(self, field: QuickEditField) -> str:
        options = resolve_options(field) if field.type == QuickEditFieldType.SELECT else {}

        return self.template.render(
            field=field,
            control=self.control_for(field),
            attrs=self.build_attrs(field),
            options=options,
        )
