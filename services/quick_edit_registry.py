"""Quick Edit Registry - normalized field groups and their per post type handlers"""

from collections.abc import Mapping
from typing import Any, Iterable, Optional, TYPE_CHECKING

from fastapi import Request
from pydantic import ValidationError

from core.exceptions import QuickEditConfigError
from core.logging_config import get_logger
from schemas.quick_edit_field import (
    FIELD_TYPES,
    QuickEditField,
    StaticOptions,
    SupplierOptions,
)

if TYPE_CHECKING:
    from services.quick_edit_fields import QuickEditFields

logger = get_logger(__name__)


def group_id_for(post_type: str) -> str:
    return f"quick_edit_{post_type}"


def _normalize_options(key: str, options: Any) -> StaticOptions | SupplierOptions:
    if options is None:
        return StaticOptions()
    if isinstance(options, (StaticOptions, SupplierOptions)):
        return options
    if isinstance(options, Mapping):
        return StaticOptions(choices=dict(options))
    if callable(options):
        return SupplierOptions(supplier=options)

    logger.warning(f"Options for quick edit field '{key}' are neither a mapping nor a callable, using none")
    return StaticOptions()


def normalize_field(key: Any, config: Mapping[str, Any] | None) -> QuickEditField:
    """
    Merge a partial field definition with the defaults.

    meta_key and column fall back to the field key when missing or empty.
    """
    if not isinstance(key, str) or not key:
        raise QuickEditConfigError("Invalid field key provided. It must be a non-empty string.", key)

    if config is None:
        config = {}
    if not isinstance(config, Mapping):
        raise QuickEditConfigError(f'Invalid configuration for field "{key}": expected a mapping.', key)
    config = dict(config)

    field_type = config.get("type")
    if field_type is None:
        field_type = "text"
    field_type = getattr(field_type, "value", field_type)
    if not isinstance(field_type, str) or field_type not in FIELD_TYPES:
        raise QuickEditConfigError(f'Invalid field type "{field_type}" for field "{key}".', key)

    config["key"] = key
    config["type"] = field_type
    if not config.get("meta_key"):
        config["meta_key"] = key
    if not config.get("column"):
        config["column"] = key
    config["options"] = _normalize_options(key, config.get("options"))

    # None means "use the default" for every remaining setting
    config = {name: value for name, value in config.items() if value is not None}

    try:
        return QuickEditField.model_validate(config)
    except ValidationError as e:
        raise QuickEditConfigError(f'Invalid configuration for field "{key}": {e}', key) from e


def normalize_fields(fields: Mapping[Any, Mapping[str, Any]]) -> dict[str, QuickEditField]:
    """Normalize every definition; nothing is returned unless all of them are valid"""
    return {key: normalize_field(key, config) for key, config in fields.items()}


class QuickEditRegistry:
    """
    Process-wide store of quick edit field groups.

    Built once at application start and handed to the render, save and
    script handlers. Groups are created on first registration for a post
    type and never removed.
    """

    def __init__(self):
        self._groups: dict[str, dict[str, QuickEditField]] = {}
        self._handlers: dict[str, "QuickEditFields"] = {}

    def _store(self, post_type: str, fields: Mapping[str, QuickEditField]) -> None:
        group = self._groups.setdefault(group_id_for(post_type), {})
        for key, field in fields.items():
            if key in group:
                logger.debug(f"Quick edit field '{key}' for '{post_type}' re-registered, replacing previous definition")
            group[key] = field

    def register(self, post_types: str | Iterable[str], fields: Mapping[Any, Mapping[str, Any]]) -> list["QuickEditFields"]:
        """Register the same fields for one or more post types and return their handlers"""
        from services.quick_edit_fields import QuickEditFields

        if isinstance(post_types, str):
            post_types = [post_types]
        post_types = list(post_types)

        normalized = normalize_fields(fields)

        handlers = []
        for post_type in post_types:
            self._store(post_type, normalized)
            handler = self._handlers.get(post_type)
            if handler is None:
                handler = QuickEditFields(self, post_type)
                self._handlers[post_type] = handler
            handlers.append(handler)
            logger.info(f"Registered {len(normalized)} quick edit field(s) for post type '{post_type}'")

        return handlers

    def get_fields(self, post_type: str) -> dict[str, QuickEditField]:
        return dict(self._groups.get(group_id_for(post_type), {}))

    def get_field(self, post_type: str, key: str) -> Optional[QuickEditField]:
        return self._groups.get(group_id_for(post_type), {}).get(key)

    def get_all_fields(self) -> dict[str, dict[str, QuickEditField]]:
        return {group_id: dict(group) for group_id, group in self._groups.items()}

    def has_post_type(self, post_type: str) -> bool:
        return post_type in self._handlers

    def get_handler(self, post_type: str) -> Optional["QuickEditFields"]:
        return self._handlers.get(post_type)

    def get_handlers(self) -> list["QuickEditFields"]:
        return list(self._handlers.values())


def register_quick_edit_fields(
    registry: QuickEditRegistry,
    post_types: str | Iterable[str],
    fields: Mapping[Any, Mapping[str, Any]],
) -> list["QuickEditFields"]:
    """Register quick edit fields for a post type or a list of post types"""
    return registry.register(post_types, fields)


def get_quick_edit_registry(request: Request) -> QuickEditRegistry:
    """FastAPI dependency returning the registry created at startup"""
    return request.app.state.quick_edit_registry
