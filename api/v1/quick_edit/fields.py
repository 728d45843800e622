"""Quick edit field endpoints - field listing and rendering of the edit controls"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import HTMLResponse

from schemas.quick_edit_field import QuickEditFieldRead, QuickEditFieldType
from services.option_resolver import resolve_options
from services.permission_service import CurrentUserCan, get_current_user_can
from services.quick_edit_registry import QuickEditRegistry, get_quick_edit_registry

router = APIRouter()


def _require_post_type(registry: QuickEditRegistry, post_type: str) -> None:
    if not registry.has_post_type(post_type):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No quick edit fields registered for post type '{post_type}'"
        )


@router.get("/{post_type}/fields/", response_model=list[QuickEditFieldRead])
def list_fields(
    post_type: str,
    registry: QuickEditRegistry = Depends(get_quick_edit_registry),
    current_user_can: CurrentUserCan = Depends(get_current_user_can),
):
    """List the fields the current user may edit for a post type, options resolved"""
    _require_post_type(registry, post_type)

    fields = []
    for key, field in registry.get_fields(post_type).items():
        if not current_user_can(field.capability):
            continue

        options = resolve_options(field) if field.type == QuickEditFieldType.SELECT else {}
        fields.append(QuickEditFieldRead(
            key=key,
            label=field.label,
            type=field.type,
            description=field.description,
            column=field.column,
            meta_key=field.meta_key,
            min=field.min,
            max=field.max,
            step=field.step,
            capability=field.capability,
            options={str(value): label for value, label in options.items()},
        ))

    return fields


@router.get("/{post_type}/render/", response_class=HTMLResponse)
def render_fields(
    post_type: str,
    column_name: str = Query(...),
    registry: QuickEditRegistry = Depends(get_quick_edit_registry),
    current_user_can: CurrentUserCan = Depends(get_current_user_can),
):
    """
    Render the quick edit control for one list table column.

    Every registered handler sees the call, the same way the list screen
    fires its custom box hook for each column.
    """
    _require_post_type(registry, post_type)

    markup = "".join(
        handler.render_fields(column_name, post_type, current_user_can)
        for handler in registry.get_handlers()
    )
    return HTMLResponse(content=markup)
