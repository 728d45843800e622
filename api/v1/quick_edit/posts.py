"""Quick edit save endpoint"""

from typing import Any

from fastapi import APIRouter, Depends, Request

from repositories.post_meta_repository import PostMetaRepository, get_post_meta_repository
from repositories.post_repository import PostRepository, get_post_repository
from schemas.quick_edit_field import QuickEditSaveResult
from services.permission_service import CurrentUserCan, get_current_user_can
from services.quick_edit_registry import QuickEditRegistry, get_quick_edit_registry
from services.quick_edit_save_service import QuickEditSaveService

router = APIRouter()


async def get_request_values(request: Request) -> dict[str, Any]:
    """Submitted form values; keys sent more than once become lists"""
    form = await request.form()
    values = {}
    for key in form.keys():
        submitted = form.getlist(key)
        values[key] = submitted[0] if len(submitted) == 1 else submitted
    return values


def get_quick_edit_save_service(
    meta_repository: PostMetaRepository = Depends(get_post_meta_repository),
    post_repository: PostRepository = Depends(get_post_repository),
    current_user_can: CurrentUserCan = Depends(get_current_user_can),
) -> QuickEditSaveService:
    return QuickEditSaveService(meta_repository, post_repository, current_user_can)


@router.post("/{post_id}/", response_model=QuickEditSaveResult)
def save_post_fields(
    post_id: int,
    autosave: bool = False,
    request_values: dict[str, Any] = Depends(get_request_values),
    registry: QuickEditRegistry = Depends(get_quick_edit_registry),
    post_repository: PostRepository = Depends(get_post_repository),
    save_service: QuickEditSaveService = Depends(get_quick_edit_save_service),
):
    """
    Save quick edit values submitted for a post.

    Only the handler bound to the post's type runs, mirroring the per post
    type save hook.
    """
    post = post_repository.get_by_id(post_id)

    handler = registry.get_handler(post.post_type)
    if handler is None:
        return QuickEditSaveResult(post_id=post_id)

    return handler.save_fields(post_id, request_values, save_service, doing_autosave=autosave)
