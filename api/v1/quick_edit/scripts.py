"""Footer script endpoint"""

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from services.quick_edit_registry import QuickEditRegistry, get_quick_edit_registry
from services.script_emitter_service import ScriptEmitter

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
def footer_scripts(
    screen_id: Optional[str] = None,
    registry: QuickEditRegistry = Depends(get_quick_edit_registry),
):
    """Populate scripts for the screen being rendered; empty outside list screens"""
    emitter = ScriptEmitter(screen_id)
    markup = "".join(handler.output_scripts(emitter) for handler in registry.get_handlers())
    return HTMLResponse(content=markup)
