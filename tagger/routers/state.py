"""
Session JSON router
"""
from fastapi import APIRouter, HTTPException, Depends
import logging

from exif_helper import MetadataError
from ..main import get_session_controller
from ..models.schemas import MessageResponse, SessionState, TagRequest, TagState, ToggleResponse
from ..services.session_service import InvalidTagError, SessionController
from ..views import image_url

router = APIRouter()
logger = logging.getLogger(__name__)

def _session_state(controller: SessionController) -> SessionState:
    try:
        view = controller.view_state()
    except MetadataError as e:
        logger.error("Failed to read keywords: %s", e)
        raise HTTPException(status_code=502, detail=f"Failed to read keywords: {str(e)}")

    return SessionState(
        name=view.image.name,
        path=view.path,
        image_url=image_url(view.image.name),
        position=view.image.position,
        total=view.total,
        tags=[TagState(name=tag.name, color=tag.color, checked=checked) for tag, checked in view.tags]
    )

@router.get("", response_model=SessionState)
def get_state(
    controller: SessionController = Depends(get_session_controller)
):
    """Current file and membership of every known tag"""
    return _session_state(controller)

@router.post("/next", response_model=SessionState)
def advance(
    controller: SessionController = Depends(get_session_controller)
):
    """Move to the next file"""
    controller.advance()
    return _session_state(controller)

@router.post("/tags", response_model=MessageResponse)
def register_tag(
    request: TagRequest,
    controller: SessionController = Depends(get_session_controller)
):
    """Add a tag to the vocabulary"""
    try:
        added = controller.register_tag(request.name)
    except InvalidTagError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if added:
        return MessageResponse(message=f"Tag '{request.name}' registered", success=True)
    return MessageResponse(message=f"Tag '{request.name}' not added (empty or already known)", success=False)

@router.post("/toggle", response_model=ToggleResponse)
def toggle_tag(
    request: TagRequest,
    controller: SessionController = Depends(get_session_controller)
):
    """Toggle a tag on the current file"""
    try:
        keywords = controller.toggle_tag(request.name)
    except InvalidTagError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except MetadataError as e:
        logger.error("Failed to toggle %r: %s", request.name, e)
        raise HTTPException(status_code=502, detail=f"Failed to update keywords: {str(e)}")

    return ToggleResponse(name=request.name, keywords=keywords)
