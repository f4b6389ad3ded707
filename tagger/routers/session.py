"""
Tagging page router (htmx form posts, full-page responses)
"""
from fastapi import APIRouter, HTTPException, Depends, Form
from fastapi.responses import FileResponse, HTMLResponse
from pathlib import Path
import logging

from exif_helper import MetadataError
from ..main import get_session_controller
from ..services.session_service import InvalidTagError, SessionController
from ..views import render_session

router = APIRouter()
logger = logging.getLogger(__name__)

def _send_main_page(controller: SessionController) -> HTMLResponse:
    try:
        view = controller.view_state()
    except MetadataError as e:
        logger.error("Failed to read keywords: %s", e)
        raise HTTPException(status_code=502, detail=f"Failed to read keywords: {str(e)}")
    return render_session(view)

@router.get("/index", response_class=HTMLResponse)
def index(
    controller: SessionController = Depends(get_session_controller)
):
    """Tagging page for the current file"""
    return _send_main_page(controller)

@router.post("/next", response_class=HTMLResponse)
def next_file(
    controller: SessionController = Depends(get_session_controller)
):
    """Move to the next file"""
    controller.advance()
    return _send_main_page(controller)

@router.post("/new-tag", response_class=HTMLResponse)
def new_tag(
    name: str = Form("", alias="Name"),
    controller: SessionController = Depends(get_session_controller)
):
    """Register a new tag name"""
    try:
        controller.register_tag(name)
    except InvalidTagError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _send_main_page(controller)

@router.post("/tag", response_class=HTMLResponse)
def toggle_tag(
    name: str = Form("", alias="Name"),
    controller: SessionController = Depends(get_session_controller)
):
    """Toggle a tag on the current file"""
    try:
        controller.toggle_tag(name)
    except InvalidTagError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except MetadataError as e:
        logger.error("Failed to toggle %r: %s", name, e)
        raise HTTPException(status_code=502, detail=f"Failed to update keywords: {str(e)}")
    return _send_main_page(controller)

@router.get("/images/{name}")
def get_image(
    name: str,
    controller: SessionController = Depends(get_session_controller)
):
    """Serve a file from the catalog"""
    image = controller.catalog.find(name)
    if image is None or not Path(image.path).is_file():
        raise HTTPException(status_code=404, detail="File not in catalog")
    return FileResponse(image.path)
