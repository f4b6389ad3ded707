"""
FastAPI backend for stepping through images and tagging them
"""
from fastapi import FastAPI, HTTPException
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
from pathlib import Path
import logging
from typing import Optional

from exif_helper import ExifToolGateway
from tagger_config import TAGGER_CONFIG, get_source_dir
from .models.schemas import HealthResponse
from .services.catalog import FileCatalog
from .services.session_service import SessionController

logger = logging.getLogger(__name__)

# Created on startup, dropped on shutdown
session_controller: Optional[SessionController] = None

def get_session_controller() -> SessionController:
    """Dependency to get the tagging session"""
    if session_controller is None:
        raise HTTPException(status_code=503, detail="Tagging session not initialized")
    return session_controller

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle manager for FastAPI app"""
    global session_controller
    logger.info("🚀 Starting image tagger...")

    # Config, listing and exiftool failures abort startup
    catalog = FileCatalog.load(get_source_dir())
    gateway = ExifToolGateway(TAGGER_CONFIG['exiftool_path']).open()
    try:
        session_controller = SessionController(catalog, gateway)
        yield
    finally:
        session_controller = None
        logger.info("👋 Shutting down image tagger...")
        gateway.close()

# Create FastAPI app
app = FastAPI(
    title="Image Tagger",
    description="Step through a folder of images and toggle XPKeywords tags",
    version="1.0.0",
    lifespan=lifespan
)

# Mount static files
static_path = Path(__file__).parent / "static"
app.mount("/static", StaticFiles(directory=str(static_path)), name="static")

# Import routers after defining get_session_controller
from .routers import session, state

# Include routers
app.include_router(state.router, prefix="/api/session", tags=["Session"])
app.include_router(session.router, tags=["Pages"])

@app.get("/api/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint"""
    controller = session_controller
    gateway_ready = getattr(controller.gateway, "is_ready", None) if controller else None
    return HealthResponse(
        status="healthy" if controller is not None else "starting",
        exiftool_running=bool(gateway_ready and gateway_ready()),
        files=len(controller.catalog) if controller else 0,
    )

@app.get("/")
async def root():
    """Root endpoint"""
    return RedirectResponse("/index")

@app.get("/{path:path}", include_in_schema=False)
async def fallback(path: str):
    """Unknown pages go back to the tagging page"""
    if path.startswith("api/"):
        raise HTTPException(status_code=404, detail="Not found")
    return RedirectResponse("/index")
