"""
Pydantic models for API requests and responses
"""
from pydantic import BaseModel
from typing import List

# Session
class TagState(BaseModel):
    name: str
    color: str
    checked: bool = False

class SessionState(BaseModel):
    name: str
    path: str
    image_url: str
    position: int
    total: int
    tags: List[TagState] = []

class TagRequest(BaseModel):
    name: str

class ToggleResponse(BaseModel):
    name: str
    keywords: str

# Common
class MessageResponse(BaseModel):
    message: str
    success: bool = True

class HealthResponse(BaseModel):
    status: str
    exiftool_running: bool
    files: int
