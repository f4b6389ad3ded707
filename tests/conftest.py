from pathlib import Path
from typing import Dict, List, Set, Tuple

import pytest
from fastapi.testclient import TestClient

from exif_helper import KeywordNotFoundError, MetadataError
from tagger.main import app, get_session_controller
from tagger.services.catalog import FileCatalog
from tagger.services.session_service import SessionController


class MemoryGateway:
    """In-memory stand-in for the exiftool gateway."""

    def __init__(self, keywords: Dict[str, str] = None):
        self.keywords: Dict[str, str] = dict(keywords or {})
        self.writes: List[Tuple[str, str]] = []
        self.failing: Set[str] = set()

    def read_keywords(self, path: str) -> str:
        if path in self.failing:
            raise MetadataError(f"cannot read {path}")
        if path not in self.keywords:
            raise KeywordNotFoundError(path)
        return self.keywords[path]

    def write_keywords(self, path: str, raw: str) -> None:
        if path in self.failing:
            raise MetadataError(f"cannot write {path}")
        self.writes.append((path, raw))
        if raw == "":
            self.keywords.pop(path, None)
        else:
            self.keywords[path] = raw


@pytest.fixture
def image_dir(tmp_path: Path) -> Path:
    for name in ("b.jpg", "a.jpg"):
        (tmp_path / name).write_bytes(b"\xff\xd8\xff\xd9")
    return tmp_path


@pytest.fixture
def catalog(image_dir: Path) -> FileCatalog:
    return FileCatalog.load(image_dir)


@pytest.fixture
def gateway() -> MemoryGateway:
    return MemoryGateway()


@pytest.fixture
def controller(catalog: FileCatalog, gateway: MemoryGateway) -> SessionController:
    return SessionController(catalog, gateway)


@pytest.fixture
def client(controller: SessionController):
    app.dependency_overrides[get_session_controller] = lambda: controller
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
