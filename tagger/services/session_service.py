"""
Tagging session: the file cursor, the tag vocabulary and the keyword round-trip
"""
import logging
import threading
from dataclasses import dataclass
from typing import Dict, List, Tuple

from exif_helper import KeywordNotFoundError, MetadataGateway
from . import tag_codec
from .catalog import FileCatalog, ImageFile
from .vocabulary import Tag, TagVocabulary

logger = logging.getLogger(__name__)


class InvalidTagError(ValueError):
    """Tag name cannot be stored in the keyword field"""


@dataclass(frozen=True)
class SessionView:
    image: ImageFile
    total: int
    tags: List[Tuple[Tag, bool]]

    @property
    def path(self) -> str:
        return self.image.path

    @property
    def membership(self) -> Dict[str, bool]:
        return {tag.name: checked for tag, checked in self.tags}


class SessionController:
    """
    Single shared tagging session.

    Cursor and vocabulary are guarded by one lock. Gateway calls run outside
    that lock but under a per-file lock, so two requests never read-modify-write
    the same file at once.
    """

    def __init__(self, catalog: FileCatalog, gateway: MetadataGateway):
        self.catalog = catalog
        self.gateway = gateway
        self.vocabulary = TagVocabulary()
        self._lock = threading.Lock()
        self._file_locks: Dict[str, threading.Lock] = {}

    def _file_lock(self, path: str) -> threading.Lock:
        with self._lock:
            return self._file_locks.setdefault(path, threading.Lock())

    def _current(self) -> ImageFile:
        with self._lock:
            return self.catalog.current()

    def _read_keywords(self, path: str) -> str:
        try:
            return self.gateway.read_keywords(path)
        except KeywordNotFoundError:
            return ""

    @staticmethod
    def _check_name(name: str) -> None:
        if tag_codec.DELIMITER in name:
            raise InvalidTagError(f"Tag name must not contain '{tag_codec.DELIMITER}': {name!r}")

    def view_state(self) -> SessionView:
        """Current file plus membership of every known tag, registering tags found on the file"""
        image = self._current()
        with self._file_lock(image.path):
            raw = self._read_keywords(image.path)

        decoded = tag_codec.decode(raw)
        present = set(decoded)

        with self._lock:
            for name in decoded:
                if self.vocabulary.add(name):
                    logger.info("Discovered tag %r on %s", name, image.name)
            tags = self.vocabulary.tags()
            total = len(self.catalog)

        return SessionView(
            image=image,
            total=total,
            tags=[(tag, tag.name in present) for tag in tags],
        )

    def advance(self) -> ImageFile:
        with self._lock:
            image = self.catalog.advance()
        logger.debug("Advanced to %s (%d/%d)", image.name, image.position + 1, len(self.catalog))
        return image

    def toggle_tag(self, name: str) -> str:
        """Flip `name` on the current file and return the new raw keyword string"""
        if not name:
            raise InvalidTagError("Tag name must not be empty")
        self._check_name(name)
        image = self._current()
        with self._file_lock(image.path):
            raw = self._read_keywords(image.path)
            updated = tag_codec.toggle(raw, name)
            self.gateway.write_keywords(image.path, updated)
        logger.info("Toggled %r on %s: %r -> %r", name, image.name, raw, updated)
        return updated

    def register_tag(self, name: str) -> bool:
        """Add a tag to the vocabulary without assigning it to the current file"""
        self._check_name(name)
        with self._lock:
            added = self.vocabulary.add(name)
        if added:
            logger.info("Registered tag %r", name)
        return added
