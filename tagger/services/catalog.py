"""
Ordered catalog of the files in the source directory, with a single cursor
"""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union

logger = logging.getLogger(__name__)


class CatalogError(OSError):
    """The source directory could not be turned into a catalog"""


@dataclass(frozen=True)
class ImageFile:
    name: str
    path: str
    position: int


class FileCatalog:
    """
    Snapshot of a directory listing taken at startup.

    The cursor always denotes a valid entry: advancing past the last file
    wraps back to the first one.
    """

    def __init__(self, files: Sequence[ImageFile]):
        if not files:
            raise CatalogError("catalog has no files")
        self._files: List[ImageFile] = list(files)
        self._cursor = 0

    @classmethod
    def load(cls, directory: Union[str, Path]) -> "FileCatalog":
        """List `directory` (every entry, sorted by name) and build a catalog from it"""
        directory = Path(directory)
        try:
            names = sorted(entry.name for entry in os.scandir(directory))
        except OSError as e:
            raise CatalogError(f"Failed to list {directory}: {e}") from e

        if not names:
            raise CatalogError(f"{directory} is empty")

        files = [
            ImageFile(name=name, path=str(directory / name), position=i)
            for i, name in enumerate(names)
        ]
        logger.info("Loaded %d files from %s", len(files), directory)
        return cls(files)

    @property
    def position(self) -> int:
        return self._cursor

    def current(self) -> ImageFile:
        return self._files[self._cursor]

    def advance(self) -> ImageFile:
        """Move to the next file, wrapping to the first after the last one"""
        self._cursor = (self._cursor + 1) % len(self._files)
        return self._files[self._cursor]

    def find(self, name: str) -> Optional[ImageFile]:
        for image in self._files:
            if image.name == name:
                return image
        return None

    def __len__(self) -> int:
        return len(self._files)

    def __iter__(self):
        return iter(self._files)
