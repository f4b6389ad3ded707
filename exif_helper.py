"""
ExifTool helper for reading and writing the XPKeywords field of image files
"""
import logging
from typing import Optional, Protocol

from exiftool import ExifToolHelper
from exiftool.exceptions import ExifToolException

logger = logging.getLogger(__name__)

KEYWORD_TAG = "XPKeywords"


class MetadataError(Exception):
    """Reading or writing embedded metadata failed"""


class KeywordNotFoundError(MetadataError):
    """The file carries no keyword field yet"""


class MetadataGateway(Protocol):
    """Anything that can load and store the raw keyword string of a file"""

    def read_keywords(self, path: str) -> str: ...

    def write_keywords(self, path: str, raw: str) -> None: ...


def _strip_line_end(output: str) -> str:
    """exiftool ends the printed value with a newline; the value itself is kept verbatim"""
    if output.endswith("\r\n"):
        return output[:-2]
    if output.endswith("\n"):
        return output[:-1]
    return output


class ExifToolGateway:
    """
    Metadata gateway backed by one long-running exiftool process.

    The process is a scoped resource: call open() once at startup and close()
    on shutdown, or use the gateway as a context manager.
    """

    def __init__(self, executable: Optional[str] = None):
        self.executable = executable
        self._helper: Optional[ExifToolHelper] = None

    def open(self) -> "ExifToolGateway":
        """Start the exiftool process"""
        if self._helper is not None:
            return self
        try:
            helper = ExifToolHelper(executable=self.executable, auto_start=False)
            helper.run()
        except (ExifToolException, OSError, ValueError) as e:
            raise MetadataError(f"Failed to start exiftool: {e}") from e
        self._helper = helper
        logger.info("exiftool started (%s)", self.executable or "exiftool on PATH")
        return self

    def close(self) -> None:
        """Stop the exiftool process"""
        helper, self._helper = self._helper, None
        if helper is None:
            return
        try:
            if helper.running:
                helper.terminate()
        except (ExifToolException, OSError) as e:
            raise MetadataError(f"Failed to stop exiftool: {e}") from e
        logger.info("exiftool stopped")

    def is_ready(self) -> bool:
        """Check if the exiftool process is running"""
        return self._helper is not None and self._helper.running

    def __enter__(self) -> "ExifToolGateway":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _require_helper(self) -> ExifToolHelper:
        if self._helper is None:
            raise MetadataError("exiftool is not running")
        return self._helper

    def read_keywords(self, path: str) -> str:
        """
        Read the raw keyword string of a file

        Raises KeywordNotFoundError when the file has no XPKeywords field,
        MetadataError on any other failure.
        """
        helper = self._require_helper()
        try:
            # Plain -s3 text, not JSON: number-like keywords ("1.50") must not be reparsed
            output = helper.execute("-s3", "-" + KEYWORD_TAG, path)
        except (ExifToolException, OSError, ValueError, TypeError) as e:
            logger.error("Failed to read keywords from %s: %s", path, e)
            raise MetadataError(f"Failed to read keywords from {path}: {e}") from e

        logger.debug("exiftool read %s: %r", path, output)

        raw = _strip_line_end(output or "")
        if raw == "":
            raise KeywordNotFoundError(path)
        return raw

    def write_keywords(self, path: str, raw: str) -> None:
        """Replace the raw keyword string of a file (an empty string removes the field)"""
        helper = self._require_helper()
        try:
            output = helper.set_tags([path], tags={KEYWORD_TAG: raw}, params=["-overwrite_original"])
        except (ExifToolException, OSError, ValueError, TypeError) as e:
            logger.error("Failed to write keywords to %s: %s", path, e)
            raise MetadataError(f"Failed to write keywords to {path}: {e}") from e

        logger.debug("exiftool wrote %s=%r to %s: %s", KEYWORD_TAG, raw, path, output)
