"""
Tagger configuration and source directory settings
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Server and tool settings
TAGGER_CONFIG = {
    'source_dir': os.getenv('TAGGER_SOURCE_DIR', ''),
    'host': os.getenv('TAGGER_HOST', '127.0.0.1'),
    'port': int(os.getenv('TAGGER_PORT', '8000')),
    'exiftool_path': os.getenv('EXIFTOOL_PATH') or None,  # None = exiftool on PATH
    'log_level': os.getenv('TAGGER_LOG_LEVEL', 'INFO'),
    'log_file': os.getenv('TAGGER_LOG_FILE') or None,
}


class ConfigError(Exception):
    """Raised when a required setting is missing"""


def set_source_dir(path: str) -> None:
    """Override the source directory (used by the command line entry point)"""
    TAGGER_CONFIG['source_dir'] = path


def get_source_dir() -> Path:
    """
    Get the directory whose files are stepped through

    Usage:
        set_source_dir("/photos/holiday")
        src = get_source_dir()
    """
    source_dir = TAGGER_CONFIG.get('source_dir')
    if not source_dir:
        raise ConfigError("source directory must be set (--src or TAGGER_SOURCE_DIR)")
    return Path(source_dir)
