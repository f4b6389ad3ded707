"""Command line entry point: python -m tagger --src DIR"""

import argparse
import logging
import sys
from typing import List, Optional

import uvicorn

from logging_config import setup_logging
from tagger_config import TAGGER_CONFIG, ConfigError, get_source_dir, set_source_dir
from tagger.services.catalog import CatalogError, FileCatalog

logger = logging.getLogger("tagger")


def log_level_name(value: str) -> str:
    """Normalise a level name to one uvicorn accepts ("WARN" -> "warning")"""
    level = logging.getLevelName(value.upper())
    if not isinstance(level, int) or level == logging.NOTSET:
        raise argparse.ArgumentTypeError(f"unknown log level: {value!r}")
    return logging.getLevelName(level).lower()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Step through a directory of images and tag them")
    parser.add_argument("--src", default=TAGGER_CONFIG["source_dir"], help="source directory")
    parser.add_argument("--host", default=TAGGER_CONFIG["host"])
    parser.add_argument("--port", type=int, default=TAGGER_CONFIG["port"])
    parser.add_argument("--exiftool", default=TAGGER_CONFIG["exiftool_path"], help="path to the exiftool executable")
    parser.add_argument("--log-level", type=log_level_name, default=TAGGER_CONFIG["log_level"])
    parser.add_argument("--log-file", default=TAGGER_CONFIG["log_file"])
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    set_source_dir(args.src or "")
    TAGGER_CONFIG["exiftool_path"] = args.exiftool

    try:
        # Fail before the server starts; the lifespan loads it again
        FileCatalog.load(get_source_dir())
    except (ConfigError, CatalogError) as exc:
        logger.critical("%s", exc)
        return 1

    uvicorn.run("tagger.main:app", host=args.host, port=args.port, log_level=args.log_level)
    return 0


if __name__ == "__main__":
    sys.exit(main())
