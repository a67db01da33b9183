from __future__ import annotations

"""
Logging Handler Factories.

Builds the console and file handlers owned by icounter and tags them, so
re-configuration can tell them apart from handlers installed by test
runners or embedding applications.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional, TextIO

_HANDLER_TAG_ATTR: str = "_icounter_handler"


def _tag_handler(handler: logging.Handler) -> logging.Handler:
    """Mark a handler as managed by icounter and return it."""
    setattr(handler, _HANDLER_TAG_ATTR, True)
    return handler


def _is_our_handler(handler: logging.Handler) -> bool:
    """Check for the icounter ownership tag."""
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def _create_console_handler(
        level_int: int,
        formatter: logging.Formatter,
        stream: Optional[TextIO] = None,
) -> logging.StreamHandler:
    """
    Build the diagnostic stream handler.

    Diagnostics always go to stderr by default so that counts printed on
    stdout stay machine-readable.
    """
    sh = logging.StreamHandler(stream if stream is not None else sys.stderr)
    sh.setLevel(level_int)
    sh.setFormatter(formatter)
    _tag_handler(sh)
    return sh


def _create_rotating_file_handler(
        log_file: str,
        level_int: int,
        formatter: logging.Formatter,
        max_bytes: int,
        backup_count: int,
) -> Optional[RotatingFileHandler]:
    """
    Open a size-rotated log file, creating its directory on demand.

    Returns:
        Optional[RotatingFileHandler]: The handler, or None when the file
                                       cannot be opened (reported on stderr).
    """
    try:
        parent = os.path.dirname(os.path.abspath(log_file))
        os.makedirs(parent, exist_ok=True)
        fh = RotatingFileHandler(
            log_file,
            maxBytes=int(max_bytes),
            backupCount=int(backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: Cannot open log file '{log_file}': {e}\n")
        return None

    fh.setLevel(level_int)
    fh.setFormatter(formatter)
    _tag_handler(fh)
    return fh
