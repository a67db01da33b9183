from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform path manipulation and display-name resolution.
Acts as an abstraction over the 'os' module to ensure uniform behavior
across Windows and Unix-like systems.
"""

import os
from typing import Optional

from icounter.domain.errors import PathEncodingError

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "icounter"
UNIX_APP_DIR_NAME = ".icounter"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/icounter
    - Linux/Mac: ~/.icounter

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    # Posix fallback (Linux/Mac)
    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path without trailing separator.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)

# -----------------------------------------------------------------------------
# DISPLAY API
# -----------------------------------------------------------------------------

def display_name(path: str) -> str:
    """
    Resolve the label shown for a directory: its last component, or the
    full path when there is none (e.g. the filesystem root).

    Raises:
        PathEncodingError: If the name holds undecodable bytes.
    """
    name = os.path.basename(path) or path
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        raise PathEncodingError(path) from None
    return name
