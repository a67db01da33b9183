from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared filesystem fixtures used across unit and integration tests.
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def mock_config_dict(tmp_path: Path) -> Dict[str, Any]:
    """Return a valid, complete configuration dictionary for testing."""
    return {
        "root_path": str(tmp_path),
        "show_hidden": False,
        "max_workers": 2,
        "depth": 0,
        "show_percent": False,
        "ignore_colors": True,
    }


@pytest.fixture
def simple_tree(tmp_path: Path) -> Path:
    """
    Create the reference layout.

    Structure:
    /root
      a
      b
      /sub
        c
    """
    root = tmp_path / "root"
    root.mkdir()
    (root / "a").write_text("a", encoding="utf-8")
    (root / "b").write_text("b", encoding="utf-8")
    (root / "sub").mkdir()
    (root / "sub" / "c").write_text("c", encoding="utf-8")
    return root


@pytest.fixture
def nested_tree(tmp_path: Path) -> Path:
    """
    Create a deeper layout with hidden entries at several levels.

    Structure:
    /project
      README.md
      .env
      /.git
        config
        /objects
          pack
      /src
        main.py
        util.py
        .cache
        /pkg
          mod.py
          /deep
            leaf.txt
      /docs
        index.md
      /empty
    """
    root = tmp_path / "project"
    (root / ".git" / "objects").mkdir(parents=True)
    (root / "src" / "pkg" / "deep").mkdir(parents=True)
    (root / "docs").mkdir()
    (root / "empty").mkdir()

    files = [
        "README.md",
        ".env",
        ".git/config",
        ".git/objects/pack",
        "src/main.py",
        "src/util.py",
        "src/.cache",
        "src/pkg/mod.py",
        "src/pkg/deep/leaf.txt",
        "docs/index.md",
    ]
    for rel in files:
        (root / rel).write_text("x", encoding="utf-8")
    return root


@pytest.fixture
def skip_if_root() -> None:
    """Permission tests are meaningless when running as a superuser."""
    if hasattr(os, "geteuid") and os.geteuid() == 0:
        pytest.skip("Permission checks are bypassed for the superuser.")
    if os.name == "nt":
        pytest.skip("chmod-based permission tests require POSIX.")
