from __future__ import annotations

"""
Unit tests for the hidden-entry filter.
"""

import pytest

from icounter.core.pipeline.components.filters import is_hidden, visible_entries


@pytest.mark.parametrize("name, expected", [
    (".secret", True),
    (".git", True),
    ("..", True),
    (".", False),
    ("visible", False),
    ("file.txt", False),
    ("trailing.", False),
    ("", False),
])
def test_is_hidden(name, expected):
    """Hidden means a leading dot, except the bare '.' entry."""
    assert is_hidden(name) is expected


def test_visible_entries_filters_and_keeps_order():
    names = ["b", ".hidden", "a", ".config"]

    assert visible_entries(names, show_hidden=False) == ["b", "a"]
    assert visible_entries(names, show_hidden=True) == names


def test_visible_entries_returns_new_list():
    """Callers assign into os.walk's list; the input must not be aliased."""
    names = ["a"]
    out = visible_entries(names, show_hidden=True)
    out.append("b")
    assert names == ["a"]
