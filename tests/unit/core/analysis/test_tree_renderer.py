from __future__ import annotations

"""
Unit tests for the Count Tree Renderer.

Verifies label formatting, count-based ordering, percentages, depth
limiting and the rich/JSON/disk outputs.
"""

import json
from pathlib import Path

import pytest
from rich.console import Console
from rich.tree import Tree as RichTree

from icounter.core.analysis.tree_renderer import (
    build_rich_tree,
    format_node_label,
    render_json,
    render_tree_lines,
    save_tree_to_disk,
    sorted_children,
)
from icounter.domain.count_models import create_success_result
from icounter.domain.errors import PathEncodingError
from icounter.domain.node_models import DirectoryNode


@pytest.fixture
def counted_result(mock_config_dict):
    """
    /data 20
      /data/small 2      (discovered first)
      /data/big 10
        /data/big/inner 4
      /data/mid 2        (ties with small, discovered later)
    Root has 5 direct files: 1 + 5 + 2 + 10 + 2 = 20.
    """
    inner = DirectoryNode(path="/data/big/inner")
    inner.finalize(4)
    nodes = {
        "/data": DirectoryNode(path="/data", children=["/data/small", "/data/big", "/data/mid"], count=6),
        "/data/small": DirectoryNode(path="/data/small", count=2),
        "/data/big": DirectoryNode(path="/data/big", children=["/data/big/inner"], count=6),
        "/data/big/inner": inner,
        "/data/mid": DirectoryNode(path="/data/mid", count=2),
    }
    return create_success_result(mock_config_dict, "/data", nodes, depth_limit=2, deferred=1)


def _resolve(result):
    from icounter.core.analysis.rollup import rollup
    rollup(result.nodes, result.root)
    return result


def test_format_node_label() -> None:
    assert format_node_label("src", 12, 40.0, show_percent=False) == "src 12"
    assert format_node_label("src", 12, 40.0, show_percent=True) == "src 12 (40%)"
    assert format_node_label("src", 1, 33.3333, show_percent=True) == "src 1 (33%)"


def test_sorted_children_by_descending_count_stable_on_ties(counted_result) -> None:
    result = _resolve(counted_result)
    assert sorted_children(result.nodes, "/data") == ["/data/big", "/data/small", "/data/mid"]


def test_depth_zero_renders_only_the_root(counted_result) -> None:
    result = _resolve(counted_result)
    assert render_tree_lines(result, depth=0, show_percent=False) == ["data 20"]


def test_depth_one_renders_direct_children(counted_result) -> None:
    result = _resolve(counted_result)

    lines = render_tree_lines(result, depth=1, show_percent=True)

    assert lines == [
        "data 20 (100%)",
        "├── big 10 (50%)",
        "├── small 2 (10%)",
        "└── mid 2 (10%)",
    ]


def test_depth_two_renders_nested_connectors(counted_result) -> None:
    result = _resolve(counted_result)

    lines = render_tree_lines(result, depth=2, show_percent=False)

    assert lines == [
        "data 20",
        "├── big 10",
        "│   └── inner 4",
        "├── small 2",
        "└── mid 2",
    ]


def test_rendering_rolls_up_pending_nodes(counted_result) -> None:
    """Children that were never summed are rolled up on demand."""
    result = counted_result
    result.nodes["/data"].finalize(20)

    lines = render_tree_lines(result, depth=1, show_percent=False)

    assert "├── big 10" in lines
    assert result.nodes["/data/big"].finalized is True


def test_rich_tree_matches_plain_structure(counted_result) -> None:
    result = _resolve(counted_result)

    tree = build_rich_tree(result, depth=2, show_percent=True)

    assert isinstance(tree, RichTree)
    assert tree.label.plain == "data 20 (100%)"
    assert [child.label.plain for child in tree.children] == [
        "big 10 (50%)", "small 2 (10%)", "mid 2 (10%)",
    ]
    assert tree.children[0].children[0].label.plain == "inner 4 (20%)"

    console = Console(record=True, width=80, color_system=None)
    console.print(tree)
    text = console.export_text()
    assert "inner 4 (20%)" in text


def test_json_rendering(counted_result) -> None:
    result = _resolve(counted_result)

    payload = render_json(result, depth=1)

    assert payload["name"] == "data"
    assert payload["count"] == 20
    assert payload["percent"] == 100.0
    assert [c["name"] for c in payload["children"]] == ["big", "small", "mid"]
    assert payload["children"][0]["children"] == []
    json.dumps(payload)


def test_filesystem_root_displays_full_path(mock_config_dict) -> None:
    root = DirectoryNode(path="/")
    root.finalize(1)
    result = create_success_result(mock_config_dict, "/", {"/": root}, depth_limit=1, deferred=0)

    assert render_tree_lines(result, depth=0, show_percent=False) == ["/ 1"]


def test_undecodable_name_raises(mock_config_dict) -> None:
    bad = "/data/caf\udce9"
    root = DirectoryNode(path="/data", children=[bad], count=1)
    child = DirectoryNode(path=bad)
    root.finalize(2)
    child.finalize(1)
    result = create_success_result(mock_config_dict, "/data", {"/data": root, bad: child}, 1, 0)

    with pytest.raises(PathEncodingError) as exc_info:
        render_tree_lines(result, depth=1, show_percent=False)

    assert exc_info.value.path == bad


def test_save_tree_to_disk_creates_parents(tmp_path: Path) -> None:
    target = tmp_path / "out" / "tree.txt"

    save_tree_to_disk(str(target), ["data 20", "└── big 10"])

    assert target.read_text(encoding="utf-8") == "data 20\n└── big 10\n"


def test_save_tree_to_disk_logs_failures(tmp_path: Path, caplog) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")

    save_tree_to_disk(str(blocker / "tree.txt"), ["x"])

    assert any("Failed to save tree" in r.getMessage() for r in caplog.records)
