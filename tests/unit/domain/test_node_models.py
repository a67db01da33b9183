from __future__ import annotations

"""
Unit tests for Domain Models.

Verifies:
1. The PENDING -> FINALIZED node state machine.
2. CountResult factories (Success/Error) and immutability.
3. Error messages carry the offending path.
"""

import dataclasses

import pytest

from icounter.domain.count_models import (
    CountResult,
    create_error_result,
    create_success_result,
)
from icounter.domain.errors import (
    MissingNodeError,
    MissingParentError,
    NodeStateError,
    PathEncodingError,
    SubtreeCountError,
)
from icounter.domain.node_models import DirectoryNode, NodeState, detach_node


def test_new_node_defaults() -> None:
    node = DirectoryNode(path="/data")

    assert node.count == 1
    assert node.children == []
    assert node.state is NodeState.PENDING
    assert node.finalized is False


def test_add_file_increments_count() -> None:
    node = DirectoryNode(path="/data")
    node.add_file()
    node.add_file()
    assert node.count == 3


def test_finalize_is_one_way() -> None:
    node = DirectoryNode(path="/data")

    assert node.finalize(42) == 42
    assert node.finalized is True

    with pytest.raises(NodeStateError) as exc_info:
        node.finalize(7)

    assert node.count == 42
    assert exc_info.value.path == "/data"


def test_children_lists_are_not_shared() -> None:
    a = DirectoryNode(path="/a")
    b = DirectoryNode(path="/b")
    a.children.append("/a/x")
    assert b.children == []


def test_create_success_result_populates_fields(mock_config_dict) -> None:
    root = DirectoryNode(path="/r")
    root.finalize(9)

    result = create_success_result(
        cfg=mock_config_dict,
        root="/r",
        nodes={"/r": root},
        depth_limit=1,
        deferred=0,
        summary_extra={"total": 9},
    )

    assert isinstance(result, CountResult)
    assert result.ok is True
    assert result.error == ""
    assert result.total == 9
    assert result.summary["total"] == 9
    assert result.show_hidden is False


def test_create_error_result_has_no_tree(mock_config_dict) -> None:
    mock_config_dict["depth"] = 3

    result = create_error_result("disk error", mock_config_dict, "/r")

    assert result.ok is False
    assert result.error == "disk error"
    assert result.nodes == {}
    assert result.total == 0
    assert result.depth_limit == 3


def test_count_result_is_frozen(mock_config_dict) -> None:
    result = create_error_result("boom", mock_config_dict, "/r")
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.ok = True  # type: ignore[misc]


def test_errors_name_the_path() -> None:
    cause = OSError(5, "Input/output error")

    assert "/a/b" in str(MissingParentError("/a/b/c", "/a/b"))
    err = SubtreeCountError("/mnt/disk", cause)
    assert "/mnt/disk" in str(err)
    assert err.cause is cause
    assert "bad" in str(PathEncodingError("/x/bad"))


def test_detach_node_unlinks_and_closes_at_zero() -> None:
    nodes = {
        "/r": DirectoryNode(path="/r", children=["/r/a", "/r/locked"]),
        "/r/a": DirectoryNode(path="/r/a"),
        "/r/locked": DirectoryNode(path="/r/locked"),
    }

    detach_node(nodes, "/r/locked")

    assert nodes["/r"].children == ["/r/a"]
    assert nodes["/r/locked"].count == 0
    assert nodes["/r/locked"].finalized is True


def test_detach_node_requires_known_paths() -> None:
    nodes = {"/r/orphan": DirectoryNode(path="/r/orphan")}

    with pytest.raises(MissingNodeError):
        detach_node(nodes, "/r/ghost")
    with pytest.raises(MissingParentError):
        detach_node(nodes, "/r/orphan")
