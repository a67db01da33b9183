from __future__ import annotations

"""
Count Tree Renderer.

Converts a finalized CountResult into visual representations: plain ASCII
lines, a styled 'rich' tree, or a nested dictionary for JSON output.
Children are always shown largest first.
"""

import logging
import os
from typing import Any, Dict, List

from rich.text import Text
from rich.tree import Tree as RichTree

from icounter.core.analysis.rollup import rollup
from icounter.domain.count_models import CountResult
from icounter.domain.errors import MissingNodeError
from icounter.domain.node_models import NodeMap
from icounter.infra.fs import display_name

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# STYLES
# -----------------------------------------------------------------------------

NAME_STYLE = "bold blue"
COUNT_STYLE = "bold red"
PERCENT_STYLE = "yellow"
GUIDE_STYLE = "blue"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def format_node_label(name: str, count: int, percent: float, show_percent: bool) -> str:
    """Build the plain label of a tree entry."""
    if show_percent:
        return f"{name} {count} ({percent:.0f}%)"
    return f"{name} {count}"


def sorted_children(nodes: NodeMap, path: str) -> List[str]:
    """
    Return the child directories of 'path' ordered by descending count.

    Ties keep discovery order. Each child is rolled up first, which is a
    no-op for nodes that are already finalized.
    """
    node = nodes.get(path)
    if node is None:
        raise MissingNodeError(path)
    return sorted(node.children, key=lambda child: rollup(nodes, child), reverse=True)


def render_tree_lines(result: CountResult, depth: int, show_percent: bool) -> List[str]:
    """
    Render the counted hierarchy as plain text lines.

    Depth 0 yields only the root line. Otherwise the root is followed by
    an ASCII tree (├──, └──) of its directories down to 'depth' levels.

    Args:
        result: A successful counting result.
        depth: Number of directory levels to display.
        show_percent: Append each entry's share of the root count.

    Returns:
        List[str]: Visual lines of the tree.
    """
    total = result.total
    lines = [format_node_label(display_name(result.root), total, 100.0, show_percent)]
    if depth > 0:
        _render_children(result.nodes, result.root, lines, "", depth, total, show_percent)
    return lines


def build_rich_tree(result: CountResult, depth: int, show_percent: bool) -> RichTree:
    """
    Build the styled equivalent of render_tree_lines() as a rich Tree.

    Names are bold blue (underlined when percentages are shown), counts
    bold red and percentages yellow.
    """
    total = result.total
    tree = RichTree(
        _styled_label(display_name(result.root), total, 100.0, show_percent),
        guide_style=GUIDE_STYLE,
    )
    if depth > 0:
        _add_rich_children(result.nodes, result.root, tree, depth, total, show_percent)
    return tree


def render_json(result: CountResult, depth: int) -> Dict[str, Any]:
    """
    Render the counted hierarchy as a nested, JSON-serializable dictionary.

    Args:
        result: A successful counting result.
        depth: Number of directory levels to include under the root.

    Returns:
        Dict[str, Any]: Node with name, path, count, percent and children.
    """
    return _json_node(result.nodes, result.root, depth, result.total)


def save_tree_to_disk(save_path: str, lines: List[str]) -> None:
    """Safely persist tree lines to the filesystem."""
    try:
        out_dir = os.path.dirname(os.path.abspath(save_path))
        os.makedirs(out_dir, exist_ok=True)
        with open(save_path, "w", encoding="utf-8") as f:
            f.write("\n".join(lines) + "\n")
        logger.info(f"Tree saved to file: {save_path}")
    except OSError as e:
        logger.error(f"Failed to save tree to '{save_path}': {e}")

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _percent(count: int, total: int) -> float:
    return (count / total) * 100.0 if total else 0.0


def _styled_label(name: str, count: int, percent: float, show_percent: bool) -> Text:
    """Styled counterpart of format_node_label()."""
    name_style = f"{NAME_STYLE} underline" if show_percent else NAME_STYLE
    label = Text.assemble((name, name_style), " ", (str(count), COUNT_STYLE))
    if show_percent:
        label.append(" (")
        label.append(f"{percent:.0f}%", style=PERCENT_STYLE)
        label.append(")")
    return label


def _render_children(
        nodes: NodeMap,
        path: str,
        lines: List[str],
        prefix: str,
        depth: int,
        total: int,
        show_percent: bool,
) -> None:
    """Recursively append the children of 'path' using ASCII connectors."""
    children = sorted_children(nodes, path)
    last_index = len(children) - 1

    for i, child in enumerate(children):
        is_last = (i == last_index)
        connector = "└── " if is_last else "├── "
        count = nodes[child].count
        label = format_node_label(display_name(child), count, _percent(count, total), show_percent)
        lines.append(f"{prefix}{connector}{label}")

        if depth > 1:
            new_prefix = prefix + ("    " if is_last else "│   ")
            _render_children(nodes, child, lines, new_prefix, depth - 1, total, show_percent)


def _add_rich_children(
        nodes: NodeMap,
        path: str,
        branch: RichTree,
        depth: int,
        total: int,
        show_percent: bool,
) -> None:
    for child in sorted_children(nodes, path):
        count = nodes[child].count
        sub = branch.add(_styled_label(display_name(child), count, _percent(count, total), show_percent))
        if depth > 1:
            _add_rich_children(nodes, child, sub, depth - 1, total, show_percent)


def _json_node(nodes: NodeMap, path: str, depth: int, total: int) -> Dict[str, Any]:
    count = rollup(nodes, path)
    children: List[Dict[str, Any]] = []
    if depth > 0:
        children = [_json_node(nodes, child, depth - 1, total) for child in sorted_children(nodes, path)]
    return {
        "name": display_name(path),
        "path": path,
        "count": count,
        "percent": round(_percent(count, total), 2),
        "children": children,
    }
