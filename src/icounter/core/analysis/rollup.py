from __future__ import annotations

"""
Bottom-up Count Rollup.

Turns the partially populated NodeMap into subtree totals. Finalized nodes
are returned as-is, so repeated calls during rendering only do work for
nodes that have not been summed yet. The walk uses an explicit stack, so
arbitrarily deep hierarchies do not hit the interpreter recursion limit.
"""

from typing import List, Tuple

from icounter.domain.errors import MissingNodeError
from icounter.domain.node_models import DirectoryNode, NodeMap


def rollup(nodes: NodeMap, path: str) -> int:
    """
    Return the total inode count of a directory, computing it if needed.

    A pending node holds its self count plus its direct files; its total is
    that value plus the rolled-up totals of its child directories.

    Args:
        nodes: Hierarchy map produced by the traversal and aggregator.
        path: Directory whose total is requested.

    Returns:
        int: Finalized inode count of the directory's subtree.

    Raises:
        MissingNodeError: If 'path' or one of its children is not in the map.
    """
    top = _lookup(nodes, path)
    if top.finalized:
        return top.count

    # (node, children_pushed) pairs; a node is summed on its second visit
    stack: List[Tuple[DirectoryNode, bool]] = [(top, False)]
    while stack:
        node, children_pushed = stack.pop()
        if node.finalized:
            continue

        if children_pushed:
            node.finalize(node.count + sum(nodes[child].count for child in node.children))
            continue

        stack.append((node, True))
        for child in node.children:
            child_node = _lookup(nodes, child)
            if not child_node.finalized:
                stack.append((child_node, False))

    return top.count


def _lookup(nodes: NodeMap, path: str) -> DirectoryNode:
    node = nodes.get(path)
    if node is None:
        raise MissingNodeError(path)
    return node
