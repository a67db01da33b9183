from __future__ import annotations

"""
Directory Hierarchy Data Models.

Provides the per-directory node used by the counting engine and the
path-keyed map that acts as the arena for the whole hierarchy. Child
references are plain keys into the map, so no back-references exist.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List

from icounter.domain.errors import MissingNodeError, MissingParentError, NodeStateError

# -----------------------------------------------------------------------------
# NODE STATE MACHINE
# -----------------------------------------------------------------------------

class NodeState(Enum):
    """Lifecycle of a node count. PENDING -> FINALIZED, exactly once."""
    PENDING = "pending"
    FINALIZED = "finalized"

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass
class DirectoryNode:
    """
    Represents one visited directory in the counted hierarchy.

    Attributes:
        path: Absolute path of the directory (also its key in the NodeMap).
        children: Paths of direct child directories, in discovery order.
        count: Running inode count. Starts at 1 (the directory itself).
        state: PENDING until the count is the complete subtree total.
    """
    path: str
    children: List[str] = field(default_factory=list)
    count: int = 1
    state: NodeState = NodeState.PENDING

    @property
    def finalized(self) -> bool:
        return self.state is NodeState.FINALIZED

    def add_file(self) -> None:
        """Account for one direct file child found during traversal."""
        self.count += 1

    def finalize(self, count: int) -> int:
        """
        Store the complete subtree total and close the node.

        Args:
            count: Final inode count for this directory's subtree.

        Returns:
            int: The stored count.

        Raises:
            NodeStateError: If the node was already finalized.
        """
        if self.finalized:
            raise NodeStateError(self.path)
        self.count = count
        self.state = NodeState.FINALIZED
        return count


NodeMap = Dict[str, DirectoryNode]

# -----------------------------------------------------------------------------
# MAP OPERATIONS
# -----------------------------------------------------------------------------

def detach_node(nodes: NodeMap, path: str) -> None:
    """
    Remove an unreadable directory from the counted hierarchy.

    The node is unlinked from its parent and closed at zero, so totals
    read as if the directory were absent. The node itself stays in the map.

    Raises:
        MissingNodeError: If 'path' is not in the map.
        MissingParentError: If its parent is not in the map.
    """
    node = nodes.get(path)
    if node is None:
        raise MissingNodeError(path)
    parent = os.path.dirname(path)
    parent_node = nodes.get(parent)
    if parent_node is None:
        raise MissingParentError(path, parent)
    if path in parent_node.children:
        parent_node.children.remove(path)
    node.finalize(0)
