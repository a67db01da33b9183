from __future__ import annotations

"""
Count Result Data Models.

Defines the immutable result exchanged between the counting engine and
the interface layers, plus the factory functions that build it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from icounter.domain.node_models import NodeMap

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class CountResult:
    """
    Unified result object of a complete counting run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        root: Normalized absolute root directory.
        nodes: Finalized hierarchy map (empty on failure).
        show_hidden: Whether hidden entries were counted.
        depth_limit: Depth of the bounded traversal (at least 1).
        deferred: Number of directories counted by parallel workers.
        summary: Execution metrics.
    """
    ok: bool
    error: str

    root: str
    nodes: NodeMap = field(default_factory=dict)

    show_hidden: bool = False
    depth_limit: int = 1
    deferred: int = 0

    summary: Dict[str, Any] = field(default_factory=dict)

    @property
    def total(self) -> int:
        node = self.nodes.get(self.root)
        return node.count if (self.ok and node is not None) else 0

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        cfg: Dict[str, Any],
        root: str,
        summary_extra: Optional[Dict[str, Any]] = None
) -> CountResult:
    """
    Create a failed counting result. No partial hierarchy is exposed.

    Args:
        error: Detailed error description.
        cfg: The configuration used during the failed run.
        root: The target root directory.
        summary_extra: Additional metadata for the summary payload.

    Returns:
        CountResult: An immutable error result object.
    """
    return CountResult(
        ok=False,
        error=error,
        root=root,
        show_hidden=bool(cfg.get("show_hidden", False)),
        depth_limit=max(int(cfg.get("depth", 0) or 0), 1),
        summary=summary_extra or {},
    )


def create_success_result(
        cfg: Dict[str, Any],
        root: str,
        nodes: NodeMap,
        depth_limit: int,
        deferred: int,
        summary_extra: Optional[Dict[str, Any]] = None
) -> CountResult:
    """
    Create a successful counting result.

    Args:
        cfg: Final configuration used during execution.
        root: Normalized root directory.
        nodes: Hierarchy map with the root finalized.
        depth_limit: Depth of the bounded traversal.
        deferred: Number of directories handed to parallel workers.
        summary_extra: Final execution metrics.

    Returns:
        CountResult: An immutable success result object.
    """
    return CountResult(
        ok=True,
        error="",
        root=root,
        nodes=nodes,
        show_hidden=bool(cfg.get("show_hidden", False)),
        depth_limit=depth_limit,
        deferred=deferred,
        summary=summary_extra or {},
    )
