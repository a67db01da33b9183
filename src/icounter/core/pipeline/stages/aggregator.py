from __future__ import annotations

"""
Parallel Subtree Aggregation.

Fans the deferred directories out to a thread pool, then folds every
result back into the map from the calling thread once all workers are done.
Workers never see the map.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Dict, List, Optional, Tuple

from icounter.core.services.subtree_counter import count_dir_inodes
from icounter.domain.errors import MissingNodeError
from icounter.domain.node_models import NodeMap, detach_node

logger = logging.getLogger(__name__)


def aggregate_deferred(
        nodes: NodeMap,
        deferred: List[str],
        show_hidden: bool,
        max_workers: Optional[int] = None,
) -> int:
    """
    Count every deferred subtree concurrently and finalize its node.

    A deferred directory that cannot be listed at all is detached from
    its parent, matching how the bounded traversal treats it.

    Args:
        nodes: Hierarchy map; each deferred path must already be a key.
        deferred: Directories at the traversal depth limit.
        show_hidden: Whether hidden entries are included.
        max_workers: Thread pool size; None lets the executor decide.

    Returns:
        int: Number of nodes finalized.

    Raises:
        SubtreeCountError: If any single subtree count fails.
        MissingNodeError: If a deferred path has no node.
    """
    if not deferred:
        return 0

    counts = _count_in_parallel(deferred, show_hidden, max_workers)

    # Target nodes are disjoint, application order is irrelevant
    for path, count in counts:
        node = nodes.get(path)
        if node is None:
            raise MissingNodeError(path)
        if count is None:
            detach_node(nodes, path)
        else:
            node.finalize(node.count + count)

    return len(counts)


def _count_in_parallel(
        deferred: List[str],
        show_hidden: bool,
        max_workers: Optional[int],
) -> List[Tuple[str, Optional[int]]]:
    """Run the subtree counter over each path and collect owned results."""
    logger.debug(f"Dispatching {len(deferred)} subtree counts to worker threads.")

    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="SubtreeCounter") as executor:
        futures: Dict[str, Future[Optional[int]]] = {
            path: executor.submit(count_dir_inodes, path, show_hidden)
            for path in deferred
        }
        # result() re-raises the worker's SubtreeCountError, already tagged
        return [(path, future.result()) for path, future in futures.items()]
