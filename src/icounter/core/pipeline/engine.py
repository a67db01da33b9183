from __future__ import annotations

"""
Core counting pipeline.

This module coordinates the whole counting workflow in strict phases:
1. Validates configuration and the root path.
2. Builds the bounded hierarchy map (single thread).
3. Counts deferred subtrees in parallel and folds the results in.
4. Rolls the totals up to the root.

The map is owned by the calling thread for the whole run; only step 3
uses worker threads, and they never touch it.
"""

import logging
import os
import time
from typing import Any, Dict, Optional

from icounter.core.analysis.hierarchy_builder import build_hierarchy
from icounter.core.analysis.rollup import rollup
from icounter.core.pipeline.stages.aggregator import aggregate_deferred
from icounter.core.pipeline.stages.validator import validate_config
from icounter.domain.count_models import (
    CountResult,
    create_error_result,
    create_success_result,
)
from icounter.domain.errors import IcounterError
from icounter.infra.fs import normalize_path

logger = logging.getLogger(__name__)


def run_count(
        config: Optional[Dict[str, Any]],
        *,
        max_workers: Optional[int] = None,
) -> CountResult:
    """
    Execute the full counting pipeline.

    Args:
        config: The configuration dictionary (raw or partial).
        max_workers: Optional thread pool size override. Falls back to the
                     'max_workers' config key (0 means executor default).

    Returns:
        CountResult: Object containing status, the finalized map and metrics.
    """
    started = time.perf_counter()

    # -------------------------------------------------------------------------
    # 1) Config & Path Normalization
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config if config is not None else {}, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    root = normalize_path(cfg["root_path"], os.getcwd())
    if not os.path.isdir(root):
        msg = f"Invalid root directory: {root}"
        logger.error(msg)
        return create_error_result(msg, cfg, root)

    show_hidden = cfg["show_hidden"]
    # Parallelism always gets at least one level of children to work on
    depth_limit = max(cfg["depth"], 1)
    workers = max_workers if max_workers is not None else (cfg["max_workers"] or None)

    logger.info(f"Counting inodes under: {root}")

    try:
        # ---------------------------------------------------------------------
        # 2) Bounded traversal
        # ---------------------------------------------------------------------
        nodes, deferred = build_hierarchy(root, depth_limit, show_hidden)
        t_build = time.perf_counter()

        # ---------------------------------------------------------------------
        # 3) Parallel fill-in
        # ---------------------------------------------------------------------
        finalized = aggregate_deferred(nodes, deferred, show_hidden, max_workers=workers)
        t_parallel = time.perf_counter()

        # ---------------------------------------------------------------------
        # 4) Rollup
        # ---------------------------------------------------------------------
        total = rollup(nodes, root)
    except IcounterError as e:
        logger.error(str(e))
        return create_error_result(str(e), cfg, root)

    elapsed = time.perf_counter() - started
    logger.debug(
        f"Phases: build {t_build - started:.3f}s, "
        f"parallel {t_parallel - t_build:.3f}s ({finalized} subtrees), "
        f"total {elapsed:.3f}s"
    )

    summary = {
        "total": total,
        "directories": len(nodes),
        "deferred": len(deferred),
        "elapsed_seconds": round(elapsed, 3),
    }
    logger.info(f"Counted {total} inodes in {elapsed:.2f}s.")
    return create_success_result(cfg, root, nodes, depth_limit, len(deferred), summary)
