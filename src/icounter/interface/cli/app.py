from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, merging of configuration
sources (defaults, stored preferences, CLI overrides), pipeline execution
and rendering of the counted tree.
"""

import json
import os
import sys
from typing import Any, Dict, List, Optional

from rich.console import Console

from icounter.core.analysis.tree_renderer import (
    build_rich_tree,
    render_json,
    render_tree_lines,
    save_tree_to_disk,
)
from icounter.core.pipeline.engine import run_count
from icounter.core.pipeline.stages.validator import validate_config
from icounter.domain.config import get_default_config, load_config, save_config
from icounter.domain.count_models import CountResult
from icounter.domain.errors import PathEncodingError
from icounter.infra.fs import normalize_path
from icounter.infra.logging import LoggingConfig, configure_logging, get_logger
from icounter.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 counting failure, 2 invalid
             root, 130 interrupted).
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # Diagnostics (permission warnings, errors) go to stderr
    log_level = "DEBUG" if args.debug else "WARNING"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))

    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    if args.save_config:
        save_config(clean_conf)

    # Pre-flight root verification
    root = normalize_path(clean_conf["root_path"], os.getcwd())
    if not os.path.isdir(root):
        msg = f"Root path does not exist or is not a directory: {root}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 2

    try:
        result = run_count(clean_conf)
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return 130

    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return 1

    try:
        _print_result(result, clean_conf, args.json_output, args.tree_file)
    except PathEncodingError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    return 0

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge known override keys whose value is not None.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    for k, v in overrides.items():
        if k in out and v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _print_result(
        result: CountResult,
        conf: Dict[str, Any],
        json_output: bool,
        tree_file: Optional[str],
) -> None:
    """Write the counted tree to stdout in the requested format."""
    depth = conf["depth"]
    show_percent = conf["show_percent"]

    if tree_file:
        save_tree_to_disk(tree_file, render_tree_lines(result, depth, show_percent))

    if json_output:
        print(json.dumps(render_json(result, depth), ensure_ascii=False, indent=2))
        return

    if conf["ignore_colors"]:
        print("\n".join(render_tree_lines(result, depth, show_percent)))
        return

    console = Console(highlight=False)
    console.print(build_rich_tree(result, depth, show_percent))


if __name__ == "__main__":
    sys.exit(main())
