from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the raw argparse namespace
into domain configuration overrides.
"""

import argparse
from typing import Any, Dict

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the icounter CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="icounter",
        description="Count inodes in a directory structure.",
    )

    p.add_argument(
        "root",
        nargs="?",
        default=None,
        help="Root to count inodes from (defaults to the current directory).",
    )

    # --- Counting ---
    p.add_argument(
        "-s", "--show-hidden",
        action="store_true",
        help="Count hidden files.",
    )
    p.add_argument(
        "-w", "--workers",
        dest="max_workers",
        type=int,
        default=None,
        help="Number of worker threads for subtree counts.",
    )

    # --- Display ---
    p.add_argument(
        "-d", "--depth",
        type=int,
        default=None,
        help="Max depth to display counts per directory (default: 0).",
    )
    p.add_argument(
        "-p", "--show-percent",
        action="store_true",
        help="Show percentage of total inode count for each directory.",
    )
    p.add_argument(
        "-i", "--ignore-colors",
        action="store_true",
        help="Print without colored output.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the counted tree as JSON.",
    )
    p.add_argument(
        "--tree-file",
        dest="tree_file",
        default=None,
        help="Also save the plain-text tree to this file.",
    )

    # --- Configuration and Diagnostics ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the stored configuration.",
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help="Store the effective options as the new defaults.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration and exit.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Write diagnostics to a rotating log file.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a domain configuration dictionary.

    Flags that were not given map to None so they do not mask stored values.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {
        "root_path": args.root,
        "depth": args.depth,
        "max_workers": args.max_workers,
    }

    if args.show_hidden:
        overrides["show_hidden"] = True
    if args.show_percent:
        overrides["show_percent"] = True
    if args.ignore_colors:
        overrides["ignore_colors"] = True

    return overrides
