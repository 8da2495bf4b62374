from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed argparse
namespace into configuration overrides.
"""

import argparse
from typing import Any, Dict

from tree2fs import __version__
from tree2fs.domain.constants import DEFAULT_INDENT_WIDTH

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the tree2fs CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="tree2fs",
        description="Create a directory/file structure from a tree diagram.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    # --- Input / Output ---
    p.add_argument(
        "tree_file",
        metavar="TREE_FILE",
        nargs="?",
        default=None,
        help="Path to the tree file.",
    )
    p.add_argument(
        "-b", "--base-dir",
        dest="base_dir",
        default=None,
        help="Base directory to create the structure in (default: current directory).",
    )
    p.add_argument(
        "--indent-width",
        dest="indent_width",
        type=int,
        default=None,
        help=f"Characters per nesting level (default: {DEFAULT_INDENT_WIDTH}).",
    )

    # --- Behavior ---
    p.add_argument(
        "--dry-run",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Preview without creating files or directories.",
    )
    p.add_argument(
        "-v", "--verbose",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Print every created (or simulated) entry.",
    )
    root_group = p.add_mutually_exclusive_group()
    root_group.add_argument(
        "--no-skip-root",
        action="store_true",
        help="Always create the top-level directory itself.",
    )
    root_group.add_argument(
        "--skip-root",
        action="store_true",
        help="Always place the root's contents directly under the base directory.",
    )
    root_group.add_argument(
        "--auto-skip-root",
        action="store_true",
        help="Skip the root only when the tree has a single top-level directory (default).",
    )
    p.add_argument(
        "--strict-roots",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Fail on more than one top-level entry instead of warning.",
    )

    # --- Configuration and Diagnostics ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the saved configuration.",
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help="Persist the effective options as the new saved configuration.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration as JSON and exit.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        nargs="?",
        const="",
        default=None,
        help="Also write logs to PATH (default location if PATH is omitted).",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the result as JSON.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Flags that were not given map to None (or are absent) so that saved
    configuration values are preserved by the merge.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {
        "tree_file": args.tree_file,
        "base_dir": args.base_dir,
        "indent_width": args.indent_width,
    }

    for field in ("dry_run", "verbose", "strict_roots"):
        value = getattr(args, field)
        if value is not None:
            overrides[field] = value

    if args.no_skip_root:
        overrides["skip_root"] = False
    elif args.skip_root:
        overrides["skip_root"] = True
    elif args.auto_skip_root:
        overrides["skip_root"] = "auto"

    return overrides
