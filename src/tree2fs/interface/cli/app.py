from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration merging
(defaults, saved configuration, command-line overrides), pipeline execution
and result rendering.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from tree2fs.core.pipeline.engine import run_pipeline
from tree2fs.core.pipeline.validator import validate_config
from tree2fs.domain.build_models import BuildResult
from tree2fs.domain.config import get_default_config, load_config, save_config
from tree2fs.infra.logging import LoggingConfig, configure_logging, get_logger
from tree2fs.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 failure, 2 missing input,
             130 interrupted).
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    configure_logging(LoggingConfig.for_cli(debug=args.debug, log_file=args.log_file))

    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))

    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    if args.save_config:
        try:
            save_config(clean_conf)
        except OSError as e:
            logger.error(f"Could not save configuration: {e}")

    tree_file = clean_conf["tree_file"]
    if not tree_file:
        parser.print_usage(sys.stderr)
        print("ERROR: TREE_FILE is required.", file=sys.stderr)
        return 2
    if not os.path.isfile(tree_file):
        print(f"ERROR: Tree file does not exist: {tree_file}", file=sys.stderr)
        return 2

    try:
        result = run_pipeline(clean_conf, reporter=print)
    except KeyboardInterrupt:
        print("Interrupted by user.", file=sys.stderr)
        return 130

    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)

    return 0 if result.ok else 1

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge override values into the base configuration.

    None means "not given on the command line" and never overwrites.
    """
    out = dict(base)
    for k, v in overrides.items():
        if k in out and v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: BuildResult) -> None:
    """Render a BuildResult as the terminal summary block."""
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return

    dirs, files, total, dry_run = result.summary.as_tuple()
    prefix = "[DRY RUN] " if dry_run else ""

    print(f"\n{prefix}Summary:")
    print(f"  Directories: {dirs}")
    print(f"  Files: {files}")
    print(f"  Total: {total}")

    if result.warnings:
        print(f"  Skipped/adjusted lines: {len(result.warnings)}")

    if dry_run:
        print("\nRun without --dry-run to actually create the structure.")


if __name__ == "__main__":
    sys.exit(main())
