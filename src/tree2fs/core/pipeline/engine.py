from __future__ import annotations

"""
Pipeline Engine.

Drives a complete run: parse the tree file, decide whether the root segment
is skipped, materialize the structure and package the outcome as a
BuildResult. Fatal parse and build errors become error results carrying the
underlying cause; nothing is retried.
"""

import logging
from typing import Any, Dict, Optional

from tree2fs.core.building.materializer import FilesystemMaterializer, Reporter
from tree2fs.core.parsing.tree_parser import DiagnosticsSink, TreeParser
from tree2fs.domain.build_models import BuildResult, create_error_result, create_success_result
from tree2fs.domain.errors import FilesystemBuildError, TreeParseError
from tree2fs.domain.tree_models import ParseResult

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def run_pipeline(
        config: Dict[str, Any],
        *,
        reporter: Optional[Reporter] = None,
        diagnostics: Optional[DiagnosticsSink] = None,
) -> BuildResult:
    """
    Execute parse and build for a validated configuration.

    Args:
        config: Normalized configuration (see validate_config).
        reporter: Sink for verbose materialization lines.
        diagnostics: Sink for tolerated parse problems.

    Returns:
        BuildResult: Success or error result; never raises for tree or
                     filesystem failures.
    """
    tree_file = config.get("tree_file", "")
    if not tree_file:
        return create_error_result("No tree file provided.", config)

    parser = TreeParser(
        indent_width=int(config.get("indent_width", 4)),
        diagnostics=diagnostics,
        strict_roots=bool(config.get("strict_roots", False)),
    )

    logger.info(f"Parsing tree file: {tree_file}")
    try:
        parsed = parser.build_tree(tree_file)
    except TreeParseError as e:
        logger.error(f"Failed to parse tree file: {e}")
        return create_error_result(f"Failed to parse tree file: {e}", config)

    skip_root = resolve_skip_root(config.get("skip_root"), parsed)
    if skip_root:
        logger.info(f"Skipping root segment '{parsed.root.name}'")

    materializer = FilesystemMaterializer(
        config.get("base_dir", "."),
        dry_run=bool(config.get("dry_run", False)),
        verbose=bool(config.get("verbose", False)),
        reporter=reporter,
    )

    try:
        materializer.build(parsed.root, skip_root)
    except FilesystemBuildError as e:
        logger.error(f"Failed to build filesystem: {e}")
        return create_error_result(
            f"Failed to build filesystem: {e}",
            config,
            skip_root=skip_root,
            root_name=parsed.root_name,
            warnings=parsed.warnings,
        )

    return create_success_result(
        config,
        skip_root=skip_root,
        root_name=parsed.root_name,
        created_dirs=materializer.created_dirs,
        created_files=materializer.created_files,
        warnings=parsed.warnings,
    )


def resolve_skip_root(requested: Optional[bool], parsed: ParseResult) -> bool:
    """
    Apply the skip-root policy.

    A file root is never skipped. Otherwise an explicit True/False wins, and
    without one the root is skipped only when the input had exactly one
    top-level entry.
    """
    if not parsed.root.entry.is_directory:
        return False
    if requested is not None:
        return bool(requested)
    return parsed.has_single_root
