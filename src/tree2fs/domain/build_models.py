from __future__ import annotations

"""
Build Domain Data Models.

Defines the structures used to communicate materialization outcomes
between the pipeline engine and the interface layer.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class BuildSummary:
    """
    Counters reported by the materializer after a traversal.

    Attributes:
        dirs: Distinct directories recorded.
        files: Distinct files recorded.
        dry_run: Whether the traversal was a simulation.
    """
    dirs: int
    files: int
    dry_run: bool = False

    @property
    def total(self) -> int:
        return self.dirs + self.files

    def as_tuple(self) -> Tuple[int, int, int, bool]:
        return self.dirs, self.files, self.total, self.dry_run


@dataclass(frozen=True)
class BuildResult:
    """
    Unified result of a complete tree-to-filesystem run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        tree_file: Source tree file that was parsed.
        base_dir: Directory under which the structure was created.
        dry_run: Whether the run was a simulation.
        skip_root: Effective skip-root decision.
        root_name: Single top-level name reported by the parser, if any.
        dirs_created: Number of distinct directories recorded.
        files_created: Number of distinct files recorded.
        created_dirs: Recorded directory paths.
        created_files: Recorded file paths.
        warnings: Diagnostics for tolerated input lines.
    """
    ok: bool
    error: str

    tree_file: str
    base_dir: str
    dry_run: bool

    skip_root: bool = False
    root_name: Optional[str] = None

    dirs_created: int = 0
    files_created: int = 0
    created_dirs: List[str] = field(default_factory=list)
    created_files: List[str] = field(default_factory=list)

    warnings: List[str] = field(default_factory=list)

    @property
    def summary(self) -> BuildSummary:
        return BuildSummary(self.dirs_created, self.files_created, self.dry_run)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_success_result(
        cfg: Dict[str, Any],
        skip_root: bool,
        root_name: Optional[str],
        created_dirs: List[str],
        created_files: List[str],
        warnings: Optional[List[str]] = None,
) -> BuildResult:
    """
    Create a successful build result.

    Args:
        cfg: The validated configuration used for the run.
        skip_root: Effective skip-root decision.
        root_name: Single top-level name, if the parser found one.
        created_dirs: Directory paths recorded by the materializer.
        created_files: File paths recorded by the materializer.
        warnings: Parser diagnostics.

    Returns:
        BuildResult: An immutable success result.
    """
    return BuildResult(
        ok=True,
        error="",
        tree_file=cfg.get("tree_file", ""),
        base_dir=cfg.get("base_dir", ""),
        dry_run=bool(cfg.get("dry_run", False)),
        skip_root=skip_root,
        root_name=root_name,
        dirs_created=len(created_dirs),
        files_created=len(created_files),
        created_dirs=list(created_dirs),
        created_files=list(created_files),
        warnings=list(warnings or []),
    )


def create_error_result(
        error: str,
        cfg: Dict[str, Any],
        skip_root: bool = False,
        root_name: Optional[str] = None,
        warnings: Optional[List[str]] = None,
) -> BuildResult:
    """
    Create a failed build result.

    Args:
        error: Detailed error description, including the underlying cause.
        cfg: The configuration used during the failed run.
        skip_root: Skip-root decision, if one was reached.
        root_name: Single top-level name, if parsing got that far.
        warnings: Parser diagnostics collected before the failure.

    Returns:
        BuildResult: An immutable error result.
    """
    return BuildResult(
        ok=False,
        error=error,
        tree_file=cfg.get("tree_file", ""),
        base_dir=cfg.get("base_dir", ""),
        dry_run=bool(cfg.get("dry_run", False)),
        skip_root=skip_root,
        root_name=root_name,
        warnings=list(warnings or []),
    )
