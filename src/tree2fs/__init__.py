from __future__ import annotations

"""
tree2fs: turn tree diagrams into real directory structures.
"""

__version__ = "1.0.0"

from tree2fs.core.building.materializer import FilesystemMaterializer
from tree2fs.core.parsing.tree_parser import TreeParser
from tree2fs.core.pipeline.engine import run_pipeline
from tree2fs.domain.build_models import BuildResult, BuildSummary
from tree2fs.domain.entry_models import Entry
from tree2fs.domain.errors import (
    DirectoryCreationError,
    EmptyFileError,
    FileCreationError,
    FilesystemBuildError,
    MultipleRootsError,
    NoNodesFoundError,
    OrphanNodeError,
    Tree2FSError,
    TreeParseError,
    TreeReadError,
)
from tree2fs.domain.tree_models import ParseResult, TreeNode

__all__ = [
    "__version__",
    "BuildResult",
    "BuildSummary",
    "DirectoryCreationError",
    "EmptyFileError",
    "Entry",
    "FileCreationError",
    "FilesystemBuildError",
    "FilesystemMaterializer",
    "MultipleRootsError",
    "NoNodesFoundError",
    "OrphanNodeError",
    "ParseResult",
    "Tree2FSError",
    "TreeNode",
    "TreeParseError",
    "TreeParser",
    "TreeReadError",
    "run_pipeline",
]
