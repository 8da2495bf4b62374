from __future__ import annotations

"""
Filesystem Materializer.

Walks a parsed tree in depth-first pre-order and creates the matching
directories and empty files under a base directory. Supports a dry-run mode
that performs the same bookkeeping without touching the disk.
"""

import logging
import os
from typing import Callable, List, Optional, Set, Tuple

from tree2fs.domain.build_models import BuildSummary
from tree2fs.domain.constants import DRY_RUN_PREFIX
from tree2fs.domain.errors import DirectoryCreationError, FileCreationError
from tree2fs.domain.tree_models import TreeNode

logger = logging.getLogger(__name__)

Reporter = Callable[[str], None]

# -----------------------------------------------------------------------------
# MATERIALIZER
# -----------------------------------------------------------------------------

class FilesystemMaterializer:
    """
    Create a directory/file structure from a TreeNode hierarchy.

    Args:
        base_dir: Directory under which paths are resolved.
        dry_run: Simulate creation without filesystem side effects.
        verbose: Report every (simulated) creation through the reporter.
        reporter: Sink for verbose lines; defaults to the module logger.
    """

    def __init__(
            self,
            base_dir: str,
            dry_run: bool = False,
            verbose: bool = False,
            reporter: Optional[Reporter] = None,
    ) -> None:
        self.base_dir = os.fspath(base_dir)
        self.dry_run = dry_run
        self.verbose = verbose
        self._report: Reporter = reporter or logger.info
        self._created_dirs: Set[str] = set()
        self._created_files: Set[str] = set()

    # -------------------------------------------------------------------------
    # PUBLIC API
    # -------------------------------------------------------------------------

    def build(self, root: TreeNode, skip_root: bool) -> Tuple[int, int]:
        """
        Materialize the tree rooted at root.

        Bookkeeping is reset on every call. The first I/O failure aborts the
        walk; entries created before it stay on disk.

        Args:
            root: Root of the parsed tree.
            skip_root: Place the root's children directly under base_dir.

        Returns:
            Tuple[int, int]: Distinct (directories, files) recorded.

        Raises:
            DirectoryCreationError: A directory could not be created.
            FileCreationError: A file could not be created.
        """
        self._created_dirs.clear()
        self._created_files.clear()

        if skip_root and not root.entry.is_directory:
            logger.warning(f"Root '{root.name}' is a file; creating it instead of skipping it")
            skip_root = False

        mode = "Simulating" if self.dry_run else "Building"
        logger.debug(f"{mode} structure under '{self.base_dir}' (skip_root={skip_root})")

        self._traverse(root, skip_root)

        logger.debug(
            f"Structure complete: {len(self._created_dirs)} directories, "
            f"{len(self._created_files)} files"
        )
        return len(self._created_dirs), len(self._created_files)

    def resolve_path(self, node: TreeNode, skip_root: bool) -> str:
        """
        Compute the target path of a node.

        With skip_root the root segment is dropped; the root node itself then
        resolves to base_dir. Only a directory root can be skipped.
        """
        components = node.path_components()
        if skip_root and _top_of(node).entry.is_directory:
            components = components[1:]
        if not components:
            return self.base_dir
        return os.path.join(self.base_dir, *components)

    def get_summary(self) -> BuildSummary:
        return BuildSummary(
            dirs=len(self._created_dirs),
            files=len(self._created_files),
            dry_run=self.dry_run,
        )

    @property
    def created_dirs(self) -> List[str]:
        return sorted(self._created_dirs)

    @property
    def created_files(self) -> List[str]:
        return sorted(self._created_files)

    # -------------------------------------------------------------------------
    # TRAVERSAL
    # -------------------------------------------------------------------------

    def _traverse(self, root: TreeNode, skip_root: bool) -> None:
        for node in root.walk():
            target = self.resolve_path(node, skip_root)

            if skip_root and node is root:
                # The skipped root stands for base_dir itself: ensure, never count.
                if not self.dry_run:
                    self._makedirs(target)
                continue

            if node.entry.is_directory:
                self._create_directory(target, node)
            else:
                self._create_file(target, node)

    def _create_directory(self, path: str, node: TreeNode) -> None:
        if not self.dry_run:
            self._makedirs(path)
        self._created_dirs.add(path)
        self._announce("directory", path, node)

    def _create_file(self, path: str, node: TreeNode) -> None:
        if not self.dry_run:
            parent = os.path.dirname(path)
            if parent:
                self._makedirs(parent)
            try:
                with open(path, "w", encoding="utf-8"):
                    pass
            except OSError as e:
                raise FileCreationError(path, e) from e
        self._created_files.add(path)
        self._announce("file", path, node)

    @staticmethod
    def _makedirs(path: str) -> None:
        try:
            os.makedirs(path, exist_ok=True)
        except OSError as e:
            raise DirectoryCreationError(path, e) from e

    def _announce(self, kind: str, path: str, node: TreeNode) -> None:
        if not self.verbose:
            return
        action = f"{DRY_RUN_PREFIX} Would create" if self.dry_run else "Created"
        self._report(f"{action} {kind}: {path}")
        if node.entry.annotation:
            self._report(f"  -> Comment: {node.entry.annotation}")


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _top_of(node: TreeNode) -> TreeNode:
    while node.parent is not None:
        node = node.parent
    return node
