from __future__ import annotations

"""
Domain Exception Taxonomy.

Two families of fatal errors are exposed to callers: parse errors raised
while reconstructing the tree, and build errors raised while writing it to
disk. Entry validation errors are raised by the value object itself and are
tolerated (logged and skipped) by the parser.
"""

from typing import Iterable, Optional


class Tree2FSError(Exception):
    """Base class for every error raised by tree2fs."""


# -----------------------------------------------------------------------------
# ENTRY VALIDATION
# -----------------------------------------------------------------------------

class InvalidEntryError(Tree2FSError, ValueError):
    """An entry name violates the naming invariant."""


class EmptyNameError(InvalidEntryError):
    def __init__(self) -> None:
        super().__init__("Filename cannot be empty or whitespace")


class InvalidCharactersError(InvalidEntryError):
    def __init__(self, name: str, chars: Iterable[str]) -> None:
        self.name = name
        self.chars = "".join(sorted(set(chars)))
        super().__init__(f"Filename '{name}' contains invalid characters: {self.chars}")


class UnsafePathError(InvalidEntryError):
    """The name would resolve outside the base directory."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Filename '{name}' must be a relative path without '..' segments")


# -----------------------------------------------------------------------------
# PARSING
# -----------------------------------------------------------------------------

class TreeParseError(Tree2FSError):
    """Fatal error while turning tree text into a node hierarchy."""


class TreeReadError(TreeParseError):
    def __init__(self, source: str, cause: BaseException) -> None:
        self.source = source
        self.cause = cause
        super().__init__(f"Failed to read tree file '{source}': {cause}")


class EmptyFileError(TreeParseError):
    def __init__(self) -> None:
        super().__init__("Tree file is empty")


class NoNodesFoundError(TreeParseError):
    def __init__(self) -> None:
        super().__init__("No valid nodes found in tree file")


class OrphanNodeError(TreeParseError):
    """A line is nested more than one level below its nearest ancestor."""

    def __init__(self, line: int, depth: int, max_depth: int) -> None:
        self.line = line
        self.depth = depth
        self.max_depth = max_depth
        super().__init__(
            f"Line {line}: Level {depth} has no parent "
            f"(previous max level was {max_depth})"
        )


class MultipleRootsError(TreeParseError):
    def __init__(self, line: int, first_root: Optional[str] = None) -> None:
        self.line = line
        self.first_root = first_root
        detail = f" (first root was '{first_root}')" if first_root else ""
        super().__init__(f"Line {line}: Multiple root-level nodes found{detail}")


# -----------------------------------------------------------------------------
# MATERIALIZATION
# -----------------------------------------------------------------------------

class FilesystemBuildError(Tree2FSError):
    """Fatal I/O error while creating the structure on disk."""

    kind = "path"

    def __init__(self, path: str, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to create {self.kind} {path}: {cause}")


class DirectoryCreationError(FilesystemBuildError):
    kind = "directory"


class FileCreationError(FilesystemBuildError):
    kind = "file"
