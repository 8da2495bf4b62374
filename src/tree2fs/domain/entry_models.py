from __future__ import annotations

"""
Tree Entry Data Model.

Defines the immutable value object describing a single parsed line of a
tree diagram: its label, nesting depth, inline annotation and origin.
"""

from dataclasses import dataclass
from typing import Optional

from tree2fs.domain.constants import DIRECTORY_MARKER, FORBIDDEN_CHARS
from tree2fs.domain.errors import EmptyNameError, InvalidCharactersError, UnsafePathError

_SEPARATORS = ("/", "\\")

# -----------------------------------------------------------------------------
# VALUE OBJECT
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Entry:
    """
    Structural data extracted from one line of tree text.

    Attributes:
        name: Raw label text, possibly ending with the '/' directory marker.
        depth: Nesting level derived from indentation (0 = top-level).
        annotation: Trailing comment text after '#', empty if absent.
        source_line: 1-based line number in the source text.

    Raises:
        EmptyNameError: If the name is blank once the marker is removed.
        InvalidCharactersError: If the name holds reserved characters.
        UnsafePathError: If the name would escape the base directory.
    """
    name: str
    depth: int
    annotation: str = ""
    source_line: int = 0

    def __post_init__(self) -> None:
        if self.depth < 0:
            raise ValueError(f"Entry depth must be non-negative, got {self.depth}")
        validate_name(self.name)

    # -------------------------------------------------------------------------
    # DERIVED PROPERTIES
    # -------------------------------------------------------------------------

    @property
    def clean_name(self) -> str:
        """Name without trailing directory markers (the on-disk segment)."""
        return self.name.rstrip(DIRECTORY_MARKER)

    @property
    def is_directory(self) -> bool:
        """
        Syntactic classification: a name with no dot at all, or one that
        ends with the directory marker, denotes a directory.
        """
        return "." not in self.name or self.name.endswith(DIRECTORY_MARKER)

    @property
    def is_file(self) -> bool:
        return not self.is_directory

    @property
    def extension(self) -> Optional[str]:
        if self.is_directory:
            return None
        ext = self.name.rsplit(".", 1)[-1]
        return ext or None

    @property
    def stem(self) -> str:
        if self.is_directory:
            return self.clean_name
        return self.name.rsplit(".", 1)[0]

    def __str__(self) -> str:
        return self.clean_name

# -----------------------------------------------------------------------------
# VALIDATION
# -----------------------------------------------------------------------------

def validate_name(name: str) -> None:
    """
    Check the naming invariant shared by every entry.

    Args:
        name: Raw label text.

    Raises:
        EmptyNameError: Blank name (after stripping the directory marker).
        InvalidCharactersError: Name contains any of < > : " | ? *
        UnsafePathError: Absolute name, or a '..' path segment.
    """
    if not name.rstrip(DIRECTORY_MARKER).strip():
        raise EmptyNameError()

    bad = [c for c in name if c in FORBIDDEN_CHARS]
    if bad:
        raise InvalidCharactersError(name, bad)

    if name.startswith(_SEPARATORS) or ".." in name.replace("\\", "/").split("/"):
        raise UnsafePathError(name)
