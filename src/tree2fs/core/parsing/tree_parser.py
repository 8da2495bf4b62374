from __future__ import annotations

"""
Tree Diagram Parser.

Rebuilds a node hierarchy from the flat, indented text produced by
'tree'-style listings. Parent/child edges are inferred purely from the
indentation depth of each line; malformed lines are reported through a
diagnostics sink and skipped, while structural inconsistencies abort the
parse with a TreeParseError.
"""

import logging
import os
from typing import Callable, Iterable, List, Optional, TextIO, Union

from tree2fs.domain.constants import COMMENT_MARKER, DEFAULT_INDENT_WIDTH, TREE_GLYPHS
from tree2fs.domain.entry_models import Entry
from tree2fs.domain.errors import (
    EmptyFileError,
    InvalidEntryError,
    MultipleRootsError,
    NoNodesFoundError,
    OrphanNodeError,
    TreeReadError,
)
from tree2fs.domain.tree_models import ParseResult, TreeNode

logger = logging.getLogger(__name__)

TreeSource = Union[str, "os.PathLike[str]", TextIO]
DiagnosticsSink = Callable[[str], None]

# -----------------------------------------------------------------------------
# PARSER
# -----------------------------------------------------------------------------

class TreeParser:
    """
    Line-oriented parser for tree diagrams.

    Args:
        indent_width: Indentation characters per nesting level.
        diagnostics: Sink receiving one message per tolerated problem.
            Defaults to the module logger at WARNING level.
        strict_roots: Raise MultipleRootsError on a second depth-0 entry
            instead of tolerating it.
    """

    def __init__(
            self,
            indent_width: int = DEFAULT_INDENT_WIDTH,
            diagnostics: Optional[DiagnosticsSink] = None,
            strict_roots: bool = False,
    ) -> None:
        if indent_width < 1:
            raise ValueError(f"indent_width must be a positive integer, got {indent_width}")
        self.indent_width = indent_width
        self.strict_roots = strict_roots
        self._sink: DiagnosticsSink = diagnostics or logger.warning
        self._warnings: List[str] = []

    # -------------------------------------------------------------------------
    # LINE LEVEL
    # -------------------------------------------------------------------------

    def parse_line(self, line: str, line_number: int) -> Optional[Entry]:
        """
        Extract an Entry from a single line of tree text.

        Blank lines yield None silently. Lines whose label is missing or
        invalid yield None after emitting a diagnostic. Indentation that is
        not a multiple of indent_width is reported but tolerated (the depth
        is truncated).

        Args:
            line: Raw line text (without newline).
            line_number: 1-based position of the line in the source.

        Returns:
            Optional[Entry]: The parsed entry, or None if the line is skipped.
        """
        line = line.rstrip()
        if not line.strip():
            return None

        structural, _, comment = line.partition(COMMENT_MARKER)
        structural = structural.rstrip()
        annotation = comment.strip()

        name = structural.lstrip(TREE_GLYPHS)
        if not name:
            self._diagnose(f"Invalid line format at line {line_number}: '{line}'")
            return None

        indent_chars = len(structural) - len(name)
        if indent_chars % self.indent_width != 0:
            self._diagnose(
                f"Inconsistent indentation at line {line_number}: "
                f"expected multiple of {self.indent_width}, got {indent_chars}"
            )

        depth = indent_chars // self.indent_width

        try:
            return Entry(name=name, depth=depth, annotation=annotation, source_line=line_number)
        except InvalidEntryError as e:
            self._diagnose(f"Invalid filename at line {line_number}: {e}")
            return None

    # -------------------------------------------------------------------------
    # TREE LEVEL
    # -------------------------------------------------------------------------

    def build_tree(self, source: TreeSource) -> ParseResult:
        """
        Read a tree diagram from a file path or text stream and assemble it.

        Args:
            source: Path to a UTF-8 tree file, or a readable text stream.

        Returns:
            ParseResult: Root node, single top-level name and diagnostics.

        Raises:
            TreeReadError: The source could not be read or decoded.
            TreeParseError: The content is empty or structurally invalid.
        """
        if hasattr(source, "read"):
            label = getattr(source, "name", "<stream>")
            try:
                text = source.read()
            except (OSError, UnicodeDecodeError) as e:
                raise TreeReadError(str(label), e) from e
        else:
            path = os.fspath(source)
            logger.debug(f"Reading tree file: {path}")
            try:
                with open(path, "r", encoding="utf-8") as f:
                    text = f.read()
            except (OSError, UnicodeDecodeError) as e:
                raise TreeReadError(path, e) from e

        return self.build_tree_from_text(text)

    def build_tree_from_text(self, text: str) -> ParseResult:
        """Assemble a tree from an in-memory diagram."""
        return self.build_tree_from_lines(text.splitlines())

    def build_tree_from_lines(self, lines: Iterable[str]) -> ParseResult:
        """
        Assemble the node hierarchy from individual lines.

        level_stack[d] holds the most recent node seen at depth d; a node at
        depth d becomes a child of level_stack[d - 1].

        Args:
            lines: Tree text lines, without trailing newlines.

        Returns:
            ParseResult: Root node, single top-level name and diagnostics.

        Raises:
            EmptyFileError: No lines at all.
            OrphanNodeError: A line skips one or more nesting levels.
            MultipleRootsError: A second depth-0 entry in strict mode.
            NoNodesFoundError: No depth-0 entry survived parsing.
        """
        lines = list(lines)
        if not lines:
            raise EmptyFileError()

        self._warnings = []
        level_stack: List[TreeNode] = []
        root: Optional[TreeNode] = None
        root_count = 0

        for index, raw in enumerate(lines):
            line_number = index + 1
            entry = self.parse_line(raw, line_number)
            if entry is None:
                continue

            depth = entry.depth
            node = TreeNode(entry)

            if depth == 0:
                root_count += 1
                if root is None:
                    root = node
                    level_stack = [node]
                    continue

                if self.strict_roots:
                    raise MultipleRootsError(line_number, root.name)

                # The returned root is kept; only subtree attachment moves over.
                self._diagnose(f"Multiple root-level nodes found at line {line_number}")
                if level_stack:
                    level_stack[0] = node
                continue

            if depth > len(level_stack):
                raise OrphanNodeError(
                    line=line_number,
                    depth=depth,
                    max_depth=max(len(level_stack) - 1, 0),
                )

            del level_stack[depth:]
            level_stack[depth - 1].add_child(node)
            level_stack.append(node)

        if root is None:
            raise NoNodesFoundError()

        root_name = root.name if root_count == 1 else None
        logger.debug(
            f"Parsed tree rooted at '{root.name}' "
            f"({len(self._warnings)} line(s) skipped or adjusted)"
        )
        return ParseResult(root=root, root_name=root_name, warnings=list(self._warnings))

    # -------------------------------------------------------------------------
    # DIAGNOSTICS
    # -------------------------------------------------------------------------

    def _diagnose(self, message: str) -> None:
        self._warnings.append(message)
        self._sink(message)
