from __future__ import annotations

"""
Directory Tree Structure Data Models.

Provides the node hierarchy reconstructed by the parser and consumed by the
materializer. Children are owned by their parent through an ordered list;
the parent link is a weak reference so that the root is the only ownership
anchor of the whole tree.
"""

import os
import weakref
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from tree2fs.domain.entry_models import Entry

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

class TreeNode:
    """
    A node of the reconstructed hierarchy.

    The shape is only mutated by the parser (through add_child) while the
    tree is being assembled; consumers treat it as read-only afterwards.
    """

    def __init__(self, entry: Entry) -> None:
        self.entry = entry
        self._children: List[TreeNode] = []
        self._parent: Optional[weakref.ReferenceType[TreeNode]] = None

    def __repr__(self) -> str:
        return f"TreeNode({self.entry.name!r}, depth={self.entry.depth}, children={len(self._children)})"

    # -------------------------------------------------------------------------
    # CONSTRUCTION
    # -------------------------------------------------------------------------

    def add_child(self, child: TreeNode) -> None:
        """Attach a child in source order and point it back at this node."""
        child._parent = weakref.ref(self)
        self._children.append(child)

    # -------------------------------------------------------------------------
    # NAVIGATION
    # -------------------------------------------------------------------------

    @property
    def children(self) -> Tuple[TreeNode, ...]:
        return tuple(self._children)

    @property
    def parent(self) -> Optional[TreeNode]:
        if self._parent is None:
            return None
        return self._parent()

    @property
    def name(self) -> str:
        return self.entry.clean_name

    @property
    def depth(self) -> int:
        return self.entry.depth

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def is_leaf(self) -> bool:
        return not self._children

    def path_components(self) -> List[str]:
        """
        Collect the clean names from the root down to this node.

        Returns:
            List[str]: Ancestor names in root-to-node order.
        """
        components = [self.name]
        current = self.parent
        while current is not None:
            components.append(current.name)
            current = current.parent
        components.reverse()
        return components

    @property
    def full_path(self) -> str:
        return os.path.join(*self.path_components())

    def walk(self) -> Iterator[TreeNode]:
        """Yield this node and its descendants in depth-first pre-order."""
        stack: List[TreeNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node._children))

    def count(self) -> Tuple[int, int]:
        """Return the (directories, files) classification counts of the subtree."""
        dirs = files = 0
        for node in self.walk():
            if node.entry.is_directory:
                dirs += 1
            else:
                files += 1
        return dirs, files


@dataclass(frozen=True)
class ParseResult:
    """
    Outcome of a successful parse.

    Attributes:
        root: The first depth-0 node seen in the input.
        root_name: Name of the single top-level entry, set only when the
            input contained exactly one depth-0 entry.
        warnings: Diagnostics emitted for tolerated (skipped) lines.
    """
    root: TreeNode
    root_name: Optional[str] = None
    warnings: List[str] = field(default_factory=list)

    @property
    def has_single_root(self) -> bool:
        return self.root_name is not None
