from __future__ import annotations

"""
Domain Constants.

Centralizes the character sets and default values shared by the parser,
the materializer and the configuration layer.
"""

from typing import FrozenSet

APP_NAME = "tree2fs"
CURRENT_CONFIG_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# TREE SYNTAX
# -----------------------------------------------------------------------------

DEFAULT_INDENT_WIDTH = 4

# Connector glyphs emitted by 'tree'-style listings. GNU tree pads with NBSP.
TREE_GLYPHS = "│├└─ \u00a0"

COMMENT_MARKER = "#"
DIRECTORY_MARKER = "/"

FORBIDDEN_CHARS: FrozenSet[str] = frozenset('<>:"|?*')

# -----------------------------------------------------------------------------
# REPORTING
# -----------------------------------------------------------------------------

DRY_RUN_PREFIX = "[DRY RUN]"
