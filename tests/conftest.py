from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared tree diagrams and tree-file fixtures used across the suite.
"""

import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Sample Diagrams
# -----------------------------------------------------------------------------
SAMPLE_TREE = """
my_project/
├── src/
│   ├── main.rs
│   └── utils.rs
└── README.md
"""

ANNOTATED_TREE = """\
app/
├── config/            # settings live here
│   └── settings.toml  # main config
├── Makefile
└── .env               # secrets
"""


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def sample_tree_text() -> str:
    return SAMPLE_TREE


@pytest.fixture
def write_tree(tmp_path: Path) -> Callable[[str], Path]:
    """Return a helper that writes tree text into a UTF-8 file under tmp_path."""

    def _write(content: str, name: str = "tree.txt") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def diagnostics() -> List[str]:
    """A list usable as a diagnostics/reporter sink via .append."""
    return []


@pytest.fixture
def mock_config_dict(tmp_path: Path) -> Dict[str, Any]:
    """
    Return a valid, complete configuration dictionary for testing.

    Reflects the structure defined in 'tree2fs.domain.config'.
    """
    return {
        "tree_file": str(tmp_path / "tree.txt"),
        "base_dir": str(tmp_path / "out"),
        "indent_width": 4,
        "dry_run": False,
        "verbose": False,
        "skip_root": None,
        "strict_roots": False,
    }


@pytest.fixture
def annotated_tree_text() -> str:
    return ANNOTATED_TREE
