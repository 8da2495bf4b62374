from __future__ import annotations

"""
Unit tests for the Tree Diagram Parser.

Verifies:
1. Line-level extraction (glyph stripping, depth, annotations).
2. Tolerated problems are reported and skipped, never fatal.
3. Tree assembly through the level stack, including orphan detection.
4. Fatal conditions (empty input, no nodes, read failures).
5. Current handling of multiple root-level entries.
"""

import io
import logging
import os
from pathlib import Path
from typing import List

import pytest

from tree2fs.core.parsing.tree_parser import TreeParser
from tree2fs.domain.errors import (
    EmptyFileError,
    MultipleRootsError,
    NoNodesFoundError,
    OrphanNodeError,
    TreeParseError,
    TreeReadError,
)
from tree2fs.domain.tree_models import TreeNode

NESTED_TREE = "\n".join([
    "root/",
    "├── a/",
    "│   └── deep/",
    "│       └── x.txt",
    "└── b.txt",
])

MULTI_ROOT_TREE = "\n".join([
    "first/",
    "├── a.txt",
    "second/",
    "├── b.txt",
])


@pytest.fixture
def parser(diagnostics: List[str]) -> TreeParser:
    return TreeParser(diagnostics=diagnostics.append)


# -----------------------------------------------------------------------------
# LINE LEVEL
# -----------------------------------------------------------------------------

def test_blank_lines_are_skipped_silently(parser: TreeParser, diagnostics: List[str]) -> None:
    assert parser.parse_line("", 1) is None
    assert parser.parse_line("    \t  ", 2) is None
    assert diagnostics == []


def test_parse_root_line(parser: TreeParser) -> None:
    entry = parser.parse_line("my_project/", 1)

    assert entry is not None
    assert entry.name == "my_project/"
    assert entry.depth == 0
    assert entry.annotation == ""
    assert entry.source_line == 1


def test_parse_branch_with_annotation(parser: TreeParser) -> None:
    entry = parser.parse_line("├── src/        # the code  ", 2)

    assert entry is not None
    assert entry.name == "src/"
    assert entry.depth == 1
    assert entry.annotation == "the code"


def test_parse_nested_line(parser: TreeParser) -> None:
    entry = parser.parse_line("│   └── main.rs", 4)

    assert entry is not None
    assert entry.name == "main.rs"
    assert entry.depth == 2


def test_annotation_keeps_everything_after_first_marker(parser: TreeParser) -> None:
    entry = parser.parse_line("└── a.txt # one # two", 3)

    assert entry is not None
    assert entry.name == "a.txt"
    assert entry.annotation == "one # two"


def test_non_breaking_space_padding_counts_as_indentation(parser: TreeParser) -> None:
    entry = parser.parse_line("│\u00a0\u00a0 └── x.py", 5)

    assert entry is not None
    assert entry.name == "x.py"
    assert entry.depth == 2


def test_glyph_only_line_is_reported(parser: TreeParser, diagnostics: List[str]) -> None:
    assert parser.parse_line("│   ", 6) is None
    assert parser.parse_line("# just a comment", 7) is None

    assert len(diagnostics) == 2
    assert "Invalid line format at line 6" in diagnostics[0]
    assert "line 7" in diagnostics[1]


def test_inconsistent_indentation_is_tolerated(parser: TreeParser, diagnostics: List[str]) -> None:
    entry = parser.parse_line("      odd.txt", 3)

    assert entry is not None
    assert entry.depth == 1
    assert diagnostics == [
        "Inconsistent indentation at line 3: expected multiple of 4, got 6"
    ]


def test_invalid_filename_is_reported_and_skipped(parser: TreeParser, diagnostics: List[str]) -> None:
    assert parser.parse_line("├── bad?.txt", 9) is None

    assert len(diagnostics) == 1
    assert diagnostics[0].startswith("Invalid filename at line 9")


def test_custom_indent_width() -> None:
    parser = TreeParser(indent_width=2)

    entry = parser.parse_line("    leaf.md", 1)

    assert entry is not None
    assert entry.depth == 2


@pytest.mark.parametrize("width", [0, -4])
def test_indent_width_must_be_positive(width: int) -> None:
    with pytest.raises(ValueError):
        TreeParser(indent_width=width)


def test_default_sink_logs_warnings(caplog: pytest.LogCaptureFixture) -> None:
    parser = TreeParser()

    with caplog.at_level(logging.WARNING, logger="tree2fs.core.parsing.tree_parser"):
        parser.parse_line("├── what*.txt", 12)

    assert any("Invalid filename at line 12" in r.getMessage() for r in caplog.records)


# -----------------------------------------------------------------------------
# TREE ASSEMBLY
# -----------------------------------------------------------------------------

def test_build_sample_tree(parser: TreeParser, sample_tree_text: str) -> None:
    result = parser.build_tree_from_text(sample_tree_text)
    root = result.root

    assert root.name == "my_project"
    assert result.root_name == "my_project"
    assert result.warnings == []
    assert [c.name for c in root.children] == ["src", "README.md"]
    assert [c.name for c in root.children[0].children] == ["main.rs", "utils.rs"]


def test_depth_matches_parent_depth_plus_one(parser: TreeParser) -> None:
    root = parser.build_tree_from_text(NESTED_TREE).root

    for node in root.walk():
        if node is root:
            continue
        assert node.parent is not None
        assert node.depth == node.parent.depth + 1


def test_full_path_matches_ancestor_chain(parser: TreeParser) -> None:
    root = parser.build_tree_from_text(NESTED_TREE).root
    leaf = root.children[0].children[0].children[0]

    assert leaf.name == "x.txt"
    assert leaf.full_path == os.path.join("root", "a", "deep", "x.txt")


def test_shallower_line_attaches_to_correct_ancestor(parser: TreeParser) -> None:
    root = parser.build_tree_from_text(NESTED_TREE).root

    b_txt = root.children[1]
    assert b_txt.name == "b.txt"
    assert b_txt.parent is root


def test_annotations_are_carried_to_nodes(parser: TreeParser, annotated_tree_text: str) -> None:
    root = parser.build_tree_from_text(annotated_tree_text).root
    config, makefile, env = root.children

    assert config.entry.annotation == "settings live here"
    assert config.children[0].entry.annotation == "main config"
    assert makefile.entry.is_directory
    assert env.entry.is_file
    assert env.entry.annotation == "secrets"


def test_windows_line_endings(parser: TreeParser) -> None:
    result = parser.build_tree_from_text("root/\r\n├── a.txt\r\n└── b/\r\n")

    assert [c.name for c in result.root.children] == ["a.txt", "b"]


def test_skipped_lines_are_collected_in_result(parser: TreeParser) -> None:
    text = "root/\n├── ok.txt\n├── no?.txt\n│   \n"

    result = parser.build_tree_from_text(text)

    assert [c.name for c in result.root.children] == ["ok.txt"]
    assert len(result.warnings) == 2


def test_warnings_reset_between_builds(parser: TreeParser) -> None:
    parser.build_tree_from_text("root/\n├── no?.txt\n")
    result = parser.build_tree_from_text("root/\n├── ok.txt\n")

    assert result.warnings == []


# -----------------------------------------------------------------------------
# FATAL CONDITIONS
# -----------------------------------------------------------------------------

def test_orphan_depth_jump_cites_line(parser: TreeParser) -> None:
    text = "root/\n        deep.txt\n"

    with pytest.raises(OrphanNodeError) as exc:
        parser.build_tree_from_text(text)

    assert exc.value.line == 2
    assert exc.value.depth == 2
    assert exc.value.max_depth == 0
    assert "Line 2" in str(exc.value)


def test_orphan_after_deeper_branch(parser: TreeParser) -> None:
    text = "\n".join([
        "root/",
        "├── a/",
        "│   └── b/",
        "│               too_deep.txt",
    ])

    with pytest.raises(OrphanNodeError) as exc:
        parser.build_tree_from_text(text)

    assert exc.value.line == 4
    assert exc.value.depth == 4
    assert exc.value.max_depth == 2


def test_child_before_any_root_is_orphan(parser: TreeParser) -> None:
    with pytest.raises(OrphanNodeError) as exc:
        parser.build_tree_from_text("    child.txt\n")

    assert exc.value.line == 1
    assert exc.value.max_depth == 0


def test_empty_input_raises_before_processing(parser: TreeParser, diagnostics: List[str]) -> None:
    with pytest.raises(EmptyFileError):
        parser.build_tree_from_lines([])

    with pytest.raises(EmptyFileError):
        parser.build_tree_from_text("")

    assert diagnostics == []


@pytest.mark.parametrize("text", ["\n\n   \n", "bad?name\n", "│   \n"])
def test_no_nodes_found(parser: TreeParser, text: str) -> None:
    with pytest.raises(NoNodesFoundError):
        parser.build_tree_from_text(text)


def test_errors_share_parse_error_base(parser: TreeParser) -> None:
    with pytest.raises(TreeParseError):
        parser.build_tree_from_text("")


# -----------------------------------------------------------------------------
# SOURCES
# -----------------------------------------------------------------------------

def test_build_tree_from_path(parser: TreeParser, write_tree, sample_tree_text: str) -> None:
    path = write_tree(sample_tree_text)

    from_str = parser.build_tree(str(path))
    from_pathlike = parser.build_tree(path)

    assert from_str.root.name == from_pathlike.root.name == "my_project"


def test_build_tree_from_stream(parser: TreeParser, sample_tree_text: str) -> None:
    result = parser.build_tree(io.StringIO(sample_tree_text))

    assert result.root_name == "my_project"


def test_empty_file_raises_empty_file(parser: TreeParser, write_tree) -> None:
    with pytest.raises(EmptyFileError):
        parser.build_tree(write_tree(""))


def test_missing_file_raises_read_error(parser: TreeParser, tmp_path: Path) -> None:
    missing = tmp_path / "nope.txt"

    with pytest.raises(TreeReadError) as exc:
        parser.build_tree(missing)

    assert isinstance(exc.value.cause, FileNotFoundError)
    assert exc.value.source == str(missing)


def test_undecodable_file_raises_read_error(parser: TreeParser, tmp_path: Path) -> None:
    path = tmp_path / "latin1.txt"
    path.write_bytes(b"root/\n\xff\xfe\xfa.txt\n")

    with pytest.raises(TreeReadError) as exc:
        parser.build_tree(path)

    assert isinstance(exc.value.cause, UnicodeDecodeError)


# -----------------------------------------------------------------------------
# MULTIPLE ROOT-LEVEL ENTRIES
# -----------------------------------------------------------------------------

def test_multiple_roots_keep_first_root(parser: TreeParser, diagnostics: List[str]) -> None:
    """
    A second depth-0 entry does not replace the returned root, but later
    children attach to it, so they are not reachable from the result.
    """
    result = parser.build_tree_from_text(MULTI_ROOT_TREE)

    assert result.root.name == "first"
    assert result.root_name is None
    assert [c.name for c in result.root.children] == ["a.txt"]
    assert "Multiple root-level nodes found at line 3" in diagnostics
    assert all(n.name != "b.txt" for n in result.root.walk())


def test_multiple_roots_strict_mode_raises(diagnostics: List[str]) -> None:
    parser = TreeParser(diagnostics=diagnostics.append, strict_roots=True)

    with pytest.raises(MultipleRootsError) as exc:
        parser.build_tree_from_text(MULTI_ROOT_TREE)

    assert exc.value.line == 3
    assert exc.value.first_root == "first"


def test_single_root_name_only_for_one_top_level_entry(parser: TreeParser) -> None:
    assert parser.build_tree_from_text("solo/\n├── x.txt\n").root_name == "solo"
    assert parser.build_tree_from_text("a/\nb/\n").root_name is None


def test_returned_root_is_tree_node(parser: TreeParser) -> None:
    assert isinstance(parser.build_tree_from_text("x/\n").root, TreeNode)
