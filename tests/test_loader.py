"""Unit tests for parsing individual block configuration files."""

from __future__ import annotations

import typing as typ

import pytest

from theme_blocks.errors import BlockConfigParseError
from theme_blocks.loader import load_block_config

if typ.TYPE_CHECKING:
    from pathlib import Path


def test_nested_values_are_preserved(tmp_path: Path) -> None:
    """Sequences, booleans, and nested mappings survive parsing."""
    path = tmp_path / "hero.yml"
    path.write_text(
        "title: Hero\n"
        "keywords: [banner, header]\n"
        "supports:\n"
        "  align: false\n"
        "  mode: true\n",
        encoding="utf-8",
    )
    assert load_block_config(path) == {
        "title": "Hero",
        "keywords": ["banner", "header"],
        "supports": {"align": False, "mode": True},
    }


def test_empty_file_loads_as_empty_mapping(tmp_path: Path) -> None:
    """An empty configuration is a valid (if untitled) mapping."""
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")
    assert load_block_config(path) == {}


def test_malformed_yaml_reports_path_and_message(tmp_path: Path) -> None:
    """Syntax errors become BlockConfigParseError carrying the file path."""
    path = tmp_path / "broken.yml"
    path.write_text("title: [unclosed\n", encoding="utf-8")
    with pytest.raises(BlockConfigParseError) as excinfo:
        load_block_config(path)
    assert excinfo.value.path == path
    assert excinfo.value.message, "expected the parser message to be kept"
    assert "broken.yml" in str(excinfo.value)


def test_non_mapping_document_is_rejected(tmp_path: Path) -> None:
    """A top-level list is not a block configuration."""
    path = tmp_path / "list.yml"
    path.write_text("- title\n- category\n", encoding="utf-8")
    with pytest.raises(BlockConfigParseError, match="mapping"):
        load_block_config(path)
