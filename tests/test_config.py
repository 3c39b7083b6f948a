"""Tests for config file loading."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from inlinemod.config import InlineConfig, find_config_file, load_config


def test_find_config_inlinemod_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "inlinemod.toml"
    config_file.write_text("root = false\n")
    result = find_config_file(tmp_path)
    assert result == config_file


def test_find_config_dot_inlinemod_toml_takes_precedence(tmp_path: Path) -> None:
    (tmp_path / "inlinemod.toml").write_text("root = false\n")
    dot_config = tmp_path / ".inlinemod.toml"
    dot_config.write_text("root = true\n")
    result = find_config_file(tmp_path)
    assert result == dot_config


def test_find_config_pyproject_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "pyproject.toml"
    config_file.write_text("[tool.inlinemod]\nroot = false\n")
    result = find_config_file(tmp_path)
    assert result == config_file


def test_find_config_pyproject_without_section_skipped(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("[tool.ruff]\nline-length = 100\n")
    result = find_config_file(tmp_path)
    assert result is None


def test_find_config_walks_up(tmp_path: Path) -> None:
    config_file = tmp_path / "inlinemod.toml"
    config_file.write_text("root = false\n")
    subdir = tmp_path / "sub" / "deep"
    subdir.mkdir(parents=True)
    result = find_config_file(subdir)
    assert result == config_file


def test_find_config_none_when_missing(tmp_path: Path) -> None:
    result = find_config_file(tmp_path)
    assert result is None


def test_load_config_inlinemod_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "inlinemod.toml"
    config_file.write_text('root = false\nextension = "rsx"\n')
    config = load_config(config_file)
    assert config.root is False
    assert config.extension == "rsx"
    # Unset fields should be None (not set)
    assert config.index_filename is None
    assert config.encoding is None


def test_load_config_pyproject_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "pyproject.toml"
    config_file.write_text('[tool.inlinemod]\nencoding = "latin-1"\n')
    config = load_config(config_file)
    assert config.encoding == "latin-1"
    assert config.root is None


def test_load_config_kebab_case(tmp_path: Path) -> None:
    config_file = tmp_path / "inlinemod.toml"
    config_file.write_text('index-filename = "index.rs"\n')
    config = load_config(config_file)
    assert config.index_filename == "index.rs"


def test_load_config_ignores_keys_in_tables(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Settings are top-level keys only; a table is an unrecognized key."""
    config_file = tmp_path / "inlinemod.toml"
    config_file.write_text('[resolution]\nindex-filename = "index.rs"\n')
    with caplog.at_level(logging.WARNING, logger="inlinemod.config"):
        config = load_config(config_file)
    assert config == InlineConfig()
    assert "Unrecognized config key 'resolution'" in caplog.text


def test_load_config_skips_wrong_types(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    config_file = tmp_path / "inlinemod.toml"
    config_file.write_text('root = "false"\nextension = 3\nencoding = "latin-1"\n')
    with caplog.at_level(logging.WARNING, logger="inlinemod.config"):
        config = load_config(config_file)
    assert config.root is None
    assert config.extension is None
    assert config.encoding == "latin-1"
    assert "Ignoring config key 'root'" in caplog.text
    assert "Ignoring config key 'extension'" in caplog.text


def test_load_config_malformed_toml(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    """Malformed TOML should return empty config, not crash."""
    config_file = tmp_path / "inlinemod.toml"
    config_file.write_text("this is not valid toml [[[")
    with caplog.at_level(logging.WARNING, logger="inlinemod.config"):
        config = load_config(config_file)
    assert config == InlineConfig()
    assert "malformed config file" in caplog.text


def test_load_config_warns_unknown_keys(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    """Unknown keys in config should produce a warning."""
    config_file = tmp_path / "inlinemod.toml"
    config_file.write_text("unknown_key = true\nroot = false\n")
    with caplog.at_level(logging.WARNING, logger="inlinemod.config"):
        config = load_config(config_file)
    assert config.root is False
    assert "Unrecognized config key 'unknown_key'" in caplog.text
