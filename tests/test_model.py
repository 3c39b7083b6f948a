"""Tests for tree helpers and error types."""

from __future__ import annotations

from pathlib import Path

import pytest

from inlinemod import (
    ErrorKind,
    External,
    Inline,
    InlineError,
    InlineIoError,
    InlineParseError,
    MemoryFileSystem,
    ModuleDeclaration,
    SourceSyntaxError,
    SourceTree,
    find_module,
    has_external_modules,
    iter_modules,
)


def _tree() -> SourceTree:
    leaf = ModuleDeclaration("leaf", External())
    mid = ModuleDeclaration("mid", Inline(SourceTree(items=(leaf,))))
    return SourceTree(items=(mid, ModuleDeclaration("r#raw", Inline())))


def test_iter_modules_depth_first() -> None:
    assert [path for path, _ in iter_modules(_tree())] == [
        ("mid",),
        ("mid", "leaf"),
        ("raw",),
    ]


def test_has_external_modules() -> None:
    assert has_external_modules(_tree())
    assert not has_external_modules(SourceTree(items=(ModuleDeclaration("m", Inline()),)))


def test_find_module() -> None:
    found = find_module(_tree(), "mid", "leaf")
    assert found is not None and found.is_external
    assert find_module(_tree(), "leaf") is None


def test_module_body_accessor() -> None:
    assert ModuleDeclaration("m").body is None
    assert ModuleDeclaration("m", Inline()).body == SourceTree()


def test_io_error_fields() -> None:
    cause = FileNotFoundError(2, "No such file or directory", "src/a.rs")
    err = InlineIoError("src/a.rs", cause)
    assert err.path == Path("src/a.rs")
    assert err.kind is ErrorKind.IO
    assert err.cause is cause
    assert str(err).startswith("Failed to read src/a.rs:")


def test_parse_error_fields() -> None:
    cause = SourceSyntaxError("unexpected `)`", offset=12, line=3, column=4)
    err = InlineParseError(Path("src/b.rs"), cause)
    assert err.kind is ErrorKind.PARSE
    assert (err.offset, err.line, err.column) == (12, 3, 4)
    assert str(err) == "Failed to parse src/b.rs:3:4: unexpected `)`"


def test_memory_filesystem_missing_file() -> None:
    fs = MemoryFileSystem().add("a.rs", "")
    assert fs.exists(Path("a.rs"))
    assert not fs.exists(Path("b.rs"))
    with pytest.raises(FileNotFoundError) as exc_info:
        fs.read(Path("b.rs"))
    assert exc_info.value.filename == "b.rs"


def test_base_error_message() -> None:
    err = InlineError("src/c.rs", RuntimeError("boom"))
    assert err.message == "src/c.rs: boom"
    assert str(err) == "src/c.rs: boom"
