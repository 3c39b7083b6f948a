"""
Errors raised while loading and inlining module files.

Every error is qualified by the path of the file that failed and chains the
underlying exception (`OSError`, `UnicodeDecodeError`, `SourceSyntaxError`) as
its `__cause__`, so callers can inspect it without parsing messages.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class ErrorKind(str, Enum):
    """Discriminant for the two failure classes."""

    IO = "io"
    PARSE = "parse"


class SourceSyntaxError(ValueError):
    """
    Raised by the syntax adapter when source text is not valid Rust.

    `offset` is a byte offset into the UTF-8 encoded text. `line` and `column`
    are 1-based; `column` counts bytes.
    """

    def __init__(self, message: str, offset: int, line: int, column: int) -> None:
        super().__init__(message)
        self.message: str = message
        self.offset: int = offset
        self.line: int = line
        self.column: int = column

    def __str__(self) -> str:
        return f"{self.message} at line {self.line}, column {self.column} (offset {self.offset})"


class InlineError(Exception):
    """Base class for failures while inlining. Always carries the offending path."""

    kind: ErrorKind

    def __init__(self, path: str | Path, cause: BaseException) -> None:
        super().__init__(path, cause)
        self.path: Path = Path(path)
        self.cause: BaseException = cause

    @property
    def message(self) -> str:
        return f"{self.path}: {self.cause}"

    def __str__(self) -> str:
        return self.message


class InlineIoError(InlineError):
    """A module file is missing, unreadable, or not decodable as text."""

    kind = ErrorKind.IO

    @property
    def message(self) -> str:
        return f"Failed to read {self.path}: {self.cause}"


class InlineParseError(InlineError):
    """A module file was read but does not contain valid source."""

    kind = ErrorKind.PARSE

    def __init__(self, path: str | Path, cause: SourceSyntaxError) -> None:
        super().__init__(path, cause)
        self.syntax_error: SourceSyntaxError = cause

    @property
    def offset(self) -> int:
        return self.syntax_error.offset

    @property
    def line(self) -> int:
        return self.syntax_error.line

    @property
    def column(self) -> int:
        return self.syntax_error.column

    @property
    def message(self) -> str:
        return f"Failed to parse {self.path}:{self.line}:{self.column}: {self.syntax_error.message}"
