"""
The two filesystem operations the inliner needs: existence checks and reads.

`LocalFileSystem` uses the disk. `MemoryFileSystem` serves files from a dict,
which keeps resolution testable and lets callers inline sources they hold in
memory.
"""

from __future__ import annotations

import errno
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol


class FileSystem(Protocol):
    def exists(self, path: Path) -> bool: ...

    def read(self, path: Path) -> bytes: ...


class LocalFileSystem:
    """Reads from the local disk."""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def read(self, path: Path) -> bytes:
        return path.read_bytes()


@dataclass
class MemoryFileSystem:
    """
    In-memory files keyed by path. Paths are compared as `Path` objects, so
    `"src/lib.rs"` and `Path("src") / "lib.rs"` are the same file.
    """

    files: dict[Path, bytes] = field(default_factory=dict)

    def add(self, path: str | Path, contents: str | bytes) -> MemoryFileSystem:
        data = contents.encode("utf-8") if isinstance(contents, str) else contents
        self.files[Path(path)] = data
        return self

    def exists(self, path: Path) -> bool:
        return Path(path) in self.files

    def read(self, path: Path) -> bytes:
        try:
            return self.files[Path(path)]
        except KeyError:
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path)) from None
