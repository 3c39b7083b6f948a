"""Reading and parsing of module files."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from inlinemod.errors import InlineIoError, InlineParseError, SourceSyntaxError
from inlinemod.filesystem import FileSystem
from inlinemod.model import SourceTree
from inlinemod.syntax import parse_source

logger = logging.getLogger(__name__)

OnLoad = Callable[[Path, str], None]
"""Called with each file's path and text after it is read, before parsing."""


class SourceLoader:
    """
    Loads a file into a `SourceTree`. The file-level (inner) attributes are
    on the returned tree's `attributes`.
    """

    def __init__(
        self,
        fs: FileSystem,
        encoding: str = "utf-8",
        on_load: OnLoad | None = None,
    ) -> None:
        self.fs: FileSystem = fs
        self.encoding: str = encoding
        self.on_load: OnLoad | None = on_load

    def read_text(self, path: Path) -> str:
        try:
            return self.fs.read(path).decode(self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise InlineIoError(path, e) from e

    def load(self, path: Path) -> SourceTree:
        text = self.read_text(path)
        logger.debug("Loaded %s (%d chars)", path, len(text))
        if self.on_load is not None:
            self.on_load(path, text)
        try:
            return parse_source(text)
        except SourceSyntaxError as e:
            raise InlineParseError(path, e) from e
