"""
Entry points: inline a parsed tree, a file on disk, or write the result out.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields, replace
from pathlib import Path

from strif import atomic_output_file

from inlinemod.config import InlineConfig
from inlinemod.filesystem import FileSystem, LocalFileSystem
from inlinemod.inliner import Inliner
from inlinemod.loader import OnLoad, SourceLoader
from inlinemod.mod_path import (
    DEFAULT_EXTENSION,
    DEFAULT_INDEX_FILENAME,
    PathResolver,
    ResolutionContext,
)
from inlinemod.model import SourceTree
from inlinemod.syntax import print_tree

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InlinerBuilder:
    """
    Settings for inlining. Adjust with `dataclasses.replace` or `from_config`,
    then call `parse_and_inline_modules` on one or more files.

    `root` says whether the entry file is a crate root (the file handed to the
    compiler) or a module file included from elsewhere; it decides where the
    entry file's own `mod` declarations are looked up.
    """

    root: bool = True
    extension: str = DEFAULT_EXTENSION
    index_filename: str = DEFAULT_INDEX_FILENAME
    encoding: str = "utf-8"
    fs: FileSystem = field(default_factory=LocalFileSystem)

    @classmethod
    def from_config(cls, config: InlineConfig | None, **overrides: object) -> InlinerBuilder:
        """Defaults, then values set in `config`, then explicit `overrides`."""
        builder = cls(**overrides)  # pyright: ignore[reportArgumentType]
        if config is None:
            return builder
        values = {
            f.name: getattr(config, f.name)
            for f in fields(config)
            if getattr(config, f.name) is not None and f.name not in overrides
        }
        return replace(builder, **values)

    def _inliner(self, on_load: OnLoad | None = None) -> Inliner:
        resolver = PathResolver(self.fs, self.extension, self.index_filename)
        loader = SourceLoader(self.fs, self.encoding, on_load)
        return Inliner(resolver, loader)

    def _context(self, src_file: Path) -> ResolutionContext:
        return ResolutionContext.for_file(src_file, self.root, index_filename=self.index_filename)

    def inline_tree(self, tree: SourceTree, src_file: str | Path) -> SourceTree:
        """Inline the module declarations of an already-parsed `tree` read from `src_file`."""
        return self._inliner().inline(tree, self._context(Path(src_file)))

    def _parse_and_inline(self, src_file: Path, on_load: OnLoad | None) -> SourceTree:
        inliner = self._inliner(on_load)
        tree = inliner.loader.load(src_file)
        logger.debug("Inlining modules of %s (root=%s)", src_file, self.root)
        return inliner.inline(tree, self._context(src_file))

    def inline_with_callback(self, src_file: str | Path, on_load: OnLoad) -> SourceTree:
        """
        Parse `src_file` and inline all its modules, calling `on_load(path, text)`
        for every file read, the entry file included, in the order they are read.
        """
        return self._parse_and_inline(Path(src_file), on_load)

    def parse_and_inline_modules(self, src_file: str | Path) -> SourceTree:
        """Parse `src_file` and return a tree with all modules recursively inlined."""
        return self._parse_and_inline(Path(src_file), None)


def inline_modules(
    tree: SourceTree,
    src_file: str | Path,
    root: bool = True,
    fs: FileSystem | None = None,
) -> SourceTree:
    """
    Inline every `mod foo;` in `tree`, which was parsed from `src_file`.

    Raises `InlineIoError` or `InlineParseError` on the first failure; no
    partial tree is returned.
    """
    builder = InlinerBuilder(root=root, fs=fs or LocalFileSystem())
    return builder.inline_tree(tree, src_file)


def parse_and_inline_modules(src_file: str | Path) -> SourceTree:
    """Parse `src_file` as a crate root and inline all modules, with default settings."""
    return InlinerBuilder().parse_and_inline_modules(src_file)


def inline_file(
    src_file: str | Path,
    output: str | Path,
    builder: InlinerBuilder | None = None,
    make_parents: bool = False,
) -> SourceTree:
    """
    Inline `src_file` and write the printed result to `output`. The output is
    written atomically and only after inlining succeeded.
    """
    builder = builder or InlinerBuilder()
    tree = builder.parse_and_inline_modules(src_file)
    with atomic_output_file(Path(output), make_parents=make_parents) as tmp_path:
        Path(tmp_path).write_text(print_tree(tree), encoding=builder.encoding)
    logger.debug("Wrote inlined source of %s to %s", src_file, output)
    return tree
