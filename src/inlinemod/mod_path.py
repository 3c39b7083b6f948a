"""
Resolution of `mod foo;` declarations to file paths.

DIRECTORY CONTEXT
-----------------
Each loaded file has a base directory for the modules it declares:
- The root file (the one handed to the compiler) uses its containing directory.
- A file named like the index file (`mod.rs`) also uses its containing directory.
- Any other file `dir/name.rs` uses `dir/name/`.

Braced modules do not start a new file, but they do add a path segment: in
`dir/name.rs`, `mod inner { mod leaf; }` looks for `leaf` under
`dir/name/inner/`. A `#[path = "..."]` on a braced module replaces its segment.

CANDIDATES
----------
For a declaration `foo` with no `#[path]` attribute, in order:
1. `<current_directory>/foo.rs`
2. `<current_directory>/foo/mod.rs`

The first one that exists wins, even when both do. If neither exists the
resolution fails with an `InlineIoError` citing `foo.rs`. A `#[path]`
attribute is joined to the current directory and trusted without checking.
"""

from __future__ import annotations

import errno
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from inlinemod.errors import InlineIoError
from inlinemod.filesystem import FileSystem
from inlinemod.model import ModuleDeclaration

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = "rs"
DEFAULT_INDEX_FILENAME = "mod.rs"


def path_override(decl: ModuleDeclaration) -> str | None:
    """The value of the first outer `#[path = "..."]` attribute, if any."""
    for attr in decl.attributes:
        if not attr.is_inner and attr.name == "path" and attr.value is not None:
            return attr.value
    return None


def file_directory(path: Path, root: bool, index_filename: str = DEFAULT_INDEX_FILENAME) -> Path:
    """The directory that modules declared in the file at `path` are resolved against."""
    if root or path.name == index_filename:
        return path.parent
    return path.parent / path.stem


@dataclass(frozen=True)
class ResolutionContext:
    """
    Where the inliner currently is: the file being expanded, its base
    directory, the module path from the crate root, and the segments added by
    enclosing braced modules within that file.
    """

    source_path: Path
    directory: Path
    module_path: tuple[str, ...] = ()
    segments: tuple[str, ...] = ()
    root: bool = True

    @classmethod
    def for_file(
        cls,
        path: str | Path,
        root: bool = True,
        module_path: tuple[str, ...] = (),
        index_filename: str = DEFAULT_INDEX_FILENAME,
    ) -> ResolutionContext:
        path = Path(path)
        return cls(
            source_path=path,
            directory=file_directory(path, root, index_filename),
            module_path=module_path,
            root=root,
        )

    @property
    def current_directory(self) -> Path:
        return self.directory.joinpath(*self.segments)

    def enter_inline(self, decl: ModuleDeclaration) -> ResolutionContext:
        """Context for the body of a braced module within the same file."""
        segment = path_override(decl) or decl.ident
        return ResolutionContext(
            source_path=self.source_path,
            directory=self.directory,
            module_path=self.module_path + (decl.ident,),
            segments=self.segments + (segment,),
            root=self.root,
        )

    def enter_file(
        self,
        decl: ModuleDeclaration,
        path: Path,
        index_filename: str = DEFAULT_INDEX_FILENAME,
    ) -> ResolutionContext:
        """Context for the contents of the file that `decl` resolved to."""
        return ResolutionContext.for_file(
            path,
            root=False,
            module_path=self.module_path + (decl.ident,),
            index_filename=index_filename,
        )


class PathResolver:
    """Maps an external module declaration to exactly one file path."""

    def __init__(
        self,
        fs: FileSystem,
        extension: str = DEFAULT_EXTENSION,
        index_filename: str = DEFAULT_INDEX_FILENAME,
    ) -> None:
        self.fs: FileSystem = fs
        self.extension: str = extension
        self.index_filename: str = index_filename

    def candidates(self, context: ResolutionContext, decl: ModuleDeclaration) -> list[Path]:
        """Candidate paths for `decl`, in order of precedence."""
        base = context.current_directory
        override = path_override(decl)
        if override is not None:
            return [base / override]
        return [base / f"{decl.ident}.{self.extension}", base / decl.ident / self.index_filename]

    def resolve(self, context: ResolutionContext, decl: ModuleDeclaration) -> Path:
        """
        Pick the file for `decl`. Raises `InlineIoError` citing the first
        candidate when no default candidate exists.
        """
        candidates = self.candidates(context, decl)
        if path_override(decl) is not None:
            logger.debug("Module %s uses path override %s", decl.ident, candidates[0])
            return candidates[0]

        for candidate in candidates:
            if self.fs.exists(candidate):
                logger.debug("Resolved module %s to %s", decl.ident, candidate)
                return candidate

        primary = candidates[0]
        cause = FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(primary))
        raise InlineIoError(primary, cause) from cause
