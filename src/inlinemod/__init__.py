"""
Inline Rust modules declared as `mod foo;` into a single syntax tree.

Usage::

    from inlinemod import InlinerBuilder, print_tree

    tree = InlinerBuilder().parse_and_inline_modules("src/lib.rs")
    print(print_tree(tree))
"""

from inlinemod.api import InlinerBuilder, inline_file, inline_modules, parse_and_inline_modules
from inlinemod.errors import (
    ErrorKind,
    InlineError,
    InlineIoError,
    InlineParseError,
    SourceSyntaxError,
)
from inlinemod.filesystem import FileSystem, LocalFileSystem, MemoryFileSystem
from inlinemod.mod_path import PathResolver, ResolutionContext
from inlinemod.model import (
    Attribute,
    AttrStyle,
    Comment,
    External,
    Inline,
    ModuleDeclaration,
    SourceTree,
    VerbatimItem,
    find_module,
    has_external_modules,
    iter_modules,
)
from inlinemod.syntax import parse_source, print_tree

__all__ = [
    "AttrStyle",
    "Attribute",
    "Comment",
    "ErrorKind",
    "External",
    "FileSystem",
    "Inline",
    "InlineError",
    "InlineIoError",
    "InlineParseError",
    "InlinerBuilder",
    "LocalFileSystem",
    "MemoryFileSystem",
    "ModuleDeclaration",
    "PathResolver",
    "ResolutionContext",
    "SourceSyntaxError",
    "SourceTree",
    "VerbatimItem",
    "find_module",
    "has_external_modules",
    "inline_file",
    "inline_modules",
    "iter_modules",
    "parse_and_inline_modules",
    "parse_source",
    "print_tree",
]
