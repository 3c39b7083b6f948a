"""
Immutable syntax tree for a Rust source file, at item granularity.

Only module declarations are modeled structurally. Every other item is kept as
verbatim source text, so printing a tree reproduces the items exactly.

A module declaration's content is a two-case sum type: `Inline(body)` for a
braced module and `External()` for a `mod foo;` declaration whose body lives in
another file. After inlining, a tree contains no `External` content.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class AttrStyle(str, Enum):
    OUTER = "outer"
    INNER = "inner"


@dataclass(frozen=True)
class Attribute:
    """
    An attribute or doc comment, kept as its verbatim source `text`.

    `name` is the attribute path (`path`, `cfg`, `doc`, ...). `value` is the
    decoded string for `name = "literal"` forms and `None` otherwise. Doc
    comments (`///`, `//!`, `/** */`, `/*! */`) have `name == "doc"` and
    `is_doc_comment` set.
    """

    text: str
    style: AttrStyle = AttrStyle.OUTER
    name: str | None = None
    value: str | None = None
    is_doc_comment: bool = False

    @property
    def is_inner(self) -> bool:
        return self.style is AttrStyle.INNER


@dataclass(frozen=True)
class SourceTree:
    """An ordered sequence of items plus the file-level (inner) attributes."""

    items: tuple[Item, ...] = ()
    attributes: tuple[Attribute, ...] = ()


@dataclass(frozen=True)
class Inline:
    """Module content written between braces, or spliced in from a file."""

    body: SourceTree = field(default_factory=SourceTree)


@dataclass(frozen=True)
class External:
    """Module content that lives in another file (`mod foo;`)."""


ModuleContent = Union[Inline, External]


@dataclass(frozen=True)
class ModuleDeclaration:
    """
    A `mod` item. `name` is the identifier as written (possibly `r#name`),
    `visibility` is the visibility text (`""`, `pub`, `pub(crate)`, ...).
    """

    name: str
    content: ModuleContent = field(default_factory=External)
    attributes: tuple[Attribute, ...] = ()
    visibility: str = ""

    @property
    def ident(self) -> str:
        """The identifier with any raw-identifier prefix removed."""
        return self.name[2:] if self.name.startswith("r#") else self.name

    @property
    def is_external(self) -> bool:
        return isinstance(self.content, External)

    @property
    def body(self) -> SourceTree | None:
        return self.content.body if isinstance(self.content, Inline) else None


@dataclass(frozen=True)
class VerbatimItem:
    """Any non-module item. `kind` is the parser's node type, e.g. `function_item`."""

    text: str
    kind: str
    attributes: tuple[Attribute, ...] = ()


@dataclass(frozen=True)
class Comment:
    """A free-standing (non-doc) comment between items."""

    text: str


Item = Union[ModuleDeclaration, VerbatimItem, Comment]


def iter_modules(
    tree: SourceTree, prefix: tuple[str, ...] = ()
) -> Iterator[tuple[tuple[str, ...], ModuleDeclaration]]:
    """
    Yield `(module_path, declaration)` for every module declaration in `tree`,
    depth-first in source order.
    """
    for item in tree.items:
        if isinstance(item, ModuleDeclaration):
            path = prefix + (item.ident,)
            yield path, item
            if item.body is not None:
                yield from iter_modules(item.body, path)


def has_external_modules(tree: SourceTree) -> bool:
    """True if any module declaration at any depth is still `External`."""
    return any(decl.is_external for _, decl in iter_modules(tree))


def find_module(tree: SourceTree, *names: str) -> ModuleDeclaration | None:
    """Look up a module by its path of identifiers, e.g. `find_module(tree, "a", "b")`."""
    for path, decl in iter_modules(tree):
        if path == names:
            return decl
    return None
