"""
Item-level Rust parser built on tree-sitter.

Produces a `SourceTree` in which module declarations are structured and every
other item is kept verbatim. Tree-sitter recovers from errors instead of
failing, so any ERROR or missing node in the parse is turned into a
`SourceSyntaxError` pointing at the first one.
"""

from __future__ import annotations

from collections.abc import Iterable

import tree_sitter
import tree_sitter_rust

from inlinemod.errors import SourceSyntaxError
from inlinemod.model import (
    Attribute,
    AttrStyle,
    Comment,
    External,
    Inline,
    Item,
    ModuleContent,
    ModuleDeclaration,
    SourceTree,
    VerbatimItem,
)
from inlinemod.syntax.literals import decode_string_literal

RUST_LANGUAGE = tree_sitter.Language(tree_sitter_rust.language())

_COMMENT_TYPES = frozenset({"line_comment", "block_comment"})

# Longest snippet of unexpected text quoted in syntax error messages.
_SNIPPET_LEN = 24


def parse_source(text: str) -> SourceTree:
    """
    Parse Rust source text into a `SourceTree`.

    Raises `SourceSyntaxError` if the text is not syntactically valid.
    """
    source = text.encode("utf-8")
    parser = tree_sitter.Parser(RUST_LANGUAGE)
    root = parser.parse(source).root_node
    if root.has_error:
        raise _syntax_error(source, _first_error(root) or root)
    items, attributes = _ItemCollector(source).collect(root.children)
    return SourceTree(items=items, attributes=attributes)


def doc_comment_style(text: str) -> AttrStyle | None:
    """
    Classify a comment: `//!` and `/*!` are inner doc comments, `///` and `/**`
    are outer doc comments, anything else (including `////` and `/***`) is a
    plain comment and yields `None`.
    """
    if text.startswith(("//!", "/*!")):
        return AttrStyle.INNER
    if text.startswith("///") and not text.startswith("////"):
        return AttrStyle.OUTER
    if text.startswith("/**") and not text.startswith("/***") and text != "/**/":
        return AttrStyle.OUTER
    return None


class _ItemCollector:
    def __init__(self, source: bytes) -> None:
        self._source: bytes = source

    def _text(self, node: tree_sitter.Node) -> str:
        return self._source[node.start_byte : node.end_byte].decode("utf-8")

    def collect(
        self, nodes: Iterable[tree_sitter.Node]
    ) -> tuple[tuple[Item, ...], tuple[Attribute, ...]]:
        """
        Group a sequence of sibling nodes into items. Outer attributes and doc
        comments are siblings of the item they annotate in the tree-sitter
        grammar, so they are held as pending until the next item arrives.
        """
        items: list[Item] = []
        inner: list[Attribute] = []
        pending: list[Attribute] = []
        pending_start: tree_sitter.Node | None = None
        seen_item = False

        for node in nodes:
            if not node.is_named or node.type == "shebang":
                continue
            kind = node.type
            if kind == "inner_attribute_item":
                self._check_inner_allowed(node, seen_item or pending_start is not None)
                inner.append(self._attribute(node, AttrStyle.INNER))
            elif kind == "attribute_item":
                pending_start = pending_start or node
                pending.append(self._attribute(node, AttrStyle.OUTER))
            elif kind in _COMMENT_TYPES:
                text = self._text(node).rstrip("\r\n")
                style = doc_comment_style(text)
                if style is None:
                    # Plain comments inside an attribute run end up above it.
                    items.append(Comment(text))
                    continue
                doc = Attribute(text, style, name="doc", is_doc_comment=True)
                if style is AttrStyle.INNER:
                    self._check_inner_allowed(node, seen_item or pending_start is not None)
                    inner.append(doc)
                else:
                    pending_start = pending_start or node
                    pending.append(doc)
            else:
                if kind == "mod_item":
                    items.append(self._module(node, tuple(pending)))
                else:
                    items.append(VerbatimItem(self._text(node), kind, tuple(pending)))
                pending = []
                pending_start = None
                seen_item = True

        if pending_start is not None:
            raise _syntax_error(self._source, pending_start, "expected an item after attributes")
        return tuple(items), tuple(inner)

    def _check_inner_allowed(self, node: tree_sitter.Node, after_item: bool) -> None:
        # Inner attributes and inner doc comments must precede every item.
        if after_item:
            raise _syntax_error(self._source, node, "inner attribute after an item")

    def _attribute(self, node: tree_sitter.Node, style: AttrStyle) -> Attribute:
        name: str | None = None
        value: str | None = None
        attr = next((c for c in node.named_children if c.type == "attribute"), None)
        if attr is not None and attr.named_children:
            name = self._text(attr.named_children[0])
            value_node = attr.child_by_field_name("value")
            if value_node is not None:
                try:
                    value = decode_string_literal(self._text(value_node))
                except ValueError as e:
                    raise _syntax_error(self._source, value_node, str(e)) from e
        return Attribute(self._text(node), style, name=name, value=value)

    def _module(self, node: tree_sitter.Node, attributes: tuple[Attribute, ...]) -> ModuleDeclaration:
        name_node = node.child_by_field_name("name")
        body_node = node.child_by_field_name("body")
        visibility = next(
            (self._text(c) for c in node.named_children if c.type == "visibility_modifier"), ""
        )
        if name_node is None:
            raise _syntax_error(self._source, node, "expected a module name")

        content: ModuleContent
        if body_node is None:
            content = External()
        else:
            items, inner = self.collect(body_node.children)
            # Inner attributes of a braced module belong to the declaration.
            attributes += inner
            content = Inline(SourceTree(items=items))

        return ModuleDeclaration(
            name=self._text(name_node),
            content=content,
            attributes=attributes,
            visibility=visibility,
        )


def _first_error(node: tree_sitter.Node) -> tree_sitter.Node | None:
    """Depth-first search for the first ERROR or missing node."""
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def _syntax_error(
    source: bytes, node: tree_sitter.Node, message: str | None = None
) -> SourceSyntaxError:
    row, column = node.start_point
    if message is None:
        if node.is_missing:
            message = f"expected `{node.type}`"
        else:
            snippet = source[node.start_byte : node.end_byte].decode("utf-8", "replace")
            snippet = snippet.splitlines()[0][:_SNIPPET_LEN] if snippet.strip() else ""
            message = f"unexpected `{snippet}`" if snippet else "unexpected syntax"
    return SourceSyntaxError(message, offset=node.start_byte, line=row + 1, column=column + 1)
