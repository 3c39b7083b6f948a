"""
Printer for `SourceTree`, the inverse of `parse_source`.

Module declarations are laid out with four-space indentation per nesting level.
Verbatim items and comments are emitted exactly as parsed: only their first
line is indented, so multi-line string literals inside them are never altered.
"""

from __future__ import annotations

from collections.abc import Iterable

from inlinemod.model import Attribute, Comment, Inline, Item, ModuleDeclaration, SourceTree

INDENT = "    "


def print_tree(tree: SourceTree) -> str:
    """Render a tree back to Rust source text."""
    lines: list[str] = []
    _emit_attributes(lines, tree.attributes, 0)
    _emit_items(lines, tree.items, 0)
    return "\n".join(lines) + "\n" if lines else ""


def _emit_text(lines: list[str], text: str, depth: int) -> None:
    first, *rest = text.split("\n")
    lines.append(INDENT * depth + first)
    lines.extend(rest)


def _emit_attributes(lines: list[str], attributes: Iterable[Attribute], depth: int) -> None:
    for attr in attributes:
        _emit_text(lines, attr.text, depth)


def _emit_items(lines: list[str], items: Iterable[Item], depth: int) -> None:
    for item in items:
        if isinstance(item, ModuleDeclaration):
            _emit_module(lines, item, depth)
        elif isinstance(item, Comment):
            _emit_text(lines, item.text, depth)
        else:
            _emit_attributes(lines, item.attributes, depth)
            _emit_text(lines, item.text, depth)


def _emit_module(lines: list[str], decl: ModuleDeclaration, depth: int) -> None:
    outer = [a for a in decl.attributes if not a.is_inner]
    inner = [a for a in decl.attributes if a.is_inner]
    _emit_attributes(lines, outer, depth)

    header = f"{decl.visibility} mod {decl.name}" if decl.visibility else f"mod {decl.name}"
    if not isinstance(decl.content, Inline):
        lines.append(f"{INDENT * depth}{header};")
        return

    body = decl.content.body
    inner.extend(body.attributes)
    if not inner and not body.items:
        lines.append(f"{INDENT * depth}{header} {{}}")
        return

    lines.append(f"{INDENT * depth}{header} {{")
    _emit_attributes(lines, inner, depth + 1)
    _emit_items(lines, body.items, depth + 1)
    lines.append(f"{INDENT * depth}}}")
