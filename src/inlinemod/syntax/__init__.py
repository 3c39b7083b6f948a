"""
Rust syntax adapter: text to `SourceTree` and back.

Usage::

    from inlinemod.syntax import parse_source, print_tree

    tree = parse_source("mod a;\\nfn main() {}\\n")
    assert print_tree(tree) == "mod a;\\nfn main() {}\\n"
"""

from inlinemod.syntax.literals import decode_string_literal
from inlinemod.syntax.parser import doc_comment_style, parse_source
from inlinemod.syntax.printer import print_tree

__all__ = [
    "decode_string_literal",
    "doc_comment_style",
    "parse_source",
    "print_tree",
]
