"""
Recursive expansion of external module declarations.

The walk is depth-first in source order and rebuilds the tree instead of
mutating it. Only module declarations are visited; modules declared inside
functions or other items are left alone. The first error aborts the whole
walk.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from inlinemod.loader import SourceLoader
from inlinemod.mod_path import PathResolver, ResolutionContext
from inlinemod.model import Inline, Item, ModuleDeclaration, SourceTree

logger = logging.getLogger(__name__)


class Inliner:
    def __init__(self, resolver: PathResolver, loader: SourceLoader) -> None:
        self.resolver: PathResolver = resolver
        self.loader: SourceLoader = loader

    def inline(self, tree: SourceTree, context: ResolutionContext) -> SourceTree:
        """Return `tree` with every module declaration, at any depth, inlined."""
        items = tuple(self._inline_item(item, context) for item in tree.items)
        return replace(tree, items=items)

    def _inline_item(self, item: Item, context: ResolutionContext) -> Item:
        if not isinstance(item, ModuleDeclaration):
            return item
        if isinstance(item.content, Inline):
            body = self.inline(item.content.body, context.enter_inline(item))
            return replace(item, content=Inline(body))
        return self._inline_external(item, context)

    def _inline_external(self, decl: ModuleDeclaration, context: ResolutionContext) -> ModuleDeclaration:
        path = self.resolver.resolve(context, decl)
        loaded = self.loader.load(path)
        child_context = context.enter_file(decl, path, self.resolver.index_filename)
        logger.debug(
            "Inlining module %s from %s (children in %s)",
            "::".join(child_context.module_path),
            path,
            child_context.directory,
        )
        body = self.inline(replace(loaded, attributes=()), child_context)
        return replace(
            decl,
            attributes=decl.attributes + loaded.attributes,
            content=Inline(body),
        )
