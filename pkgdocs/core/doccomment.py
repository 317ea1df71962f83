"""
DocCommentParser — Rebuild a module's documentation body

A module comment is free prose followed by @docs directive blocks:

    Intro text.
    @docs foo
    More text.
    @docs bar, baz

Parsing splits on the "\\n@docs" delimiter first, then on commas. Each
comma-separated piece names one symbol (its first word); whatever follows
that word is prose. The example yields:

    prose("Intro text."), foo, prose("More text."), bar, baz

Comma splitting also cuts through prose that follows a symbol name. That
is how the source format behaves and is kept as is.
"""

import logging
from enum import Enum
from typing import List

from ..errors import UnresolvedSymbolError
from .symbols import DocNode, ModuleInfo, ProseNode, ProseRenderer, SymbolResolver, UnresolvedNode


logger = logging.getLogger(__name__)

DOCS_DELIMITER = "\n@docs"
NAME_SEPARATOR = ","


class UnresolvedPolicy(Enum):
    """What to do with a @docs name that matches no symbol."""
    DROP = "drop"                # Leave a gap in the node sequence
    PLACEHOLDER = "placeholder"  # Emit an UnresolvedNode and warn
    ERROR = "error"              # Raise UnresolvedSymbolError


VALID_POLICIES = tuple(policy.value for policy in UnresolvedPolicy)


class DocCommentParser:
    """
    Splits a module comment into ordered prose and symbol nodes.

    The parser holds no per-call state; one instance can serve any
    number of modules.
    """

    def __init__(
        self,
        render: ProseRenderer,
        resolver: SymbolResolver = None,
        unresolved: UnresolvedPolicy = UnresolvedPolicy.DROP
    ):
        """
        Args:
            render: Prose to markup function
            resolver: Symbol lookup (built from `render` if None)
            unresolved: Policy for names that match no symbol
        """
        self.render = render
        self.resolver = resolver or SymbolResolver(render)
        self.unresolved = UnresolvedPolicy(unresolved)

    def parse(self, module: ModuleInfo) -> List[DocNode]:
        """
        Parse a module's comment into documentation nodes.

        Args:
            module: Module with raw comment and symbol tables

        Returns:
            Intro prose node followed by the nodes of every directive,
            in authoring order

        Raises:
            UnresolvedSymbolError: Under the ERROR policy only
        """
        intro, *blocks = module.comment.split(DOCS_DELIMITER)

        nodes: List[DocNode] = [self._prose(intro)]
        for block in blocks:
            for sub_block in block.split(NAME_SEPARATOR):
                nodes.extend(self._parse_sub_block(module, sub_block))
        return nodes

    def _parse_sub_block(self, module: ModuleInfo, sub_block: str) -> List[DocNode]:
        words = sub_block.split()
        if not words:
            return []

        name = words[0]
        nodes: List[DocNode] = []

        symbol = self.resolver.resolve(module, name)
        if symbol is not None:
            nodes.append(symbol)
        else:
            placeholder = self._handle_unresolved(module, name)
            if placeholder is not None:
                nodes.append(placeholder)

        if len(words) > 1:
            rest = sub_block.lstrip()[len(name):].lstrip()
            nodes.append(self._prose(rest))

        return nodes

    def _handle_unresolved(self, module: ModuleInfo, name: str):
        if self.unresolved == UnresolvedPolicy.ERROR:
            raise UnresolvedSymbolError(module.name, name)
        if self.unresolved == UnresolvedPolicy.PLACEHOLDER:
            logger.warning("Module %s documents unknown symbol %r", module.name, name)
            return UnresolvedNode(name=name)
        logger.debug("Dropping unknown symbol %r in module %s", name, module.name)
        return None

    def _prose(self, text: str) -> ProseNode:
        return ProseNode(markup=self.render(text), text=text)
