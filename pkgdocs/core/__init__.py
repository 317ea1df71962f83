"""
Core — Documentation view-model pipeline

Pure functions over already-fetched package data:
- Versions: latest version by SemVer precedence
- Links: percent-encoded page URLs
- Modules: exposed-modules normalization into a linked index
- Symbols: symbol tables, documentation nodes, name resolution
- DocComment: @docs directive parsing
"""

from .versions import VersionResolver, compare_versions, parse_version
from .links import overview_link, module_link, encode_segment, decode_segment
from .modules import ModuleLink, ModuleIndex, ModuleIndexNormalizer, index_to_dict, UNNAMED_GROUP
from .symbols import (
    NodeKind, ProseNode, SymbolNode, UnresolvedNode, DocNode,
    ModuleInfo, SymbolResolver, ProseRenderer, SYMBOL_TABLES,
)
from .doccomment import DocCommentParser, UnresolvedPolicy, VALID_POLICIES

__all__ = [
    # Versions
    "VersionResolver", "compare_versions", "parse_version",
    # Links
    "overview_link", "module_link", "encode_segment", "decode_segment",
    # Modules
    "ModuleLink", "ModuleIndex", "ModuleIndexNormalizer", "index_to_dict", "UNNAMED_GROUP",
    # Symbols
    "NodeKind", "ProseNode", "SymbolNode", "UnresolvedNode", "DocNode",
    "ModuleInfo", "SymbolResolver", "ProseRenderer", "SYMBOL_TABLES",
    # Doc comments
    "DocCommentParser", "UnresolvedPolicy", "VALID_POLICIES",
]
