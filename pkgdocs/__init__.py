"""
pkgdocs — Browsable documentation for published packages

Turns stored package rows into documentation pages:
- latest version by SemVer precedence
- exposed-module index with page links
- module docs rebuilt from @docs directives and symbol tables
- markup / structured / text responses from one view

Usage:
    pkgdocs search json
    pkgdocs overview elm/core
    pkgdocs --format text module elm/core 1.0.5 List
"""

__version__ = "0.1.0"

# Core layer
from .core.versions import VersionResolver
from .core.modules import ModuleLink, ModuleIndexNormalizer
from .core.symbols import NodeKind, ProseNode, SymbolNode, UnresolvedNode, ModuleInfo, SymbolResolver
from .core.doccomment import DocCommentParser, UnresolvedPolicy
from .core.links import overview_link, module_link

# Presentation layer
from .presentation.markdown import MarkdownRenderer
from .presentation.views import ViewModelAssembler

# Output
from .output import OutputSpec, negotiate_format, render

# Store and service
from .store import PackageStore, PackageOverview, DirectoryStore
from .service import PackageDocs

# Config and errors
from .config import Config, ConfigManager, get_config
from .errors import (
    PkgDocsError, NotFoundError, MalformedMetadataError,
    InvalidVersionError, UnresolvedSymbolError, ConfigError,
)

__all__ = [
    # Core
    'VersionResolver',
    'ModuleLink', 'ModuleIndexNormalizer',
    'NodeKind', 'ProseNode', 'SymbolNode', 'UnresolvedNode', 'ModuleInfo', 'SymbolResolver',
    'DocCommentParser', 'UnresolvedPolicy',
    'overview_link', 'module_link',
    # Presentation
    'MarkdownRenderer', 'ViewModelAssembler',
    # Output
    'OutputSpec', 'negotiate_format', 'render',
    # Store and service
    'PackageStore', 'PackageOverview', 'DirectoryStore', 'PackageDocs',
    # Config
    'Config', 'ConfigManager', 'get_config',
    # Errors
    'PkgDocsError', 'NotFoundError', 'MalformedMetadataError',
    'InvalidVersionError', 'UnresolvedSymbolError', 'ConfigError',
]
