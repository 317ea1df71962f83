"""
Presentation — Rendering layer

- Markdown: prose to markup (the injected ProseRenderer)
- Views: page view models assembled from core results
"""

from .markdown import MarkdownRenderer, DEFAULT_EXTENSIONS
from .views import ViewModelAssembler, find_module, module_text, parse_json, symbol_header

__all__ = [
    # Markdown
    "MarkdownRenderer", "DEFAULT_EXTENSIONS",
    # Views
    "ViewModelAssembler", "find_module", "module_text", "parse_json", "symbol_header",
]
