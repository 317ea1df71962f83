"""
MarkdownRenderer — Prose to markup

A callable wrapping Python-Markdown. It is the ProseRenderer injected
into the parser, resolver and view assembler; nothing else renders text.

Usage:
    render = MarkdownRenderer(extensions=["fenced_code"])
    html = render("Some *prose*.")
"""

from typing import List, Optional, Sequence

import markdown


DEFAULT_EXTENSIONS = ("fenced_code", "tables")


class MarkdownRenderer:
    """
    Stateless Markdown to HTML conversion.

    A fresh converter is used per call so no state leaks between
    documents (footnotes, reference links). Raw HTML in the source is
    escaped, never passed through.
    """

    def __init__(self, extensions: Optional[Sequence[str]] = None):
        self.extensions: List[str] = list(DEFAULT_EXTENSIONS if extensions is None else extensions)

    def __call__(self, text: str) -> str:
        if not text:
            return ""
        md = markdown.Markdown(extensions=self.extensions)
        md.preprocessors.deregister("html_block")
        md.inlinePatterns.deregister("html")
        return md.convert(text)
