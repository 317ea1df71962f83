"""
TextRenderer — Plain-text responses

Prose-only reduction of a page: search results one per line, a README,
or a module's documentation without markup.
"""

from typing import TYPE_CHECKING

from .base import BaseRenderer

if TYPE_CHECKING:
    from . import OutputSpec


class TextRenderer(BaseRenderer):
    """Render the text shaper as a plain string."""

    format = "text"
    media_type = "text/plain"

    def render(self, spec: "OutputSpec") -> str:
        text = spec.text()
        if isinstance(text, (list, tuple)):
            return "\n".join(str(line) for line in text)
        return "" if text is None else str(text)
