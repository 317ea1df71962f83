"""
MarkupRenderer — Document-oriented responses

Produces the view model a page template consumes. Templating itself
happens outside this package; the payload names the template and holds
its fully rendered context (prose already converted to markup).
"""

from typing import TYPE_CHECKING, Any, Dict

from .base import BaseRenderer

if TYPE_CHECKING:
    from . import OutputSpec


class MarkupRenderer(BaseRenderer):
    """Render the markup shaper into a template payload."""

    format = "markup"
    media_type = "text/html"

    def render(self, spec: "OutputSpec") -> Dict[str, Any]:
        return {
            "template": spec.template,
            "context": spec.markup(),
        }
