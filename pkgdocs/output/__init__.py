"""
Output Module — Content-negotiated response shaping

Separates data from presentation. Views return an OutputSpec holding
one shaper per format; the caller negotiates a format and exactly one
shaper runs.

Usage:
    from pkgdocs.output import OutputSpec, negotiate_format, render

    # In a view:
    return OutputSpec(
        template="package_search",
        markup=lambda: {"query": query, "results": results},
        structured=lambda: results,
        text=lambda: "\\n".join(results),
    )

    # At the boundary:
    fmt = negotiate_format(requested=None, accept="application/json")
    payload = render(spec, format=fmt)
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

# Re-export for convenience
from .base import BaseRenderer
from .markup import MarkupRenderer
from .json import JsonRenderer
from .text import TextRenderer


# =============================================================================
# OutputSpec — Lazy shapers for one response
# =============================================================================

@dataclass
class OutputSpec:
    """
    Envelope that views return for rendering.

    Shapers are zero-argument callables so that only the negotiated
    format does any work.

    Attributes:
        template: Page template the markup payload is meant for
        markup: Builds the fully rendered view model
        structured: Builds the underlying records (unrendered)
        text: Builds the plain-text reduction
    """
    template: str
    markup: Callable[[], Dict[str, Any]]
    structured: Callable[[], Any]
    text: Callable[[], Any]


# =============================================================================
# Format Registry
# =============================================================================

RENDERERS = {
    "markup": MarkupRenderer,
    "structured": JsonRenderer,
    "text": TextRenderer,
}

FORMATS = tuple(RENDERERS.keys())

# Valid format values for config/CLI
VALID_FORMATS = ("auto",) + FORMATS

# Used when nothing was requested
DEFAULT_FORMAT = "structured"

# Request spellings accepted for each format
FORMAT_ALIASES = {
    "markup": "markup",
    "html": "markup",
    "structured": "structured",
    "json": "structured",
    "text": "text",
    "plain": "text",
}

MEDIA_TYPES = {cls.media_type: name for name, cls in RENDERERS.items()}


# =============================================================================
# Negotiation
# =============================================================================

def parse_accept(accept: str) -> List[str]:
    """
    Media types of an Accept header, most preferred first.

    Entries with q=0 are dropped; ties keep header order.
    """
    weighted: List[Tuple[float, int, str]] = []
    for position, entry in enumerate(accept.split(",")):
        parts = [p.strip() for p in entry.split(";")]
        media = parts[0].lower()
        if not media:
            continue
        quality = 1.0
        for param in parts[1:]:
            key, _, value = param.partition("=")
            if key.strip().lower() == "q":
                try:
                    quality = float(value)
                except ValueError:
                    quality = 0.0
        if quality > 0:
            weighted.append((-quality, position, media))
    return [media for _, _, media in sorted(weighted)]


def negotiate_format(
    requested: Optional[str] = None,
    accept: Optional[str] = None,
    default: str = DEFAULT_FORMAT
) -> str:
    """
    Pick the response format.

    Priority: explicit request, then the Accept header, then `default`.

    Args:
        requested: Explicit format ("markup", "html", "json", ...) or None/"auto"
        accept: HTTP Accept header value
        default: Format when neither says anything usable

    Returns:
        One of FORMATS

    Raises:
        ValueError: If `requested` names an unknown format
    """
    if default == "auto" or default not in RENDERERS:
        default = DEFAULT_FORMAT

    if requested and requested != "auto":
        key = requested.lower()
        if key not in FORMAT_ALIASES:
            valid = ", ".join(VALID_FORMATS)
            raise ValueError(f"Unknown format '{requested}'. Valid: {valid}")
        return FORMAT_ALIASES[key]

    if accept:
        for media in parse_accept(accept):
            if media in MEDIA_TYPES:
                return MEDIA_TYPES[media]
            if media in ("*/*", "*"):
                return default

    return default


# =============================================================================
# Main Render Function
# =============================================================================

def get_renderer(format: str) -> BaseRenderer:
    """
    Get renderer instance for a format.

    Raises:
        ValueError: If format is invalid
    """
    if format not in RENDERERS:
        valid = ", ".join(RENDERERS.keys())
        raise ValueError(f"Unknown format '{format}'. Valid: {valid}")
    return RENDERERS[format]()


def render(spec: OutputSpec, format: str = "auto") -> Any:
    """
    Run the one shaper matching `format`.

    Args:
        spec: OutputSpec from a view
        format: "auto" | "markup" | "structured" | "text"

    Returns:
        View-model dict (markup), JSON text (structured) or str (text)
    """
    effective_format = DEFAULT_FORMAT if format == "auto" else format
    return get_renderer(effective_format).render(spec)


def media_type_for(format: str) -> str:
    """Content-Type of a negotiated format."""
    return get_renderer(format).media_type


__all__ = [
    "OutputSpec", "BaseRenderer", "MarkupRenderer", "JsonRenderer", "TextRenderer",
    "RENDERERS", "FORMATS", "VALID_FORMATS", "DEFAULT_FORMAT",
    "parse_accept", "negotiate_format", "get_renderer", "render", "media_type_for",
]
