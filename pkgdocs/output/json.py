"""
JsonRenderer — Structured-data responses

Serializes the unrendered records behind a page:
- Pretty-printed by default, compact on request
- Keys starting with "_" are stripped
- Records with to_dict() serialize through it
"""

import json
from typing import TYPE_CHECKING, Any

from .base import BaseRenderer

if TYPE_CHECKING:
    from . import OutputSpec


class JsonRenderer(BaseRenderer):
    """Render the structured shaper as JSON text."""

    format = "structured"
    media_type = "application/json"

    def __init__(self, compact: bool = False):
        """
        Args:
            compact: If True, output a single line (no indentation)
        """
        self.compact = compact

    def render(self, spec: "OutputSpec") -> str:
        data = self._clean_data(spec.structured())

        if self.compact:
            return json.dumps(data, default=self._json_serializer, ensure_ascii=False)
        return json.dumps(
            data,
            indent=2,
            default=self._json_serializer,
            ensure_ascii=False
        )

    def _clean_data(self, data: Any) -> Any:
        """Remove internal keys (starting with _) at every depth."""
        if isinstance(data, dict):
            return {
                k: self._clean_data(v)
                for k, v in data.items()
                if not str(k).startswith("_")
            }
        elif isinstance(data, list):
            return [self._clean_data(item) for item in data]
        else:
            return data

    def _json_serializer(self, obj: Any) -> Any:
        """JSON fallback for records and enums."""
        if hasattr(obj, "to_dict"):
            return self._clean_data(obj.to_dict())
        if hasattr(obj, "value"):  # Enum
            return obj.value
        if hasattr(obj, "__dict__"):
            return {
                k: v for k, v in obj.__dict__.items()
                if not k.startswith("_")
            }
        # Last resort: string representation
        return str(obj)
