"""
BaseRenderer — Abstract base class for response shapers

Each renderer runs exactly one of the three shapers an OutputSpec
carries and returns the payload for that format.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from . import OutputSpec


class BaseRenderer(ABC):
    """
    Abstract base class for all output renderers.

    Subclasses set `format` and `media_type` and implement render().
    """

    format: str = ""
    media_type: str = ""

    @abstractmethod
    def render(self, spec: "OutputSpec") -> Any:
        """
        Produce the payload for this renderer's format.

        Args:
            spec: OutputSpec with the three shapers

        Returns:
            Format-specific payload
        """
        pass
