"""
ModuleIndexNormalizer — Uniform grouped index of exposed modules

Packages declare their public modules either as a flat list:

    "exposed-modules": ["Json.Decode", "Json.Encode"]

or grouped under headings:

    "exposed-modules": {"Primitives": ["Basics", "String"], "Effects": ["Task"]}

Both normalize to the grouped form (a flat list becomes the "" group),
with each module name turned into a navigable ModuleLink.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, List

from ..errors import MalformedMetadataError
from .links import module_link


EXPOSED_MODULES_KEY = "exposed-modules"
UNNAMED_GROUP = ""


@dataclass(frozen=True)
class ModuleLink:
    """A module name with the link to its documentation page."""
    name: str
    link: str

    def to_dict(self) -> dict:
        return asdict(self)


ModuleIndex = Dict[str, List[ModuleLink]]


class ModuleIndexNormalizer:
    """Turns an exposed-modules declaration into a ModuleIndex."""

    def normalize(self, package_name: str, version: str, exposed_modules: Any) -> ModuleIndex:
        """
        Normalize exposed modules into groups of links.

        Group order and module order within each group follow the input.

        Args:
            package_name: Package the modules belong to
            version: Package version the links point at
            exposed_modules: Flat list of names or mapping group -> names

        Returns:
            Mapping group name -> list of ModuleLink

        Raises:
            MalformedMetadataError: If the declaration is neither shape
        """
        groups = self._as_groups(exposed_modules)

        index: ModuleIndex = {}
        for group, names in groups.items():
            if not isinstance(names, list):
                raise MalformedMetadataError(
                    f"Module group {group!r} must be a list, got {type(names).__name__}"
                )
            index[group] = [
                ModuleLink(name=name, link=module_link(package_name, version, name))
                for name in names
            ]
        return index

    def normalize_metadata(self, package_name: str, version: str, metadata: Dict[str, Any]) -> ModuleIndex:
        """Normalize the exposed-modules field of a parsed metadata object."""
        if not isinstance(metadata, dict):
            raise MalformedMetadataError("Package metadata must be a JSON object")
        if EXPOSED_MODULES_KEY not in metadata:
            raise MalformedMetadataError(f"Package metadata has no '{EXPOSED_MODULES_KEY}' field")
        return self.normalize(package_name, version, metadata[EXPOSED_MODULES_KEY])

    def _as_groups(self, exposed_modules: Any) -> Dict[str, Any]:
        if isinstance(exposed_modules, list):
            return {UNNAMED_GROUP: exposed_modules}
        if isinstance(exposed_modules, dict):
            return exposed_modules
        raise MalformedMetadataError(
            f"'{EXPOSED_MODULES_KEY}' must be a list or an object, "
            f"got {type(exposed_modules).__name__}"
        )


def index_to_dict(index: ModuleIndex) -> Dict[str, List[dict]]:
    """Plain-dict form of a ModuleIndex for view models."""
    return {group: [link.to_dict() for link in links] for group, links in index.items()}
