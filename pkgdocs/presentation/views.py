"""
ViewModelAssembler — Compose pipeline results into page responses

Every view takes already-fetched data and returns an OutputSpec with
three shapers: markup (rendered view model), structured (underlying
records) and text (prose only). No I/O happens here.

Pages:
    search    query + matching package names
    versions  every version of a package, newest first
    overview  README + exposed-module index of one version
    module    one module's documentation body + module index

Decisions that turn into "not found" (unknown module, no versions) are
made eagerly, before any format is negotiated.
"""

import json
from typing import Any, Dict, List, Optional

from ..core.doccomment import DocCommentParser, UnresolvedPolicy
from ..core.links import overview_link
from ..core.modules import ModuleIndexNormalizer, index_to_dict
from ..core.symbols import DocNode, ModuleInfo, NodeKind, ProseRenderer
from ..core.versions import VersionResolver
from ..errors import MalformedMetadataError, NotFoundError
from ..output import OutputSpec
from ..store import PackageOverview


def parse_json(text: str, what: str) -> Any:
    """
    Parse stored JSON text.

    Raises:
        MalformedMetadataError: If the text is not valid JSON
    """
    try:
        return json.loads(text)
    except (TypeError, json.JSONDecodeError) as e:
        raise MalformedMetadataError(f"Invalid {what} JSON: {e}") from e


def find_module(docs: Any, module_name: str) -> Optional[ModuleInfo]:
    """First module entry in a docs.json list with the given name."""
    if not isinstance(docs, list):
        raise MalformedMetadataError("Package docs must be a JSON list of modules")
    for entry in docs:
        if isinstance(entry, dict) and entry.get("name") == module_name:
            return ModuleInfo.from_dict(entry)
    return None


class ViewModelAssembler:
    """
    Builds page responses from package data.

    Holds only its collaborators; every call is independent.
    """

    def __init__(
        self,
        render: ProseRenderer,
        unresolved: UnresolvedPolicy = UnresolvedPolicy.DROP,
        versions: VersionResolver = None,
        normalizer: ModuleIndexNormalizer = None
    ):
        """
        Args:
            render: Prose to markup function
            unresolved: Policy for @docs names that match no symbol
            versions: Version ordering (default VersionResolver)
            normalizer: Module index builder (default ModuleIndexNormalizer)
        """
        self.render = render
        self.versions = versions or VersionResolver()
        self.normalizer = normalizer or ModuleIndexNormalizer()
        self.parser = DocCommentParser(render, unresolved=unresolved)

    # =========================================================================
    # Versions
    # =========================================================================

    def latest_link(self, package_name: str, versions: List[str]) -> str:
        """
        Overview link of the newest version (the package page redirect).

        Raises:
            NotFoundError: If the package has no versions
        """
        if not versions:
            raise NotFoundError(package_name)
        return overview_link(package_name, self.versions.latest(versions))

    def version_list(self, package_name: str, versions: List[str]) -> OutputSpec:
        """All versions of a package, newest first."""
        if not versions:
            raise NotFoundError(package_name)
        ordered = self.versions.sort(versions)

        return OutputSpec(
            template="package_versions",
            markup=lambda: {
                "package_name": package_name,
                "latest": ordered[0],
                "versions": [
                    {"version": v, "link": overview_link(package_name, v)}
                    for v in ordered
                ],
            },
            structured=lambda: ordered,
            text=lambda: ordered,
        )

    # =========================================================================
    # Search
    # =========================================================================

    def search(self, query: str, results: List[str]) -> OutputSpec:
        """Search results page."""
        return OutputSpec(
            template="package_search",
            markup=lambda: {"query": query, "results": results},
            structured=lambda: results,
            text=lambda: "\n".join(results),
        )

    # =========================================================================
    # Overview
    # =========================================================================

    def overview(self, package: PackageOverview) -> OutputSpec:
        """
        Package overview page.

        Raises:
            MalformedMetadataError: If the stored metadata is unusable
        """
        metadata = parse_json(package.metadata, "metadata")

        def markup() -> Dict[str, Any]:
            return {
                "package_name": package.name,
                "package_version": package.version,
                "package_overview_link": overview_link(package.name, package.version),
                "readme": self.render(package.readme),
                "exposed_modules": self._module_index(package, metadata),
            }

        return OutputSpec(
            template="package_overview",
            markup=markup,
            structured=lambda: {
                "name": package.name,
                "version": package.version,
                "readme": package.readme,
                "metadata": metadata,
            },
            text=lambda: package.readme,
        )

    # =========================================================================
    # Module
    # =========================================================================

    def module(self, package: PackageOverview, module_name: str) -> OutputSpec:
        """
        Module documentation page.

        Raises:
            NotFoundError: If the package docs have no such module
            MalformedMetadataError: If the stored docs/metadata are unusable
        """
        docs = parse_json(package.docs, "docs")
        module = find_module(docs, module_name)
        if module is None:
            raise NotFoundError(package.name, package.version, module_name)

        metadata = parse_json(package.metadata, "metadata")

        def markup() -> Dict[str, Any]:
            return {
                "package_name": package.name,
                "package_version": package.version,
                "package_overview_link": overview_link(package.name, package.version),
                "module_name": module_name,
                "module_docs": [node.to_dict() for node in self.parser.parse(module)],
                "exposed_modules": self._module_index(package, metadata),
            }

        return OutputSpec(
            template="package_module",
            markup=markup,
            structured=lambda: module.raw,
            text=lambda: module_text(self.parser.parse(module)),
        )

    def _module_index(self, package: PackageOverview, metadata: Any) -> Dict[str, List[dict]]:
        index = self.normalizer.normalize_metadata(package.name, package.version, metadata)
        return index_to_dict(index)


# =============================================================================
# Plain-text reduction
# =============================================================================

def symbol_header(node: DocNode) -> str:
    """One-line signature of a symbol node."""
    if node.kind == NodeKind.UNION:
        return " ".join(["type", node.name] + list(node.args))
    if node.kind == NodeKind.ALIAS:
        head = " ".join(["type alias", node.name] + list(node.args))
        return f"{head} = {node.type}" if node.type else head
    if node.kind in (NodeKind.VALUE, NodeKind.BINOP):
        name = f"({node.name})" if node.kind == NodeKind.BINOP else node.name
        return f"{name} : {node.type}" if node.type else name
    return node.name


def module_text(nodes: List[DocNode]) -> str:
    """Module documentation without markup, blank-line separated."""
    parts: List[str] = []
    for node in nodes:
        if node.kind == NodeKind.PROSE:
            text = node.text.strip()
            if text:
                parts.append(text)
            continue

        parts.append(symbol_header(node))
        comment = getattr(node, "source_comment", "").strip()
        if comment:
            parts.append(comment)
    return "\n\n".join(parts)
