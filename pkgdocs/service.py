"""
PackageDocs — Fetch-then-assemble glue for each page

One method per page of the documentation site. Each fetches from the
PackageStore, turns absence into NotFoundError, and hands the data to
the ViewModelAssembler. A routing layer maps:

    GET /search?query=...                         -> search()
    GET /package/{name}                           -> latest_link()  (303)
    GET /package/{name}/versions                  -> versions()
    GET /package/{name}/version/{v}/overview      -> overview()
    GET /package/{name}/version/{v}/module/{m}    -> module()

Usage:
    docs = PackageDocs.from_config(config, store)
    spec = docs.module("elm/core", "1.0.5", "List")
    payload = render(spec, format=negotiate_format(accept=request_accept))
"""

import logging
from typing import List

from .config import Config
from .errors import NotFoundError
from .output import OutputSpec
from .presentation.markdown import MarkdownRenderer
from .presentation.views import ViewModelAssembler
from .store import PackageOverview, PackageStore


logger = logging.getLogger(__name__)


class PackageDocs:
    """Documentation pages backed by a package store."""

    def __init__(self, store: PackageStore, assembler: ViewModelAssembler):
        self.store = store
        self.assembler = assembler

    @classmethod
    def from_config(cls, config: Config, store: PackageStore) -> 'PackageDocs':
        """Build with the Markdown renderer and policy from config."""
        render = MarkdownRenderer(extensions=config.docs.markdown_extensions)
        assembler = ViewModelAssembler(render, unresolved=config.docs.unresolved_policy)
        return cls(store, assembler)

    def search(self, query: str) -> OutputSpec:
        results = self.store.search_for_package(query)
        logger.debug("Search %r matched %d package(s)", query, len(results))
        return self.assembler.search(query, results)

    def latest_version(self, package_name: str) -> str:
        """
        Newest published version of a package.

        Raises:
            NotFoundError: If the package has no versions
        """
        versions = self._versions(package_name)
        return self.assembler.versions.latest(versions)

    def latest_link(self, package_name: str) -> str:
        """Redirect target for the bare package page."""
        return self.assembler.latest_link(package_name, self._versions(package_name))

    def versions(self, package_name: str) -> OutputSpec:
        return self.assembler.version_list(package_name, self._versions(package_name))

    def overview(self, package_name: str, version: str) -> OutputSpec:
        return self.assembler.overview(self._package(package_name, version))

    def module(self, package_name: str, version: str, module_name: str) -> OutputSpec:
        return self.assembler.module(self._package(package_name, version), module_name)

    def _versions(self, package_name: str) -> List[str]:
        versions = self.store.existing_versions(package_name)
        if not versions:
            raise NotFoundError(package_name)
        return versions

    def _package(self, package_name: str, version: str) -> PackageOverview:
        package = self.store.get_package_overview(package_name, version)
        if package is None:
            raise NotFoundError(package_name, version)
        return package
