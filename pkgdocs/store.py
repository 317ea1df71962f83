"""
Package store — Where package rows come from

The documentation pipeline never fetches; it is handed PackageOverview
records by a PackageStore. The hosted service backs the store with its
database. DirectoryStore reads the on-disk Elm package cache layout:

    <root>/<author>/<project>/<version>/README.md
    <root>/<author>/<project>/<version>/elm.json      (metadata)
    <root>/<author>/<project>/<version>/docs.json

Usage:
    store = DirectoryStore(Path("~/.elm/0.19.1/packages").expanduser())
    store.existing_versions("elm/core")          # ["1.0.0", "1.0.5"]
    store.get_package_overview("elm/core", "1.0.5")
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .core.versions import parse_version
from .errors import InvalidVersionError, MalformedMetadataError


logger = logging.getLogger(__name__)


README_FILE = "README.md"
METADATA_FILE = "elm.json"
DOCS_FILE = "docs.json"


@dataclass(frozen=True)
class PackageOverview:
    """
    One stored package version.

    Attributes:
        name: Package name (e.g., "elm/core")
        version: Version string
        readme: Raw README markdown
        metadata: Metadata as stored (JSON text)
        docs: Module docs as stored (JSON text)
    """
    name: str
    version: str
    readme: str
    metadata: str
    docs: str


class PackageStore(ABC):
    """Read interface the documentation service depends on."""

    @abstractmethod
    def search_for_package(self, query: str) -> List[str]:
        """Names of packages matching a search query."""
        pass

    @abstractmethod
    def existing_versions(self, package_name: str) -> List[str]:
        """All published versions of a package (empty if unknown)."""
        pass

    @abstractmethod
    def get_package_overview(self, package_name: str, version: str) -> Optional[PackageOverview]:
        """Stored record for a package version, or None if absent."""
        pass


class DirectoryStore(PackageStore):
    """PackageStore over an Elm package cache directory."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def search_for_package(self, query: str) -> List[str]:
        """Case-insensitive substring match on package names, sorted."""
        needle = (query or "").strip().lower()
        return [name for name in self._all_packages() if needle in name.lower()]

    def existing_versions(self, package_name: str) -> List[str]:
        """
        Version directories of a package.

        Directories whose name is not a version, or that lack the metadata
        and docs files, are skipped.
        """
        package_dir = self._package_dir(package_name)
        if package_dir is None or not package_dir.is_dir():
            return []

        versions = []
        for path in sorted(package_dir.iterdir()):
            if not path.is_dir():
                continue
            try:
                parse_version(path.name)
            except InvalidVersionError:
                logger.debug("Skipping %s: not a version directory", path)
                continue
            if not self._has_package_files(path):
                logger.debug("Skipping %s: missing %s or %s", path, METADATA_FILE, DOCS_FILE)
                continue
            versions.append(path.name)
        return versions

    def get_package_overview(self, package_name: str, version: str) -> Optional[PackageOverview]:
        package_dir = self._package_dir(package_name)
        if package_dir is None or not self._is_plain_segment(version):
            return None

        version_dir = package_dir / version
        if not self._has_package_files(version_dir):
            logger.debug("No stored docs for %s %s under %s", package_name, version, version_dir)
            return None

        readme_path = version_dir / README_FILE
        readme = self._read(readme_path) if readme_path.is_file() else ""

        return PackageOverview(
            name=package_name,
            version=version,
            readme=readme,
            metadata=self._read(version_dir / METADATA_FILE),
            docs=self._read(version_dir / DOCS_FILE),
        )

    # =========================================================================
    # File and path handling
    # =========================================================================

    @staticmethod
    def _read(path: Path) -> str:
        """
        UTF-8 text of a stored file.

        Raises:
            MalformedMetadataError: If the file cannot be read or decoded
        """
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise MalformedMetadataError(f"Cannot read {path}: {e}") from e

    @staticmethod
    def _has_package_files(version_dir: Path) -> bool:
        return (version_dir / METADATA_FILE).is_file() and (version_dir / DOCS_FILE).is_file()

    def _all_packages(self) -> List[str]:
        if not self.root.is_dir():
            return []
        names = []
        for author_dir in self.root.iterdir():
            if not author_dir.is_dir():
                continue
            for project_dir in author_dir.iterdir():
                if project_dir.is_dir():
                    names.append(f"{author_dir.name}/{project_dir.name}")
        return sorted(names)

    def _package_dir(self, package_name: str) -> Optional[Path]:
        """Directory for "author/project", or None for any other name shape."""
        parts = package_name.split("/")
        if len(parts) != 2 or not all(self._is_plain_segment(p) for p in parts):
            return None
        return self.root / parts[0] / parts[1]

    @staticmethod
    def _is_plain_segment(segment: str) -> bool:
        return bool(segment) and segment not in (".", "..") and "/" not in segment and "\\" not in segment
