"""
Errors — Failure taxonomy for the documentation pipeline

Three outcomes reach the caller:
- NotFound: the package, version or module does not exist
- Malformed: stored metadata/docs are not in an accepted shape
- Unresolved: a @docs directive names an unknown symbol (strict policy only)

The routing layer decides the status code; nothing here retries.
"""

from typing import Optional


class PkgDocsError(Exception):
    """Base class for all pkgdocs failures."""


class NotFoundError(PkgDocsError):
    """
    Raised when a package, version or module is absent.

    Attributes:
        package: Package name that was requested
        version: Version that was requested (None for package-level lookups)
        module: Module name that was requested (None unless a module lookup)
    """

    def __init__(self, package: str, version: Optional[str] = None, module: Optional[str] = None):
        self.package = package
        self.version = version
        self.module = module
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        target = self.package
        if self.version is not None:
            target += f"@{self.version}"
        if self.module is not None:
            return f"Module '{self.module}' not found in {target}"
        return f"Not found: {target}"


class MalformedMetadataError(PkgDocsError, ValueError):
    """Raised when metadata or docs JSON has an unusable shape."""


class InvalidVersionError(PkgDocsError, ValueError):
    """Raised when a version string cannot be ordered by SemVer precedence."""

    def __init__(self, version: str):
        self.version = version
        super().__init__(f"Invalid version string: {version!r}")


class UnresolvedSymbolError(PkgDocsError):
    """Raised when a @docs directive names a symbol absent from every table."""

    def __init__(self, module: str, name: str):
        self.module = module
        self.name = name
        super().__init__(f"Module '{module}' documents unknown symbol '{name}'")


class ConfigError(PkgDocsError):
    """Raised when loaded settings fail validation."""
