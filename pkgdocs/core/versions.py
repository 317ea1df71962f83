"""
VersionResolver — Pick the latest published version

Ordering follows SemVer 2.0 precedence:
- major, minor, patch compared numerically
- a pre-release sorts before the same version without one
- build metadata is ignored

Version strings are not validated beyond what ordering needs.
"""

from functools import cmp_to_key
from typing import Iterable, List

import semver

from ..errors import InvalidVersionError


def parse_version(version: str) -> semver.Version:
    """
    Parse a version string for comparison.

    Build metadata is dropped so that it never influences ordering.

    Raises:
        InvalidVersionError: If the string is not a SemVer version
    """
    try:
        parsed = semver.Version.parse(version)
    except (ValueError, TypeError) as e:
        raise InvalidVersionError(version) from e
    return parsed.replace(build=None)


def compare_versions(left: str, right: str) -> int:
    """Compare two version strings: -1, 0 or 1."""
    return parse_version(left).compare(parse_version(right))


class VersionResolver:
    """Orders the versions of one package and picks the newest."""

    def sort(self, versions: Iterable[str]) -> List[str]:
        """
        Sort versions newest first.

        The sort is stable: versions that compare equal (differing only in
        build metadata) keep their input order.
        """
        newest_first = cmp_to_key(lambda a, b: compare_versions(b, a))
        return sorted(versions, key=newest_first)

    def latest(self, versions: Iterable[str]) -> str:
        """
        Return the maximal version.

        Args:
            versions: Version strings of a single package

        Returns:
            The version that is >= every other member

        Raises:
            ValueError: If versions is empty (callers report NotFound instead)
            InvalidVersionError: If a version cannot be parsed
        """
        ordered = self.sort(versions)
        if not ordered:
            raise ValueError("Cannot resolve latest version of an empty set")
        return ordered[0]
