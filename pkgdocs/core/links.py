"""
Links — URL scheme for package documentation pages

    /package/{name}/version/{version}/overview
    /package/{name}/version/{version}/module/{module}

Every path segment is percent-encoded on its own, always, with the same
unreserved set as JavaScript's encodeURIComponent.
"""

from urllib.parse import quote, unquote


# Characters encodeURIComponent leaves alone (besides alphanumerics, "_.-~")
SEGMENT_SAFE = "!*'()"


def encode_segment(segment: str) -> str:
    """Percent-encode one path segment."""
    return quote(segment, safe=SEGMENT_SAFE)


def decode_segment(segment: str) -> str:
    """Inverse of encode_segment()."""
    return unquote(segment)


def package_base(package_name: str, version: str) -> str:
    return f"/package/{encode_segment(package_name)}/version/{encode_segment(version)}"


def overview_link(package_name: str, version: str) -> str:
    """Link to a package version's overview page."""
    return f"{package_base(package_name, version)}/overview"


def module_link(package_name: str, version: str, module_name: str) -> str:
    """Link to one module's documentation page."""
    return f"{package_base(package_name, version)}/module/{encode_segment(module_name)}"
