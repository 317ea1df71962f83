"""
DocsCommand — Browse package documentation from the command line

Each subcommand mirrors one page of the documentation site and prints
the negotiated response format (see --format).
"""

from typing import Optional

from .base import BaseCommand


COMMAND_NAMES = ['search', 'latest', 'versions', 'overview', 'module']


class DocsCommand(BaseCommand):
    """Documentation page commands."""

    def search(self, query: str, output_format: Optional[str] = None):
        """Print packages whose name matches the query."""
        self._cli.emit(self.docs.search(query), output_format)

    def latest(self, package_name: str, link: bool = False):
        """Print the newest version (or its overview link)."""
        if link:
            print(self.docs.latest_link(package_name))
        else:
            print(self.docs.latest_version(package_name))

    def versions(self, package_name: str, output_format: Optional[str] = None):
        """Print every version, newest first."""
        self._cli.emit(self.docs.versions(package_name), output_format)

    def overview(self, package_name: str, version: Optional[str] = None, output_format: Optional[str] = None):
        """Print a package overview; defaults to the newest version."""
        if version is None:
            version = self.docs.latest_version(package_name)
        self._cli.emit(self.docs.overview(package_name, version), output_format)

    def module(self, package_name: str, version: str, module_name: str, output_format: Optional[str] = None):
        """Print one module's documentation."""
        self._cli.emit(self.docs.module(package_name, version, module_name), output_format)


def register_parser(subparsers):
    """Register search, latest, versions, overview and module parsers."""
    p = subparsers.add_parser('search', help='Find packages by name')
    p.add_argument('query', help='Substring of the package name')

    p = subparsers.add_parser('latest', help='Show the newest version of a package')
    p.add_argument('package', help='Package name (author/project)')
    p.add_argument('--link', action='store_true',
                   help='Print the overview link instead of the version')

    p = subparsers.add_parser('versions', help='List versions of a package, newest first')
    p.add_argument('package', help='Package name (author/project)')

    p = subparsers.add_parser('overview', help='Show README and exposed modules')
    p.add_argument('package', help='Package name (author/project)')
    p.add_argument('version', nargs='?', help='Version (default: latest)')

    p = subparsers.add_parser('module', help='Show documentation of one module')
    p.add_argument('package', help='Package name (author/project)')
    p.add_argument('version', help='Package version')
    p.add_argument('module', help='Module name (e.g., List)')


def handle(cli, args):
    """Dispatch documentation commands."""
    cmd = cli._docs_cmd
    fmt = getattr(args, 'format', None)

    if args.command == 'search':
        cmd.search(args.query, output_format=fmt)
    elif args.command == 'latest':
        cmd.latest(args.package, link=args.link)
    elif args.command == 'versions':
        cmd.versions(args.package, output_format=fmt)
    elif args.command == 'overview':
        cmd.overview(args.package, args.version, output_format=fmt)
    elif args.command == 'module':
        cmd.module(args.package, args.version, args.module, output_format=fmt)
