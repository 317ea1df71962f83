"""
CLI -- Command interface for package documentation

Reads packages from a local store directory (Elm package cache layout)
and prints the same responses the documentation site serves:

    pkgdocs search json
    pkgdocs latest elm/core
    pkgdocs --format text overview elm/core
    pkgdocs --format markup module elm/core 1.0.5 List
    pkgdocs config --set docs.unresolved=placeholder

Exit status: 0 on success, 1 when something is not found, 2 on
malformed package data or invalid settings.
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from .config import ConfigManager
from .errors import ConfigError, NotFoundError, PkgDocsError
from .output import OutputSpec, VALID_FORMATS, negotiate_format, render
from .service import PackageDocs
from .store import DirectoryStore
from .commands.docs_cmd import DocsCommand
from .commands.config_cmd import ConfigCommand
from . import __version__


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_ERROR = 2


class DocsCLI:
    """Command-line interface over a package store."""

    def __init__(self, project_dir: Path, store_path: Optional[Path] = None):
        self.project_dir = Path(project_dir)
        self.config_manager = ConfigManager(self.project_dir)
        self.config = self.config_manager.load()
        self._store_path = store_path
        self._docs: Optional[PackageDocs] = None

        # Initialize command handlers
        self._docs_cmd = DocsCommand(self)
        self._config_cmd = ConfigCommand(self)

    @property
    def docs(self) -> PackageDocs:
        """
        Documentation pages, built on first use.

        The config command never gets here, so it can repair settings
        that fail validation.

        Raises:
            ConfigError: If the loaded settings are invalid
        """
        if self._docs is None:
            error = self.config.validate()
            if error:
                raise ConfigError(error)
            store_root = Path(self._store_path) if self._store_path else self.config.store.resolve(self.project_dir)
            self._docs = PackageDocs.from_config(self.config, DirectoryStore(store_root))
        return self._docs

    def emit(self, spec: OutputSpec, output_format: Optional[str] = None):
        """
        Print a response in the requested or configured format.

        Markup payloads are printed as JSON (templating happens elsewhere).
        """
        fmt = negotiate_format(requested=output_format, default=self.config.display.format)
        payload = render(spec, format=fmt)
        if not isinstance(payload, str):
            payload = json.dumps(payload, indent=2, ensure_ascii=False)
        print(payload)


def configure_logging(level: str):
    """Route log records to stderr at the configured level."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pkgdocs",
        description="pkgdocs -- Browse package documentation",
    )

    parser.add_argument(
        '--project', '-p',
        default=os.environ.get("PKGDOCS_PROJECT_PATH", "."),
        help='Project directory holding .pkgdocs/config.yaml (default: PKGDOCS_PROJECT_PATH or current)'
    )
    parser.add_argument(
        '--store', '-s',
        default=None,
        help='Package store directory (default: store.path from config)'
    )
    parser.add_argument(
        '--format', '-f',
        choices=VALID_FORMATS,
        default=None,
        help='Response format (default: display.format from config)'
    )
    parser.add_argument(
        '--version', '-V',
        action='version',
        version=f'pkgdocs {__version__}'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Register all commands from command modules (self-registration pattern)
    from .commands import register_all
    register_all(subparsers)

    return parser


def main(argv=None) -> int:
    """
    Main entry point for the pkgdocs CLI.

    Returns:
        Process exit status
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_OK

    from .commands import dispatch
    try:
        cli = DocsCLI(Path(args.project), store_path=args.store)
        configure_logging(cli.config.logging.level)
        result = dispatch(args.command, cli, args)
    except NotFoundError as e:
        print(str(e), file=sys.stderr)
        return EXIT_NOT_FOUND
    except PkgDocsError as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    return EXIT_ERROR if result is False else EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
