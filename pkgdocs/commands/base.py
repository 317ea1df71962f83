"""
BaseCommand — Shared foundation for all CLI commands

Provides access to CLI resources via composition.
Commands receive the CLI instance and access its resources through properties.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..cli import DocsCLI


class BaseCommand:
    """
    Base class for CLI commands with access to shared resources.

    Commands don't reinitialize resources; they access them via the CLI instance.
    """

    def __init__(self, cli: 'DocsCLI'):
        """
        Initialize command with CLI instance.

        Args:
            cli: The main DocsCLI instance holding all resources
        """
        self._cli = cli

    @property
    def project_dir(self):
        """Project root directory."""
        return self._cli.project_dir

    @property
    def config(self):
        """Application configuration."""
        return self._cli.config

    @property
    def config_manager(self):
        """Configuration loader/saver."""
        return self._cli.config_manager

    @property
    def docs(self):
        """Documentation pages (PackageDocs)."""
        return self._cli.docs
