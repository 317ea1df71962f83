"""
ConfigCommand — Configuration display and updates
"""

from .base import BaseCommand


class ConfigCommand(BaseCommand):
    """View or change settings in the project or user config file."""

    def show_config(self):
        """Show current configuration."""
        print(self.config_manager.display())

    def set_config(self, key: str, value: str, scope: str = "project") -> bool:
        """
        Set a configuration value.

        Returns:
            True if saved, False if the key or value was rejected
        """
        error = self.config_manager.set(key, value, scope)
        if error:
            print(f"Error: {error}")
            return False

        if scope == "project":
            path = self.config_manager.project_config_path
        else:
            path = self.config_manager.user_config_path
        print(f"Set {key} = {value}")
        print(f"Saved to {path}")
        return True


def register_parser(subparsers):
    """Register config command parser."""
    p = subparsers.add_parser('config', help='View or set configuration')
    p.add_argument('--set', metavar='KEY=VALUE',
                   help='Set config value (e.g., docs.unresolved=placeholder)')
    p.add_argument('--user', action='store_true',
                   help='Apply to user config instead of project')
    return p


def handle(cli, args):
    """Handle config command dispatch."""
    if args.set:
        if '=' not in args.set:
            print("Error: Use format KEY=VALUE (e.g., display.format=text)")
            return False
        key, value = args.set.split('=', 1)
        scope = "user" if args.user else "project"
        return cli._config_cmd.set_config(key, value, scope)
    cli._config_cmd.show_config()
    return True
