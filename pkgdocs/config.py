"""
Configuration — Centralized settings management

Config hierarchy (highest to lowest priority):
  1. Environment variables (PKGDOCS_FORMAT, PKGDOCS_UNRESOLVED, ...)
  2. Project config (.pkgdocs/config.yaml)
  3. User config (~/.pkgdocs/config.yaml)
  4. Defaults
"""

import logging
import os
import yaml
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List

from .core.doccomment import UnresolvedPolicy, VALID_POLICIES
from .output import VALID_FORMATS
from .presentation.markdown import DEFAULT_EXTENSIONS


logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Environment variable -> (section, setting)
ENV_OVERRIDES = {
    "PKGDOCS_FORMAT": ("display", "format"),
    "PKGDOCS_UNRESOLVED": ("docs", "unresolved"),
    "PKGDOCS_STORE": ("store", "path"),
    "PKGDOCS_LOG_LEVEL": ("logging", "level"),
}


@dataclass
class DisplayConfig:
    """Response format preferences."""
    format: str = "auto"  # "auto" | "markup" | "structured" | "text"

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        if self.format not in VALID_FORMATS:
            return f"Unknown format '{self.format}'. Valid: {', '.join(VALID_FORMATS)}"
        return None


@dataclass
class DocsConfig:
    """Documentation parsing preferences."""
    unresolved: str = UnresolvedPolicy.DROP.value  # "drop" | "placeholder" | "error"
    markdown_extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))

    @property
    def unresolved_policy(self) -> UnresolvedPolicy:
        return UnresolvedPolicy(self.unresolved)

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        if self.unresolved not in VALID_POLICIES:
            return f"Unknown unresolved policy '{self.unresolved}'. Valid: {', '.join(VALID_POLICIES)}"
        if not isinstance(self.markdown_extensions, list):
            return "markdown_extensions must be a list of extension names"
        return None


@dataclass
class StoreConfig:
    """Package store location."""
    path: str = "packages"

    def resolve(self, base_dir: Path) -> Path:
        """Store directory, relative paths taken from base_dir."""
        path = Path(self.path).expanduser()
        return path if path.is_absolute() else Path(base_dir) / path


@dataclass
class LoggingConfig:
    """Log output preferences."""
    level: str = "WARNING"

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        if self.level.upper() not in VALID_LOG_LEVELS:
            return f"Unknown log level '{self.level}'. Valid: {', '.join(VALID_LOG_LEVELS)}"
        return None


@dataclass
class Config:
    """Application configuration."""
    display: DisplayConfig = field(default_factory=DisplayConfig)
    docs: DocsConfig = field(default_factory=DocsConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> Optional[str]:
        """First validation error across sections, or None."""
        for section in (self.display, self.docs, self.logging):
            error = section.validate()
            if error:
                return error
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "display": {
                "format": self.display.format
            },
            "docs": {
                "unresolved": self.docs.unresolved,
                "markdown_extensions": list(self.docs.markdown_extensions)
            },
            "store": {
                "path": self.store.path
            },
            "logging": {
                "level": self.logging.level
            }
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create from dictionary."""
        display_data = data.get("display", {})
        docs_data = data.get("docs", {})
        store_data = data.get("store", {})
        logging_data = data.get("logging", {})

        return cls(
            display=DisplayConfig(
                format=display_data.get("format", "auto")
            ),
            docs=DocsConfig(
                unresolved=docs_data.get("unresolved", UnresolvedPolicy.DROP.value),
                markdown_extensions=docs_data.get("markdown_extensions", list(DEFAULT_EXTENSIONS))
            ),
            store=StoreConfig(
                path=str(store_data.get("path", "packages"))
            ),
            logging=LoggingConfig(
                level=logging_data.get("level", "WARNING")
            )
        )


class ConfigManager:
    """
    Manages configuration loading and persistence.

    Hierarchy:
      1. Environment
      2. Project config (.pkgdocs/config.yaml)
      3. User config (~/.pkgdocs/config.yaml)
      4. Defaults
    """

    USER_CONFIG_DIR = Path.home() / ".pkgdocs"
    USER_CONFIG_FILE = USER_CONFIG_DIR / "config.yaml"
    PROJECT_CONFIG_DIR = ".pkgdocs"
    PROJECT_CONFIG_FILE = "config.yaml"

    def __init__(self, project_dir: Optional[Path] = None):
        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self._config: Optional[Config] = None

    @property
    def project_config_path(self) -> Path:
        return self.project_dir / self.PROJECT_CONFIG_DIR / self.PROJECT_CONFIG_FILE

    @property
    def user_config_path(self) -> Path:
        return self.USER_CONFIG_FILE

    def load(self) -> Config:
        """Load configuration from all sources."""
        if self._config is not None:
            return self._config

        # Start with defaults
        config_data: Dict[str, Any] = {}

        # Layer 1: User config
        config_data = self._merge(config_data, self._read(self.user_config_path))

        # Layer 2: Project config (higher priority)
        config_data = self._merge(config_data, self._read(self.project_config_path))

        # Layer 3: Environment overrides
        for env_key, (section, setting) in ENV_OVERRIDES.items():
            if os.environ.get(env_key):
                config_data.setdefault(section, {})[setting] = os.environ[env_key]

        self._config = Config.from_dict(config_data)
        return self._config

    def _read(self, path: Path) -> Dict[str, Any]:
        """Parsed YAML mapping, or {} when missing or malformed."""
        if not path.exists():
            return {}
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Ignoring unreadable config %s: %s", path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring config %s: top level must be a mapping", path)
            return {}
        return data

    def save_project(self, config: Config):
        """Save configuration to project config file."""
        self.project_config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.project_config_path, 'w') as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False)

        self._config = config

    def save_user(self, config: Config):
        """Save configuration to user config file."""
        self.user_config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.user_config_path, 'w') as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False)

        self._config = config

    def set(self, key: str, value: str, scope: str = "project") -> Optional[str]:
        """
        Set a configuration value.

        Args:
            key: Dot-separated key (e.g., "docs.unresolved")
            value: Value to set
            scope: "project" or "user"

        Returns:
            Error message or None if successful
        """
        config = self.load()

        parts = key.split(".")
        if len(parts) != 2:
            return f"Invalid key format: {key}. Use 'section.setting' (e.g., 'display.format')"

        section, setting = parts

        if section == "display":
            if setting == "format":
                config.display.format = value
            else:
                return f"Unknown display setting: {setting}. Valid: format"
            error = config.display.validate()

        elif section == "docs":
            if setting == "unresolved":
                config.docs.unresolved = value
            elif setting == "markdown_extensions":
                config.docs.markdown_extensions = [v.strip() for v in value.split(",") if v.strip()]
            else:
                return f"Unknown docs setting: {setting}. Valid: unresolved, markdown_extensions"
            error = config.docs.validate()

        elif section == "store":
            if setting == "path":
                config.store.path = value
            else:
                return f"Unknown store setting: {setting}. Valid: path"
            error = None

        elif section == "logging":
            if setting == "level":
                config.logging.level = value.upper()
            else:
                return f"Unknown logging setting: {setting}. Valid: level"
            error = config.logging.validate()

        else:
            return f"Unknown section: {section}. Valid: display, docs, store, logging"

        if error:
            # Drop the invalid in-memory value
            self._config = None
            return error

        if scope == "project":
            self.save_project(config)
        else:
            self.save_user(config)

        return None

    def get(self, key: str) -> Optional[str]:
        """Get a configuration value."""
        data = self.load().to_dict()

        parts = key.split(".")
        if len(parts) != 2:
            return None

        section, setting = parts
        value = data.get(section, {}).get(setting)
        if isinstance(value, list):
            return ",".join(value)
        return value

    def _merge(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dicts, override wins."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge(result[key], value)
            else:
                result[key] = value
        return result

    def display(self) -> str:
        """Format config for display."""
        config = self.load()

        lines = [
            "Configuration:",
            "",
            "Display:",
            f"  Format: {config.display.format}",
            "",
            "Docs:",
            f"  Unresolved symbols: {config.docs.unresolved}",
            f"  Markdown extensions: {', '.join(config.docs.markdown_extensions) or '(none)'}",
            "",
            "Store:",
            f"  Path: {config.store.resolve(self.project_dir)}",
            "",
            "Logging:",
            f"  Level: {config.logging.level}",
            "",
            "Config files:",
            f"  User: {self.user_config_path}",
            f"  Project: {self.project_config_path}",
        ]

        return "\n".join(lines)


# Convenience function
def get_config(project_dir: Optional[Path] = None) -> Config:
    """Load configuration for a project."""
    return ConfigManager(project_dir).load()
