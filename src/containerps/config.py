"""
Configuration management for containerps.

This module provides configuration file support with YAML format,
user preferences, and default settings.

Features:
- YAML configuration file at ~/.config/containerps/config.yaml
- Default values with user overrides
- Engine binary and listing arguments
- Shell selection for "Open Console"
- Terminal launcher for non-macOS platforms
- Lifecycle icon colours and key bindings
- Log location override

Architecture:
- ConfigManager: Main configuration interface
- Merges user config with defaults
- Rejects values of the wrong type, keeping the default
- Handles missing/invalid config gracefully
"""

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

# Integer settings that must be greater than zero
POSITIVE_KEYS = {"error_chunk_width", "max_size_mb"}


@dataclass
class KeyBindings:
    reload: str = "ctrl+r"
    quit: str = "ctrl+q"


@dataclass
class EngineConfig:
    """Container engine CLI configuration."""
    binary: str = "docker"
    list_args: List[str] = field(default_factory=lambda: ["container", "list", "--all", "--size"])
    default_shell: str = "bash"
    fallback_shell: str = "sh"
    check_engine: bool = True


@dataclass
class TerminalConfig:
    # argv prefix placed before "docker exec -ti <id> <shell>" outside macOS
    launcher: List[str] = field(default_factory=lambda: ["x-terminal-emulator", "-e"])


@dataclass
class UIConfig:
    title: str = "Container PS"
    error_chunk_width: int = 35
    icons: Dict[str, str] = field(default_factory=lambda: {
        "up": "green",
        "restarting": "yellow",
        "down": "red",
    })


@dataclass
class LogConfig:
    """Logging configuration."""
    level: str = "INFO"
    file_path: Optional[str] = None  # None for default
    max_size_mb: int = 10
    backup_count: int = 5


@dataclass
class AppConfig:
    """Main application configuration."""
    keybindings: KeyBindings = field(default_factory=KeyBindings)
    engine: EngineConfig = field(default_factory=EngineConfig)
    terminal: TerminalConfig = field(default_factory=TerminalConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    logging: LogConfig = field(default_factory=LogConfig)


class ConfigManager:
    """Configuration manager with YAML file support."""

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = Path(config_dir) if config_dir else Path.home() / ".config" / "containerps"
        self.config_file = self.config_dir / "config.yaml"
        self._config: AppConfig = AppConfig()

        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Cannot create config directory {self.config_dir}: {e}")

        self.load_config()

    def load_config(self) -> None:
        """Load configuration from YAML file."""
        try:
            if self.config_file.exists():
                with open(self.config_file, 'r') as f:
                    user_config = yaml.safe_load(f) or {}
                if not isinstance(user_config, dict):
                    raise ValueError("top level of config must be a mapping")

                self._config = self._merge_configs(AppConfig(), user_config)
                logger.debug(f"Loaded configuration from {self.config_file}")
            else:
                self.save_config()
                logger.info(f"Created default configuration at {self.config_file}")
        except (OSError, yaml.YAMLError, ValueError) as e:
            logger.error(f"Failed to load config: {e}, using defaults")
            self._config = AppConfig()

    def save_config(self) -> None:
        """Save current configuration to YAML file."""
        try:
            with open(self.config_file, 'w') as f:
                yaml.dump(asdict(self._config), f, default_flow_style=False, indent=2)
            logger.debug(f"Saved configuration to {self.config_file}")
        except OSError as e:
            logger.error(f"Failed to save config: {e}")

    def get_config(self) -> AppConfig:
        return self._config

    def _merge_configs(self, default: AppConfig, user: Dict[str, Any]) -> AppConfig:
        """Merge user config with defaults."""
        for section in ('keybindings', 'engine', 'terminal', 'ui', 'logging'):
            if isinstance(user.get(section), dict):
                self._merge_dataclass(getattr(default, section), user[section])
        return default

    def _merge_dataclass(self, obj: Any, updates: Dict[str, Any]) -> None:
        for key, value in updates.items():
            if not hasattr(obj, key):
                logger.warning(f"Ignoring unknown config key: {key}")
                continue
            current = getattr(obj, key)
            if not self._is_valid(key, current, value):
                logger.warning(f"Invalid value for config key {key}: {value!r}, keeping {current!r}")
                continue
            if isinstance(current, dict):
                current.update(value)
            else:
                setattr(obj, key, value)

    @staticmethod
    def _is_valid(key: str, current: Any, value: Any) -> bool:
        """Check a user value against the type of the default it replaces."""
        if current is None:
            return value is None or isinstance(value, str)
        if isinstance(current, bool):
            return isinstance(value, bool)
        if isinstance(current, int):
            if isinstance(value, bool) or not isinstance(value, int):
                return False
            return value > 0 if key in POSITIVE_KEYS else value >= 0
        if isinstance(current, list):
            return isinstance(value, list) and all(isinstance(v, str) for v in value)
        if isinstance(current, dict):
            return isinstance(value, dict) and all(isinstance(v, str) for v in value.values())
        return isinstance(value, type(current))
