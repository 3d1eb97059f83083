"""
Configuration loader for outparsers.

Supports environment variable substitution in YAML files:
- ${VAR} - Required variable, empty string if not set
- ${VAR:default} - Variable with default value
"""
import os
import re
from pathlib import Path
from typing import Dict, Any, Optional, Union
import yaml

from .utils.logger import LogCategory, get_logger

logger = get_logger(__name__, category=LogCategory.CONFIG)


class ConfigLoader:
    """Loads and manages parser configuration from a YAML file."""

    # ${VAR} or ${VAR:default}
    ENV_VAR_PATTERN = re.compile(r'\$\{([^}:]+)(?::([^}]*))?\}')

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize config loader.

        Args:
            config_path: Path to config.yaml file. If None, looks in default locations.
        """
        self.config_path = self._resolve_config_path(config_path)
        self.config: Dict[str, Any] = self._load_config()

    def _resolve_config_path(self, config_path: Optional[str]) -> Path:
        """
        Resolve the configuration file path.

        Order: explicit path, OUTPARSERS_CONFIG, ./config.yaml,
        ./outparsers/config.yaml, then the package directory.
        """
        if config_path:
            return Path(config_path)

        env_path = os.getenv("OUTPARSERS_CONFIG")
        if env_path:
            return Path(env_path)

        default_locations = [
            Path.cwd() / "config.yaml",
            Path.cwd() / "outparsers" / "config.yaml",
            Path(__file__).parent / "config.yaml",
        ]

        for path in default_locations:
            if path.exists():
                return path

        # Return default location even if it doesn't exist
        return Path(__file__).parent / "config.yaml"

    def _load_config(self) -> Dict[str, Any]:
        """
        Load configuration from YAML file.

        Returns:
            Configuration dictionary with environment variables resolved.
        """
        if not self.config_path.exists():
            logger.debug("Config file not found, using defaults", path=str(self.config_path))
            return self._default_config()

        with open(self.config_path, 'r') as f:
            config = yaml.safe_load(f)

        if config is not None and not isinstance(config, dict):
            raise ValueError(
                f"Config file {self.config_path} must contain a mapping, "
                f"got {type(config).__name__}"
            )

        config = self._resolve_env_vars(config) if config else {}

        logger.debug("Config loaded", path=str(self.config_path))
        return config or self._default_config()

    def _resolve_env_vars(self, obj: Any) -> Any:
        """
        Recursively resolve environment variables in config values.

        Args:
            obj: Config object (dict, list, or scalar)

        Returns:
            Object with environment variables resolved
        """
        if isinstance(obj, dict):
            return {k: self._resolve_env_vars(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [self._resolve_env_vars(item) for item in obj]
        elif isinstance(obj, str):
            return self._substitute_env_vars(obj)
        else:
            return obj

    def _substitute_env_vars(self, value: str) -> Union[str, int, float, None]:
        """
        Substitute environment variables in a string value.

        Args:
            value: String potentially containing ${VAR} or ${VAR:default}

        Returns:
            String with env vars substituted, or typed value if entire string is a var.
            Strings without any ${...} reference are returned unchanged.
        """
        if not self.ENV_VAR_PATTERN.search(value):
            return value

        def replace_match(match):
            var_name = match.group(1)
            default = match.group(2)  # None if no default specified
            env_value = os.getenv(var_name)

            if env_value is not None:
                return env_value
            elif default is not None:
                return default
            else:
                return ""

        result = self.ENV_VAR_PATTERN.sub(replace_match, value)

        if result:
            try:
                return int(result)
            except ValueError:
                pass
            try:
                return float(result)
            except ValueError:
                pass

        return result if result else None

    def _default_config(self) -> Dict[str, Any]:
        """
        Return default configuration.

        Returns:
            Default configuration dictionary.
        """
        return {
            "parsers": {},
            "logging": {
                "level": os.getenv("OUTPARSERS_LOG_LEVEL", "INFO"),
                "json_logs": False,
            },
        }

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key.

        Args:
            key: Configuration key (supports dot notation, e.g., 'logging.level').
            default: Default value if key not found.

        Returns:
            Configuration value.
        """
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    def get_parsers_config(self) -> Dict[str, Dict[str, Any]]:
        """Get the parsers section (parser name -> settings)."""
        return self.config.get("parsers") or {}

    def get_parser_config(self, name: str) -> Dict[str, Any]:
        """
        Get the settings for a single named parser.

        Raises:
            KeyError: If no parser with that name is configured.
        """
        parsers = self.get_parsers_config()
        if name not in parsers:
            raise KeyError(
                f"Parser '{name}' not found in {self.config_path}. "
                f"Configured parsers: {sorted(parsers)}"
            )
        return parsers[name]

    def get_logging_config(self) -> Dict[str, Any]:
        """Get logging configuration merged over the defaults."""
        defaults = self._default_config()["logging"]
        return {**defaults, **(self.config.get("logging") or {})}

    def reload(self) -> None:
        """Reload configuration from file."""
        self.config = self._load_config()
