"""
Configuration Management
========================

Runtime settings for gh-asset.

Settings are resolved in the following order (highest to lowest priority):
1. Command line options (applied by the CLI through ``Config.set``)
2. Environment variables
3. Built-in defaults

gh-asset deliberately reads no configuration file.

Environment variables:

    GH_ASSET_HOST          GitHub host attachments are downloaded from
    GH_ASSET_GH_PATH       Path to the gh executable
    GH_ASSET_AUTH_TIMEOUT  Seconds to wait for ``gh auth token``
    GH_ASSET_HTTP_TIMEOUT  HTTP timeout in seconds
    GH_ASSET_CHUNK_SIZE    Download chunk size in bytes
    GH_ASSET_LOG_LEVEL     Logging level (DEBUG, INFO, WARNING, ...)
    GH_ASSET_NO_PROGRESS   Disable the progress bar when set to a true value
"""

import os
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from ghasset import __version__
from ghasset.core.logger import get_logger

logger = get_logger(__name__)


# Default configuration values
DEFAULT_CONFIG: Dict[str, Any] = {
    "github": {
        "host": "github.com",
    },
    "auth": {
        "gh_executable": "gh",
        "timeout": 30,
    },
    "http": {
        "timeout": 300,
        "chunk_size": 8192,
        "user_agent": f"gh-asset/{__version__}",
    },
    "logging": {
        "level": "WARNING",
    },
    "progress": {
        "enabled": True,
    },
}


def _parse_bool(value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in ("1", "true", "yes", "on"):
        return True
    if normalized in ("0", "false", "no", "off", ""):
        return False
    raise ValueError(f"not a boolean: {value!r}")


def _parse_positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise ValueError(f"must be positive: {value!r}")
    return number


def _parse_positive_float(value: str) -> float:
    number = float(value)
    if number <= 0:
        raise ValueError(f"must be positive: {value!r}")
    return number


def _invert_bool(value: str) -> bool:
    return not _parse_bool(value)


# Environment variable -> (section, key, parser)
ENVIRONMENT_OVERRIDES: Dict[str, Tuple[str, str, Callable[[str], Any]]] = {
    "GH_ASSET_HOST": ("github", "host", str.strip),
    "GH_ASSET_GH_PATH": ("auth", "gh_executable", str.strip),
    "GH_ASSET_AUTH_TIMEOUT": ("auth", "timeout", _parse_positive_float),
    "GH_ASSET_HTTP_TIMEOUT": ("http", "timeout", _parse_positive_float),
    "GH_ASSET_CHUNK_SIZE": ("http", "chunk_size", _parse_positive_int),
    "GH_ASSET_LOG_LEVEL": ("logging", "level", str.upper),
    "GH_ASSET_NO_PROGRESS": ("progress", "enabled", _invert_bool),
}


@dataclass
class Config:
    """
    Configuration container for gh-asset settings.

    Attributes:
        github: GitHub host settings
        auth: Credential provider settings
        http: Transfer client settings
        logging: Logging settings
        progress: Progress bar settings
        _sources: Where each overridden ``section.key`` came from
    """

    github: Dict[str, Any] = field(default_factory=dict)
    auth: Dict[str, Any] = field(default_factory=dict)
    http: Dict[str, Any] = field(default_factory=dict)
    logging: Dict[str, Any] = field(default_factory=dict)
    progress: Dict[str, Any] = field(default_factory=dict)
    _sources: Dict[str, str] = field(default_factory=dict)

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        section_dict = getattr(self, section, {})
        if section_dict is None:
            return default
        return section_dict.get(key, default)

    def set(self, section: str, key: str, value: Any, source: str = "override") -> None:
        """Set a configuration value."""
        section_dict = getattr(self, section, None)
        if section_dict is not None:
            section_dict[key] = value
            self._sources[f"{section}.{key}"] = source

    def source_of(self, section: str, key: str) -> str:
        """Describe where a value came from."""
        return self._sources.get(f"{section}.{key}", "default")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "github": self.github,
            "auth": self.auth,
            "http": self.http,
            "logging": self.logging,
            "progress": self.progress,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create Config from dictionary."""
        return cls(
            github=data.get("github", {}),
            auth=data.get("auth", {}),
            http=data.get("http", {}),
            logging=data.get("logging", {}),
            progress=data.get("progress", {}),
        )


def get_default_config() -> Config:
    """Get the default configuration."""
    return Config.from_dict(_deep_copy_dict(DEFAULT_CONFIG))


def load_config(environ: Optional[Mapping[str, str]] = None) -> Config:
    """
    Build the configuration from defaults and environment variables.

    Args:
        environ: Environment to read (default: os.environ)

    Returns:
        Config object with environment overrides applied
    """
    environ = os.environ if environ is None else environ
    config = get_default_config()

    for variable, (section, key, parser) in ENVIRONMENT_OVERRIDES.items():
        raw = environ.get(variable)
        if raw is None:
            continue
        try:
            value = parser(raw)
        except ValueError as e:
            logger.warning(f"Ignoring invalid {variable}: {e}")
            continue
        if value == "":
            continue
        config.set(section, key, value, source=f"env:{variable}")
        logger.debug(f"Using {variable} for [{section}].{key}")

    return config


def _deep_copy_dict(d: Dict[str, Any]) -> Dict[str, Any]:
    """Create a deep copy of a dictionary."""
    result = {}
    for key, value in d.items():
        if isinstance(value, dict):
            result[key] = _deep_copy_dict(value)
        elif isinstance(value, list):
            result[key] = value.copy()
        else:
            result[key] = value
    return result


# Global configuration instance
_global_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _global_config
    if _global_config is None:
        _global_config = load_config()
    return _global_config


def set_config(config: Config) -> None:
    """Set the global configuration instance."""
    global _global_config
    _global_config = config


def reset_config() -> None:
    """Reset the global configuration to None (will reload on next access)."""
    global _global_config
    _global_config = None
