"""Configuration module for the product store.

Loads settings from environment-specific config files:
- APP_ENV=dev  → config_dev.yaml (local development, verbose logging)
- APP_ENV=test → config_test.yaml (test runs)
- Default      → config.yaml

Overrides are read from the environment, optionally populated from a .env file.
Fails fast with clear error messages if configuration is missing or invalid.
"""

import codecs
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


def _get_project_root() -> Path:
    """Get the project root directory (where config.yaml lives)."""
    # Navigate from src/config/ up to project root
    return Path(__file__).parent.parent.parent


def _get_config_filename() -> str:
    """Get config filename based on APP_ENV environment variable.

    Returns:
        Config filename:
        - APP_ENV=dev  → config_dev.yaml
        - APP_ENV=test → config_test.yaml
        - Default      → config.yaml
    """
    app_env = os.environ.get("APP_ENV", "").lower()

    if app_env == "dev":
        return "config_dev.yaml"
    elif app_env == "test":
        return "config_test.yaml"
    else:
        return "config.yaml"


def _load_yaml_config() -> dict:
    """Load configuration from environment-specific config file."""
    config_filename = _get_config_filename()
    config_path = _get_project_root() / config_filename

    if not config_path.exists():
        raise ConfigurationError(
            f"Configuration file not found: {config_path}. "
            f"Set APP_ENV to 'dev' or 'test', or create {config_filename}."
        )

    with open(config_path, "r") as f:
        content = yaml.safe_load(f)

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigurationError(f"Configuration file {config_path} must contain a mapping")
    return content


def _get_optional_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get optional environment variable with default."""
    return os.environ.get(key, default)


def _resolve_path(value: str) -> str:
    """Resolve a relative path against the project root."""
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = _get_project_root() / path
    return str(path)


def _as_int(section: str, key: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"'{section}.{key}' must be an integer, got {value!r}")
    return value


def _as_bool(section: str, key: str, value) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"'{section}.{key}' must be true or false, got {value!r}")
    return value


def _as_encoding(section: str, key: str, value) -> str:
    try:
        codecs.lookup(value)
    except (LookupError, TypeError) as e:
        raise ConfigurationError(f"'{section}.{key}' must be a known text encoding, got {value!r}") from e
    return value


@dataclass(frozen=True)
class StorageConfig:
    """Backing file configuration."""
    products_path: str
    indent: int
    encoding: str
    atomic_writes: bool
    serialize_writes: bool


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""
    level: str
    format: str


@dataclass(frozen=True)
class ApiConfig:
    """HTTP API configuration."""
    title: str
    version: str


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration container."""
    storage: StorageConfig
    logging: LoggingConfig
    api: ApiConfig


DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def load_config() -> AppConfig:
    """
    Load and validate all application configuration.

    Loads from the YAML config file selected by APP_ENV, then applies
    PRODUCTS_PATH and LOG_LEVEL overrides from the environment (.env included).

    Returns:
        AppConfig: Validated application configuration.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    # Load environment variables from .env file
    load_dotenv()

    # Load YAML configuration
    yaml_config = _load_yaml_config()

    # Build Storage config
    storage_section = yaml_config.get("storage") or {}

    storage_config = StorageConfig(
        products_path=_resolve_path(
            _get_optional_env("PRODUCTS_PATH") or storage_section.get("products_path", "products.json")
        ),
        indent=_as_int("storage", "indent", storage_section.get("indent", 2)),
        encoding=_as_encoding("storage", "encoding", storage_section.get("encoding", "utf-8")),
        atomic_writes=_as_bool("storage", "atomic_writes", storage_section.get("atomic_writes", True)),
        serialize_writes=_as_bool(
            "storage", "serialize_writes", storage_section.get("serialize_writes", True)
        ),
    )

    # Build Logging config
    logging_section = yaml_config.get("logging") or {}

    logging_config = LoggingConfig(
        level=(_get_optional_env("LOG_LEVEL") or logging_section.get("level", "INFO")).upper(),
        format=logging_section.get("format", DEFAULT_LOG_FORMAT),
    )

    # Build API config
    api_section = yaml_config.get("api") or {}

    api_config = ApiConfig(
        title=api_section.get("title", "Product Store API"),
        version=str(api_section.get("version", "1.0.0")),
    )

    return AppConfig(
        storage=storage_config,
        logging=logging_config,
        api=api_config,
    )


# Module-level singleton for convenience
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get the application configuration singleton.

    Lazy-loads configuration on first access.
    Config file is selected based on APP_ENV environment variable.

    Returns:
        AppConfig: Application configuration.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def get_environment() -> str:
    """Get current environment name.

    Returns:
        'dev', 'test', or 'default' based on APP_ENV.
    """
    app_env = os.environ.get("APP_ENV", "").lower()
    return app_env if app_env in ("dev", "test") else "default"


def reset_config() -> None:
    """Reset the config singleton. Useful for testing."""
    global _config
    _config = None
