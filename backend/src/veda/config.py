# backend/src/veda/config.py
"""Configuration system for the Veda search backend.

Settings come from environment variables and an optional INI file in the
data directory, falling back to the defaults declared in CONFIG_SCHEMA.
"""

from configparser import ConfigParser
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional
import os

from veda.constants import DEFAULT_RANDOM_COUNT, DEFAULT_TOP_K, MAX_RANDOM_COUNT, MAX_TOP_K


class ConfigError(Exception):
    """Raised when configuration validation fails."""

    pass


# Schema: section -> key -> (type, default, min, max, description)
CONFIG_SCHEMA: dict[str, dict[str, tuple[type, Any, Any, Any, str]]] = {
    "search": {
        "top_k": (int, DEFAULT_TOP_K, 1, MAX_TOP_K, "Raw candidates fetched per search"),
        "random_count": (
            int,
            DEFAULT_RANDOM_COUNT,
            1,
            MAX_RANDOM_COUNT,
            "Verses returned by random exploration",
        ),
    },
    "paths": {
        "index_dir": (str, "index", None, None, "Vector index directory name"),
        "collection_name": (str, "rig_veda_verses", None, None, "Verse collection name"),
    },
    "server": {
        "cors_origins": (
            str,
            "http://localhost:5173,http://localhost:3000",
            None,
            None,
            "Comma-separated origins allowed by CORS",
        ),
    },
}


@dataclass(frozen=True)
class SearchConfig:
    """Search configuration."""

    top_k: int
    random_count: int


@dataclass(frozen=True)
class PathsConfig:
    """Path names configuration."""

    index_dir: str
    collection_name: str


@dataclass(frozen=True)
class ServerConfig:
    """HTTP server configuration."""

    cors_origins: str


def _schema_defaults(section: str) -> dict[str, Any]:
    return {key: default for key, (_, default, _, _, _) in CONFIG_SCHEMA[section].items()}


def _load_section(
    parser: ConfigParser, section: str, schema: dict[str, tuple[type, Any, Any, Any, str]]
) -> dict[str, Any]:
    """Load and validate a configuration section.

    Args:
        parser: ConfigParser instance with loaded config
        section: Section name to load
        schema: Schema definition for the section

    Returns:
        Dictionary of validated configuration values

    Raises:
        ConfigError: If validation fails
    """
    result = {}

    for key, (typ, default, min_val, max_val, _) in schema.items():
        if parser.has_option(section, key):
            raw_value = parser.get(section, key)
            value: bool | int | float | str
            try:
                if typ is bool:
                    value = raw_value.lower() in ("true", "1", "yes", "on")
                elif typ is int:
                    value = int(raw_value)
                elif typ is float:
                    value = float(raw_value)
                else:
                    value = raw_value
            except ValueError as e:
                raise ConfigError(
                    f"Invalid value for [{section}].{key}: {raw_value!r} (expected {typ.__name__})"
                ) from e
        else:
            value = default

        if typ in (int, float) and value is not None:
            if min_val is not None and value < min_val:
                raise ConfigError(
                    f"Value for [{section}].{key} is {value}, but minimum is {min_val}"
                )
            if max_val is not None and value > max_val:
                raise ConfigError(
                    f"Value for [{section}].{key} is {value}, but maximum is {max_val}"
                )

        result[key] = value

    return result


def _load_config(config_path: Optional[Path] = None) -> "Config":
    """Load configuration from an INI file (internal use only).

    Args:
        config_path: Path to config file. If None, uses defaults from schema.

    Returns:
        Config object with all sections populated (data_dir is a placeholder)

    Raises:
        ConfigError: If validation fails
    """
    parser = ConfigParser()

    if config_path and config_path.exists():
        parser.read(config_path)

    return Config(
        data_dir=Path("."),  # Placeholder, will be overwritten
        search=SearchConfig(**_load_section(parser, "search", CONFIG_SCHEMA["search"])),
        paths=PathsConfig(**_load_section(parser, "paths", CONFIG_SCHEMA["paths"])),
        server=ServerConfig(**_load_section(parser, "server", CONFIG_SCHEMA["server"])),
    )


@dataclass(frozen=True)
class Config:
    """Complete application configuration."""

    data_dir: Path = None  # type: ignore[assignment]  # Set in __post_init__ if None

    # Section configs - defaults set in __post_init__
    search: SearchConfig = None  # type: ignore[assignment]
    paths: PathsConfig = None  # type: ignore[assignment]
    server: ServerConfig = None  # type: ignore[assignment]

    def __post_init__(self):
        """Initialize section configs with defaults if not provided."""
        # Since frozen=True, we need to use object.__setattr__
        if self.data_dir is None:
            object.__setattr__(self, "data_dir", Path.home() / ".veda")
        if self.search is None:
            object.__setattr__(self, "search", SearchConfig(**_schema_defaults("search")))
        if self.paths is None:
            object.__setattr__(self, "paths", PathsConfig(**_schema_defaults("paths")))
        if self.server is None:
            object.__setattr__(self, "server", ServerConfig(**_schema_defaults("server")))

    @property
    def config_path(self) -> Path:
        """Path to the optional config.ini file."""
        return self.data_dir / "config.ini"

    @property
    def index_path(self) -> Path:
        """Path to the ChromaDB verse index directory."""
        return self.data_dir / self.paths.index_dir

    @property
    def cors_origins(self) -> list[str]:
        """Origins allowed to call the API from a browser."""
        return [origin.strip() for origin in self.server.cors_origins.split(",") if origin.strip()]


@lru_cache(maxsize=1)
def load_settings() -> Config:
    """Load settings from environment variables and config file.

    Settings are cached for the lifetime of the application.
    Use load_settings.cache_clear() to reload settings.

    Returns:
        Config object populated from environment variables and config file.

    Raises:
        ConfigError: If config.ini contains invalid values.
    """
    data_dir_str = os.getenv("VEDA_DATA_DIR")
    data_dir = Path(data_dir_str) if data_dir_str else Path.home() / ".veda"

    config_file = data_dir / "config.ini"
    try:
        config_exists = config_file.exists()
    except PermissionError:
        config_exists = False
    base_config = _load_config(config_file if config_exists else None)

    server = base_config.server
    cors_env = os.getenv("VEDA_CORS_ORIGINS")
    if cors_env:
        server = ServerConfig(cors_origins=cors_env)

    return Config(
        data_dir=data_dir,
        search=base_config.search,
        paths=base_config.paths,
        server=server,
    )
