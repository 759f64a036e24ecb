"""
MOVIEGRAPH CONFIG - Settings for the Store Connection and the Server

Configuration is read once at start up:
1. Defaults baked into the Settings structs
2. config/moviegraph.toml (or the file named by MOVIEGRAPH_CONFIG)
3. MOVIEGRAPH_* environment variables

The merged dict is validated with msgspec, so a bad port or an unknown log
level fails at start up instead of on the first request.

Usage:
    from infrastructure.config import load_settings

    settings = load_settings()
    settings.neo4j.uri       # "neo4j://localhost:7687"
    settings.server.port     # 8080
"""
import os
import tomllib
import warnings
from pathlib import Path
from typing import Annotated, Any, Dict, Literal, Mapping, Optional, Tuple

import msgspec


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "moviegraph.toml"
CONFIG_PATH_ENV = "MOVIEGRAPH_CONFIG"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConfigError(Exception):
    """Raised when configuration cannot be parsed or fails validation."""
    pass


# =============================================================================
# SETTINGS
# =============================================================================

class Neo4jSettings(msgspec.Struct, frozen=True, kw_only=True):
    """Where the graph store lives and how to log in."""
    uri: str = "neo4j://localhost:7687"
    user: str = "neo4j"
    password: str = "12345678"
    database: Optional[str] = None      # None = server default database


class ServerSettings(msgspec.Struct, frozen=True, kw_only=True):
    host: str = "127.0.0.1"
    port: Annotated[int, msgspec.Meta(ge=1, le=65535)] = 8080
    workers: Annotated[int, msgspec.Meta(ge=1)] = 1
    log_level: LogLevel = "INFO"


class Settings(msgspec.Struct, frozen=True, kw_only=True):
    neo4j: Neo4jSettings = msgspec.field(default_factory=Neo4jSettings)
    server: ServerSettings = msgspec.field(default_factory=ServerSettings)


# =============================================================================
# LOADING
# =============================================================================

# Environment variable suffix -> (section, key)
ENV_OVERRIDES: Dict[str, Tuple[str, str]] = {
    "NEO4J_URI": ("neo4j", "uri"),
    "NEO4J_USER": ("neo4j", "user"),
    "NEO4J_PASSWORD": ("neo4j", "password"),
    "NEO4J_DATABASE": ("neo4j", "database"),
    "HOST": ("server", "host"),
    "PORT": ("server", "port"),
    "WORKERS": ("server", "workers"),
    "LOG_LEVEL": ("server", "log_level"),
}
ENV_PREFIX = "MOVIEGRAPH_"


def load_toml_config(path: Path) -> Dict[str, Any]:
    """
    Load a TOML config file.

    A missing file is not fatal: it warns and returns an empty dict so the
    defaults apply. A file that exists but does not parse is fatal.
    """
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        warnings.warn(f"Config file not found, using defaults: {path}")
        return {}
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Failed to parse {path}: {e}") from e


def apply_env_overrides(raw: Dict[str, Any], environ: Mapping[str, str]) -> Dict[str, Any]:
    """Return a copy of `raw` with MOVIEGRAPH_* variables layered on top."""
    merged = {section: dict(values) for section, values in raw.items()}
    for suffix, (section, key) in ENV_OVERRIDES.items():
        value = environ.get(ENV_PREFIX + suffix)
        if value is None:
            continue
        if key == "log_level":
            value = value.upper()
        merged.setdefault(section, {})[key] = value
    return merged


def load_settings(
    path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """
    Build Settings from defaults, the TOML file and the environment.

    Args:
        path: Config file. Defaults to $MOVIEGRAPH_CONFIG, then
              config/moviegraph.toml next to the packages.
        environ: Environment mapping, os.environ when None.

    Raises:
        ConfigError: unparseable file or a value of the wrong type/range
    """
    if environ is None:
        environ = os.environ
    if path is None:
        path = Path(environ.get(CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH))

    raw = apply_env_overrides(load_toml_config(path), environ)

    # strict=False so "8080" from the environment becomes 8080
    try:
        return msgspec.convert(raw, type=Settings, strict=False)
    except msgspec.ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
