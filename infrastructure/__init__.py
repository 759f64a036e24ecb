"""
MOVIEGRAPH INFRASTRUCTURE - System-Level Modules

This package contains infrastructure components:
- config: TOML + environment configuration loading
- logging_setup: Handler and format for the moviegraph loggers
"""

from infrastructure.config import (
    ConfigError,
    Neo4jSettings,
    ServerSettings,
    Settings,
    load_settings,
)
from infrastructure.logging_setup import configure_logging

__all__ = [
    "ConfigError",
    "Neo4jSettings",
    "ServerSettings",
    "Settings",
    "load_settings",
    "configure_logging",
]
