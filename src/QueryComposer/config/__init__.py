from __future__ import annotations

"""Public configuration API for QueryComposer."""

from QueryComposer.config.app import (
    AppConfig,
    load_config,
    load_config_with_defaults,
    parse_config_dict,
    parse_yaml,
)
from QueryComposer.config.query import QueryConfig
from QueryComposer.config.runtime import RuntimeConfig
from QueryComposer.config.setup import SetupConfig

__all__ = [
    "RuntimeConfig",
    "QueryConfig",
    "SetupConfig",
    "AppConfig",
    "load_config",
    "load_config_with_defaults",
    "parse_config_dict",
    "parse_yaml",
]
