"""Configuration management for bara."""

from .options import (
    DEFAULT_ROOT,
    FolderDestinationOptions,
    GeneralOptions,
    Options,
    WriteStrategy,
)
from .settings import BaraConfig, discover_config_path, load_config, resolve_config

__all__ = [
    "DEFAULT_ROOT",
    "FolderDestinationOptions",
    "GeneralOptions",
    "Options",
    "WriteStrategy",
    "BaraConfig",
    "discover_config_path",
    "load_config",
    "resolve_config",
]
