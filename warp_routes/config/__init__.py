"""Configuration utilities for warp route discovery."""

from .loader import (
    COLLATERAL_STANDARD,
    SYNTHETIC_STANDARD,
    ChainConfig,
    ConfigError,
    DefaultsConfig,
    WarpRoutesConfig,
    load_config,
    parse_config,
)

__all__ = [
    "COLLATERAL_STANDARD",
    "SYNTHETIC_STANDARD",
    "ChainConfig",
    "ConfigError",
    "DefaultsConfig",
    "WarpRoutesConfig",
    "load_config",
    "parse_config",
]
