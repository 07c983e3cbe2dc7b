"""Configuration loading for ZScript signature scanning."""

from rules.config import (
    CONFIG_FILENAME,
    PK3_PATH_ENV,
    ConfigError,
    ZScriptConfig,
    load_config,
)

__all__ = [
    "CONFIG_FILENAME",
    "PK3_PATH_ENV",
    "ConfigError",
    "ZScriptConfig",
    "load_config",
]
