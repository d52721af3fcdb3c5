"""Configuration management for driver sessions."""

from .environment import (
    DRIVER_PATH_VARS,
    load_env,
    get_env_config,
)

__all__ = [
    "DRIVER_PATH_VARS",
    "load_env",
    "get_env_config",
]
