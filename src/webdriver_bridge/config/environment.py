"""Environment configuration and validation."""

import os
from typing import Optional

from dotenv import load_dotenv, find_dotenv

import logging
logger = logging.getLogger(__name__)


DRIVER_PATH_VARS = {
    "chrome": "CHROMEDRIVER_PATH",
    "firefox": "GECKODRIVER_PATH",
    "edge": "MSEDGEDRIVER_PATH",
}

_DOTENV_LOADED = False


def load_env() -> None:
    """Load a .env file from the working directory once. Real env vars always win."""
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    _DOTENV_LOADED = True
    path = find_dotenv(filename=".env", usecwd=True)
    if path:
        logger.debug(f"Loading environment overrides from {path}")
        load_dotenv(path, override=False)


def _env_path(name: str) -> Optional[str]:
    value = (os.getenv(name) or "").strip()
    return value or None


def get_env_config() -> dict:
    """
    Read environment variables that influence session creation.

    Optional:   CHROMEDRIVER_PATH
                GECKODRIVER_PATH
                MSEDGEDRIVER_PATH
                WEBDRIVER_REMOTE_URL
                WEBDRIVER_SERVICE_PORT

    Driver paths are only consulted when no explicit driver_path was given.
    """
    load_env()

    driver_paths = {browser: _env_path(var) for browser, var in DRIVER_PATH_VARS.items()}

    port_env = (os.getenv("WEBDRIVER_SERVICE_PORT") or "").strip()
    if port_env and not port_env.isdigit():
        raise EnvironmentError(f"WEBDRIVER_SERVICE_PORT must be a port number, got {port_env!r}.")
    fixed_port = int(port_env) if port_env else None

    return {
        "driver_paths": driver_paths,
        "remote_url": _env_path("WEBDRIVER_REMOTE_URL"),
        "fixed_port": fixed_port,
    }


__all__ = [
    "DRIVER_PATH_VARS",
    "load_env",
    "get_env_config",
]
