"""Driver executable resolution."""

import os
import shutil
from typing import Optional

from ..exceptions import ExecutableNotFoundError

import logging
logger = logging.getLogger(__name__)


def is_executable_file(path: Optional[str]) -> bool:
    return bool(path) and os.path.isfile(path) and os.access(path, os.X_OK)


def discover_executable(spec, env_config: Optional[dict] = None) -> Optional[str]:
    """
    Find a driver executable without an explicit path.

    Looks at the browser's environment override first, then searches PATH
    for each of the driver's executable names. Nothing is validated here.

    Args:
        spec: DriverSpec for the browser
        env_config: Output of ``get_env_config()``

    Returns:
        Optional[str]: Candidate path, or None if nothing was found
    """
    env_config = env_config or {}
    override = (env_config.get("driver_paths") or {}).get(spec.name)
    if override:
        logger.debug(f"Using {spec.env_var} override for {spec.name}: {override}")
        return override

    for name in spec.executables:
        found = shutil.which(name)
        if found:
            return found
    return None


def resolve_executable(spec, explicit: Optional[str] = None, env_config: Optional[dict] = None) -> str:
    """
    Resolve the driver executable: explicit path, environment, then PATH.

    Raises:
        ExecutableNotFoundError: if nothing is found, or the result is not
            an executable file
    """
    path = explicit or discover_executable(spec, env_config)
    if not path:
        raise ExecutableNotFoundError(
            f"Unable to find {spec.executables[0]}. Put it on PATH, set {spec.env_var}, "
            f"or pass driver_path."
        )
    if not is_executable_file(path):
        raise ExecutableNotFoundError(f"{path} is not an executable file")
    return path


__all__ = [
    "is_executable_file",
    "discover_executable",
    "resolve_executable",
]
