"""Process and port management."""

import platform
import socket
import subprocess
from typing import Optional

import psutil

from ..constants import DEFAULT_HOST, PORT_PROBE_TIMEOUT

import logging
logger = logging.getLogger(__name__)


def _is_port_open(host: str, port: int, timeout: float = PORT_PROBE_TIMEOUT) -> bool:
    """Check if something accepts connections on a port."""
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError:
        return False


def get_free_port(host: str = DEFAULT_HOST) -> int:
    """Get a free port by binding to port 0."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind((host, 0))
        return s.getsockname()[1]


def is_port_available(host: str, port: int) -> bool:
    """Check that a port can still be bound. Used right before spawning."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        try:
            s.bind((host, port))
        except OSError:
            return False
    return True


def spawn(cmd: list[str], env: dict, output) -> subprocess.Popen:
    """
    Start a driver process with stdout and stderr sent to ``output``.

    Args:
        cmd: Executable followed by its arguments
        env: Full environment for the child
        output: Open binary file receiving both output streams

    Returns:
        subprocess.Popen: the started process
    """
    kwargs = {}
    if platform.system() == "Windows":
        kwargs["creationflags"] = subprocess.CREATE_NO_WINDOW
    return subprocess.Popen(
        cmd,
        env=env,
        stdin=subprocess.DEVNULL,
        stdout=output,
        stderr=subprocess.STDOUT,
        **kwargs,
    )


def terminate_process(proc: subprocess.Popen, timeout: float) -> Optional[int]:
    """
    Stop a process and everything it spawned.

    Children are collected first (drivers start the browser as a child) so
    they can be reaped after the parent is gone. Processes that already
    exited are ignored.

    Returns:
        The exit code of ``proc``, or None if it could not be determined
    """
    try:
        children = psutil.Process(proc.pid).children(recursive=True)
    except (psutil.NoSuchProcess, psutil.AccessDenied, ProcessLookupError):
        children = []

    if proc.poll() is None:
        try:
            proc.terminate()
            proc.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            logger.warning(f"Process {proc.pid} did not exit within {timeout}s, killing it")
            proc.kill()
            try:
                proc.wait(timeout=timeout)
            except subprocess.TimeoutExpired:
                logger.warning(f"Process {proc.pid} still running after kill")
        except ProcessLookupError:
            pass

    for child in children:
        try:
            child.terminate()
        except (psutil.NoSuchProcess, psutil.AccessDenied, ProcessLookupError):
            continue
    if children:
        _, alive = psutil.wait_procs(children, timeout=timeout)
        for child in alive:
            try:
                child.kill()
            except (psutil.NoSuchProcess, psutil.AccessDenied, ProcessLookupError):
                continue

    return proc.poll()


__all__ = [
    "_is_port_open",
    "get_free_port",
    "is_port_available",
    "spawn",
    "terminate_process",
]
