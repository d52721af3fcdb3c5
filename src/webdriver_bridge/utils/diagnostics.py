"""Diagnostics and debugging information utility functions."""

import sys
import platform
from typing import Optional

OUTPUT_TAIL_LINES = 20


def _tail(text: str, lines: int = OUTPUT_TAIL_LINES) -> list[str]:
    return [line for line in (text or "").splitlines() if line.strip()][-lines:]


def collect_diagnostics(service=None, exc: Optional[BaseException] = None) -> str:
    """
    Collect diagnostic information about the environment and a driver service.

    Args:
        service: Service instance (started, failed or stopped), or None
        exc: Exception that occurred (can be None)

    Returns:
        str: Formatted diagnostic information
    """
    parts = [
        f"OS                : {platform.system()} {platform.release()}",
        f"Python            : {sys.version.split()[0]}",
    ]

    if service is not None:
        proc = getattr(service, "process", None)
        returncode = getattr(service, "returncode", None)
        if returncode is None and proc is not None:
            returncode = proc.poll()
        parts += [
            f"Driver            : {service.spec.name}",
            f"Executable        : {service.executable or '<unresolved>'}",
            f"Port              : {service.port if service.port is not None else '<none>'}",
            f"URL               : {service.url if service.port is not None else '<none>'}",
            f"PID               : {proc.pid if proc is not None else '<not started>'}",
            f"Return code       : {returncode if returncode is not None else '<running>'}",
        ]
        tail = _tail(service.output())
        if tail:
            parts.append("---- DRIVER OUTPUT ----")
            parts += tail

    if exc:
        parts += [
            "---- ERROR ----",
            f"Error type        : {type(exc).__name__}",
            f"Error message     : {exc}",
        ]

    return "\n".join(parts)


__all__ = ['collect_diagnostics']
