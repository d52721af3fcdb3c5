"""Local driver processes."""

from .executable import discover_executable, resolve_executable
from .service import (
    DRIVER_SPECS,
    DriverSpec,
    Service,
    ServiceConfig,
    normalize_loopback,
)

__all__ = [
    "discover_executable",
    "resolve_executable",
    "DRIVER_SPECS",
    "DriverSpec",
    "Service",
    "ServiceConfig",
    "normalize_loopback",
]
