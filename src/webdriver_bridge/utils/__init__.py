"""Internal helpers: polling, diagnostics, deprecation notices."""

from .wait import Wait, wait_until
from .diagnostics import collect_diagnostics
from .deprecation import deprecate

__all__ = [
    "Wait",
    "wait_until",
    "collect_diagnostics",
    "deprecate",
]
