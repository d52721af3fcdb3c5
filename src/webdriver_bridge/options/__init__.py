"""Browser option objects, converted to capabilities at session creation."""

from .base import BrowserOptions
from .chrome import ChromeOptions, ChromeProfile, EdgeOptions
from .firefox import FirefoxOptions

__all__ = [
    "BrowserOptions",
    "ChromeOptions",
    "ChromeProfile",
    "EdgeOptions",
    "FirefoxOptions",
]
