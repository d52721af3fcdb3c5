"""
Browser automation client for WebDriver remote ends.

A session is created with ``create_session("chrome" | "firefox" | "edge" |
"remote", **options)``. Without ``url`` the matching driver executable is
started locally and stopped again when the session quits. The client speaks
both the legacy JSON Wire Protocol and W3C WebDriver; Chrome sessions detect
the dialect from the new-session response.

    from webdriver_bridge import create_session, ChromeOptions

    with create_session("chrome", options=ChromeOptions(args=["--headless=new"])) as driver:
        driver.get("https://example.com")
        print(driver.title)
"""

from .driver import Driver, create_session
from .element import By, Element
from .exceptions import (
    ArgumentError,
    ProtocolError,
    ServiceError,
    SessionNotActiveError,
    UnsupportedCapabilityError,
    WaitTimeoutError,
    WebDriverError,
)
from .keys import Keys
from .options import ChromeOptions, ChromeProfile, EdgeOptions, FirefoxOptions
from .remote import Capabilities, ProtocolKind, Proxy, W3CCapabilities
from .support import AbstractEventListener, BlockEventListener
from .utils.wait import Wait, wait_until

__version__ = "0.1.0"

__all__ = [
    "Driver",
    "create_session",
    "By",
    "Element",
    "ArgumentError",
    "ProtocolError",
    "ServiceError",
    "SessionNotActiveError",
    "UnsupportedCapabilityError",
    "WaitTimeoutError",
    "WebDriverError",
    "Keys",
    "ChromeOptions",
    "ChromeProfile",
    "EdgeOptions",
    "FirefoxOptions",
    "Capabilities",
    "ProtocolKind",
    "Proxy",
    "W3CCapabilities",
    "AbstractEventListener",
    "BlockEventListener",
    "Wait",
    "wait_until",
]
