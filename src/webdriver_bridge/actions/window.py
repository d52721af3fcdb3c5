"""Session management: cookies, timeouts and the browser window."""

import datetime
from typing import Any, Optional

from ..element import Dimension, Point
from ..exceptions import ArgumentError


def _cookie_from_wire(raw: dict) -> dict:
    expiry = raw.get("expiry")
    return {
        "name": raw.get("name"),
        "value": raw.get("value"),
        "path": raw.get("path"),
        "domain": raw.get("domain"),
        "secure": bool(raw.get("secure", False)),
        "http_only": bool(raw.get("httpOnly", False)),
        "expires": datetime.datetime.fromtimestamp(expiry, tz=datetime.timezone.utc) if expiry else None,
    }


class Timeouts:
    """Session timeouts, in seconds."""

    def __init__(self, bridge):
        self.bridge = bridge

    def implicit_wait(self, seconds: float) -> None:
        self.bridge.set_timeout("implicit", seconds)

    def script_timeout(self, seconds: float) -> None:
        self.bridge.set_timeout("script", seconds)

    def page_load(self, seconds: float) -> None:
        self.bridge.set_timeout("page load", seconds)


class Window:
    """
    A browser window. ``handle`` defaults to the current window; W3C
    sessions only support the current one.
    """

    def __init__(self, bridge, handle: str = "current"):
        self.bridge = bridge
        self.handle = handle

    @property
    def size(self) -> Dimension:
        return self.bridge.window_size(self.handle)

    @size.setter
    def size(self, value) -> None:
        width, height = value
        self.bridge.set_window_size(width, height, self.handle)

    @property
    def position(self) -> Point:
        return self.bridge.window_position(self.handle)

    @position.setter
    def position(self, value) -> None:
        x, y = value
        self.bridge.set_window_position(x, y, self.handle)

    def maximize(self) -> None:
        self.bridge.maximize_window(self.handle)


class Manager:
    """Cookies, timeouts and window for one session (``Driver.manage``)."""

    def __init__(self, bridge):
        self.bridge = bridge

    def add_cookie(
        self,
        name: Optional[str] = None,
        value: Any = None,
        path: str = "/",
        domain: Optional[str] = None,
        secure: bool = False,
        http_only: bool = False,
        expires: Optional[datetime.datetime] = None,
    ) -> None:
        """
        Add a cookie to the current page's domain.

        Raises:
            ArgumentError: if name or value is missing
        """
        if not name:
            raise ArgumentError("cookie name is required")
        if value is None:
            raise ArgumentError("cookie value is required")

        cookie = {"name": name, "value": str(value), "path": path, "secure": bool(secure)}
        if http_only:
            cookie["httpOnly"] = True
        if domain:
            cookie["domain"] = domain
        if expires is not None:
            cookie["expiry"] = int(expires.timestamp())
        self.bridge.add_cookie(cookie)

    def cookie_named(self, name: str) -> Optional[dict]:
        for cookie in self.all_cookies():
            if cookie["name"] == name:
                return cookie
        return None

    def all_cookies(self) -> list[dict]:
        return [_cookie_from_wire(c) for c in self.bridge.cookies()]

    def delete_cookie(self, name: str) -> None:
        self.bridge.delete_cookie(name)

    def delete_all_cookies(self) -> None:
        self.bridge.delete_all_cookies()

    @property
    def timeouts(self) -> Timeouts:
        return Timeouts(self.bridge)

    @property
    def window(self) -> Window:
        return Window(self.bridge)


__all__ = [
    'Timeouts',
    'Window',
    'Manager',
]
