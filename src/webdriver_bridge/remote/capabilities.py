"""Capability sets for both protocol generations.

Keys are stored as the caller wrote them (``browser_name`` or
``browserName``) and converted to the camelCase wire form once, in
``to_wire()``. Writing a key whose wire form already exists replaces the
earlier entry, so the wire payload never carries the same key twice.
Vendor-prefixed keys (``goog:chromeOptions``) are never rewritten.
"""

import copy
from typing import Any, Iterator, Mapping, Optional

from ..exceptions import ArgumentError, UnsupportedCapabilityError
from .proxy import Proxy


def camel_case(key: str) -> str:
    """browser_name -> browserName; vendor and already-camelCase keys pass through."""
    if ":" in key or "_" not in key:
        return key
    head, *rest = key.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def to_wire_value(value: Any, w3c: bool = False) -> Any:
    """Serialize a capability value to JSON-compatible data for one protocol generation."""
    if isinstance(value, Proxy):
        return value.to_wire(w3c=w3c)
    if hasattr(value, "to_wire"):
        return value.to_wire()
    if isinstance(value, Mapping):
        return {k: to_wire_value(v, w3c) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_wire_value(v, w3c) for v in value]
    return value


_BROWSER_ALIASES = {
    "ie": "internet_explorer",
    "internet explorer": "internet_explorer",
    "internetexplorer": "internet_explorer",
    "msedge": "edge",
    "microsoftedge": "edge",
    "ff": "firefox",
}


def _capability(name: str, doc: str = ""):
    def getter(self):
        return self.get(name)

    def setter(self, value):
        self[name] = value

    return property(getter, setter, doc=doc)


class Capabilities:
    """
    Open-ended capability bag used by the legacy JSON Wire Protocol.

    Any string key is accepted. Use the factories (``Capabilities.chrome()``,
    ``Capabilities.from_name("ie")``) for the per-browser defaults.
    """

    BROWSER_DEFAULTS = {
        "chrome": {
            "browser_name": "chrome",
            "javascript_enabled": True,
            "css_selectors_enabled": True,
        },
        "firefox": {
            "browser_name": "firefox",
            "javascript_enabled": True,
            "takes_screenshot": True,
            "css_selectors_enabled": True,
        },
        "edge": {
            "browser_name": "MicrosoftEdge",
            "platform": "WINDOWS",
            "javascript_enabled": True,
            "takes_screenshot": True,
            "css_selectors_enabled": True,
        },
        "internet_explorer": {
            "browser_name": "internet explorer",
            "platform": "WINDOWS",
            "takes_screenshot": True,
            "css_selectors_enabled": True,
            "native_events": True,
        },
        "safari": {
            "browser_name": "safari",
            "javascript_enabled": True,
            "takes_screenshot": True,
            "css_selectors_enabled": True,
        },
    }
    COMMON_DEFAULTS = {"version": "", "platform": "ANY"}
    W3C = False

    browser_name = _capability("browser_name")
    version = _capability("version")
    platform = _capability("platform")
    javascript_enabled = _capability("javascript_enabled")
    takes_screenshot = _capability("takes_screenshot")
    css_selectors_enabled = _capability("css_selectors_enabled")
    native_events = _capability("native_events")
    rotatable = _capability("rotatable")
    accept_insecure_certs = _capability("accept_insecure_certs")
    page_load_strategy = _capability("page_load_strategy")
    firefox_profile = _capability("firefox_profile")
    proxy = _capability("proxy", "A Proxy; dicts are upgraded on assignment.")
    timeouts = _capability("timeouts")

    def __init__(self, capabilities: Optional[Mapping[str, Any]] = None, **kwargs: Any):
        self._caps: dict = {}
        for key, value in {**dict(capabilities or {}), **kwargs}.items():
            self[key] = value

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_name(cls, name: str, **overrides: Any) -> "Capabilities":
        """Default capabilities for a browser name such as 'chrome' or 'ie'."""
        key = str(name).strip().lower()
        key = _BROWSER_ALIASES.get(key, key)
        if key not in cls.BROWSER_DEFAULTS:
            raise ArgumentError(f"unknown browser {name!r}, expected one of {sorted(cls.BROWSER_DEFAULTS)}")
        return cls({**cls.COMMON_DEFAULTS, **cls.BROWSER_DEFAULTS[key], **overrides})

    @classmethod
    def chrome(cls, **overrides: Any) -> "Capabilities":
        return cls.from_name("chrome", **overrides)

    @classmethod
    def firefox(cls, **overrides: Any) -> "Capabilities":
        return cls.from_name("firefox", **overrides)

    @classmethod
    def edge(cls, **overrides: Any) -> "Capabilities":
        return cls.from_name("edge", **overrides)

    @classmethod
    def internet_explorer(cls, **overrides: Any) -> "Capabilities":
        return cls.from_name("internet_explorer", **overrides)

    ie = internet_explorer

    @classmethod
    def safari(cls, **overrides: Any) -> "Capabilities":
        return cls.from_name("safari", **overrides)

    @classmethod
    def from_wire(cls, payload: Optional[Mapping[str, Any]]) -> "Capabilities":
        """
        Build capabilities from a payload returned by the remote end.

        Not validated: a server may add or downgrade keys, and what it
        accepted is the truth for the rest of the session.
        """
        caps = cls.__new__(cls)
        caps._caps = {}
        for key, value in (payload or {}).items():
            caps._store(str(key), value)
        return caps

    # ------------------------------------------------------------------
    # Mapping behaviour
    # ------------------------------------------------------------------

    def _check_key(self, key: str) -> None:
        """Hook for subclasses that restrict the allowed keys."""

    def _find(self, key: str) -> Optional[str]:
        wire = camel_case(key)
        for existing in self._caps:
            if camel_case(existing) == wire:
                return existing
        return None

    def _store(self, key: str, value: Any) -> None:
        existing = self._find(key)
        if existing is not None and existing != key:
            del self._caps[existing]
        if camel_case(key) == "proxy" and value is not None:
            value = Proxy.coerce(value)
        self._caps[key] = value

    def __setitem__(self, key: str, value: Any) -> None:
        if not isinstance(key, str):
            raise TypeError(f"expected str capability key, got {key!r}:{type(key).__name__}")
        self._check_key(key)
        self._store(key, value)

    def __getitem__(self, key: str) -> Any:
        existing = self._find(key)
        if existing is None:
            raise KeyError(key)
        return self._caps[existing]

    def __delitem__(self, key: str) -> None:
        existing = self._find(key)
        if existing is None:
            raise KeyError(key)
        del self._caps[existing]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._find(key) is not None

    def __iter__(self) -> Iterator[str]:
        return iter(self._caps)

    def __len__(self) -> int:
        return len(self._caps)

    def get(self, key: str, default: Any = None) -> Any:
        existing = self._find(key)
        return default if existing is None else self._caps[existing]

    def keys(self):
        return self._caps.keys()

    def items(self):
        return self._caps.items()

    def copy(self) -> "Capabilities":
        new = type(self).__new__(type(self))
        new.__dict__.update(self.__dict__)
        new._caps = copy.deepcopy(self._caps)
        return new

    # ------------------------------------------------------------------
    # Merge and serialization
    # ------------------------------------------------------------------

    def merge(self, overlay: Any) -> "Capabilities":
        """
        Return a new capability set where every key of ``overlay`` overrides this one.

        Keys absent from ``overlay`` are kept. The result has this set's type,
        so merging into W3C capabilities validates the overlay's keys.
        """
        merged = self.copy()
        if overlay is None:
            return merged
        items = overlay.items() if isinstance(overlay, (Capabilities, Mapping)) else None
        if items is None:
            raise TypeError(f"cannot merge {type(overlay).__name__} into capabilities")
        for key, value in items:
            merged[key] = copy.deepcopy(value)
        return merged

    def to_wire(self, w3c: Optional[bool] = None) -> dict:
        """
        Serialize to the camelCase wire form.

        ``w3c`` defaults to this set's own protocol generation; it only changes
        how nested values such as the proxy are written.
        """
        if w3c is None:
            w3c = self.W3C
        return {camel_case(key): to_wire_value(value, w3c) for key, value in self._caps.items()}

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.to_wire() == other.to_wire()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_wire()!r})"


class W3CCapabilities(Capabilities):
    """
    Capabilities restricted to the W3C WebDriver key set.

    Extension keys of the form ``vendor:name`` are always allowed; anything
    else raises UnsupportedCapabilityError as soon as it is written.
    """

    VALID_W3C = (
        "browser_name",
        "browser_version",
        "platform_name",
        "accept_insecure_certs",
        "page_load_strategy",
        "proxy",
        "set_window_rect",
        "timeouts",
        "unhandled_prompt_behavior",
        "strict_file_interactability",
    )
    _VALID_WIRE = frozenset(camel_case(key) for key in VALID_W3C)

    BROWSER_DEFAULTS = {
        "chrome": {"browser_name": "chrome"},
        "firefox": {"browser_name": "firefox"},
        "edge": {"browser_name": "MicrosoftEdge"},
        "internet_explorer": {"browser_name": "internet explorer", "platform_name": "windows"},
        "safari": {"browser_name": "safari"},
    }
    COMMON_DEFAULTS: dict = {}
    W3C = True

    browser_version = _capability("browser_version")
    platform_name = _capability("platform_name")
    set_window_rect = _capability("set_window_rect")
    unhandled_prompt_behavior = _capability("unhandled_prompt_behavior")
    strict_file_interactability = _capability("strict_file_interactability")

    @classmethod
    def is_valid_key(cls, key: str) -> bool:
        return ":" in key or camel_case(key) in cls._VALID_WIRE

    def _check_key(self, key: str) -> None:
        if not self.__dict__.get("_trusted") and not self.is_valid_key(key):
            raise UnsupportedCapabilityError(
                f"unsupported W3C capability {key!r}; expected one of {', '.join(self.VALID_W3C)} "
                "or a vendor-prefixed key"
            )

    @classmethod
    def from_wire(cls, payload: Optional[Mapping[str, Any]]) -> "W3CCapabilities":
        caps = super().from_wire(payload)
        caps._trusted = True
        return caps


__all__ = [
    "camel_case",
    "to_wire_value",
    "Capabilities",
    "W3CCapabilities",
]
