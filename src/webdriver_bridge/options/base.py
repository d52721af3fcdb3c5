"""Typed, pre-wire browser options."""

import copy
from typing import Any, Mapping, Optional

from ..exceptions import UnsupportedCapabilityError
from ..remote.capabilities import Capabilities, W3CCapabilities, camel_case, to_wire_value
from ..remote.proxy import Proxy


class BrowserOptions:
    """
    Options shared by every browser family: the W3C capability fields.

    Browser-specific subclasses add their own fields and serialize them under
    a single vendor key (``KEY``) so they never collide with standard keys.
    Unknown keyword arguments raise UnsupportedCapabilityError.
    """

    KEY: Optional[str] = None
    BROWSER_NAME: Optional[str] = None

    def __init__(self, **opts: Any):
        self._w3c: dict = {}
        if self.BROWSER_NAME and "browser_name" not in opts:
            opts["browser_name"] = self.BROWSER_NAME

        unknown = []
        for key, value in opts.items():
            if key in W3CCapabilities.VALID_W3C:
                self._w3c[key] = value
            else:
                unknown.append(key)
        if unknown:
            raise UnsupportedCapabilityError(f"Unknown capabilities requested: {sorted(unknown)}")

        if self._w3c.get("proxy") is not None:
            self._w3c["proxy"] = Proxy.coerce(self._w3c["proxy"])

    @property
    def proxy(self) -> Optional[Proxy]:
        return self._w3c.get("proxy")

    @proxy.setter
    def proxy(self, value: Any) -> None:
        self._w3c["proxy"] = None if value is None else Proxy.coerce(value)

    @property
    def browser_name(self) -> Optional[str]:
        return self._w3c.get("browser_name")

    @property
    def page_load_strategy(self) -> Optional[str]:
        return self._w3c.get("page_load_strategy")

    @page_load_strategy.setter
    def page_load_strategy(self, value: Optional[str]) -> None:
        self._w3c["page_load_strategy"] = value

    def set_capability(self, key: str, value: Any) -> None:
        """Set one of the W3C capability fields."""
        if key not in W3CCapabilities.VALID_W3C:
            raise UnsupportedCapabilityError(f"Unknown capability requested: {key!r}")
        self._w3c[key] = Proxy.coerce(value) if key == "proxy" and value is not None else value

    def vendor_options(self) -> dict:
        """The browser-specific part, serialized under KEY. Subclasses override."""
        return {}

    def to_wire(self) -> dict:
        payload = {camel_case(k): to_wire_value(v, w3c=True) for k, v in self._w3c.items() if v is not None}
        vendor = self.vendor_options()
        if self.KEY and vendor:
            payload[self.KEY] = vendor
        return payload

    def to_capabilities(self, w3c: bool = True) -> Capabilities:
        """Convert to the capability flavour for the target protocol generation."""
        cls = W3CCapabilities if w3c else Capabilities
        caps = cls()
        for key, value in self._w3c.items():
            if value is not None:
                caps[key] = value
        vendor = self.vendor_options()
        if self.KEY and vendor:
            caps[self.KEY] = vendor
        return caps

    @classmethod
    def _w3c_fields_from_wire(cls, payload: Mapping[str, Any]) -> dict:
        wire_to_field = {camel_case(k): k for k in W3CCapabilities.VALID_W3C}
        return {wire_to_field[k]: v for k, v in payload.items() if k in wire_to_field}

    def copy(self) -> "BrowserOptions":
        return copy.deepcopy(self)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.to_wire() == other.to_wire()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_wire()!r})"


__all__ = ["BrowserOptions"]
