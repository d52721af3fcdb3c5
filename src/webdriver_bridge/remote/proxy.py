"""Structured proxy descriptor carried inside capabilities."""

from typing import Any, Mapping, Optional


# snake_case field -> wire key
_WIRE_KEYS = {
    "http": "httpProxy",
    "ftp": "ftpProxy",
    "ssl": "sslProxy",
    "no_proxy": "noProxy",
    "pac": "proxyAutoconfigUrl",
    "auto_detect": "autodetect",
    "socks": "socksProxy",
    "socks_username": "socksUsername",
    "socks_password": "socksPassword",
    "socks_version": "socksVersion",
}
_FIELDS_BY_WIRE = {wire: name for name, wire in _WIRE_KEYS.items()}

TYPES = ("DIRECT", "MANUAL", "PAC", "AUTODETECT", "SYSTEM")

_MANUAL_FIELDS = ("http", "ftp", "ssl", "socks", "socks_username", "socks_password", "socks_version")


class Proxy:
    """
    Proxy settings for a session.

    The proxy type is inferred from the fields that are set (MANUAL for
    http/ftp/ssl/socks, PAC for pac, AUTODETECT for auto_detect) or given
    explicitly. A field that contradicts the type raises TypeError.
    """

    def __init__(self, type: Optional[str] = None, **fields: Any):
        unknown = sorted(set(fields) - set(_WIRE_KEYS))
        if unknown:
            raise TypeError(f"unknown proxy option(s): {', '.join(unknown)}")

        self._fields = {k: v for k, v in fields.items() if v is not None}
        self.type = None

        if type is not None:
            self._set_type(str(type).upper())
        for name in self._fields:
            if name in _MANUAL_FIELDS or name == "no_proxy":
                self._set_type("MANUAL")
            elif name == "pac":
                self._set_type("PAC")
            elif name == "auto_detect":
                self._set_type("AUTODETECT")

    def _set_type(self, new_type: str) -> None:
        if new_type not in TYPES:
            raise TypeError(f"unknown proxy type {new_type!r}, expected one of {TYPES}")
        if self.type is not None and self.type != new_type:
            raise TypeError(f"conflicting proxy types: {self.type} and {new_type}")
        self.type = new_type

    def __getattr__(self, name: str) -> Any:
        if name in _WIRE_KEYS:
            return self.__dict__.get("_fields", {}).get(name)
        raise AttributeError(name)

    @classmethod
    def coerce(cls, value: Any) -> "Proxy":
        """Return ``value`` as a Proxy, upgrading a mapping in snake_case or wire form."""
        if isinstance(value, Proxy):
            return value
        if not isinstance(value, Mapping):
            raise TypeError(f"expected dict or Proxy, got {value!r}:{type(value).__name__}")

        fields = {}
        proxy_type = None
        for key, item in value.items():
            key = str(key)
            if key in ("proxyType", "type"):
                proxy_type = item
            elif key in _FIELDS_BY_WIRE:
                fields[_FIELDS_BY_WIRE[key]] = item
            else:
                fields[key] = item
        return cls(type=proxy_type, **fields)

    def to_wire(self, w3c: bool = False) -> dict:
        """
        Serialize for the wire.

        The legacy form uses upper-case types and a comma-separated
        ``noProxy``; the W3C form lower-cases the type and sends ``noProxy``
        as a list of hosts.
        """
        payload = {}
        if self.type:
            payload["proxyType"] = self.type.lower() if w3c else self.type
        for name, item in self._fields.items():
            if name == "no_proxy":
                item = _no_proxy_list(item) if w3c else _no_proxy_string(item)
            payload[_WIRE_KEYS[name]] = item
        return payload

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Proxy) and self.to_wire(w3c=True) == other.to_wire(w3c=True)

    def __repr__(self) -> str:
        return f"Proxy({self.to_wire()!r})"


def _no_proxy_list(value: Any) -> list:
    if isinstance(value, str):
        return [host.strip() for host in value.split(",") if host.strip()]
    return [str(host) for host in value]


def _no_proxy_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    return ", ".join(str(host) for host in value)


__all__ = ["Proxy"]
