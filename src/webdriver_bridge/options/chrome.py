"""Chrome and Chromium-based Edge options."""

import base64
import copy
import os
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

from ..exceptions import ArgumentError
from .base import BrowserOptions


@dataclass
class ChromeProfile:
    """
    A Chrome profile location plus already-encoded extensions.

    Only used by the deprecated ``profile=`` keyword: the directory becomes a
    ``--user-data-dir`` argument and the extensions are added to the options.
    """

    directory: str
    extensions: list[str] = field(default_factory=list)

    def to_wire(self) -> dict:
        return {"directory": self.directory, "extensions": list(self.extensions)}


class ChromeOptions(BrowserOptions):
    """
    Options for chromedriver. Everything Chrome-specific is sent under
    ``goog:chromeOptions``.

    Example:
        options = ChromeOptions(args=["--headless=new"], prefs={"download.prompt_for_download": False})
        driver = create_session("chrome", options=options)
    """

    KEY = "goog:chromeOptions"
    LEGACY_KEYS = ("chromeOptions",)
    BROWSER_NAME = "chrome"

    def __init__(
        self,
        args: Optional[Iterable[str]] = None,
        binary: Optional[str] = None,
        prefs: Optional[Mapping[str, Any]] = None,
        extensions: Optional[Iterable[str]] = None,
        detach: Optional[bool] = None,
        options: Optional[Mapping[str, Any]] = None,
        **opts: Any,
    ):
        super().__init__(**opts)
        self.args: list[str] = [str(a) for a in (args or [])]
        self.binary = binary
        self.prefs: dict = dict(prefs or {})
        self.encoded_extensions: list[str] = list(extensions or [])
        self.options: dict = dict(options or {})
        if detach is not None:
            self.detach = detach

    def add_argument(self, arg: str) -> None:
        self.args.append(str(arg))

    def add_extension(self, path: str) -> None:
        """Add a packed extension (.crx) from disk."""
        if not os.path.isfile(path):
            raise ArgumentError(f"could not find extension at {path!r}")
        with open(path, "rb") as f:
            self.encoded_extensions.append(base64.b64encode(f.read()).decode("ascii"))

    def add_encoded_extension(self, encoded: str) -> None:
        self.encoded_extensions.append(encoded)

    def add_preference(self, name: str, value: Any) -> None:
        self.prefs[name] = value

    def add_option(self, name: str, value: Any) -> None:
        """Set any other chromeOptions field, e.g. ``debuggerAddress``."""
        self.options[name] = value

    @property
    def detach(self) -> bool:
        return bool(self.options.get("detach", False))

    @detach.setter
    def detach(self, value: bool) -> None:
        self.options["detach"] = bool(value)

    def vendor_options(self) -> dict:
        opts = copy.deepcopy(self.options)
        if self.args:
            opts["args"] = list(self.args)
        if self.binary:
            opts["binary"] = self.binary
        if self.prefs:
            opts["prefs"] = dict(self.prefs)
        if self.encoded_extensions:
            opts["extensions"] = list(self.encoded_extensions)
        return opts

    @classmethod
    def from_wire(cls, payload: Mapping[str, Any]) -> "ChromeOptions":
        vendor = payload.get(cls.KEY)
        if vendor is None:
            for key in cls.LEGACY_KEYS:
                if key in payload:
                    vendor = payload[key]
                    break
        vendor = dict(vendor or {})

        fields = cls._w3c_fields_from_wire(payload)
        return cls(
            args=vendor.pop("args", None),
            binary=vendor.pop("binary", None),
            prefs=vendor.pop("prefs", None),
            extensions=vendor.pop("extensions", None),
            options=vendor,
            **fields,
        )


class EdgeOptions(ChromeOptions):
    """Options for msedgedriver, sent under ``ms:edgeOptions``."""

    KEY = "ms:edgeOptions"
    LEGACY_KEYS = ()
    BROWSER_NAME = "MicrosoftEdge"

    def __init__(self, *args: Any, **opts: Any):
        opts.setdefault("page_load_strategy", "normal")
        super().__init__(*args, **opts)


__all__ = [
    "ChromeProfile",
    "ChromeOptions",
    "EdgeOptions",
]
