"""Firefox (geckodriver) options."""

import copy
from typing import Any, Iterable, Mapping, Optional

from .base import BrowserOptions


class FirefoxOptions(BrowserOptions):
    """
    Options for geckodriver, sent under ``moz:firefoxOptions``.

    Args:
        args: Command-line arguments for Firefox
        binary: Path to the Firefox executable
        profile: Base64-encoded zipped profile, or an object with ``encoded()``
        log_level: geckodriver log level ("trace", "debug", "info", ...)
        prefs: Preference name -> value
        options: Any other moz:firefoxOptions field
    """

    KEY = "moz:firefoxOptions"
    BROWSER_NAME = "firefox"

    def __init__(
        self,
        args: Optional[Iterable[str]] = None,
        binary: Optional[str] = None,
        profile: Any = None,
        log_level: Optional[str] = None,
        prefs: Optional[Mapping[str, Any]] = None,
        options: Optional[Mapping[str, Any]] = None,
        **opts: Any,
    ):
        super().__init__(**opts)
        self.args: list[str] = [str(a) for a in (args or [])]
        self.binary = binary
        self.profile = profile
        self.log_level = log_level
        self.prefs: dict = dict(prefs or {})
        self.options: dict = dict(options or {})

    @property
    def profile(self) -> Any:
        return self._profile

    @profile.setter
    def profile(self, value: Any) -> None:
        if value is not None and not isinstance(value, str) and not callable(getattr(value, "encoded", None)):
            raise TypeError(f"expected an encoded profile string or an object with encoded(), got {type(value).__name__}")
        self._profile = value

    def add_argument(self, arg: str) -> None:
        self.args.append(str(arg))

    def add_preference(self, name: str, value: Any) -> None:
        self.prefs[name] = value

    def add_option(self, name: str, value: Any) -> None:
        self.options[name] = value

    def vendor_options(self) -> dict:
        opts = copy.deepcopy(self.options)
        if self._profile is not None:
            opts["profile"] = self._profile if isinstance(self._profile, str) else self._profile.encoded()
        if self.args:
            opts["args"] = list(self.args)
        if self.binary:
            opts["binary"] = self.binary
        if self.prefs:
            opts["prefs"] = dict(self.prefs)
        if self.log_level:
            opts["log"] = {"level": str(self.log_level)}
        return opts

    @classmethod
    def from_wire(cls, payload: Mapping[str, Any]) -> "FirefoxOptions":
        vendor = dict(payload.get(cls.KEY) or {})
        log = vendor.pop("log", None) or {}
        return cls(
            args=vendor.pop("args", None),
            binary=vendor.pop("binary", None),
            profile=vendor.pop("profile", None),
            log_level=log.get("level"),
            prefs=vendor.pop("prefs", None),
            options=vendor,
            **cls._w3c_fields_from_wire(payload),
        )


__all__ = ["FirefoxOptions"]
