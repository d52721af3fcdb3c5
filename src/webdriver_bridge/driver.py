"""Session creation and the Driver facade."""

import base64
from dataclasses import dataclass
from typing import Any, Optional

from .actions import Keyboard, Manager, Navigation, TargetLocator
from .browser import DRIVER_SPECS, DriverSpec, Service, ServiceConfig
from .config import get_env_config
from .constants import DEFAULT_REMOTE_URL
from .element import Element
from .exceptions import ArgumentError
from .options import BrowserOptions, ChromeOptions, ChromeProfile, EdgeOptions, FirefoxOptions
from .remote import Bridge, Capabilities, ProtocolKind, Proxy, W3CCapabilities
from .support import AbstractEventListener, BlockEventListener, EventFiringBridge
from .utils.deprecation import default_logger, deprecate
from .utils.wait import Wait

import logging
logger = logging.getLogger(__name__)


# ============================================================================
# Browser registry
# ============================================================================

@dataclass(frozen=True)
class BrowserSpec:
    """
    One entry of the browser registry.

    ``kind`` None means the dialect is detected by handshake. ``driver`` None
    means no local service is ever started.
    """
    name: str
    options_class: Optional[type]
    kind: Optional[ProtocolKind]
    driver: Optional[DriverSpec]
    log_level_flag: Optional[str] = None


BROWSERS = {
    "chrome": BrowserSpec("chrome", ChromeOptions, None, DRIVER_SPECS["chrome"], "--log-level"),
    "firefox": BrowserSpec("firefox", FirefoxOptions, ProtocolKind.W3C, DRIVER_SPECS["firefox"]),
    "edge": BrowserSpec("edge", EdgeOptions, ProtocolKind.W3C, DRIVER_SPECS["edge"], "--log-level"),
    "remote": BrowserSpec("remote", None, None, None),
}

_BROWSER_ALIASES = {
    "googlechrome": "chrome",
    "ff": "firefox",
    "msedge": "edge",
    "microsoftedge": "edge",
}

RECOGNIZED_OPTIONS = frozenset({
    "binary",
    "args",
    "profile",
    "prefs",
    "log_level",
    "detach",
    "proxy",
    "url",
    "driver_path",
    "port",
    "http_client",
    "listener",
    "options",
    "desired_capabilities",
    "switches",
    "service_args",
    "service_log_path",
    "logger",
})

_SERVICE_OPTIONS = ("driver_path", "port", "service_args", "service_log_path")


def browser_spec(browser: str) -> BrowserSpec:
    key = str(browser).strip().lower().replace(" ", "")
    key = _BROWSER_ALIASES.get(key, key)
    try:
        return BROWSERS[key]
    except KeyError:
        raise ArgumentError(f"unknown browser {browser!r}, expected one of {sorted(BROWSERS)}") from None


# ============================================================================
# Normalization
# ============================================================================

@dataclass
class SessionOptions:
    """The result of normalizing ``create_session`` keyword arguments."""
    browser: BrowserSpec
    options: Optional[BrowserOptions]
    desired_capabilities: Optional[Capabilities]
    proxy: Optional[Proxy]
    url: Optional[str]
    service_config: Optional[ServiceConfig]
    env_config: dict
    http_client: Any = None
    listener: Optional[AbstractEventListener] = None

    @property
    def kind(self) -> Optional[ProtocolKind]:
        return self.browser.kind


def _require_options(spec: BrowserSpec, options: Optional[BrowserOptions], field: str) -> BrowserOptions:
    if options is None:
        raise ArgumentError(f"{field} needs typed browser options; pass options= for {spec.name} sessions")
    return options


def _string_list(value: Any, field: str) -> list[str]:
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise ArgumentError(f"{field} must be a list of strings, got {value!r}")
    return list(value)


def _apply_profile(options: BrowserOptions, profile: Any) -> None:
    if isinstance(options, ChromeOptions):
        if isinstance(profile, str):
            profile = ChromeProfile(profile)
        if not isinstance(profile, ChromeProfile):
            raise ArgumentError(f"expected a ChromeProfile or a profile directory, got {type(profile).__name__}")
        if not any(arg.startswith("--user-data-dir") for arg in options.args):
            options.add_argument(f"--user-data-dir={profile.directory}")
        for extension in profile.extensions:
            options.add_encoded_extension(extension)
    elif isinstance(options, FirefoxOptions):
        options.profile = profile
    else:
        raise ArgumentError(f"profile is not supported by {type(options).__name__}")


def normalize_options(browser: str, opts: dict) -> SessionOptions:
    """
    Validate ``create_session`` keywords and fold them into typed options.

    Deprecated loose keywords are translated into fields of a copy of the
    typed options, each with a deprecation notice through ``logger``. The
    caller's options object is never modified.

    Raises:
        ArgumentError: unknown keywords, or values of the wrong shape
    """
    spec = browser_spec(browser)
    opts = dict(opts)

    unknown = sorted(set(opts) - RECOGNIZED_OPTIONS)
    if unknown:
        raise ArgumentError(f"unknown option(s) for {spec.name}: {', '.join(unknown)}")

    log = opts.pop("logger", None) or default_logger()
    env_config = get_env_config()

    # typed options ------------------------------------------------------
    options = opts.pop("options", None)
    if options is not None:
        if spec.options_class is not None and not isinstance(options, spec.options_class):
            raise ArgumentError(
                f"expected {spec.options_class.__name__} for {spec.name}, got {type(options).__name__}"
            )
        if not isinstance(options, BrowserOptions):
            raise ArgumentError(f"expected browser options, got {type(options).__name__}")
        options = options.copy()
    elif spec.options_class is not None:
        options = spec.options_class()

    desired = opts.pop("desired_capabilities", None)
    if desired is not None:
        deprecate(log, "desired_capabilities", "options")
        if not isinstance(desired, Capabilities):
            desired = Capabilities(desired)
        else:
            desired = desired.copy()

    # loose option fields --------------------------------------------------
    switches = opts.pop("switches", None)
    args = opts.pop("args", None)
    if switches is not None:
        deprecate(log, "switches", "options.args")
        switches = _string_list(switches, "switches")
        args = switches if args is None else switches + _string_list(args, "args")
    if args is not None:
        deprecate(log, "args", "options.args")
        _require_options(spec, options, "args").args = _string_list(args, "args")

    binary = opts.pop("binary", None)
    if binary is not None:
        _require_options(spec, options, "binary").binary = binary

    profile = opts.pop("profile", None)
    if profile is not None:
        deprecate(log, "profile", "options.profile")
        _apply_profile(_require_options(spec, options, "profile"), profile)

    prefs = opts.pop("prefs", None)
    if prefs is not None:
        deprecate(log, "prefs", "options.prefs")
        if not isinstance(prefs, dict):
            raise ArgumentError(f"prefs must be a mapping, got {type(prefs).__name__}")
        _require_options(spec, options, "prefs").prefs.update(prefs)

    detach = opts.pop("detach", None)
    if detach is not None:
        deprecate(log, "detach", "options.detach")
        if not isinstance(options, ChromeOptions):
            raise ArgumentError(f"detach is not supported by {spec.name}")
        options.detach = detach

    proxy = opts.pop("proxy", None)
    if proxy is not None:
        try:
            proxy = Proxy.coerce(proxy)
        except TypeError as e:
            raise ArgumentError(f"invalid proxy: {e}") from e

    # service ------------------------------------------------------------
    service_args: list[str] = []
    log_level = opts.pop("log_level", None)
    if log_level is not None:
        if isinstance(options, FirefoxOptions):
            options.log_level = log_level
        elif spec.log_level_flag:
            service_args.append(f"{spec.log_level_flag}={str(log_level).upper()}")
        else:
            raise ArgumentError(f"log_level is not supported by {spec.name}")

    if opts.get("service_args") is not None:
        service_args += _string_list(opts["service_args"], "service_args")

    url = opts.pop("url", None)
    service_config = None
    if spec.driver is None or url is not None:
        given = [name for name in _SERVICE_OPTIONS if opts.get(name) is not None]
        if given:
            raise ArgumentError(f"{', '.join(given)} only apply to a local driver service, not to url sessions")
        if spec.driver is None:
            url = url or env_config.get("remote_url") or DEFAULT_REMOTE_URL
    else:
        port = opts.get("port") if opts.get("port") is not None else env_config.get("fixed_port")
        service_config = ServiceConfig(
            executable_path=opts.get("driver_path"),
            port=port,
            args=service_args,
            log_path=opts.get("service_log_path"),
        )

    listener = opts.pop("listener", None)
    if listener is not None and not isinstance(listener, AbstractEventListener):
        if not callable(listener):
            raise ArgumentError(f"listener must be an AbstractEventListener or a callable, got {listener!r}")
        listener = BlockEventListener(listener)

    return SessionOptions(
        browser=spec,
        options=options,
        desired_capabilities=desired,
        proxy=proxy,
        url=url,
        service_config=service_config,
        env_config=env_config,
        http_client=opts.pop("http_client", None),
        listener=listener,
    )


def build_capabilities(session: SessionOptions) -> Capabilities:
    """
    Merge defaults, desired capabilities, options and proxy into one set.

    Later sources win per top-level key: library defaults, then desired
    capabilities, then the typed options, then the proxy keyword.
    """
    w3c = session.kind is ProtocolKind.W3C
    caps_cls = W3CCapabilities if w3c else Capabilities

    if session.browser.driver is not None:
        caps = caps_cls.from_name(session.browser.name)
    else:
        caps = caps_cls()

    if session.desired_capabilities is not None:
        caps = caps.merge(session.desired_capabilities)
    if session.options is not None:
        caps = caps.merge(session.options.to_capabilities(w3c=w3c))
    if session.proxy is not None:
        caps["proxy"] = session.proxy
    return caps


def create_session(browser: str, **opts: Any) -> "Driver":
    """
    Start a browser session and return its Driver.

    Without ``url`` a local driver service is started for the browser and
    owned by the returned Driver. If the session cannot be created the
    service is stopped before the error propagates.

    Example:
        with create_session("chrome", options=ChromeOptions(args=["--headless=new"])) as driver:
            driver.get("https://example.com")
    """
    session = normalize_options(browser, opts)
    capabilities = build_capabilities(session)

    service = None
    url = session.url
    if url is None:
        service = Service(session.browser.driver, session.service_config, env_config=session.env_config)
        service.start()
        url = service.url

    try:
        bridge = Bridge.handshake(url, capabilities, kind=session.kind, http_client=session.http_client)
    except BaseException:
        if service is not None:
            logger.debug(f"Session creation failed, stopping {session.browser.name} driver")
            service.stop()
        raise

    backend = bridge
    if session.listener is not None:
        backend = EventFiringBridge(bridge, session.listener)
    logger.info(f"Created {session.browser.name} session {bridge.session_id} ({bridge.kind.value})")
    return Driver(backend, service=service)


# ============================================================================
# Driver
# ============================================================================

class Driver:
    """
    Handle for one browser session.

    Owns the backend and, for local sessions, the driver service. ``quit()``
    ends both; the service is stopped even if ending the session fails.
    """

    def __init__(self, bridge, service: Optional[Service] = None):
        self.bridge = bridge
        self.service = service

    # session ------------------------------------------------------------

    @property
    def session_id(self) -> Optional[str]:
        return self.bridge.session_id

    @property
    def capabilities(self) -> Capabilities:
        return self.bridge.capabilities

    @property
    def browser(self) -> Optional[str]:
        caps = self.capabilities
        return caps.get("browser_name") if caps is not None else None

    def execute(self, name: str, url_params: Optional[dict] = None, payload: Any = None) -> Any:
        """Send a raw wire command by name."""
        return self.bridge.execute(name, url_params, payload)

    def status(self) -> Any:
        return self.bridge.status()

    def quit(self) -> None:
        try:
            self.bridge.quit()
        finally:
            if self.service is not None:
                self.service.stop()

    def close(self) -> None:
        """Close the current window. The session stays open."""
        self.bridge.close()

    def __enter__(self) -> "Driver":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.quit()

    # navigation ---------------------------------------------------------

    def get(self, url: str) -> None:
        self.bridge.get(url)

    @property
    def navigate(self) -> Navigation:
        return Navigation(self.bridge)

    @property
    def title(self) -> str:
        return self.bridge.title()

    @property
    def current_url(self) -> str:
        return self.bridge.current_url()

    @property
    def page_source(self) -> str:
        return self.bridge.page_source()

    # elements and scripts ---------------------------------------------------

    def find_element(self, how: str, what: str) -> Element:
        return self.bridge.find_element_by(how, what)

    def find_elements(self, how: str, what: str) -> list[Element]:
        return self.bridge.find_elements_by(how, what)

    def execute_script(self, script: str, *args: Any) -> Any:
        return self.bridge.execute_script(script, *args)

    def execute_async_script(self, script: str, *args: Any) -> Any:
        return self.bridge.execute_async_script(script, *args)

    # windows ------------------------------------------------------------

    @property
    def window_handles(self) -> list:
        return self.bridge.window_handles()

    @property
    def window_handle(self) -> str:
        return self.bridge.window_handle()

    @property
    def switch_to(self) -> TargetLocator:
        return TargetLocator(self.bridge)

    @property
    def manage(self) -> Manager:
        return Manager(self.bridge)

    @property
    def keyboard(self) -> Keyboard:
        return Keyboard(self.bridge)

    # screenshots --------------------------------------------------------

    def screenshot(self) -> str:
        """Base64-encoded PNG of the current viewport."""
        return self.bridge.screenshot()

    def screenshot_as_png(self) -> bytes:
        return base64.b64decode(self.screenshot())

    def save_screenshot(self, path: str) -> None:
        with open(path, "wb") as f:
            f.write(self.screenshot_as_png())

    # waiting ------------------------------------------------------------

    def wait(self, timeout: Optional[float] = None, interval: Optional[float] = None, message: Optional[str] = None, **kwargs: Any) -> Wait:
        """
        A Wait preconfigured with this driver's defaults.

        Example:
            button = driver.wait(timeout=10).until(lambda: driver.find_element("css", "#go"))
        """
        if timeout is not None:
            kwargs["timeout"] = timeout
        if interval is not None:
            kwargs["interval"] = interval
        return Wait(message=message, **kwargs)

    def __repr__(self) -> str:
        return f"<Driver browser={self.browser!r} session={self.session_id!r}>"


__all__ = [
    "BrowserSpec",
    "BROWSERS",
    "RECOGNIZED_OPTIONS",
    "browser_spec",
    "SessionOptions",
    "normalize_options",
    "build_capabilities",
    "create_session",
    "Driver",
]
