"""Error taxonomy shared by every layer of the client.

Configuration errors are raised before any process or network activity,
launch errors come out of the driver service, protocol errors are mapped
from the remote end's error envelope, and ``WaitTimeoutError`` is raised by
the poll-wait helper. Transport errors are the standard library's own and
are listed in ``TRANSPORT_ERRORS``.
"""

import http.client
from typing import Optional


class WebDriverError(Exception):
    """Base class for every error raised by webdriver_bridge."""


# ============================================================================
# Configuration
# ============================================================================

class ArgumentError(WebDriverError, ValueError):
    """An option, keyword or argument was not recognized or had the wrong shape."""


class UnsupportedCapabilityError(ArgumentError):
    """A capability key is not allowed for the protocol generation in use."""


# ============================================================================
# Driver service
# ============================================================================

class ServiceError(WebDriverError):
    """Base class for driver process failures. ``output`` holds what the process printed."""

    def __init__(self, message: str, output: str = ""):
        super().__init__(message)
        self.output = output


class ExecutableNotFoundError(ServiceError):
    pass


class PortUnavailableError(ServiceError):
    pass


class ServiceLaunchError(ServiceError):
    """The driver process exited before it became reachable."""


class ServiceLaunchTimeoutError(ServiceLaunchError):
    """The driver process never became reachable within the start timeout."""


# ============================================================================
# Session state
# ============================================================================

class SessionNotActiveError(WebDriverError):
    """A command was issued before a session was created or after it was quit."""


# ============================================================================
# Poll-wait
# ============================================================================

class WaitTimeoutError(WebDriverError):
    """A polled condition did not become true in time.

    Distinct from ``ProtocolTimeoutError``, which is reported by the remote end.
    Not a subclass of the builtin ``TimeoutError`` (an ``OSError``), so
    ``except TimeoutError`` does not catch it.
    """

    def __init__(self, message: str, timeout: float = 0.0, last_error: Optional[BaseException] = None):
        super().__init__(message)
        self.timeout = timeout
        self.last_error = last_error


# ============================================================================
# Protocol errors
# ============================================================================

class ProtocolError(WebDriverError):
    """An error reported by the remote end through the response envelope."""

    code = "unknown error"

    def __init__(self, message: str = "", status: Optional[int] = None, stacktrace: Optional[str] = None):
        super().__init__(message or self.code)
        self.message = message
        self.status = status
        self.stacktrace = stacktrace


class ElementClickInterceptedError(ProtocolError):
    code = "element click intercepted"


class ElementNotInteractableError(ProtocolError):
    code = "element not interactable"


class ElementNotVisibleError(ElementNotInteractableError):
    code = "element not visible"


class ElementNotSelectableError(ProtocolError):
    code = "element not selectable"


class InsecureCertificateError(ProtocolError):
    code = "insecure certificate"


class InvalidArgumentError(ProtocolError):
    code = "invalid argument"


class InvalidCookieDomainError(ProtocolError):
    code = "invalid cookie domain"


class InvalidElementCoordinatesError(ProtocolError):
    code = "invalid element coordinates"


class InvalidElementStateError(ProtocolError):
    code = "invalid element state"


class InvalidSelectorError(ProtocolError):
    code = "invalid selector"


class InvalidSessionIdError(ProtocolError):
    code = "invalid session id"


class JavaScriptError(ProtocolError):
    code = "javascript error"


class MoveTargetOutOfBoundsError(ProtocolError):
    code = "move target out of bounds"


class NoSuchAlertError(ProtocolError):
    code = "no such alert"


class NoSuchCookieError(ProtocolError):
    code = "no such cookie"


class NoSuchElementError(ProtocolError):
    code = "no such element"


class NoSuchFrameError(ProtocolError):
    code = "no such frame"


class NoSuchWindowError(ProtocolError):
    code = "no such window"


class ScriptTimeoutError(ProtocolError):
    code = "script timeout"


class SessionNotCreatedError(ProtocolError):
    code = "session not created"


class StaleElementReferenceError(ProtocolError):
    code = "stale element reference"


class ProtocolTimeoutError(ProtocolError):
    code = "timeout"


class UnableToSetCookieError(ProtocolError):
    code = "unable to set cookie"


class UnableToCaptureScreenError(ProtocolError):
    code = "unable to capture screen"


class UnexpectedAlertOpenError(ProtocolError):
    code = "unexpected alert open"


class UnknownCommandError(ProtocolError):
    code = "unknown command"


class UnknownError(ProtocolError):
    code = "unknown error"


class UnknownMethodError(ProtocolError):
    code = "unknown method"


class UnsupportedOperationError(ProtocolError):
    code = "unsupported operation"


class XPathLookupError(InvalidSelectorError):
    code = "xpath lookup error"


_PROTOCOL_ERRORS = [
    ElementClickInterceptedError,
    ElementNotInteractableError,
    ElementNotVisibleError,
    ElementNotSelectableError,
    InsecureCertificateError,
    InvalidArgumentError,
    InvalidCookieDomainError,
    InvalidElementCoordinatesError,
    InvalidElementStateError,
    InvalidSelectorError,
    InvalidSessionIdError,
    JavaScriptError,
    MoveTargetOutOfBoundsError,
    NoSuchAlertError,
    NoSuchCookieError,
    NoSuchElementError,
    NoSuchFrameError,
    NoSuchWindowError,
    ScriptTimeoutError,
    SessionNotCreatedError,
    StaleElementReferenceError,
    ProtocolTimeoutError,
    UnableToSetCookieError,
    UnableToCaptureScreenError,
    UnexpectedAlertOpenError,
    UnknownCommandError,
    UnknownError,
    UnknownMethodError,
    UnsupportedOperationError,
    XPathLookupError,
]

ERROR_CODES = {cls.code: cls for cls in _PROTOCOL_ERRORS}
"""W3C error code string -> error class."""

# JSON Wire Protocol numeric status codes.
LEGACY_STATUS_CODES = {
    6: InvalidSessionIdError,
    7: NoSuchElementError,
    8: NoSuchFrameError,
    9: UnknownCommandError,
    10: StaleElementReferenceError,
    11: ElementNotVisibleError,
    12: InvalidElementStateError,
    13: UnknownError,
    15: ElementNotSelectableError,
    17: JavaScriptError,
    19: XPathLookupError,
    21: ProtocolTimeoutError,
    23: NoSuchWindowError,
    24: InvalidCookieDomainError,
    25: UnableToSetCookieError,
    26: UnexpectedAlertOpenError,
    27: NoSuchAlertError,
    28: ScriptTimeoutError,
    29: InvalidElementCoordinatesError,
    32: InvalidSelectorError,
    33: SessionNotCreatedError,
    34: MoveTargetOutOfBoundsError,
    51: InvalidSelectorError,
    52: InvalidSelectorError,
    60: ElementNotInteractableError,
    61: InvalidArgumentError,
    62: NoSuchCookieError,
    63: UnableToCaptureScreenError,
    64: ElementClickInterceptedError,
    405: UnsupportedOperationError,
}


def error_for_code(code) -> type:
    """Return the protocol error class for a W3C code string or legacy status number."""
    if isinstance(code, int):
        return LEGACY_STATUS_CODES.get(code, UnknownError)
    return ERROR_CODES.get(str(code), UnknownError)


TRANSPORT_ERRORS = (OSError, http.client.HTTPException)
"""Errors raised when the remote end cannot be reached or hangs up."""


__all__ = [
    "WebDriverError",
    "ArgumentError",
    "UnsupportedCapabilityError",
    "ServiceError",
    "ExecutableNotFoundError",
    "PortUnavailableError",
    "ServiceLaunchError",
    "ServiceLaunchTimeoutError",
    "SessionNotActiveError",
    "WaitTimeoutError",
    "ProtocolError",
    *[cls.__name__ for cls in _PROTOCOL_ERRORS],
    "ERROR_CODES",
    "LEGACY_STATUS_CODES",
    "error_for_code",
    "TRANSPORT_ERRORS",
]
