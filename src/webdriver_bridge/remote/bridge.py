"""The Bridge: one remote session spoken in one protocol dialect."""

import enum
from typing import Any, Mapping, Optional

from ..element import Dimension, Element, Point, By, LEGACY_ELEMENT_KEY, W3C_ELEMENT_KEY, element_id_from
from ..exceptions import (
    TRANSPORT_ERRORS,
    NoSuchElementError,
    NoSuchFrameError,
    SessionNotActiveError,
    SessionNotCreatedError,
    UnsupportedOperationError,
)
from ..keys import Keys, encode
from .backend import Backend
from .capabilities import Capabilities, W3CCapabilities, to_wire_value
from .commands import ProtocolKind, command_path, commands_for
from .http import HttpClient

import logging
logger = logging.getLogger(__name__)


class SessionState(enum.Enum):
    UNSTARTED = "unstarted"
    ACTIVE = "active"
    QUIT = "quit"


_TIMEOUT_KEYS = {
    "implicit": "implicit",
    "script": "script",
    "page load": "pageLoad",
}

_LEFT_BUTTON = 0
_RIGHT_BUTTON = 2

# Runs in the page; submits the form enclosing the element.
_SUBMIT_SCRIPT = (
    "var form = arguments[0];"
    "while (form.nodeName != 'FORM' && form.parentNode) { form = form.parentNode; }"
    "if (!form || form.nodeName != 'FORM') { throw Error('Unable to find containing form element'); }"
    "var e = form.ownerDocument.createEvent('Event');"
    "e.initEvent('submit', true, true);"
    "if (form.dispatchEvent(e)) { HTMLFormElement.prototype.submit.call(form); }"
)


def _css_string(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def _w3c_locator(how: str, what: str) -> tuple[str, str]:
    """W3C endpoints only accept css/xpath/link text/tag name; translate the rest to CSS."""
    if how == By.ID:
        return By.CSS_SELECTOR, f'[id="{_css_string(what)}"]'
    if how == By.NAME:
        return By.CSS_SELECTOR, f'[name="{_css_string(what)}"]'
    if how == By.CLASS_NAME:
        return By.CSS_SELECTOR, "." + what
    return how, what


def _wire_capabilities(capabilities: Any, w3c: bool) -> dict:
    if isinstance(capabilities, Capabilities):
        return capabilities.to_wire(w3c=w3c)
    return to_wire_value(dict(capabilities or {}), w3c)


def _w3c_subset(desired: Mapping[str, Any]) -> dict:
    return {k: v for k, v in desired.items() if W3CCapabilities.is_valid_key(k)}


def _parse_new_session(response: Mapping[str, Any]) -> tuple[ProtocolKind, str, dict]:
    """
    Decide the dialect from the shape of a new-session response.

    W3C responses nest the session id under ``value``; legacy ones carry it at
    the top level next to the capabilities.
    """
    value = response.get("value")
    if isinstance(value, dict) and value.get("sessionId"):
        return ProtocolKind.W3C, value["sessionId"], value.get("capabilities") or {}
    if response.get("sessionId"):
        return ProtocolKind.LEGACY, response["sessionId"], value if isinstance(value, dict) else {}
    raise SessionNotCreatedError(f"remote end did not return a session id: {response!r}")


class Bridge(Backend):
    """
    Owns one remote session and the command table for its dialect.

    The dialect is either given up front or detected from the new-session
    response, and never changes afterwards. Every higher-level operation is a
    method here so callers never branch on the dialect themselves; legacy-only
    pointer and keyboard commands are translated into W3C action sequences
    when the session speaks W3C.
    """

    def __init__(self, url: str, kind: Optional[ProtocolKind] = None, http_client=None):
        self.http = http_client or HttpClient()
        self.http.server_url = url
        self._kind = kind
        self._session_id: Optional[str] = None
        self._capabilities: Optional[Capabilities] = None
        self._state = SessionState.UNSTARTED
        self._pressed_modifiers: set[str] = set()

    @classmethod
    def handshake(cls, url: str, capabilities, kind: Optional[ProtocolKind] = None, http_client=None) -> "Bridge":
        bridge = cls(url, kind=kind, http_client=http_client)
        bridge.create_session(capabilities)
        return bridge

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    @property
    def kind(self) -> Optional[ProtocolKind]:
        return self._kind

    @property
    def session_id(self) -> Optional[str]:
        return self._session_id

    @property
    def capabilities(self) -> Optional[Capabilities]:
        return self._capabilities

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def commands(self):
        return commands_for(self._kind or ProtocolKind.W3C)

    def create_session(self, capabilities) -> Capabilities:
        """
        Open the remote session.

        When the dialect is not known yet, both the legacy
        ``desiredCapabilities`` and the W3C ``capabilities`` envelopes are
        sent so either kind of remote end can answer.

        Raises:
            SessionNotActiveError: if this bridge already created a session
            SessionNotCreatedError: if the response carries no session id
        """
        if self._state is not SessionState.UNSTARTED:
            raise SessionNotActiveError(f"session is already {self._state.value}")

        if self._kind is ProtocolKind.LEGACY:
            payload = {"desiredCapabilities": _wire_capabilities(capabilities, w3c=False)}
        elif self._kind is ProtocolKind.W3C:
            payload = {"capabilities": {"firstMatch": [{}], "alwaysMatch": _wire_capabilities(capabilities, w3c=True)}}
        else:
            payload = {
                "desiredCapabilities": _wire_capabilities(capabilities, w3c=False),
                "capabilities": {
                    "firstMatch": [{}],
                    "alwaysMatch": _w3c_subset(_wire_capabilities(capabilities, w3c=True)),
                },
            }

        command = self.commands["new_session"]
        response = self.http.call(command.method, command.template, payload)
        detected, session_id, accepted = _parse_new_session(response)

        if self._kind is None:
            self._kind = detected
            logger.info(f"Remote end speaks the {detected.value} dialect")

        self._session_id = session_id
        caps_cls = W3CCapabilities if self._kind is ProtocolKind.W3C else Capabilities
        self._capabilities = caps_cls.from_wire(accepted)
        self._state = SessionState.ACTIVE
        logger.debug(f"Session {session_id} created")
        return self._capabilities

    def execute(self, name: str, url_params: Optional[Mapping[str, Any]] = None, payload: Any = None) -> Any:
        """
        Send one named command and return the response ``value``.

        Raises:
            SessionNotActiveError: before create_session or after quit
            UnsupportedOperationError: if the dialect has no such command
        """
        if name != "status" and self._state is not SessionState.ACTIVE:
            raise SessionNotActiveError(f"cannot execute {name!r}: session is {self._state.value}")
        try:
            command = self.commands[name]
        except KeyError:
            kind = (self._kind or ProtocolKind.W3C).value
            raise UnsupportedOperationError(f"{name!r} is not a {kind} command") from None

        params = {"session_id": self._session_id}
        params.update(url_params or {})
        path = command_path(command.template, params)
        response = self.http.call(command.method, path, payload)
        return response.get("value")

    def status(self) -> Any:
        return self.execute("status")

    def quit(self) -> None:
        """
        End the session. Safe to call more than once.

        Transport failures are logged and ignored since the remote end is
        usually already gone; protocol errors propagate.
        """
        if self._state is not SessionState.ACTIVE:
            return
        try:
            self.execute("quit")
        except TRANSPORT_ERRORS as e:
            logger.warning(f"Ignoring transport error while quitting session {self._session_id}: {e}")
        finally:
            self._state = SessionState.QUIT
            self._pressed_modifiers.clear()

    # ------------------------------------------------------------------
    # Value conversion
    # ------------------------------------------------------------------

    def _element_key(self) -> str:
        return W3C_ELEMENT_KEY if self._kind is ProtocolKind.W3C else LEGACY_ELEMENT_KEY

    def _wrap(self, value: Any) -> Any:
        if isinstance(value, Element):
            return {self._element_key(): value.ref}
        if isinstance(value, (list, tuple)):
            return [self._wrap(v) for v in value]
        if isinstance(value, dict):
            return {k: self._wrap(v) for k, v in value.items()}
        return value

    def _unwrap(self, value: Any) -> Any:
        if isinstance(value, dict):
            ref = element_id_from(value)
            if ref is not None:
                return Element(self, ref)
            return {k: self._unwrap(v) for k, v in value.items()}
        if isinstance(value, list):
            return [self._unwrap(v) for v in value]
        return value

    @property
    def _w3c(self) -> bool:
        return self._kind is ProtocolKind.W3C

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def get(self, url: str) -> None:
        self.execute("get", payload={"url": url})

    def go_back(self) -> None:
        self.execute("go_back")

    def go_forward(self) -> None:
        self.execute("go_forward")

    def refresh(self) -> None:
        self.execute("refresh")

    def current_url(self) -> str:
        return self.execute("get_current_url")

    def title(self) -> str:
        return self.execute("get_title")

    def page_source(self) -> str:
        return self.execute("get_page_source")

    def screenshot(self) -> str:
        """Base64-encoded PNG of the current viewport."""
        return self.execute("screenshot")

    # ------------------------------------------------------------------
    # Windows and frames
    # ------------------------------------------------------------------

    def close(self) -> None:
        self.execute("close")

    def window_handles(self) -> list:
        return self.execute("get_window_handles")

    def window_handle(self) -> str:
        return self.execute("get_current_window_handle")

    def switch_to_window(self, handle: str) -> None:
        payload = {"handle": handle} if self._w3c else {"name": handle}
        self.execute("switch_to_window", payload=payload)

    def switch_to_frame(self, frame: Any) -> None:
        if self._w3c and isinstance(frame, str):
            found = self.find_elements_by(By.CSS_SELECTOR, f'[name="{_css_string(frame)}"], [id="{_css_string(frame)}"]')
            if not found:
                raise NoSuchFrameError(f"no frame named {frame!r}")
            frame = found[0]
        self.execute("switch_to_frame", payload={"id": self._wrap(frame)})

    def switch_to_parent_frame(self) -> None:
        self.execute("switch_to_parent_frame")

    def switch_to_default_content(self) -> None:
        self.execute("switch_to_frame", payload={"id": None})

    def _require_current(self, handle: str) -> None:
        if handle != "current":
            raise UnsupportedOperationError("W3C sessions can only resize or move the current window")

    def window_size(self, handle: str = "current") -> Dimension:
        if self._w3c:
            self._require_current(handle)
            data = self.execute("get_window_rect")
        else:
            data = self.execute("get_window_size", {"window_handle": handle})
        return Dimension(data["width"], data["height"])

    def set_window_size(self, width: int, height: int, handle: str = "current") -> None:
        payload = {"width": int(width), "height": int(height)}
        if self._w3c:
            self._require_current(handle)
            self.execute("set_window_rect", payload=payload)
        else:
            self.execute("set_window_size", {"window_handle": handle}, payload)

    def window_position(self, handle: str = "current") -> Point:
        if self._w3c:
            self._require_current(handle)
            data = self.execute("get_window_rect")
        else:
            data = self.execute("get_window_position", {"window_handle": handle})
        return Point(data["x"], data["y"])

    def set_window_position(self, x: int, y: int, handle: str = "current") -> None:
        payload = {"x": int(x), "y": int(y)}
        if self._w3c:
            self._require_current(handle)
            self.execute("set_window_rect", payload=payload)
        else:
            self.execute("set_window_position", {"window_handle": handle}, payload)

    def maximize_window(self, handle: str = "current") -> None:
        if self._w3c:
            self._require_current(handle)
            self.execute("maximize_window")
        else:
            self.execute("maximize_window", {"window_handle": handle})

    # ------------------------------------------------------------------
    # Cookies, alerts, timeouts
    # ------------------------------------------------------------------

    def cookies(self) -> list:
        return self.execute("get_all_cookies") or []

    def add_cookie(self, cookie: Mapping[str, Any]) -> None:
        self.execute("add_cookie", payload={"cookie": dict(cookie)})

    def delete_cookie(self, name: str) -> None:
        self.execute("delete_cookie", {"name": name})

    def delete_all_cookies(self) -> None:
        self.execute("delete_all_cookies")

    def accept_alert(self) -> None:
        self.execute("accept_alert")

    def dismiss_alert(self) -> None:
        self.execute("dismiss_alert")

    def alert_text(self) -> str:
        return self.execute("get_alert_text")

    def set_alert_value(self, text: str) -> None:
        payload = {"text": text, "value": list(text)} if self._w3c else {"text": text}
        self.execute("set_alert_value", payload=payload)

    def set_timeout(self, kind: str, seconds: float) -> None:
        """
        Set one of the session timeouts.

        Args:
            kind: "implicit", "script" or "page load"
            seconds: the new timeout
        """
        if kind not in _TIMEOUT_KEYS:
            raise ValueError(f"unknown timeout type {kind!r}, expected one of {sorted(_TIMEOUT_KEYS)}")
        ms = int(seconds * 1000)
        if self._w3c:
            payload = {_TIMEOUT_KEYS[kind]: ms}
        else:
            payload = {"type": kind, "ms": ms}
        self.execute("set_timeout", payload=payload)

    # ------------------------------------------------------------------
    # Scripts
    # ------------------------------------------------------------------

    def execute_script(self, script: str, *args: Any) -> Any:
        result = self.execute("execute_script", payload={"script": script, "args": self._wrap(list(args))})
        return self._unwrap(result)

    def execute_async_script(self, script: str, *args: Any) -> Any:
        result = self.execute("execute_async_script", payload={"script": script, "args": self._wrap(list(args))})
        return self._unwrap(result)

    # ------------------------------------------------------------------
    # Elements
    # ------------------------------------------------------------------

    def _locator(self, how: str, what: str) -> dict:
        how = By.normalize(how)
        if self._w3c:
            how, what = _w3c_locator(how, what)
        return {"using": how, "value": what}

    def find_element_by(self, how: str, what: str, parent: Optional[str] = None) -> Element:
        payload = self._locator(how, what)
        if parent is None:
            result = self.execute("find_element", payload=payload)
        else:
            result = self.execute("find_child_element", {"id": parent}, payload)
        ref = element_id_from(result)
        if ref is None:
            raise NoSuchElementError(f"unable to find element with {payload['using']} {payload['value']!r}")
        return Element(self, ref)

    def find_elements_by(self, how: str, what: str, parent: Optional[str] = None) -> list:
        payload = self._locator(how, what)
        if parent is None:
            result = self.execute("find_elements", payload=payload)
        else:
            result = self.execute("find_child_elements", {"id": parent}, payload)
        refs = (element_id_from(v) for v in result or [])
        return [Element(self, ref) for ref in refs if ref is not None]

    def active_element(self) -> Element:
        result = self.execute("get_active_element")
        ref = element_id_from(result)
        if ref is None:
            raise NoSuchElementError("no active element")
        return Element(self, ref)

    def click_element(self, ref: str) -> None:
        self.execute("click_element", {"id": ref})

    def clear_element(self, ref: str) -> None:
        self.execute("clear_element", {"id": ref})

    def send_keys_to_element(self, ref: str, keys: Any) -> None:
        encoded = encode(keys)
        if self._w3c:
            text = "".join(encoded)
            payload = {"text": text, "value": list(text)}
        else:
            payload = {"value": encoded}
        self.execute("send_keys_to_element", {"id": ref}, payload)

    def submit_element(self, ref: str) -> None:
        if self._w3c:
            self.execute_script(_SUBMIT_SCRIPT, Element(self, ref))
        else:
            self.execute("submit_element", {"id": ref})

    def element_text(self, ref: str) -> str:
        return self.execute("get_element_text", {"id": ref})

    def element_tag_name(self, ref: str) -> str:
        return self.execute("get_element_tag_name", {"id": ref})

    def element_attribute(self, ref: str, name: str) -> Any:
        return self.execute("get_element_attribute", {"id": ref, "name": name})

    def element_displayed(self, ref: str) -> bool:
        return bool(self.execute("is_element_displayed", {"id": ref}))

    def element_enabled(self, ref: str) -> bool:
        return bool(self.execute("is_element_enabled", {"id": ref}))

    def element_selected(self, ref: str) -> bool:
        return bool(self.execute("is_element_selected", {"id": ref}))

    # ------------------------------------------------------------------
    # Pointer and keyboard
    # ------------------------------------------------------------------

    def _pointer_actions(self, actions: list) -> None:
        self.execute("actions", payload={"actions": [{
            "type": "pointer",
            "id": "mouse",
            "parameters": {"pointerType": "mouse"},
            "actions": actions,
        }]})

    @staticmethod
    def _press(button: int) -> list:
        return [
            {"type": "pointerDown", "button": button},
            {"type": "pointerUp", "button": button},
        ]

    def click(self) -> None:
        if self._w3c:
            self._pointer_actions(self._press(_LEFT_BUTTON))
        else:
            self.execute("click", payload={"button": _LEFT_BUTTON})

    def context_click(self) -> None:
        if self._w3c:
            self._pointer_actions(self._press(_RIGHT_BUTTON))
        else:
            self.execute("click", payload={"button": _RIGHT_BUTTON})

    def double_click(self) -> None:
        if self._w3c:
            self._pointer_actions(self._press(_LEFT_BUTTON) * 2)
        else:
            self.execute("double_click")

    def mouse_down(self) -> None:
        if self._w3c:
            self._pointer_actions([{"type": "pointerDown", "button": _LEFT_BUTTON}])
        else:
            self.execute("mouse_down")

    def mouse_up(self) -> None:
        if self._w3c:
            self._pointer_actions([{"type": "pointerUp", "button": _LEFT_BUTTON}])
        else:
            self.execute("mouse_up")

    def mouse_move_to(self, ref: Optional[str], x: Optional[int] = None, y: Optional[int] = None) -> None:
        """
        Move the mouse to an element, optionally offset by (x, y).

        Legacy offsets are relative to the element's top-left corner, W3C
        offsets to its center.
        """
        if self._w3c:
            origin = {W3C_ELEMENT_KEY: ref} if ref is not None else "pointer"
            self._pointer_actions([{
                "type": "pointerMove",
                "duration": 0,
                "origin": origin,
                "x": int(x or 0),
                "y": int(y or 0),
            }])
            return

        payload: dict = {}
        if ref is not None:
            payload["element"] = ref
        if x is not None and y is not None:
            payload["xoffset"] = int(x)
            payload["yoffset"] = int(y)
        self.execute("mouse_move_to", payload=payload)

    def _key_actions(self, text: str) -> list:
        actions = []
        for ch in text:
            if ch in Keys.MODIFIERS:
                if ch in self._pressed_modifiers:
                    self._pressed_modifiers.discard(ch)
                    actions.append({"type": "keyUp", "value": ch})
                else:
                    self._pressed_modifiers.add(ch)
                    actions.append({"type": "keyDown", "value": ch})
            elif ch == Keys.NULL:
                for held in sorted(self._pressed_modifiers):
                    actions.append({"type": "keyUp", "value": held})
                self._pressed_modifiers.clear()
            else:
                actions.append({"type": "keyDown", "value": ch})
                actions.append({"type": "keyUp", "value": ch})
        return actions

    def send_keys_to_active_element(self, keys: Any) -> None:
        """
        Type into whatever element has focus.

        Modifier keys toggle: the first occurrence presses and holds, the next
        releases. ``Keys.NULL`` releases everything still held.
        """
        encoded = encode(keys)
        if not self._w3c:
            self.execute("send_keys_to_active_element", payload={"value": encoded})
            return
        actions = self._key_actions("".join(encoded))
        self.execute("actions", payload={"actions": [{
            "type": "key",
            "id": "keyboard",
            "actions": actions,
        }]})

    @property
    def pressed_modifiers(self) -> frozenset:
        return frozenset(self._pressed_modifiers)

    def __repr__(self) -> str:
        kind = self._kind.value if self._kind else "unknown"
        return f"<Bridge {kind} session={self._session_id!r} state={self._state.value}>"


__all__ = ["Bridge", "SessionState"]
