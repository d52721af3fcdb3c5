"""Backend decorator that notifies a listener around selected operations."""

from typing import Any, Callable, Mapping, Optional

from ..element import Element
from ..remote.backend import Backend

import logging
logger = logging.getLogger(__name__)


HOOK_EVENTS = (
    "navigate_to",
    "navigate_back",
    "navigate_forward",
    "find",
    "click",
    "change_value_of",
    "execute_script",
    "quit",
    "close",
)


class AbstractEventListener:
    """
    Base listener with a no-op hook for every event.

    Every hook receives the operation's arguments followed by the Driver the
    operation ran on. Exceptions raised by a hook propagate to the caller.
    """

    def before_navigate_to(self, url, driver): pass
    def after_navigate_to(self, url, driver): pass

    def before_navigate_back(self, driver): pass
    def after_navigate_back(self, driver): pass

    def before_navigate_forward(self, driver): pass
    def after_navigate_forward(self, driver): pass

    def before_find(self, how, what, driver): pass
    def after_find(self, how, what, driver): pass

    def before_click(self, element, driver): pass
    def after_click(self, element, driver): pass

    def before_change_value_of(self, element, driver): pass
    def after_change_value_of(self, element, driver): pass

    def before_execute_script(self, script, driver): pass
    def after_execute_script(self, script, driver): pass

    def before_quit(self, driver): pass
    def after_quit(self, driver): pass

    def before_close(self, driver): pass
    def after_close(self, driver): pass


class BlockEventListener(AbstractEventListener):
    """Route every hook to one callable: ``callback(hook_name, *args)``."""

    def __init__(self, callback: Callable[..., Any]):
        self.callback = callback

    def __getattribute__(self, name: str):
        if name.startswith(("before_", "after_")):
            callback = object.__getattribute__(self, "callback")
            return lambda *args: callback(name, *args)
        return object.__getattribute__(self, name)


class EventFiringBridge(Backend):
    """
    Wrap a Backend and call ``before_*``/``after_*`` listener hooks around
    navigation, element changes, finds, script execution, close and quit.

    Elements found or returned by scripts through this bridge are bound to
    it, so operations on them fire events as well. The ``after_*`` hook
    only runs if the operation succeeded.
    """

    def __init__(self, delegate: Backend, listener: AbstractEventListener):
        self.delegate = delegate
        self.listener = listener
        self._driver = None

    @property
    def driver(self):
        if self._driver is None:
            from ..driver import Driver
            self._driver = Driver(self)
        return self._driver

    def _fire(self, event: str, args: tuple, call: Callable[[], Any]) -> Any:
        getattr(self.listener, f"before_{event}")(*args, self.driver)
        result = call()
        getattr(self.listener, f"after_{event}")(*args, self.driver)
        return result

    def _element(self, ref: str) -> Element:
        return Element(self, ref)

    def _rebind(self, value: Any) -> Any:
        """Rebind elements nested in a script result to this bridge."""
        if isinstance(value, Element):
            return self._element(value.ref)
        if isinstance(value, dict):
            return {k: self._rebind(v) for k, v in value.items()}
        if isinstance(value, list):
            return [self._rebind(v) for v in value]
        return value

    # intercepted -------------------------------------------------------

    def get(self, url: str) -> None:
        self._fire("navigate_to", (url,), lambda: self.delegate.get(url))

    def go_back(self) -> None:
        self._fire("navigate_back", (), self.delegate.go_back)

    def go_forward(self) -> None:
        self._fire("navigate_forward", (), self.delegate.go_forward)

    def click_element(self, ref: str) -> None:
        self._fire("click", (self._element(ref),), lambda: self.delegate.click_element(ref))

    def clear_element(self, ref: str) -> None:
        self._fire("change_value_of", (self._element(ref),), lambda: self.delegate.clear_element(ref))

    def send_keys_to_element(self, ref: str, keys: Any) -> None:
        self._fire("change_value_of", (self._element(ref),), lambda: self.delegate.send_keys_to_element(ref, keys))

    def find_element_by(self, how: str, what: str, parent: Optional[str] = None) -> Element:
        found = self._fire("find", (how, what), lambda: self.delegate.find_element_by(how, what, parent))
        return self._element(found.ref)

    def find_elements_by(self, how: str, what: str, parent: Optional[str] = None) -> list:
        found = self._fire("find", (how, what), lambda: self.delegate.find_elements_by(how, what, parent))
        return [self._element(e.ref) for e in found]

    def execute_script(self, script: str, *args: Any) -> Any:
        result = self._fire("execute_script", (script,), lambda: self.delegate.execute_script(script, *args))
        return self._rebind(result)

    def quit(self) -> None:
        self._fire("quit", (), self.delegate.quit)

    def close(self) -> None:
        self._fire("close", (), self.delegate.close)

    # forwarded ---------------------------------------------------------

    @property
    def session_id(self) -> Optional[str]:
        return self.delegate.session_id

    @property
    def capabilities(self):
        return self.delegate.capabilities

    @property
    def kind(self):
        return self.delegate.kind

    def execute(self, name: str, url_params: Optional[Mapping[str, Any]] = None, payload: Any = None) -> Any:
        return self.delegate.execute(name, url_params, payload)

    def status(self) -> Any:
        return self.delegate.status()

    def refresh(self) -> None:
        self.delegate.refresh()

    def current_url(self) -> str:
        return self.delegate.current_url()

    def title(self) -> str:
        return self.delegate.title()

    def page_source(self) -> str:
        return self.delegate.page_source()

    def screenshot(self) -> str:
        return self.delegate.screenshot()

    def window_handles(self) -> list:
        return self.delegate.window_handles()

    def window_handle(self) -> str:
        return self.delegate.window_handle()

    def switch_to_window(self, handle: str) -> None:
        self.delegate.switch_to_window(handle)

    def switch_to_frame(self, frame: Any) -> None:
        self.delegate.switch_to_frame(frame)

    def switch_to_parent_frame(self) -> None:
        self.delegate.switch_to_parent_frame()

    def switch_to_default_content(self) -> None:
        self.delegate.switch_to_default_content()

    def window_size(self, handle: str = "current"):
        return self.delegate.window_size(handle)

    def set_window_size(self, width: int, height: int, handle: str = "current") -> None:
        self.delegate.set_window_size(width, height, handle)

    def window_position(self, handle: str = "current"):
        return self.delegate.window_position(handle)

    def set_window_position(self, x: int, y: int, handle: str = "current") -> None:
        self.delegate.set_window_position(x, y, handle)

    def maximize_window(self, handle: str = "current") -> None:
        self.delegate.maximize_window(handle)

    def cookies(self) -> list:
        return self.delegate.cookies()

    def add_cookie(self, cookie: Mapping[str, Any]) -> None:
        self.delegate.add_cookie(cookie)

    def delete_cookie(self, name: str) -> None:
        self.delegate.delete_cookie(name)

    def delete_all_cookies(self) -> None:
        self.delegate.delete_all_cookies()

    def accept_alert(self) -> None:
        self.delegate.accept_alert()

    def dismiss_alert(self) -> None:
        self.delegate.dismiss_alert()

    def alert_text(self) -> str:
        return self.delegate.alert_text()

    def set_alert_value(self, text: str) -> None:
        self.delegate.set_alert_value(text)

    def set_timeout(self, kind: str, seconds: float) -> None:
        self.delegate.set_timeout(kind, seconds)

    def execute_async_script(self, script: str, *args: Any) -> Any:
        return self._rebind(self.delegate.execute_async_script(script, *args))

    def active_element(self) -> Element:
        return self._element(self.delegate.active_element().ref)

    def submit_element(self, ref: str) -> None:
        self.delegate.submit_element(ref)

    def element_text(self, ref: str) -> str:
        return self.delegate.element_text(ref)

    def element_tag_name(self, ref: str) -> str:
        return self.delegate.element_tag_name(ref)

    def element_attribute(self, ref: str, name: str) -> Any:
        return self.delegate.element_attribute(ref, name)

    def element_displayed(self, ref: str) -> bool:
        return self.delegate.element_displayed(ref)

    def element_enabled(self, ref: str) -> bool:
        return self.delegate.element_enabled(ref)

    def element_selected(self, ref: str) -> bool:
        return self.delegate.element_selected(ref)

    def click(self) -> None:
        self.delegate.click()

    def context_click(self) -> None:
        self.delegate.context_click()

    def double_click(self) -> None:
        self.delegate.double_click()

    def mouse_down(self) -> None:
        self.delegate.mouse_down()

    def mouse_up(self) -> None:
        self.delegate.mouse_up()

    def mouse_move_to(self, ref: Optional[str], x: Optional[int] = None, y: Optional[int] = None) -> None:
        self.delegate.mouse_move_to(ref, x, y)

    def send_keys_to_active_element(self, keys: Any) -> None:
        self.delegate.send_keys_to_active_element(keys)

    def __repr__(self) -> str:
        return f"<EventFiringBridge {self.delegate!r} listener={type(self.listener).__name__}>"


__all__ = [
    "HOOK_EVENTS",
    "AbstractEventListener",
    "BlockEventListener",
    "EventFiringBridge",
]
