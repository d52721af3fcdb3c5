"""The command-capable interface shared by the Bridge and its decorators."""

import abc
from typing import Any, Mapping, Optional


class Backend(abc.ABC):
    """
    Everything a Driver needs from the object that owns a remote session.

    ``Bridge`` implements it against the wire; ``EventFiringBridge`` wraps
    another Backend and forwards every method explicitly. Callers cannot
    tell the two apart except through the listener hooks.
    """

    # session -----------------------------------------------------------

    @property
    @abc.abstractmethod
    def session_id(self) -> Optional[str]: ...

    @property
    @abc.abstractmethod
    def capabilities(self): ...

    @property
    @abc.abstractmethod
    def kind(self): ...

    @abc.abstractmethod
    def execute(self, name: str, url_params: Optional[Mapping[str, Any]] = None, payload: Any = None) -> Any: ...

    @abc.abstractmethod
    def status(self) -> Any: ...

    @abc.abstractmethod
    def quit(self) -> None: ...

    # navigation --------------------------------------------------------

    @abc.abstractmethod
    def get(self, url: str) -> None: ...

    @abc.abstractmethod
    def go_back(self) -> None: ...

    @abc.abstractmethod
    def go_forward(self) -> None: ...

    @abc.abstractmethod
    def refresh(self) -> None: ...

    @abc.abstractmethod
    def current_url(self) -> str: ...

    @abc.abstractmethod
    def title(self) -> str: ...

    @abc.abstractmethod
    def page_source(self) -> str: ...

    @abc.abstractmethod
    def screenshot(self) -> str: ...

    # windows and frames ------------------------------------------------

    @abc.abstractmethod
    def close(self) -> None: ...

    @abc.abstractmethod
    def window_handles(self) -> list: ...

    @abc.abstractmethod
    def window_handle(self) -> str: ...

    @abc.abstractmethod
    def switch_to_window(self, handle: str) -> None: ...

    @abc.abstractmethod
    def switch_to_frame(self, frame: Any) -> None: ...

    @abc.abstractmethod
    def switch_to_parent_frame(self) -> None: ...

    @abc.abstractmethod
    def switch_to_default_content(self) -> None: ...

    @abc.abstractmethod
    def window_size(self, handle: str = "current"): ...

    @abc.abstractmethod
    def set_window_size(self, width: int, height: int, handle: str = "current") -> None: ...

    @abc.abstractmethod
    def window_position(self, handle: str = "current"): ...

    @abc.abstractmethod
    def set_window_position(self, x: int, y: int, handle: str = "current") -> None: ...

    @abc.abstractmethod
    def maximize_window(self, handle: str = "current") -> None: ...

    # cookies, alerts, timeouts -----------------------------------------

    @abc.abstractmethod
    def cookies(self) -> list: ...

    @abc.abstractmethod
    def add_cookie(self, cookie: Mapping[str, Any]) -> None: ...

    @abc.abstractmethod
    def delete_cookie(self, name: str) -> None: ...

    @abc.abstractmethod
    def delete_all_cookies(self) -> None: ...

    @abc.abstractmethod
    def accept_alert(self) -> None: ...

    @abc.abstractmethod
    def dismiss_alert(self) -> None: ...

    @abc.abstractmethod
    def alert_text(self) -> str: ...

    @abc.abstractmethod
    def set_alert_value(self, text: str) -> None: ...

    @abc.abstractmethod
    def set_timeout(self, kind: str, seconds: float) -> None: ...

    # scripts -----------------------------------------------------------

    @abc.abstractmethod
    def execute_script(self, script: str, *args: Any) -> Any: ...

    @abc.abstractmethod
    def execute_async_script(self, script: str, *args: Any) -> Any: ...

    # elements ----------------------------------------------------------

    @abc.abstractmethod
    def find_element_by(self, how: str, what: str, parent: Optional[str] = None): ...

    @abc.abstractmethod
    def find_elements_by(self, how: str, what: str, parent: Optional[str] = None) -> list: ...

    @abc.abstractmethod
    def active_element(self): ...

    @abc.abstractmethod
    def click_element(self, ref: str) -> None: ...

    @abc.abstractmethod
    def clear_element(self, ref: str) -> None: ...

    @abc.abstractmethod
    def send_keys_to_element(self, ref: str, keys: Any) -> None: ...

    @abc.abstractmethod
    def submit_element(self, ref: str) -> None: ...

    @abc.abstractmethod
    def element_text(self, ref: str) -> str: ...

    @abc.abstractmethod
    def element_tag_name(self, ref: str) -> str: ...

    @abc.abstractmethod
    def element_attribute(self, ref: str, name: str) -> Any: ...

    @abc.abstractmethod
    def element_displayed(self, ref: str) -> bool: ...

    @abc.abstractmethod
    def element_enabled(self, ref: str) -> bool: ...

    @abc.abstractmethod
    def element_selected(self, ref: str) -> bool: ...

    # pointer and keyboard ----------------------------------------------

    @abc.abstractmethod
    def click(self) -> None: ...

    @abc.abstractmethod
    def context_click(self) -> None: ...

    @abc.abstractmethod
    def double_click(self) -> None: ...

    @abc.abstractmethod
    def mouse_down(self) -> None: ...

    @abc.abstractmethod
    def mouse_up(self) -> None: ...

    @abc.abstractmethod
    def mouse_move_to(self, ref: Optional[str], x: Optional[int] = None, y: Optional[int] = None) -> None: ...

    @abc.abstractmethod
    def send_keys_to_active_element(self, keys: Any) -> None: ...


__all__ = ["Backend"]
