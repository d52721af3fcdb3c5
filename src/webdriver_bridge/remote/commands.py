"""Wire command tables: command name -> (HTTP method, URL template).

Templates use ``:name`` path parameters. Both tables are read-only and a
bridge uses exactly one of them for its whole lifetime.
"""

import enum
import re
from types import MappingProxyType
from typing import Any, Mapping, NamedTuple, Optional
from urllib.parse import quote

from ..exceptions import ArgumentError


class ProtocolKind(enum.Enum):
    LEGACY = "legacy"
    W3C = "w3c"


class Command(NamedTuple):
    method: str
    template: str


_PARAM = re.compile(r":([a-z_]+)")


def command_path(template: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """
    Substitute ``:name`` placeholders in ``template``.

    >>> command_path("/session/:session_id/element/:id/click", {"session_id": "s1", "id": "abc123"})
    '/session/s1/element/abc123/click'

    Raises:
        ArgumentError: if a placeholder has no value in ``params``
    """
    params = params or {}

    def _sub(match: "re.Match[str]") -> str:
        name = match.group(1)
        if params.get(name) is None:
            raise ArgumentError(f"missing :{name} for {template}")
        return quote(str(params[name]), safe="")

    return _PARAM.sub(_sub, template)


_SHARED = {
    "status": Command("GET", "/status"),
    "new_session": Command("POST", "/session"),
    "quit": Command("DELETE", "/session/:session_id"),

    # navigation
    "get": Command("POST", "/session/:session_id/url"),
    "get_current_url": Command("GET", "/session/:session_id/url"),
    "go_back": Command("POST", "/session/:session_id/back"),
    "go_forward": Command("POST", "/session/:session_id/forward"),
    "refresh": Command("POST", "/session/:session_id/refresh"),
    "get_title": Command("GET", "/session/:session_id/title"),
    "get_page_source": Command("GET", "/session/:session_id/source"),
    "screenshot": Command("GET", "/session/:session_id/screenshot"),

    # windows and frames
    "close": Command("DELETE", "/session/:session_id/window"),
    "switch_to_window": Command("POST", "/session/:session_id/window"),
    "switch_to_frame": Command("POST", "/session/:session_id/frame"),
    "switch_to_parent_frame": Command("POST", "/session/:session_id/frame/parent"),

    # cookies
    "get_all_cookies": Command("GET", "/session/:session_id/cookie"),
    "add_cookie": Command("POST", "/session/:session_id/cookie"),
    "delete_all_cookies": Command("DELETE", "/session/:session_id/cookie"),
    "delete_cookie": Command("DELETE", "/session/:session_id/cookie/:name"),

    # timeouts
    "set_timeout": Command("POST", "/session/:session_id/timeouts"),

    # elements
    "find_element": Command("POST", "/session/:session_id/element"),
    "find_elements": Command("POST", "/session/:session_id/elements"),
    "find_child_element": Command("POST", "/session/:session_id/element/:id/element"),
    "find_child_elements": Command("POST", "/session/:session_id/element/:id/elements"),
    "click_element": Command("POST", "/session/:session_id/element/:id/click"),
    "clear_element": Command("POST", "/session/:session_id/element/:id/clear"),
    "send_keys_to_element": Command("POST", "/session/:session_id/element/:id/value"),
    "get_element_text": Command("GET", "/session/:session_id/element/:id/text"),
    "get_element_tag_name": Command("GET", "/session/:session_id/element/:id/name"),
    "get_element_attribute": Command("GET", "/session/:session_id/element/:id/attribute/:name"),
    "is_element_selected": Command("GET", "/session/:session_id/element/:id/selected"),
    "is_element_enabled": Command("GET", "/session/:session_id/element/:id/enabled"),
    "is_element_displayed": Command("GET", "/session/:session_id/element/:id/displayed"),
}

_LEGACY_ONLY = {
    "get_current_window_handle": Command("GET", "/session/:session_id/window_handle"),
    "get_window_handles": Command("GET", "/session/:session_id/window_handles"),
    "get_window_size": Command("GET", "/session/:session_id/window/:window_handle/size"),
    "set_window_size": Command("POST", "/session/:session_id/window/:window_handle/size"),
    "get_window_position": Command("GET", "/session/:session_id/window/:window_handle/position"),
    "set_window_position": Command("POST", "/session/:session_id/window/:window_handle/position"),
    "maximize_window": Command("POST", "/session/:session_id/window/:window_handle/maximize"),

    "execute_script": Command("POST", "/session/:session_id/execute"),
    "execute_async_script": Command("POST", "/session/:session_id/execute_async"),

    "get_active_element": Command("POST", "/session/:session_id/element/active"),
    "submit_element": Command("POST", "/session/:session_id/element/:id/submit"),

    "accept_alert": Command("POST", "/session/:session_id/accept_alert"),
    "dismiss_alert": Command("POST", "/session/:session_id/dismiss_alert"),
    "get_alert_text": Command("GET", "/session/:session_id/alert_text"),
    "set_alert_value": Command("POST", "/session/:session_id/alert_text"),

    # pointer and keyboard
    "click": Command("POST", "/session/:session_id/click"),
    "double_click": Command("POST", "/session/:session_id/doubleclick"),
    "mouse_down": Command("POST", "/session/:session_id/buttondown"),
    "mouse_up": Command("POST", "/session/:session_id/buttonup"),
    "mouse_move_to": Command("POST", "/session/:session_id/moveto"),
    "send_keys_to_active_element": Command("POST", "/session/:session_id/keys"),
}

_W3C_ONLY = {
    "get_current_window_handle": Command("GET", "/session/:session_id/window"),
    "get_window_handles": Command("GET", "/session/:session_id/window/handles"),
    "get_window_rect": Command("GET", "/session/:session_id/window/rect"),
    "set_window_rect": Command("POST", "/session/:session_id/window/rect"),
    "maximize_window": Command("POST", "/session/:session_id/window/maximize"),
    "minimize_window": Command("POST", "/session/:session_id/window/minimize"),
    "fullscreen_window": Command("POST", "/session/:session_id/window/fullscreen"),

    "get_timeouts": Command("GET", "/session/:session_id/timeouts"),

    "execute_script": Command("POST", "/session/:session_id/execute/sync"),
    "execute_async_script": Command("POST", "/session/:session_id/execute/async"),

    "get_active_element": Command("GET", "/session/:session_id/element/active"),
    "get_element_property": Command("GET", "/session/:session_id/element/:id/property/:name"),
    "get_element_rect": Command("GET", "/session/:session_id/element/:id/rect"),

    "accept_alert": Command("POST", "/session/:session_id/alert/accept"),
    "dismiss_alert": Command("POST", "/session/:session_id/alert/dismiss"),
    "get_alert_text": Command("GET", "/session/:session_id/alert/text"),
    "set_alert_value": Command("POST", "/session/:session_id/alert/text"),

    "actions": Command("POST", "/session/:session_id/actions"),
    "release_actions": Command("DELETE", "/session/:session_id/actions"),
}

LEGACY_COMMANDS: Mapping[str, Command] = MappingProxyType({**_SHARED, **_LEGACY_ONLY})
W3C_COMMANDS: Mapping[str, Command] = MappingProxyType({**_SHARED, **_W3C_ONLY})


def commands_for(kind: ProtocolKind) -> Mapping[str, Command]:
    return LEGACY_COMMANDS if kind is ProtocolKind.LEGACY else W3C_COMMANDS


__all__ = [
    "ProtocolKind",
    "Command",
    "command_path",
    "LEGACY_COMMANDS",
    "W3C_COMMANDS",
    "commands_for",
]
