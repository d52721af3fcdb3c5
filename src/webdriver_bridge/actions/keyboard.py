"""Keyboard input to the focused element."""

from typing import Any

from ..exceptions import ArgumentError
from ..keys import Keys

_MODIFIER_NAMES = {
    "shift": Keys.SHIFT,
    "control": Keys.CONTROL,
    "ctrl": Keys.CONTROL,
    "alt": Keys.ALT,
    "meta": Keys.META,
    "command": Keys.COMMAND,
}


def modifier_key(key: Any) -> str:
    """
    Resolve a modifier given as a ``Keys`` constant or by name.

    Raises:
        ArgumentError: if ``key`` is not shift, control, alt or meta
    """
    if isinstance(key, str):
        if key in Keys.MODIFIERS:
            return key
        resolved = _MODIFIER_NAMES.get(key.lower())
        if resolved is not None:
            return resolved
    raise ArgumentError(f"{key!r} is not a modifier key, expected one of {sorted(_MODIFIER_NAMES)}")


class Keyboard:
    """
    Keys sent to whatever element currently has focus.

    Modifiers stay held between calls until released, or until
    ``Keys.NULL`` is sent.
    """

    def __init__(self, bridge):
        self.bridge = bridge

    def send_keys(self, *keys: Any) -> None:
        self.bridge.send_keys_to_active_element(keys)

    def press(self, key: Any) -> None:
        """Press and hold a modifier key."""
        self.bridge.send_keys_to_active_element([modifier_key(key)])

    def release(self, key: Any) -> None:
        """Release a modifier key held by ``press``."""
        self.bridge.send_keys_to_active_element([modifier_key(key)])

    def release_all(self) -> None:
        self.bridge.send_keys_to_active_element([Keys.NULL])


__all__ = [
    'modifier_key',
    'Keyboard',
]
