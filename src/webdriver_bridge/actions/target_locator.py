"""Switching between windows, frames and alerts."""

from typing import Any


class Alert:
    """The currently open alert, confirm or prompt dialog."""

    def __init__(self, bridge):
        self.bridge = bridge

    @property
    def text(self) -> str:
        return self.bridge.alert_text()

    def accept(self) -> None:
        self.bridge.accept_alert()

    def dismiss(self) -> None:
        self.bridge.dismiss_alert()

    def send_keys(self, text: str) -> None:
        self.bridge.set_alert_value(text)


class TargetLocator:
    """Returned by ``Driver.switch_to``."""

    def __init__(self, bridge):
        self.bridge = bridge

    def frame(self, frame: Any) -> None:
        """Switch to a frame by index, name or id, or Element."""
        self.bridge.switch_to_frame(frame)

    def parent_frame(self) -> None:
        self.bridge.switch_to_parent_frame()

    def default_content(self) -> None:
        self.bridge.switch_to_default_content()

    def window(self, handle: str) -> None:
        self.bridge.switch_to_window(handle)

    def active_element(self):
        return self.bridge.active_element()

    def alert(self) -> Alert:
        """
        Return the open alert.

        Raises:
            NoSuchAlertError: if no alert is open
        """
        self.bridge.alert_text()
        return Alert(self.bridge)


__all__ = [
    'Alert',
    'TargetLocator',
]
