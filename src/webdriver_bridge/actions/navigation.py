"""Navigation and page history."""

from ..exceptions import JavaScriptError
from ..utils.wait import Wait

READY_STATES = ("interactive", "complete")


class Navigation:
    """History operations for one session, as returned by ``Driver.navigate``."""

    def __init__(self, bridge):
        self.bridge = bridge

    def to(self, url: str) -> None:
        self.bridge.get(url)

    def back(self) -> None:
        self.bridge.go_back()

    def forward(self) -> None:
        self.bridge.go_forward()

    def refresh(self) -> None:
        self.bridge.refresh()

    def wait_for_ready(self, timeout: float = 10.0) -> str:
        """
        Wait until ``document.readyState`` is interactive or complete.

        Script errors while the page is being replaced count as "not yet".

        Returns:
            str: the ready state that ended the wait

        Raises:
            WaitTimeoutError: if the document never became ready
        """
        def _ready():
            state = self.bridge.execute_script("return document.readyState")
            return state if state in READY_STATES else None

        return Wait(timeout=timeout, message="document did not become ready", ignore=JavaScriptError).until(_ready)


__all__ = [
    'READY_STATES',
    'Navigation',
]
