"""Bounded poll-wait used for driver readiness and caller-visible conditions."""

import time
from typing import Callable, Iterable, Optional, Type, TypeVar, Union

from ..constants import WAIT_TIMEOUT, WAIT_INTERVAL
from ..exceptions import NoSuchElementError, WaitTimeoutError

T = TypeVar("T")

ErrorKinds = Union[Type[BaseException], Iterable[Type[BaseException]], None]


def _as_error_tuple(ignore: ErrorKinds) -> tuple:
    if ignore is None:
        return ()
    if isinstance(ignore, type):
        return (ignore,)
    return tuple(ignore)


class Wait:
    """
    Repeatedly evaluate a predicate until it returns something truthy.

    Args:
        timeout: Seconds before giving up (default: 5)
        interval: Seconds to sleep between polls (default: 0.2)
        message: Message for the timeout error instead of the generated one
        ignore: Error kinds treated as "not yet" while polling
                (default: NoSuchElementError). Pass () to ignore nothing.

    There is no cancellation: a wait ends when the predicate succeeds or the
    deadline passes.
    """

    def __init__(
        self,
        timeout: float = WAIT_TIMEOUT,
        interval: float = WAIT_INTERVAL,
        message: Optional[str] = None,
        ignore: ErrorKinds = NoSuchElementError,
    ):
        self.timeout = timeout
        self.interval = interval
        self.message = message
        self.ignored = _as_error_tuple(ignore)

    def until(self, predicate: Callable[[], T]) -> T:
        """
        Poll ``predicate`` and return its first truthy result.

        Raises:
            WaitTimeoutError: if the deadline passes first. The message ends
                with the last ignored error, if one was seen.
        """
        end_time = time.monotonic() + self.timeout
        last_error = None

        while True:
            try:
                result = predicate()
                if result:
                    return result
            except self.ignored as e:
                last_error = e

            if time.monotonic() >= end_time:
                break
            time.sleep(self.interval)

        msg = self.message or f"timed out after {self.timeout} seconds"
        if last_error is not None:
            msg = f"{msg} ({last_error})"

        raise WaitTimeoutError(msg, timeout=self.timeout, last_error=last_error)


def wait_until(
    predicate: Callable[[], T],
    timeout: float = WAIT_TIMEOUT,
    interval: float = WAIT_INTERVAL,
    ignored: ErrorKinds = NoSuchElementError,
    message: Optional[str] = None,
) -> T:
    """Function form of ``Wait(...).until(predicate)``."""
    return Wait(timeout=timeout, interval=interval, message=message, ignore=ignored).until(predicate)


__all__ = [
    "Wait",
    "wait_until",
]
