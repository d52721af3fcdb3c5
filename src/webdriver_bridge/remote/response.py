"""Response envelope checking for both protocol generations."""

from typing import Any

from ..exceptions import WebDriverError, UnknownError, error_for_code


def check_response(status: int, payload: Any) -> None:
    """
    Raise the typed protocol error described by a response, if any.

    Recognized envelopes:
        W3C     {"value": {"error": "<code>", "message": ..., "stacktrace": ...}}
        legacy  {"status": <non-zero int>, "value": {"message": ...}}

    A non-2xx response without either envelope raises UnknownError with the
    HTTP status; a non-JSON error body raises WebDriverError.
    """
    if not isinstance(payload, dict):
        if status >= 400:
            raise WebDriverError(f"unexpected response, code={status}, body={payload!r}")
        return

    value = payload.get("value")

    if isinstance(value, dict) and "error" in value:
        cls = error_for_code(value["error"])
        raise cls(
            _message(value) or str(value["error"]),
            status=status,
            stacktrace=value.get("stacktrace"),
        )

    legacy_status = payload.get("status")
    if isinstance(legacy_status, int) and not isinstance(legacy_status, bool) and legacy_status != 0:
        cls = error_for_code(legacy_status)
        raise cls(
            _message(value) if isinstance(value, dict) else str(value or ""),
            status=status,
            stacktrace=value.get("stackTrace") if isinstance(value, dict) else None,
        )

    if status >= 400:
        raise UnknownError(f"unexpected response, code={status}, body={payload!r}", status=status)


def _message(value: dict) -> str:
    message = value.get("message")
    return str(message) if message is not None else ""


__all__ = ["check_response"]
