"""Default HTTP transport for wire commands."""

import json
import urllib.error
import urllib.request
from typing import Any, Optional

from ..constants import HTTP_TIMEOUT
from .response import check_response

import logging
logger = logging.getLogger(__name__)


CONTENT_TYPE = "application/json; charset=UTF-8"


class HttpClient:
    """
    Minimal JSON-over-HTTP client.

    Anything with a writable ``server_url`` attribute and a
    ``call(method, path, payload) -> dict`` method can be passed to a Bridge
    instead. Transport failures (connection refused, resets, timeouts)
    propagate as the standard library raises them.
    """

    def __init__(self, server_url: Optional[str] = None, timeout: float = HTTP_TIMEOUT):
        self.server_url = server_url
        self.timeout = timeout

    def _url(self, path: str) -> str:
        if not self.server_url:
            raise ValueError("HttpClient.server_url is not set")
        return self.server_url.rstrip("/") + path

    def call(self, method: str, path: str, payload: Optional[dict] = None) -> dict:
        """Send one command and return the decoded, error-checked response."""
        method = method.upper()
        url = self._url(path)

        data = None
        if method == "POST":
            data = json.dumps(payload or {}).encode("utf-8")

        request = urllib.request.Request(
            url,
            data=data,
            method=method,
            headers={"Accept": "application/json", "Content-Type": CONTENT_TYPE},
        )

        logger.debug(f"-> {method} {url}")
        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as resp:
                status = resp.status
                body = resp.read()
        except urllib.error.HTTPError as e:
            status = e.code
            body = e.read()
        logger.debug(f"<- {status}")

        decoded = _decode(body)
        check_response(status, decoded)
        return decoded if isinstance(decoded, dict) else {"value": decoded}


def _decode(body: bytes) -> Any:
    if not body:
        return {}
    text = body.decode("utf-8", "replace")
    try:
        return json.loads(text)
    except ValueError:
        return text


__all__ = ["HttpClient", "CONTENT_TYPE"]
