# tests/test_http.py
import io
import json
import urllib.error

import pytest

from webdriver_bridge.exceptions import NoSuchElementError
from webdriver_bridge.remote import http as http_module
from webdriver_bridge.remote.http import HttpClient


class FakeResponse:
    def __init__(self, status, body):
        self.status = status
        self._body = body

    def read(self):
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class TestHttpClient:
    def setup_method(self):
        self.requests = []

    def _patch(self, monkeypatch, result):
        def urlopen(request, timeout=None):
            self.requests.append((request, timeout))
            if isinstance(result, BaseException):
                raise result
            return result

        monkeypatch.setattr(http_module.urllib.request, "urlopen", urlopen)

    def test_post_sends_json(self, monkeypatch):
        self._patch(monkeypatch, FakeResponse(200, b'{"value": null}'))
        client = HttpClient("http://127.0.0.1:9515/", timeout=5)

        assert client.call("post", "/session/s1/url", {"url": "https://a"}) == {"value": None}

        request, timeout = self.requests[0]
        assert request.full_url == "http://127.0.0.1:9515/session/s1/url"
        assert request.get_method() == "POST"
        assert json.loads(request.data) == {"url": "https://a"}
        assert timeout == 5

    def test_get_has_no_body(self, monkeypatch):
        self._patch(monkeypatch, FakeResponse(200, b'{"value": "T"}'))
        HttpClient("http://h").call("GET", "/session/s1/title")
        assert self.requests[0][0].data is None

    def test_http_error_is_mapped(self, monkeypatch):
        body = json.dumps({"value": {"error": "no such element", "message": "gone"}}).encode()
        error = urllib.error.HTTPError("http://h/x", 404, "Not Found", {}, io.BytesIO(body))
        self._patch(monkeypatch, error)
        with pytest.raises(NoSuchElementError, match="gone"):
            HttpClient("http://h").call("POST", "/session/s1/element", {})

    def test_transport_errors_propagate(self, monkeypatch):
        self._patch(monkeypatch, ConnectionRefusedError("refused"))
        with pytest.raises(ConnectionRefusedError):
            HttpClient("http://h").call("GET", "/status")

    def test_requires_server_url(self):
        with pytest.raises(ValueError):
            HttpClient().call("GET", "/status")
