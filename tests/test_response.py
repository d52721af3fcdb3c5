# tests/test_response.py
import pytest

from webdriver_bridge.exceptions import (
    NoSuchElementError,
    ProtocolTimeoutError,
    StaleElementReferenceError,
    UnknownError,
    WebDriverError,
    error_for_code,
)
from webdriver_bridge.remote.response import check_response


class TestCheckResponse:
    def test_success_passes(self):
        check_response(200, {"value": {"x": 1}})

    def test_w3c_error_envelope(self):
        payload = {"value": {"error": "no such element", "message": "gone", "stacktrace": "at foo"}}
        with pytest.raises(NoSuchElementError) as info:
            check_response(404, payload)
        assert str(info.value) == "gone"
        assert info.value.status == 404
        assert info.value.stacktrace == "at foo"

    def test_legacy_status_envelope(self):
        with pytest.raises(StaleElementReferenceError, match="stale"):
            check_response(200, {"sessionId": "s1", "status": 10, "value": {"message": "stale"}})

    def test_legacy_status_zero_is_success(self):
        check_response(200, {"sessionId": "s1", "status": 0, "value": None})

    def test_unknown_code_maps_to_unknown_error(self):
        with pytest.raises(UnknownError):
            check_response(500, {"value": {"error": "something new", "message": "?"}})

    def test_non_2xx_without_envelope(self):
        with pytest.raises(UnknownError, match="code=502"):
            check_response(502, {"value": "bad gateway"})

    def test_non_json_error_body(self):
        with pytest.raises(WebDriverError, match="code=500"):
            check_response(500, "Internal Server Error")


class TestErrorLookup:
    def test_w3c_timeout_code_is_protocol_timeout(self):
        assert error_for_code("timeout") is ProtocolTimeoutError

    def test_legacy_numbers(self):
        assert error_for_code(7) is NoSuchElementError
        assert error_for_code(999) is UnknownError
