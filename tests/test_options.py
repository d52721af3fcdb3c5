# tests/test_options.py
import base64

import pytest

from webdriver_bridge.exceptions import ArgumentError, UnsupportedCapabilityError
from webdriver_bridge.options import ChromeOptions, EdgeOptions, FirefoxOptions
from webdriver_bridge.remote import Capabilities, Proxy, W3CCapabilities


class TestChromeOptions:
    def test_vendor_fields_live_under_one_key(self):
        options = ChromeOptions(args=["--headless=new"], binary="/opt/chrome", prefs={"a": 1}, detach=True)
        assert options.to_wire() == {
            "browserName": "chrome",
            "goog:chromeOptions": {
                "detach": True,
                "args": ["--headless=new"],
                "binary": "/opt/chrome",
                "prefs": {"a": 1},
            },
        }

    def test_round_trip(self):
        options = ChromeOptions(
            args=["--a"],
            prefs={"p": True},
            binary="/opt/chrome",
            proxy=Proxy(http="h:1"),
            page_load_strategy="eager",
        )
        options.add_option("debuggerAddress", "127.0.0.1:9222")
        assert ChromeOptions.from_wire(options.to_wire()) == options

    def test_legacy_key_accepted_on_read(self):
        options = ChromeOptions.from_wire({"chromeOptions": {"args": ["--b"]}})
        assert options.args == ["--b"]

    def test_add_extension_reads_file(self, tmp_path):
        crx = tmp_path / "ext.crx"
        crx.write_bytes(b"crx-bytes")
        options = ChromeOptions()
        options.add_extension(str(crx))
        assert options.vendor_options()["extensions"] == [base64.b64encode(b"crx-bytes").decode("ascii")]

    def test_add_extension_missing_file(self, tmp_path):
        with pytest.raises(ArgumentError):
            ChromeOptions().add_extension(str(tmp_path / "missing.crx"))

    def test_unknown_keyword(self):
        with pytest.raises(UnsupportedCapabilityError):
            ChromeOptions(javascript_enabled=True)

    def test_to_capabilities_flavours(self):
        options = ChromeOptions(args=["--x"])
        w3c = options.to_capabilities(w3c=True)
        legacy = options.to_capabilities(w3c=False)
        assert isinstance(w3c, W3CCapabilities)
        assert type(legacy) is Capabilities
        assert w3c.to_wire() == legacy.to_wire()

    def test_copy_is_deep(self):
        options = ChromeOptions(args=["--x"])
        clone = options.copy()
        clone.add_argument("--y")
        assert options.args == ["--x"]


class TestEdgeOptions:
    def test_defaults(self):
        wire = EdgeOptions(args=["--inprivate"]).to_wire()
        assert wire["browserName"] == "MicrosoftEdge"
        assert wire["pageLoadStrategy"] == "normal"
        assert wire["ms:edgeOptions"] == {"args": ["--inprivate"]}


class TestFirefoxOptions:
    def test_log_level_and_profile(self):
        options = FirefoxOptions(profile="UEsDBA==", log_level="trace", args=["-headless"])
        assert options.to_wire()["moz:firefoxOptions"] == {
            "profile": "UEsDBA==",
            "args": ["-headless"],
            "log": {"level": "trace"},
        }

    def test_profile_object_with_encoded(self):
        class Profile:
            def encoded(self):
                return "ZW5j"

        assert FirefoxOptions(profile=Profile()).vendor_options()["profile"] == "ZW5j"

    def test_profile_rejects_other_types(self):
        with pytest.raises(TypeError):
            FirefoxOptions(profile=42)

    def test_round_trip(self):
        options = FirefoxOptions(
            args=["-private"],
            prefs={"x": 1},
            log_level="info",
            binary="/ff",
            proxy=Proxy(http="h:1", no_proxy="localhost"),
        )
        wire = options.to_wire()
        assert wire["proxy"] == {"proxyType": "manual", "httpProxy": "h:1", "noProxy": ["localhost"]}
        restored = FirefoxOptions.from_wire(wire)
        assert restored == options
        assert restored.proxy.http == "h:1"
