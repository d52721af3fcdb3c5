# tests/test_bridge.py
import pytest

from webdriver_bridge.element import Dimension, Element, W3C_ELEMENT_KEY
from webdriver_bridge.exceptions import (
    NoSuchElementError,
    NoSuchWindowError,
    SessionNotActiveError,
    SessionNotCreatedError,
    UnsupportedCapabilityError,
    UnsupportedOperationError,
)
from webdriver_bridge.keys import Keys
from webdriver_bridge.remote import Bridge, Capabilities, ProtocolKind, SessionState, W3CCapabilities

from _utils import FakeHttp, LEGACY_NEW_SESSION, W3C_NEW_SESSION, make_bridge


class TestHandshake:
    def test_detects_w3c_from_nested_session_id(self):
        http = FakeHttp({("POST", "/session"): W3C_NEW_SESSION})
        bridge = Bridge.handshake("http://127.0.0.1:9515", Capabilities.chrome(), http_client=http)

        assert bridge.kind is ProtocolKind.W3C
        assert bridge.session_id == "s1"
        assert isinstance(bridge.capabilities, W3CCapabilities)
        assert bridge.capabilities.browser_version == "120"
        assert http.server_url == "http://127.0.0.1:9515"

    def test_detects_legacy_from_top_level_session_id(self):
        http = FakeHttp({("POST", "/session"): LEGACY_NEW_SESSION})
        bridge = Bridge.handshake("http://h:1", Capabilities.chrome(), http_client=http)

        assert bridge.kind is ProtocolKind.LEGACY
        assert bridge.capabilities.javascript_enabled is True

    def test_unknown_dialect_sends_both_envelopes(self):
        http = FakeHttp({("POST", "/session"): W3C_NEW_SESSION})
        Bridge.handshake("http://h:1", Capabilities.chrome(), http_client=http)

        _, _, payload = http.last
        assert payload["desiredCapabilities"]["javascriptEnabled"] is True
        always = payload["capabilities"]["alwaysMatch"]
        assert always == {"browserName": "chrome"}
        assert payload["capabilities"]["firstMatch"] == [{}]

    def test_known_legacy_sends_desired_only(self):
        http = FakeHttp({("POST", "/session"): LEGACY_NEW_SESSION})
        Bridge.handshake("http://h:1", {"browserName": "chrome"}, kind=ProtocolKind.LEGACY, http_client=http)
        assert http.last[2] == {"desiredCapabilities": {"browserName": "chrome"}}

    def test_known_w3c_sends_capabilities_only(self):
        http = FakeHttp({("POST", "/session"): W3C_NEW_SESSION})
        Bridge.handshake("http://h:1", {"browserName": "firefox"}, kind=ProtocolKind.W3C, http_client=http)
        assert http.last[2] == {"capabilities": {"firstMatch": [{}], "alwaysMatch": {"browserName": "firefox"}}}

    def test_proxy_form_follows_envelope(self):
        http = FakeHttp({("POST", "/session"): W3C_NEW_SESSION})
        Bridge.handshake("http://h:1", Capabilities(browser_name="chrome", proxy={"http": "h:1", "no_proxy": "a, b"}), http_client=http)

        _, _, payload = http.last
        assert payload["desiredCapabilities"]["proxy"] == {"proxyType": "MANUAL", "httpProxy": "h:1", "noProxy": "a, b"}
        assert payload["capabilities"]["alwaysMatch"]["proxy"] == {
            "proxyType": "manual",
            "httpProxy": "h:1",
            "noProxy": ["a", "b"],
        }

    def test_known_w3c_sends_w3c_proxy(self):
        http = FakeHttp({("POST", "/session"): W3C_NEW_SESSION})
        caps = Capabilities(browser_name="firefox", proxy={"pac": "http://pac"})
        Bridge.handshake("http://h:1", caps, kind=ProtocolKind.W3C, http_client=http)
        always = http.last[2]["capabilities"]["alwaysMatch"]
        assert always["proxy"] == {"proxyType": "pac", "proxyAutoconfigUrl": "http://pac"}

    def test_known_legacy_sends_legacy_proxy(self):
        http = FakeHttp({("POST", "/session"): LEGACY_NEW_SESSION})
        caps = W3CCapabilities(browser_name="chrome", proxy={"no_proxy": ["a"]})
        Bridge.handshake("http://h:1", caps, kind=ProtocolKind.LEGACY, http_client=http)
        assert http.last[2]["desiredCapabilities"]["proxy"] == {"proxyType": "MANUAL", "noProxy": "a"}

    def test_missing_session_id(self):
        http = FakeHttp({("POST", "/session"): {"value": {"capabilities": {}}}})
        with pytest.raises(SessionNotCreatedError):
            Bridge.handshake("http://h:1", {}, http_client=http)

    def test_accepted_capabilities_are_not_validated(self):
        response = {"value": {"sessionId": "s1", "capabilities": {"browserName": "chrome", "chrome": {"x": 1}}}}
        http = FakeHttp({("POST", "/session"): response})
        bridge = Bridge.handshake("http://h:1", {}, http_client=http)
        assert bridge.capabilities["chrome"] == {"x": 1}


class TestExecute:
    def test_fills_session_id_and_unwraps_value(self):
        bridge, http = make_bridge()
        http.responses[("GET", "/session/s1/title")] = {"value": "Example"}
        assert bridge.title() == "Example"
        assert http.paths() == [("GET", "/session/s1/title")]

    def test_command_missing_from_dialect(self):
        bridge, _ = make_bridge(ProtocolKind.W3C)
        with pytest.raises(UnsupportedOperationError):
            bridge.execute("submit_element", {"id": "e1"})

    def test_before_session(self):
        bridge = Bridge("http://h:1", http_client=FakeHttp())
        with pytest.raises(SessionNotActiveError):
            bridge.execute("get_title")

    def test_protocol_errors_propagate(self):
        bridge, http = make_bridge()
        http.responses[("POST", "/session/s1/window")] = NoSuchWindowError("no window")
        with pytest.raises(NoSuchWindowError):
            bridge.switch_to_window("w2")


class TestQuit:
    def test_quit_is_terminal_and_idempotent(self):
        bridge, http = make_bridge()
        bridge.quit()
        bridge.quit()
        assert http.paths() == [("DELETE", "/session/s1")]
        assert bridge.state is SessionState.QUIT
        with pytest.raises(SessionNotActiveError):
            bridge.title()

    def test_transport_errors_are_swallowed(self):
        bridge, http = make_bridge()
        http.responses[("DELETE", "/session/s1")] = ConnectionRefusedError("gone")
        bridge.quit()
        assert bridge.state is SessionState.QUIT

    def test_protocol_errors_propagate(self):
        bridge, http = make_bridge()
        http.responses[("DELETE", "/session/s1")] = NoSuchWindowError("boom")
        with pytest.raises(NoSuchWindowError):
            bridge.quit()
        assert bridge.state is SessionState.QUIT


class TestDialectDifferences:
    def test_send_keys_payloads(self):
        legacy, lhttp = make_bridge(ProtocolKind.LEGACY)
        w3c, whttp = make_bridge(ProtocolKind.W3C)

        legacy.send_keys_to_element("e1", ["ab", 1])
        w3c.send_keys_to_element("e1", ["ab", 1])

        assert lhttp.last[2] == {"value": ["ab", "1"]}
        assert whttp.last[2] == {"text": "ab1", "value": ["a", "b", "1"]}

    def test_timeouts(self):
        legacy, lhttp = make_bridge(ProtocolKind.LEGACY)
        w3c, whttp = make_bridge(ProtocolKind.W3C)

        legacy.set_timeout("page load", 2.5)
        w3c.set_timeout("page load", 2.5)

        assert lhttp.last[2] == {"type": "page load", "ms": 2500}
        assert whttp.last[2] == {"pageLoad": 2500}

    def test_unknown_timeout_type(self):
        bridge, _ = make_bridge()
        with pytest.raises(ValueError):
            bridge.set_timeout("forever", 1)

    def test_switch_to_window(self):
        legacy, lhttp = make_bridge(ProtocolKind.LEGACY)
        w3c, whttp = make_bridge(ProtocolKind.W3C)
        legacy.switch_to_window("w2")
        w3c.switch_to_window("w2")
        assert lhttp.last[2] == {"name": "w2"}
        assert whttp.last[2] == {"handle": "w2"}

    def test_window_size(self):
        legacy, lhttp = make_bridge(ProtocolKind.LEGACY)
        w3c, whttp = make_bridge(ProtocolKind.W3C)
        lhttp.responses[("GET", "/session/s1/window/current/size")] = {"value": {"width": 800, "height": 600}}
        whttp.responses[("GET", "/session/s1/window/rect")] = {"value": {"x": 0, "y": 0, "width": 1024, "height": 768}}

        assert legacy.window_size() == Dimension(800, 600)
        assert w3c.window_size() == Dimension(1024, 768)

    def test_w3c_only_resizes_current_window(self):
        bridge, _ = make_bridge(ProtocolKind.W3C)
        with pytest.raises(UnsupportedOperationError):
            bridge.set_window_size(10, 10, handle="other")

    def test_w3c_locators_translated_to_css(self):
        bridge, http = make_bridge(ProtocolKind.W3C)
        http.responses[("POST", "/session/s1/element")] = {"value": {W3C_ELEMENT_KEY: "e1"}}

        element = bridge.find_element_by("id", "login")
        assert element == Element(bridge, "e1")
        assert http.last[2] == {"using": "css selector", "value": '[id="login"]'}

        bridge.find_element_by("class_name", "btn")
        assert http.last[2] == {"using": "css selector", "value": ".btn"}

    def test_legacy_locators_kept(self):
        bridge, http = make_bridge(ProtocolKind.LEGACY)
        http.responses[("POST", "/session/s1/element")] = {"value": {"ELEMENT": "e1"}}
        bridge.find_element_by("id", "login")
        assert http.last[2] == {"using": "id", "value": "login"}

    def test_find_child_elements(self):
        bridge, http = make_bridge(ProtocolKind.W3C)
        http.responses[("POST", "/session/s1/element/p1/elements")] = {
            "value": [{W3C_ELEMENT_KEY: "c1"}, {W3C_ELEMENT_KEY: "c2"}]
        }
        found = Element(bridge, "p1").find_elements("xpath", ".//li")
        assert [e.ref for e in found] == ["c1", "c2"]

    def test_find_element_without_reference(self):
        bridge, http = make_bridge()
        http.responses[("POST", "/session/s1/element")] = {"value": None}
        with pytest.raises(NoSuchElementError):
            bridge.find_element_by("css", "#nope")

    def test_script_arguments_and_results_convert_elements(self):
        bridge, http = make_bridge(ProtocolKind.W3C)
        http.responses[("POST", "/session/s1/execute/sync")] = {"value": [{W3C_ELEMENT_KEY: "e9"}, 3]}

        result = bridge.execute_script("return arguments", Element(bridge, "e1"))

        assert http.last[2] == {"script": "return arguments", "args": [{W3C_ELEMENT_KEY: "e1"}]}
        assert result == [Element(bridge, "e9"), 3]

    def test_legacy_script_uses_legacy_element_key(self):
        bridge, http = make_bridge(ProtocolKind.LEGACY)
        bridge.execute_script("x", Element(bridge, "e1"))
        assert http.last[2]["args"] == [{"ELEMENT": "e1"}]


class TestW3CShims:
    def test_click_becomes_pointer_actions(self):
        bridge, http = make_bridge(ProtocolKind.W3C)
        bridge.click()

        method, path, payload = http.last
        assert (method, path) == ("POST", "/session/s1/actions")
        source = payload["actions"][0]
        assert source["type"] == "pointer"
        assert source["actions"] == [
            {"type": "pointerDown", "button": 0},
            {"type": "pointerUp", "button": 0},
        ]

    def test_legacy_click_uses_wire_command(self):
        bridge, http = make_bridge(ProtocolKind.LEGACY)
        bridge.context_click()
        assert http.last == ("POST", "/session/s1/click", {"button": 2})

    def test_double_click(self):
        bridge, http = make_bridge(ProtocolKind.W3C)
        bridge.double_click()
        assert len(http.last[2]["actions"][0]["actions"]) == 4

    def test_mouse_move_to_element(self):
        bridge, http = make_bridge(ProtocolKind.W3C)
        bridge.mouse_move_to("e1", 5, 6)
        move = http.last[2]["actions"][0]["actions"][0]
        assert move["origin"] == {W3C_ELEMENT_KEY: "e1"}
        assert (move["x"], move["y"]) == (5, 6)

    def test_legacy_mouse_move_to(self):
        bridge, http = make_bridge(ProtocolKind.LEGACY)
        bridge.mouse_move_to("e1", 5, 6)
        assert http.last[2] == {"element": "e1", "xoffset": 5, "yoffset": 6}

    def test_modifier_keys_toggle_across_calls(self):
        bridge, http = make_bridge(ProtocolKind.W3C)

        bridge.send_keys_to_active_element([Keys.SHIFT, "a"])
        first = http.last[2]["actions"][0]["actions"]
        assert first == [
            {"type": "keyDown", "value": Keys.SHIFT},
            {"type": "keyDown", "value": "a"},
            {"type": "keyUp", "value": "a"},
        ]
        assert bridge.pressed_modifiers == {Keys.SHIFT}

        bridge.send_keys_to_active_element([Keys.SHIFT])
        assert http.last[2]["actions"][0]["actions"] == [{"type": "keyUp", "value": Keys.SHIFT}]
        assert bridge.pressed_modifiers == frozenset()

    def test_null_key_releases_all_modifiers(self):
        bridge, http = make_bridge(ProtocolKind.W3C)
        bridge.send_keys_to_active_element([Keys.CONTROL])
        bridge.send_keys_to_active_element([Keys.NULL])
        assert http.last[2]["actions"][0]["actions"] == [{"type": "keyUp", "value": Keys.CONTROL}]
        assert not bridge.pressed_modifiers

    def test_submit_runs_script_on_w3c(self):
        bridge, http = make_bridge(ProtocolKind.W3C)
        bridge.submit_element("e1")
        method, path, payload = http.last
        assert path == "/session/s1/execute/sync"
        assert payload["args"] == [{W3C_ELEMENT_KEY: "e1"}]
        assert "submit" in payload["script"]

    def test_submit_uses_wire_command_on_legacy(self):
        bridge, http = make_bridge(ProtocolKind.LEGACY)
        bridge.submit_element("e1")
        assert http.last[:2] == ("POST", "/session/s1/element/e1/submit")


class TestW3CCapabilityValidation:
    def test_rejects_legacy_keys_when_building_w3c_set(self):
        with pytest.raises(UnsupportedCapabilityError):
            W3CCapabilities(version="1")
