# tests/_utils.py
"""Fakes shared by the test modules: no network, no driver binaries."""

from webdriver_bridge.remote import Bridge, ProtocolKind


W3C_NEW_SESSION = {"value": {"sessionId": "s1", "capabilities": {"browserName": "chrome", "browserVersion": "120"}}}
LEGACY_NEW_SESSION = {"sessionId": "s1", "status": 0, "value": {"browserName": "chrome", "javascriptEnabled": True}}


class FakeHttp:
    """
    Stand-in for HttpClient.

    ``responses`` maps (method, path) to a response dict, an exception to
    raise, or a callable taking the payload. Every call is recorded.
    """

    def __init__(self, responses=None, default=None):
        self.server_url = None
        self.calls = []
        self.responses = dict(responses or {})
        self.default = {"value": None} if default is None else default

    def call(self, method, path, payload=None):
        self.calls.append((method, path, payload))
        resp = self.responses.get((method, path), self.default)
        if callable(resp) and not isinstance(resp, type):
            resp = resp(payload)
        if isinstance(resp, BaseException):
            raise resp
        return resp

    @property
    def last(self):
        return self.calls[-1]

    def paths(self):
        return [(method, path) for method, path, _ in self.calls]


def make_bridge(kind=ProtocolKind.W3C, http=None):
    """A Bridge with an active session "s1" in the given dialect."""
    http = http or FakeHttp()
    new_session = W3C_NEW_SESSION if kind is ProtocolKind.W3C else LEGACY_NEW_SESSION
    http.responses.setdefault(("POST", "/session"), new_session)
    bridge = Bridge("http://127.0.0.1:9515", kind=kind, http_client=http)
    bridge.create_session({"browserName": "chrome"})
    http.calls.clear()
    return bridge, http


class FakeClock:
    """Replaces the ``time`` module inside webdriver_bridge.utils.wait."""

    def __init__(self, start=100.0):
        self.now = start
        self.sleeps = []

    def monotonic(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


class FakeProcess:
    """Minimal subprocess.Popen double."""

    def __init__(self, pid=4242, returncode=None):
        self.pid = pid
        self.returncode = returncode
        self.terminated = False
        self.killed = False

    def poll(self):
        return self.returncode

    def terminate(self):
        self.terminated = True
        self.returncode = -15

    def kill(self):
        self.killed = True
        self.returncode = -9

    def wait(self, timeout=None):
        return self.returncode


def install_fake_clock(monkeypatch, start=100.0):
    clock = FakeClock(start)
    monkeypatch.setattr("webdriver_bridge.utils.wait.time", clock)
    return clock
