# tests/test_service.py
import os
import stat
import subprocess

import psutil
import pytest

from webdriver_bridge.browser import DRIVER_SPECS, Service, ServiceConfig, normalize_loopback
from webdriver_bridge.browser import process as process_module
from webdriver_bridge.browser import service as service_module
from webdriver_bridge.browser.executable import discover_executable
from webdriver_bridge.browser.process import terminate_process
from webdriver_bridge.exceptions import (
    ExecutableNotFoundError,
    PortUnavailableError,
    ServiceLaunchError,
    ServiceLaunchTimeoutError,
)

from _utils import FakeProcess, install_fake_clock


def _fake_driver(tmp_path, name="chromedriver"):
    path = tmp_path / name
    path.write_text("#!/bin/sh\n")
    path.chmod(path.stat().st_mode | stat.S_IXUSR)
    return str(path)


class TestService:
    def setup_method(self):
        self.spawned = []
        self.terminated = []
        self.process = FakeProcess()

    @pytest.fixture(autouse=True)
    def _isolate(self, monkeypatch):
        def fake_spawn(cmd, env, output):
            output.write(b"Starting ChromeDriver\n")
            self.spawned.append((cmd, env))
            return self.process

        def fake_terminate(proc, timeout):
            self.terminated.append(proc)
            proc.terminate()
            return proc.returncode

        monkeypatch.setattr(service_module, "spawn", fake_spawn)
        monkeypatch.setattr(service_module, "terminate_process", fake_terminate)
        monkeypatch.setattr(service_module, "is_port_available", lambda host, port: True)
        monkeypatch.setattr(service_module, "get_free_port", lambda host: 50123)
        self.clock = install_fake_clock(monkeypatch)

    def _service(self, tmp_path, probe, **config):
        config.setdefault("executable_path", _fake_driver(tmp_path))
        return Service(DRIVER_SPECS["chrome"], ServiceConfig(**config), env_config={}, probe=probe)

    def test_ready_after_n_probes(self, tmp_path):
        probes = []

        def probe(host, port):
            probes.append((host, port))
            return len(probes) == 3

        service = self._service(tmp_path, probe, poll_interval=0.1, start_timeout=5, args=["--verbose"], env={"X": "1"})
        service.start()

        assert len(probes) == 3
        assert probes[0] == ("127.0.0.1", 50123)
        assert self.clock.sleeps == [0.1, 0.1]
        assert service.url == "http://127.0.0.1:50123"
        cmd, env = self.spawned[0]
        assert cmd[1:] == ["--port=50123", "--verbose"]
        assert env["X"] == "1"
        assert env["PATH"] == os.environ["PATH"]

    def test_timeout_stops_process_and_keeps_output(self, tmp_path):
        service = self._service(tmp_path, lambda host, port: False, start_timeout=1, poll_interval=0.25)

        with pytest.raises(ServiceLaunchTimeoutError) as info:
            service.start()

        assert "Starting ChromeDriver" in info.value.output
        assert self.terminated == [self.process]
        assert service.output() == info.value.output

    def test_early_exit(self, tmp_path):
        self.process.returncode = 1
        service = self._service(tmp_path, lambda host, port: True)

        with pytest.raises(ServiceLaunchError, match="exited with code 1"):
            service.start()
        assert self.terminated == [self.process]

    def test_probe_error_stops_process(self, tmp_path):
        def probe(host, port):
            raise RuntimeError("probe exploded")

        service = self._service(tmp_path, probe)
        with pytest.raises(RuntimeError):
            service.start()
        assert self.terminated == [self.process]

    def test_stop_is_idempotent(self, tmp_path):
        service = self._service(tmp_path, lambda host, port: True)
        service.start()
        service.stop()
        service.stop()
        assert self.terminated == [self.process]
        assert service.returncode == -15

    def test_stop_before_start(self, tmp_path):
        service = self._service(tmp_path, lambda host, port: True)
        service.stop()
        assert self.terminated == []

    def test_context_manager(self, tmp_path):
        with self._service(tmp_path, lambda host, port: True) as service:
            assert service.running
        assert self.terminated == [self.process]

    def test_explicit_busy_port(self, tmp_path, monkeypatch):
        monkeypatch.setattr(service_module, "is_port_available", lambda host, port: False)
        service = self._service(tmp_path, lambda host, port: True, port=4444)
        with pytest.raises(PortUnavailableError, match="4444"):
            service.start()
        assert self.spawned == []

    def test_ephemeral_port_is_reselected(self, tmp_path, monkeypatch):
        ports = iter([50001, 50002])
        monkeypatch.setattr(service_module, "get_free_port", lambda host: next(ports))
        monkeypatch.setattr(service_module, "is_port_available", lambda host, port: port == 50002)
        service = self._service(tmp_path, lambda host, port: True)
        service.start()
        assert service.port == 50002

    def test_log_path_is_passed_and_used_for_output(self, tmp_path):
        log_path = tmp_path / "driver.log"
        service = self._service(tmp_path, lambda host, port: True, log_path=str(log_path))
        service.start()
        service.stop()
        assert f"--log-path={log_path}" in self.spawned[0][0]
        assert "Starting ChromeDriver" in log_path.read_text()

    def test_missing_executable(self, tmp_path):
        service = self._service(tmp_path, lambda host, port: True, executable_path=str(tmp_path / "nope"))
        with pytest.raises(ExecutableNotFoundError):
            service.start()
        assert self.spawned == []

    def test_edge_connects_via_localhost(self, tmp_path):
        seen = []
        service = Service(
            DRIVER_SPECS["edge"],
            ServiceConfig(executable_path=_fake_driver(tmp_path, "msedgedriver")),
            env_config={},
            probe=lambda host, port: seen.append(host) or True,
        )
        service.start()
        assert seen == ["localhost"]
        assert service.url.startswith("http://localhost:")


class TestDiscovery:
    def test_env_override_wins(self):
        env_config = {"driver_paths": {"chrome": "/custom/chromedriver"}}
        assert discover_executable(DRIVER_SPECS["chrome"], env_config) == "/custom/chromedriver"

    def test_falls_back_to_path(self, tmp_path, monkeypatch):
        driver = _fake_driver(tmp_path, "geckodriver")
        monkeypatch.setenv("PATH", str(tmp_path))
        assert discover_executable(DRIVER_SPECS["firefox"], {"driver_paths": {}}) == driver


class TestNormalizeLoopback:
    def test_loopback_rewritten(self):
        assert normalize_loopback("127.0.0.1", prefer="localhost") == "localhost"
        assert normalize_loopback("0.0.0.0") == "127.0.0.1"

    def test_other_hosts_kept(self):
        assert normalize_loopback("10.1.2.3", prefer="localhost") == "10.1.2.3"


class StubbornProcess(FakeProcess):
    """Ignores terminate and kill: wait always times out."""

    def terminate(self):
        self.terminated = True

    def kill(self):
        self.killed = True

    def wait(self, timeout=None):
        raise subprocess.TimeoutExpired("driver", timeout)


def _deny(pid):
    raise psutil.AccessDenied(pid)


class TestTerminateProcess:
    def test_access_denied_on_children_is_ignored(self, monkeypatch):
        monkeypatch.setattr(process_module.psutil, "Process", _deny)
        proc = FakeProcess()
        assert terminate_process(proc, timeout=1) == -15
        assert proc.terminated

    def test_process_surviving_kill_does_not_raise(self, monkeypatch):
        monkeypatch.setattr(process_module.psutil, "Process", _deny)
        proc = StubbornProcess()
        assert terminate_process(proc, timeout=1) is None
        assert proc.killed

    def test_service_stop_never_raises(self, tmp_path, monkeypatch):
        monkeypatch.setattr(process_module.psutil, "Process", _deny)
        monkeypatch.setattr(service_module, "spawn", lambda cmd, env, output: StubbornProcess())
        monkeypatch.setattr(service_module, "is_port_available", lambda host, port: True)
        service = Service(
            DRIVER_SPECS["chrome"],
            ServiceConfig(executable_path=_fake_driver(tmp_path), port=9515, stop_timeout=0.01),
            env_config={},
            probe=lambda host, port: True,
        )
        service.start()
        service.stop()
        assert service.process.killed
