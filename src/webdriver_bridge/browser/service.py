"""Driver executable lifecycle: resolve, spawn, wait for readiness, stop."""

import os
import tempfile
from dataclasses import dataclass, field
from typing import Callable, Optional

from ..config import DRIVER_PATH_VARS, get_env_config
from ..constants import (
    DEFAULT_HOST,
    EPHEMERAL_PORT_ATTEMPTS,
    SERVICE_POLL_INTERVAL,
    SERVICE_START_TIMEOUT,
    SERVICE_STOP_TIMEOUT,
)
from ..exceptions import (
    PortUnavailableError,
    ServiceLaunchError,
    ServiceLaunchTimeoutError,
    WaitTimeoutError,
)
from ..utils.diagnostics import collect_diagnostics
from ..utils.wait import Wait
from .executable import resolve_executable
from .process import _is_port_open, get_free_port, is_port_available, spawn, terminate_process

import logging
logger = logging.getLogger(__name__)


LOOPBACK_HOSTS = ("127.0.0.1", "localhost", "::1", "0.0.0.0", "")


def normalize_loopback(host: Optional[str], prefer: str = DEFAULT_HOST) -> str:
    """
    Rewrite a loopback or wildcard bind address into the host used in URLs.

    Drivers bind to a loopback interface but some only answer on one
    spelling of it (msedgedriver wants ``localhost``). Non-loopback hosts
    are returned unchanged.

    >>> normalize_loopback("127.0.0.1", prefer="localhost")
    'localhost'
    >>> normalize_loopback("10.0.0.5")
    '10.0.0.5'
    """
    if host is None or host in LOOPBACK_HOSTS:
        return prefer
    return host


@dataclass
class ServiceConfig:
    """Explicit settings for one driver process. Unset fields fall back to discovery or defaults."""
    executable_path: Optional[str] = None
    port: Optional[int] = None
    args: list[str] = field(default_factory=list)
    host: str = DEFAULT_HOST
    log_path: Optional[str] = None
    env: dict[str, str] = field(default_factory=dict)
    start_timeout: float = SERVICE_START_TIMEOUT
    poll_interval: float = SERVICE_POLL_INTERVAL
    stop_timeout: float = SERVICE_STOP_TIMEOUT


@dataclass(frozen=True)
class DriverSpec:
    """How to find and launch one browser family's driver."""
    name: str
    executables: tuple[str, ...]
    env_var: str
    connect_host: str = DEFAULT_HOST
    log_path_flag: Optional[str] = "--log-path"

    def build_args(self, port: int, config: ServiceConfig) -> list[str]:
        args = [f"--port={port}"]
        if config.log_path and self.log_path_flag:
            args.append(f"{self.log_path_flag}={config.log_path}")
        return args


DRIVER_SPECS = {
    "chrome": DriverSpec("chrome", ("chromedriver",), DRIVER_PATH_VARS["chrome"]),
    "firefox": DriverSpec("firefox", ("geckodriver",), DRIVER_PATH_VARS["firefox"], log_path_flag=None),
    "edge": DriverSpec("edge", ("msedgedriver",), DRIVER_PATH_VARS["edge"], connect_host="localhost"),
}


class Service:
    """
    A locally spawned driver process.

    ``start()`` either returns with the driver accepting connections on
    ``url`` or raises after stopping everything it started. ``stop()`` can be
    called any number of times.

    Args:
        spec: DriverSpec for the browser family
        config: ServiceConfig (defaults are used when omitted)
        env_config: Preloaded ``get_env_config()`` output, read lazily otherwise
        probe: ``probe(host, port) -> bool`` readiness check (default: TCP connect)
    """

    def __init__(
        self,
        spec: DriverSpec,
        config: Optional[ServiceConfig] = None,
        env_config: Optional[dict] = None,
        probe: Optional[Callable[[str, int], bool]] = None,
    ):
        self.spec = spec
        self.config = config or ServiceConfig()
        self.probe = probe or _is_port_open
        self._env_config = env_config
        self.executable: Optional[str] = None
        self.port: Optional[int] = None
        self.process = None
        self.returncode: Optional[int] = None
        self.last_output = ""
        self._output = None

    @property
    def connect_host(self) -> str:
        return normalize_loopback(self.config.host, self.spec.connect_host)

    @property
    def url(self) -> str:
        return f"http://{self.connect_host}:{self.port}"

    @property
    def running(self) -> bool:
        return self.process is not None and self.process.poll() is None

    # ------------------------------------------------------------------
    # Start
    # ------------------------------------------------------------------

    def _resolve_executable(self) -> str:
        explicit = self.config.executable_path
        env_config = None
        if not explicit:
            env_config = self._env_config if self._env_config is not None else get_env_config()
        return resolve_executable(self.spec, explicit, env_config)

    def _choose_port(self) -> int:
        host = self.config.host
        if self.config.port:
            if not is_port_available(host, self.config.port):
                raise PortUnavailableError(f"port {self.config.port} on {host} is already in use")
            return self.config.port

        for _ in range(EPHEMERAL_PORT_ATTEMPTS):
            port = get_free_port(host)
            if is_port_available(host, port):
                return port
            logger.debug(f"Ephemeral port {port} was taken before launch, choosing another")
        raise PortUnavailableError(f"no free port on {host} after {EPHEMERAL_PORT_ATTEMPTS} attempts")

    def _open_output(self):
        if self.config.log_path:
            return open(self.config.log_path, "a+b")
        return tempfile.TemporaryFile()

    def _ready(self) -> bool:
        code = self.process.poll()
        if code is not None:
            raise ServiceLaunchError(
                f"{self.spec.name} driver exited with code {code} before accepting connections",
                output=self.output(),
            )
        return self.probe(self.connect_host, self.port)

    def start(self) -> "Service":
        """
        Spawn the driver and wait until it accepts connections.

        Returns:
            Service: self

        Raises:
            ExecutableNotFoundError: no usable executable
            PortUnavailableError: the requested port is busy
            ServiceLaunchError: the process exited before becoming ready
            ServiceLaunchTimeoutError: not ready within ``start_timeout``
        """
        if self.running:
            return self

        self.executable = self._resolve_executable()
        self.port = self._choose_port()
        self.returncode = None
        self.last_output = ""

        cmd = [self.executable, *self.spec.build_args(self.port, self.config), *self.config.args]
        env = {**os.environ, **self.config.env}

        logger.info(f"Starting {self.spec.name} driver on port {self.port}: {' '.join(cmd)}")
        self._output = self._open_output()
        try:
            self.process = spawn(cmd, env, self._output)
            Wait(
                timeout=self.config.start_timeout,
                interval=self.config.poll_interval,
                ignore=(),
            ).until(self._ready)
        except WaitTimeoutError as e:
            output = self.output()
            self.stop()
            logger.error(collect_diagnostics(self, e))
            raise ServiceLaunchTimeoutError(
                f"{self.spec.name} driver not reachable at {self.url} after {self.config.start_timeout}s",
                output=output,
            ) from e
        except ServiceLaunchError as e:
            self.stop()
            logger.error(collect_diagnostics(self, e))
            raise
        except BaseException:
            self.stop()
            raise

        logger.info(f"{self.spec.name} driver ready at {self.url} (pid {self.process.pid})")
        return self

    # ------------------------------------------------------------------
    # Stop
    # ------------------------------------------------------------------

    def output(self) -> str:
        """Everything the driver printed so far."""
        if self._output is None:
            return self.last_output
        self._output.flush()
        self._output.seek(0)
        return self._output.read().decode("utf-8", "replace")

    def stop(self) -> None:
        proc = self.process
        if proc is not None and self.returncode is None:
            logger.debug(f"Stopping {self.spec.name} driver (pid {proc.pid})")
            self.returncode = terminate_process(proc, self.config.stop_timeout)
            if self.returncode is None:
                self.returncode = proc.poll()

        if self._output is not None:
            self.last_output = self.output()
            self._output.close()
            self._output = None

    def __enter__(self) -> "Service":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def __repr__(self) -> str:
        pid = self.process.pid if self.process is not None else None
        return f"<Service {self.spec.name} port={self.port} pid={pid}>"


__all__ = [
    "LOOPBACK_HOSTS",
    "normalize_loopback",
    "ServiceConfig",
    "DriverSpec",
    "DRIVER_SPECS",
    "Service",
]
