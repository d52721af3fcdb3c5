"""
Global constants and configuration defaults.
No dependencies - safe to import from anywhere.
"""

import os

# ============================================================================
# Driver Service Configuration
# ============================================================================

SERVICE_START_TIMEOUT = float(os.getenv("WEBDRIVER_SERVICE_START_TIMEOUT", "20"))
"""How long to wait for a driver process to accept connections, in seconds."""

SERVICE_POLL_INTERVAL = float(os.getenv("WEBDRIVER_SERVICE_POLL_INTERVAL", "0.1"))
"""Delay between readiness probes while a driver process starts."""

SERVICE_STOP_TIMEOUT = float(os.getenv("WEBDRIVER_SERVICE_STOP_TIMEOUT", "5"))
"""Grace period between terminate and kill when stopping a driver process."""

PORT_PROBE_TIMEOUT = 0.25
"""Socket connect timeout for a single readiness probe."""

EPHEMERAL_PORT_ATTEMPTS = 5
"""How many times a free port is re-selected if it is taken before launch."""

DEFAULT_HOST = "127.0.0.1"


# ============================================================================
# Remote Configuration
# ============================================================================

HTTP_TIMEOUT = float(os.getenv("WEBDRIVER_HTTP_TIMEOUT", "60"))
"""Read timeout for a single wire command."""

DEFAULT_REMOTE_URL = "http://127.0.0.1:4444/wd/hub"


# ============================================================================
# Poll-Wait Defaults
# ============================================================================

WAIT_TIMEOUT = 5.0
WAIT_INTERVAL = 0.2


__all__ = [
    "SERVICE_START_TIMEOUT",
    "SERVICE_POLL_INTERVAL",
    "SERVICE_STOP_TIMEOUT",
    "PORT_PROBE_TIMEOUT",
    "EPHEMERAL_PORT_ATTEMPTS",
    "DEFAULT_HOST",
    "HTTP_TIMEOUT",
    "DEFAULT_REMOTE_URL",
    "WAIT_TIMEOUT",
    "WAIT_INTERVAL",
]
