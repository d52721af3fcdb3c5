"""Wire protocol: command tables, transport, capabilities and the Bridge."""

from .backend import Backend
from .bridge import Bridge, SessionState
from .capabilities import Capabilities, W3CCapabilities
from .commands import LEGACY_COMMANDS, W3C_COMMANDS, Command, ProtocolKind, command_path, commands_for
from .http import HttpClient
from .proxy import Proxy
from .response import check_response

__all__ = [
    "Backend",
    "Bridge",
    "SessionState",
    "Capabilities",
    "W3CCapabilities",
    "LEGACY_COMMANDS",
    "W3C_COMMANDS",
    "Command",
    "ProtocolKind",
    "command_path",
    "commands_for",
    "HttpClient",
    "Proxy",
    "check_response",
]
