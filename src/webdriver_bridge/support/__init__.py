"""Optional wrappers around a session backend."""

from .event_firing import (
    HOOK_EVENTS,
    AbstractEventListener,
    BlockEventListener,
    EventFiringBridge,
)

__all__ = [
    "HOOK_EVENTS",
    "AbstractEventListener",
    "BlockEventListener",
    "EventFiringBridge",
]
