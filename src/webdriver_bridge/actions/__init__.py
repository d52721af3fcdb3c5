"""Facade helpers returned by Driver: navigation, keyboard, switching, management."""

from .keyboard import Keyboard, modifier_key
from .navigation import Navigation
from .target_locator import Alert, TargetLocator
from .window import Manager, Timeouts, Window

__all__ = [
    "Keyboard",
    "modifier_key",
    "Navigation",
    "Alert",
    "TargetLocator",
    "Manager",
    "Timeouts",
    "Window",
]
