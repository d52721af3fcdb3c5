"""Special key codes for keyboard input."""

from typing import Any, Iterable


class Keys:
    """Unicode private-use code points the wire protocol maps to non-text keys."""

    NULL = "\ue000"
    CANCEL = "\ue001"
    HELP = "\ue002"
    BACKSPACE = "\ue003"
    TAB = "\ue004"
    CLEAR = "\ue005"
    RETURN = "\ue006"
    ENTER = "\ue007"
    SHIFT = "\ue008"
    CONTROL = "\ue009"
    ALT = "\ue00a"
    PAUSE = "\ue00b"
    ESCAPE = "\ue00c"
    SPACE = "\ue00d"
    PAGE_UP = "\ue00e"
    PAGE_DOWN = "\ue00f"
    END = "\ue010"
    HOME = "\ue011"
    LEFT = "\ue012"
    UP = "\ue013"
    RIGHT = "\ue014"
    DOWN = "\ue015"
    INSERT = "\ue016"
    DELETE = "\ue017"
    SEMICOLON = "\ue018"
    EQUALS = "\ue019"
    F1 = "\ue031"
    F2 = "\ue032"
    F3 = "\ue033"
    F4 = "\ue034"
    F5 = "\ue035"
    F6 = "\ue036"
    F7 = "\ue037"
    F8 = "\ue038"
    F9 = "\ue039"
    F10 = "\ue03a"
    F11 = "\ue03b"
    F12 = "\ue03c"
    META = "\ue03d"
    COMMAND = "\ue03d"

    MODIFIERS = frozenset({SHIFT, CONTROL, ALT, META})


def encode(keys: Iterable[Any]) -> list[str]:
    """
    Flatten keys into the list of strings sent on the wire.

    Numbers are sent as their decimal text; nested lists are flattened.
    """
    encoded: list[str] = []
    for key in keys:
        if isinstance(key, (list, tuple)):
            encoded.extend(encode(key))
        elif isinstance(key, (int, float)) and not isinstance(key, bool):
            encoded.append(str(key))
        elif isinstance(key, str):
            encoded.append(key)
        else:
            raise TypeError(f"expected str, number or list of keys, got {type(key).__name__}")
    return encoded


__all__ = ["Keys", "encode"]
