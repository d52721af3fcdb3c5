"""Remote element references."""

from typing import Any, NamedTuple

from .exceptions import ArgumentError


LEGACY_ELEMENT_KEY = "ELEMENT"
W3C_ELEMENT_KEY = "element-6066-11e4-a52e-4f735466cecf"


class By:
    """Locator strategies understood by find_element."""

    ID = "id"
    NAME = "name"
    CLASS_NAME = "class name"
    CSS_SELECTOR = "css selector"
    XPATH = "xpath"
    LINK_TEXT = "link text"
    PARTIAL_LINK_TEXT = "partial link text"
    TAG_NAME = "tag name"

    ALIASES = {
        "id": ID,
        "name": NAME,
        "class": CLASS_NAME,
        "class_name": CLASS_NAME,
        "class name": CLASS_NAME,
        "css": CSS_SELECTOR,
        "css_selector": CSS_SELECTOR,
        "css selector": CSS_SELECTOR,
        "xpath": XPATH,
        "link": LINK_TEXT,
        "link_text": LINK_TEXT,
        "link text": LINK_TEXT,
        "partial_link_text": PARTIAL_LINK_TEXT,
        "partial link text": PARTIAL_LINK_TEXT,
        "tag_name": TAG_NAME,
        "tag name": TAG_NAME,
    }

    @classmethod
    def normalize(cls, how: str) -> str:
        try:
            return cls.ALIASES[str(how).lower()]
        except KeyError:
            raise ArgumentError(f"cannot find elements with {how!r}") from None


class Point(NamedTuple):
    x: int
    y: int


class Dimension(NamedTuple):
    width: int
    height: int


def element_id_from(value: Any):
    """Return the element id inside a wire element reference, or None."""
    if isinstance(value, dict):
        return value.get(W3C_ELEMENT_KEY) or value.get(LEGACY_ELEMENT_KEY)
    return None


class Element:
    """
    A reference to an element in the remote session.

    Every operation goes through the backend the element was found with, so
    elements found through an event-firing backend fire events too.
    """

    def __init__(self, bridge, ref: str):
        self.bridge = bridge
        self.ref = ref

    def click(self) -> None:
        self.bridge.click_element(self.ref)

    def clear(self) -> None:
        self.bridge.clear_element(self.ref)

    def send_keys(self, *keys: Any) -> None:
        self.bridge.send_keys_to_element(self.ref, keys)

    def submit(self) -> None:
        self.bridge.submit_element(self.ref)

    @property
    def text(self) -> str:
        return self.bridge.element_text(self.ref)

    @property
    def tag_name(self) -> str:
        return self.bridge.element_tag_name(self.ref)

    def attribute(self, name: str):
        return self.bridge.element_attribute(self.ref, name)

    def is_displayed(self) -> bool:
        return self.bridge.element_displayed(self.ref)

    def is_enabled(self) -> bool:
        return self.bridge.element_enabled(self.ref)

    def is_selected(self) -> bool:
        return self.bridge.element_selected(self.ref)

    def find_element(self, how: str, what: str) -> "Element":
        return self.bridge.find_element_by(how, what, parent=self.ref)

    def find_elements(self, how: str, what: str) -> list["Element"]:
        return self.bridge.find_elements_by(how, what, parent=self.ref)

    def to_wire(self) -> dict:
        return {LEGACY_ELEMENT_KEY: self.ref, W3C_ELEMENT_KEY: self.ref}

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Element) and other.ref == self.ref

    def __hash__(self) -> int:
        return hash(self.ref)

    def __repr__(self) -> str:
        return f"<Element ref={self.ref!r}>"


__all__ = [
    "LEGACY_ELEMENT_KEY",
    "W3C_ELEMENT_KEY",
    "By",
    "Point",
    "Dimension",
    "element_id_from",
    "Element",
]
