"""Control base class, the lazy-load marker and common controls.

A control wraps one resolved element. Subclasses are built either from the
element (``__init__(self, element)``, preferred) or with no arguments.
"""

from typing import Any, TypeVar

from pagefactory.drivers.base import UIElement

C = TypeVar("C", bound=type)

LAZY_LOAD_MARKER = "__lazy_load__"


def lazy_load(cls: C) -> C:
    """Mark a control type, and every subclass of it, for deferred lookup.

    Fields of a marked type are bound to a proxy; the element is looked up on
    first use instead of when the page is created.
    """
    setattr(cls, LAZY_LOAD_MARKER, True)
    return cls


def is_lazy_load(cls: type) -> bool:
    """Check the type and its ancestors, stopping before ``object``."""
    for klass in cls.__mro__:
        if klass is object:
            break
        if vars(klass).get(LAZY_LOAD_MARKER, False):
            return True
    return False


class Control:
    """Wrapper around one UI element."""

    def __init__(self, element: UIElement | None = None) -> None:
        self.element = element

    def click(self, **kwargs: Any) -> None:
        self.element.click(**kwargs)

    def is_visible(self) -> bool:
        return self.element.is_visible()

    @property
    def text(self) -> str:
        return self.element.text_content() or ""


class Button(Control):
    """Clickable control."""


class TextBox(Control):
    """Editable text input."""

    def fill(self, value: str, **kwargs: Any) -> None:
        self.element.fill(value, **kwargs)

    def clear(self) -> None:
        self.element.fill("")

    @property
    def value(self) -> str:
        return self.element.input_value()


class Label(Control):
    """Read-only text."""


class CheckBox(Control):
    def check(self) -> None:
        self.element.check()

    def uncheck(self) -> None:
        self.element.uncheck()

    def is_checked(self) -> bool:
        return self.element.is_checked()
