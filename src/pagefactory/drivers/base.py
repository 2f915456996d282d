"""Driver and element contracts consumed by the factory."""

from typing import Any, Protocol, runtime_checkable

from pagefactory.locators import Locator


class UIElement(Protocol):
    """A resolved handle to one element of the driven UI.

    The factory never calls these itself; controls do. Playwright's
    `Locator` satisfies this protocol.
    """

    def click(self, **kwargs: Any) -> None: ...

    def fill(self, value: str, **kwargs: Any) -> None: ...

    def text_content(self, **kwargs: Any) -> str | None: ...

    def is_visible(self, **kwargs: Any) -> bool: ...


@runtime_checkable
class Driver(Protocol):
    """Looks up elements of the driven UI.

    Lookups run synchronously on the calling thread. Not-found and timeout
    behaviour belong to the driver; its exceptions pass through unchanged.

    A driver may expose an ``element_types`` tuple listing the element classes
    it returns, so that page fields declared with those types are bound to the
    raw element.
    """

    def find_element(self, locator: Locator) -> Any: ...


def element_types_of(driver: Any) -> tuple[type, ...]:
    """Raw element types recognized for ``driver``."""
    return (UIElement, *getattr(driver, "element_types", ()))
