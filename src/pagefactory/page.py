"""Base class for page objects."""

from pagefactory.drivers.base import Driver


class Page:
    """A screen or view of the driven UI.

    Subclasses declare their controls as annotated class attributes and are
    built with `create_page()`, which passes the driver as the first
    constructor argument.
    """

    def __init__(self, driver: Driver) -> None:
        self.driver = driver
