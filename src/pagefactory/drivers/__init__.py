"""Drivers that resolve locators into UI elements."""

from pagefactory.drivers.base import Driver, UIElement, element_types_of
from pagefactory.drivers.playwright import PlaywrightDriver, to_selector

__all__ = ["Driver", "PlaywrightDriver", "UIElement", "element_types_of", "to_selector"]
