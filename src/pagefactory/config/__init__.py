"""Configuration module for pagefactory.

Usage:
    from pagefactory.config import get_settings

    settings = get_settings()  # Cached singleton
    print(settings.element_state)

Note:
    Settings are read lazily through `get_settings()` so that test suites can
    set `PAGEFACTORY_*` variables before the first page is built.
"""

from pagefactory.config.logging import build_processors, configure_logging
from pagefactory.config.settings import Settings, get_settings

__all__ = ["Settings", "build_processors", "configure_logging", "get_settings"]
