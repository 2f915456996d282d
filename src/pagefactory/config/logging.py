"""structlog output for pagefactory events.

pagefactory modules log through ``structlog.get_logger(__name__)`` and never
configure logging themselves. A test suite that wants to see page creation,
lookups and intercepted calls calls `configure_logging()` once, typically from
its ``conftest.py``:

    ```python
    def pytest_configure(config):
        configure_logging(stream=sys.stderr)
    ```

Only structlog is configured. The standard library root logger, and therefore
Playwright's own logging, is left to the host.
"""

import logging
import sys
from collections.abc import Sequence
from typing import TextIO

import structlog
from structlog.typing import Processor

from pagefactory.config.settings import Settings, get_settings


def build_processors(
    settings: Settings, extra_processors: Sequence[Processor] = ()
) -> list[Processor]:
    """Processor chain ending in the console (debug) or JSON renderer."""
    renderer: Processor = (
        structlog.dev.ConsoleRenderer(colors=False)
        if settings.debug
        else structlog.processors.JSONRenderer()
    )
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
        *extra_processors,
        renderer,
    ]


def configure_logging(
    stream: TextIO | None = None,
    extra_processors: Sequence[Processor] = (),
) -> None:
    """Route pagefactory's structlog events to ``stream``.

    Args:
        stream: Destination for rendered events, stderr by default so test
            output on stdout stays clean.
        extra_processors: Run after the timestamp and before rendering, e.g.
            to add the current test id to every event.
    """
    settings = get_settings()
    log_level = getattr(logging, settings.log_level)

    structlog.configure(
        processors=build_processors(settings, extra_processors),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        # Loggers bound at import time must pick up a later reconfiguration
        cache_logger_on_first_use=False,
    )
