"""Playwright-backed driver.

Renders `Locator` values into Playwright selectors and resolves them on a
sync `playwright.sync_api.Page`.

Example:
    ```python
    with sync_playwright() as p:
        page = p.chromium.launch().new_page()
        page.goto("https://example.test/login")
        login = create_page(LoginPage, PlaywrightDriver(page))
    ```
"""

from typing import Literal, get_args

import structlog
from playwright.sync_api import Locator as PlaywrightLocator
from playwright.sync_api import Page as PlaywrightPage

from pagefactory.config.settings import get_settings
from pagefactory.locators import How, Locator, LocatorStep

log = structlog.get_logger(__name__)

ElementState = Literal["attached", "visible"]


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def to_selector(step: LocatorStep) -> str:
    """Render one locator step in Playwright selector syntax."""
    match step.how:
        case How.CSS:
            return f"css={step.using}"
        case How.XPATH:
            return f"xpath={step.using}"
        case How.ID:
            return f"[id={_quote(step.using)}]"
        case How.NAME:
            return f"[name={_quote(step.using)}]"
        case How.CLASS_NAME:
            return f".{step.using}"
        case How.TEXT:
            return f"text={step.using}"
        case How.TEST_ID:
            return f"[data-testid={_quote(step.using)}]"
    raise ValueError(f"Unsupported locator strategy: {step.how}")


class PlaywrightDriver:
    """Driver adapter over a Playwright sync page.

    `find_element` narrows each step with nested `.locator()` calls, keeps the
    first match and waits until it reaches the configured state. Playwright's
    `TimeoutError` propagates unchanged when nothing matches in time.
    """

    element_types: tuple[type, ...] = (PlaywrightLocator,)

    def __init__(
        self,
        page: PlaywrightPage,
        timeout_ms: float | None = None,
        state: ElementState | None = None,
    ) -> None:
        settings = get_settings()
        self.page = page
        self.timeout_ms = timeout_ms if timeout_ms is not None else settings.element_timeout_ms
        self.state: ElementState = state or settings.element_state
        if self.state not in get_args(ElementState):
            raise ValueError(f"Unsupported element state: {self.state!r}")

    def find_element(self, locator: Locator) -> PlaywrightLocator:
        first, *rest = locator.steps
        element = self.page.locator(to_selector(first))
        for step in rest:
            element = element.locator(to_selector(step))
        element = element.first

        element.wait_for(state=self.state, timeout=self.timeout_ms)
        log.debug("element_found", locator=str(locator), state=self.state)
        return element
