"""Tests for the Playwright driver adapter.

The Playwright page is a MagicMock; no browser is started.
"""

from typing import Annotated
from unittest.mock import MagicMock

import pytest
from playwright.sync_api import Locator as PlaywrightLocator

from pagefactory.controls import Button, TextBox
from pagefactory.drivers.base import Driver
from pagefactory.drivers.playwright import PlaywrightDriver, to_selector
from pagefactory.factory.page_factory import PageFactory
from pagefactory.locators import FindBy, FindBys, How, LocatorStep, build_locator
from pagefactory.page import Page


class CheckoutPage(Page):
    pay: Annotated[Button, FindBy(test_id="pay")]
    coupon: Annotated[TextBox, FindBys(FindBy(css="form.checkout"), FindBy(name="coupon"))]
    total: Annotated[PlaywrightLocator, FindBy(class_name="total")]


@pytest.fixture
def page() -> MagicMock:
    return MagicMock(name="playwright_page")


class TestToSelector:
    """Tests for rendering locator steps."""

    @pytest.mark.parametrize(
        ("how", "using", "selector"),
        [
            (How.CSS, "form#login", "css=form#login"),
            (How.XPATH, "//button", "xpath=//button"),
            (How.ID, "username", '[id="username"]'),
            (How.NAME, "password", '[name="password"]'),
            (How.CLASS_NAME, "banner", ".banner"),
            (How.TEXT, "Log in", "text=Log in"),
            (How.TEST_ID, "submit", '[data-testid="submit"]'),
        ],
    )
    def test_each_strategy(self, how: How, using: str, selector: str) -> None:
        assert to_selector(LocatorStep(how=how, using=using)) == selector

    def test_attribute_values_are_escaped(self) -> None:
        step = LocatorStep(how=How.ID, using='say "hi"')
        assert to_selector(step) == '[id="say \\"hi\\""]'


class TestPlaywrightDriver:
    """Tests for find_element()."""

    def test_satisfies_driver_protocol(self, page: MagicMock) -> None:
        assert isinstance(PlaywrightDriver(page), Driver)

    def test_defaults_come_from_settings(
        self, page: MagicMock, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PAGEFACTORY_ELEMENT_TIMEOUT_MS", "1500")
        monkeypatch.setenv("PAGEFACTORY_ELEMENT_STATE", "visible")

        driver = PlaywrightDriver(page)

        assert driver.timeout_ms == 1500
        assert driver.state == "visible"

    @pytest.mark.parametrize("state", ["hidden", "detached"])
    def test_state_without_usable_element_is_rejected(self, page: MagicMock, state: str) -> None:
        with pytest.raises(ValueError, match="Unsupported element state"):
            PlaywrightDriver(page, state=state)  # type: ignore[arg-type]

    def test_explicit_arguments_win(self, page: MagicMock) -> None:
        driver = PlaywrightDriver(page, timeout_ms=200, state="visible")

        assert driver.timeout_ms == 200
        assert driver.state == "visible"

    def test_single_step_lookup(self, page: MagicMock) -> None:
        """
        Given: A one-step locator
        When: find_element() is called
        Then: The first match is awaited with the configured state and returned
        """
        driver = PlaywrightDriver(page)

        element = driver.find_element(build_locator([FindBy(id="username")]))

        page.locator.assert_called_once_with('[id="username"]')
        expected = page.locator.return_value.first
        assert element is expected
        expected.wait_for.assert_called_once_with(state="attached", timeout=None)

    def test_chained_steps_narrow_the_search(self, page: MagicMock) -> None:
        driver = PlaywrightDriver(page, timeout_ms=500)
        locator = build_locator([FindBys(FindBy(css="form#login"), FindBy(text="Log in"))])

        element = driver.find_element(locator)

        page.locator.assert_called_once_with("css=form#login")
        outer = page.locator.return_value
        outer.locator.assert_called_once_with("text=Log in")
        assert element is outer.locator.return_value.first
        element.wait_for.assert_called_once_with(state="attached", timeout=500)

    def test_timeout_propagates(self, page: MagicMock) -> None:
        page.locator.return_value.first.wait_for.side_effect = TimeoutError("30000ms exceeded")

        with pytest.raises(TimeoutError):
            PlaywrightDriver(page).find_element(build_locator([FindBy(css=".missing")]))


class TestPlaywrightPageBinding:
    """A page built against the Playwright driver."""

    def test_controls_and_raw_locator_are_bound(self, page: MagicMock) -> None:
        driver = PlaywrightDriver(page)

        checkout = PageFactory().create_page(CheckoutPage, driver)

        assert isinstance(checkout.pay, Button)
        assert isinstance(checkout.coupon, TextBox)
        assert checkout.total is page.locator.return_value.first
        assert page.locator.call_count == 3

    def test_control_actions_reach_playwright(self, page: MagicMock) -> None:
        checkout = PageFactory().create_page(CheckoutPage, PlaywrightDriver(page))

        checkout.coupon.fill("SAVE10")
        checkout.pay.click()

        checkout.coupon.element.fill.assert_called_once_with("SAVE10")
        checkout.pay.element.click.assert_called_once_with()
