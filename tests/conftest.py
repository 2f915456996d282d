"""Shared pytest fixtures for pagefactory tests.

This module provides fixtures for:
- A counting stub driver standing in for a browser
- An isolated PageFactory per test
- Resetting process-wide state (default factory, cached settings)

Usage:
    @pytest.mark.unit
    def test_something(factory, driver):
        page = factory.create_page(LoginPage, driver)
        assert len(driver.lookups) == 4
"""

import os
import sys
from collections.abc import Generator

import pytest

from pagefactory.config.logging import configure_logging
from pagefactory.config.settings import get_settings
from pagefactory.factory.interceptors import InterceptorChain
from pagefactory.factory.page_factory import PageFactory, reset_page_factory
from tests.support.helpers.fake_driver import CountingDriver
from tests.support.page_objects.controls import CONSTRUCTED

# =============================================================================
# Environment Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Send pagefactory events to stderr, captured per test by pytest."""
    configure_logging(stream=sys.stderr)


@pytest.fixture(autouse=True)
def isolate_process_state() -> Generator[None, None, None]:
    """Give every test a fresh default factory and fresh settings.

    PAGEFACTORY_* variables set by the host environment are removed for the
    duration of the test.
    """
    original_env = os.environ.copy()
    for key in list(os.environ):
        if key.startswith("PAGEFACTORY_"):
            del os.environ[key]
    get_settings.cache_clear()
    reset_page_factory()
    CONSTRUCTED.clear()

    yield

    reset_page_factory()
    get_settings.cache_clear()
    os.environ.clear()
    os.environ.update(original_env)


# =============================================================================
# Driver and Factory Fixtures
# =============================================================================


@pytest.fixture
def driver() -> CountingDriver:
    """Stub driver recording every lookup."""
    return CountingDriver()


@pytest.fixture
def chain() -> InterceptorChain:
    """Empty interceptor chain owned by the test."""
    return InterceptorChain()


@pytest.fixture
def factory(chain: InterceptorChain) -> PageFactory:
    """Factory isolated from the process-wide default."""
    return PageFactory(interceptors=chain)
