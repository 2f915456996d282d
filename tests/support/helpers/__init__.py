"""
Test Helpers

Pure test doubles with no browser dependency.

Usage:
    from tests.support.helpers import CountingDriver, FakeElement
"""

from tests.support.helpers.fake_driver import CountingDriver, FakeElement

__all__ = ["CountingDriver", "FakeElement"]
