"""
Page Objects

Page and control types declared the way pagefactory users declare them.
Shared by the unit tests.

Usage:
    from tests.support.page_objects import LoginPage, LazyLoginPage

    page = factory.create_page(LoginPage, driver)
    page.log_in("alice", "secret")

Pattern:
    - One class per page/major component
    - Controls declared as Annotated fields with FindBy/FindBys markers
    - Actions as methods
"""

from tests.support.page_objects.controls import (
    CONSTRUCTED,
    BrokenControl,
    CountOnlyControl,
    ElementTypedControl,
    KeywordOnlyControl,
    LazyItems,
    LazySearchBox,
    LazyTextControl,
    NoArgControl,
    RetryControl,
    TextControl,
)
from tests.support.page_objects.deferred import PricedPage, UnresolvableControlPage
from tests.support.page_objects.pages import (
    BasePage,
    BrokenControlPage,
    ConstructorFirstPage,
    ControlFormsPage,
    CountOnlyControlPage,
    DeclaredOrderPage,
    DerivedPage,
    FailingPage,
    FakeDriverOnlyPage,
    FrozenPage,
    KeywordOnlyControlPage,
    LazyItemsPage,
    LazyLoginPage,
    LoginPage,
    PlainHolder,
    PlainPage,
    ReadOnlyPage,
    RetryControlPage,
    SetupPage,
    UrlPage,
)

__all__ = [
    "CONSTRUCTED",
    "BasePage",
    "BrokenControl",
    "BrokenControlPage",
    "ConstructorFirstPage",
    "ControlFormsPage",
    "CountOnlyControl",
    "CountOnlyControlPage",
    "DeclaredOrderPage",
    "DerivedPage",
    "ElementTypedControl",
    "FailingPage",
    "FakeDriverOnlyPage",
    "FrozenPage",
    "KeywordOnlyControl",
    "KeywordOnlyControlPage",
    "LazyItems",
    "LazyItemsPage",
    "LazyLoginPage",
    "LazySearchBox",
    "LazyTextControl",
    "LoginPage",
    "NoArgControl",
    "PlainHolder",
    "PlainPage",
    "PricedPage",
    "ReadOnlyPage",
    "RetryControl",
    "RetryControlPage",
    "SetupPage",
    "TextControl",
    "UnresolvableControlPage",
    "UrlPage",
]
