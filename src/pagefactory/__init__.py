"""pagefactory: page objects with lazily bound controls.

Usage:
    from pagefactory import FindBy, Page, TextBox, create_page

    class LoginPage(Page):
        username: Annotated[TextBox, FindBy(id="username")]

    login = create_page(LoginPage, driver)
"""

from pagefactory.controls import Button, CheckBox, Control, Label, TextBox, lazy_load
from pagefactory.core.exceptions import (
    ArgumentInferenceError,
    ConstructionError,
    FieldAccessError,
    LocatorDefinitionError,
    NoMatchingConstructorError,
    PageFactoryError,
)
from pagefactory.drivers import Driver, PlaywrightDriver, UIElement
from pagefactory.factory import (
    Invocation,
    InterceptorChain,
    LoggingInterceptor,
    PageFactory,
    add_interceptor,
    constructor,
    create_page,
    create_page_with,
    get_page_factory,
    init_element,
    init_page,
    remove_interceptor,
    reset_page_factory,
)
from pagefactory.locators import FindBy, FindBys, How, Locator
from pagefactory.page import Page

__version__ = "0.1.0"

__all__ = [
    "ArgumentInferenceError",
    "Button",
    "CheckBox",
    "ConstructionError",
    "Control",
    "Driver",
    "FieldAccessError",
    "FindBy",
    "FindBys",
    "How",
    "InterceptorChain",
    "Invocation",
    "Label",
    "Locator",
    "LocatorDefinitionError",
    "LoggingInterceptor",
    "NoMatchingConstructorError",
    "Page",
    "PageFactory",
    "PageFactoryError",
    "PlaywrightDriver",
    "TextBox",
    "UIElement",
    "add_interceptor",
    "constructor",
    "create_page",
    "create_page_with",
    "get_page_factory",
    "init_element",
    "init_page",
    "lazy_load",
    "remove_interceptor",
    "reset_page_factory",
]
