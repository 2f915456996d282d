"""Page construction, constructor matching, lazy binding and interception."""

from pagefactory.factory.binder import LazyBinder
from pagefactory.factory.constructors import (
    ConstructorDescriptor,
    ConstructorMatcher,
    constructor,
    is_assignable,
)
from pagefactory.factory.descriptors import (
    ControlDescriptor,
    FieldDescriptor,
    PageDescriptor,
    TypeRegistry,
)
from pagefactory.factory.interceptors import (
    Interceptor,
    InterceptorChain,
    Invocation,
    LoggingInterceptor,
    is_intercepted,
)
from pagefactory.factory.lazy import LazyCell, is_lazy_proxy, is_resolved, resolve
from pagefactory.factory.page_factory import (
    PageFactory,
    add_interceptor,
    create_page,
    create_page_with,
    get_page_factory,
    init_element,
    init_page,
    remove_interceptor,
    reset_page_factory,
)

__all__ = [
    "ConstructorDescriptor",
    "ConstructorMatcher",
    "ControlDescriptor",
    "FieldDescriptor",
    "Interceptor",
    "InterceptorChain",
    "Invocation",
    "LazyBinder",
    "LazyCell",
    "LoggingInterceptor",
    "PageDescriptor",
    "PageFactory",
    "TypeRegistry",
    "add_interceptor",
    "constructor",
    "create_page",
    "create_page_with",
    "get_page_factory",
    "init_element",
    "init_page",
    "is_assignable",
    "is_intercepted",
    "is_lazy_proxy",
    "is_resolved",
    "remove_interceptor",
    "reset_page_factory",
    "resolve",
]
