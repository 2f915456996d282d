"""Page factory: builds page objects and binds their locator-marked fields.

This module provides:
- PageFactory, which owns an interceptor chain and a type registry
- A process-wide default factory with module-level shortcuts

Usage:
    ```python
    class LoginPage(Page):
        username: Annotated[TextBox, FindBy(id="username")]
        submit: Annotated[Button, FindBy(css="button[type=submit]")]

    login = create_page(LoginPage, PlaywrightDriver(page))
    login.username.fill("alice")
    ```

The default factory and its interceptor chain live for the whole process
and are not synchronised. Code that registers an interceptor on it should
remove it again; test suites that want isolation build their own
`PageFactory` instead.
"""

import warnings
from collections.abc import Sequence
from typing import Any, TypeVar

import structlog

from pagefactory.config.settings import get_settings
from pagefactory.core.exceptions import ArgumentInferenceError, FieldAccessError
from pagefactory.drivers.base import Driver
from pagefactory.factory.binder import LazyBinder
from pagefactory.factory.constructors import ConstructorMatcher
from pagefactory.factory.descriptors import FieldDescriptor, TypeRegistry
from pagefactory.factory.interceptors import Interceptor, InterceptorChain

log = structlog.get_logger(__name__)

P = TypeVar("P")

BOUND_FIELDS_KEY = "__pagefactory_bound__"


def infer_argument_types(arguments: Sequence[Any]) -> tuple[type, ...]:
    """Runtime types of ``arguments``.

    Raises:
        ArgumentInferenceError: An argument is None.
    """
    types: list[type] = []
    for index, argument in enumerate(arguments):
        if argument is None:
            raise ArgumentInferenceError(index)
        types.append(type(argument))
    return tuple(types)


def _bound_fields(page: Any) -> frozenset[str]:
    """Names of fields this library already bound on ``page``."""
    return frozenset(getattr(page, "__dict__", {}).get(BOUND_FIELDS_KEY, ()))


def _record_bound(page: Any, name: str) -> None:
    # Pages without a bound field never get the record; slotted pages keep none
    namespace = getattr(page, "__dict__", None)
    if namespace is not None:
        namespace.setdefault(BOUND_FIELDS_KEY, set()).add(name)


def _assign(page: Any, field: FieldDescriptor, value: Any) -> None:
    try:
        setattr(page, field.name, value)
        return
    except (AttributeError, TypeError):
        pass

    # Frozen instances and custom __setattr__ refusals
    try:
        object.__setattr__(page, field.name, value)
    except (AttributeError, TypeError) as e:
        raise FieldAccessError(field.owner, field.name) from e


class PageFactory:
    """Creates page objects and binds their fields.

    Attributes:
        interceptors: Chain applied to every page (and, unless disabled,
            every control) allocated while it is non-empty.
        registry: Descriptor cache for page and control types.
        intercept_controls: Whether controls are allocated through the chain.
    """

    def __init__(
        self,
        interceptors: InterceptorChain | None = None,
        registry: TypeRegistry | None = None,
        intercept_controls: bool | None = None,
    ) -> None:
        self.interceptors = interceptors if interceptors is not None else InterceptorChain()
        self.registry = registry if registry is not None else TypeRegistry()
        self.matcher = ConstructorMatcher(self.registry)
        self.intercept_controls = (
            get_settings().intercept_controls if intercept_controls is None else intercept_controls
        )

    def add_interceptor(self, interceptor: Interceptor) -> bool:
        """Intercept method calls on objects created from now on."""
        return self.interceptors.add(interceptor)

    def remove_interceptor(self, interceptor: Interceptor) -> bool:
        return self.interceptors.remove(interceptor)

    def create_page(self, page_type: type[P], driver: Driver, *args: Any) -> P:
        """Create a page, passing ``driver`` then ``args`` to its constructor.

        Constructor parameter types are inferred from the argument values.

        Raises:
            ArgumentInferenceError: The driver or an argument is None.
            NoMatchingConstructorError: No constructor accepts the arguments.
            ConstructionError: The constructor, or a control's, raised.
            FieldAccessError: A bound value could not be assigned.
        """
        arguments = (driver, *args)
        return self._create(page_type, driver, infer_argument_types(arguments), arguments)

    def create_page_with(
        self,
        page_type: type[P],
        driver: Driver,
        argument_types: Sequence[type],
        arguments: Sequence[Any],
    ) -> P:
        """Create a page from explicit constructor argument types and values.

        ``arguments`` is the complete argument list: the driver is used for
        field binding only and is not prepended.
        """
        if len(argument_types) != len(arguments):
            raise ValueError(
                f"{len(argument_types)} argument types given for {len(arguments)} arguments"
            )
        return self._create(page_type, driver, tuple(argument_types), tuple(arguments))

    def init_element(self, page: P, driver: Driver) -> P:
        """Bind the locator-marked fields of an existing object.

        Fields already bound by this library are left untouched.
        """
        self._bind_fields(page, type(page), driver)
        return page

    def init_page(self, page_type: type[P], driver: Driver, url: str | None = None) -> P:
        """Deprecated alias of `create_page`."""
        warnings.warn(
            "init_page() is deprecated, use create_page()", DeprecationWarning, stacklevel=2
        )
        if url is None:
            return self.create_page(page_type, driver)
        return self.create_page(page_type, driver, url)

    def _create(
        self,
        page_type: type[P],
        driver: Driver,
        argument_types: tuple[type, ...],
        arguments: tuple[Any, ...],
    ) -> P:
        constructor = self.matcher.match(page_type, argument_types)

        intercepted = self.interceptors.size() > 0
        target_cls = self.interceptors.intercepted_class(page_type) if intercepted else page_type
        page = constructor.invoke(target_cls, arguments)

        self._bind_fields(page, page_type, driver)
        log.info(
            "page_created",
            page_type=page_type.__qualname__,
            constructor=constructor.name,
            intercepted=intercepted,
        )
        return page

    def _bind_fields(self, page: Any, page_type: type, driver: Driver) -> None:
        binder = LazyBinder(
            driver,
            self.registry,
            self.interceptors if self.intercept_controls else None,
        )
        bound = _bound_fields(page)
        for field in self.registry.page(page_type).fields:
            if field.name in bound:
                continue
            value = binder.decorate(field)
            if value is None:
                continue
            _assign(page, field, value)
            _record_bound(page, field.name)


_page_factory: PageFactory | None = None


def get_page_factory() -> PageFactory:
    """Get or create the process-wide default factory."""
    global _page_factory

    if _page_factory is None:
        _page_factory = PageFactory()
        log.debug("page_factory_initialized")

    return _page_factory


def reset_page_factory() -> None:
    """Drop the default factory and its interceptors (for testing)."""
    global _page_factory
    _page_factory = None


def add_interceptor(interceptor: Interceptor) -> bool:
    return get_page_factory().add_interceptor(interceptor)


def remove_interceptor(interceptor: Interceptor) -> bool:
    return get_page_factory().remove_interceptor(interceptor)


def create_page(page_type: type[P], driver: Driver, *args: Any) -> P:
    return get_page_factory().create_page(page_type, driver, *args)


def create_page_with(
    page_type: type[P],
    driver: Driver,
    argument_types: Sequence[type],
    arguments: Sequence[Any],
) -> P:
    return get_page_factory().create_page_with(page_type, driver, argument_types, arguments)


def init_element(page: P, driver: Driver) -> P:
    return get_page_factory().init_element(page, driver)


def init_page(page_type: type[P], driver: Driver, url: str | None = None) -> P:
    """Deprecated alias of `create_page`."""
    warnings.warn("init_page() is deprecated, use create_page()", DeprecationWarning, stacklevel=2)
    if url is None:
        return create_page(page_type, driver)
    return create_page(page_type, driver, url)
