"""Constructor discovery and matching.

A page type declares its constructors as its ``__init__`` plus any
classmethod decorated with `@constructor`. Their order is the order they
appear in the class body; an inherited ``__init__`` comes first.

Matching picks the first declared constructor whose parameters accept the
argument types. Declaration order decides ties, never specificity.
"""

import inspect
import types
import typing
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar, Union, get_args, get_origin

import structlog

from pagefactory.core.exceptions import ConstructionError, NoMatchingConstructorError

if TYPE_CHECKING:
    from pagefactory.factory.descriptors import TypeRegistry

log = structlog.get_logger(__name__)

CONSTRUCTOR_MARKER = "__page_constructor__"

F = TypeVar("F", bound=Callable[..., Any])

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def constructor(func: F) -> classmethod:
    """Declare an alternate constructor for a page type.

    Example:
        ```python
        class SearchPage(Page):
            @constructor
            def for_query(cls, driver: Driver, query: str) -> "SearchPage":
                page = cls(driver)
                page.query = query
                return page
        ```
    """
    setattr(func, CONSTRUCTOR_MARKER, True)
    return classmethod(func)


def is_assignable(parameter_type: Any, argument_type: type) -> bool:
    """Whether a value of ``argument_type`` may be passed to ``parameter_type``."""
    if parameter_type is Any or parameter_type is object:
        return True

    origin = get_origin(parameter_type)
    if origin is Union or origin is types.UnionType:
        return any(is_assignable(member, argument_type) for member in get_args(parameter_type))
    if origin is not None:
        # Generic aliases (list[str]) are checked against their origin only
        parameter_type = origin

    if isinstance(parameter_type, TypeVar):
        bound = parameter_type.__bound__
        return bound is None or is_assignable(bound, argument_type)
    if not isinstance(parameter_type, type):
        return False

    try:
        return issubclass(argument_type, parameter_type)
    except TypeError:
        # Protocols with data members refuse issubclass()
        return False


@dataclass(frozen=True)
class ConstructorDescriptor:
    """One way of building an instance of ``owner``."""

    owner: type
    name: str
    parameter_types: tuple[Any, ...]
    required: int

    def accepts(self, argument_types: Sequence[type]) -> bool:
        if not self.required <= len(argument_types) <= len(self.parameter_types):
            return False
        return all(
            is_assignable(parameter, argument)
            for parameter, argument in zip(self.parameter_types, argument_types)
        )

    def invoke(self, target_cls: type, arguments: Sequence[Any]) -> Any:
        """Build an instance, optionally through a subclass of ``owner``.

        Raises:
            ConstructionError: The constructor raised, or returned something
                that is not an ``owner`` instance.
        """
        factory = target_cls if self.name == "__init__" else getattr(target_cls, self.name)
        try:
            instance = factory(*arguments)
        except Exception as e:
            raise ConstructionError(
                self.owner, f"{self.name} raised {type(e).__name__}: {e}"
            ) from e

        if not isinstance(instance, self.owner):
            raise ConstructionError(
                self.owner, f"{self.name} returned {type(instance).__name__}"
            )
        return instance


def _describe(owner: type, name: str, func: Callable[..., Any]) -> ConstructorDescriptor | None:
    """Describe a function whose first parameter is self/cls.

    Returns None when the function has a required keyword-only parameter and
    so can never be called positionally.
    """
    try:
        hints = typing.get_type_hints(func)
    except (NameError, TypeError):
        # Unresolvable forward references accept any argument
        hints = {}

    parameters = list(inspect.signature(func).parameters.values())[1:]
    parameter_types: list[Any] = []
    required = 0
    for parameter in parameters:
        if parameter.kind in _POSITIONAL:
            parameter_types.append(hints.get(parameter.name, Any))
            if parameter.default is inspect.Parameter.empty:
                required += 1
        elif (
            parameter.kind is inspect.Parameter.KEYWORD_ONLY
            and parameter.default is inspect.Parameter.empty
        ):
            return None

    return ConstructorDescriptor(
        owner=owner, name=name, parameter_types=tuple(parameter_types), required=required
    )


def init_descriptor(cls: type) -> ConstructorDescriptor | None:
    init = cls.__init__
    if init is object.__init__:
        return ConstructorDescriptor(owner=cls, name="__init__", parameter_types=(), required=0)
    return _describe(cls, "__init__", init)


def declared_constructors(cls: type) -> tuple[ConstructorDescriptor, ...]:
    """Constructors of ``cls`` in declaration order."""
    found: list[ConstructorDescriptor | None] = []
    own = vars(cls)
    if "__init__" not in own:
        found.append(init_descriptor(cls))

    for name, attribute in own.items():
        if name == "__init__":
            found.append(init_descriptor(cls))
        elif isinstance(attribute, classmethod) and getattr(
            attribute.__func__, CONSTRUCTOR_MARKER, False
        ):
            found.append(_describe(cls, name, attribute.__func__))

    return tuple(descriptor for descriptor in found if descriptor is not None)


class ConstructorMatcher:
    """Selects the first declared constructor accepting given argument types."""

    def __init__(self, registry: "TypeRegistry") -> None:
        self.registry = registry

    def match(self, target: type, argument_types: Sequence[type]) -> ConstructorDescriptor:
        """Find the constructor of ``target`` to call.

        Raises:
            NoMatchingConstructorError: No declared constructor accepts the types.
        """
        argument_types = tuple(argument_types)
        for descriptor in self.registry.page(target).constructors:
            if descriptor.accepts(argument_types):
                log.debug(
                    "constructor_matched",
                    target=target.__qualname__,
                    constructor=descriptor.name,
                )
                return descriptor

        raise NoMatchingConstructorError(target, argument_types)
