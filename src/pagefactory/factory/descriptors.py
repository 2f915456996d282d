"""Per-type descriptors built once and looked up afterwards.

Introspection of a page or control type (its constructors, its bindable
fields, whether it is lazy-loaded) happens the first time the type is seen,
or up front through `TypeRegistry.register`. Binding a page then only reads
the cached descriptors.
"""

import inspect
import sys
import types
from dataclasses import dataclass
from typing import Annotated, Any, TypeVar, Union, get_args, get_origin

import structlog

from pagefactory.controls import Control, is_lazy_load
from pagefactory.core.exceptions import ConstructionError, LocatorDefinitionError
from pagefactory.drivers.base import UIElement
from pagefactory.factory.constructors import (
    ConstructorDescriptor,
    declared_constructors,
    init_descriptor,
    is_assignable,
)
from pagefactory.locators import LOCATOR_MARKERS, Locator, build_locator, locator_markers

if sys.version_info >= (3, 14):
    import annotationlib

log = structlog.get_logger(__name__)

T = TypeVar("T", bound=type)


@dataclass(frozen=True)
class FieldDescriptor:
    """A page attribute carrying a locator marker."""

    name: str
    owner: type
    declared_type: Any
    locator: Locator


@dataclass(frozen=True)
class PageDescriptor:
    """Constructors and bindable fields of a page type and its ancestors."""

    page_type: type
    constructors: tuple[ConstructorDescriptor, ...]
    fields: tuple[FieldDescriptor, ...]


@dataclass(frozen=True)
class ControlDescriptor:
    """How to build a control type and whether it is lazy-loaded."""

    control_type: type
    lazy: bool
    takes_element: bool
    takes_nothing: bool
    element_parameter: Any = Any

    def accepts_element(self, element_type: type) -> bool:
        """Whether the one-argument form takes an element of ``element_type``."""
        return self.takes_element and _is_element_parameter(self.element_parameter, element_type)

    def instantiate(self, element: Any, target_cls: type | None = None) -> Any:
        """Build the control, preferring the element-argument form.

        The element form is used only when its parameter accepts the element;
        otherwise the no-argument form is the fallback.

        Args:
            element: Resolved element handed to the constructor.
            target_cls: Subclass to instantiate instead of the control type,
                used when the interceptor chain is active.

        Raises:
            ConstructionError: No usable constructor, or the constructor raised.
        """
        target = target_cls or self.control_type
        with_element = self.accepts_element(type(element))
        if not (with_element or self.takes_nothing):
            raise ConstructionError(
                self.control_type, "needs an __init__ taking one element or no arguments"
            )
        try:
            if with_element:
                return target(element)
            return target()
        except Exception as e:
            raise ConstructionError(
                self.control_type, f"__init__ raised {type(e).__name__}: {e}"
            ) from e


def _is_element_parameter(parameter: Any, element_type: type) -> bool:
    # UIElement is the driver contract, so every looked-up element satisfies it
    if parameter is UIElement:
        return True
    origin = get_origin(parameter)
    if origin is Union or origin is types.UnionType:
        return any(
            _is_element_parameter(member, element_type)
            for member in get_args(parameter)
            if member is not type(None)
        )
    return is_assignable(parameter, element_type)


def _unwrap_optional(declared: Any) -> Any:
    origin = get_origin(declared)
    if origin is Union or origin is types.UnionType:
        members = [m for m in get_args(declared) if m is not type(None)]
        if len(members) == 1:
            return members[0]
    return declared


def _raw_annotations(klass: type) -> dict[str, Any]:
    """Annotations of ``klass`` itself; string annotations stay unevaluated."""
    if sys.version_info >= (3, 14):
        return annotationlib.get_annotations(klass, format=annotationlib.Format.FORWARDREF)
    return inspect.get_annotations(klass)


def _mentions_marker(expression: str) -> bool:
    return any(marker.__name__ in expression for marker in LOCATOR_MARKERS)


def _resolve_annotation(klass: type, name: str, annotation: Any) -> Any | None:
    """Evaluate a deferred annotation, if it can carry a locator marker.

    Annotations without a marker are never evaluated, so names imported only
    for type checking do not break binding. Returns None for those.

    Raises:
        LocatorDefinitionError: A marked annotation cannot be evaluated.
    """
    if isinstance(annotation, str):
        expression = annotation
    else:
        expression = getattr(annotation, "__forward_arg__", None)
        if expression is None:
            return annotation
    if not _mentions_marker(expression):
        return None

    module = sys.modules.get(klass.__module__)
    try:
        return eval(expression, getattr(module, "__dict__", {}), dict(vars(klass)))
    except Exception as e:
        raise LocatorDefinitionError(
            f"{klass.__qualname__}.{name}: cannot evaluate annotation {expression!r}: {e}"
        ) from e


def _declared_fields(klass: type) -> list[FieldDescriptor]:
    """Locator-marked annotations declared on ``klass`` itself."""
    fields = []
    for name, raw in _raw_annotations(klass).items():
        hint = _resolve_annotation(klass, name, raw)
        if get_origin(hint) is not Annotated:
            continue
        markers = locator_markers(hint.__metadata__)
        if not markers:
            continue
        fields.append(
            FieldDescriptor(
                name=name,
                owner=klass,
                declared_type=_unwrap_optional(get_args(hint)[0]),
                locator=build_locator(markers),
            )
        )
    return fields


def _page_descriptor(cls: type) -> PageDescriptor:
    fields: list[FieldDescriptor] = []
    seen: set[str] = set()
    for klass in cls.__mro__:
        if klass is object:
            break
        for field in _declared_fields(klass):
            # A redeclared name is bound once, from the most derived class
            if field.name not in seen:
                seen.add(field.name)
                fields.append(field)

    return PageDescriptor(
        page_type=cls,
        constructors=declared_constructors(cls),
        fields=tuple(fields),
    )


def _control_descriptor(cls: type) -> ControlDescriptor:
    init = init_descriptor(cls)
    takes_element = init is not None and init.required <= 1 <= len(init.parameter_types)
    takes_nothing = init is not None and init.required == 0
    return ControlDescriptor(
        control_type=cls,
        lazy=is_lazy_load(cls),
        takes_element=takes_element,
        takes_nothing=takes_nothing,
        element_parameter=init.parameter_types[0] if takes_element else Any,
    )


class TypeRegistry:
    """Cache of page and control descriptors.

    Not synchronised: concurrent first registration of the same type may
    build its descriptor twice, with identical results.
    """

    def __init__(self) -> None:
        self._pages: dict[type, PageDescriptor] = {}
        self._controls: dict[type, ControlDescriptor] = {}

    def page(self, cls: type) -> PageDescriptor:
        descriptor = self._pages.get(cls)
        if descriptor is None:
            descriptor = self._pages[cls] = _page_descriptor(cls)
            log.debug(
                "page_type_registered",
                page_type=cls.__qualname__,
                constructors=len(descriptor.constructors),
                fields=[field.name for field in descriptor.fields],
            )
        return descriptor

    def control(self, cls: type) -> ControlDescriptor:
        descriptor = self._controls.get(cls)
        if descriptor is None:
            descriptor = self._controls[cls] = _control_descriptor(cls)
            log.debug("control_type_registered", control_type=cls.__qualname__, lazy=descriptor.lazy)
        return descriptor

    def register(self, cls: T) -> T:
        """Build descriptors for ``cls`` now. Usable as a class decorator."""
        if issubclass(cls, Control):
            self.control(cls)
        else:
            self.page(cls)
        return cls

    def clear(self) -> None:
        self._pages.clear()
        self._controls.clear()
