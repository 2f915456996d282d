"""Binds one locator-marked page field to an element or a control."""

from typing import Any, get_origin

import structlog

from pagefactory.controls import Control
from pagefactory.drivers.base import Driver, element_types_of
from pagefactory.factory.descriptors import ControlDescriptor, FieldDescriptor, TypeRegistry
from pagefactory.factory.interceptors import InterceptorChain
from pagefactory.factory.lazy import make_lazy_proxy
from pagefactory.locators import Locator

log = structlog.get_logger(__name__)


class LazyBinder:
    """Produces the value a page field is bound to.

    Decision per field:
        - declared as a raw element type: looked up now, bound as is
        - not a `Control` type: None, the field is left alone
        - a lazy-loaded `Control` type: a proxy, looked up on first use
        - any other `Control` type: looked up and constructed now

    Lookup errors from the driver are not caught here.
    """

    def __init__(
        self,
        driver: Driver,
        registry: TypeRegistry,
        interceptors: InterceptorChain | None = None,
    ) -> None:
        self.driver = driver
        self.registry = registry
        self.interceptors = interceptors
        self._element_types = element_types_of(driver)

    def decorate(self, field: FieldDescriptor) -> Any | None:
        declared = field.declared_type

        if declared in self._element_types:
            element = self.driver.find_element(field.locator)
            log.debug("element_bound", field=field.name, locator=str(field.locator))
            return element

        # Parameterized generics (list[Control]) are not controls
        if get_origin(declared) is not None or not (
            isinstance(declared, type) and issubclass(declared, Control)
        ):
            return None

        descriptor = self.registry.control(declared)
        if descriptor.lazy:
            log.debug("lazy_control_bound", field=field.name, control=declared.__qualname__)
            return make_lazy_proxy(
                declared,
                lambda: self._load(field.name, descriptor, field.locator, lazy=True),
                field.locator,
            )

        return self._load(field.name, descriptor, field.locator, lazy=False)

    def _load(
        self, name: str, descriptor: ControlDescriptor, locator: Locator, *, lazy: bool
    ) -> Any:
        element = self.driver.find_element(locator)
        control = descriptor.instantiate(element, self._allocation_class(descriptor.control_type))
        log.debug(
            "lazy_control_resolved" if lazy else "control_bound",
            field=name,
            control=descriptor.control_type.__qualname__,
            locator=str(locator),
        )
        return control

    def _allocation_class(self, control_type: type) -> type | None:
        # Read at construction time so a lazy control follows the chain's current state
        if self.interceptors is not None and self.interceptors.size() > 0:
            return self.interceptors.intercepted_class(control_type)
        return None
