"""Deferred-resolution proxies for lazy-loaded controls.

A proxy is an instance of a generated subclass of the declared control type,
so ``isinstance`` checks hold before anything is looked up. The first
attribute access, assignment or forwarded operator resolves the control
through a `LazyCell`; every later use goes to that same instance.
"""

import threading
import types
from collections.abc import Callable
from typing import Any

from pagefactory.locators import Locator

_UNSET: Any = object()

# Served by the proxy itself; everything else goes to the resolved control
_OWN_ATTRIBUTES = frozenset({"__class__", "__repr__", "_lazy_cell", "_lazy_locator"})

_FORWARDED_DUNDERS = (
    "__str__",
    "__eq__",
    "__ne__",
    "__hash__",
    "__lt__",
    "__le__",
    "__gt__",
    "__ge__",
    "__bool__",
    "__len__",
    "__iter__",
    "__contains__",
    "__getitem__",
    "__setitem__",
    "__delitem__",
    "__call__",
    "__enter__",
    "__exit__",
)

_proxy_classes: dict[type, type] = {}


class LazyCell:
    """A value computed by ``loader`` at most once.

    Concurrent first calls to `get` are serialised so the loader runs once.
    A loader that raises leaves the cell empty: the error reaches the caller
    and the next `get` runs the loader again.
    """

    def __init__(self, loader: Callable[[], Any]) -> None:
        self._loader = loader
        self._lock = threading.Lock()
        self._value: Any = _UNSET

    @property
    def resolved(self) -> bool:
        return self._value is not _UNSET

    def get(self) -> Any:
        value = self._value
        if value is not _UNSET:
            return value

        with self._lock:
            if self._value is _UNSET:
                self._value = self._loader()
            return self._value


def _target(proxy: Any) -> Any:
    return object.__getattribute__(proxy, "_lazy_cell").get()


class LazyControlProxy:
    """Mixin placed in front of the control type in generated proxy classes."""

    __slots__ = ()

    def __getattribute__(self, name: str) -> Any:
        if name in _OWN_ATTRIBUTES:
            return object.__getattribute__(self, name)
        return getattr(_target(self), name)

    def __setattr__(self, name: str, value: Any) -> None:
        setattr(_target(self), name, value)

    def __delattr__(self, name: str) -> None:
        delattr(_target(self), name)

    def __repr__(self) -> str:
        cell: LazyCell = object.__getattribute__(self, "_lazy_cell")
        if cell.resolved:
            return repr(cell.get())
        locator = object.__getattribute__(self, "_lazy_locator")
        return f"<{type(self).__name__} unresolved {locator}>"


def _forwarder(name: str) -> Callable[..., Any]:
    def forward(self: Any, *args: Any, **kwargs: Any) -> Any:
        return getattr(_target(self), name)(*args, **kwargs)

    forward.__name__ = name
    return forward


def lazy_proxy_class(control_type: type) -> type:
    """Return the generated proxy subclass for ``control_type``."""
    proxy_cls = _proxy_classes.get(control_type)
    if proxy_cls is not None:
        return proxy_cls

    # Slots keep the proxy state off the instance dict, which slotted types lack
    namespace: dict[str, Any] = {
        "__module__": control_type.__module__,
        "__slots__": ("_lazy_cell", "_lazy_locator"),
    }
    for name in _FORWARDED_DUNDERS:
        if getattr(control_type, name, None) is not None:
            namespace[name] = _forwarder(name)

    proxy_cls = types.new_class(
        f"Lazy{control_type.__name__}",
        (LazyControlProxy, control_type),
        exec_body=lambda ns: ns.update(namespace),
    )
    _proxy_classes[control_type] = proxy_cls
    return proxy_cls


def make_lazy_proxy(control_type: type, loader: Callable[[], Any], locator: Locator) -> Any:
    """Create an unresolved proxy whose control is built by ``loader``."""
    proxy = object.__new__(lazy_proxy_class(control_type))
    object.__setattr__(proxy, "_lazy_cell", LazyCell(loader))
    object.__setattr__(proxy, "_lazy_locator", locator)
    return proxy


def is_lazy_proxy(value: Any) -> bool:
    return isinstance(value, LazyControlProxy)


def is_resolved(proxy: Any) -> bool:
    """Whether a lazy proxy has already built its control."""
    cell: LazyCell = object.__getattribute__(proxy, "_lazy_cell")
    return cell.resolved


def resolve(proxy: Any) -> Any:
    """Force resolution and return the control behind ``proxy``."""
    return _target(proxy)
