"""Interceptor chain applied to pages and controls built by the factory.

An interceptor is any callable taking an `Invocation`. Interceptors run in
registration order around every method call on an intercepted object. Each
one decides whether to continue by calling ``invocation.proceed()``; one
that returns without proceeding short-circuits the call and its return value
becomes the result.

Example:
    ```python
    def audit(invocation: Invocation) -> Any:
        print("calling", invocation.method_name)
        return invocation.proceed()

    add_interceptor(audit)
    page = create_page(LoginPage, driver)
    page.log_in("alice", "secret")  # prints "calling log_in"
    ```
"""

import functools
import inspect
import time
import types
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field, replace
from typing import Any

import structlog

log = structlog.get_logger(__name__)

INTERCEPTED_MARKER = "__intercepted__"

Interceptor = Callable[["Invocation"], Any]


@dataclass
class Invocation:
    """One method call travelling through the chain.

    ``args`` and ``kwargs`` may be replaced by an interceptor before it
    proceeds; later interceptors and the method see the new values.
    """

    target: Any
    method_name: str
    args: tuple[Any, ...]
    kwargs: dict[str, Any]
    method: Callable[..., Any] = field(repr=False)
    remaining: tuple[Interceptor, ...] = field(default=(), repr=False)

    def proceed(self) -> Any:
        if self.remaining:
            interceptor, *rest = self.remaining
            return interceptor(replace(self, remaining=tuple(rest)))
        return self.method(self.target, *self.args, **self.kwargs)


class InterceptorChain:
    """Ordered collection of interceptors.

    Mutating a chain while other threads build or use intercepted objects is
    not synchronised; callers own that.
    """

    def __init__(self, interceptors: tuple[Interceptor, ...] = ()) -> None:
        self._interceptors: list[Interceptor] = list(interceptors)
        self._classes: dict[type, type] = {}

    def size(self) -> int:
        return len(self._interceptors)

    def __len__(self) -> int:
        return len(self._interceptors)

    def __iter__(self) -> Iterator[Interceptor]:
        return iter(tuple(self._interceptors))

    def __contains__(self, interceptor: object) -> bool:
        return interceptor in self._interceptors

    def add(self, interceptor: Interceptor) -> bool:
        self._interceptors.append(interceptor)
        log.debug("interceptor_added", interceptor=repr(interceptor), size=self.size())
        return True

    def remove(self, interceptor: Interceptor) -> bool:
        try:
            self._interceptors.remove(interceptor)
        except ValueError:
            return False
        log.debug("interceptor_removed", interceptor=repr(interceptor), size=self.size())
        return True

    def clear(self) -> None:
        self._interceptors.clear()

    def invoke(
        self,
        target: Any,
        method_name: str,
        method: Callable[..., Any],
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Any:
        """Run ``method`` on ``target`` through the current interceptors."""
        invocation = Invocation(
            target=target,
            method_name=method_name,
            args=args,
            kwargs=kwargs,
            method=method,
            remaining=tuple(self._interceptors),
        )
        return invocation.proceed()

    def intercepted_class(self, cls: type) -> type:
        """Subclass of ``cls`` whose methods run through this chain.

        Plain functions and property accessors found on ``cls`` and its
        ancestors are overridden, dunders excepted. Methods called from inside
        the constructor are intercepted too. Generated classes are cached per
        chain.
        """
        intercepted = self._classes.get(cls)
        if intercepted is not None:
            return intercepted

        namespace: dict[str, Any] = {"__module__": cls.__module__, INTERCEPTED_MARKER: True}
        for name in dir(cls):
            if name.startswith("__"):
                continue
            attribute = inspect.getattr_static(cls, name)
            if inspect.isfunction(attribute):
                namespace[name] = _intercepting_method(self, name, attribute)
            elif isinstance(attribute, property):
                namespace[name] = _intercepting_property(self, name, attribute)

        intercepted = types.new_class(
            f"Intercepted{cls.__name__}",
            (cls,),
            exec_body=lambda ns: ns.update(namespace),
        )
        self._classes[cls] = intercepted
        return intercepted


def _intercepting_method(
    chain: InterceptorChain, name: str, func: Callable[..., Any]
) -> Callable[..., Any]:
    @functools.wraps(func)
    def method(self: Any, *args: Any, **kwargs: Any) -> Any:
        return chain.invoke(self, name, func, args, kwargs)

    return method


def _intercepting_property(chain: InterceptorChain, name: str, prop: property) -> property:
    """Rebuild ``prop`` so its getter, setter and deleter run through ``chain``."""
    accessors = [
        None if accessor is None else _intercepting_method(chain, name, accessor)
        for accessor in (prop.fget, prop.fset, prop.fdel)
    ]
    return property(*accessors, doc=prop.__doc__)


def is_intercepted(value: Any) -> bool:
    """Whether ``value`` was allocated through an interceptor chain."""
    return bool(vars(type(value)).get(INTERCEPTED_MARKER, False))


class LoggingInterceptor:
    """Logs every intercepted call with its duration.

    Failures are logged and re-raised unchanged.
    """

    def __init__(self, logger: Any = None) -> None:
        self.log = logger or log

    def __call__(self, invocation: Invocation) -> Any:
        target = type(invocation.target).__qualname__
        start = time.perf_counter()
        try:
            result = invocation.proceed()
        except Exception as e:
            self.log.warning(
                "method_failed",
                target=target,
                method=invocation.method_name,
                error=str(e),
                duration_ms=round((time.perf_counter() - start) * 1000, 3),
            )
            raise

        self.log.info(
            "method_called",
            target=target,
            method=invocation.method_name,
            duration_ms=round((time.perf_counter() - start) * 1000, 3),
        )
        return result
