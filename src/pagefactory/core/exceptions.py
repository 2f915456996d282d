"""pagefactory exception hierarchy.

This module defines the base exception class and the specialized exceptions
raised while building page objects and binding their fields.

Errors raised by a driver while looking up an element are not wrapped here:
they reach the caller unchanged, either during page creation (eager fields)
or on first use of a lazy control.
"""


class PageFactoryError(Exception):
    """Base exception for all pagefactory errors.

    Every failure is fatal for the page being built: there is no partial
    success and no retry.
    """

    pass


class NoMatchingConstructorError(PageFactoryError):
    """Raised when no declared constructor accepts the supplied argument types.

    Attributes:
        target: The type whose constructors were searched.
        argument_types: The argument types that failed to match.

    Example:
        raise NoMatchingConstructorError(SearchPage, (FakeDriver,))
    """

    def __init__(self, target: type, argument_types: tuple[type, ...]) -> None:
        self.target = target
        self.argument_types = argument_types
        names = ", ".join(getattr(t, "__name__", repr(t)) for t in argument_types)
        super().__init__(f"{target.__qualname__}: no constructor accepts ({names})")


class ArgumentInferenceError(PageFactoryError, ValueError):
    """Raised when an argument type must be inferred from a value that is None.

    Raised before anything is allocated.

    Example:
        raise ArgumentInferenceError(1)
    """

    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(f"The argument at position {index} is None; its type cannot be inferred")


class ConstructionError(PageFactoryError):
    """Raised when a page or control constructor fails or cannot be called.

    The original exception, if any, is chained as ``__cause__``.

    Attributes:
        target: The type that could not be constructed.
    """

    def __init__(self, target: type, message: str) -> None:
        self.target = target
        super().__init__(f"{target.__qualname__}: {message}")


class FieldAccessError(PageFactoryError):
    """Raised when a bound value cannot be assigned onto a page field.

    Attributes:
        field_name: Name of the attribute that refused the assignment.
    """

    def __init__(self, owner: type, field_name: str) -> None:
        self.owner = owner
        self.field_name = field_name
        super().__init__(f"{owner.__qualname__}.{field_name}: field cannot be assigned")


class LocatorDefinitionError(PageFactoryError, ValueError):
    """Raised when locator markers on a field are inconsistent.

    Example:
        raise LocatorDefinitionError("use either FindBy or FindBys, not both")
    """

    pass
