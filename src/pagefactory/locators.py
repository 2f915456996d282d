"""Locator markers and the locator value they build.

Page fields opt into binding by carrying a marker in their annotation:

    class LoginPage(Page):
        username: Annotated[TextBox, FindBy(id="username")]
        submit: Annotated[Button, FindBys(FindBy(css="form"), FindBy(text="Log in"))]

`build_locator()` turns the markers of one field into a `Locator`, an
immutable value that drivers render into their own selector syntax.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from pagefactory.core.exceptions import LocatorDefinitionError


class How(str, Enum):
    """Strategy used by one locator step."""

    CSS = "css"
    XPATH = "xpath"
    ID = "id"
    NAME = "name"
    CLASS_NAME = "class_name"
    TEXT = "text"
    TEST_ID = "test_id"


class LocatorStep(BaseModel):
    """One strategy/value pair."""

    model_config = ConfigDict(frozen=True)

    how: How
    using: str


class Locator(BaseModel):
    """Immutable expression identifying at most one element.

    Steps are applied in order, each one searching inside the previous match.
    """

    model_config = ConfigDict(frozen=True)

    steps: tuple[LocatorStep, ...]

    @model_validator(mode="after")
    def _require_steps(self) -> "Locator":
        if not self.steps:
            raise ValueError("a locator needs at least one step")
        return self

    def __str__(self) -> str:
        return " >> ".join(f"{step.how.value}={step.using}" for step in self.steps)


class FindBy(BaseModel):
    """Marks a field as bindable and describes a single locator step.

    Either exactly one keyword strategy (``css=``, ``xpath=``, ``id=`` ...) or
    the ``how``/``using`` pair must be given.
    """

    model_config = ConfigDict(frozen=True)

    how: How | None = None
    using: str | None = None
    css: str | None = None
    xpath: str | None = None
    id: str | None = None
    name: str | None = None
    class_name: str | None = None
    text: str | None = None
    test_id: str | None = None

    @model_validator(mode="after")
    def _exactly_one_strategy(self) -> "FindBy":
        given = [how for how in How if getattr(self, how.value) is not None]
        if self.how is not None or self.using is not None:
            if self.how is None or self.using is None:
                raise ValueError("how and using must be given together")
            given.append(self.how)
        if len(given) != 1:
            raise ValueError(f"exactly one locator strategy is required, got {len(given)}")
        return self

    def to_step(self) -> LocatorStep:
        if self.how is not None and self.using is not None:
            return LocatorStep(how=self.how, using=self.using)
        for how in How:
            value = getattr(self, how.value)
            if value is not None:
                return LocatorStep(how=how, using=value)
        raise AssertionError("validated FindBy without a strategy")  # pragma: no cover


class FindBys(BaseModel):
    """Marks a field as bindable with a chain of `FindBy` steps."""

    model_config = ConfigDict(frozen=True)

    chain: tuple[FindBy, ...]

    def __init__(self, *chain: FindBy, **data: Any) -> None:
        if chain:
            data["chain"] = chain
        super().__init__(**data)

    @model_validator(mode="after")
    def _require_chain(self) -> "FindBys":
        if not self.chain:
            raise ValueError("FindBys needs at least one FindBy")
        return self


LOCATOR_MARKERS: tuple[type, ...] = (FindBy, FindBys)


def locator_markers(metadata: tuple[Any, ...]) -> list[FindBy | FindBys]:
    """Pick the recognized locator markers out of ``Annotated`` metadata."""
    return [item for item in metadata if isinstance(item, LOCATOR_MARKERS)]


def build_locator(markers: list[FindBy | FindBys]) -> Locator:
    """Build the locator described by the markers of a single field.

    Raises:
        LocatorDefinitionError: No marker, a repeated marker, or FindBy and
            FindBys used together.
    """
    find_bys = [m for m in markers if isinstance(m, FindBys)]
    find_by = [m for m in markers if isinstance(m, FindBy)]

    if find_bys and find_by:
        raise LocatorDefinitionError("use either FindBy or FindBys on a field, not both")
    if len(find_bys) > 1 or len(find_by) > 1:
        raise LocatorDefinitionError("a field takes a single locator marker")

    if find_bys:
        return Locator(steps=tuple(item.to_step() for item in find_bys[0].chain))
    if find_by:
        return Locator(steps=(find_by[0].to_step(),))
    raise LocatorDefinitionError("no locator marker on field")
