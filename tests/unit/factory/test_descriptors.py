"""Tests for TypeRegistry and the descriptors it caches."""

from typing import Annotated
from unittest.mock import patch

import pytest

from pagefactory.controls import Button
from pagefactory.core.exceptions import LocatorDefinitionError
from pagefactory.factory import descriptors
from pagefactory.factory.descriptors import TypeRegistry
from pagefactory.locators import FindBy, FindBys
from tests.support.helpers.fake_driver import FakeElement
from tests.support.page_objects import (
    DerivedPage,
    ElementTypedControl,
    KeywordOnlyControl,
    LazySearchBox,
    LoginPage,
    NoArgControl,
    PlainPage,
    PricedPage,
    RetryControl,
    TextControl,
    UnresolvableControlPage,
)


@pytest.fixture
def registry() -> TypeRegistry:
    return TypeRegistry()


class TestPageDescriptors:
    """Tests for TypeRegistry.page()."""

    def test_fields_in_declaration_order(self, registry: TypeRegistry) -> None:
        fields = registry.page(LoginPage).fields

        assert [f.name for f in fields] == [
            "username_box",
            "password_box",
            "submit",
            "banner",
            "notes",
        ]
        assert [f.declared_type for f in fields] == [TextControl, TextControl, Button, FakeElement, str]

    def test_unmarked_annotations_are_not_fields(self, registry: TypeRegistry) -> None:
        assert registry.page(PlainPage).fields == ()

    def test_derived_fields_come_first_and_shadow_base(self, registry: TypeRegistry) -> None:
        """
        Given: DerivedPage redeclaring `shared` from BasePage
        When: Describing DerivedPage
        Then: `shared` appears once, with the derived locator
        """
        fields = registry.page(DerivedPage).fields

        assert [f.name for f in fields] == ["footer", "shared", "header"]
        shared = fields[1]
        assert shared.owner is DerivedPage
        assert str(shared.locator) == "css=.derived-shared"

    def test_descriptor_is_built_once(self, registry: TypeRegistry) -> None:
        with patch.object(
            descriptors, "_page_descriptor", wraps=descriptors._page_descriptor
        ) as build:
            first = registry.page(LoginPage)
            second = registry.page(LoginPage)

        assert first is second
        build.assert_called_once_with(LoginPage)

    def test_conflicting_markers_fail_at_registration(self, registry: TypeRegistry) -> None:
        class Conflicted:
            box: Annotated[TextControl, FindBy(id="a"), FindBys(FindBy(id="b"))]

        with pytest.raises(LocatorDefinitionError):
            registry.page(Conflicted)

    def test_postponed_annotations_without_marker_are_not_evaluated(
        self, registry: TypeRegistry
    ) -> None:
        """
        Given: A page using postponed annotations, with `price` typed by a name
            imported only for type checking
        When: Describing the page
        Then: Only the marked `box` field is described and no NameError escapes
        """
        (field,) = registry.page(PricedPage).fields

        assert field.name == "box"
        assert field.declared_type is TextControl
        assert str(field.locator) == "id=box"

    def test_unresolvable_marked_annotation_raises_locator_error(
        self, registry: TypeRegistry
    ) -> None:
        with pytest.raises(
            LocatorDefinitionError, match="UnresolvableControlPage.retry"
        ) as exc_info:
            registry.page(UnresolvableControlPage)

        assert isinstance(exc_info.value.__cause__, NameError)


class TestControlDescriptors:
    """Tests for TypeRegistry.control()."""

    def test_lazy_flag_is_inherited(self, registry: TypeRegistry) -> None:
        assert registry.control(LazySearchBox).lazy is True
        assert registry.control(TextControl).lazy is False

    def test_construction_forms(self, registry: TypeRegistry) -> None:
        text = registry.control(TextControl)
        no_arg = registry.control(NoArgControl)
        keyword_only = registry.control(KeywordOnlyControl)

        assert (text.takes_element, text.takes_nothing) == (True, True)
        assert (no_arg.takes_element, no_arg.takes_nothing) == (False, True)
        assert (keyword_only.takes_element, keyword_only.takes_nothing) == (False, False)

    def test_element_form_checks_parameter_type(self, registry: TypeRegistry) -> None:
        """
        Given: Controls whose one-argument __init__ takes an int, an unannotated
            value, or the fake element type
        When: Asking whether each accepts a FakeElement
        Then: Only the unannotated and element-typed forms do
        """
        assert registry.control(RetryControl).accepts_element(FakeElement) is False
        assert registry.control(TextControl).accepts_element(FakeElement) is True
        assert registry.control(ElementTypedControl).accepts_element(FakeElement) is True
        assert registry.control(ElementTypedControl).accepts_element(str) is False

    def test_ui_element_parameter_accepts_any_element(self, registry: TypeRegistry) -> None:
        assert registry.control(Button).accepts_element(FakeElement) is True


class TestRegister:
    """Tests for eager registration."""

    def test_register_as_class_decorator(self, registry: TypeRegistry) -> None:
        with patch.object(
            descriptors, "_page_descriptor", wraps=descriptors._page_descriptor
        ) as build:

            @registry.register
            class SearchPage:
                query: Annotated[TextControl, FindBy(css="input[type=search]")]

            registry.page(SearchPage)

        build.assert_called_once_with(SearchPage)

    def test_register_control(self, registry: TypeRegistry) -> None:
        assert registry.register(TextControl) is TextControl
        assert registry.control(TextControl).control_type is TextControl

    def test_clear_forgets_descriptors(self, registry: TypeRegistry) -> None:
        first = registry.page(LoginPage)
        registry.clear()
        assert registry.page(LoginPage) is not first
