"""Tests for input value rendering and type derivation."""

import enum
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

import pytest
from pydantic import BaseModel, ConfigDict, Field

from gql_querybuilder.core.errors import RenderError, UnrepresentableTypeError
from gql_querybuilder.core.input_types import EnumType
from gql_querybuilder.core.input_values import (
    InputObjectValue,
    InputValue,
    NonNull,
    NonNullInputValue,
    input_type_of,
    render_value,
)
from gql_querybuilder.core.operation import VariableDefinition
from gql_querybuilder.core.scalars import ScalarRegistry


class Episode(enum.Enum):
    NEW_HOPE = "newhope"
    JEDI = "jedi"


class UserInput(InputObjectValue):
    @property
    def fields(self):
        return {"id": 1234, "name": "cool_user"}


@dataclass
class ReviewInput(InputObjectValue):
    stars: int
    commentary: str | None = None


@dataclass
class RenamedInput(InputObjectValue):
    type_name = "CreateReviewInput"

    stars: int


class CreateUser(BaseModel):
    user_name: str = Field(alias="userName")
    age: int | None = None


class TitledUser(BaseModel):
    model_config = ConfigDict(title="UserCreateInput")

    name: str


class TestPrimitives:
    """Tests for built-in scalar values."""

    def test_string(self):
        assert render_value("derp") == '"derp"'
        assert input_type_of(str).render() == "String"

    def test_string_escaping(self):
        assert render_value('say "hi"\n') == '"say \\"hi\\"\\n"'
        assert render_value("back\\slash") == '"back\\\\slash"'

    def test_bool(self):
        assert input_type_of(bool).render() == "Boolean"
        assert render_value(True) == "true"
        assert render_value(False) == "false"

    def test_int(self):
        assert input_type_of(int).render() == "Int"
        assert render_value(42) == "42"
        assert render_value(-7) == "-7"

    def test_float(self):
        assert input_type_of(float).render() == "Float"
        assert render_value(1.5) == "1.5"

    def test_non_finite_float_fails(self):
        with pytest.raises(RenderError):
            render_value(float("nan"))
        with pytest.raises(RenderError):
            render_value(float("inf"))

    def test_none_renders_null(self):
        assert render_value(None) == "null"

    def test_none_has_no_type(self):
        with pytest.raises(UnrepresentableTypeError):
            input_type_of(type(None))

    def test_unknown_object(self):
        with pytest.raises(RenderError):
            render_value(object())
        with pytest.raises(UnrepresentableTypeError):
            input_type_of(object)


class TestSequences:
    """Tests for list values and list types."""

    def test_array_input_value(self):
        assert input_type_of(list[str]).render() == "[String]"
        assert render_value([1, "derp"]) == '[1, "derp"]'

    def test_empty_array(self):
        assert render_value([]) == "[]"

    def test_tuple(self):
        assert render_value((1, 2)) == "[1, 2]"
        assert input_type_of(tuple[int, ...]).render() == "[Int]"

    def test_fixed_tuple_has_no_type(self):
        with pytest.raises(UnrepresentableTypeError):
            input_type_of(tuple[int, str])

    def test_bare_list_needs_element_type(self):
        with pytest.raises(UnrepresentableTypeError):
            input_type_of(list)

    def test_nested_lists(self):
        assert render_value([[1], []]) == "[[1], []]"
        assert input_type_of(list[list[int]]).render() == "[[Int]]"


class TestDictionaries:
    """Tests for bare dictionaries, which render but have no type."""

    def test_dictionary_input_value(self):
        with pytest.raises(UnrepresentableTypeError):
            input_type_of(dict[str, str])
        assert render_value({"number": 1, "string": "derp"}) == '{number: 1, string: "derp"}'

    def test_empty_dictionary(self):
        assert render_value({}) == "{}"

    def test_bare_dict_type(self):
        with pytest.raises(UnrepresentableTypeError):
            input_type_of(dict)

    def test_unrepresentable_is_type_error(self):
        with pytest.raises(TypeError):
            input_type_of(dict[str, int])

    def test_non_string_keys_fail(self):
        with pytest.raises(RenderError):
            render_value({1: "one"})

    def test_keys_must_be_names(self):
        with pytest.raises(RenderError):
            render_value({"bad key": 1})
        with pytest.raises(RenderError):
            render_value({"input": {"1st": 1}})
        with pytest.raises(RenderError):
            render_value({"": 1})
        assert render_value({"_private": 1, "camelCase2": 2}) == "{_private: 1, camelCase2: 2}"

    def test_preserves_insertion_order(self):
        assert render_value({"b": 1, "a": 2}) == "{b: 1, a: 2}"
        assert render_value({"a": 2, "b": 1}) == "{a: 2, b: 1}"


class TestNonNull:
    """Tests for NonNullInputValue."""

    def test_non_null_input_value(self):
        non_null = NonNullInputValue("val")
        assert non_null.graphql_input_value() == '"val"'
        assert input_type_of(NonNull[str]).render() == "String!"

    def test_literal_is_unchanged(self):
        assert render_value(NonNullInputValue([1, 2])) == render_value([1, 2])

    def test_nested_list_types(self):
        assert input_type_of(NonNull[list[NonNull[int]]]).render() == "[Int!]!"
        assert input_type_of(list[NonNull[str]]).render() == "[String!]"

    def test_double_wrapping_collapses(self):
        assert input_type_of(NonNull[NonNull[str]]).render() == "String!"

    def test_wrapping_none_fails(self):
        with pytest.raises(RenderError):
            NonNullInputValue(None).graphql_input_value()

    def test_unparameterized_has_no_type(self):
        with pytest.raises(UnrepresentableTypeError):
            input_type_of(NonNullInputValue)

    def test_optional_relaxes_nullability(self):
        assert input_type_of(Optional[int]).render() == "Int"
        assert input_type_of(NonNull[int] | None).render() == "Int"

    def test_other_unions_fail(self):
        with pytest.raises(UnrepresentableTypeError):
            input_type_of(int | str)


class TestVariableValues:
    """Tests for variables used as input values."""

    def test_variable_input_value(self):
        variable = VariableDefinition("variable", str)
        assert input_type_of(VariableDefinition[str]).render() == "String"
        assert variable.graphql_type.render() == "String"
        assert variable.graphql_input_value() == "$variable"

    def test_variable_in_list(self):
        variable = VariableDefinition("id", NonNull[int])
        assert render_value([variable, 3]) == "[$id, 3]"

    def test_variable_is_input_value(self):
        assert isinstance(VariableDefinition("x", str), InputValue)


class TestEnums:
    """Tests for enum values."""

    def test_plain_enum(self):
        assert render_value(Episode.JEDI) == "JEDI"
        assert input_type_of(Episode) == EnumType("Episode")

    def test_custom_enum_rendering(self):
        class UserEnumInput(enum.Enum):
            MY_CASE = "myCase"

            @classmethod
            def input_type(cls):
                return EnumType("UserEnumInput")

            def graphql_input_value(self):
                return render_value("MY_CASE")

        assert render_value(UserEnumInput.MY_CASE) == '"MY_CASE"'
        assert input_type_of(UserEnumInput).render() == "UserEnumInput"


class TestInputObjects:
    """Tests for input objects."""

    def test_fields_property(self):
        assert render_value(UserInput()) == '{id: 1234, name: "cool_user"}'
        assert input_type_of(UserInput).render() == "UserInput"

    def test_dataclass_fields_skip_none(self):
        assert render_value(ReviewInput(stars=5)) == "{stars: 5}"
        assert render_value(ReviewInput(5, "great")) == '{stars: 5, commentary: "great"}'

    def test_explicit_type_name(self):
        assert input_type_of(RenamedInput).render() == "CreateReviewInput"
        assert render_value(RenamedInput(4)) == "{stars: 4}"

    def test_list_of_objects(self):
        assert input_type_of(list[UserInput]).render() == "[UserInput]"
        assert render_value([ReviewInput(1), ReviewInput(2)]) == "[{stars: 1}, {stars: 2}]"

    def test_missing_fields(self):
        class Broken(InputObjectValue):
            pass

        with pytest.raises(NotImplementedError):
            render_value(Broken())

    def test_nested_enum_values(self):
        assert render_value({"episode": Episode.NEW_HOPE}) == "{episode: NEW_HOPE}"


class TestPydanticModels:
    """Tests for pydantic models used as input objects."""

    def test_renders_by_alias_without_none(self):
        assert render_value(CreateUser(userName="bob")) == '{userName: "bob"}'
        assert render_value(CreateUser(userName="bob", age=3)) == '{userName: "bob", age: 3}'

    def test_type_name(self):
        assert input_type_of(CreateUser).render() == "CreateUser"
        assert input_type_of(NonNull[CreateUser]).render() == "CreateUser!"

    def test_titled_model(self):
        assert input_type_of(TitledUser).render() == "UserCreateInput"


class TestCustomScalars:
    """Tests for values handled by the scalar registry."""

    def test_datetime(self):
        assert render_value(datetime(2024, 1, 15, 10, 30)) == '"2024-01-15T10:30:00"'
        assert input_type_of(datetime).render() == "DateTime"

    def test_date(self):
        assert render_value(date(2024, 1, 15)) == '"2024-01-15"'
        assert input_type_of(date).render() == "Date"

    def test_uuid(self):
        uid = UUID("12345678-1234-5678-1234-567812345678")
        assert render_value(uid) == '"12345678-1234-5678-1234-567812345678"'
        assert input_type_of(NonNull[UUID]).render() == "UUID!"

    def test_decimal(self):
        assert render_value(Decimal("1.50")) == '"1.50"'

    def test_explicit_registry(self):
        registry = ScalarRegistry(defaults=False)
        with pytest.raises(UnrepresentableTypeError):
            input_type_of(datetime, scalars=registry)
        with pytest.raises(RenderError):
            render_value(date(2024, 1, 15), scalars=registry)

    def test_explicit_registry_reaches_wrapped_values(self):
        class ShortDateHandler:
            graphql_type = "ShortDate"

            def serialize(self, value):
                return value.strftime("%Y%m%d")

        registry = ScalarRegistry(defaults=False)
        registry.register(datetime, ShortDateHandler())
        when = datetime(2024, 1, 2)

        @dataclass
        class EventInput(InputObjectValue):
            at: datetime

        assert render_value(when, registry) == '"20240102"'
        assert render_value(NonNull(when), registry) == '"20240102"'
        assert render_value(EventInput(when), registry) == '{at: "20240102"}'
        assert render_value([NonNull(EventInput(when))], registry) == '[{at: "20240102"}]'
