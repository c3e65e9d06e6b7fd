"""Rendering Python values as GraphQL input literals.

Any value used as an argument, a directive argument or a variable default
goes through ``render_value``. Variable type annotations are derived from
Python types with ``input_type_of``:

    render_value([1, "derp"])                  # '[1, "derp"]'
    input_type_of(list[NonNull[int]]).render()  # '[Int!]'

The two are independent: a bare ``dict`` renders as an object literal but
has no GraphQL type, so only explicit input object types can be used to
declare variables.
"""

import collections.abc
import dataclasses
import enum
import json
import math
import re
import types
import typing
from typing import Any, ClassVar, Generic, Mapping, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel

from .errors import RenderError, UnrepresentableTypeError
from .input_types import (
    BOOLEAN,
    FLOAT,
    INT,
    STRING,
    EnumType,
    InputType,
    ListType,
    NonNullType,
    ObjectType,
    ScalarType,
)
from .scalars import ScalarRegistry, default_registry

T = TypeVar("T")

_PRIMITIVE_TYPES: dict[type, ScalarType] = {
    str: STRING,
    bool: BOOLEAN,
    int: INT,
    float: FLOAT,
}

_SEQUENCE_ORIGINS = (list, tuple, collections.abc.Sequence, collections.abc.Iterable)
_MAPPING_ORIGINS = (dict, collections.abc.Mapping, collections.abc.MutableMapping)

_NAME_RE = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*$")


@runtime_checkable
class InputValue(Protocol):
    """Protocol for values that render themselves as GraphQL literals.

    Implement this protocol to make your own types usable as arguments and
    variable defaults.

    Example:
        class Episode(enum.Enum):
            NEW_HOPE = "newhope"

            @classmethod
            def input_type(cls):
                return EnumType("Episode")

            def graphql_input_value(self):
                return self.name
    """

    def graphql_input_value(self) -> str:
        """Return the GraphQL literal for this value."""
        ...

    @classmethod
    def input_type(cls) -> InputType:
        """Return the GraphQL type of values of this class."""
        ...


class InputObjectValue:
    """Base class for user-defined GraphQL input objects.

    Subclasses set ``type_name`` (defaults to the class name) and either
    override ``fields`` or are dataclasses, in which case the dataclass
    fields are used and ``None`` members are left out.

    Example:
        @dataclass
        class UserInput(InputObjectValue):
            id: int
            name: str
    """

    type_name: ClassVar[str]

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if "type_name" not in cls.__dict__:
            cls.type_name = cls.__name__

    @property
    def fields(self) -> Mapping[str, Any]:
        if dataclasses.is_dataclass(self):
            return {
                f.name: getattr(self, f.name)
                for f in dataclasses.fields(self)
                if getattr(self, f.name) is not None
            }
        raise NotImplementedError(f"{type(self).__name__} must define 'fields'")

    def graphql_input_value(self, scalars: ScalarRegistry | None = None) -> str:
        return render_object(self.fields, scalars)

    @classmethod
    def input_type(cls) -> InputType:
        return ObjectType(cls.type_name)


class NonNullInputValue(Generic[T]):
    """Wraps a value whose GraphQL type is non-null.

    The literal is the wrapped value's literal unchanged; only the type
    annotation gains a ``!``. Use ``NonNull[T]`` in type annotations.
    """

    __slots__ = ("value",)

    def __init__(self, value: T):
        self.value = value

    def __repr__(self):
        return f"NonNullInputValue({self.value!r})"

    def __eq__(self, other):
        if not isinstance(other, NonNullInputValue):
            return NotImplemented
        return self.value == other.value

    def __hash__(self):
        return hash(("NonNullInputValue", self.value))

    def graphql_input_value(self, scalars: ScalarRegistry | None = None) -> str:
        if self.value is None:
            raise RenderError("A non-null input value cannot wrap None")
        return render_value(self.value, scalars)

    @classmethod
    def input_type(cls) -> InputType:
        raise UnrepresentableTypeError(
            "NonNullInputValue needs a type parameter, e.g. NonNull[str]"
        )

    @classmethod
    def parameterized_input_type(
        cls, args: tuple, scalars: ScalarRegistry | None = None
    ) -> InputType:
        inner = input_type_of(args[0], scalars=scalars)
        if isinstance(inner, NonNullType):
            return inner
        return NonNullType(inner)


NonNull = NonNullInputValue


def render_value(value: Any, scalars: ScalarRegistry | None = None) -> str:
    """Render a Python value as a GraphQL input literal.

    Raises:
        RenderError: If the value has no literal form
    """
    if isinstance(value, (NonNullInputValue, InputObjectValue)):
        return value.graphql_input_value(scalars)
    if isinstance(value, InputValue):
        return value.graphql_input_value()
    if value is None:
        return "null"
    if isinstance(value, enum.Enum):
        return value.name
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(int(value))
    if isinstance(value, float):
        if not math.isfinite(value):
            raise RenderError(f"Cannot render non-finite float {value!r}", value=value)
        return repr(float(value))
    if isinstance(value, str):
        return render_string(value)
    if isinstance(value, BaseModel):
        return render_object(value.model_dump(by_alias=True, exclude_none=True), scalars)
    if isinstance(value, collections.abc.Mapping):
        return render_object(value, scalars)
    if isinstance(value, (list, tuple)):
        return render_list(value, scalars)

    registry = scalars if scalars is not None else default_registry()
    handler = registry.get(type(value))
    if handler is not None:
        return render_value(handler.serialize(value), scalars)

    raise RenderError(
        f"Cannot render value of type {type(value).__name__} as a GraphQL literal",
        value=value,
    )


def render_string(value: str) -> str:
    """Quote a string, escaping quotes, backslashes and control characters."""
    return json.dumps(value, ensure_ascii=False)


def render_list(values, scalars: ScalarRegistry | None = None) -> str:
    """Render a sequence as ``[v1, v2]``."""
    return "[" + ", ".join(render_value(v, scalars) for v in values) + "]"


def render_object(values: Mapping[str, Any], scalars: ScalarRegistry | None = None) -> str:
    """Render a mapping as an object literal ``{k1: v1, k2: v2}``."""
    items = []
    for key, value in values.items():
        if not isinstance(key, str) or not _NAME_RE.match(key):
            raise RenderError(f"Object literal keys must be GraphQL names, got {key!r}", key=key)
        items.append(f"{key}: {render_value(value, scalars)}")
    return "{" + ", ".join(items) + "}"


def input_type_of(tp: Any, scalars: ScalarRegistry | None = None) -> InputType:
    """Derive the GraphQL type for a Python type or annotation.

    Nullability follows GraphQL: types are nullable unless wrapped in
    ``NonNull[...]``; ``Optional[T]`` is accepted and means ``T``.

    Raises:
        UnrepresentableTypeError: If the type has no GraphQL equivalent
    """
    origin = typing.get_origin(tp)
    if origin is not None:
        return _parameterized_type(tp, origin, typing.get_args(tp), scalars)

    if isinstance(tp, (ScalarType, ObjectType, EnumType, ListType, NonNullType)):
        return tp

    if not isinstance(tp, type):
        raise UnrepresentableTypeError(f"{tp!r} is not a type", type=tp)

    if issubclass(tp, InputValue):
        return tp.input_type()
    if tp in _PRIMITIVE_TYPES:
        return _PRIMITIVE_TYPES[tp]
    if issubclass(tp, enum.Enum):
        return EnumType(tp.__name__)
    if issubclass(tp, BaseModel):
        return ObjectType(tp.model_config.get("title") or tp.__name__)
    if issubclass(tp, collections.abc.Mapping):
        raise UnrepresentableTypeError(
            f"{tp.__name__} has no GraphQL type; declare an input object type instead",
            type=tp,
        )
    if tp in (list, tuple):
        raise UnrepresentableTypeError(
            f"{tp.__name__} needs an element type, e.g. list[str]", type=tp
        )

    registry = scalars if scalars is not None else default_registry()
    handler = registry.get(tp)
    if handler is not None:
        return ScalarType(handler.graphql_type)

    raise UnrepresentableTypeError(f"{tp.__name__} has no GraphQL type", type=tp)


def _parameterized_type(tp, origin, args: tuple, scalars) -> InputType:
    if origin in (typing.Union, types.UnionType):
        non_none = [a for a in args if a is not type(None)]
        if len(non_none) != 1:
            raise UnrepresentableTypeError(f"Union {tp!r} has no GraphQL type", type=tp)
        inner = input_type_of(non_none[0], scalars=scalars)
        # Optional[...] only ever relaxes nullability
        return inner.of if isinstance(inner, NonNullType) else inner
    if origin in _MAPPING_ORIGINS:
        raise UnrepresentableTypeError(
            f"{tp!r} has no GraphQL type; declare an input object type instead", type=tp
        )
    if origin in _SEQUENCE_ORIGINS:
        if origin is tuple and not (len(args) == 2 and args[1] is Ellipsis):
            raise UnrepresentableTypeError(
                f"{tp!r} has no GraphQL type; use tuple[T, ...]", type=tp
            )
        return ListType(input_type_of(args[0], scalars=scalars))
    if isinstance(origin, type) and hasattr(origin, "parameterized_input_type"):
        return origin.parameterized_input_type(args, scalars=scalars)
    raise UnrepresentableTypeError(f"{tp!r} has no GraphQL type", type=tp)
