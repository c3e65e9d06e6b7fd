"""Operations and their variable definitions."""

import logging
import typing
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Sequence, TypeVar

from .arguments import Directive, serialize_directives
from .errors import InvalidDefaultError, QueryBuilderError, UnrepresentableTypeError
from .fields import Field, SelectionSet, as_tuple, normalize_fields, normalize_fragments
from .input_types import InputType
from .input_values import input_type_of, render_value
from .scalars import ScalarRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")


class OperationType(Enum):
    """GraphQL operation types."""
    QUERY = "query"
    MUTATION = "mutation"
    SUBSCRIPTION = "subscription"


class _NoDefault:
    def __repr__(self):
        return "NO_DEFAULT"


NO_DEFAULT: Any = _NoDefault()


@dataclass(frozen=True)
class ErasedVariableDefinition:
    """A variable definition reduced to its rendered parts.

    Operations keep these instead of ``VariableDefinition`` so that
    variables of different Python types sit in one list.
    """
    name: str
    type_string: str
    default_literal: str | None = None

    def render(self) -> str:
        """Render as ``$name: Type`` or ``$name: Type = default``."""
        rendered = f"${self.name}: {self.type_string}"
        if self.default_literal is not None:
            rendered += f" = {self.default_literal}"
        return rendered


@dataclass(frozen=True)
class VariableDefinition(Generic[T]):
    """A named, typed operation parameter with an optional default.

    ``type`` is a Python type or annotation understood by ``input_type_of``
    (``str``, ``NonNull[list[int]]``, ``UserInput``...). Used as an input
    value the variable renders as ``$name``.

    Examples:
        VariableDefinition("first", int, default=10)
        VariableDefinition("ids", NonNull[list[NonNull[str]]])
    """
    name: str
    type: Any
    default: Any = NO_DEFAULT

    def __post_init__(self):
        if not self.name:
            raise ValueError("Variable name must not be empty")

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT

    @property
    def graphql_type(self) -> InputType:
        """The GraphQL type this variable is declared with."""
        return input_type_of(self.type)

    def graphql_input_value(self) -> str:
        return f"${self.name}"

    @classmethod
    def input_type(cls) -> InputType:
        raise UnrepresentableTypeError(
            "VariableDefinition needs a type parameter, e.g. VariableDefinition[str]"
        )

    @classmethod
    def parameterized_input_type(
        cls, args: tuple, scalars: ScalarRegistry | None = None
    ) -> InputType:
        return input_type_of(args[0], scalars=scalars)

    def type_erase(self, scalars: ScalarRegistry | None = None) -> ErasedVariableDefinition:
        """Render the type and default into an ``ErasedVariableDefinition``.

        Raises:
            InvalidDefaultError: If a variable-typed variable, or a variable
                used as the default, would make the default non-constant
            UnrepresentableTypeError: If the declared type has no GraphQL form
        """
        if self.has_default and (
            typing.get_origin(self.type) is VariableDefinition
            or isinstance(self.default, VariableDefinition)
        ):
            raise InvalidDefaultError(
                f"Variable ${self.name} cannot default to another variable",
                name=self.name,
            )
        type_string = input_type_of(self.type, scalars=scalars).render()
        default_literal = render_value(self.default, scalars) if self.has_default else None
        return ErasedVariableDefinition(self.name, type_string, default_literal)


def serialize_variable_definitions(
    variable_definitions: Sequence[ErasedVariableDefinition] | None,
) -> str:
    """Build ``($a: Int, $b: String = "x")`` or an empty string."""
    if not variable_definitions:
        return ""
    return "(" + ", ".join(v.render() for v in variable_definitions) + ")"


@dataclass(frozen=True)
class Operation(SelectionSet):
    """A query, mutation or subscription.

    Example:
        Operation(OperationType.QUERY, "Viewer", fields=[Object("viewer", fields=["login"])])
    """
    type: OperationType
    name: str | None = None
    fields: Sequence[Field | str] | None = None
    fragments: Sequence[Any] | None = None
    variable_definitions: Sequence[ErasedVariableDefinition | VariableDefinition] | None = None
    directives: Sequence[Directive] | None = None

    def __post_init__(self):
        object.__setattr__(self, "type", OperationType(self.type))
        object.__setattr__(self, "fields", normalize_fields(self.fields))
        object.__setattr__(self, "fragments", normalize_fragments(self.fragments))
        object.__setattr__(self, "directives", as_tuple(self.directives))
        if self.variable_definitions is not None:
            object.__setattr__(
                self,
                "variable_definitions",
                tuple(
                    v.type_erase() if isinstance(v, VariableDefinition) else v
                    for v in self.variable_definitions
                ),
            )

    def render(self) -> str:
        try:
            selection = self.serialized_selection(self.name, self.type.value)
            header = self.type.value
            if self.name:
                header += f" {self.name}"
            rendered = (
                f"{header}"
                f"{serialize_variable_definitions(self.variable_definitions)}"
                f"{serialize_directives(self.directives)}"
                f"{selection}"
            )
        except QueryBuilderError as e:
            logger.debug("Failed to render %s %r: %s", self.type.value, self.name, e.message)
            raise
        logger.debug("Rendered %s %r (%d chars)", self.type.value, self.name, len(rendered))
        return rendered
