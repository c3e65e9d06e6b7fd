"""Core modules for building and rendering GraphQL documents."""

from .arguments import Directive, include, serialize_arguments, serialize_directives, skip
from .document import Document, collect_fragments, serialize_variables
from .errors import (
    EmptySelectionError,
    InvalidDefaultError,
    InvalidFragmentError,
    InvalidNameError,
    QueryBuilderError,
    RenderError,
    UnrepresentableTypeError,
)
from .fields import (
    Field,
    FragmentDefinition,
    FragmentSpread,
    InlineFragment,
    Object,
    Scalar,
    SelectionSet,
    render_field,
    serialize_fields,
)
from .input_types import (
    EnumType,
    InputType,
    ListType,
    NonNullType,
    ObjectType,
    ScalarType,
    parse_type_reference,
)
from .input_values import (
    InputObjectValue,
    InputValue,
    NonNull,
    NonNullInputValue,
    input_type_of,
    render_value,
)
from .operation import (
    ErasedVariableDefinition,
    Operation,
    OperationType,
    VariableDefinition,
)
from .scalars import (
    DateHandler,
    DateTimeHandler,
    DecimalHandler,
    ScalarHandler,
    ScalarRegistry,
    TimeHandler,
    UUIDHandler,
    default_registry,
)

__all__ = [
    # Errors
    "QueryBuilderError",
    "RenderError",
    "EmptySelectionError",
    "UnrepresentableTypeError",
    "InvalidDefaultError",
    "InvalidFragmentError",
    "InvalidNameError",
    # Input types
    "InputType",
    "ScalarType",
    "ObjectType",
    "EnumType",
    "ListType",
    "NonNullType",
    "parse_type_reference",
    # Input values
    "InputValue",
    "InputObjectValue",
    "NonNull",
    "NonNullInputValue",
    "input_type_of",
    "render_value",
    # Scalars
    "ScalarHandler",
    "ScalarRegistry",
    "DateTimeHandler",
    "DateHandler",
    "TimeHandler",
    "UUIDHandler",
    "DecimalHandler",
    "default_registry",
    # Arguments and directives
    "Directive",
    "include",
    "skip",
    "serialize_arguments",
    "serialize_directives",
    # Selection sets
    "Field",
    "Scalar",
    "Object",
    "SelectionSet",
    "FragmentDefinition",
    "FragmentSpread",
    "InlineFragment",
    "render_field",
    "serialize_fields",
    # Operations
    "OperationType",
    "VariableDefinition",
    "ErasedVariableDefinition",
    "Operation",
    # Documents
    "Document",
    "collect_fragments",
    "serialize_variables",
]
