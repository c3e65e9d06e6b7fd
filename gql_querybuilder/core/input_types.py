"""GraphQL type references used in variable definitions.

These only describe the textual type annotation of a variable
(``$ids: [ID!]!``); values never carry them around.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ScalarType:
    """A built-in or custom scalar such as ``String`` or ``DateTime``."""
    name: str

    def render(self) -> str:
        return self.name


@dataclass(frozen=True)
class ObjectType:
    """An input object type, e.g. ``UserInput``."""
    name: str

    def render(self) -> str:
        return self.name


@dataclass(frozen=True)
class EnumType:
    """An enum type, e.g. ``Episode``."""
    name: str

    def render(self) -> str:
        return self.name


@dataclass(frozen=True)
class ListType:
    """A list of another type: ``[of]``."""
    of: "InputType"

    def render(self) -> str:
        return f"[{self.of.render()}]"


@dataclass(frozen=True)
class NonNullType:
    """A non-null wrapper: ``of!``."""
    of: "InputType"

    def __post_init__(self):
        if isinstance(self.of, NonNullType):
            raise ValueError("a non-null type cannot wrap another non-null type")

    def render(self) -> str:
        return f"{self.of.render()}!"


InputType = ScalarType | ObjectType | EnumType | ListType | NonNullType


def type_name(input_type: InputType) -> str:
    """Return the GraphQL type annotation for ``input_type``."""
    return input_type.render()


# Named scalar types every GraphQL server defines
STRING = ScalarType("String")
INT = ScalarType("Int")
FLOAT = ScalarType("Float")
BOOLEAN = ScalarType("Boolean")
ID = ScalarType("ID")

BUILTIN_SCALARS = {t.name: t for t in (STRING, INT, FLOAT, BOOLEAN, ID)}


def parse_type_reference(text: str) -> InputType:
    """Parse a type annotation such as ``[Int!]!`` into an InputType.

    Names that are not built-in scalars become ``ObjectType``; the text
    carries no information to tell input objects, enums and custom scalars
    apart, and all three render the same way.
    """
    source = text.strip()
    parsed, rest = _parse_type(source)
    if rest:
        raise ValueError(f"Unexpected trailing input in type {text!r}: {rest!r}")
    return parsed


def _parse_type(source: str) -> tuple[InputType, str]:
    source = source.lstrip()
    if source.startswith("["):
        inner, rest = _parse_type(source[1:])
        rest = rest.lstrip()
        if not rest.startswith("]"):
            raise ValueError(f"Unterminated list type in {source!r}")
        result: InputType = ListType(inner)
        rest = rest[1:]
    else:
        end = 0
        while end < len(source) and (source[end].isalnum() or source[end] == "_"):
            end += 1
        name = source[:end]
        if not name or name[0].isdigit():
            raise ValueError(f"Expected a type name in {source!r}")
        result = BUILTIN_SCALARS.get(name) or ObjectType(name)
        rest = source[end:]
    rest = rest.lstrip()
    if rest.startswith("!"):
        return NonNullType(result), rest[1:]
    return result, rest
