"""Argument lists and directives.

Arguments are plain mappings from argument name to input value. Their
insertion order is the rendering order, so the same mapping always renders
to the same text.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from .errors import InvalidNameError
from .input_values import render_value
from .scalars import ScalarRegistry

Arguments = Mapping[str, Any]


def serialize_arguments(arguments: Arguments | None, scalars: ScalarRegistry | None = None) -> str:
    """Build an argument clause: ``(key: "value", limit: 10)``.

    Returns an empty string when there are no arguments.
    """
    if not arguments:
        return ""
    arg_strs = [f"{name}: {render_value(value, scalars)}" for name, value in arguments.items()]
    return f"({', '.join(arg_strs)})"


@dataclass(frozen=True)
class Directive:
    """An ``@name(arg: value)`` annotation on a field, fragment or operation."""
    name: str
    arguments: Arguments | None = None

    def __post_init__(self):
        if not self.name:
            raise InvalidNameError("Directive name must not be empty", kind="Directive")
        if self.arguments is not None:
            object.__setattr__(self, "arguments", dict(self.arguments))

    def render(self, scalars: ScalarRegistry | None = None) -> str:
        return f"@{self.name}{serialize_arguments(self.arguments, scalars)}"


def serialize_directives(
    directives: Iterable[Directive] | None, scalars: ScalarRegistry | None = None
) -> str:
    """Build a directive clause with its leading space, or an empty string."""
    if not directives:
        return ""
    return "".join(f" {directive.render(scalars)}" for directive in directives)


def include(condition: Any) -> Directive:
    """``@include(if: condition)``; pass a variable to decide at request time."""
    return Directive("include", {"if": condition})


def skip(condition: Any) -> Directive:
    """``@skip(if: condition)``."""
    return Directive("skip", {"if": condition})
