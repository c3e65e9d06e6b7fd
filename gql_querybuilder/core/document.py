"""Complete request documents.

A GraphQL request must contain every fragment its operations spread. A
``Document`` renders its operations followed by all reachable fragment
definitions, and builds the JSON body a transport would POST.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence

from pydantic import BaseModel

from .errors import RenderError
from .fields import FragmentDefinition, FragmentSpread, SelectionSet
from .input_values import InputObjectValue, NonNullInputValue
from .operation import Operation
from .scalars import ScalarRegistry, default_registry

logger = logging.getLogger(__name__)


def collect_fragments(nodes: Iterable[SelectionSet]) -> list[FragmentDefinition]:
    """Return the fragment definitions spread anywhere below ``nodes``.

    Definitions are listed in the order they are first reached and
    de-duplicated by name.

    Raises:
        RenderError: If two different definitions share a name
    """
    seen: dict[str, FragmentDefinition] = {}

    def visit(node: SelectionSet):
        for child in (*(node.fields or ()), *(node.fragments or ())):
            if isinstance(child, FragmentSpread):
                definition = child.fragment
                existing = seen.get(definition.name)
                if existing is None:
                    seen[definition.name] = definition
                    visit(definition)
                elif existing != definition:
                    raise RenderError(
                        f"Conflicting definitions for fragment {definition.name!r}",
                        name=definition.name,
                    )
            elif isinstance(child, SelectionSet):
                visit(child)

    for node in nodes:
        if isinstance(node, FragmentDefinition):
            if seen.setdefault(node.name, node) != node:
                raise RenderError(
                    f"Conflicting definitions for fragment {node.name!r}", name=node.name
                )
        visit(node)
    return list(seen.values())


@dataclass(frozen=True)
class Document:
    """One or more operations plus the fragments they use."""
    operations: Sequence[Operation]
    fragments: Sequence[FragmentDefinition] | None = None

    def __post_init__(self):
        operations = self.operations
        if isinstance(operations, Operation):
            operations = (operations,)
        object.__setattr__(self, "operations", tuple(operations))
        if self.fragments is not None:
            object.__setattr__(self, "fragments", tuple(self.fragments))

    def fragment_definitions(self) -> list[FragmentDefinition]:
        """Explicit fragments first, then those reached from the operations."""
        return collect_fragments([*(self.fragments or ()), *self.operations])

    def render(self) -> str:
        """Render operations and fragment definitions separated by blank lines.

        Raises:
            RenderError: If the document has no operation, or several
                operations and one of them is anonymous
        """
        if not self.operations:
            raise RenderError("A document needs at least one operation")
        if len(self.operations) > 1 and not all(op.name for op in self.operations):
            raise RenderError("Every operation must be named when a document has several")
        parts = [op.render() for op in self.operations]
        parts.extend(f.render() for f in self.fragment_definitions())
        logger.debug(
            "Rendered document with %d operation(s) and %d fragment(s)",
            len(self.operations),
            len(parts) - len(self.operations),
        )
        return "\n\n".join(parts)

    def to_payload(
        self,
        variables: dict[str, Any] | None = None,
        operation_name: str | None = None,
        scalars: ScalarRegistry | None = None,
    ) -> dict[str, Any]:
        """Build the ``{"query", "variables", "operationName"}`` request body.

        ``operationName`` defaults to the name of a lone named operation.
        """
        payload: dict[str, Any] = {"query": self.render()}
        if variables:
            payload["variables"] = serialize_variables(variables, scalars)
        if operation_name is None and len(self.operations) == 1:
            operation_name = self.operations[0].name
        if operation_name is None and len(self.operations) > 1:
            raise RenderError("operation_name is required for a document with several operations")
        if operation_name is not None:
            if operation_name not in {op.name for op in self.operations}:
                raise RenderError(f"Unknown operation {operation_name!r}", name=operation_name)
            payload["operationName"] = operation_name
        return payload


def serialize_variables(
    variables: Mapping[str, Any], scalars: ScalarRegistry | None = None
) -> dict[str, Any]:
    """Serialize variables for the JSON request body.

    Pydantic models are dumped in JSON mode, input objects become dicts,
    enum members become their names and custom scalars go through their
    registered handler. Top-level ``None`` values are left out.

    Raises:
        RenderError: If a value has no JSON form
    """
    registry = scalars if scalars is not None else default_registry()
    return {
        key: _json_value(value, registry)
        for key, value in variables.items()
        if value is not None  # Skip None values
    }


def _json_value(value: Any, registry: ScalarRegistry) -> Any:
    if isinstance(value, enum.Enum):
        return value.name
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(value, NonNullInputValue):
        return _json_value(value.value, registry)
    if isinstance(value, InputObjectValue):
        return {k: _json_value(v, registry) for k, v in value.fields.items()}
    if isinstance(value, Mapping):
        return {str(k): _json_value(v, registry) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_value(v, registry) for v in value]

    handler = registry.get(type(value))
    if handler is not None:
        return _json_value(handler.serialize(value), registry)

    raise RenderError(
        f"Cannot send value of type {type(value).__name__} as a JSON variable",
        value=value,
    )
