"""Build documents from a JSON description.

The description mirrors the builder classes:

    {
      "operations": [{
        "type": "query",
        "name": "Hero",
        "variables": [{"name": "episode", "type": "Episode", "default": {"$enum": "JEDI"}}],
        "fields": [{"name": "hero", "arguments": {"episode": {"$var": "episode"}},
                    "fields": ["name"], "fragments": ["heroFields"]}]
      }],
      "fragments": [{"name": "heroFields", "on": "Character", "fields": ["id"]}]
    }

Argument values are plain JSON, except ``{"$var": "name"}`` (a variable
reference) and ``{"$enum": "VALUE"}`` (an enum literal).
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Any, Union

from pydantic import BaseModel, ConfigDict, StringConstraints, field_validator
from pydantic import Field as SpecField

from .core.arguments import Directive
from .core.document import Document
from .core.errors import InvalidDefaultError, QueryBuilderError, UnrepresentableTypeError
from .core.fields import FragmentDefinition, FragmentSpread, InlineFragment, Object, Scalar
from .core.input_types import InputType, parse_type_reference
from .core.operation import Operation, OperationType, VariableDefinition

logger = logging.getLogger(__name__)

Name = Annotated[str, StringConstraints(pattern=r"^[_A-Za-z][_0-9A-Za-z]*$")]


class _Spec(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class DirectiveSpec(_Spec):
    name: Name
    arguments: dict[Name, Any] | None = None


class InlineFragmentSpec(_Spec):
    type: Name | None = SpecField(default=None, alias="on")
    directives: list[DirectiveSpec] = []
    fields: list[Union[Name, "FieldSpec"]] = []
    fragments: list[Union[Name, "InlineFragmentSpec"]] = []


class FieldSpec(_Spec):
    name: Name
    alias: Name | None = None
    arguments: dict[Name, Any] | None = None
    directives: list[DirectiveSpec] = []
    fields: list[Union[Name, "FieldSpec"]] = []
    fragments: list[Union[Name, InlineFragmentSpec]] = []


class FragmentSpec(_Spec):
    name: Name
    type: Name = SpecField(alias="on")
    directives: list[DirectiveSpec] = []
    fields: list[Union[Name, FieldSpec]] = []
    fragments: list[Union[Name, InlineFragmentSpec]] = []


class VariableSpec(_Spec):
    name: Name
    type: str
    default: Any = None

    @field_validator("type")
    @classmethod
    def check_type(cls, value: str) -> str:
        parse_type_reference(value)
        return value

    @property
    def has_default(self) -> bool:
        return "default" in self.model_fields_set


class OperationSpec(_Spec):
    type: OperationType = OperationType.QUERY
    name: Name | None = None
    variables: list[VariableSpec] = []
    directives: list[DirectiveSpec] = []
    fields: list[Union[Name, FieldSpec]] = []
    fragments: list[Union[Name, InlineFragmentSpec]] = []


class DocumentSpec(_Spec):
    operations: list[OperationSpec] = SpecField(min_length=1)
    fragments: list[FragmentSpec] = []


for _model in (InlineFragmentSpec, FieldSpec, FragmentSpec, OperationSpec, DocumentSpec):
    _model.model_rebuild()


@dataclass(frozen=True)
class Reference:
    """A literal written as-is: a ``$variable`` reference or an enum value."""
    literal: str

    def graphql_input_value(self) -> str:
        return self.literal

    @classmethod
    def input_type(cls) -> InputType:
        raise UnrepresentableTypeError("A reference has no static GraphQL type")


def convert_value(value: Any) -> Any:
    """Turn a JSON argument value into a renderable input value."""
    if isinstance(value, dict):
        if len(value) == 1 and "$var" in value:
            return Reference(f"${value['$var']}")
        if len(value) == 1 and "$enum" in value:
            return Reference(str(value["$enum"]))
        return {k: convert_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [convert_value(v) for v in value]
    return value


def _contains_variable(value: Any) -> bool:
    if isinstance(value, Reference):
        return value.literal.startswith("$")
    if isinstance(value, dict):
        return any(_contains_variable(v) for v in value.values())
    if isinstance(value, list):
        return any(_contains_variable(v) for v in value)
    return False


class DocumentBuilder:
    """Turns a validated ``DocumentSpec`` into a ``Document``."""

    def __init__(self, spec: DocumentSpec):
        self.spec = spec
        self._fragment_specs = {f.name: f for f in spec.fragments}
        self._fragments: dict[str, FragmentDefinition] = {}
        self._building: set[str] = set()

    def build(self) -> Document:
        fragments = [self._fragment(name) for name in self._fragment_specs]
        operations = [self._operation(op) for op in self.spec.operations]
        return Document(operations, fragments)

    def _fragment(self, name: str) -> FragmentDefinition:
        if name in self._fragments:
            return self._fragments[name]
        if name not in self._fragment_specs:
            raise QueryBuilderError(f"Unknown fragment {name!r}", name=name)
        if name in self._building:
            raise QueryBuilderError(f"Fragment {name!r} spreads itself", name=name)
        self._building.add(name)
        spec = self._fragment_specs[name]
        try:
            definition = FragmentDefinition(
                name=spec.name,
                type=spec.type,
                fields=self._fields(spec.fields),
                fragments=self._fragment_refs(spec.fragments),
                directives=self._directives(spec.directives),
            )
        finally:
            self._building.discard(name)
        self._fragments[name] = definition
        return definition

    def _operation(self, spec: OperationSpec) -> Operation:
        return Operation(
            type=spec.type,
            name=spec.name,
            fields=self._fields(spec.fields),
            fragments=self._fragment_refs(spec.fragments),
            variable_definitions=[self._variable(v) for v in spec.variables],
            directives=self._directives(spec.directives),
        )

    def _variable(self, spec: VariableSpec) -> VariableDefinition:
        var_type = parse_type_reference(spec.type)
        if not spec.has_default:
            return VariableDefinition(spec.name, var_type)
        default = convert_value(spec.default)
        if _contains_variable(default):
            raise InvalidDefaultError(
                f"Variable ${spec.name} cannot default to another variable", name=spec.name
            )
        return VariableDefinition(spec.name, var_type, default)

    def _fields(self, specs: list) -> list:
        return [self._field(s) for s in specs]

    def _field(self, spec: Union[str, FieldSpec]):
        if isinstance(spec, str):
            return Scalar(spec)
        arguments = (
            {k: convert_value(v) for k, v in spec.arguments.items()}
            if spec.arguments else None
        )
        directives = self._directives(spec.directives)
        if not spec.fields and not spec.fragments:
            return Scalar(spec.name, spec.alias, directives, arguments)
        return Object(
            name=spec.name,
            alias=spec.alias,
            fields=self._fields(spec.fields),
            fragments=self._fragment_refs(spec.fragments),
            arguments=arguments,
            directives=directives,
        )

    def _fragment_refs(self, specs: list) -> list:
        refs = []
        for spec in specs:
            if isinstance(spec, str):
                refs.append(FragmentSpread(self._fragment(spec)))
            else:
                refs.append(InlineFragment(
                    type=spec.type,
                    fields=self._fields(spec.fields),
                    fragments=self._fragment_refs(spec.fragments),
                    directives=self._directives(spec.directives),
                ))
        return refs

    def _directives(self, specs: list[DirectiveSpec]) -> list[Directive]:
        return [
            Directive(
                d.name,
                {k: convert_value(v) for k, v in d.arguments.items()} if d.arguments else None,
            )
            for d in specs
        ]


def build_document(data: dict[str, Any]) -> Document:
    """Validate a description and build its document.

    Raises:
        pydantic.ValidationError: If the description is malformed
        QueryBuilderError: If it describes an invalid document
    """
    spec = DocumentSpec.model_validate(data)
    return DocumentBuilder(spec).build()


def load_document(path: str | Path) -> Document:
    """Load a JSON description from ``path`` and build its document."""
    path = Path(path)
    logger.debug("Loading document description from %s", path)
    data = json.loads(path.read_text())
    return build_document(data)
