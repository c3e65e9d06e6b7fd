"""Selection set nodes: scalars, objects and fragments.

Every node is an immutable dataclass; ``render()`` is a pure function of
the tree, so the same tree always renders to the same text.

    Object("user", fields=["id", Scalar("name", alias="login")],
           arguments={"id": 4}).render()
    # 'user(id: 4) {\\nid\\nlogin: name\\n}'
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence, Union

from .arguments import Arguments, Directive, serialize_arguments, serialize_directives
from .errors import EmptySelectionError, InvalidFragmentError, InvalidNameError

logger = logging.getLogger(__name__)


class Field:
    """Common behaviour of everything that can be selected by name."""

    name: str
    alias: str | None
    directives: Sequence[Directive] | None

    def serialized_alias(self) -> str:
        """Return ``"alias: "`` when an alias is set, else an empty string."""
        if self.alias:
            return f"{self.alias}: "
        return ""

    def serialized_directives(self) -> str:
        return serialize_directives(self.directives)

    def render(self) -> str:
        raise NotImplementedError


def _check_name(name: str, kind: str):
    if not name:
        raise InvalidNameError(f"{kind} name must not be empty", kind=kind)


def as_tuple(items) -> tuple | None:
    return None if items is None else tuple(items)


def normalize_fields(fields) -> tuple | None:
    if fields is None:
        return None
    return tuple(Scalar(f) if isinstance(f, str) else f for f in fields)


def normalize_fragments(fragments) -> tuple | None:
    if fragments is None:
        return None
    return tuple(
        FragmentSpread(f) if isinstance(f, FragmentDefinition) else f for f in fragments
    )


@dataclass(frozen=True)
class Scalar(Field):
    """A leaf field with no sub-selection."""
    name: str
    alias: str | None = None
    directives: Sequence[Directive] | None = None
    arguments: Arguments | None = None

    def __post_init__(self):
        _check_name(self.name, "Field")
        object.__setattr__(self, "directives", as_tuple(self.directives))
        if self.arguments is not None:
            object.__setattr__(self, "arguments", dict(self.arguments))

    def render(self) -> str:
        return (
            f"{self.serialized_alias()}{self.name}"
            f"{serialize_arguments(self.arguments)}"
            f"{self.serialized_directives()}"
        )


def render_field(selection: Union[Field, "FragmentSpread", "InlineFragment", str]) -> str:
    """Render one member of a selection set; a bare string is a field name."""
    if isinstance(selection, str):
        return selection
    return selection.render()


def serialize_fields(fields: Iterable | None) -> str:
    """Render fields one per line, in order. No fields gives an empty string."""
    if not fields:
        return ""
    return "\n".join(render_field(f) for f in fields)


class SelectionSet:
    """Mixin for nodes that own a ``{ ... }`` block of fields and fragments."""

    fields: Sequence | None
    fragments: Sequence | None

    def has_selection(self) -> bool:
        return bool(self.fields) or bool(self.fragments)

    def serialized_fields(self) -> str:
        return serialize_fields(self.fields)

    def serialized_fragments(self) -> str:
        return serialize_fields(self.fragments)

    def serialized_selection(self, name: str | None, kind: str) -> str:
        """Return the ``" {\\n...\\n}"`` block, fields before fragments.

        Raises:
            EmptySelectionError: If there are neither fields nor fragments
        """
        if not self.has_selection():
            raise EmptySelectionError(name, kind)
        parts = [p for p in (self.serialized_fields(), self.serialized_fragments()) if p]
        body = "\n".join(parts)
        return f" {{\n{body}\n}}"


@dataclass(frozen=True)
class Object(Field, SelectionSet):
    """A field with arguments and a nested selection set."""
    name: str
    alias: str | None = None
    fields: Sequence[Field | str] | None = None
    fragments: Sequence["FragmentSpread | InlineFragment"] | None = None
    arguments: Arguments | None = None
    directives: Sequence[Directive] | None = None

    def __post_init__(self):
        _check_name(self.name, "Field")
        object.__setattr__(self, "fields", normalize_fields(self.fields))
        object.__setattr__(self, "fragments", normalize_fragments(self.fragments))
        object.__setattr__(self, "directives", as_tuple(self.directives))
        if self.arguments is not None:
            object.__setattr__(self, "arguments", dict(self.arguments))

    def render(self) -> str:
        selection = self.serialized_selection(self.name, "object")
        return (
            f"{self.serialized_alias()}{self.name}"
            f"{serialize_arguments(self.arguments)}"
            f"{self.serialized_directives()}"
            f"{selection}"
        )


@dataclass(frozen=True)
class FragmentDefinition(SelectionSet):
    """A named, reusable selection set on a type.

    Building one directly raises ``InvalidFragmentError`` when the name is
    ``on`` or nothing is selected; ``FragmentDefinition.create`` returns
    ``None`` in those cases instead.
    """
    name: str
    type: str
    fields: Sequence[Field | str] | None = None
    fragments: Sequence["FragmentSpread | InlineFragment"] | None = None
    directives: Sequence[Directive] | None = None

    def __post_init__(self):
        if not self.name:
            raise InvalidFragmentError("Fragment name must not be empty")
        if self.name == "on":
            raise InvalidFragmentError("A fragment cannot be named 'on'", name=self.name)
        if not self.type:
            raise InvalidFragmentError(
                "Fragment needs a type condition", name=self.name
            )
        object.__setattr__(self, "fields", normalize_fields(self.fields))
        object.__setattr__(self, "fragments", normalize_fragments(self.fragments))
        object.__setattr__(self, "directives", as_tuple(self.directives))
        if not self.has_selection():
            raise InvalidFragmentError(
                f"Fragment {self.name!r} must select at least one field or fragment",
                name=self.name,
            )

    @classmethod
    def create(
        cls,
        name: str,
        type: str,
        fields: Sequence[Field | str] | None = None,
        fragments: Sequence["FragmentSpread | InlineFragment"] | None = None,
        directives: Sequence[Directive] | None = None,
    ) -> "FragmentDefinition | None":
        """Build a fragment definition, or return None if it would be invalid."""
        try:
            return cls(name, type, fields, fragments, directives)
        except InvalidFragmentError as e:
            logger.debug("Rejected fragment definition %r: %s", name, e.message)
            return None

    def spread(self, directives: Sequence[Directive] | None = None) -> "FragmentSpread":
        """Return a spread referencing this definition."""
        return FragmentSpread(self, directives)

    def render(self) -> str:
        selection = self.serialized_selection(self.name, "fragment")
        return (
            f"fragment {self.name} on {self.type}"
            f"{serialize_directives(self.directives)}"
            f"{selection}"
        )


@dataclass(frozen=True)
class FragmentSpread:
    """A ``...name`` reference to a fragment definition owned elsewhere."""
    fragment: FragmentDefinition
    directives: Sequence[Directive] | None = None

    def __post_init__(self):
        object.__setattr__(self, "directives", as_tuple(self.directives))

    @property
    def name(self) -> str:
        return self.fragment.name

    def render(self) -> str:
        return f"...{self.fragment.name}{serialize_directives(self.directives)}"


@dataclass(frozen=True)
class InlineFragment(SelectionSet):
    """An anonymous ``... on Type { ... }`` selection."""
    type: str | None = None
    fields: Sequence[Field | str] | None = None
    fragments: Sequence["FragmentSpread | InlineFragment"] | None = None
    directives: Sequence[Directive] | None = None

    def __post_init__(self):
        object.__setattr__(self, "fields", normalize_fields(self.fields))
        object.__setattr__(self, "fragments", normalize_fragments(self.fragments))
        object.__setattr__(self, "directives", as_tuple(self.directives))

    def render(self) -> str:
        selection = self.serialized_selection(self.type, "inline fragment")
        condition = f" on {self.type}" if self.type else ""
        return f"...{condition}{serialize_directives(self.directives)}{selection}"
