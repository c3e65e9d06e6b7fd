"""Exceptions raised while building or rendering GraphQL documents.

Every failure is raised synchronously from the ``render()`` call (or the
constructor) that hit it; nothing is caught and retried inside the builder.
"""

from typing import Any


class QueryBuilderError(Exception):
    """Base exception for all query builder failures.

    Attributes:
        message: Human-readable error message
        details: Extra context about the failing node or value
    """

    def __init__(self, message: str, **details: Any):
        self.message = message
        self.details = details
        super().__init__(message)


class RenderError(QueryBuilderError):
    """Raised when a node or value cannot be rendered as GraphQL text."""


class EmptySelectionError(RenderError):
    """Raised when an object, fragment or operation selects nothing."""

    def __init__(self, name: str | None, kind: str = "object"):
        self.name = name
        self.kind = kind
        super().__init__(
            f"{kind} {name!r} must select at least one field or fragment",
            name=name,
            kind=kind,
        )


class UnrepresentableTypeError(QueryBuilderError, TypeError):
    """Raised when a value or Python type has no GraphQL type equivalent."""


class InvalidDefaultError(QueryBuilderError, ValueError):
    """Raised when a variable-typed variable definition has a default value."""


class InvalidFragmentError(QueryBuilderError, ValueError):
    """Raised when a fragment definition is built in an invalid state."""


class InvalidNameError(QueryBuilderError, ValueError):
    """Raised when a field or directive name is empty."""
