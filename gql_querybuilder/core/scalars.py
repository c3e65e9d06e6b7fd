"""Custom scalar handlers for rendering Python values as GraphQL literals.

Provides a protocol for defining how Python objects map to GraphQL custom
scalars: which scalar type name a variable of that Python type declares, and
how a value is serialized before it is written as a literal.

Example usage:
    from decimal import Decimal
    from gql_querybuilder.core.scalars import default_registry

    class MoneyHandler:
        graphql_type = "Money"

        def serialize(self, value):
            return str(value.quantize(Decimal("0.01")))

    default_registry().register(Decimal, MoneyHandler())
"""

from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Protocol, runtime_checkable
from uuid import UUID


@runtime_checkable
class ScalarHandler(Protocol):
    """Protocol for custom scalar handlers.

    Attributes:
        graphql_type: The GraphQL scalar name (e.g., "DateTime")
    """

    graphql_type: str

    def serialize(self, value: Any) -> Any:
        """Convert a Python value to something the literal renderer accepts."""
        ...


class DateTimeHandler:
    """Handler for DateTime scalars using ISO 8601 format."""

    graphql_type = "DateTime"

    def serialize(self, value: datetime) -> str:
        """Convert datetime to ISO 8601 string."""
        return value.isoformat()


class DateHandler:
    """Handler for Date scalars using ISO 8601 date format."""

    graphql_type = "Date"

    def serialize(self, value: date) -> str:
        return value.isoformat()


class TimeHandler:
    """Handler for Time scalars using ISO 8601 time format."""

    graphql_type = "Time"

    def serialize(self, value: time) -> str:
        return value.isoformat()


class UUIDHandler:
    """Handler for UUID scalars."""

    graphql_type = "UUID"

    def serialize(self, value: UUID) -> str:
        return str(value)


class DecimalHandler:
    """Handler for Decimal scalars, sent as strings to keep precision."""

    graphql_type = "Decimal"

    def serialize(self, value: Decimal) -> str:
        return str(value)


class ScalarRegistry:
    """Registry of custom scalar handlers keyed by Python class.

    Lookups walk the class MRO, so a handler registered for ``date`` also
    covers subclasses unless a more specific one (``datetime``) exists.

    Example:
        registry = ScalarRegistry()
        handler = registry.get(datetime)
        if handler:
            scalar_name = handler.graphql_type  # "DateTime"
    """

    def __init__(self, defaults: bool = True):
        self._handlers: dict[type, ScalarHandler] = {}
        if defaults:
            self._register_defaults()

    def _register_defaults(self):
        """Register built-in default handlers."""
        self.register(datetime, DateTimeHandler())
        self.register(date, DateHandler())
        self.register(time, TimeHandler())
        self.register(UUID, UUIDHandler())
        self.register(Decimal, DecimalHandler())

    def register(self, python_type: type, handler: ScalarHandler):
        """Register a handler for a Python type."""
        if not isinstance(handler, ScalarHandler):
            raise TypeError(f"{handler!r} does not implement ScalarHandler")
        self._handlers[python_type] = handler

    def unregister(self, python_type: type):
        """Remove the handler registered for a Python type, if any."""
        self._handlers.pop(python_type, None)

    def get(self, python_type: type) -> ScalarHandler | None:
        """Get the handler for a Python type, or None if not registered."""
        for klass in getattr(python_type, "__mro__", (python_type,)):
            handler = self._handlers.get(klass)
            if handler is not None:
                return handler
        return None

    def has(self, python_type: type) -> bool:
        """Check if a handler covers a Python type."""
        return self.get(python_type) is not None

    def graphql_types(self) -> set[str]:
        """Return the GraphQL scalar names of all registered handlers."""
        return {h.graphql_type for h in self._handlers.values()}


_default_registry = ScalarRegistry()


def default_registry() -> ScalarRegistry:
    """Return the process-wide registry consulted when none is passed."""
    return _default_registry
