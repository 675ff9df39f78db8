"""Custom scalar handlers for GraphQL code generation.

Provides a protocol for defining how GraphQL custom scalars map to Python
types in generated annotations, and which import each type needs.

Example usage:
    from gql_projections.core.scalars import MappedScalar, ScalarRegistry

    registry = ScalarRegistry()
    registry.register("Money", MappedScalar.from_path("decimal.Decimal"))

    handler = registry.get("Money")
    handler.python_type        # "Decimal"
    handler.import_statement   # "from decimal import Decimal"
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class ScalarHandler(Protocol):
    """Protocol for custom scalar handlers.

    Attributes:
        python_type: The Python type name (e.g., "datetime", "Decimal")
        import_statement: The import needed for this type, or "" for builtins
    """

    python_type: str
    import_statement: str


class DateTimeHandler:
    """Handler for DateTime scalars."""

    python_type = "datetime"
    import_statement = "from datetime import datetime"


class DateHandler:
    """Handler for Date scalars."""

    python_type = "date"
    import_statement = "from datetime import date"


class TimeHandler:
    """Handler for Time scalars."""

    python_type = "time"
    import_statement = "from datetime import time"


class UUIDHandler:
    """Handler for UUID scalars."""

    python_type = "UUID"
    import_statement = "from uuid import UUID"


class JSONHandler:
    """Handler for JSON scalars (pass-through)."""

    python_type = "Any"
    import_statement = "from typing import Any"


@dataclass(frozen=True)
class MappedScalar:
    """Handler built from a user-supplied type mapping."""

    python_type: str
    import_statement: str = ""

    @classmethod
    def from_path(cls, path: str) -> "MappedScalar":
        """Build a handler from "int" or a dotted path like "decimal.Decimal"."""
        module, _, name = path.rpartition(".")
        if not name.isidentifier() or (module and not all(p.isidentifier() for p in module.split("."))):
            raise ValueError(f"Invalid type path: {path!r}")
        if not module:
            return cls(python_type=name)
        return cls(python_type=name, import_statement=f"from {module} import {name}")


class ScalarRegistry:
    """Registry for custom scalar handlers.

    Manages the mapping between GraphQL scalar names and their handlers.

    Example:
        registry = ScalarRegistry()
        registry.register("DateTime", DateTimeHandler())

        handler = registry.get("DateTime")
        if handler:
            python_type = handler.python_type  # "datetime"
    """

    def __init__(self):
        self._handlers: dict[str, ScalarHandler] = {}
        # Register default handlers
        self._register_defaults()

    def _register_defaults(self):
        """Register built-in default handlers."""
        self.register("DateTime", DateTimeHandler())
        self.register("Date", DateHandler())
        self.register("Time", TimeHandler())
        self.register("UUID", UUIDHandler())
        self.register("JSON", JSONHandler())
        self.register("JSONObject", JSONHandler())
        self.register("Long", MappedScalar.from_path("int"))
        self.register("BigDecimal", MappedScalar.from_path("decimal.Decimal"))

    def register(self, scalar_name: str, handler: ScalarHandler):
        """Register a handler for a scalar type."""
        self._handlers[scalar_name] = handler

    def get(self, scalar_name: str) -> ScalarHandler | None:
        """Get the handler for a scalar type, or None if not registered."""
        return self._handlers.get(scalar_name)

    def has(self, scalar_name: str) -> bool:
        """Check if a handler is registered for a scalar type."""
        return scalar_name in self._handlers

    def get_all_imports(self) -> set:
        """Get all import statements needed for registered handlers."""
        return {h.import_statement for h in self._handlers.values() if h.import_statement}
