"""Intermediate Representation (IR) for GraphQL schemas.

This module defines dataclasses that represent GraphQL schema constructs
in a language-agnostic way, suitable for walking the type graph during
projection generation.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Scalars every GraphQL schema has without declaring them
BUILTIN_SCALARS = ("String", "Int", "Float", "Boolean", "ID")

DEFAULT_OPERATION_TYPES = {
    "query": "Query",
    "mutation": "Mutation",
    "subscription": "Subscription",
}


class SchemaError(ValueError):
    """Raised when the schema violates a precondition of code generation."""


class TypeKind(Enum):
    """The closed set of GraphQL type definition kinds."""
    OBJECT = "object"
    INTERFACE = "interface"
    UNION = "union"
    ENUM = "enum"
    SCALAR = "scalar"
    INPUT = "input"


@dataclass
class IRDirective:
    """A directive applied to a type or field, e.g. @key(fields: "id")."""
    name: str
    arguments: dict[str, Any] = field(default_factory=dict)


@dataclass
class IRArgument:
    """Represents an argument to a field or operation, or an input field."""
    name: str
    type_name: str
    is_list: bool = False
    is_optional: bool = True
    default_value: Any = None
    description: str | None = None


@dataclass
class IRField:
    """Represents a field in a GraphQL type or interface."""
    name: str
    type_name: str
    is_list: bool = False
    is_optional: bool = True  # True if nullable (no ! in GraphQL)
    description: str | None = None
    arguments: list[IRArgument] = field(default_factory=list)
    directives: list[IRDirective] = field(default_factory=list)

    def has_directive(self, name: str) -> bool:
        return any(d.name == name for d in self.directives)


@dataclass
class IREnumValue:
    """Represents a single value in a GraphQL enum."""
    name: str
    description: str | None = None


@dataclass
class IRType:
    """Represents any named GraphQL type definition.

    Which of the collections are populated depends on ``kind``: objects and
    interfaces have ``fields``, objects list their ``interfaces``, unions
    their ``member_types``, enums their ``values`` and inputs their
    ``input_fields``.
    """
    name: str
    kind: TypeKind
    fields: list[IRField] = field(default_factory=list)
    interfaces: list[str] = field(default_factory=list)
    member_types: list[str] = field(default_factory=list)
    values: list[IREnumValue] = field(default_factory=list)
    input_fields: list[IRArgument] = field(default_factory=list)
    directives: list[IRDirective] = field(default_factory=list)
    description: str | None = None

    def has_directive(self, name: str) -> bool:
        return any(d.name == name for d in self.directives)

    @property
    def is_selectable(self) -> bool:
        """True for types that need a selection set when queried."""
        return self.kind in (TypeKind.OBJECT, TypeKind.INTERFACE, TypeKind.UNION)


@dataclass
class IRSchema:
    """Complete intermediate representation of a GraphQL schema."""
    types: dict[str, IRType] = field(default_factory=dict)
    # Fields contributed by `extend type` / `extend interface`, per type name
    extensions: dict[str, list[IRField]] = field(default_factory=dict)
    operation_types: dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_OPERATION_TYPES)
    )

    def find_type(self, name: str) -> IRType | None:
        """Look up a type definition by name."""
        return self.types.get(name)

    def find_selectable(self, name: str) -> IRType | None:
        """Look up an object, interface or union type by name."""
        type_def = self.types.get(name)
        if type_def is not None and type_def.is_selectable:
            return type_def
        return None

    def require_type(self, name: str) -> IRType:
        """Look up a type that must exist."""
        type_def = self.types.get(name)
        if type_def is None:
            raise SchemaError(f"Unknown type '{name}'")
        return type_def

    def is_known_type(self, name: str) -> bool:
        return name in BUILTIN_SCALARS or name in self.types

    def fields_of(self, name: str) -> list[IRField]:
        """Return the fields of a type followed by its extension fields."""
        type_def = self.types.get(name)
        own = type_def.fields if type_def else []
        seen = set()
        result = []
        for ir_field in own + self.extensions.get(name, []):
            if ir_field.name in seen:
                continue
            seen.add(ir_field.name)
            result.append(ir_field)
        return result

    def implementations(self, interface_name: str) -> list[IRType]:
        """Return the object types implementing an interface, in declaration order."""
        return [
            t for t in self.types.values()
            if t.kind is TypeKind.OBJECT and interface_name in t.interfaces
        ]

    def union_members(self, union_name: str) -> list[IRType]:
        """Return the known member types of a union."""
        union = self.types.get(union_name)
        if union is None:
            return []
        return [self.types[m] for m in union.member_types if m in self.types]

    def operation_type_of(self, root_name: str) -> str | None:
        """Map a root type name back to 'query', 'mutation' or 'subscription'."""
        for operation_type, type_name in self.operation_types.items():
            if type_name == root_name:
                return operation_type
        return None

    def types_of_kind(self, kind: TypeKind) -> list[IRType]:
        return [t for t in self.types.values() if t.kind is kind]
