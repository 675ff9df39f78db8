"""Structured description of the classes a generation run emits.

The walker produces these descriptors; the templates turn them into source
text. Nothing in here knows Python syntax beyond identifiers and type hints.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


@dataclass
class ArgumentSpec:
    """A GraphQL argument exposed as a Python parameter."""
    name: str  # GraphQL name, used as the input key
    param_name: str  # Python identifier
    type_hint: str
    # Written to the request even when None (non-null Int/Float/Boolean)
    always_included: bool = False
    description: str | None = None


class MethodKind(Enum):
    FIELD = "field"  # scalar-like field, returns the node itself
    SUB_PROJECTION = "sub_projection"  # selectable field, returns the child
    FRAGMENT = "fragment"  # on<Type>(), returns a fragment


@dataclass
class ProjectionMethodSpec:
    kind: MethodKind
    name: str
    returns: str
    field_name: str | None = None
    root_ref: str = "self"
    arguments: list[ArgumentSpec] = field(default_factory=list)
    type_name: str | None = None  # concrete type of a fragment method
    description: str | None = None


class ProjectionBase(Enum):
    ROOT = "BaseProjectionNode"
    SUB = "BaseSubProjectionNode"
    FRAGMENT = "FragmentProjectionNode"


@dataclass
class ProjectionClassSpec:
    name: str
    schema_type: str
    base: ProjectionBase
    parent_class: str | None = None
    root_class: str | None = None
    include_typename: bool = False
    methods: list[ProjectionMethodSpec] = field(default_factory=list)
    imports: set[str] = field(default_factory=set)
    description: str | None = None

    @property
    def is_root(self) -> bool:
        return self.base is ProjectionBase.ROOT


@dataclass
class QueryClassSpec:
    name: str
    operation_name: str
    operation_type: str
    arguments: list[ArgumentSpec] = field(default_factory=list)
    fields_set_param: str = "fields_set"
    imports: set[str] = field(default_factory=set)
    description: str | None = None


class DataKind(Enum):
    MODEL = "model"
    INPUT = "input"
    ENUM = "enum"


@dataclass
class DataFieldSpec:
    name: str
    type_hint: str
    alias: str | None = None
    required: bool = False
    description: str | None = None


@dataclass
class DataClassSpec:
    name: str
    kind: DataKind
    fields: list[DataFieldSpec] = field(default_factory=list)
    values: list[str] = field(default_factory=list)  # enum values
    imports: set[str] = field(default_factory=set)
    description: str | None = None


UnitSpec = Union[QueryClassSpec, ProjectionClassSpec, DataClassSpec]


class UnitCategory(Enum):
    QUERY = "query"
    PROJECTION = "projection"
    DATA_TYPE = "data_type"


@dataclass
class GeneratedUnit:
    """One emitted class and the namespace it belongs to."""
    name: str
    namespace: str
    category: UnitCategory
    spec: UnitSpec

    @property
    def qualified_name(self) -> str:
        return f"{self.namespace}.{self.name}"


@dataclass
class CodeGenResult:
    """Everything produced by a run, grouped by category.

    Results combine with ``merge``, which concatenates each list and leaves
    both operands untouched.
    """
    query_types: list[GeneratedUnit] = field(default_factory=list)
    client_projections: list[GeneratedUnit] = field(default_factory=list)
    data_types: list[GeneratedUnit] = field(default_factory=list)

    def merge(self, other: "CodeGenResult") -> "CodeGenResult":
        return CodeGenResult(
            query_types=self.query_types + other.query_types,
            client_projections=self.client_projections + other.client_projections,
            data_types=self.data_types + other.data_types,
        )

    def units(self) -> list[GeneratedUnit]:
        return self.query_types + self.client_projections + self.data_types

    def find(self, name: str) -> GeneratedUnit | None:
        for unit in self.units():
            if unit.name == name:
                return unit
        return None

    def __len__(self) -> int:
        return len(self.query_types) + len(self.client_projections) + len(self.data_types)
