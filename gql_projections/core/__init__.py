"""Core modules for GraphQL projection generation."""

from .client_api_generator import ClientApiGenerator, ProjectionPlan
from .codegen import CodeGen
from .config import UNLIMITED_DEPTH, CodeGenConfig
from .context import GenerationContext
from .data_type_generator import DataTypeGenerator
from .generator import CodeGenerator
from .hooks import (
    AddHeaderHook,
    FilterTypesHook,
    HookRunner,
    PostGenerateHook,
    PreGenerateHook,
)
from .ir import (
    IRArgument,
    IRDirective,
    IREnumValue,
    IRField,
    IRSchema,
    IRType,
    SchemaError,
    TypeKind,
)
from .operations import ExampleOperation, OperationDocument, Selection
from .parser import SchemaParser
from .registry import NameRegistry
from .scalars import (
    DateHandler,
    DateTimeHandler,
    JSONHandler,
    MappedScalar,
    ScalarHandler,
    ScalarRegistry,
    TimeHandler,
    UUIDHandler,
)
from .selection import SelectionFilter
from .shortener import ClassnameShortener
from .specs import CodeGenResult, GeneratedUnit, UnitCategory
from .type_utils import TypeUtils

__all__ = [
    # Scalars
    "ScalarHandler",
    "ScalarRegistry",
    "DateTimeHandler",
    "DateHandler",
    "TimeHandler",
    "UUIDHandler",
    "JSONHandler",
    "MappedScalar",
    # Hooks
    "PreGenerateHook",
    "PostGenerateHook",
    "AddHeaderHook",
    "FilterTypesHook",
    "HookRunner",
    # IR types
    "IRArgument",
    "IRDirective",
    "IREnumValue",
    "IRField",
    "IRSchema",
    "IRType",
    "SchemaError",
    "TypeKind",
    # Parsing
    "SchemaParser",
    "OperationDocument",
    "ExampleOperation",
    "Selection",
    # Generation
    "CodeGen",
    "CodeGenConfig",
    "UNLIMITED_DEPTH",
    "GenerationContext",
    "ClientApiGenerator",
    "ProjectionPlan",
    "DataTypeGenerator",
    "SelectionFilter",
    "NameRegistry",
    "ClassnameShortener",
    "TypeUtils",
    "CodeGenResult",
    "GeneratedUnit",
    "UnitCategory",
    # Rendering
    "CodeGenerator",
]
