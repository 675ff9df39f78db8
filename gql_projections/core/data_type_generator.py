"""Generation of plain data types for the schema types a client touches.

Object and interface types become pydantic models whose fields are all
optional, since a response only carries what the projection selected.
Input types become models with required non-null fields, and enums become
``str`` enums so they serialize as their GraphQL names.

Models shaped by a named example operation go into a subpackage of the
types package named after the operation (``types.moviesexample``), so the
trimmed models of an operation never replace the full ones.
"""

import logging

from .context import GenerationContext
from .ir import IRArgument, IRField, IRType, TypeKind
from .operations import Selection
from .selection import SelectionFilter
from .specs import (
    CodeGenResult,
    DataClassSpec,
    DataFieldSpec,
    DataKind,
    GeneratedUnit,
    UnitCategory,
)
from .type_utils import TypeUtils, safe_param_name, snake_case, unique_name

logger = logging.getLogger(__name__)

# BaseModel attributes a field must not shadow
RESERVED_MODEL_ATTRIBUTES = {
    "copy", "dict", "json", "schema", "schema_json", "construct", "validate",
    "parse_obj", "parse_raw", "parse_file", "from_orm", "update_forward_refs",
    "model_config", "model_fields",
}

# Modules the types package already contains
RESERVED_MODULES = {"models"}

TYPENAME_FIELD = "typename"


def model_field_name(graphql_name: str, taken: set[str]) -> str:
    """Python attribute name for a GraphQL field on a generated model."""
    # pydantic treats leading underscores as private attributes
    name = safe_param_name(snake_case(graphql_name)).lstrip("_")
    if not name or not name[0].isalpha():
        name = f"field_{name}"
    if name in RESERVED_MODEL_ATTRIBUTES:
        name += "_"
    return unique_name(name, taken)


class DataTypeGenerator:
    """Emits data type specs into the ``package_name_types`` namespace."""

    def __init__(self, context: GenerationContext):
        self.context = context
        self.config = context.config
        self.schema = context.schema
        self.type_utils = TypeUtils(context.schema, context.scalars)
        self.selection_filter = SelectionFilter(context.config)

    @property
    def namespace(self) -> str:
        return self.config.package_name_types

    def operation_namespace(self, operation_name: str | None) -> str:
        """Namespace for the models of one example operation.

        Anonymous operations share the types package.
        """
        if not operation_name:
            return self.namespace
        module = safe_param_name(operation_name.lower())
        if module in RESERVED_MODULES:
            module += "_"
        return f"{self.namespace}.{module}"

    def generate_type_name(self, name: str) -> str:
        return name

    def generate(
        self,
        type_def: IRType,
        selection: Selection | None = None,
        namespace: str | None = None,
    ) -> CodeGenResult:
        """Emit ``type_def`` and every type it references, once per namespace."""
        if not self.config.generate_data_types or type_def.kind is TypeKind.SCALAR:
            return CodeGenResult()
        namespace = namespace or self.namespace
        class_name = self.generate_type_name(type_def.name)
        if not self.context.registry.register(f"{namespace}.{class_name}"):
            return CodeGenResult()

        if type_def.kind is TypeKind.UNION:
            result = CodeGenResult()
            for member in self.schema.union_members(type_def.name):
                member_selection = selection.fragment(member.name) if selection else None
                result = result.merge(self.generate(member, member_selection, namespace))
            return result
        if type_def.kind is TypeKind.ENUM:
            spec = DataClassSpec(
                name=class_name,
                kind=DataKind.ENUM,
                values=[v.name for v in type_def.values],
                description=type_def.description,
            )
            return self._unit(spec, namespace)
        if type_def.kind is TypeKind.INPUT:
            return self._generate_input(class_name, type_def, namespace)
        return self._generate_model(class_name, type_def, selection, namespace)

    def generate_referenced(self, type_name: str, namespace: str | None = None) -> CodeGenResult:
        """Emit the class for an argument or field type, if it needs one."""
        type_def = self.schema.find_type(type_name)
        if type_def is None or not self.type_utils.is_data_type(type_name):
            return CodeGenResult()
        return self.generate(type_def, namespace=namespace)

    def _generate_model(
        self,
        class_name: str,
        type_def: IRType,
        selection: Selection | None,
        namespace: str,
    ) -> CodeGenResult:
        fields = self.selection_filter.select_fields(
            type_def, self.schema.fields_of(type_def.name), selection
        )
        spec = DataClassSpec(name=class_name, kind=DataKind.MODEL, description=type_def.description)
        taken = {TYPENAME_FIELD}
        dependencies = CodeGenResult()
        for ir_field in fields:
            spec.fields.append(self._field_spec(ir_field, taken, required=False))
            spec.imports |= self.type_utils.imports_for(ir_field.type_name)

            child = selection.child(ir_field.name, type_def.name) if selection else None
            if child is not None and not child.fields and not child.fragments:
                child = None
            target = self.schema.find_type(ir_field.type_name)
            if target is not None and self.type_utils.is_data_type(target.name):
                dependencies = dependencies.merge(self.generate(target, child, namespace))

        logger.debug("Generated data type %s.%s with %d fields", namespace, class_name, len(spec.fields))
        return self._unit(spec, namespace).merge(dependencies)

    def _generate_input(self, class_name: str, type_def: IRType, namespace: str) -> CodeGenResult:
        spec = DataClassSpec(name=class_name, kind=DataKind.INPUT, description=type_def.description)
        taken: set[str] = set()
        dependencies = CodeGenResult()
        for argument in type_def.input_fields:
            required = not argument.is_optional and argument.default_value is None
            spec.fields.append(self._field_spec(argument, taken, required=required))
            spec.imports |= self.type_utils.imports_for(argument.type_name)
            dependencies = dependencies.merge(self.generate_referenced(argument.type_name, namespace))
        return self._unit(spec, namespace).merge(dependencies)

    def _field_spec(self, source: IRField | IRArgument, taken: set[str], required: bool) -> DataFieldSpec:
        name = model_field_name(source.name, taken)
        return DataFieldSpec(
            name=name,
            type_hint=self.type_utils.hint(source.type_name, source.is_list, is_optional=not required),
            alias=source.name if name != source.name else None,
            required=required,
            description=source.description,
        )

    def _unit(self, spec: DataClassSpec, namespace: str) -> CodeGenResult:
        unit = GeneratedUnit(
            name=spec.name,
            namespace=namespace,
            category=UnitCategory.DATA_TYPE,
            spec=spec,
        )
        return CodeGenResult(data_types=[unit])
