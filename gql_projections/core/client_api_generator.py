"""Generation of query classes and projection trees for operation root fields.

For every root field the generator emits a ``<Field>GraphQLQuery`` class and,
when the field returns an object, interface or union, a root projection.
The projection tree mirrors the schema type graph:

    MoviesProjectionRoot
        .actors()    -> Movies_ActorsProjection
            .agent() -> Movies_Actors_AgentProjection
        .on_documentary() -> Movies_DocumentaryProjection

Recursion stops at the configured depth and at the first (child, parent)
type edge that repeats on the current path, so cyclic schemas terminate.
"""

import logging
from dataclasses import dataclass, replace

from .context import GenerationContext
from .data_type_generator import DataTypeGenerator
from .ir import IRArgument, IRField, IRType, SchemaError, TypeKind
from .operations import Selection
from .selection import SelectionFilter
from .specs import (
    ArgumentSpec,
    CodeGenResult,
    GeneratedUnit,
    MethodKind,
    ProjectionBase,
    ProjectionClassSpec,
    ProjectionMethodSpec,
    QueryClassSpec,
    UnitCategory,
)
from .type_utils import TypeUtils, capitalized, safe_param_name, snake_case, unique_name

logger = logging.getLogger(__name__)

ENTITIES_ROOT = "EntitiesProjectionRoot"
ENTITY_UNION = "_Entity"

# Names the runtime base classes already define
RESERVED_PROJECTION_NAMES = {
    "get_parent", "get_root", "_add_input_arguments",
    "_fields", "_fragments", "_input_arguments", "_parent", "_root", "_schema_type",
}
RESERVED_QUERY_NAMES = {"self", "query_name", "build", "_values", "_fields_set", "_query_name"}


@dataclass(frozen=True)
class ProjectionPlan:
    """Recursion state for one projection class.

    Plans are immutable; ``descend`` and ``fragment`` return new plans, so
    sibling branches never share their visited edges.
    """
    type_def: IRType
    prefix: str
    parent_class: str | None
    root_class: str | None
    selection: Selection | None = None
    edges: frozenset[tuple[str, str]] = frozenset()
    depth: int = 0
    operation_name: str | None = None

    def descend(self, type_def: IRType, prefix: str, parent_class: str, root_class: str,
                selection: Selection | None) -> "ProjectionPlan":
        return replace(
            self,
            type_def=type_def,
            prefix=prefix,
            parent_class=parent_class,
            root_class=root_class,
            selection=selection,
            edges=self.edges | {(type_def.name, self.type_def.name)},
            depth=self.depth + 1,
        )

    def fragment(self, type_def: IRType, prefix: str, parent_class: str, root_class: str,
                 selection: Selection | None) -> "ProjectionPlan":
        return replace(
            self,
            type_def=type_def,
            prefix=prefix,
            parent_class=parent_class,
            root_class=root_class,
            selection=selection,
        )


class ClientApiGenerator:
    """Emits query classes, projections and fragments for one schema."""

    def __init__(self, context: GenerationContext):
        self.context = context
        self.config = context.config
        self.schema = context.schema
        self.type_utils = TypeUtils(context.schema, context.scalars)
        self.selection_filter = SelectionFilter(context.config)
        self.data_types = DataTypeGenerator(context)

    @property
    def namespace(self) -> str:
        return self.config.package_name_client

    def generate(self, root_type: IRType) -> CodeGenResult:
        """Emit everything for the root fields of an operation type."""
        operation_type = self.schema.operation_type_of(root_type.name) or "query"
        example = self.context.operations.find(operation_type) if self.context.operations else None
        root_selection = example.selection if example else None
        operation_name = example.name if example else None

        fields = self.selection_filter.filter_operations(
            operation_type, self.schema.fields_of(root_type.name)
        )
        fields = self.selection_filter.select_fields(root_type, fields, root_selection, root=True)

        for ir_field in fields:
            if not self.schema.is_known_type(ir_field.type_name):
                raise SchemaError(
                    f"{root_type.name}.{ir_field.name} returns unknown type '{ir_field.type_name}'"
                )

        result = CodeGenResult()
        for ir_field in fields:
            result = result.merge(self._create_query_class(ir_field, operation_type))
            type_def = self.schema.find_selectable(ir_field.type_name)
            if type_def is None:
                continue
            prefix = capitalized(ir_field.name)
            plan = ProjectionPlan(
                type_def=type_def,
                prefix=prefix,
                parent_class=None,
                root_class=None,
                selection=root_selection.child(ir_field.name, root_type.name) if root_selection else None,
                operation_name=operation_name,
            )
            result = result.merge(
                self._emit_projection(plan, f"{prefix}ProjectionRoot", ProjectionBase.ROOT)
            )
        logger.debug("Generated %d units for %s", len(result), root_type.name)
        return result

    def generate_entities(self, definitions: list[IRType]) -> CodeGenResult:
        """Emit the entities root projection for federation key types."""
        if self.config.skip_entity_queries:
            return CodeGenResult()
        key_types = [
            d for d in definitions
            if d.kind is TypeKind.OBJECT and d.has_directive(self.config.entity_key_directive)
        ]
        if not key_types:
            return CodeGenResult()
        if not self.context.registry.register(f"{self.namespace}.{ENTITIES_ROOT}"):
            return CodeGenResult()

        spec = ProjectionClassSpec(name=ENTITIES_ROOT, schema_type=ENTITY_UNION, base=ProjectionBase.ROOT)
        taken = set(RESERVED_PROJECTION_NAMES)
        fragments = CodeGenResult()
        for type_def in key_types:
            prefix = f"Entities{capitalized(type_def.name)}Key"
            class_name = f"{prefix}Projection"
            spec.methods.append(ProjectionMethodSpec(
                kind=MethodKind.FRAGMENT,
                name=unique_name(f"on_{snake_case(type_def.name)}", taken),
                returns=class_name,
                type_name=type_def.name,
            ))
            plan = ProjectionPlan(
                type_def=type_def,
                prefix=prefix,
                parent_class=ENTITIES_ROOT,
                root_class=ENTITIES_ROOT,
            )
            fragments = fragments.merge(
                self._emit_projection(plan, class_name, ProjectionBase.FRAGMENT, include_typename=False)
            )
        return self._projection_unit(spec).merge(fragments)

    def _create_query_class(self, ir_field: IRField, operation_type: str) -> CodeGenResult:
        name = f"{capitalized(ir_field.name)}GraphQLQuery"
        if not self.context.registry.register(f"{self.namespace}.{name}"):
            return CodeGenResult()

        taken = set(RESERVED_QUERY_NAMES)
        spec = QueryClassSpec(
            name=name,
            operation_name=ir_field.name,
            operation_type=operation_type,
            description=ir_field.description,
        )
        data_types = CodeGenResult()
        for argument in ir_field.arguments:
            spec.arguments.append(self._argument_spec(argument, taken, optional=True))
            spec.imports |= self.type_utils.imports_for(argument.type_name)
            data_types = data_types.merge(self.data_types.generate_referenced(argument.type_name))
        spec.fields_set_param = unique_name("fields_set", taken)

        unit = GeneratedUnit(name=name, namespace=self.namespace, category=UnitCategory.QUERY, spec=spec)
        return CodeGenResult(query_types=[unit]).merge(data_types)

    def _argument_spec(self, argument: IRArgument, taken: set[str], optional: bool = False) -> ArgumentSpec:
        return ArgumentSpec(
            name=argument.name,
            param_name=unique_name(safe_param_name(snake_case(argument.name)), taken),
            type_hint=self.type_utils.hint(
                argument.type_name, argument.is_list, optional or argument.is_optional
            ),
            always_included=self.type_utils.is_primitive(argument),
            description=argument.description,
        )

    def _emit_projection(
        self,
        plan: ProjectionPlan,
        class_name: str,
        base: ProjectionBase,
        include_typename: bool = False,
    ) -> CodeGenResult:
        """Emit one projection class and everything beneath it."""
        if not self.context.registry.register(f"{self.namespace}.{class_name}"):
            return CodeGenResult()

        type_def = plan.type_def
        is_root = base is ProjectionBase.ROOT
        root_class = class_name if is_root else plan.root_class
        root_ref = "self" if is_root else "self.get_root()"
        spec = ProjectionClassSpec(
            name=class_name,
            schema_type=type_def.name,
            base=base,
            parent_class=plan.parent_class,
            root_class=root_class,
            include_typename=include_typename,
            description=type_def.description,
        )
        may_descend = self.config.unlimited_depth or plan.depth < self.config.max_projection_depth
        if not may_descend:
            logger.debug("Depth limit reached at %s (depth %d)", class_name, plan.depth)

        # Root classes keep the full prefix for their children
        child_base_prefix = plan.prefix
        if not is_root and self.config.short_projection_names:
            child_base_prefix = self.context.shortener.shorten(plan.prefix)

        taken = set(RESERVED_PROJECTION_NAMES)
        children = CodeGenResult()
        arguments_result = CodeGenResult()
        fields = self.selection_filter.select_fields(
            type_def, self.schema.fields_of(type_def.name), plan.selection
        )
        for ir_field in fields:
            target = self.schema.find_selectable(ir_field.type_name)
            if target is not None:
                if not may_descend:
                    continue
                if (target.name, type_def.name) in plan.edges:
                    logger.debug(
                        "Cycle %s -> %s cut at %s.%s",
                        type_def.name, target.name, class_name, ir_field.name,
                    )
                    continue

            argument_names = {"self", "projection"}
            method_args = [self._argument_spec(a, argument_names) for a in ir_field.arguments]
            for argument in ir_field.arguments:
                spec.imports |= self.type_utils.imports_for(argument.type_name)
                arguments_result = arguments_result.merge(
                    self.data_types.generate_referenced(argument.type_name)
                )
            method_name = unique_name(safe_param_name(snake_case(ir_field.name)), taken)

            if target is None:
                spec.methods.append(ProjectionMethodSpec(
                    kind=MethodKind.FIELD,
                    name=method_name,
                    returns=class_name,
                    field_name=ir_field.name,
                    arguments=method_args,
                    description=ir_field.description,
                ))
                continue

            child_prefix = self._claim_prefix(f"{child_base_prefix}_{capitalized(ir_field.name)}")
            child_class = f"{child_prefix}Projection"
            spec.methods.append(ProjectionMethodSpec(
                kind=MethodKind.SUB_PROJECTION,
                name=method_name,
                returns=child_class,
                field_name=ir_field.name,
                root_ref=root_ref,
                arguments=method_args,
                description=ir_field.description,
            ))
            child_selection = plan.selection.child(ir_field.name, type_def.name) if plan.selection else None
            child_plan = plan.descend(target, child_prefix, class_name, root_class, child_selection)
            children = children.merge(self._emit_projection(child_plan, child_class, ProjectionBase.SUB))

        fragments = self._emit_fragments(plan, spec, child_base_prefix, root_class, root_ref, taken)
        data_types = CodeGenResult()
        if type_def.kind in (TypeKind.OBJECT, TypeKind.INTERFACE):
            data_types = self.data_types.generate(
                type_def, plan.selection, self.data_types.operation_namespace(plan.operation_name)
            )

        return (
            self._projection_unit(spec)
            .merge(children)
            .merge(fragments)
            .merge(data_types)
            .merge(arguments_result)
        )

    def _emit_fragments(
        self,
        plan: ProjectionPlan,
        spec: ProjectionClassSpec,
        base_prefix: str,
        root_class: str,
        root_ref: str,
        taken: set[str],
    ) -> CodeGenResult:
        """Add ``on_<type>()`` accessors for interface implementations / union members.

        Fragment classes are named from the same (possibly shortened) prefix
        as the sub-projections of the owning class.
        """
        type_def = plan.type_def
        if type_def.kind is TypeKind.INTERFACE:
            candidates = self.schema.implementations(type_def.name)
        elif type_def.kind is TypeKind.UNION:
            candidates = self.schema.union_members(type_def.name)
        else:
            return CodeGenResult()

        result = CodeGenResult()
        for concrete in self.selection_filter.select_concrete_types(candidates, plan.selection):
            prefix = self._claim_prefix(f"{base_prefix}_{capitalized(concrete.name)}")
            fragment_class = f"{prefix}Projection"
            spec.methods.append(ProjectionMethodSpec(
                kind=MethodKind.FRAGMENT,
                name=unique_name(f"on_{snake_case(concrete.name)}", taken),
                returns=fragment_class,
                root_ref=root_ref,
                type_name=concrete.name,
            ))
            selection = plan.selection.fragment(concrete.name) if plan.selection else None
            fragment_plan = plan.fragment(concrete, prefix, spec.name, root_class, selection)
            result = result.merge(
                self._emit_projection(fragment_plan, fragment_class, ProjectionBase.FRAGMENT, include_typename=True)
            )
        return result

    def _claim_prefix(self, prefix: str) -> str:
        """Return ``prefix``, suffixed with ``_`` until its class name is free."""
        while f"{self.namespace}.{prefix}Projection" in self.context.registry:
            logger.debug("%sProjection already generated, renaming", prefix)
            prefix += "_"
        return prefix

    def _projection_unit(self, spec: ProjectionClassSpec) -> CodeGenResult:
        unit = GeneratedUnit(
            name=spec.name,
            namespace=self.namespace,
            category=UnitCategory.PROJECTION,
            spec=spec,
        )
        return CodeGenResult(client_projections=[unit])
