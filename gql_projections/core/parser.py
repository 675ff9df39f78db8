"""GraphQL schema parser using graphql-core.

Parses .graphqls / .graphql files and produces an IRSchema.
"""

import logging
import os
from typing import Any

from graphql import (
    EnumTypeDefinitionNode,
    InputObjectTypeDefinitionNode,
    InterfaceTypeDefinitionNode,
    InterfaceTypeExtensionNode,
    ListTypeNode,
    NamedTypeNode,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    ScalarTypeDefinitionNode,
    SchemaDefinitionNode,
    TypeNode,
    UnionTypeDefinitionNode,
    UnionTypeExtensionNode,
    parse,
    value_from_ast_untyped,
)

from .ir import (
    IRArgument,
    IRDirective,
    IREnumValue,
    IRField,
    IRSchema,
    IRType,
    TypeKind,
)

logger = logging.getLogger(__name__)

SCHEMA_EXTENSIONS = (".graphqls", ".graphql")


class SchemaParser:
    """Parses GraphQL schema files into IR."""

    def __init__(self, schema_path: str | None = None):
        """Initialize a parser with a path to a schema file or directory."""
        self.schema_path = schema_path
        self.ir = IRSchema()
        self.current_file = ""

    @classmethod
    def parse_string(cls, content: str) -> IRSchema:
        """Parse SDL held in a string."""
        parser = cls()
        parser.current_file = "<string>"
        parser._parse_content(content)
        return parser.ir

    def parse_all(self) -> IRSchema:
        """Parse all schema files and return the complete IR."""
        for file_path in self._collect_schema_files():
            self.current_file = os.path.basename(file_path)
            with open(file_path) as f:
                self._parse_content(f.read())
        return self.ir

    def _parse_content(self, content: str):
        try:
            ast = parse(content)
        except Exception as e:
            logger.error("Error parsing %s: %s", self.current_file, e)
            raise
        self._process_ast(ast)

    def _collect_schema_files(self) -> list[str]:
        """Collect all schema files from path."""
        files = []
        if os.path.isfile(self.schema_path):
            if self.schema_path.endswith(SCHEMA_EXTENSIONS):
                files.append(self.schema_path)
        else:
            for root, _, filenames in os.walk(self.schema_path):
                for filename in filenames:
                    if filename.endswith(SCHEMA_EXTENSIONS):
                        files.append(os.path.join(root, filename))
        return sorted(files)

    def _process_ast(self, ast):
        """Process GraphQL AST and populate IR."""
        for definition in ast.definitions:
            if isinstance(definition, ScalarTypeDefinitionNode):
                self._add_type(definition, TypeKind.SCALAR)
            elif isinstance(definition, EnumTypeDefinitionNode):
                self._process_enum(definition)
            elif isinstance(definition, InterfaceTypeDefinitionNode):
                self._process_object_type(definition, TypeKind.INTERFACE)
            elif isinstance(definition, ObjectTypeDefinitionNode):
                self._process_object_type(definition, TypeKind.OBJECT)
            elif isinstance(definition, (ObjectTypeExtensionNode, InterfaceTypeExtensionNode)):
                self._process_extension(definition)
            elif isinstance(definition, UnionTypeDefinitionNode):
                self._process_union(definition)
            elif isinstance(definition, UnionTypeExtensionNode):
                self._process_union_extension(definition)
            elif isinstance(definition, InputObjectTypeDefinitionNode):
                self._process_input_type(definition)
            elif isinstance(definition, SchemaDefinitionNode):
                self._process_schema_definition(definition)

    def _add_type(self, node, kind: TypeKind, **attributes) -> IRType:
        name = node.name.value
        ir_type = IRType(
            name=name,
            kind=kind,
            directives=self._process_directives(node.directives),
            description=node.description.value if node.description else None,
            **attributes,
        )
        existing = self.ir.types.get(name)
        if existing is not None:
            # An extension was seen before its base definition
            ir_type.directives.extend(existing.directives)
            ir_type.interfaces.extend(i for i in existing.interfaces if i not in ir_type.interfaces)
            ir_type.member_types.extend(existing.member_types)
        self.ir.types[name] = ir_type
        return ir_type

    def _process_enum(self, node: EnumTypeDefinitionNode):
        values = [
            IREnumValue(
                name=v.name.value,
                description=v.description.value if v.description else None,
            )
            for v in node.values or []
        ]
        self._add_type(node, TypeKind.ENUM, values=values)

    def _process_object_type(self, node, kind: TypeKind):
        self._add_type(
            node,
            kind,
            fields=self._process_fields(node.fields or []),
            interfaces=[i.name.value for i in node.interfaces or []],
        )

    def _process_union(self, node: UnionTypeDefinitionNode):
        self._add_type(
            node,
            TypeKind.UNION,
            member_types=[t.name.value for t in node.types or []],
        )

    def _process_union_extension(self, node: UnionTypeExtensionNode):
        union = self.ir.types.get(node.name.value)
        if union is None:
            union = self._placeholder(node.name.value, TypeKind.UNION)
        union.member_types.extend(t.name.value for t in node.types or [])

    def _process_input_type(self, node: InputObjectTypeDefinitionNode):
        self._add_type(
            node,
            TypeKind.INPUT,
            input_fields=self._process_arguments(node.fields or []),
        )

    def _process_extension(self, node):
        """Process 'extend type' and 'extend interface' definitions.

        Extension fields are kept apart from the base definition; extension
        directives (e.g. a federation @key) are merged into the type.
        """
        name = node.name.value
        kind = TypeKind.INTERFACE if isinstance(node, InterfaceTypeExtensionNode) else TypeKind.OBJECT
        type_def = self.ir.types.get(name)
        if type_def is None:
            type_def = self._placeholder(name, kind)
        type_def.directives.extend(self._process_directives(node.directives))
        if isinstance(node, ObjectTypeExtensionNode):
            type_def.interfaces.extend(
                i.name.value for i in node.interfaces or []
                if i.name.value not in type_def.interfaces
            )
        self.ir.extensions.setdefault(name, []).extend(self._process_fields(node.fields or []))

    def _placeholder(self, name: str, kind: TypeKind) -> IRType:
        type_def = IRType(name=name, kind=kind)
        self.ir.types[name] = type_def
        return type_def

    def _process_schema_definition(self, node: SchemaDefinitionNode):
        for operation_type in node.operation_types:
            self.ir.operation_types[operation_type.operation.value] = operation_type.type.name.value

    def _process_fields(self, field_nodes) -> list[IRField]:
        """Process field definitions into the IRField list."""
        fields = []
        for node in field_nodes:
            type_info = self._get_type_info(node.type)
            fields.append(
                IRField(
                    name=node.name.value,
                    type_name=type_info["name"],
                    is_list=type_info["is_list"],
                    is_optional=type_info["is_optional"],
                    description=node.description.value if node.description else None,
                    arguments=self._process_arguments(node.arguments or []),
                    directives=self._process_directives(node.directives),
                )
            )
        return fields

    def _process_arguments(self, input_nodes) -> list[IRArgument]:
        args = []
        for arg_node in input_nodes:
            arg_type_info = self._get_type_info(arg_node.type)
            args.append(
                IRArgument(
                    name=arg_node.name.value,
                    type_name=arg_type_info["name"],
                    is_list=arg_type_info["is_list"],
                    is_optional=arg_type_info["is_optional"],
                    default_value=value_from_ast_untyped(arg_node.default_value)
                    if arg_node.default_value is not None
                    else None,
                    description=arg_node.description.value
                    if arg_node.description
                    else None,
                )
            )
        return args

    @staticmethod
    def _process_directives(directive_nodes) -> list[IRDirective]:
        return [
            IRDirective(
                name=d.name.value,
                arguments={
                    a.name.value: value_from_ast_untyped(a.value) for a in d.arguments or []
                },
            )
            for d in directive_nodes or []
        ]

    @staticmethod
    def _get_type_info(type_node: TypeNode) -> dict[str, Any]:
        """Extract the type name, is_list, and is_optional from the type node."""
        is_optional = True
        is_list = False

        # NonNull wrapper means not optional
        if isinstance(type_node, NonNullTypeNode):
            is_optional = False
            type_node = type_node.type

        # List wrapper
        if isinstance(type_node, ListTypeNode):
            is_list = True
            type_node = type_node.type
            # Handle non-null inside a list [Type!]
            if isinstance(type_node, NonNullTypeNode):
                type_node = type_node.type

        # Handle nested lists [[Type]] (rare but possible)
        while isinstance(type_node, (ListTypeNode, NonNullTypeNode)):
            type_node = type_node.type

        if not isinstance(type_node, NamedTypeNode):
            raise ValueError(f"Expected NamedTypeNode, got {type(type_node)}")

        return {
            "name": type_node.name.value,
            "is_list": is_list,
            "is_optional": is_optional,
        }
