"""Mapping of GraphQL type references to Python names and type hints."""

import re

from .ir import IRArgument, IRSchema, TypeKind
from .scalars import ScalarRegistry

GRAPHQL_TO_PYTHON = {
    "String": "str",
    "ID": "str",
    "Int": "int",
    "Float": "float",
    "Boolean": "bool",
}

# Non-null arguments of these types are always sent, even when None
PRIMITIVE_SCALARS = ("Int", "Float", "Boolean")

# Python reserved keywords that cannot be used as identifiers
PYTHON_KEYWORDS = {
    'False', 'None', 'True', 'and', 'as', 'assert', 'async', 'await',
    'break', 'class', 'continue', 'def', 'del', 'elif', 'else', 'except',
    'finally', 'for', 'from', 'global', 'if', 'import', 'in', 'is',
    'lambda', 'nonlocal', 'not', 'or', 'pass', 'raise', 'return', 'try',
    'while', 'with', 'yield'
}


def snake_case(name: str) -> str:
    """Convert PascalCase or camelCase to snake_case."""
    s1 = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", name)
    return re.sub("([a-z0-9])([A-Z])", r"\1_\2", s1).lower()


def pascal_case(name: str) -> str:
    """Convert snake_case to PascalCase."""
    return "".join(word.capitalize() for word in name.split("_"))


def capitalized(name: str) -> str:
    """Upper-case the first letter only: movieTitle -> MovieTitle."""
    return name[:1].upper() + name[1:]


def safe_param_name(name: str) -> str:
    """Make a parameter name safe for Python by suffixing keywords with underscore."""
    if name in PYTHON_KEYWORDS:
        return f"{name}_"
    return name


def unique_name(name: str, taken: set[str]) -> str:
    """Append underscores to ``name`` until it is not in ``taken``, then claim it."""
    while name in taken:
        name += "_"
    taken.add(name)
    return name


class TypeUtils:
    """Resolves GraphQL type names against the schema and scalar registry.

    Example:
        utils = TypeUtils(schema, ScalarRegistry())
        utils.hint("Movie", is_list=True)        # "Optional[List[Movie]]"
        utils.hint("Int", is_optional=False)     # "int"
        utils.imports_for("DateTime")            # {"from datetime import datetime"}
    """

    def __init__(self, schema: IRSchema, scalars: ScalarRegistry):
        self.schema = schema
        self.scalars = scalars

    def python_type(self, type_name: str) -> str:
        if type_name in GRAPHQL_TO_PYTHON:
            return GRAPHQL_TO_PYTHON[type_name]
        handler = self.scalars.get(type_name)
        if handler is not None:
            return handler.python_type

        type_def = self.schema.find_type(type_name)
        if type_def is None or type_def.kind is TypeKind.SCALAR:
            return "Any"
        if type_def.kind is TypeKind.UNION:
            members = [m.name for m in self.schema.union_members(type_name)]
            if not members:
                return "Any"
            if len(members) == 1:
                return members[0]
            return f"Union[{', '.join(members)}]"
        return type_def.name

    def hint(self, type_name: str, is_list: bool = False, is_optional: bool = True) -> str:
        result = self.python_type(type_name)
        if is_list:
            result = f"List[{result}]"
        if is_optional and result != "Any":
            result = f"Optional[{result}]"
        return result

    def imports_for(self, type_name: str) -> set[str]:
        """Return the import statements a hint for ``type_name`` needs."""
        if type_name in GRAPHQL_TO_PYTHON:
            return set()
        handler = self.scalars.get(type_name)
        if handler is not None and handler.import_statement:
            return {handler.import_statement}
        return set()

    @staticmethod
    def is_primitive(argument: IRArgument) -> bool:
        return (
            argument.type_name in PRIMITIVE_SCALARS
            and not argument.is_optional
            and not argument.is_list
        )

    def is_data_type(self, type_name: str) -> bool:
        """True if ``type_name`` gets a class in the types namespace."""
        if type_name in GRAPHQL_TO_PYTHON or self.scalars.has(type_name):
            return False
        type_def = self.schema.find_type(type_name)
        return type_def is not None and type_def.kind is not TypeKind.SCALAR
