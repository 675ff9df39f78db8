"""Rendering of projections as GraphQL selection sets."""

from .projection import BaseProjectionNode, FragmentProjectionNode
from .values import InputValueSerializer

# Selected when a projection was created but nothing was chosen on it
EMPTY_SELECTION = "__typename"


class ProjectionSerializer:
    """Turns a projection tree into ``{ a b(x: 1) { c } ... on T { d } }``."""

    def __init__(self, value_serializer: InputValueSerializer | None = None):
        self.values = value_serializer or InputValueSerializer()

    def serialize(self, projection: BaseProjectionNode) -> str:
        parts = []
        for name, child in projection._fields.items():
            part = name + self._arguments(projection, name)
            if child is not None:
                part += " " + self.serialize(child)
            parts.append(part)
        for fragment in projection._fragments:
            parts.append(self.serialize_fragment(fragment))
        if not parts:
            parts.append(EMPTY_SELECTION)
        return "{ " + " ".join(parts) + " }"

    def serialize_fragment(self, fragment: FragmentProjectionNode) -> str:
        return f"... on {fragment._schema_type} {self.serialize(fragment)}"

    def _arguments(self, projection: BaseProjectionNode, field_name: str) -> str:
        arguments = projection._input_arguments.get(field_name)
        if not arguments:
            return ""
        rendered = ", ".join(f"{a.name}: {self.values.serialize(a.value)}" for a in arguments)
        return f"({rendered})"
