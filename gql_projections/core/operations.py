"""Example operations used to restrict which projection methods are generated.

An example operation document is a regular executable GraphQL document.
Its selection sets are normalized into ``Selection`` trees:

    query MoviesExample {
        movies {
            title
            ... on Documentary { subject }
        }
    }

becomes a ``movies`` selection with a ``title`` field and a ``Documentary``
fragment holding ``subject``.
"""

from dataclasses import dataclass, field
from pathlib import Path

from graphql import (
    DocumentNode,
    FieldNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    InlineFragmentNode,
    OperationDefinitionNode,
    SelectionSetNode,
    parse,
)


@dataclass
class Selection:
    """A field (or fragment) and what was selected beneath it.

    For fragments, ``name`` is the type condition.
    """
    name: str
    fields: list["Selection"] = field(default_factory=list)
    fragments: list["Selection"] = field(default_factory=list)

    def fields_for(self, type_name: str | None = None) -> list["Selection"]:
        """Return the field selections that apply at a position of ``type_name``.

        Fragments on the same type are folded in; a field selected twice is
        merged into one entry, keeping the first position.
        """
        sources = [self] + [f for f in self.fragments if f.name == type_name]
        merged: dict[str, Selection] = {}
        for source in sources:
            for selected in source.fields:
                if selected.name in merged:
                    merged[selected.name] = merged[selected.name].merged(selected)
                else:
                    merged[selected.name] = selected
        return list(merged.values())

    def child(self, field_name: str, type_name: str | None = None) -> "Selection | None":
        for selected in self.fields_for(type_name):
            if selected.name == field_name:
                return selected
        return None

    def fragment(self, type_name: str) -> "Selection | None":
        found = None
        for fragment in self.fragments:
            if fragment.name == type_name:
                found = fragment if found is None else found.merged(fragment)
        return found

    def fragment_types(self) -> list[str]:
        seen: list[str] = []
        for fragment in self.fragments:
            if fragment.name not in seen:
                seen.append(fragment.name)
        return seen

    def merged(self, other: "Selection") -> "Selection":
        return Selection(
            name=self.name,
            fields=self.fields + other.fields,
            fragments=self.fragments + other.fragments,
        )


@dataclass
class ExampleOperation:
    """One operation of an example document."""
    name: str | None
    operation_type: str  # 'query', 'mutation' or 'subscription'
    selection: Selection


class OperationDocument:
    """Parsed example operations, looked up by operation type."""

    def __init__(self, document: DocumentNode):
        self._fragments = {
            d.name.value: d
            for d in document.definitions
            if isinstance(d, FragmentDefinitionNode)
        }
        self.operations: list[ExampleOperation] = [
            ExampleOperation(
                name=d.name.value if d.name else None,
                operation_type=d.operation.value,
                selection=self._convert(
                    d.name.value if d.name else d.operation.value,
                    d.selection_set,
                    frozenset(),
                ),
            )
            for d in document.definitions
            if isinstance(d, OperationDefinitionNode)
        ]

    @classmethod
    def parse(cls, content: str) -> "OperationDocument":
        return cls(parse(content))

    @classmethod
    def from_path(cls, path: str | Path) -> "OperationDocument":
        return cls.parse(Path(path).read_text())

    def find(self, operation_type: str) -> ExampleOperation | None:
        """Return the first operation of the given type, if any."""
        for operation in self.operations:
            if operation.operation_type == operation_type:
                return operation
        return None

    def _convert(
        self,
        name: str,
        selection_set: SelectionSetNode | None,
        spreading: frozenset[str],
    ) -> Selection:
        selection = Selection(name=name)
        if selection_set is None:
            return selection
        for node in selection_set.selections:
            if isinstance(node, FieldNode):
                selection.fields.append(
                    self._convert(node.name.value, node.selection_set, spreading)
                )
            elif isinstance(node, InlineFragmentNode):
                if node.type_condition is None:
                    inner = self._convert(name, node.selection_set, spreading)
                    selection.fields.extend(inner.fields)
                    selection.fragments.extend(inner.fragments)
                else:
                    selection.fragments.append(
                        self._convert(node.type_condition.name.value, node.selection_set, spreading)
                    )
            elif isinstance(node, FragmentSpreadNode):
                fragment_name = node.name.value
                definition = self._fragments.get(fragment_name)
                if definition is None or fragment_name in spreading:
                    continue
                selection.fragments.append(
                    self._convert(
                        definition.type_condition.name.value,
                        definition.selection_set,
                        spreading | {fragment_name},
                    )
                )
        return selection
