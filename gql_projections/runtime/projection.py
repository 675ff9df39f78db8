"""Base classes for generated projection classes.

A projection records which fields of a type are selected, which arguments
were passed to them and which fragments were added:

    projection = MoviesProjectionRoot().title().actors(limit=3).name().get_root()
    str(projection)  # "{ title actors(limit: 3) { name } }"
"""

from dataclasses import dataclass
from typing import Any, Optional


class UnsetType:
    """Marker for an argument that was not passed at all.

    ``None`` is a value (GraphQL ``null``); ``UNSET`` means "leave it out".
    """

    _instance: Optional["UnsetType"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = UnsetType()


@dataclass(frozen=True)
class InputArgument:
    """An argument passed to a projected field."""
    name: str
    value: Any


class BaseProjectionNode:
    """Root of a projection tree."""

    def __init__(self, schema_type: Optional[str] = None):
        self._schema_type = schema_type
        # field name -> child projection, or None for a leaf
        self._fields: dict[str, Optional["BaseProjectionNode"]] = {}
        self._fragments: list["FragmentProjectionNode"] = []
        self._input_arguments: dict[str, list[InputArgument]] = {}

    # Schema fields become public methods on subclasses; base names stay underscored

    def _add_input_arguments(self, field_name: str, arguments: list[InputArgument]):
        """Record the arguments of ``field_name``, dropping the unset ones.

        A later call for the same field replaces the earlier arguments.
        """
        passed = [a for a in arguments if a.value is not UNSET]
        if passed:
            self._input_arguments[field_name] = passed
        else:
            self._input_arguments.pop(field_name, None)

    def __str__(self) -> str:
        from .serializer import ProjectionSerializer

        return ProjectionSerializer().serialize(self)


class BaseSubProjectionNode(BaseProjectionNode):
    """A projection below the root, linked to its parent and root."""

    def __init__(self, parent: BaseProjectionNode, root: BaseProjectionNode, schema_type: Optional[str] = None):
        super().__init__(schema_type)
        self._parent = parent
        self._root = root

    def get_parent(self) -> BaseProjectionNode:
        return self._parent

    def get_root(self) -> BaseProjectionNode:
        return self._root


class FragmentProjectionNode(BaseSubProjectionNode):
    """An inline fragment on one concrete type of an interface or union."""

    def __str__(self) -> str:
        from .serializer import ProjectionSerializer

        return ProjectionSerializer().serialize_fragment(self)
