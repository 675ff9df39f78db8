"""Base classes for generated query classes."""

from abc import ABC, abstractmethod
from typing import Any, Optional


class GraphQLQuery(ABC):
    """One root field of an operation and the arguments passed to it.

    Subclasses fill ``input`` with the arguments that were given, keyed by
    their GraphQL names.
    """

    def __init__(self, operation: str = "query", query_name: Optional[str] = None):
        self.operation = operation
        self.query_name = query_name
        self.input: dict[str, Any] = {}
        self.query_alias: Optional[str] = None

    @abstractmethod
    def get_operation_name(self) -> str:
        """The root field this query selects."""


class EntitiesGraphQLQuery(GraphQLQuery):
    """Federation ``_entities(representations: ...)`` query."""

    def __init__(self, representations: Optional[list[dict[str, Any]]] = None, query_name: Optional[str] = None):
        super().__init__("query", query_name)
        self.input["representations"] = list(representations or [])

    def get_operation_name(self) -> str:
        return "_entities"
