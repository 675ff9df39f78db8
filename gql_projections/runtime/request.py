"""Assembly of complete GraphQL operation documents."""

from typing import Optional

from .projection import BaseProjectionNode
from .query import GraphQLQuery
from .serializer import ProjectionSerializer
from .values import InputValueSerializer


class GraphQLQueryRequest:
    """A query class plus the projection selecting its result.

    Example:
        request = GraphQLQueryRequest(
            MoviesGraphQLQuery(title_filter="Matrix"),
            MoviesProjectionRoot().title(),
        )
        request.serialize()
        # 'query { movies(titleFilter: "Matrix") { title } }'
    """

    def __init__(
        self,
        query: GraphQLQuery,
        projection: Optional[BaseProjectionNode] = None,
        value_serializer: Optional[InputValueSerializer] = None,
    ):
        self.query = query
        self.projection = projection
        self.values = value_serializer or InputValueSerializer()

    def serialize(self) -> str:
        header = self.query.operation
        if self.query.query_name:
            header += f" {self.query.query_name}"
        return f"{header} {{ {self.serialize_field()} }}"

    def serialize_field(self) -> str:
        """Render the aliased root field with arguments and selection set."""
        field = self.query.get_operation_name()
        if self.query.query_alias:
            field = f"{self.query.query_alias}: {field}"
        if self.query.input:
            arguments = ", ".join(
                f"{name}: {self.values.serialize(value)}" for name, value in self.query.input.items()
            )
            field += f"({arguments})"
        if self.projection is not None:
            field += " " + ProjectionSerializer(self.values).serialize(self.projection)
        return field


class GraphQLMultiQueryRequest:
    """Several aliased requests combined into one operation."""

    def __init__(self, requests: list[GraphQLQueryRequest], query_name: Optional[str] = None):
        if not requests:
            raise ValueError("GraphQLMultiQueryRequest needs at least one request")
        operations = {r.query.operation for r in requests}
        if len(operations) > 1:
            raise ValueError(
                f"Cannot combine different operation types: {', '.join(sorted(operations))}"
            )
        self.requests = list(requests)
        self.operation = operations.pop()
        self.query_name = query_name

    def serialize(self) -> str:
        header = self.operation
        if self.query_name:
            header += f" {self.query_name}"
        fields = " ".join(r.serialize_field() for r in self.requests)
        return f"{header} {{ {fields} }}"
