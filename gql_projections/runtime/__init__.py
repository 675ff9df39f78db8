"""Runtime support imported by generated client code."""

from .projection import (
    UNSET,
    BaseProjectionNode,
    BaseSubProjectionNode,
    FragmentProjectionNode,
    InputArgument,
    UnsetType,
)
from .query import EntitiesGraphQLQuery, GraphQLQuery
from .request import GraphQLMultiQueryRequest, GraphQLQueryRequest
from .serializer import ProjectionSerializer
from .values import InputValueSerializer

__all__ = [
    "UNSET",
    "UnsetType",
    "InputArgument",
    "BaseProjectionNode",
    "BaseSubProjectionNode",
    "FragmentProjectionNode",
    "GraphQLQuery",
    "EntitiesGraphQLQuery",
    "GraphQLQueryRequest",
    "GraphQLMultiQueryRequest",
    "ProjectionSerializer",
    "InputValueSerializer",
]
