"""Shared fixtures for the projection generator tests."""

import dataclasses
import importlib
import uuid
from types import SimpleNamespace

import pytest

from gql_projections.core.codegen import CodeGen
from gql_projections.core.config import CodeGenConfig
from gql_projections.core.generator import CodeGenerator
from gql_projections.core.operations import OperationDocument
from gql_projections.core.parser import SchemaParser

MOVIES_SDL = '''
scalar DateTime

directive @key(fields: String!) on OBJECT
directive @skipcodegen on FIELD_DEFINITION

type Query {
    "All movies, optionally filtered"
    movies(titleFilter: String, limit: Int!): [Movie]
    shows: [Show]
    search(term: String!): [SearchResult]
    director(id: ID!): Director
    ping: String
}

type Mutation {
    addReview(input: ReviewInput!): Review
}

interface Show {
    title: String
    releaseYear: Int
}

type Movie implements Show @key(fields: "id") {
    id: ID!
    title: String
    releaseYear: Int
    genre: Genre
    director: Director
    actors(limit: Int): [Actor]
    reviews: [Review]
    internalNotes: String @skipcodegen
    updatedAt: DateTime
}

type Series implements Show {
    title: String
    releaseYear: Int
    episodes: Int
}

type Director {
    name: String
    movies: [Movie]
}

type Actor @key(fields: "name") {
    name: String
    agent: Agent
}

type Agent {
    name: String
    clients: [Actor]
}

type Review {
    stars: Int
    text: String
}

union SearchResult = Movie | Director

enum Genre {
    ACTION
    DRAMA
}

input ReviewInput {
    movieId: ID!
    stars: Int!
    text: String
}
'''


@pytest.fixture
def movies_sdl():
    return MOVIES_SDL


@pytest.fixture
def movies_schema():
    return SchemaParser.parse_string(MOVIES_SDL)


@pytest.fixture
def generate_package(tmp_path, monkeypatch):
    """Generate, write and import a client package under a unique name.

    Returns a namespace with the generation ``result`` and the imported
    ``client`` and ``types`` packages.
    """
    monkeypatch.syspath_prepend(str(tmp_path))

    def _generate(sdl=MOVIES_SDL, config=None, operations=None, **kwargs):
        package_name = f"generated_{uuid.uuid4().hex[:12]}"
        config = dataclasses.replace(config or CodeGenConfig(), package_name=package_name)
        document = OperationDocument.parse(operations) if operations else None
        result = CodeGen(SchemaParser.parse_string(sdl), config, operations=document).generate()
        CodeGenerator(result, config, str(tmp_path), **kwargs).generate()
        importlib.invalidate_caches()
        return SimpleNamespace(
            result=result,
            config=config,
            client=importlib.import_module(config.package_name_client),
            types=(
                importlib.import_module(config.package_name_types)
                if result.data_types else None
            ),
        )

    return _generate
