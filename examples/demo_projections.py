#!/usr/bin/env python3
"""Demonstration of generated projection classes.

This script shows how to:
1. Parse a GraphQL schema
2. Generate query classes, projections and models into a package
3. Build and display requests with the generated classes

Note: This demo doesn't make real API calls - it just demonstrates
the query generation capabilities.
"""

import importlib
import sys
import tempfile

from gql_projections.core import CodeGen, CodeGenConfig, CodeGenerator, SchemaParser
from gql_projections.runtime import GraphQLMultiQueryRequest, GraphQLQueryRequest

SCHEMA = """
type Query {
    movies(titleFilter: String, limit: Int!): [Movie]
    shows: [Show]
}

interface Show {
    title: String
}

type Movie implements Show {
    title: String
    releaseYear: Int
    director: Director
    actors(limit: Int): [Actor]
}

type Series implements Show {
    title: String
    episodes: Int
}

type Director {
    name: String
    movies: [Movie]
}

type Actor {
    name: String
}
"""


def main():
    print("=== Projection Generator Demo ===\n")

    print("1. Parsing GraphQL schema...")
    ir = SchemaParser.parse_string(SCHEMA)
    print(f"   {len(ir.types)} types")

    print("\n2. Generating code...")
    config = CodeGenConfig(package_name="democlient", short_projection_names=True)
    result = CodeGen(ir, config).generate()
    print(f"   {len(result.query_types)} query classes")
    print(f"   {len(result.client_projections)} projections")
    print(f"   {len(result.data_types)} data types")
    for unit in result.client_projections:
        print(f"     - {unit.qualified_name}")

    with tempfile.TemporaryDirectory() as tmpdir:
        CodeGenerator(result, config, tmpdir).generate()
        sys.path.insert(0, tmpdir)
        client = importlib.import_module(config.package_name_client)

        print("\n3. Building a request")
        projection = client.MoviesProjectionRoot().title().release_year()
        projection.actors(limit=3).name()
        projection.director().name()
        request = GraphQLQueryRequest(client.MoviesGraphQLQuery(title_filter="Matrix", limit=10), projection)
        print(f"   {request.serialize()}")

        print("\n4. Selecting fragments on an interface")
        shows = client.ShowsProjectionRoot().title()
        shows.on_series().episodes()
        print(f"   {GraphQLQueryRequest(client.ShowsGraphQLQuery(), shows).serialize()}")

        print("\n5. Combining requests")
        first = client.MoviesGraphQLQuery(limit=1)
        first.query_alias = "newest"
        multi = GraphQLMultiQueryRequest([
            GraphQLQueryRequest(first, client.MoviesProjectionRoot().title()),
            GraphQLQueryRequest(client.ShowsGraphQLQuery(), client.ShowsProjectionRoot().title()),
        ])
        print(f"   {multi.serialize()}")

    print("\n=== Demo Complete ===")


if __name__ == "__main__":
    main()
