"""Tests for the schema parser and IR lookups."""

import pytest
from graphql import GraphQLSyntaxError

from gql_projections.core.ir import SchemaError, TypeKind
from gql_projections.core.parser import SchemaParser


class TestSchemaParser:
    """Tests for SchemaParser."""

    def test_parses_kinds(self, movies_schema):
        assert movies_schema.types["Movie"].kind is TypeKind.OBJECT
        assert movies_schema.types["Show"].kind is TypeKind.INTERFACE
        assert movies_schema.types["SearchResult"].kind is TypeKind.UNION
        assert movies_schema.types["Genre"].kind is TypeKind.ENUM
        assert movies_schema.types["ReviewInput"].kind is TypeKind.INPUT
        assert movies_schema.types["DateTime"].kind is TypeKind.SCALAR

    def test_keeps_declaration_order(self, movies_schema):
        names = list(movies_schema.types)
        assert names.index("Query") < names.index("Movie") < names.index("Genre")

    def test_field_type_info(self, movies_schema):
        fields = {f.name: f for f in movies_schema.types["Query"].fields}
        movies = fields["movies"]
        assert movies.type_name == "Movie"
        assert movies.is_list
        assert movies.is_optional
        assert movies.description == "All movies, optionally filtered"
        limit = {a.name: a for a in movies.arguments}["limit"]
        assert limit.type_name == "Int"
        assert not limit.is_optional

    def test_directives(self, movies_schema):
        movie = movies_schema.types["Movie"]
        assert movie.has_directive("key")
        assert movie.directives[0].arguments == {"fields": "id"}
        notes = {f.name: f for f in movie.fields}["internalNotes"]
        assert notes.has_directive("skipcodegen")

    def test_union_members_and_enum_values(self, movies_schema):
        assert movies_schema.types["SearchResult"].member_types == ["Movie", "Director"]
        assert [v.name for v in movies_schema.types["Genre"].values] == ["ACTION", "DRAMA"]

    def test_input_fields(self, movies_schema):
        fields = {f.name: f for f in movies_schema.types["ReviewInput"].input_fields}
        assert not fields["movieId"].is_optional
        assert fields["text"].is_optional

    def test_default_values(self):
        schema = SchemaParser.parse_string("type Query { movies(limit: Int = 10, sort: [String] = [\"a\"]): String }")
        args = {a.name: a for a in schema.types["Query"].fields[0].arguments}
        assert args["limit"].default_value == 10
        assert args["sort"].default_value == ["a"]

    def test_nested_list(self):
        schema = SchemaParser.parse_string("type Query { grid: [[Int!]!]! }")
        grid = schema.types["Query"].fields[0]
        assert grid.type_name == "Int"
        assert grid.is_list
        assert not grid.is_optional

    def test_syntax_error_propagates(self):
        with pytest.raises(GraphQLSyntaxError):
            SchemaParser.parse_string("type Query {")

    def test_parse_directory(self, tmp_path):
        (tmp_path / "a.graphqls").write_text("type Query { movie: Movie }")
        (tmp_path / "b.graphql").write_text("type Movie { title: String }")
        (tmp_path / "notes.txt").write_text("not a schema")
        schema = SchemaParser(str(tmp_path)).parse_all()
        assert set(schema.types) == {"Query", "Movie"}

    def test_parse_single_file(self, tmp_path):
        path = tmp_path / "schema.graphqls"
        path.write_text("type Query { ping: String }")
        schema = SchemaParser(str(path)).parse_all()
        assert "Query" in schema.types


class TestExtensions:
    """Tests for type extensions."""

    def test_extension_fields_are_separate(self):
        schema = SchemaParser.parse_string(
            """
            type Movie { title: String }
            extend type Movie { rating: Float }
            """
        )
        assert [f.name for f in schema.types["Movie"].fields] == ["title"]
        assert [f.name for f in schema.fields_of("Movie")] == ["title", "rating"]

    def test_extension_directive_marks_entity(self):
        schema = SchemaParser.parse_string(
            """
            type Movie { id: ID }
            extend type Movie @key(fields: "id")
            """
        )
        assert schema.types["Movie"].has_directive("key")

    def test_extension_before_definition(self):
        schema = SchemaParser.parse_string(
            """
            extend type Movie @key(fields: "id") { rating: Float }
            type Movie implements Node { id: ID }
            interface Node { id: ID }
            """
        )
        movie = schema.types["Movie"]
        assert movie.has_directive("key")
        assert movie.interfaces == ["Node"]
        assert [f.name for f in schema.fields_of("Movie")] == ["id", "rating"]

    def test_duplicate_extension_field_keeps_first(self):
        schema = SchemaParser.parse_string(
            """
            type Movie { title: String }
            extend type Movie { title: Int }
            """
        )
        fields = schema.fields_of("Movie")
        assert len(fields) == 1
        assert fields[0].type_name == "String"

    def test_union_extension(self):
        schema = SchemaParser.parse_string(
            """
            type A { x: Int }
            type B { y: Int }
            union U = A
            extend union U = B
            """
        )
        assert [t.name for t in schema.union_members("U")] == ["A", "B"]


class TestSchemaLookups:
    """Tests for IRSchema helpers."""

    def test_implementations(self, movies_schema):
        assert [t.name for t in movies_schema.implementations("Show")] == ["Movie", "Series"]

    def test_find_selectable(self, movies_schema):
        assert movies_schema.find_selectable("Movie") is not None
        assert movies_schema.find_selectable("SearchResult") is not None
        assert movies_schema.find_selectable("Genre") is None
        assert movies_schema.find_selectable("String") is None

    def test_require_type(self, movies_schema):
        assert movies_schema.require_type("Movie").name == "Movie"
        with pytest.raises(SchemaError):
            movies_schema.require_type("Missing")

    def test_is_known_type(self, movies_schema):
        assert movies_schema.is_known_type("String")
        assert movies_schema.is_known_type("Movie")
        assert not movies_schema.is_known_type("Missing")

    def test_operation_types(self, movies_schema):
        assert movies_schema.operation_type_of("Query") == "query"
        assert movies_schema.operation_type_of("Mutation") == "mutation"
        assert movies_schema.operation_type_of("Movie") is None

    def test_schema_definition_overrides_roots(self):
        schema = SchemaParser.parse_string(
            """
            schema { query: RootQuery }
            type RootQuery { ping: String }
            """
        )
        assert schema.operation_types["query"] == "RootQuery"
        assert schema.operation_type_of("RootQuery") == "query"
