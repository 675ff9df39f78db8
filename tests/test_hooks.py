"""Tests for generation hooks."""

import pytest

from gql_projections.core.codegen import CodeGen
from gql_projections.core.hooks import (
    AddHeaderHook,
    FilterTypesHook,
    HookRunner,
    PostGenerateHook,
    PreGenerateHook,
)
from gql_projections.core.ir import IRField, IRSchema, IRType, TypeKind


@pytest.fixture
def sample_ir():
    """Create a sample IR schema for testing."""
    types = [
        IRType(name="Query", kind=TypeKind.OBJECT, fields=[IRField(name="user", type_name="User")]),
        IRType(name="User", kind=TypeKind.OBJECT),
        IRType(name="_Meta", kind=TypeKind.OBJECT),
        IRType(name="Product", kind=TypeKind.OBJECT),
        IRType(name="Status", kind=TypeKind.ENUM),
        IRType(name="_Internal", kind=TypeKind.ENUM),
        IRType(name="CreateUserInput", kind=TypeKind.INPUT),
        IRType(name="_DebugInput", kind=TypeKind.INPUT),
    ]
    return IRSchema(types={t.name: t for t in types})


class TestAddHeaderHook:
    """Tests for AddHeaderHook."""

    def test_adds_header(self):
        hook = AddHeaderHook("# Auto-generated")
        result = hook.post_generate("client/queries.py", "class MoviesGraphQLQuery:\n    pass")
        assert result.startswith("# Auto-generated\n\n")

    def test_preserves_content(self):
        hook = AddHeaderHook("# Header")
        content = "class MoviesProjectionRoot:\n    pass"
        result = hook.post_generate("client/projections.py", content)
        assert content in result

    def test_handles_header_with_newline(self):
        hook = AddHeaderHook("# Header\n")
        result = hook.post_generate("test.py", "code")
        assert result == "# Header\n\ncode"


class TestFilterTypesHook:
    """Tests for FilterTypesHook."""

    def test_exclude_prefix(self, sample_ir):
        result = FilterTypesHook(exclude_prefix="_").pre_generate(sample_ir)
        assert "User" in result.types
        assert "Product" in result.types
        assert "_Meta" not in result.types
        assert "_Internal" not in result.types

    def test_exclude_suffix(self, sample_ir):
        result = FilterTypesHook(exclude_suffix="Input").pre_generate(sample_ir)
        assert not [t for t in result.types.values() if t.kind is TypeKind.INPUT]

    def test_include_prefix_keeps_roots(self, sample_ir):
        result = FilterTypesHook(include_prefix="Create").pre_generate(sample_ir)
        assert set(result.types) == {"Query", "CreateUserInput"}

    def test_keeps_declaration_order(self, sample_ir):
        result = FilterTypesHook(exclude_prefix="_").pre_generate(sample_ir)
        assert list(result.types) == ["Query", "User", "Product", "Status", "CreateUserInput"]


class TestHookRunner:
    """Tests for HookRunner."""

    def test_run_pre_hooks(self, sample_ir):
        runner = HookRunner()
        runner.add_pre_hook(FilterTypesHook(exclude_prefix="_"))

        result = runner.run_pre_hooks(sample_ir)
        assert "_Meta" not in result.types

    def test_run_post_hooks(self):
        runner = HookRunner()
        runner.add_post_hook(AddHeaderHook("# Header"))

        result = runner.run_post_hooks("test.py", "code")
        assert result.startswith("# Header")

    def test_multiple_pre_hooks(self, sample_ir):
        runner = HookRunner()
        runner.add_pre_hook(FilterTypesHook(exclude_prefix="_"))

        class CountTypesHook:
            def pre_generate(self, ir):
                ir.type_count = len(ir.types)
                return ir

        runner.add_pre_hook(CountTypesHook())

        result = runner.run_pre_hooks(sample_ir)
        assert result.type_count == 5

    def test_multiple_post_hooks(self):
        runner = HookRunner()
        runner.add_post_hook(AddHeaderHook("# Line 1"))
        runner.add_post_hook(AddHeaderHook("# Line 0"))

        result = runner.run_post_hooks("test.py", "code")
        assert result == "# Line 0\n\n# Line 1\n\ncode"

    def test_pre_hooks_run_before_generation(self, movies_schema):
        hooks = HookRunner()
        hooks.add_pre_hook(FilterTypesHook(exclude_prefix="Series"))
        result = CodeGen(movies_schema, hooks=hooks).generate()
        assert result.find("Shows_SeriesProjection") is None
        assert result.find("Shows_MovieProjection") is not None


class TestProtocolCompliance:
    """Tests for protocol compliance."""

    def test_add_header_is_post_hook(self):
        assert isinstance(AddHeaderHook("header"), PostGenerateHook)

    def test_filter_types_is_pre_hook(self):
        assert isinstance(FilterTypesHook(), PreGenerateHook)

    def test_custom_pre_hook(self):
        class CustomPreHook:
            def pre_generate(self, ir):
                return ir

        assert isinstance(CustomPreHook(), PreGenerateHook)

    def test_custom_post_hook(self):
        class CustomPostHook:
            def post_generate(self, filename, content):
                return content

        assert isinstance(CustomPostHook(), PostGenerateHook)
