"""Generation hooks for customizing code generation.

Provides protocols for pre- and post-generation hooks that can modify
the schema before the projection walk or transform the rendered modules
after.

Example usage:
    from gql_projections.core.hooks import PreGenerateHook, PostGenerateHook

    # Pre-generation hook to drop internal types
    class DropInternalTypes(PreGenerateHook):
        def pre_generate(self, schema):
            schema.types = {k: v for k, v in schema.types.items() if not k.startswith("Internal")}
            return schema

    # Post-generation hook to add headers
    class AddLicenseHeader(PostGenerateHook):
        def post_generate(self, filename, content):
            return "# Copyright 2024 My Company\\n\\n" + content
"""

from typing import Protocol, runtime_checkable

from .ir import IRSchema


@runtime_checkable
class PreGenerateHook(Protocol):
    """Protocol for pre-generation hooks.

    Pre-generation hooks receive the schema before the projection walk
    and can modify it. The returned schema is the one generated from.
    """

    def pre_generate(self, schema: IRSchema) -> IRSchema:
        """Called before code generation.

        Args:
            schema: The intermediate representation of the schema

        Returns:
            The (possibly modified) schema to use for generation
        """
        ...


@runtime_checkable
class PostGenerateHook(Protocol):
    """Protocol for post-generation hooks.

    Post-generation hooks receive the rendered source of each module
    and can transform it before it's written to disk.

    Example:
        class FormatWithBlack(PostGenerateHook):
            def post_generate(self, filename: str, content: str) -> str:
                import black
                return black.format_str(content, mode=black.FileMode())
    """

    def post_generate(self, filename: str, content: str) -> str:
        """Called after rendering for each file.

        Args:
            filename: Path of the module relative to the output directory
            content: The generated code content

        Returns:
            The (possibly transformed) code to write
        """
        ...


class AddHeaderHook:
    """Built-in hook to add a header to generated files.

    Example:
        hook = AddHeaderHook("# Auto-generated - do not edit")
    """

    def __init__(self, header: str):
        self.header = header

    def post_generate(self, _filename: str, content: str) -> str:
        """Prepend the header, separated from the code by a blank line."""
        header = self.header if self.header.endswith("\n") else self.header + "\n"
        return header + "\n" + content


class FilterTypesHook:
    """Built-in hook to filter schema types by name prefix/suffix.

    Operation root types are never removed, otherwise nothing would be
    left to generate from.

    Example:
        # Drop every type whose name ends in "Internal"
        hook = FilterTypesHook(exclude_suffix="Internal")
    """

    def __init__(
        self,
        exclude_prefix: str | None = None,
        exclude_suffix: str | None = None,
        include_prefix: str | None = None,
        include_suffix: str | None = None,
    ):
        self.exclude_prefix = exclude_prefix
        self.exclude_suffix = exclude_suffix
        self.include_prefix = include_prefix
        self.include_suffix = include_suffix

    def _should_include(self, name: str) -> bool:
        if self.exclude_prefix and name.startswith(self.exclude_prefix):
            return False
        if self.exclude_suffix and name.endswith(self.exclude_suffix):
            return False
        if self.include_prefix and not name.startswith(self.include_prefix):
            return False
        if self.include_suffix and not name.endswith(self.include_suffix):
            return False
        return True

    def pre_generate(self, schema: IRSchema) -> IRSchema:
        """Filter types from the schema, keeping the operation roots."""
        roots = set(schema.operation_types.values())
        schema.types = {
            name: type_def
            for name, type_def in schema.types.items()
            if name in roots or self._should_include(name)
        }
        return schema


class HookRunner:
    """Runs a collection of hooks in order."""

    def __init__(self):
        self.pre_hooks: list[PreGenerateHook] = []
        self.post_hooks: list[PostGenerateHook] = []

    def add_pre_hook(self, hook: PreGenerateHook):
        self.pre_hooks.append(hook)

    def add_post_hook(self, hook: PostGenerateHook):
        self.post_hooks.append(hook)

    def run_pre_hooks(self, schema: IRSchema) -> IRSchema:
        """Run all pre-generation hooks in order."""
        for hook in self.pre_hooks:
            schema = hook.pre_generate(schema)
        return schema

    def run_post_hooks(self, filename: str, content: str) -> str:
        """Run all post-generation hooks in order."""
        for hook in self.post_hooks:
            content = hook.post_generate(filename, content)
        return content
