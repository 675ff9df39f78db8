"""Command-line interface for gql-projections."""

import logging
import shutil
import tarfile
import tempfile
import zipfile
from pathlib import Path

import click

from .core.codegen import CodeGen
from .core.config import CodeGenConfig
from .core.generator import CodeGenerator
from .core.hooks import AddHeaderHook, HookRunner
from .core.operations import OperationDocument
from .core.parser import SchemaParser
from .core.scalars import MappedScalar, ScalarRegistry


def extract_archive(archive_path: Path) -> str:
    """Extract archive to temp directory. Returns path to extracted content."""
    temp_dir = tempfile.mkdtemp()
    if archive_path.suffix == ".zip":
        with zipfile.ZipFile(archive_path, "r") as zip_ref:
            zip_ref.extractall(temp_dir)
    elif archive_path.name.endswith((".tar.gz", ".tgz")):
        with tarfile.open(archive_path, "r:gz") as tar_ref:
            try:
                tar_ref.extractall(temp_dir, filter="data")
            except tarfile.FilterError as e:
                shutil.rmtree(temp_dir)
                raise ValueError(f"Unsafe archive member in {archive_path.name}: {e}") from e
    else:
        shutil.rmtree(temp_dir)
        raise ValueError(f"Unsupported archive format: {archive_path.suffix}")
    return temp_dir


def parse_type_mappings(ctx, param, values) -> dict[str, MappedScalar]:
    """Turn ``Scalar=module.Type`` options into scalar handlers."""
    mappings = {}
    for value in values:
        scalar, sep, path = value.partition("=")
        if not sep or not scalar or not path:
            raise click.BadParameter(f"expected Scalar=module.Type, got {value!r}", ctx=ctx, param=param)
        try:
            mappings[scalar.strip()] = MappedScalar.from_path(path.strip())
        except ValueError as e:
            raise click.BadParameter(str(e), ctx=ctx, param=param)
    return mappings


@click.group()
@click.version_option(package_name="gql-projections")
def main():
    """Typed GraphQL projection generator for Python.

    Generate query classes, projections and data types from GraphQL schemas.
    """
    pass


@main.command()
@click.option(
    "--schema",
    "-s",
    required=True,
    type=click.Path(exists=True),
    help="Path to GraphQL schema file, directory, or archive (.zip, .tar.gz, .tgz).",
)
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(),
    help="Output directory for generated code.",
)
@click.option(
    "--operations",
    type=click.Path(exists=True, dir_okay=False),
    help="GraphQL document with example operations restricting the generated fields.",
)
@click.option("--package-name", default="generated", show_default=True, help="Root package of the generated code.")
@click.option(
    "--max-projection-depth",
    type=click.IntRange(min=-1),
    default=10,
    show_default=True,
    help="Nesting limit for projections (-1 for unlimited).",
)
@click.option("--short-projection-names", is_flag=True, help="Abbreviate nested projection class names.")
@click.option("--skip-entity-queries", is_flag=True, help="Do not generate the federation entities projection.")
@click.option("--no-data-types", is_flag=True, help="Do not generate pydantic models and enums.")
@click.option("--include-query", multiple=True, help="Only generate these query fields (repeatable).")
@click.option("--include-mutation", multiple=True, help="Only generate these mutation fields (repeatable).")
@click.option("--include-subscription", multiple=True, help="Only generate these subscription fields (repeatable).")
@click.option(
    "--include-field",
    multiple=True,
    help="Only generate these fields on the types that declare them, e.g. title or Movie.title.",
)
@click.option("--exclude-field", multiple=True, help="Never generate these fields, e.g. Movie.internalNotes.")
@click.option("--exclude-type", multiple=True, help="Drop fields returning these types.")
@click.option(
    "--type-mapping",
    multiple=True,
    callback=parse_type_mappings,
    help="Map a custom scalar to a Python type, e.g. Money=decimal.Decimal.",
)
@click.option(
    "--template-dir",
    type=click.Path(exists=True, file_okay=False),
    help="Directory with templates overriding the built-in ones.",
)
@click.option("--header", help="Header prepended to every generated file.")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def generate(
    schema: str,
    output: str,
    operations: str | None,
    package_name: str,
    max_projection_depth: int,
    short_projection_names: bool,
    skip_entity_queries: bool,
    no_data_types: bool,
    include_query: tuple,
    include_mutation: tuple,
    include_subscription: tuple,
    include_field: tuple,
    exclude_field: tuple,
    exclude_type: tuple,
    type_mapping: dict,
    template_dir: str | None,
    header: str | None,
    verbose: bool,
):
    """Generate projection classes from a GraphQL schema.

    Examples:

        gql-projections generate --schema ./schema --output ./generated

        gql-projections generate -s ./schema.graphqls -o ./client --package-name moviesclient

        gql-projections generate -s ./schema.tgz -o ./generated --operations ./queries.graphql
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        config = CodeGenConfig(
            package_name=package_name,
            max_projection_depth=max_projection_depth,
            short_projection_names=short_projection_names,
            skip_entity_queries=skip_entity_queries,
            generate_data_types=not no_data_types,
            include_queries=set(include_query),
            include_mutations=set(include_mutation),
            include_subscriptions=set(include_subscription),
            include_fields=set(include_field),
            exclude_fields=set(exclude_field),
            exclude_types=set(exclude_type),
        )
    except ValueError as e:
        raise click.BadParameter(str(e))

    schema_path = Path(schema).resolve()
    output_path = Path(output).resolve()
    temp_dir = None

    try:
        # Handle archives
        actual_schema_path = schema_path
        if schema_path.is_file() and schema_path.name.lower().endswith(
            (".zip", ".tar.gz", ".tgz")
        ):
            click.echo(f"Extracting archive {schema_path.name}...")
            temp_dir = extract_archive(schema_path)
            actual_schema_path = Path(temp_dir)
            if verbose:
                click.echo(f"  Extracted to: {temp_dir}")

        if verbose:
            click.echo(f"Schema: {actual_schema_path}")
            click.echo(f"Output: {output_path}")

        # Parse schema
        click.echo("Parsing schema...")
        ir = SchemaParser(str(actual_schema_path)).parse_all()
        document = OperationDocument.from_path(operations) if operations else None

        if verbose:
            click.echo(f"  Types: {len(ir.types)}")
            if document is not None:
                click.echo(f"  Example operations: {len(document.operations)}")

        scalars = ScalarRegistry()
        for scalar_name, handler in type_mapping.items():
            scalars.register(scalar_name, handler)
        hooks = HookRunner()
        if header:
            hooks.add_post_hook(AddHeaderHook(header))

        # Generate code
        click.echo("Generating code...")
        result = CodeGen(ir, config, operations=document, scalars=scalars).generate()
        if verbose:
            click.echo(f"  Query classes: {len(result.query_types)}")
            click.echo(f"  Projections: {len(result.client_projections)}")
            click.echo(f"  Data types: {len(result.data_types)}")

        generator = CodeGenerator(result, config, str(output_path), template_dir=template_dir, hooks=hooks)
        written = generator.generate()

        click.echo(f"Done! Generated {len(written)} files in {output_path}")
    finally:
        # Clean up temp directory
        if temp_dir:
            shutil.rmtree(temp_dir)


if __name__ == "__main__":
    main()
