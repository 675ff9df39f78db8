"""Tests for the command-line interface."""

import tarfile
import tempfile
import zipfile
from pathlib import Path

import pytest
from click.testing import CliRunner

from gql_projections.cli import main

SCHEMA = """
type Query {
    movies(limit: Int): [Movie]
}

type Movie {
    title: String
    director: Director
}

type Director {
    name: String
}
"""


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def schema_file(tmp_path):
    path = tmp_path / "schema.graphqls"
    path.write_text(SCHEMA)
    return path


def run_generate(runner, schema, output, *args):
    return runner.invoke(main, ["generate", "--schema", str(schema), "--output", str(output), *args])


class TestGenerateCommand:
    """Tests for the generate command."""

    def test_from_file(self, runner, schema_file, tmp_path):
        out = tmp_path / "out"
        result = run_generate(runner, schema_file, out)
        assert result.exit_code == 0, result.output
        assert "Done! Generated 6 files" in result.output
        assert (out / "generated" / "client" / "projections.py").is_file()

    def test_from_directory(self, runner, tmp_path):
        schema_dir = tmp_path / "schema"
        schema_dir.mkdir()
        (schema_dir / "query.graphqls").write_text("type Query { movie: Movie }")
        (schema_dir / "movie.graphqls").write_text("type Movie { title: String }")
        out = tmp_path / "out"
        result = run_generate(runner, schema_dir, out, "--package-name", "moviesclient")
        assert result.exit_code == 0, result.output
        assert "class MovieProjectionRoot" in (out / "moviesclient" / "client" / "projections.py").read_text()

    def test_from_tgz(self, runner, schema_file, tmp_path):
        archive = tmp_path / "schema.tgz"
        with tarfile.open(archive, "w:gz") as tar:
            tar.add(schema_file, arcname="schema.graphqls")
        out = tmp_path / "out"
        result = run_generate(runner, archive, out)
        assert result.exit_code == 0, result.output
        assert "Extracting archive schema.tgz" in result.output
        assert (out / "generated" / "client" / "queries.py").is_file()

    def test_tgz_member_outside_target_is_refused(self, runner, tmp_path):
        member = tmp_path / "member.graphqls"
        member.write_text(SCHEMA)
        escaped = f"escaped-{tmp_path.name}.graphqls"
        archive = tmp_path / "schema.tgz"
        with tarfile.open(archive, "w:gz") as tar:
            tar.add(member, arcname=f"../{escaped}")
        result = run_generate(runner, archive, tmp_path / "out")
        assert result.exit_code != 0
        assert isinstance(result.exception, ValueError)
        assert "Unsafe archive member" in str(result.exception)
        assert not (Path(tempfile.gettempdir()) / escaped).exists()
        assert not (tmp_path / "out").exists()

    def test_from_zip(self, runner, schema_file, tmp_path):
        archive = tmp_path / "schema.zip"
        with zipfile.ZipFile(archive, "w") as zf:
            zf.write(schema_file, arcname="schema.graphqls")
        out = tmp_path / "out"
        result = run_generate(runner, archive, out)
        assert result.exit_code == 0, result.output

    def test_header(self, runner, schema_file, tmp_path):
        out = tmp_path / "out"
        result = run_generate(runner, schema_file, out, "--header", "# Do not edit")
        assert result.exit_code == 0, result.output
        assert (out / "generated" / "client" / "queries.py").read_text().startswith("# Do not edit\n\n")

    def test_depth_and_no_data_types(self, runner, schema_file, tmp_path):
        out = tmp_path / "out"
        result = run_generate(runner, schema_file, out, "--max-projection-depth", "0", "--no-data-types")
        assert result.exit_code == 0, result.output
        projections = (out / "generated" / "client" / "projections.py").read_text()
        assert "Movies_DirectorProjection" not in projections
        assert not (out / "generated" / "types").exists()

    def test_operations_file(self, runner, schema_file, tmp_path):
        operations = tmp_path / "ops.graphql"
        operations.write_text("query { movies { title } }")
        out = tmp_path / "out"
        result = run_generate(runner, schema_file, out, "--operations", str(operations))
        assert result.exit_code == 0, result.output
        projections = (out / "generated" / "client" / "projections.py").read_text()
        assert "def title(self)" in projections
        assert "def director(self)" not in projections

    def test_type_mapping(self, runner, tmp_path):
        schema = tmp_path / "schema.graphqls"
        schema.write_text("scalar Money\ntype Query { price(max: Money): Money }")
        out = tmp_path / "out"
        result = run_generate(runner, schema, out, "--type-mapping", "Money=decimal.Decimal")
        assert result.exit_code == 0, result.output
        assert "from decimal import Decimal" in (out / "generated" / "client" / "queries.py").read_text()

    def test_bad_type_mapping(self, runner, schema_file, tmp_path):
        result = run_generate(runner, schema_file, tmp_path / "out", "--type-mapping", "Money")
        assert result.exit_code == 2
        assert "Scalar=module.Type" in result.output

    def test_invalid_package_name(self, runner, schema_file, tmp_path):
        result = run_generate(runner, schema_file, tmp_path / "out", "--package-name", "not-valid")
        assert result.exit_code == 2
        assert "package_name" in result.output

    def test_depth_below_unlimited(self, runner, schema_file, tmp_path):
        result = run_generate(runner, schema_file, tmp_path / "out", "--max-projection-depth", "-2")
        assert result.exit_code == 2

    def test_missing_schema(self, runner, tmp_path):
        result = run_generate(runner, tmp_path / "missing.graphqls", tmp_path / "out")
        assert result.exit_code == 2


class TestMain:
    """Tests for the command group."""

    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "generate" in result.output
