"""Integration tests for the command-line interface."""

import pytest
from typer.testing import CliRunner

from specdiff import __version__
from specdiff.cli import EXIT_BREAKING_CHANGES, EXIT_INPUT_ERROR, app

from .test_pipeline import NEW_SPEC, OLD_SPEC


runner = CliRunner()


@pytest.fixture
def spec_files(tmp_path):
    old_file = tmp_path / "old.yaml"
    new_file = tmp_path / "new.yaml"
    old_file.write_text(OLD_SPEC, encoding="utf-8")
    new_file.write_text(NEW_SPEC, encoding="utf-8")
    return str(old_file), str(new_file)


class TestCompareCommand:
    """Tests for `specdiff compare`."""

    def test_json_output(self, spec_files):
        old, new = spec_files

        result = runner.invoke(app, ["compare", "--old", old, "--new", new])

        assert result.exit_code == 0
        assert '"code": "RemovedEnumValue"' in result.output
        assert '"oldSummary": "retired"' in result.output

    def test_text_output(self, spec_files):
        old, new = spec_files

        result = runner.invoke(app, ["compare", "-o", old, "-n", new, "--format", "text"])

        assert result.exit_code == 0
        assert "| **Change Type** | **API** | **Summary** |" in result.output
        assert "| Addition | GET /gadgets |" in result.output
        assert "| Update | GET /widgets/{id} |" in result.output

    def test_missing_input(self, tmp_path, spec_files):
        old, _ = spec_files

        result = runner.invoke(
            app, ["compare", "--old", old, "--new", str(tmp_path / "missing.yaml")]
        )

        assert result.exit_code == EXIT_INPUT_ERROR
        assert "Exiting." in result.output

    def test_unparseable_input(self, tmp_path, spec_files):
        old, _ = spec_files
        broken = tmp_path / "broken.yaml"
        broken.write_text("swagger: '2.0'\n", encoding="utf-8")

        result = runner.invoke(app, ["compare", "--old", old, "--new", str(broken)])

        assert result.exit_code == EXIT_INPUT_ERROR

    def test_fail_on_breaking(self, spec_files):
        old, new = spec_files

        result = runner.invoke(app, ["compare", "-o", old, "-n", new, "--fail-on-breaking"])

        assert result.exit_code == EXIT_BREAKING_CHANGES

    def test_fail_on_breaking_without_changes(self, spec_files):
        old, _ = spec_files

        result = runner.invoke(app, ["compare", "-o", old, "-n", old, "--fail-on-breaking"])

        assert result.exit_code == 0

    def test_missing_arguments(self):
        result = runner.invoke(app, ["compare", "--old", "a.yaml"])
        assert result.exit_code != 0


class TestVersionCommand:
    def test_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.output
