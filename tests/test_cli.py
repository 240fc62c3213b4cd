"""
CLI interface tests for license-notice.
Tests the command-line interface and main entry points.
"""

import json

from click.testing import CliRunner

from license_notice.main import cli, load_dependency_document


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_cli_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "license-notice" in result.output.lower()

    def test_cli_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "1.0.0" in result.output

    def test_info_command(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["info"])

        assert result.exit_code == 0
        assert "license-notice" in result.output.lower()


class TestRenderCommand:
    """Test the render command."""

    def test_render_json_to_stdout(self, sample_dependencies_json):
        runner = CliRunner()
        result = runner.invoke(cli, ["render", str(sample_dependencies_json)])

        assert result.exit_code == 0
        assert result.output.startswith(
            "Name: foo\nVersion: 1.0.0\nLicense: MIT\nPrivate: false\n\n---\n\nName: bar"
        )
        assert "Author: Jane Roe <jane@example.com>\n" in result.output
        assert "internal" not in result.output

    def test_render_include_private(self, sample_dependencies_json):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["render", str(sample_dependencies_json), "--include-private"]
        )

        assert result.exit_code == 0
        assert "Name: internal" in result.output

    def test_render_custom_separator(self, sample_dependencies_json):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["render", str(sample_dependencies_json), "--separator", "\\n\\n"]
        )

        assert result.exit_code == 0
        assert "---" not in result.output
        assert "Private: false\n\nName: bar" in result.output

    def test_render_yaml_document(self, sample_dependencies_yaml):
        runner = CliRunner()
        result = runner.invoke(cli, ["render", str(sample_dependencies_yaml)])

        assert result.exit_code == 0
        assert result.output == (
            "Name: foo\nVersion: 1.0.0\nLicense: MIT\nPrivate: false\n"
            "Contributors:\n  John Doe\n"
        )

    def test_render_to_output_file(self, sample_dependencies_json, temp_dir):
        output_file = temp_dir / "THIRD_PARTY.txt"

        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["render", str(sample_dependencies_json), "--output-file", str(output_file)],
        )

        assert result.exit_code == 0
        content = output_file.read_text(encoding="utf-8")
        assert content.startswith("Name: foo\n")
        assert not content.endswith("\n")

    def test_render_invalid_record(self, temp_dir):
        document = temp_dir / "broken.json"
        document.write_text(json.dumps([{"name": "foo", "version": "1.0.0"}]))

        runner = CliRunner()
        result = runner.invoke(cli, ["render", str(document)])

        assert result.exit_code == 1
        assert "missing required field(s): license" in result.output

    def test_render_malformed_json(self, temp_dir):
        document = temp_dir / "broken.json"
        document.write_text("{not json")

        runner = CliRunner()
        result = runner.invoke(cli, ["render", str(document)])

        assert result.exit_code == 1
        assert "failed to parse" in result.output.lower()

    def test_render_nonexistent_file(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["render", "nonexistent.json"])

        assert result.exit_code != 0
        assert "does not exist" in result.output.lower()

    def test_render_creates_output_directory(self, sample_dependencies_json, temp_dir):
        output_file = temp_dir / "build" / "legal" / "THIRD_PARTY.txt"

        runner = CliRunner()
        result = runner.invoke(
            cli, ["render", str(sample_dependencies_json), "-o", str(output_file)]
        )

        assert result.exit_code == 0
        assert output_file.read_text(encoding="utf-8").startswith("Name: foo\n")

    def test_render_output_parent_is_a_file(self, sample_dependencies_json, temp_dir):
        blocked = temp_dir / "blocked"
        blocked.write_text("not a directory")

        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["render", str(sample_dependencies_json), "-o", str(blocked / "THIRD_PARTY.txt")],
        )

        assert result.exit_code == 1
        assert "Failed to write notice" in result.output

    def test_render_unencodable_output(self, temp_dir):
        document = temp_dir / "unicode.json"
        document.write_text(
            json.dumps([{"name": "foo", "version": "1.0.0", "license": "MIT", "description": "naïve"}])
        )
        (temp_dir / ".license-notice.json").write_text(
            json.dumps({"output": {"encoding": "ascii"}})
        )

        runner = CliRunner()
        result = runner.invoke(cli, ["render", str(document), "-o", "out.txt"])

        assert result.exit_code == 1
        assert "Failed to write notice" in result.output

    def test_render_non_ascii_separator(self, sample_dependencies_json):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["render", str(sample_dependencies_json), "--separator", "\\n\u2014\\n"]
        )

        assert result.exit_code == 0
        assert "Private: false\n\u2014\nName: bar" in result.output

    def test_render_empty_notice_to_file(self, temp_dir):
        document = temp_dir / "private.json"
        document.write_text(
            json.dumps([{"name": "internal", "version": "0.0.1", "license": "MIT", "private": True}])
        )
        output_file = temp_dir / "THIRD_PARTY.txt"

        runner = CliRunner()
        result = runner.invoke(cli, ["render", str(document), "-o", str(output_file)])

        assert result.exit_code == 0
        assert output_file.read_text(encoding="utf-8") == "No third parties dependencies"

    def test_render_uses_config_file(self, sample_dependencies_json, temp_dir):
        (temp_dir / ".license-notice.json").write_text(
            json.dumps({"output": {"include_private": True}})
        )

        runner = CliRunner()
        result = runner.invoke(cli, ["render", str(sample_dependencies_json)])

        assert result.exit_code == 0
        assert "Name: internal" in result.output


class TestLoadDependencyDocument:
    """Test reading dependency documents."""

    def test_single_record(self, temp_dir):
        document = temp_dir / "one.json"
        document.write_text(json.dumps({"name": "foo", "version": "1.0.0", "license": "MIT"}))

        records = load_dependency_document(str(document))

        assert [r.name for r in records] == ["foo"]

    def test_dependencies_key(self, sample_dependencies_yaml):
        records = load_dependency_document(str(sample_dependencies_yaml))

        assert len(records) == 1
        assert records[0].contributors[0].name == "John Doe"

    def test_empty_document(self, temp_dir):
        document = temp_dir / "empty.yaml"
        document.write_text("")

        assert load_dependency_document(str(document)) == []


class TestConfigCommands:
    """Test the config command group."""

    def test_config_init(self, temp_dir):
        path = temp_dir / "sample.json"

        runner = CliRunner()
        result = runner.invoke(cli, ["config", "init", "--path", "sample.json"])

        assert result.exit_code == 0
        assert json.loads(path.read_text())["output"]["include_private"] is False

    def test_config_init_refuses_overwrite(self, temp_dir):
        path = temp_dir / "sample.json"
        path.write_text("{}")

        runner = CliRunner()
        result = runner.invoke(cli, ["config", "init", "--path", "sample.json"])

        assert result.exit_code == 0
        assert path.read_text() == "{}"
        assert "already exists" in result.output

    def test_config_show(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["config", "show"])

        assert result.exit_code == 0
        assert "Include Private: False" in result.output

    def test_config_validate_ok(self, temp_dir):
        path = temp_dir / "good.yaml"
        path.write_text("output:\n  include_private: true\nlogging:\n  log_level: INFO\n")

        runner = CliRunner()
        result = runner.invoke(cli, ["config", "validate", path.name])

        assert result.exit_code == 0
        assert "is valid" in result.output

    def test_config_validate_bad_level(self, temp_dir):
        path = temp_dir / "bad.json"
        path.write_text(json.dumps({"logging": {"log_level": "LOUD"}}))

        runner = CliRunner()
        result = runner.invoke(cli, ["config", "validate", path.name])

        assert result.exit_code == 1
        assert "log_level" in result.output
