"""Unit tests for expbackoff CLI module."""

from pathlib import Path

import yaml
from click.testing import CliRunner

from expbackoff.cli import cli


class TestCliGroup:
    """Tests for main CLI group."""

    def test_cli_help(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "expbackoff" in result.output
        assert "preview" in result.output
        assert "config" in result.output

    def test_cli_version(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_bad_config_file_exits(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- not a mapping\n")

        result = CliRunner().invoke(cli, ["--config", str(config_file), "preview"])

        assert result.exit_code == 1
        assert "mapping" in result.output


class TestPreviewCommand:
    """Tests for preview command."""

    def test_preview_schedule(self) -> None:
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["preview", "--initial-delay", "100", "--max-delay", "10000", "--multiplier", "2", "-n", "8"],
        )

        assert result.exit_code == 0
        for delay in ("100", "200", "400", "6400", "10000"):
            assert delay in result.output
        assert "yes" in result.output

    def test_preview_defaults(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(cli, ["--config", str(tmp_path / "none.yaml"), "preview", "-n", "3"])

        assert result.exit_code == 0
        assert "initial=0ms" in result.output

    def test_preview_uses_config_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.dump({"backoff": {"initial_delay_millis": 300, "max_delay_millis": 900}}))

        result = CliRunner().invoke(cli, ["--config", str(config_file), "preview", "-n", "3"])

        assert result.exit_code == 0
        assert "initial=300ms" in result.output
        assert "600" in result.output

    def test_preview_option_overrides_config(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.dump({"backoff": {"initial_delay_millis": 300, "max_delay_millis": 900}}))

        result = CliRunner().invoke(
            cli, ["--config", str(config_file), "preview", "--max-delay", "5000", "-n", "2"]
        )

        assert result.exit_code == 0
        assert "max=5000ms" in result.output

    def test_preview_rejects_initial_above_max(self) -> None:
        result = CliRunner().invoke(cli, ["preview", "--initial-delay", "500", "--max-delay", "100"])

        assert result.exit_code == 1
        assert "initial_delay_millis" in result.output

    def test_preview_rejects_low_multiplier(self) -> None:
        result = CliRunner().invoke(cli, ["preview", "--max-delay", "100", "--multiplier", "1.0"])

        assert result.exit_code == 1
        assert "multiplier" in result.output

    def test_preview_attempts_range(self) -> None:
        result = CliRunner().invoke(cli, ["preview", "-n", "0"])
        assert result.exit_code == 2


class TestConfigCommand:
    """Tests for config command."""

    def test_prints_yaml(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(cli, ["--config", str(tmp_path / "none.yaml"), "config"])

        assert result.exit_code == 0
        data = yaml.safe_load(result.output)
        assert data["backoff"]["multiplier"] == 2.0

    def test_writes_file(self, tmp_path: Path) -> None:
        output = tmp_path / "out" / "config.yaml"

        result = CliRunner().invoke(cli, ["--config", str(tmp_path / "none.yaml"), "config", "-o", str(output)])

        assert result.exit_code == 0
        assert yaml.safe_load(output.read_text())["backoff"]["max_delay_millis"] == 0

    def test_unwritable_output_exits(self, tmp_path: Path) -> None:
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("")
        output = blocker / "config.yaml"

        result = CliRunner().invoke(cli, ["--config", str(tmp_path / "none.yaml"), "config", "-o", str(output)])

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert not isinstance(result.exception, OSError)
