"""Tests for the typer CLI."""

from pathlib import Path

from typer.testing import CliRunner

from spriteatlas.cli import app

runner = CliRunner()
REPO_CONFIG = Path(__file__).parents[2] / "configs" / "pipeline.yaml"


class TestCli:
    def test_info(self):
        result = runner.invoke(app, ["info", "--config", str(REPO_CONFIG)])
        assert result.exit_code == 0
        assert "probe_video" in result.output
        assert "write_manifest" in result.output

    def test_plan(self):
        result = runner.invoke(app, ["plan", "1280", "720", "--frame-width", "640", "--duration", "2.0"])
        assert result.exit_code == 0
        assert "3x3" in result.output
        assert "640x360" in result.output

    def test_plan_impossible(self):
        result = runner.invoke(app, ["plan", "1280", "720", "--frame-width", "2000"])
        assert result.exit_code == 1

    def test_locate(self, sprite_dir: Path):
        result = runner.invoke(app, ["locate", str(sprite_dir / "info.json"), "19"])
        assert result.exit_code == 0
        assert "page 2" in result.output
        assert "row 0, column 1" in result.output

    def test_locate_out_of_range(self, sprite_dir: Path):
        result = runner.invoke(app, ["locate", str(sprite_dir / "info.json"), "20"])
        assert result.exit_code == 1

    def test_locate_without_manifest(self, tmp_path: Path):
        result = runner.invoke(app, ["locate", str(tmp_path / "info.json"), "0"])
        assert result.exit_code == 1
        assert "No manifest" in result.output

    def test_play_without_manifest(self, tmp_path: Path):
        result = runner.invoke(app, ["play", str(tmp_path / "info.json")])
        assert result.exit_code == 1
        assert "Playback failed" in result.output

    def test_run_step_requires_input(self, tmp_path: Path):
        pipeline = tmp_path / "pipeline.yaml"
        pipeline.write_text(
            "steps:\n"
            "  - name: extract_poster\n"
            "    module: spriteatlas.steps.s03_extract_poster\n"
            "    config_file: none.yaml\n"
        )
        result = runner.invoke(app, ["run-step", "extract_poster", "--config", str(pipeline)])
        assert result.exit_code == 1
        assert "requires input fields" in result.output
