"""
Tests for the growthchart CLI and configuration.
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import json

import pytest
from click.testing import CliRunner

SAMPLE = "date,height,weight\n2020-01-01,100,16\n2020-07-01,103,17\n"


@pytest.fixture
def table_file(tmp_path):
    path = tmp_path / "growth.csv"
    path.write_text(SAMPLE)
    return path


class TestChartCommand:
    """Test the chart command."""

    def test_writes_chart(self, table_file, tmp_path):
        from cli import cli

        out = tmp_path / "chart.png"
        result = CliRunner().invoke(cli, [
            "chart", "M", "2018-01-01", str(table_file),
            "--which", "height", "--no-open", "-o", str(out),
        ])

        assert result.exit_code == 0, result.output
        assert out.exists()
        assert "Chart written" in result.output

    def test_reads_stdin(self, tmp_path):
        from cli import cli

        out = tmp_path / "chart.png"
        result = CliRunner().invoke(
            cli,
            ["chart", "F", "2018-01-01", "-", "--which", "weight", "--no-open", "-o", str(out)],
            input=SAMPLE.replace(",", "\t"),
        )

        assert result.exit_code == 0, result.output
        assert out.exists()

    def test_missing_role_exits_nonzero(self, tmp_path):
        from cli import cli

        path = tmp_path / "weights.csv"
        path.write_text("weight\n12\n")
        result = CliRunner().invoke(cli, [
            "chart", "M", "2018-01-01", str(path), "--which", "weight", "--no-open",
        ])

        assert result.exit_code == 1
        assert "400" in result.output
        assert "date/time" in result.output

    def test_rejects_bad_gender(self, table_file):
        from cli import cli

        result = CliRunner().invoke(cli, [
            "chart", "X", "2018-01-01", str(table_file), "--which", "height",
        ])

        assert result.exit_code == 2

    def test_spec_json(self, table_file, tmp_path):
        from cli import cli

        spec_path = tmp_path / "spec.json"
        result = CliRunner().invoke(cli, [
            "chart", "M", "2018-01-01", str(table_file), "--which", "weight",
            "--no-open", "--output-dir", str(tmp_path / "charts"),
            "--spec-json", str(spec_path), "--name", "Budi",
        ])

        assert result.exit_code == 0, result.output
        spec = json.loads(spec_path.read_text())
        assert spec["title"] == "WHO weight chart for Budi"
        assert len(spec["series"]) == 8
        assert spec["series"][0]["y"] == [16.0, 17.0]
        assert list((tmp_path / "charts").glob("growthchart-*.png"))


class TestInspectCommand:
    """Test the inspect command."""

    def test_table_output(self, table_file):
        from cli import cli

        result = CliRunner().invoke(cli, [
            "inspect", "M", "2018-01-01", str(table_file), "--which", "height",
        ])

        assert result.exit_code == 0, result.output
        assert "Date column: date" in result.output
        assert "Rows: 2" in result.output

    def test_json_output(self, table_file):
        from cli import cli

        result = CliRunner().invoke(cli, [
            "inspect", "M", "2018-01-01", str(table_file), "--which", "height", "--json",
        ])

        assert result.exit_code == 0, result.output
        rows = json.loads(result.output)
        assert [r["measured"] for r in rows] == [100.0, 103.0]
        assert rows[0]["row"] == 0

    def test_malformed_date(self, tmp_path):
        from cli import cli

        path = tmp_path / "bad.csv"
        path.write_text("date,height\n01-01-2020,100\n")
        result = CliRunner().invoke(cli, [
            "inspect", "M", "2018-01-01", str(path), "--which", "height",
        ])

        assert result.exit_code == 1
        assert "YYYY-MM-DD" in result.output


class TestConfig:
    """Test environment configuration."""

    def test_defaults(self, monkeypatch):
        from src.config import ChartConfig

        for var in ("GROWTHCHART_OUTPUT_DIR", "GROWTHCHART_REFERENCE_FILE",
                    "GROWTHCHART_OPEN_VIEWER", "GROWTHCHART_LOG_LEVEL"):
            monkeypatch.delenv(var, raising=False)
        config = ChartConfig()

        assert config.output_dir is None
        assert config.reference_file is None
        assert config.open_viewer is True
        assert config.log_level == "WARNING"

    def test_environment(self, monkeypatch, tmp_path):
        import logging
        from src.config import ChartConfig

        monkeypatch.setenv("GROWTHCHART_OUTPUT_DIR", str(tmp_path))
        monkeypatch.setenv("GROWTHCHART_OPEN_VIEWER", "no")
        monkeypatch.setenv("GROWTHCHART_LOG_LEVEL", "debug")
        config = ChartConfig()

        assert config.output_dir == tmp_path
        assert config.open_viewer is False
        assert config.log_level_number == logging.DEBUG
        config.validate()

    def test_missing_reference_file(self, monkeypatch, tmp_path):
        from src.config import ChartConfig

        monkeypatch.setenv("GROWTHCHART_REFERENCE_FILE", str(tmp_path / "missing.yaml"))

        with pytest.raises(ValueError):
            ChartConfig().validate()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
