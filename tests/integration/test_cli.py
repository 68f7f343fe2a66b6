"""
Integration Tests for the Sheets CLI
"""
import json

import yaml
from openpyxl import load_workbook
from typer.testing import CliRunner

from sheet_ui_cli.cli import app


runner = CliRunner()


def _write_batches(path, batches, settings=None):
    data = {"batches": batches}
    if settings is not None:
        data["settings"] = settings
    path.write_text(yaml.safe_dump(data))
    return path


class TestRecordCommand:

    def test_record_writes_workbook(self, tmp_path):
        batches = _write_batches(tmp_path / "run.yaml", [
            {"sheet": "Ramp", "parameters": {"Step": "S1"}, "results": {"X": [1, 2]}},
            {"sheet": "Ramp", "parameters": {"Step": "S2"}, "results": {"X": [3]}},
            {"sheet": "Scratch", "parameters": {"a": 1}, "never_include": True},
        ])
        out = tmp_path / "out.xlsx"

        result = runner.invoke(app, ["record", str(batches), "-o", str(out), "--quiet"])

        assert result.exit_code == 0, result.output
        assert "Wrote 1 sheet(s)" in result.output
        ws = load_workbook(out)["Ramp"]
        assert [c.value for c in ws[1]] == ["Step", "X"]
        assert ws.max_row == 4

    def test_record_with_config(self, tmp_path):
        batches = _write_batches(tmp_path / "run.yaml", [
            {"sheet": "S", "parameters": {"a": 1}},
        ])
        config = tmp_path / "settings.json"
        config.write_text(json.dumps({"style_header": False}))
        out = tmp_path / "out.xlsx"

        result = runner.invoke(app, ["record", str(batches), "-o", str(out), "-c", str(config), "-q"])

        assert result.exit_code == 0, result.output
        assert not load_workbook(out)["S"]["A1"].font.bold

    def test_record_csv_export(self, tmp_path):
        batches = _write_batches(tmp_path / "run.yaml", [
            {"sheet": "S", "parameters": {"a": 1}, "results": {"b": [1, 2]}},
        ])
        out = tmp_path / "out.xlsx"
        csv_dir = tmp_path / "csv"

        result = runner.invoke(app, ["record", str(batches), "-o", str(out), "--csv-dir", str(csv_dir)])

        assert result.exit_code == 0, result.output
        assert (csv_dir / "S.csv").exists()

    def test_missing_input(self, tmp_path):
        result = runner.invoke(app, ["record", str(tmp_path / "nope.yaml"), "-o", str(tmp_path / "o.xlsx")])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_invalid_batch(self, tmp_path):
        path = tmp_path / "run.yaml"
        path.write_text(yaml.safe_dump({"batches": [{"parameters": {"a": 1}}]}))
        result = runner.invoke(app, ["record", str(path), "-o", str(tmp_path / "o.xlsx")])
        assert result.exit_code == 1


class TestInspectCommand:

    def test_inspect(self, tmp_path):
        batches = _write_batches(tmp_path / "run.yaml", [
            {"sheet": "Ramp", "parameters": {"Step": "S1"}, "results": {"X": [1, 2]}},
        ])
        out = tmp_path / "out.xlsx"
        runner.invoke(app, ["record", str(batches), "-o", str(out), "-q"])

        result = runner.invoke(app, ["inspect", str(out)])

        assert result.exit_code == 0, result.output
        assert "Ramp" in result.output


class TestAddressCommand:

    def test_encode(self):
        result = runner.invoke(app, ["address", "28", "7"])
        assert result.exit_code == 0
        assert "AB7" in result.output

    def test_decode(self):
        result = runner.invoke(app, ["address", "AB7"])
        assert result.exit_code == 0
        assert "28 7" in result.output

    def test_invalid(self):
        result = runner.invoke(app, ["address", "7AB"])
        assert result.exit_code == 1
