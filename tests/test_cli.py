"""Tests for the command line interface."""

import json

import pytest
from typer.testing import CliRunner

from weekly_timetable.cli import EXIT_NO_TIMETABLE, app

runner = CliRunner()


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "sample.json"
    result = runner.invoke(app, ["sample", str(path)])
    assert result.exit_code == 0
    return path


@pytest.fixture
def infeasible_file(tmp_path, make_problem_data):
    path = tmp_path / "infeasible.json"
    data = make_problem_data([("f1", 4, 4)], [("c1", [("s1", "f1", 25)], [])])
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestSampleCommand:
    """Tests for the sample command."""

    def test_writes_sample(self, sample_file):
        data = json.loads(sample_file.read_text(encoding="utf-8"))
        assert [c["name"] for c in data["classes"]] == ["CS101", "CS202"]


class TestValidateCommand:
    """Tests for the validate command."""

    def test_valid_file(self, sample_file):
        result = runner.invoke(app, ["validate", str(sample_file)])
        assert result.exit_code == 0
        assert "Problem is valid" in result.output

    def test_invalid_file(self, tmp_path, sample_file):
        data = json.loads(sample_file.read_text(encoding="utf-8"))
        data["classes"][0]["subjects"][0]["facultyId"] = "nobody"
        path = tmp_path / "invalid.json"
        path.write_text(json.dumps(data), encoding="utf-8")

        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1
        assert "nobody" in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["validate", str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        assert "Error" in result.output


class TestGenerateCommand:
    """Tests for the generate command."""

    def test_generate_and_export_json(self, tmp_path, sample_file):
        output = tmp_path / "timetable"
        result = runner.invoke(app, ["generate", str(sample_file), "-o", str(output)])
        assert result.exit_code == 0
        assert "Solved" in result.output

        data = json.loads((tmp_path / "timetable.json").read_text(encoding="utf-8"))
        assert data["status"] == "solved"
        assert set(data["timetable"]) == {"Monday", "Tuesday", "Wednesday", "Thursday", "Friday"}

    def test_generate_excel(self, tmp_path, sample_file):
        output = tmp_path / "timetable.xlsx"
        result = runner.invoke(
            app, ["generate", str(sample_file), "-o", str(output), "-f", "excel", "--no-balance"]
        )
        assert result.exit_code == 0
        assert output.exists()

    def test_infeasible_exit_code(self, infeasible_file):
        result = runner.invoke(app, ["generate", str(infeasible_file)])
        assert result.exit_code == EXIT_NO_TIMETABLE
        assert "Infeasible" in result.output

    def test_budget_exceeded_exit_code(self, sample_file):
        result = runner.invoke(app, ["generate", str(sample_file), "--node-budget", "1"])
        assert result.exit_code == EXIT_NO_TIMETABLE
        assert "Budget exceeded" in result.output


class TestCheckCommand:
    """Tests for the check command."""

    def test_feasible(self, sample_file):
        result = runner.invoke(app, ["check", str(sample_file)])
        assert result.exit_code == 0
        assert "Feasible" in result.output

    def test_infeasible_before_search(self, infeasible_file):
        result = runner.invoke(app, ["check", str(infeasible_file)])
        assert result.exit_code == EXIT_NO_TIMETABLE
        assert "found before search" in result.output
