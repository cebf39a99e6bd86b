"""Tests for result exporters."""

import csv
import json

import pytest
from openpyxl import load_workbook

from weekly_timetable.exporters import (
    CSVExporter,
    ExcelExporter,
    JSONExporter,
    get_exporter,
)
from weekly_timetable.scheduler import TimetableScheduler


@pytest.fixture
def solved_result(blackout_problem):
    return TimetableScheduler().schedule(blackout_problem)


@pytest.fixture
def failed_result(overloaded_problem):
    return TimetableScheduler().schedule(overloaded_problem)


class TestJSONExporter:
    """Tests for JSONExporter class."""

    def test_solved_result(self, tmp_path, solved_result):
        path = tmp_path / "nested" / "timetable.json"
        JSONExporter().export(solved_result, path)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["status"] == "solved"
        assert data["failure"] is None
        assert data["timetable"]["Wednesday"]["C1"]["Period 3"] is None
        assert data["timetable"]["Monday"]["C1"]["Period 1"]["faculty"].startswith("Teacher")

    def test_failed_result_has_no_grid(self, tmp_path, failed_result):
        path = tmp_path / "failure.json"
        JSONExporter().export(failed_result, path)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["status"] == "infeasible"
        assert data["timetable"] is None
        assert data["failure"]["kind"] == "infeasible"
        assert data["failure"]["reasons"]


class TestCSVExporter:
    """Tests for CSVExporter class."""

    def test_one_row_per_cell(self, tmp_path, solved_result):
        path = tmp_path / "timetable.csv"
        CSVExporter().export(solved_result, path)

        with open(path, encoding="utf-8", newline="") as f:
            rows = list(csv.DictReader(f))
        assert len(rows) == 25
        assert sum(1 for row in rows if row["subject"]) == 24
        blocked = [row for row in rows if row["day"] == "Wednesday" and row["period"] == "Period 3"]
        assert blocked[0]["subject"] == ""

    def test_failure_rows(self, tmp_path, failed_result):
        path = tmp_path / "failure.csv"
        CSVExporter().export(failed_result, path)

        with open(path, encoding="utf-8", newline="") as f:
            rows = list(csv.DictReader(f))
        assert rows
        assert all(row["status"] == "infeasible" for row in rows)
        assert set(rows[0]) == {"status", "message", "reason"}


class TestExcelExporter:
    """Tests for ExcelExporter class."""

    def test_one_sheet_per_class(self, tmp_path, solved_result):
        path = tmp_path / "timetable.xlsx"
        ExcelExporter().export(solved_result, path)

        workbook = load_workbook(path)
        assert workbook.sheetnames == ["C1", "Summary"]
        sheet = workbook["C1"]
        assert sheet["A1"].value == "Period"
        assert sheet["B1"].value == "Monday"
        assert sheet["A2"].value == "Period 1"
        assert sheet["B2"].value.count("\n") == 1
        assert sheet["B1"].font.bold

    def test_failed_result_has_no_class_sheets(self, tmp_path, failed_result):
        path = tmp_path / "failure.xlsx"
        ExcelExporter().export(failed_result, path)

        workbook = load_workbook(path)
        assert workbook.sheetnames == ["Failure", "Summary"]
        assert workbook["Summary"]["B2"].value == "infeasible"

    def test_sheet_name_is_sanitized(self):
        assert ExcelExporter.sheet_name("Year 1/A [morning]") == "Year 1_A _morning_"
        assert len(ExcelExporter.sheet_name("x" * 40)) == 31

    def test_sheet_name_is_unique(self):
        assert ExcelExporter.sheet_name("Summary", {"Summary"}) == "Summary (2)"


class TestGetExporter:
    """Tests for get_exporter factory."""

    @pytest.mark.parametrize(
        "format_type,exporter_class",
        [("json", JSONExporter), ("csv", CSVExporter), ("excel", ExcelExporter)],
    )
    def test_known_formats(self, format_type, exporter_class):
        assert isinstance(get_exporter(format_type), exporter_class)

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Unsupported format"):
            get_exporter("xml")
