"""Tests for report exporters."""

import csv
import json

import pandas as pd
import pytest

from timetable_guard.exporters import (
    CSVExporter,
    ExcelExporter,
    JSONExporter,
    get_exporter,
)
from timetable_guard.models import ErrorType, ValidationError, ValidationReport


@pytest.fixture
def reports():
    """One failing and one clean report."""
    return [
        ValidationReport(
            schedule_id="2024-1_group-x",
            lessons_checked=2,
            errors=[
                ValidationError(
                    type=ErrorType.TEACHER_CONFLICT,
                    message="Teacher is already scheduled in another group at this time",
                    lesson_id="x1",
                    other_lesson_id="y1",
                    other_schedule_id="2024-1_group-y",
                )
            ],
        ),
        ValidationReport(schedule_id="2024-1_group-z", lessons_checked=1),
    ]


class TestJSONExporter:
    """Tests for JSONExporter."""

    def test_export(self, tmp_path, reports):
        output = tmp_path / "report.json"

        JSONExporter().export(reports, output)

        data = json.loads(output.read_text(encoding="utf-8"))
        first, second = data["reports"]
        assert first["is_valid"] is False
        assert first["counts"]["teacher_conflict"] == 1
        assert first["errors"][0]["otherScheduleId"] == "2024-1_group-y"
        assert second["is_valid"] is True


class TestCSVExporter:
    """Tests for CSVExporter."""

    def test_export(self, tmp_path, reports):
        CSVExporter().export(reports, tmp_path / "csv")

        with open(tmp_path / "csv" / "errors.csv", encoding="utf-8") as f:
            errors = list(csv.DictReader(f))
        with open(tmp_path / "csv" / "summary.csv", encoding="utf-8") as f:
            summary = list(csv.DictReader(f))

        assert [(e["lesson_id"], e["other_lesson_id"]) for e in errors] == [("x1", "y1")]
        assert [s["schedule_id"] for s in summary] == ["2024-1_group-x", "2024-1_group-z"]
        assert summary[1]["is_valid"] == "True"

    def test_header_written_without_errors(self, tmp_path):
        CSVExporter().export([ValidationReport(schedule_id="s")], tmp_path)

        header = (tmp_path / "errors.csv").read_text(encoding="utf-8").splitlines()
        assert header == ["schedule_id,type,lesson_id,other_lesson_id,other_schedule_id,message"]


class TestExcelExporter:
    """Tests for ExcelExporter."""

    def test_export(self, tmp_path, reports):
        output = tmp_path / "report.xlsx"

        ExcelExporter().export(reports, output)

        errors = pd.read_excel(output, sheet_name="Errors")
        summary = pd.read_excel(output, sheet_name="Summary")
        assert list(errors["Lesson"]) == ["x1"]
        assert list(errors["Type"]) == ["teacher_conflict"]
        assert list(summary["Schedule"]) == ["2024-1_group-x", "2024-1_group-z"]

    def test_empty_errors_sheet_has_columns(self, tmp_path):
        output = tmp_path / "clean.xlsx"

        ExcelExporter().export([ValidationReport(schedule_id="s")], output)

        errors = pd.read_excel(output, sheet_name="Errors")
        assert errors.empty
        assert "Message" in errors.columns


class TestGetExporter:
    """Tests for get_exporter."""

    @pytest.mark.parametrize(
        "format_type,expected",
        [("json", JSONExporter), ("csv", CSVExporter), ("excel", ExcelExporter)],
    )
    def test_known_formats(self, format_type, expected):
        assert isinstance(get_exporter(format_type), expected)

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Unsupported format"):
            get_exporter("pdf")
