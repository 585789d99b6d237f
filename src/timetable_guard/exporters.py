"""Export of validation reports."""

import csv
import json
from abc import ABC, abstractmethod
from pathlib import Path

import pandas as pd

from .models import ValidationReport


def _error_rows(reports: list[ValidationReport]) -> list[dict]:
    rows = []
    for report in reports:
        for error in report.errors:
            rows.append(
                {
                    "schedule_id": report.schedule_id,
                    "type": error.type.value,
                    "lesson_id": error.lesson_id,
                    "other_lesson_id": error.other_lesson_id or "",
                    "other_schedule_id": error.other_schedule_id or "",
                    "message": error.message,
                }
            )
    return rows


def _summary_rows(reports: list[ValidationReport]) -> list[dict]:
    rows = []
    for report in reports:
        counts = report.counts_by_type
        rows.append(
            {
                "schedule_id": report.schedule_id,
                "lessons_checked": report.lessons_checked,
                "invalid_time": counts["invalid_time"],
                "room_conflict": counts["room_conflict"],
                "teacher_conflict": counts["teacher_conflict"],
                "is_valid": report.is_valid,
            }
        )
    return rows


class BaseExporter(ABC):
    """Base class for report exporters."""

    @abstractmethod
    def export(self, reports: list[ValidationReport], output_path: str | Path) -> None:
        """Export validation reports.

        Args:
            reports: Reports to export
            output_path: Path to output file or directory
        """
        pass


class JSONExporter(BaseExporter):
    """Export to JSON format."""

    def __init__(self, indent: int = 2, ensure_ascii: bool = False):
        self.indent = indent
        self.ensure_ascii = ensure_ascii

    def export(self, reports: list[ValidationReport], output_path: str | Path) -> None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(
                {"reports": [report.to_dict() for report in reports]},
                f,
                indent=self.indent,
                ensure_ascii=self.ensure_ascii,
            )


class CSVExporter(BaseExporter):
    """Export to CSV format (errors.csv and summary.csv in a directory)."""

    def export(self, reports: list[ValidationReport], output_path: str | Path) -> None:
        output_dir = Path(output_path)
        output_dir.mkdir(parents=True, exist_ok=True)

        self._write_csv(
            output_dir / "errors.csv",
            _error_rows(reports),
            ["schedule_id", "type", "lesson_id", "other_lesson_id", "other_schedule_id", "message"],
        )
        self._write_csv(
            output_dir / "summary.csv",
            _summary_rows(reports),
            ["schedule_id", "lessons_checked", "invalid_time", "room_conflict",
             "teacher_conflict", "is_valid"],
        )

    def _write_csv(self, output_path: Path, rows: list[dict], fieldnames: list[str]) -> None:
        """Write rows to CSV file (header only when there are no rows)."""
        with open(output_path, "w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            writer.writerows(rows)


class ExcelExporter(BaseExporter):
    """Export to Excel format (sheets 'Errors' and 'Summary')."""

    def export(self, reports: list[ValidationReport], output_path: str | Path) -> None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            self._export_errors_sheet(reports, writer)
            self._export_summary_sheet(reports, writer)

    def _export_errors_sheet(
        self, reports: list[ValidationReport], writer: pd.ExcelWriter
    ) -> None:
        rows = [
            {
                "Schedule": row["schedule_id"],
                "Type": row["type"],
                "Lesson": row["lesson_id"],
                "Other Lesson": row["other_lesson_id"],
                "Other Schedule": row["other_schedule_id"],
                "Message": row["message"],
            }
            for row in _error_rows(reports)
        ]
        columns = ["Schedule", "Type", "Lesson", "Other Lesson", "Other Schedule", "Message"]
        df = pd.DataFrame(rows) if rows else pd.DataFrame(columns=columns)
        df.to_excel(writer, sheet_name="Errors", index=False)

    def _export_summary_sheet(
        self, reports: list[ValidationReport], writer: pd.ExcelWriter
    ) -> None:
        rows = [
            {
                "Schedule": row["schedule_id"],
                "Lessons Checked": row["lessons_checked"],
                "Invalid Time": row["invalid_time"],
                "Room Conflicts": row["room_conflict"],
                "Teacher Conflicts": row["teacher_conflict"],
                "Valid": row["is_valid"],
            }
            for row in _summary_rows(reports)
        ]
        df = pd.DataFrame(rows)
        df.to_excel(writer, sheet_name="Summary", index=False)


def get_exporter(format_type: str) -> BaseExporter:
    """Get appropriate exporter for format type.

    Args:
        format_type: Export format ('json', 'csv', 'excel')

    Returns:
        Exporter instance

    Raises:
        ValueError: If format type is not supported
    """
    exporters = {
        "json": JSONExporter,
        "csv": CSVExporter,
        "excel": ExcelExporter,
    }

    if format_type not in exporters:
        raise ValueError(
            f"Unsupported format: {format_type}. Supported: {', '.join(exporters.keys())}"
        )

    return exporters[format_type]()
