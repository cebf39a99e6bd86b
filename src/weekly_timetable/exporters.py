"""Export functionality for timetable results."""

import csv
import json
import re
from abc import ABC, abstractmethod
from pathlib import Path

import pandas as pd
from openpyxl.styles import Alignment, Border, Font, Side

from .constants import DAY_NAMES, PERIODS
from .scheduler.models import ScheduleResult
from .utils import period_key

# Excel styling
FONT_HEADER = Font(name="Calibri", size=11, bold=True)
FONT_CELL = Font(name="Calibri", size=10, bold=False)
ALIGN_CENTER = Alignment(horizontal="center", vertical="center", wrap_text=True)
THIN_BORDER = Border(
    left=Side(style="thin"),
    right=Side(style="thin"),
    top=Side(style="thin"),
    bottom=Side(style="thin"),
)
PERIOD_COLUMN_WIDTH = 12.0
DAY_COLUMN_WIDTH = 24.0
ROW_HEIGHT = 36.0

# Characters Excel does not allow in sheet titles
INVALID_SHEET_CHARS = re.compile(r"[\[\]:*?/\\]")
MAX_SHEET_NAME_LENGTH = 31


class BaseExporter(ABC):
    """Base class for exporters."""

    @abstractmethod
    def export(self, result: ScheduleResult, output_path: str | Path) -> None:
        """Export a schedule result to file.

        Args:
            result: ScheduleResult to export
            output_path: Path to output file
        """
        pass


class JSONExporter(BaseExporter):
    """Export to JSON format."""

    def __init__(self, indent: int = 2, ensure_ascii: bool = False):
        """Initialize exporter.

        Args:
            indent: JSON indentation level
            ensure_ascii: If False, allows non-ASCII characters
        """
        self.indent = indent
        self.ensure_ascii = ensure_ascii

    def export(self, result: ScheduleResult, output_path: str | Path) -> None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(
                result.to_dict(),
                f,
                indent=self.indent,
                ensure_ascii=self.ensure_ascii,
            )


class CSVExporter(BaseExporter):
    """Export to CSV format, one row per (class, day, period) cell.

    A failed result is written as one row per failure reason instead.
    """

    CELL_FIELDS = ["class", "day", "period", "subject", "faculty"]
    FAILURE_FIELDS = ["status", "message", "reason"]

    def export(self, result: ScheduleResult, output_path: str | Path) -> None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        if result.is_solved:
            self._write_csv(output_path, self.CELL_FIELDS, self._cell_rows(result))
        else:
            self._write_csv(output_path, self.FAILURE_FIELDS, self._failure_rows(result))

    def _cell_rows(self, result: ScheduleResult) -> list[dict]:
        rows = []
        for day, classes in result.timetable.items():
            for class_name, periods in classes.items():
                for key, cell in periods.items():
                    rows.append(
                        {
                            "class": class_name,
                            "day": day,
                            "period": key,
                            "subject": cell["subject"] if cell else "",
                            "faculty": cell["faculty"] if cell else "",
                        }
                    )
        return rows

    def _failure_rows(self, result: ScheduleResult) -> list[dict]:
        failure = result.failure
        reasons = failure.reasons or [""]
        return [
            {"status": failure.kind.value, "message": failure.message, "reason": reason}
            for reason in reasons
        ]

    def _write_csv(self, output_path: Path, fieldnames: list[str], rows: list[dict]) -> None:
        """Write rows to CSV file."""
        with open(output_path, "w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            writer.writerows(rows)


class ExcelExporter(BaseExporter):
    """Export to Excel format (single workbook with multiple sheets).

    A solved result gets one sheet per class, with periods as rows and days as
    columns, plus a Summary sheet. A failed result gets a Failure sheet and
    the Summary sheet only.
    """

    def export(self, result: ScheduleResult, output_path: str | Path) -> None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            if result.is_solved:
                for class_name in self._class_names(result):
                    self._export_class_sheet(result, class_name, writer)
            else:
                self._export_failure_sheet(result, writer)
            self._export_summary_sheet(result, writer)

    @staticmethod
    def _class_names(result: ScheduleResult) -> list[str]:
        first_day = next(iter(result.timetable.values()), {})
        return list(first_day.keys())

    @staticmethod
    def sheet_name(class_name: str, taken: set[str] | None = None) -> str:
        """Excel-safe, unique sheet title for a class."""
        name = INVALID_SHEET_CHARS.sub("_", class_name).strip() or "Class"
        name = name[:MAX_SHEET_NAME_LENGTH]
        if taken:
            base, counter = name, 2
            while name in taken:
                suffix = f" ({counter})"
                name = base[: MAX_SHEET_NAME_LENGTH - len(suffix)] + suffix
                counter += 1
        return name

    def _export_class_sheet(
        self, result: ScheduleResult, class_name: str, writer: pd.ExcelWriter
    ) -> None:
        """Export one class grid to its own sheet."""
        rows = []
        for period in PERIODS:
            row = {"Period": period_key(period)}
            for day in DAY_NAMES:
                cell = result.timetable[day][class_name][period_key(period)]
                row[day] = f"{cell['subject']}\n{cell['faculty']}" if cell else ""
            rows.append(row)

        sheet_name = self.sheet_name(class_name, set(writer.sheets) | {"Summary"})
        df = pd.DataFrame(rows, columns=["Period", *DAY_NAMES])
        df.to_excel(writer, sheet_name=sheet_name, index=False)
        self._style_grid(writer.sheets[sheet_name])

    def _style_grid(self, ws) -> None:
        ws.column_dimensions["A"].width = PERIOD_COLUMN_WIDTH
        for column in "BCDEF":
            ws.column_dimensions[column].width = DAY_COLUMN_WIDTH

        for row in ws.iter_rows(min_row=1, max_row=len(PERIODS) + 1, max_col=len(DAY_NAMES) + 1):
            for cell in row:
                cell.border = THIN_BORDER
                cell.alignment = ALIGN_CENTER
                header = cell.row == 1 or cell.column == 1
                cell.font = FONT_HEADER if header else FONT_CELL
        for row_index in range(2, len(PERIODS) + 2):
            ws.row_dimensions[row_index].height = ROW_HEIGHT

    def _export_failure_sheet(self, result: ScheduleResult, writer: pd.ExcelWriter) -> None:
        """Export the failure descriptor to Excel sheet."""
        failure = result.failure
        rows = [{"Reason": reason} for reason in failure.reasons]
        df = pd.DataFrame(rows) if rows else pd.DataFrame(columns=["Reason"])
        df.to_excel(writer, sheet_name="Failure", index=False)

    def _export_summary_sheet(self, result: ScheduleResult, writer: pd.ExcelWriter) -> None:
        """Export summary to Excel sheet."""
        stats = result.statistics
        rows = [
            {"Metric": "Status", "Value": result.status.value},
            {"Metric": "Generation Date", "Value": result.generation_date},
            {"Metric": "Total Assignments", "Value": stats.total_assignments},
            {"Metric": "Nodes Expanded", "Value": stats.nodes_expanded},
            {"Metric": "Backtracks", "Value": stats.backtracks},
            {"Metric": "Distribution Penalty", "Value": stats.distribution_penalty},
            {"Metric": "Solver Time (s)", "Value": stats.solver_time_seconds},
        ]
        if result.failure:
            rows.insert(1, {"Metric": "Message", "Value": result.failure.message})
        for faculty_name, load in stats.faculty_load.items():
            rows.append({"Metric": f"Load: {faculty_name}", "Value": load})

        df = pd.DataFrame(rows)
        df.to_excel(writer, sheet_name="Summary", index=False)
        ws = writer.sheets["Summary"]
        ws.column_dimensions["A"].width = 28.0
        ws.column_dimensions["B"].width = 40.0


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
