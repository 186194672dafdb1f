"""Export functionality for clash reports."""

import csv
import json
from abc import ABC, abstractmethod
from pathlib import Path

import pandas as pd

from .models import ClashReport

BOAT_CLASH_COLUMNS = ["key", "day", "group", "boat", "count", "silenced"]
BLADE_CLASH_COLUMNS = ["key", "day", "group", "blade", "used", "amount", "silenced"]


class BaseExporter(ABC):
    """Base class for exporters."""

    @abstractmethod
    def export(self, report: ClashReport, output_path: str | Path) -> None:
        """Export clash report to file.

        Args:
            report: ClashReport to export
            output_path: Path to output file or directory
        """
        pass


def _summary_rows(report: ClashReport) -> list[dict]:
    return [
        {"metric": "generation_date", "value": report.generation_date},
        {"metric": "race_id", "value": report.race_id or ""},
        {"metric": "day_order", "value": ", ".join(report.day_order)},
        {"metric": "has_boat_clash", "value": report.summary.has_boat_clash},
        {"metric": "has_blade_clash", "value": report.summary.has_blade_clash},
        {"metric": "has_any_clash", "value": report.summary.has_any_clash},
        {"metric": "boat_clashes", "value": len(report.boat_clashes)},
        {"metric": "blade_clashes", "value": len(report.blade_clashes)},
        {"metric": "unresolved", "value": report.total_unresolved},
    ]


class JSONExporter(BaseExporter):
    """Export to JSON format."""

    def __init__(self, indent: int = 2, ensure_ascii: bool = False):
        self.indent = indent
        self.ensure_ascii = ensure_ascii

    def export(self, report: ClashReport, output_path: str | Path) -> None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(
                report.to_dict(),
                f,
                indent=self.indent,
                ensure_ascii=self.ensure_ascii,
            )


class CSVExporter(BaseExporter):
    """Export to CSV format (multiple files)."""

    def export(self, report: ClashReport, output_path: str | Path) -> None:
        """Export clash report to CSV files.

        Creates three files:
        - boat_clashes.csv: Boat clashes in display order
        - blade_clashes.csv: Blade clashes in display order
        - summary.csv: Summary flags and counts

        Args:
            report: ClashReport to export
            output_path: Path to output directory
        """
        output_dir = Path(output_path)
        output_dir.mkdir(parents=True, exist_ok=True)

        self._write_csv(
            output_dir / "boat_clashes.csv",
            BOAT_CLASH_COLUMNS,
            [c.to_dict() for c in report.boat_clashes],
        )
        self._write_csv(
            output_dir / "blade_clashes.csv",
            BLADE_CLASH_COLUMNS,
            [c.to_dict() for c in report.blade_clashes],
        )
        self._write_csv(output_dir / "summary.csv", ["metric", "value"], _summary_rows(report))

    def _write_csv(self, output_path: Path, fieldnames: list[str], rows: list[dict]) -> None:
        """Write rows to CSV file, header only when there are no rows."""
        with open(output_path, "w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            writer.writerows(rows)


class ExcelExporter(BaseExporter):
    """Export to Excel format (single workbook with multiple sheets)."""

    def export(self, report: ClashReport, output_path: str | Path) -> None:
        """Export clash report to Excel file.

        Creates workbook with sheets:
        - Boat Clashes
        - Blade Clashes
        - Summary

        Args:
            report: ClashReport to export
            output_path: Path to output Excel file
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            self._write_sheet(
                writer,
                "Boat Clashes",
                BOAT_CLASH_COLUMNS,
                [c.to_dict() for c in report.boat_clashes],
            )
            self._write_sheet(
                writer,
                "Blade Clashes",
                BLADE_CLASH_COLUMNS,
                [c.to_dict() for c in report.blade_clashes],
            )
            self._write_sheet(writer, "Summary", ["metric", "value"], _summary_rows(report))

    def _write_sheet(
        self,
        writer: pd.ExcelWriter,
        sheet_name: str,
        columns: list[str],
        rows: list[dict],
    ) -> None:
        df = pd.DataFrame(rows, columns=columns)
        df.columns = [c.replace("_", " ").title() for c in columns]
        df.to_excel(writer, sheet_name=sheet_name, index=False)


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
